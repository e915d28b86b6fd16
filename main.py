import sys
import json
import logging
import argparse

from dateutil.parser import isoparse

from core.config_loader import load_config
from core.exceptions import RankingError
from core.pipeline import RankingPipeline
from core.ranking.models import QuerySpec, WeightPair
from core.store.memory import InMemoryCandidateStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_embedding(path: str):
    """Load a query embedding (a JSON list of floats) from a file."""
    if not path:
        return None
    with open(path, 'r') as f:
        return [float(x) for x in json.load(f)]


def run_search(pipeline: RankingPipeline, args):
    defaults = pipeline.config.search
    query = QuerySpec(
        search_text=args.text,
        query_embedding=load_embedding(args.embedding_file),
        weights=WeightPair(
            text_weight=defaults.text_weight if args.text_weight is None else args.text_weight,
            vector_weight=defaults.vector_weight if args.vector_weight is None else args.vector_weight
        ),
        similarity_threshold=defaults.similarity_threshold if args.threshold is None else args.threshold,
        result_limit=defaults.result_limit if args.limit is None else args.limit
    )
    if args.repositories:
        return [r.to_dict() for r in pipeline.search_repositories(query)]
    return [r.to_dict() for r in pipeline.search(query)]


def run_match(pipeline: RankingPipeline, args):
    matches = pipeline.match_for_user(args.user_id, threshold=args.threshold, limit=args.limit)
    return [m.to_dict() for m in matches]


def run_trending(pipeline: RankingPipeline, args):
    now = isoparse(args.now) if args.now else None
    results = pipeline.trending(
        window_hours=args.window_hours,
        min_engagement=args.min_engagement,
        limit=args.limit,
        now=now
    )
    return [r.to_dict() for r in results]


def run_health(pipeline: RankingPipeline, args):
    return pipeline.health(args.repository_id).to_dict()


def run_init_db(args):
    from database.init_db import init_db
    init_db()
    return {"status": "initialized"}


def run_with_database(args):
    from database.database import db_session_scope
    from database.repositories import SqlCandidateStore

    config = load_config(args.config)
    with db_session_scope() as session:
        pipeline = RankingPipeline(SqlCandidateStore(session), config.ranking)
        return args.handler(pipeline, args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Contribution ranking CLI")
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml (default: config.yaml)')
    parser.add_argument('--corpus', type=str,
                        help='JSON corpus with opportunities, repositories and users '
                             '(default: read from the configured database)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    search = subparsers.add_parser('search', help='Hybrid text + vector search')
    search.add_argument('--text', type=str, help='Search text')
    search.add_argument('--embedding-file', type=str, help='JSON file holding the query embedding')
    search.add_argument('--text-weight', type=float)
    search.add_argument('--vector-weight', type=float)
    search.add_argument('--threshold', type=float)
    search.add_argument('--limit', type=int)
    search.add_argument('--repositories', action='store_true', help='Search repositories instead of opportunities')
    search.set_defaults(handler=run_search)

    match = subparsers.add_parser('match', help='Personalized matches for a user')
    match.add_argument('user_id', type=str)
    match.add_argument('--threshold', type=float)
    match.add_argument('--limit', type=int)
    match.set_defaults(handler=run_match)

    trending = subparsers.add_parser('trending', help='Trending opportunities')
    trending.add_argument('--window-hours', type=float)
    trending.add_argument('--min-engagement', type=int)
    trending.add_argument('--limit', type=int)
    trending.add_argument('--now', type=str, help='ISO-8601 reference time (default: now)')
    trending.set_defaults(handler=run_trending)

    health = subparsers.add_parser('health', help='Repository health')
    health.add_argument('repository_id', type=str)
    health.set_defaults(handler=run_health)

    init = subparsers.add_parser('init-db', help='Create extensions and tables')
    init.set_defaults(handler=None)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == 'init-db':
            output = run_init_db(args)
        elif args.corpus:
            config = load_config(args.config)
            store = InMemoryCandidateStore.from_json_file(args.corpus)
            output = args.handler(RankingPipeline(store, config.ranking), args)
        else:
            output = run_with_database(args)
    except RankingError as e:
        logger.error(f"{args.command} failed: {e}")
        print(json.dumps({"success": False, "error": str(e), "type": e.__class__.__name__}), file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
