"""
SQL Candidate Store - CandidateStore over SQLAlchemy + pgvector.

Rows are converted to ranking value objects here; the database does storage
and optional ANN prefiltering only. Scoring rules live in the core.
"""
import logging
import uuid
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from core.exceptions import NotFoundError
from core.ranking.models import (
    Candidate, CandidateKind, ContributionType, SkillLevel, UserProfile
)
from core.store.interfaces import CandidateStore, QueryHint
from database.models import Repository, Opportunity, User, Contribution
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

# Rows fetched per requested result when the ANN index prefilters
ANN_OVERFETCH = 5

transient_retry = retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_attempt(3),
    wait=wait_fixed(1),
    reraise=True
)


def _vector(value: Any) -> Optional[List[float]]:
    if value is None:
        return None
    return [float(x) for x in value]


def _percent(value: Any) -> float:
    """0-100 column to unit scale."""
    if value is None:
        return 0.0
    return float(value) / 100.0


def _parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def repository_to_candidate(repo: Repository) -> Candidate:
    return Candidate(
        id=str(repo.id),
        title=repo.name,
        description=repo.description or '',
        kind=CandidateKind.REPOSITORY,
        embedding=_vector(repo.description_embedding),
        status=repo.status,
        full_name=repo.full_name,
        topics=list(repo.topics or []),
        stars_count=repo.stars_count or 0,
        health_score=_percent(repo.health_score),
        activity_score=_percent(repo.activity_score),
        community_score=_percent(repo.community_score),
        documentation_score=_percent(repo.documentation_score),
        contributor_friendliness=_percent(repo.contributor_friendliness),
        created_at=repo.created_at,
    )


def opportunity_to_candidate(opp: Opportunity, stars_count: Optional[int] = None) -> Candidate:
    return Candidate(
        id=str(opp.id),
        title=opp.title,
        description=opp.description or '',
        kind=CandidateKind.OPPORTUNITY,
        embedding=_vector(opp.description_embedding),
        title_embedding=_vector(opp.title_embedding),
        repository_id=str(opp.repository_id) if opp.repository_id else None,
        status=opp.status,
        contribution_type=ContributionType.parse(opp.type),
        difficulty=SkillLevel.parse(opp.difficulty),
        priority=opp.priority,
        required_skills=list(opp.required_skills or []),
        technologies=list(opp.technologies or []),
        estimated_hours=float(opp.estimated_hours) if opp.estimated_hours is not None else None,
        good_first_issue=bool(opp.good_first_issue),
        help_wanted=bool(opp.help_wanted),
        mentorship_available=bool(opp.mentorship_available),
        view_count=opp.view_count or 0,
        application_count=opp.application_count or 0,
        created_at=opp.created_at,
        started_at=opp.started_at,
        completed_at=opp.completed_at,
        stars_count=stars_count or 0,
    )


def user_to_candidate(user: User) -> Candidate:
    return Candidate(
        id=str(user.id),
        title=user.github_username,
        description=user.bio or '',
        kind=CandidateKind.USER,
        embedding=_vector(user.profile_embedding),
        status='active',
        created_at=user.created_at,
    )


class SqlCandidateStore(BaseRepository, CandidateStore):
    """
    CandidateStore bound to one Session.

    When a hint carries an embedding but no search text, the HNSW index
    prefilters to limit * ANN_OVERFETCH rows ordered by cosine distance.
    Otherwise rows come back in creation order.
    """

    def _ann_limit(self, hint: QueryHint) -> Optional[int]:
        if hint.query_embedding is None or hint.search_text or not hint.limit:
            return None
        return hint.limit * ANN_OVERFETCH

    @transient_retry
    def fetch_candidates(self, hint: QueryHint) -> List[Candidate]:
        ann_limit = self._ann_limit(hint)

        if hint.kind == CandidateKind.OPPORTUNITY:
            stmt = (
                select(Opportunity, Repository.stars_count)
                .outerjoin(Repository, Opportunity.repository_id == Repository.id)
            )
            if hint.status:
                stmt = stmt.where(Opportunity.status == hint.status)
            if hint.created_after:
                stmt = stmt.where(Opportunity.created_at >= hint.created_after)
            if ann_limit:
                stmt = stmt.where(Opportunity.description_embedding.isnot(None)).order_by(
                    Opportunity.description_embedding.cosine_distance(hint.query_embedding)
                ).limit(ann_limit)
            else:
                stmt = stmt.order_by(Opportunity.created_at, Opportunity.id)
            rows = self.db.execute(stmt).all()
            candidates = [opportunity_to_candidate(opp, stars) for opp, stars in rows]

        elif hint.kind == CandidateKind.REPOSITORY:
            stmt = select(Repository)
            if hint.status:
                stmt = stmt.where(Repository.status == hint.status)
            if ann_limit:
                stmt = stmt.where(Repository.description_embedding.isnot(None)).order_by(
                    Repository.description_embedding.cosine_distance(hint.query_embedding)
                ).limit(ann_limit)
            else:
                stmt = stmt.order_by(Repository.created_at, Repository.id)
            candidates = [repository_to_candidate(r) for r in self.db.execute(stmt).scalars().all()]

        else:
            stmt = select(User)
            if ann_limit:
                stmt = stmt.where(User.profile_embedding.isnot(None)).order_by(
                    User.profile_embedding.cosine_distance(hint.query_embedding)
                ).limit(ann_limit)
            else:
                stmt = stmt.order_by(User.created_at, User.id)
            candidates = [user_to_candidate(u) for u in self.db.execute(stmt).scalars().all()]

        logger.debug(f"Fetched {len(candidates)} {hint.kind.value} candidates (ann_limit={ann_limit})")
        return candidates

    @transient_retry
    def fetch_by_id(self, candidate_id: str, kind: CandidateKind = CandidateKind.OPPORTUNITY) -> Candidate:
        key = _parse_uuid(candidate_id)

        if kind == CandidateKind.OPPORTUNITY:
            row = None
            if key is not None:
                row = self.db.execute(
                    select(Opportunity, Repository.stars_count)
                    .outerjoin(Repository, Opportunity.repository_id == Repository.id)
                    .where(Opportunity.id == key)
                ).first()
            if row is None:
                raise NotFoundError('Opportunity', str(candidate_id))
            return opportunity_to_candidate(row[0], row[1])

        model = Repository if kind == CandidateKind.REPOSITORY else User
        entity = self.db.get(model, key) if key is not None else None
        if entity is None:
            raise NotFoundError(kind.value.capitalize(), str(candidate_id))
        if kind == CandidateKind.REPOSITORY:
            return repository_to_candidate(entity)
        return user_to_candidate(entity)

    @transient_retry
    def fetch_user(self, user_id: str) -> UserProfile:
        key = _parse_uuid(user_id)
        user = self.db.get(User, key) if key is not None else None
        if user is None:
            raise NotFoundError('User', str(user_id))

        contributed = self.db.execute(
            select(Contribution.repository_id).where(Contribution.user_id == key).distinct()
        ).scalars().all()

        return UserProfile(
            id=str(user.id),
            skill_level=SkillLevel.parse(user.skill_level),
            preferred_languages=list(user.preferred_languages or []),
            interests=list(user.interests or []),
            availability_hours=float(user.availability_hours or 0),
            experience_months=float(user.experience_months or 0),
            profile_embedding=_vector(user.profile_embedding),
            contributed_repository_ids=[str(r) for r in contributed],
        )

    @transient_retry
    def fetch_opportunities_for_repository(self, repository_id: str) -> List[Candidate]:
        key = _parse_uuid(repository_id)
        if key is None:
            return []
        stmt = (
            select(Opportunity, Repository.stars_count)
            .outerjoin(Repository, Opportunity.repository_id == Repository.id)
            .where(Opportunity.repository_id == key)
            .order_by(Opportunity.created_at, Opportunity.id)
        )
        return [opportunity_to_candidate(opp, stars) for opp, stars in self.db.execute(stmt).all()]
