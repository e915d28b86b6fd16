"""
In-Memory Candidate Store - Candidate source backed by plain Python records.

Used by the CLI for JSON corpora and by tests. Records are converted to
Candidate / UserProfile value objects once, at load time.
"""
import json
import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from dateutil.parser import isoparse

from core.exceptions import NotFoundError
from core.utils import as_utc
from core.ranking.models import (
    Candidate, CandidateKind, ContributionType, SkillLevel, UserProfile
)
from core.store.interfaces import CandidateStore, QueryHint

logger = logging.getLogger(__name__)


def _parse_datetime(value: Any):
    if value is None or value == '':
        return None
    if isinstance(value, str):
        return isoparse(value)
    return value


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == '':
        return None
    return float(value)


def candidate_from_record(record: Dict[str, Any], kind: CandidateKind) -> Candidate:
    """Build a Candidate from a loosely-typed dict (JSON row, API payload)."""
    title = record.get('title') or record.get('name') or record.get('github_username') or ''
    description = record.get('description') or record.get('bio') or ''
    embedding = record.get('embedding')
    if embedding is None:
        embedding = record.get('description_embedding') or record.get('profile_embedding')

    default_status = 'open' if kind == CandidateKind.OPPORTUNITY else 'active'

    return Candidate(
        id=str(record['id']),
        title=title,
        description=description,
        kind=kind,
        embedding=embedding,
        title_embedding=record.get('title_embedding'),
        repository_id=str(record['repository_id']) if record.get('repository_id') else None,
        status=record.get('status', default_status),
        contribution_type=ContributionType.parse(record.get('type', record.get('contribution_type', 'other'))),
        difficulty=SkillLevel.parse(record.get('difficulty', 'intermediate')),
        priority=int(record.get('priority', 3)),
        required_skills=list(record.get('required_skills') or []),
        technologies=list(record.get('technologies') or []),
        estimated_hours=_optional_float(record.get('estimated_hours')),
        good_first_issue=bool(record.get('good_first_issue', False)),
        help_wanted=bool(record.get('help_wanted', False)),
        mentorship_available=bool(record.get('mentorship_available', False)),
        view_count=int(record.get('view_count') or 0),
        application_count=int(record.get('application_count') or 0),
        created_at=_parse_datetime(record.get('created_at')),
        started_at=_parse_datetime(record.get('started_at')),
        completed_at=_parse_datetime(record.get('completed_at')),
        full_name=record.get('full_name'),
        topics=list(record.get('topics') or []),
        stars_count=int(record.get('stars_count') or 0),
        health_score=_optional_float(record.get('health_score')),
        activity_score=float(record.get('activity_score') or 0.0),
        community_score=float(record.get('community_score') or 0.0),
        documentation_score=float(record.get('documentation_score') or 0.0),
        contributor_friendliness=float(record.get('contributor_friendliness') or 0.0),
    )


def user_from_record(record: Dict[str, Any]) -> UserProfile:
    return UserProfile(
        id=str(record['id']),
        skill_level=SkillLevel.parse(record.get('skill_level', 'beginner')),
        preferred_languages=list(record.get('preferred_languages') or []),
        interests=list(record.get('interests') or []),
        availability_hours=float(record.get('availability_hours') or 0.0),
        experience_months=float(record.get('experience_months') or 0.0),
        profile_embedding=record.get('profile_embedding'),
        contributed_repository_ids=[str(r) for r in record.get('contributed_repository_ids') or []],
    )


class InMemoryCandidateStore(CandidateStore):
    """CandidateStore over in-process lists; corpus order is insertion order."""

    def __init__(
        self,
        opportunities: Optional[Iterable[Candidate]] = None,
        repositories: Optional[Iterable[Candidate]] = None,
        users: Optional[Iterable[UserProfile]] = None,
        user_candidates: Optional[Iterable[Candidate]] = None
    ):
        self._candidates: Dict[CandidateKind, List[Candidate]] = {
            CandidateKind.OPPORTUNITY: list(opportunities or []),
            CandidateKind.REPOSITORY: list(repositories or []),
            CandidateKind.USER: list(user_candidates or []),
        }
        self._users: Dict[str, UserProfile] = {u.id: u for u in users or []}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InMemoryCandidateStore':
        """
        Build a store from {'opportunities': [...], 'repositories': [...], 'users': [...]}.

        User records provide both a profile and a USER candidate (for
        similar-user search).
        """
        user_records = data.get('users', [])
        repositories = [candidate_from_record(r, CandidateKind.REPOSITORY) for r in data.get('repositories', [])]
        stars = {r.id: r.stars_count for r in repositories}

        opportunities = []
        for record in data.get('opportunities', []):
            opportunity = candidate_from_record(record, CandidateKind.OPPORTUNITY)
            # Opportunities inherit their repository's stars unless the record carries its own
            if record.get('stars_count') is None and opportunity.repository_id in stars:
                opportunity = replace(opportunity, stars_count=stars[opportunity.repository_id])
            opportunities.append(opportunity)

        store = cls(
            opportunities=opportunities,
            repositories=repositories,
            users=[user_from_record(r) for r in user_records],
            user_candidates=[candidate_from_record(r, CandidateKind.USER) for r in user_records],
        )
        logger.info(
            f"Loaded corpus: {len(store._candidates[CandidateKind.OPPORTUNITY])} opportunities, "
            f"{len(store._candidates[CandidateKind.REPOSITORY])} repositories, {len(store._users)} users"
        )
        return store

    @classmethod
    def from_json_file(cls, path: str) -> 'InMemoryCandidateStore':
        with open(path, 'r', encoding='utf-8') as f:
            return cls.from_dict(json.load(f))

    def fetch_candidates(self, hint: QueryHint) -> List[Candidate]:
        results = []
        for candidate in self._candidates[hint.kind]:
            if hint.status and candidate.status != hint.status:
                continue
            if hint.created_after and (candidate.created_at is None or as_utc(candidate.created_at) < as_utc(hint.created_after)):
                continue
            results.append(candidate)
        return results

    def fetch_by_id(self, candidate_id: str, kind: CandidateKind = CandidateKind.OPPORTUNITY) -> Candidate:
        for candidate in self._candidates[kind]:
            if candidate.id == str(candidate_id):
                return candidate
        raise NotFoundError(kind.value.capitalize(), str(candidate_id))

    def fetch_user(self, user_id: str) -> UserProfile:
        user = self._users.get(str(user_id))
        if user is None:
            raise NotFoundError('User', str(user_id))
        return user

    def fetch_opportunities_for_repository(self, repository_id: str) -> List[Candidate]:
        return [
            c for c in self._candidates[CandidateKind.OPPORTUNITY]
            if c.repository_id == str(repository_id)
        ]
