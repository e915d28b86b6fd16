"""
Candidate Store Interface - Abstract source of rankable records.

The ranking core never talks to a database directly. Implementations may
pre-filter or pre-limit using the hint (for example with an ANN index), but
the core re-applies its own threshold and limit afterwards.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from core.ranking.models import Candidate, CandidateKind, UserProfile


@dataclass(frozen=True)
class QueryHint:
    """Optional narrowing information passed to a store; never authoritative."""
    kind: CandidateKind = CandidateKind.OPPORTUNITY
    status: Optional[str] = 'open'
    search_text: Optional[str] = None
    query_embedding: Optional[List[float]] = None
    created_after: Optional[datetime] = None
    limit: Optional[int] = None


class CandidateStore(ABC):
    """
    Abstract Interface for candidate sources (SQL + pgvector, in-memory, ...).
    """

    @abstractmethod
    def fetch_candidates(self, hint: QueryHint) -> List[Candidate]:
        """
        Return candidates of the hinted kind, in a stable corpus order.
        """
        pass

    @abstractmethod
    def fetch_by_id(self, candidate_id: str, kind: CandidateKind = CandidateKind.OPPORTUNITY) -> Candidate:
        """
        Return one candidate.

        Raises:
            NotFoundError: if no candidate of that kind has the id
        """
        pass

    @abstractmethod
    def fetch_user(self, user_id: str) -> UserProfile:
        """
        Return a user's personalization profile.

        Raises:
            NotFoundError: if the user does not exist
        """
        pass

    @abstractmethod
    def fetch_opportunities_for_repository(self, repository_id: str) -> List[Candidate]:
        """
        Return every opportunity of a repository regardless of status.
        """
        pass
