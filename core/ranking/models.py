#!/usr/bin/env python3
"""
Ranking Models - Shared value types for relevance ranking and matching.

All of these are request-scoped: the store builds candidates, the caller
builds the query or profile, and the scorers return fresh breakdowns on
every call.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Dict, Any, Optional

from core.exceptions import InvalidWeightConfiguration, InvalidLimit, InvalidThreshold, ConfigurationError


def clamp_unit(value: float) -> float:
    """Clamp a score into [0, 1]; NaN collapses to 0."""
    if value is None or math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, float(value)))


class SkillLevel(str, Enum):
    """Ordered skill / difficulty tier."""
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'
    EXPERT = 'expert'

    @property
    def rank(self) -> int:
        return _SKILL_RANKS[self]

    def distance_to(self, other: 'SkillLevel') -> int:
        """Signed tier distance; positive when `other` is harder than self."""
        return other.rank - self.rank

    @classmethod
    def parse(cls, value: Any) -> 'SkillLevel':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(f"Unknown skill level: {value!r}")


_SKILL_RANKS = {
    SkillLevel.BEGINNER: 1,
    SkillLevel.INTERMEDIATE: 2,
    SkillLevel.ADVANCED: 3,
    SkillLevel.EXPERT: 4,
}


class ContributionType(str, Enum):
    """Category of a contribution opportunity."""
    BUG_FIX = 'bug_fix'
    FEATURE = 'feature'
    DOCUMENTATION = 'documentation'
    TESTING = 'testing'
    REFACTORING = 'refactoring'
    OTHER = 'other'

    @classmethod
    def parse(cls, value: Any) -> 'ContributionType':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


class CandidateKind(str, Enum):
    OPPORTUNITY = 'opportunity'
    REPOSITORY = 'repository'
    USER = 'user'


@dataclass(frozen=True)
class WeightPair:
    """Text / vector blend weights for hybrid search."""
    text_weight: float = 0.3
    vector_weight: float = 0.7

    def validate(self) -> None:
        if self.text_weight < 0 or self.vector_weight < 0:
            raise InvalidWeightConfiguration(
                f"Weights must be non-negative (text={self.text_weight}, vector={self.vector_weight})"
            )
        if self.text_weight == 0 and self.vector_weight == 0:
            raise InvalidWeightConfiguration("Text weight and vector weight cannot both be zero")

    def normalized(self) -> 'WeightPair':
        """Scale the pair so the weights sum to 1."""
        self.validate()
        total = self.text_weight + self.vector_weight
        return WeightPair(self.text_weight / total, self.vector_weight / total)


@dataclass(frozen=True)
class QuerySpec:
    """A single hybrid search request."""
    search_text: Optional[str] = None
    query_embedding: Optional[List[float]] = None
    weights: WeightPair = field(default_factory=WeightPair)
    similarity_threshold: float = 0.6
    result_limit: int = 20

    def validate(self) -> None:
        """Fail fast on caller mistakes before any candidate is scored."""
        self.weights.validate()
        if self.result_limit is None or self.result_limit <= 0:
            raise InvalidLimit(f"Result limit must be positive, got {self.result_limit}")
        if not (0.0 <= self.similarity_threshold <= 1.0):
            raise InvalidThreshold(
                f"Similarity threshold must be within [0, 1], got {self.similarity_threshold}"
            )

    @property
    def has_search_text(self) -> bool:
        return bool(self.search_text and self.search_text.strip())


@dataclass(frozen=True)
class Candidate:
    """
    A rankable record: opportunity, repository or user.

    Fields that do not apply to a kind keep their defaults. Quality
    sub-scores are on a unit scale.
    """
    id: str
    title: str = ""
    description: str = ""
    kind: CandidateKind = CandidateKind.OPPORTUNITY
    embedding: Optional[List[float]] = None
    title_embedding: Optional[List[float]] = None

    # Opportunity attributes
    repository_id: Optional[str] = None
    status: str = 'open'
    contribution_type: ContributionType = ContributionType.OTHER
    difficulty: SkillLevel = SkillLevel.INTERMEDIATE
    priority: int = 3
    required_skills: List[str] = field(default_factory=list)
    technologies: List[str] = field(default_factory=list)
    estimated_hours: Optional[float] = None
    good_first_issue: bool = False
    help_wanted: bool = False
    mentorship_available: bool = False
    view_count: int = 0
    application_count: int = 0
    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # Repository attributes
    full_name: Optional[str] = None
    topics: List[str] = field(default_factory=list)
    stars_count: int = 0
    health_score: Optional[float] = None
    activity_score: float = 0.0
    community_score: float = 0.0
    documentation_score: float = 0.0
    contributor_friendliness: float = 0.0


@dataclass(frozen=True)
class UserProfile:
    """Personalization profile supplied per request."""
    id: str
    skill_level: SkillLevel = SkillLevel.BEGINNER
    preferred_languages: List[str] = field(default_factory=list)
    interests: List[str] = field(default_factory=list)
    availability_hours: float = 0.0
    experience_months: float = 0.0
    profile_embedding: Optional[List[float]] = None
    contributed_repository_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.availability_hours < 0:
            raise ConfigurationError(f"availability_hours must be >= 0, got {self.availability_hours}")
        if self.experience_months < 0:
            raise ConfigurationError(f"experience_months must be >= 0, got {self.experience_months}")


FACTOR_NAMES = (
    'skill_match',
    'language_match',
    'interest_match',
    'difficulty',
    'availability',
    'experience',
)


@dataclass(frozen=True)
class WeightConfiguration:
    """Fixed six-factor weights for personalized matching; must sum to 1."""
    skill_match: float = 0.25
    language_match: float = 0.20
    interest_match: float = 0.15
    difficulty: float = 0.15
    availability: float = 0.15
    experience: float = 0.10

    def __post_init__(self):
        weights = self.as_dict()
        if any(w < 0 for w in weights.values()):
            raise InvalidWeightConfiguration(f"Factor weights must be non-negative: {weights}")
        total = sum(weights.values())
        if abs(total - 1.0) > 1e-6:
            raise InvalidWeightConfiguration(f"Factor weights must sum to 1.0, got {total:.6f}")

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in FACTOR_NAMES}

    @classmethod
    def from_mapping(cls, weights: Dict[str, float]) -> 'WeightConfiguration':
        unknown = set(weights) - set(FACTOR_NAMES)
        if unknown:
            raise InvalidWeightConfiguration(f"Unknown factor names: {sorted(unknown)}")
        return cls(**weights)


DEFAULT_WEIGHT_CONFIGURATION = WeightConfiguration()


@dataclass
class ScoreBreakdown:
    """Named unit sub-scores and their weighted total."""
    components: Dict[str, float]
    weights: Dict[str, float]
    total_score: float

    def get(self, name: str, default: float = 0.0) -> float:
        return self.components.get(name, default)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_score': self.total_score,
            'components': dict(self.components),
            'weights': dict(self.weights),
        }


def combine_scores(components: Dict[str, float], weights: Dict[str, float]) -> ScoreBreakdown:
    """Weighted sum of clamped sub-scores, clamped to [0, 1]."""
    bounded = {name: clamp_unit(value) for name, value in components.items()}
    total = sum(bounded[name] * weights.get(name, 0.0) for name in bounded)
    return ScoreBreakdown(components=bounded, weights=dict(weights), total_score=clamp_unit(total))


@dataclass
class MatchResult:
    """One ranked candidate with its score breakdown and explanations."""
    candidate_id: str
    breakdown: ScoreBreakdown
    match_reasons: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    candidate: Optional[Candidate] = None

    @property
    def total_score(self) -> float:
        return self.breakdown.total_score

    @property
    def relevance_score(self) -> float:
        return self.breakdown.total_score

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'candidate_id': self.candidate_id,
            'score': self.breakdown.to_dict(),
            'match_reasons': list(self.match_reasons),
            'warnings': list(self.warnings),
        }
        if self.candidate is not None:
            data['title'] = self.candidate.title
            data['kind'] = self.candidate.kind.value
        return data


@dataclass
class HealthSnapshot:
    """Aggregated repository health with qualitative tags."""
    entity_id: str
    health_score: float
    activity_score: float
    community_score: float
    documentation_score: float
    contributor_friendliness: float
    total_opportunities: int
    open_opportunities: int
    avg_completion_hours: Optional[float]
    health_status: str
    key_strengths: List[str] = field(default_factory=list)
    key_weaknesses: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'entity_id': self.entity_id,
            'health_score': self.health_score,
            'activity_score': self.activity_score,
            'community_score': self.community_score,
            'documentation_score': self.documentation_score,
            'contributor_friendliness': self.contributor_friendliness,
            'total_opportunities': self.total_opportunities,
            'open_opportunities': self.open_opportunities,
            'avg_completion_hours': self.avg_completion_hours,
            'health_status': self.health_status,
            'key_strengths': list(self.key_strengths),
            'key_weaknesses': list(self.key_weaknesses),
        }
