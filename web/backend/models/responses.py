#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict


class ScoreBreakdownModel(BaseModel):
    """Named sub-scores, their weights and the weighted total."""
    total_score: float = Field(ge=0, le=1)
    components: Dict[str, float]
    weights: Dict[str, float]


class RankedResult(BaseModel):
    """One ranked candidate."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "candidate_id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Fix TypeScript type errors in search module",
                "kind": "opportunity",
                "score": 0.83,
                "breakdown": {
                    "total_score": 0.83,
                    "components": {"text_similarity": 0.8, "vector_similarity": 0.84},
                    "weights": {"text_similarity": 0.3, "vector_similarity": 0.7}
                },
                "match_reasons": ["Matches all search terms", "Semantically similar to your query"],
                "warnings": []
            }
        }
    )

    candidate_id: str
    title: Optional[str] = None
    kind: Optional[str] = None
    repository_id: Optional[str] = None
    score: float = Field(ge=0, le=1)
    breakdown: ScoreBreakdownModel
    match_reasons: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class SearchResponse(BaseModel):
    """Response for hybrid search endpoints."""
    success: bool
    count: int
    results: List[RankedResult]


class MatchesResponse(BaseModel):
    """Response for personalized matches of a user."""
    success: bool
    user_id: str
    count: int
    matches: List[RankedResult]


class TrendingResponse(BaseModel):
    """Response for trending opportunities."""
    success: bool
    window_hours: float
    count: int
    results: List[RankedResult]


class RepositoryHealth(BaseModel):
    """Aggregated repository health."""
    repository_id: str
    health_score: float = Field(ge=0, le=1)
    health_status: str
    activity_score: float = Field(ge=0, le=1)
    community_score: float = Field(ge=0, le=1)
    documentation_score: float = Field(ge=0, le=1)
    contributor_friendliness: float = Field(ge=0, le=1)
    total_opportunities: int
    open_opportunities: int
    avg_completion_hours: Optional[float] = None
    key_strengths: List[str] = Field(default_factory=list)
    key_weaknesses: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response for repository health."""
    success: bool
    health: RepositoryHealth
