#!/usr/bin/env python3
"""
Request models for API endpoints.

Weights, thresholds and limits are validated by the ranking core so that
invalid values surface as 400 responses with the core's error type.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class SearchRequest(BaseModel):
    """Hybrid search request; omitted fields fall back to configured defaults."""
    search_text: Optional[str] = Field(None, description="Free-text query")
    query_embedding: Optional[List[float]] = Field(None, description="Pre-computed query embedding")
    text_weight: Optional[float] = Field(None, description="Weight of the lexical signal")
    vector_weight: Optional[float] = Field(None, description="Weight of the embedding signal")
    similarity_threshold: Optional[float] = Field(None, description="Minimum relevance score (0-1)")
    limit: Optional[int] = Field(None, description="Maximum results to return")


class SimilarUsersRequest(BaseModel):
    """Request for users with a similar profile embedding."""
    query_embedding: List[float] = Field(..., description="Profile embedding to compare against")
    threshold: float = Field(default=0.7, description="Minimum similarity (0-1)")
    limit: int = Field(default=10, description="Maximum results to return")
