#!/usr/bin/env python3
"""
Opportunity endpoints - trending opportunities.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from core.pipeline import RankingPipeline
from ..dependencies import get_pipeline
from ..services.ranking_service import RankingService
from ..models.responses import TrendingResponse

router = APIRouter(prefix="/api/opportunities", tags=["opportunities"])


@router.get("/trending", response_model=TrendingResponse)
def get_trending(
    window_hours: Optional[float] = Query(default=None, description="Look-back window in hours"),
    min_engagement: Optional[int] = Query(default=None, description="Minimum views + applications"),
    limit: Optional[int] = Query(default=None, description="Maximum results to return"),
    pipeline: RankingPipeline = Depends(get_pipeline)
):
    """Get recently created opportunities ranked by decayed engagement."""
    effective_window = pipeline.config.trending.window_hours if window_hours is None else window_hours
    results = RankingService(pipeline).get_trending(
        window_hours=effective_window,
        min_engagement=min_engagement,
        limit=limit
    )
    return TrendingResponse(
        success=True,
        window_hours=effective_window,
        count=len(results),
        results=results
    )
