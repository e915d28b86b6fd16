#!/usr/bin/env python3
"""
Match endpoints - personalized opportunity matches for a user.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from core.pipeline import RankingPipeline
from ..dependencies import get_pipeline
from ..services.ranking_service import RankingService
from ..models.responses import MatchesResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["matches"])


@router.get("/{user_id}/matches", response_model=MatchesResponse)
def get_user_matches(
    user_id: str,
    threshold: Optional[float] = Query(default=None, description="Minimum match score (0-1)"),
    limit: Optional[int] = Query(default=None, description="Maximum results to return"),
    pipeline: RankingPipeline = Depends(get_pipeline)
):
    """
    Get open opportunities ranked for a user.

    Opportunities in repositories the user already contributed to are
    excluded. Each match carries its six-factor breakdown, reasons and
    warnings.
    """
    matches = RankingService(pipeline).get_matches(user_id, threshold=threshold, limit=limit)
    return MatchesResponse(
        success=True,
        user_id=user_id,
        count=len(matches),
        matches=matches
    )
