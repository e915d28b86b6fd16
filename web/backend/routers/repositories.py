#!/usr/bin/env python3
"""
Repository endpoints - repository health.
"""

from fastapi import APIRouter, Depends

from core.pipeline import RankingPipeline
from ..dependencies import get_pipeline
from ..services.ranking_service import RankingService
from ..models.responses import HealthResponse

router = APIRouter(prefix="/api/repositories", tags=["repositories"])


@router.get("/{repository_id}/health", response_model=HealthResponse)
def get_repository_health(
    repository_id: str,
    pipeline: RankingPipeline = Depends(get_pipeline)
):
    """
    Get aggregated health for a repository.

    Returns 404 when the repository does not exist.
    """
    health = RankingService(pipeline).get_health(repository_id)
    return HealthResponse(success=True, health=health)
