#!/usr/bin/env python3
"""
Search endpoints - hybrid text + vector search.
"""

import logging
from fastapi import APIRouter, Depends

from core.pipeline import RankingPipeline
from ..dependencies import get_pipeline
from ..services.ranking_service import RankingService
from ..models.requests import SearchRequest, SimilarUsersRequest
from ..models.responses import SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])


@router.post("/opportunities", response_model=SearchResponse)
def search_opportunities(
    request: SearchRequest,
    pipeline: RankingPipeline = Depends(get_pipeline)
):
    """
    Search open opportunities.

    Results are sorted by relevance (highest first) and never exceed the
    requested limit.
    """
    results = RankingService(pipeline).search_opportunities(request)
    return SearchResponse(success=True, count=len(results), results=results)


@router.post("/repositories", response_model=SearchResponse)
def search_repositories(
    request: SearchRequest,
    pipeline: RankingPipeline = Depends(get_pipeline)
):
    """
    Search active repositories; relevance is boosted by health and stars.
    """
    results = RankingService(pipeline).search_repositories(request)
    return SearchResponse(success=True, count=len(results), results=results)


@router.post("/users", response_model=SearchResponse)
def search_similar_users(
    request: SimilarUsersRequest,
    pipeline: RankingPipeline = Depends(get_pipeline)
):
    """
    Find users whose profile embedding is similar to the given one.
    """
    results = RankingService(pipeline).similar_users(request)
    return SearchResponse(success=True, count=len(results), results=results)
