"""Business logic services."""

from .ranking_service import RankingService, to_ranked_result
