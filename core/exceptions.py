#!/usr/bin/env python3
"""
Ranking exceptions - error taxonomy shared by the scorers and the pipeline.

ConfigurationError and NotFoundError abort a whole call. Degraded data
(missing embedding, skills or estimated hours) never raises; the scorers
fall back to documented defaults instead.
"""


class RankingError(Exception):
    """Base exception for ranking core errors."""
    pass


class ConfigurationError(RankingError):
    """Raised when a caller supplies an invalid query or configuration."""
    pass


class InvalidWeightConfiguration(ConfigurationError):
    """Raised when a weight set is negative, all-zero or does not sum correctly."""
    pass


class InvalidLimit(ConfigurationError):
    """Raised when a result limit is not positive."""
    pass


class InvalidThreshold(ConfigurationError):
    """Raised when a similarity threshold is outside [0, 1]."""
    pass


class NotFoundError(RankingError):
    """Raised when a requested user or entity does not exist in the store."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")
