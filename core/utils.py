import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def cosine_similarity_from_distance(distance: float) -> float:
    """Convert pgvector cosine distance to cosine similarity, clipped to [0, 1].

    pgvector cosine_distance returns values in range [0, 2], so similarity
    can be in range [-1, 1]. Negative similarities are clipped to 0.

    Args:
        distance: Cosine distance from pgvector

    Returns:
        Cosine similarity in range [0, 1]
    """
    similarity = 1.0 - float(distance)
    if not (0.0 <= similarity <= 1.0):
        logger.debug(f"Similarity out of range: {similarity}, clipping to [0, 1]")
        return max(0.0, min(1.0, similarity))
    return similarity


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
