"""API route handlers."""

from .search import router as search_router
from .matches import router as matches_router
from .opportunities import router as opportunities_router
from .repositories import router as repositories_router
