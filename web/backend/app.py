#!/usr/bin/env python3
"""
Contribution Ranking API - FastAPI Application

Hybrid search, personalized matches, trending opportunities and repository
health over the ranking core.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException

from core.exceptions import RankingError
from .config import get_config
from .exceptions import (
    ranking_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import (
    search_router,
    matches_router,
    opportunities_router,
    repositories_router
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load configuration
config = get_config()

# Create FastAPI app
app = FastAPI(
    title="Contribution Ranking API",
    description="API for ranking open-source contribution opportunities",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Register exception handlers
app.add_exception_handler(RankingError, ranking_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(search_router)
app.include_router(matches_router)
app.include_router(opportunities_router)
app.include_router(repositories_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "contribution-ranking"}


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting Contribution Ranking API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
