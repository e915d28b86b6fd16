#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from core.pipeline import RankingPipeline
from .config import get_config


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Yields:
        Session: Database session that will be automatically closed.
    """
    from database.database import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_pipeline(db: Session = Depends(get_db)) -> RankingPipeline:
    """
    FastAPI dependency that builds a RankingPipeline over the request session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(pipeline: RankingPipeline = Depends(get_pipeline)):
            ...
    """
    from database.repositories import SqlCandidateStore

    return RankingPipeline(SqlCandidateStore(db), get_config().ranking)
