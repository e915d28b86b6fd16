"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import os
import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


def _prepare_schema(db_url: str):
    from sqlalchemy import create_engine, text
    from database.models import Base

    engine = create_engine(db_url)
    with engine.connect() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        conn.commit()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture(scope="session")
def test_database():
    """
    Session-scoped fixture that provides a PostgreSQL + pgvector database.

    Uses TEST_DATABASE_URL when set and reachable, otherwise starts a
    container through testcontainers. Tests are skipped when neither works.
    """
    external_url = os.environ.get("TEST_DATABASE_URL")
    if external_url:
        from tests import check_db_available
        if not check_db_available():
            pytest.skip("External database not available")
        engine = _prepare_schema(external_url)
        yield engine
        engine.dispose()
        return

    try:
        from testcontainers.postgres import PostgresContainer

        postgres = PostgresContainer(
            image="pgvector/pgvector:pg16",
            username="testuser",
            password="testpass",
            dbname="ranking_test"
        )
        postgres.start()
    except Exception as e:
        pytest.skip(f"Could not start test database container: {e}")

    db_url = postgres.get_connection_url()
    print(f"\n✓ Test database started: {db_url}")
    engine = _prepare_schema(db_url)

    yield engine

    engine.dispose()
    postgres.stop()
    print("\n✓ Test database stopped")


@pytest.fixture
def db_session(test_database):
    """Function-scoped session; every test runs in a rolled back transaction."""
    from sqlalchemy.orm import sessionmaker

    connection = test_database.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection)()

    yield session

    session.close()
    transaction.rollback()
    connection.close()
