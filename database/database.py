"""Engine and session factory built from the `database` config section."""
import contextlib
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from core.config_loader import load_config

_db_config = load_config().database

engine = create_engine(
    _db_config.url,
    pool_size=_db_config.pool_size,
    max_overflow=_db_config.max_overflow,
    pool_pre_ping=True
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextlib.contextmanager
def db_session_scope():
    """Read-mostly session for one CLI command; commits on success."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
