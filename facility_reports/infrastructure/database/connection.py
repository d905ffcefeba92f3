"""Database connection and session management"""
from typing import Generator, Optional

import structlog
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from facility_reports.config import settings

logger = structlog.get_logger()

# Lazy initialization - engine created on first use
_engine: Optional[Engine] = None


def _get_database_url() -> str:
    """Get and normalize the database URL"""
    url = settings.database_url

    if not url:
        raise RuntimeError(
            "DATABASE_URL is not set. "
            "Please configure it in your .env file."
        )

    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    return url


def get_engine() -> Engine:
    """Get or create the engine (lazy initialization)"""
    global _engine

    if _engine is None:
        url = _get_database_url()
        connect_args = {}
        if url.startswith("sqlite"):
            # Request handlers may run on a worker thread
            connect_args["check_same_thread"] = False

        _engine = create_engine(
            url,
            echo=settings.debug,
            pool_pre_ping=True,
            connect_args=connect_args,
        )

    return _engine


def init_db(engine: Optional[Engine] = None) -> None:
    """Create tables if they do not exist"""
    from facility_reports.domain.models import StorageRecord  # noqa: F401 - registers table

    engine = engine or get_engine()
    SQLModel.metadata.create_all(engine)
    logger.info("database_initialized", url=str(engine.url))


def get_session(engine: Optional[Engine] = None) -> Generator[Session, None, None]:
    """Yield a session that commits on success and rolls back on error"""
    with Session(engine or get_engine(), expire_on_commit=False) as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
