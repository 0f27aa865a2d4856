"""Database session management for Pet Wiki."""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlmodel import Session, SQLModel, create_engine

from pet_wiki.config import get_settings
from pet_wiki.utils.logging import get_logger

logger = get_logger(__name__)

# Global engine instance
_engine = None


def _resolve_sqlite_url(db_url: str, base_dir: Path) -> str:
    """Anchor relative SQLite paths at the project base directory."""
    db_path = db_url.replace("sqlite:///", "", 1)
    if not db_path or db_path == ":memory:":
        return db_url

    path = Path(db_path)
    if not path.is_absolute():
        path = base_dir / path
    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{path}"


def get_engine():
    """Get or create the database engine."""
    global _engine

    if _engine is None:
        settings = get_settings()
        db_url = settings.database_url

        if db_url.startswith("sqlite:///"):
            db_url = _resolve_sqlite_url(db_url, settings.base_dir)

        logger.debug(f"Creating database engine: {db_url}")
        _engine = create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False} if "sqlite" in db_url else {},
        )

    return _engine


def init_db() -> None:
    """Initialize the database, creating all tables."""
    engine = get_engine()
    logger.info("Initializing database...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database initialized successfully")


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Get a database session as a context manager."""
    engine = get_engine()
    with Session(engine) as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
