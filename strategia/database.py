from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from strategia.core.config import settings
from strategia.models.base import Base


def _normalize_database_url(raw_url: str) -> str:
    db_url = (raw_url or "").strip()
    if db_url.startswith("postgres://"):
        return db_url.replace("postgres://", "postgresql://", 1)
    return db_url


DATABASE_URL = _normalize_database_url(settings.DATABASE_URL)
IS_SQLITE_DATABASE = DATABASE_URL.startswith("sqlite://")
IS_MEMORY_DATABASE = DATABASE_URL in {"sqlite://", "sqlite:///:memory:"}

# SQLite comparte conexión entre hilos; en memoria además debe ser una sola
engine_kwargs = {}
if IS_SQLITE_DATABASE:
    engine_kwargs["connect_args"] = {"check_same_thread": False}
if IS_MEMORY_DATABASE:
    engine_kwargs["poolclass"] = StaticPool

engine = create_engine(DATABASE_URL, **engine_kwargs)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


__all__ = ["engine", "Base", "SessionLocal"]
