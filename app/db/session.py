# app/db/session.py
from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


def _engine_kwargs(db_uri: str) -> Dict[str, Any]:
    if db_uri.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        return {"connect_args": {"check_same_thread": False}, "future": True}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 280,
        "pool_size": 10,
        "max_overflow": 20,
        "future": True,
    }


engine: Engine = create_engine(settings.DATABASE_URL,
                               **_engine_kwargs(settings.DATABASE_URL))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    future=True,
)


def init_db(bind: Engine = engine) -> None:
    """Create missing tables; safe to run multiple times."""
    from app.db.base import Base
    from app.models import error_log  # noqa: F401

    Base.metadata.create_all(bind=bind)
