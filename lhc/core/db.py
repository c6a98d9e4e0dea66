# lhc/core/db.py
# Engine and sessions for the assessment store.
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Iterator

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from lhc.core.settings import settings
from lhc.models.assessment import LHCAssessment  # noqa: F401  (registers the table)

logger = logging.getLogger(__name__)


def engine_options(url: str) -> Dict[str, Any]:
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints on a thread pool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    url = settings.DATABASE_URL
    return create_engine(url, echo=settings.DEBUG, **engine_options(url))


def init_db() -> None:
    engine = get_engine()
    SQLModel.metadata.create_all(engine)
    logger.info("[db] schema ready on %s", engine.url.render_as_string(hide_password=True))


def get_session() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    with Session(get_engine()) as session:
        yield session
