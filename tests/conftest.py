from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from lhc.core.domain import DomainBank
from lhc.core.pool import QuestionPool, build_pool
from lhc.core.report import GradeConfig, load_grades
from lhc.core.settings import settings
from lhc.models.assessment import LHCAssessment  # noqa: F401


def _bank(domain_id: str, questions: List[Dict[str, Any]], **extra: Any) -> DomainBank:
    data: Dict[str, Any] = {
        "domain": {"id": domain_id, "name": f"Домен {domain_id}", "icon": "*", "color": "#000000"},
        "severity_map": {},
        "questions": questions,
    }
    data.update(extra)
    return DomainBank.model_validate(data)


@pytest.fixture
def make_bank() -> Callable[..., DomainBank]:
    """Build a DomainBank from plain question dicts."""
    return _bank


@pytest.fixture
def make_pool() -> Callable[..., QuestionPool]:
    """Build a pool from ``{domain_id: [question dicts]}`` plus optional per-domain bank extras."""

    def _make(domains: Dict[str, List[Dict[str, Any]]], extras: Optional[Dict[str, Dict[str, Any]]] = None) -> QuestionPool:
        extras = extras or {}
        return build_pool([_bank(dom, qs, **extras.get(dom, {})) for dom, qs in domains.items()])

    return _make


@pytest.fixture(scope="session")
def grades() -> GradeConfig:
    return load_grades(settings.GRADES_PATH)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s
