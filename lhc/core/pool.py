# lhc/core/pool.py
# Unified question pool: loads every domain bank, normalizes the per-domain
# sanction vocabulary and indexes questions by id.
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from lhc.core.domain import (
    BinaryQuestion,
    ChoiceQuestion,
    DomainBank,
    MultiCheckQuestion,
    Severity,
    SourceDomain,
)
from lhc.core.exceptions import PoolConfigurationError
from lhc.core.settings import settings

logger = logging.getLogger(__name__)

AnyQuestion = Union[BinaryQuestion, ChoiceQuestion, MultiCheckQuestion]


# ------------------------- loading -------------------------
def load_bank(path: Union[str, Path]) -> DomainBank:
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as e:
        raise PoolConfigurationError("failed to read bank file", {"path": str(p), "error": str(e)}) from e
    try:
        return DomainBank.model_validate_json(raw)
    except ValidationError as e:
        raise PoolConfigurationError(
            "invalid bank file", {"path": str(p), "errors": e.error_count()}
        ) from e


def load_banks(directory: Union[str, Path]) -> List[DomainBank]:
    """Every ``*.json`` bank in ``directory``, in filename order."""
    d = Path(directory)
    if not d.is_dir():
        raise PoolConfigurationError("banks directory not found", {"path": str(d)})
    files = sorted(d.glob("*.json"))
    if not files:
        raise PoolConfigurationError("no bank files found", {"path": str(d)})
    banks = [load_bank(f) for f in files]
    logger.info("[pool] loaded %d banks from %s", len(banks), d)
    return banks


# ------------------------- normalization -------------------------
def normalize_severity(token: str, severity_map: Mapping[str, Severity], domain_id: str = "") -> Severity:
    """Map a domain-specific sanction token onto the common scale.

    ``"none"`` is the same in every vocabulary. Any other token must have an
    entry in the domain's table; domains disagree on what e.g. ``sanction1``
    means, so there is no default.
    """
    if token == "none":
        return Severity.NONE
    try:
        return Severity(severity_map[token])
    except KeyError:
        raise PoolConfigurationError(
            "sanction token has no severity mapping", {"domain": domain_id, "token": token}
        ) from None


# ------------------------- pool -------------------------
@dataclass(frozen=True)
class QuestionPool:
    """Immutable, decorated union of all domain banks."""

    questions: Tuple[AnyQuestion, ...]
    banks: Mapping[str, DomainBank]
    stats: Mapping[str, Any]
    _index: Mapping[str, AnyQuestion] = field(repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self) -> Iterator[AnyQuestion]:
        return iter(self.questions)

    @property
    def domains(self) -> Tuple[SourceDomain, ...]:
        return tuple(b.domain for b in self.banks.values())

    def get(self, question_id: str) -> Optional[AnyQuestion]:
        return self._index.get(question_id)

    def lookup(self, question_ids: Iterable[str]) -> List[AnyQuestion]:
        """Resolve ids in the caller's order; unknown ids are dropped, repeats ignored."""
        out: List[AnyQuestion] = []
        seen = set()
        for qid in question_ids or []:
            if qid in seen:
                continue
            q = self._index.get(qid)
            if q is not None:
                seen.add(qid)
                out.append(q)
        return out


def _decorate(question: AnyQuestion, bank: DomainBank) -> AnyQuestion:
    dom = bank.domain
    return question.model_copy(update={
        "source_category": dom.id,
        "source_category_name": dom.name,
        "source_category_icon": dom.icon,
        "source_category_color": dom.color,
        "normalized_severity": normalize_severity(question.sanction, bank.severity_map, dom.id),
    })


def build_pool(banks: Sequence[DomainBank]) -> QuestionPool:
    questions: List[AnyQuestion] = []
    index: Dict[str, AnyQuestion] = {}
    by_domain: Dict[str, DomainBank] = {}
    counts: Dict[str, int] = {}

    for bank in banks:
        dom_id = bank.domain.id
        if dom_id in by_domain:
            raise PoolConfigurationError("duplicate domain id", {"domain": dom_id})
        by_domain[dom_id] = bank
        counts[dom_id] = 0

        for q in bank.questions:
            if q.id in index:
                raise PoolConfigurationError(
                    "duplicate question id across banks",
                    {"question_id": q.id, "domain": dom_id, "first_domain": index[q.id].source_category},
                )
            decorated = _decorate(q, bank)
            index[q.id] = decorated
            questions.append(decorated)
            counts[dom_id] += 1

    stats = {"total": len(questions), "byCategory": MappingProxyType(counts)}
    return QuestionPool(
        questions=tuple(questions),
        banks=MappingProxyType(by_domain),
        stats=MappingProxyType(stats),
        _index=MappingProxyType(index),
    )


@lru_cache(maxsize=1)
def get_pool() -> QuestionPool:
    """Process-wide pool built from ``settings.BANKS_DIR`` (FastAPI dependency)."""
    pool = build_pool(load_banks(settings.BANKS_DIR))
    logger.info("[pool] %d questions, by domain: %s", pool.stats["total"], dict(pool.stats["byCategory"]))
    return pool


__all__ = [
    "AnyQuestion",
    "QuestionPool",
    "load_bank",
    "load_banks",
    "normalize_severity",
    "build_pool",
    "get_pool",
]
