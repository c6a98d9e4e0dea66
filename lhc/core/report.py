# lhc/core/report.py
# Final report shape: percentage, grade tier, description and de-duplicated
# recommendations.
from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lhc.core.exceptions import PoolConfigurationError
from lhc.core.settings import settings


class GradeTier(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str
    min: float
    label: str
    css_class: str = Field(alias="class")
    description: str


class GradeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    fallback_description: str = "Не може да се одреди оценка."
    tiers: List[GradeTier] = Field(min_length=1)

    @field_validator("tiers")
    @classmethod
    def _highest_first(cls, v: List[GradeTier]) -> List[GradeTier]:
        return sorted(v, key=lambda t: t.min, reverse=True)


@dataclass
class RawResult:
    """Accumulated evaluator state before formatting."""

    score: float = 0.0
    max_score: float = 0.0
    violations: List[Dict[str, Any]] = field(default_factory=list)
    recommendations: List[Dict[str, Any]] = field(default_factory=list)
    breakdown: Dict[str, Dict[str, Any]] = field(default_factory=dict)


# ------------------------- helpers -------------------------
def round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; 12.5 must become 13 here.
    return int(math.floor(x + 0.5))


def percent(score: float, max_score: float) -> int:
    """Score as a 0..100 integer percentage (0 when nothing was scored)."""
    if max_score <= 0:
        return 0
    return max(0, min(100, round_half_up(score / max_score * 100)))


def load_grades(path: Union[str, Path]) -> GradeConfig:
    p = Path(path)
    try:
        return GradeConfig.model_validate_json(p.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        raise PoolConfigurationError("failed to load grade tiers", {"path": str(p), "error": str(e)}) from e


@lru_cache(maxsize=1)
def get_grades() -> GradeConfig:
    return load_grades(settings.GRADES_PATH)


def determine_grade(percentage: float, grades: GradeConfig) -> GradeTier:
    for tier in grades.tiers:
        if percentage >= tier.min:
            return tier
    return grades.tiers[-1]


def grade_description(tier: GradeTier, company_name: str, grades: GradeConfig) -> str:
    if not tier.description:
        return grades.fallback_description
    return tier.description.format(company_name=company_name)


def dedupe_recommendations(recommendations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop repeated recommendation texts, keeping the first one (and its domain)."""
    seen = set()
    out = []
    for rec in recommendations:
        if rec["text"] in seen:
            continue
        seen.add(rec["text"])
        out.append(rec)
    return out


def build_report(raw: RawResult, company_name: str, grades: GradeConfig) -> Dict[str, Any]:
    percentage = percent(raw.score, raw.max_score)
    tier = determine_grade(percentage, grades)
    return {
        "rawScore": raw.score,
        "maxScore": raw.max_score,
        "percentage": percentage,
        "gradeLabel": tier.label,
        "gradeClass": tier.css_class,
        "gradeDescription": grade_description(tier, company_name, grades),
        "violations": list(raw.violations),
        "recommendations": dedupe_recommendations(raw.recommendations),
        "categoryBreakdown": raw.breakdown,
    }


__all__ = [
    "GradeTier",
    "GradeConfig",
    "RawResult",
    "round_half_up",
    "percent",
    "load_grades",
    "get_grades",
    "determine_grade",
    "grade_description",
    "dedupe_recommendations",
    "build_report",
]
