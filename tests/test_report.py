from __future__ import annotations

import pytest

from lhc.core.exceptions import PoolConfigurationError
from lhc.core.report import (
    GradeConfig,
    RawResult,
    build_report,
    dedupe_recommendations,
    determine_grade,
    grade_description,
    load_grades,
    percent,
    round_half_up,
)


@pytest.mark.parametrize(
    "score, max_score, expected",
    [
        (1, 8, 13),      # 12.5 rounds up
        (3, 8, 38),      # 37.5 rounds up
        (1, 3, 33),
        (2, 3, 67),
        (0, 5, 0),
        (5, 5, 100),
    ],
)
def test_percent_rounds_half_up(score, max_score, expected) -> None:
    assert percent(score, max_score) == expected


def test_round_half_up_differs_from_builtin_round() -> None:
    assert round(12.5) == 12
    assert round_half_up(12.5) == 13
    assert round_half_up(12.49) == 12


@pytest.mark.parametrize("score, max_score, expected", [(-3, 2, 0), (7, 2, 100), (1, 0, 0), (0, 0, 0)])
def test_percent_is_clamped_and_safe_for_empty_max(score, max_score, expected) -> None:
    assert percent(score, max_score) == expected


@pytest.mark.parametrize(
    "percentage, key",
    [
        (100, "perfect"),
        (99, "excellent"),
        (80, "excellent"),
        (79, "veryGood"),
        (70, "veryGood"),
        (69, "good"),
        (60, "good"),
        (59, "average"),
        (50, "average"),
        (49, "low"),
        (40, "low"),
        (39, "veryLow"),
        (0, "veryLow"),
    ],
)
def test_grade_boundaries(grades, percentage, key) -> None:
    assert determine_grade(percentage, grades).key == key


def test_grade_below_every_tier_falls_back_to_last() -> None:
    cfg = GradeConfig.model_validate({
        "tiers": [
            {"key": "top", "min": 90, "label": "Top", "class": "top", "description": "ok"},
            {"key": "mid", "min": 50, "label": "Mid", "class": "mid", "description": "meh"},
        ]
    })
    assert determine_grade(10, cfg).key == "mid"


def test_tiers_are_sorted_highest_first() -> None:
    cfg = GradeConfig.model_validate({
        "tiers": [
            {"key": "low", "min": 0, "label": "L", "class": "l", "description": "l"},
            {"key": "high", "min": 80, "label": "H", "class": "h", "description": "h"},
        ]
    })
    assert [t.key for t in cfg.tiers] == ["high", "low"]
    assert determine_grade(85, cfg).key == "high"


def test_grade_description_interpolates_company_name(grades) -> None:
    tier = determine_grade(85, grades)
    text = grade_description(tier, "Пример ДООЕЛ", grades)
    assert "Пример ДООЕЛ" in text
    assert "{company_name}" not in text


def test_grade_description_fallback_when_tier_has_no_text() -> None:
    cfg = GradeConfig.model_validate({
        "fallback_description": "Нема опис.",
        "tiers": [{"key": "any", "min": 0, "label": "Any", "class": "any", "description": ""}],
    })
    assert grade_description(cfg.tiers[0], "X", cfg) == "Нема опис."


def test_dedupe_keeps_first_occurrence() -> None:
    recs = [
        {"text": "A", "sourceCategory": "employment"},
        {"text": "B", "sourceCategory": "gdpr"},
        {"text": "A", "sourceCategory": "gdpr"},
    ]
    out = dedupe_recommendations(recs)
    assert [r["text"] for r in out] == ["A", "B"]
    assert out[0]["sourceCategory"] == "employment"


def test_build_report_keys(grades) -> None:
    raw = RawResult(score=3, max_score=4)
    report = build_report(raw, "Фирма", grades)
    assert set(report) == {
        "rawScore",
        "maxScore",
        "percentage",
        "gradeLabel",
        "gradeClass",
        "gradeDescription",
        "violations",
        "recommendations",
        "categoryBreakdown",
    }
    assert report["percentage"] == 75
    assert report["gradeClass"] == "verygood"


def test_load_grades_rejects_missing_file(tmp_path) -> None:
    with pytest.raises(PoolConfigurationError) as excinfo:
        load_grades(tmp_path / "missing.json")
    assert "missing.json" in excinfo.value.context["path"]


def test_load_grades_rejects_empty_tiers(tmp_path) -> None:
    path = tmp_path / "grades.json"
    path.write_text('{"tiers": []}', encoding="utf-8")
    with pytest.raises(PoolConfigurationError):
        load_grades(path)
