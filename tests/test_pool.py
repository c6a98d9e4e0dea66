from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from lhc.core.domain import BinaryQuestion, MultiCheckQuestion, QuestionType, Severity
from lhc.core.exceptions import PoolConfigurationError
from lhc.core.pool import build_pool, load_bank, load_banks, normalize_severity


def _q(qid: str, sanction: str = "none") -> dict:
    return {
        "id": qid,
        "type": "yes_no",
        "text": f"Прашање {qid}?",
        "legal_reference": "Член 1",
        "weight": 1,
        "correct_answer": "yes",
        "sanction": sanction,
    }


def test_same_token_normalizes_differently_per_domain(make_pool) -> None:
    pool = make_pool(
        {"employment": [_q("e1", "sanction1")], "health-safety": [_q("h1", "sanction1")]},
        extras={
            "employment": {"severity_map": {"sanction1": "high"}},
            "health-safety": {"severity_map": {"sanction1": "low"}},
        },
    )
    assert pool.get("e1").normalized_severity is Severity.HIGH
    assert pool.get("h1").normalized_severity is Severity.LOW


def test_none_token_needs_no_mapping() -> None:
    assert normalize_severity("none", {}) is Severity.NONE


def test_unmapped_token_fails_pool_build(make_pool) -> None:
    with pytest.raises(PoolConfigurationError) as excinfo:
        make_pool({"gdpr": [_q("g1", "sanction9")]})
    assert excinfo.value.context == {"domain": "gdpr", "token": "sanction9"}


def test_questions_are_decorated_with_domain(make_pool) -> None:
    pool = make_pool({"gdpr": [_q("g1")]})
    q = pool.get("g1")
    assert q.source_category == "gdpr"
    assert q.source_category_name == "Домен gdpr"
    assert q.source_category_icon == "*"
    assert q.source_category_color == "#000000"
    assert q.kind is QuestionType.BINARY


def test_duplicate_question_ids_are_rejected(make_pool) -> None:
    with pytest.raises(PoolConfigurationError) as excinfo:
        make_pool({"a": [_q("q1")], "b": [_q("q1")]})
    assert excinfo.value.context["question_id"] == "q1"
    assert excinfo.value.context["first_domain"] == "a"


def test_duplicate_domains_are_rejected(make_bank) -> None:
    with pytest.raises(PoolConfigurationError):
        build_pool([make_bank("a", [_q("q1")]), make_bank("a", [_q("q2")])])


def test_stats_and_size(make_pool) -> None:
    pool = make_pool({"a": [_q("a1"), _q("a2")], "b": [_q("b1")], "c": []})
    assert len(pool) == 3
    assert pool.stats["total"] == 3
    assert dict(pool.stats["byCategory"]) == {"a": 2, "b": 1, "c": 0}
    assert [d.id for d in pool.domains] == ["a", "b", "c"]


def test_pool_keeps_bank_order(make_pool) -> None:
    pool = make_pool({"a": [_q("a1"), _q("a2")], "b": [_q("b1")]})
    assert [q.id for q in pool] == ["a1", "a2", "b1"]


def test_lookup_preserves_order_drops_unknown_and_repeats(make_pool) -> None:
    pool = make_pool({"a": [_q("a1"), _q("a2")], "b": [_q("b1")]})
    found = pool.lookup(["b1", "nope", "a2", "b1"])
    assert [q.id for q in found] == ["b1", "a2"]
    assert pool.lookup([]) == []
    assert pool.get("nope") is None


def test_pool_questions_are_immutable(make_pool) -> None:
    pool = make_pool({"a": [_q("a1")]})
    with pytest.raises(ValidationError):
        pool.get("a1").weight = 5
    with pytest.raises(TypeError):
        pool.stats["total"] = 0


def test_question_variant_is_picked_from_type(make_bank) -> None:
    bank = make_bank("hs", [
        _q("b1"),
        {
            "id": "m1",
            "type": "multi_check",
            "text": "Мерки?",
            "weight": 2,
            "checklist_items": [{"id": "m1a", "label": "Прва", "weight": 2}],
        },
    ])
    assert isinstance(bank.questions[0], BinaryQuestion)
    assert isinstance(bank.questions[1], MultiCheckQuestion)


@pytest.mark.parametrize(
    "question",
    [
        {"id": "x", "type": "essay", "text": "?", "weight": 1},
        {"id": "x", "type": "yes_no", "text": "?", "weight": 1},
        {"id": "x", "type": "yes_no", "text": "?", "weight": 0, "correct_answer": "yes"},
        {"id": "x", "type": "choice", "text": "?", "weight": 1, "options": []},
        {"id": "x", "type": "multi_check", "text": "?", "weight": 1, "checklist_items": []},
    ],
)
def test_malformed_questions_fail_validation(make_bank, question) -> None:
    with pytest.raises(ValidationError):
        make_bank("a", [question])


def _write_bank(path, domain_id: str, questions) -> None:
    path.write_text(
        json.dumps({"domain": {"id": domain_id, "name": domain_id}, "questions": questions}, ensure_ascii=False),
        encoding="utf-8",
    )


def test_load_banks_reads_every_file_in_name_order(tmp_path) -> None:
    _write_bank(tmp_path / "b.json", "second", [_q("s1")])
    _write_bank(tmp_path / "a.json", "first", [_q("f1")])
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    banks = load_banks(tmp_path)
    assert [b.domain.id for b in banks] == ["first", "second"]


def test_load_banks_rejects_missing_or_empty_directory(tmp_path) -> None:
    with pytest.raises(PoolConfigurationError):
        load_banks(tmp_path / "nowhere")
    with pytest.raises(PoolConfigurationError):
        load_banks(tmp_path)


def test_load_bank_wraps_validation_errors(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text('{"domain": {"id": "x", "name": "X"}, "questions": [{"id": "q"}]}', encoding="utf-8")
    with pytest.raises(PoolConfigurationError) as excinfo:
        load_bank(path)
    assert excinfo.value.context["path"] == str(path)
    assert isinstance(excinfo.value.__cause__, ValidationError)
