# lhc/core/evaluator.py
# Hybrid evaluator for the general LHC: scores questions of every type from
# every domain bank and aggregates them into one graded report.
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence

from lhc.core.domain import (
    SKIP_ANSWERS,
    BinaryQuestion,
    ChoiceQuestion,
    DomainBank,
    MultiCheckQuestion,
    SanctionTier,
    Severity,
    SourceDomain,
)
from lhc.core.pool import AnyQuestion, QuestionPool
from lhc.core.report import GradeConfig, RawResult, build_report, percent

logger = logging.getLogger(__name__)

_ALIASES = {"true": "yes", "false": "no", True: "yes", False: "no"}
_PARTIAL = ("partial", "partially")

_NO_SANCTION_TEXT = " Иако не се предвидени прекршочни одредби, ваквото постапување може да има штетни последици."
_GENERIC_SANCTION_TEXT = {
    Severity.HIGH: " Постои ризик од значителни казни согласно законската регулатива.",
    Severity.MEDIUM: " Постои ризик од умерени казни согласно законската регулатива.",
    Severity.LOW: " Постои ризик од помали казни или опомени.",
}


@dataclass(frozen=True)
class Finding:
    score: float
    is_compliant: bool
    message: str


def _normalize_binary(value: Any) -> Any:
    if isinstance(value, (bool, str)):
        return _ALIASES.get(value, value)
    return value


def _is_skipped(answer: Any) -> bool:
    return answer is None or answer == "" or (isinstance(answer, str) and answer in SKIP_ANSWERS)


class ComplianceEvaluator:
    """Scores assessments against a fixed set of domains and grade tiers.

    Every ``evaluate`` call starts from empty totals, so one instance can be reused.
    """

    def __init__(
        self,
        domains: Sequence[SourceDomain],
        grades: GradeConfig,
        company_size: Optional[str] = None,
        company_name: str = "вашата компанија",
        sanction_tables: Optional[Mapping[str, Mapping[str, Mapping[str, SanctionTier]]]] = None,
        category_names: Optional[Mapping[str, Mapping[str, str]]] = None,
    ):
        self.domains = list(domains)
        self.grades = grades
        self.company_size = company_size or "micro"
        self.company_name = company_name
        # domain id -> size tier -> token -> penalty
        self.sanction_tables = sanction_tables or {}
        # domain id -> category -> display name
        self.category_names = category_names or {}

    @classmethod
    def for_pool(cls, pool: QuestionPool, grades: GradeConfig, **kwargs: Any) -> "ComplianceEvaluator":
        banks: Sequence[DomainBank] = list(pool.banks.values())
        return cls(
            pool.domains,
            grades,
            sanction_tables={b.domain.id: b.sanction_tiers for b in banks if b.sanction_tiers},
            category_names={b.domain.id: b.category_names for b in banks},
            **kwargs,
        )

    # ------------------------- aggregation -------------------------
    def evaluate(self, answers: Mapping[str, Any], questions: Iterable[AnyQuestion]) -> Dict[str, Any]:
        res = RawResult()
        for dom in self.domains:
            res.breakdown[dom.id] = {
                "name": dom.name,
                "icon": dom.icon,
                "score": 0,
                "maxScore": 0,
                "violationCount": 0,
                "totalAnswered": 0,
            }

        answered = 0
        for question in questions:
            answer = answers.get(question.id)
            # N/A and unanswered items count neither for nor against the subject
            if _is_skipped(answer):
                continue

            cat = res.breakdown.setdefault(question.source_category, {
                "name": question.source_category_name,
                "icon": question.source_category_icon,
                "score": 0,
                "maxScore": 0,
                "violationCount": 0,
                "totalAnswered": 0,
            })
            answered += 1
            cat["totalAnswered"] += 1
            cat["maxScore"] += question.weight
            res.max_score += question.weight

            finding = self.evaluate_question(question, answer)

            if not finding.is_compliant:
                res.violations.append({
                    "questionId": question.id,
                    "questionText": question.text,
                    "legalReference": question.legal_reference,
                    "domainCategory": self._category_name(question),
                    "sourceCategory": question.source_category,
                    "sourceCategoryName": question.source_category_name,
                    "sourceCategoryIcon": question.source_category_icon,
                    "finding": finding.message,
                    "severity": question.normalized_severity.value,
                })
                cat["violationCount"] += 1

                if question.recommendation:
                    res.recommendations.append({
                        "text": question.recommendation,
                        "sourceCategory": question.source_category,
                        "sourceCategoryName": question.source_category_name,
                    })

            res.score += finding.score
            cat["score"] += finding.score

        for cat in res.breakdown.values():
            cat["percentage"] = percent(cat["score"], cat["maxScore"])

        report = build_report(res, self.company_name, self.grades)
        logger.info(
            "[evaluate] answered=%d score=%s/%s percentage=%d violations=%d",
            answered, res.score, res.max_score, report["percentage"], len(res.violations),
        )
        return report

    def _category_name(self, question: AnyQuestion) -> str:
        names = self.category_names.get(question.source_category) or {}
        return names.get(question.category, question.category)

    # ------------------------- per-type rules -------------------------
    def evaluate_question(self, question: AnyQuestion, answer: Any) -> Finding:
        if isinstance(question, MultiCheckQuestion):
            return self.score_multi_check(question, answer)
        if isinstance(question, ChoiceQuestion):
            return self.score_choice(question, answer)
        if isinstance(question, BinaryQuestion):
            return self.score_binary(question, answer)
        raise TypeError(f"unsupported question type: {type(question).__name__}")

    def score_binary(self, question: BinaryQuestion, answer: Any) -> Finding:
        weight, article = question.weight, question.legal_reference
        given = _normalize_binary(answer)
        correct = _normalize_binary(question.correct_answer)

        if given in ("yes", "no"):
            if given == correct:
                return Finding(weight, True, f"✓ Постапувате во согласност со {article}.")
            if given == "yes":
                return Finding(-weight, False, f"✗ Постапувањето е спротивно на {article}.{self.sanction_text(question)}")
            return Finding(-weight, False, f"✗ Постапувањето не е во согласност со {article}.{self.sanction_text(question)}")

        if given in _PARTIAL:
            return Finding(-(weight * 0.5), False, f"⚠ Делумно постапување спротивно на {article}.{self.sanction_text(question)}")

        # Unrecognised literal: penalised lightly instead of rejected.
        # Note the CHOICE rule below does not penalise an unknown value; the
        # two rules differ on purpose and change real scores, keep both.
        return Finding(-(weight * 0.25), False, f"⚠ Неодредено постапување во однос на {article}.")

    def score_choice(self, question: ChoiceQuestion, answer: Any) -> Finding:
        selected = next((opt for opt in question.options if opt.value == answer), None)
        if selected is None:
            # Neutral: adds nothing to the score although the weight is
            # already in maxScore.
            return Finding(0, False, "Невалиден одговор")

        if selected.is_correct:
            return Finding(question.weight, True, f"✓ Постапувате во согласност со {question.legal_reference}.")
        return Finding(
            -question.weight,
            False,
            f"✗ Постапувањето не е во согласност со {question.legal_reference}.{self.sanction_text(question)}",
        )

    def score_multi_check(self, question: MultiCheckQuestion, answer: Any) -> Finding:
        if not isinstance(answer, Mapping):
            return Finding(0, False, "Невалиден формат на одговор")

        total_weight = 0.0
        earned_weight = 0.0
        unchecked = []
        for item in question.checklist_items:
            total_weight += item.weight
            if answer.get(item.id):
                earned_weight += item.weight
            else:
                unchecked.append(item.label)

        fully = not unchecked
        # unchecked items cost half their weight, not just zero
        score = earned_weight - (total_weight - earned_weight) * 0.5
        ratio = earned_weight / total_weight if total_weight > 0 else 0

        if fully:
            message = f"✓ Сите мерки се превземени во согласност со {question.legal_reference}."
        elif ratio >= 0.5:
            message = f"⚠ Делумно превземени мерки. Недостасуваат: {len(unchecked)} мерки."
        else:
            message = f"✗ Повеќето мерки не се превземени. {self.sanction_text(question)}"
        return Finding(score, fully, message)

    # ------------------------- sanction clause -------------------------
    def sanction_text(self, question: AnyQuestion) -> str:
        level = question.normalized_severity
        if level == Severity.NONE:
            return _NO_SANCTION_TEXT

        tiers = self.sanction_tables.get(question.source_category) or {}
        sanction = (tiers.get(self.company_size) or {}).get(question.sanction)
        if sanction is not None:
            return f" Можна санкција: {sanction.employer} за работодавачот и {sanction.responsible} за одговорното лице."

        return _GENERIC_SANCTION_TEXT.get(level, "")


__all__ = ["Finding", "ComplianceEvaluator"]
