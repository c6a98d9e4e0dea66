# lhc/core/domain.py
# Question / domain types for the LHC banks.
#
# Banks are JSON files; each question carries a bank-level `type` token
# (yes_no, true_false, choice, multi_check, ...). Pydantic picks the variant
# from that token, so a bank with an unknown type or a missing
# type-specific field fails at load time.
from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

SKIP_ANSWERS = ("not_applicable", "na")
BINARY_TYPES = ("yes_no", "yes_no_na", "yes_partial_no", "true_false")


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


class QuestionType(str, Enum):
    BINARY = "BINARY"
    CHOICE = "CHOICE"
    MULTI_CHECK = "MULTI_CHECK"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SourceDomain(_Frozen):
    id: str = Field(min_length=1)
    name: str
    icon: str = ""
    color: str = ""


class ChoiceOption(_Frozen):
    value: str
    text: str
    is_correct: bool = False


class ChecklistItem(_Frozen):
    id: str = Field(min_length=1)
    label: str
    weight: float = Field(gt=0)


class SanctionTier(_Frozen):
    employer: str
    responsible: str


class _QuestionBase(_Frozen):
    id: str = Field(min_length=1)
    category: str = ""
    text: str
    legal_reference: str = ""
    weight: float = Field(gt=0)
    sanction: str = "none"
    recommendation: Optional[str] = None

    # filled in by the pool
    source_category: str = ""
    source_category_name: str = ""
    source_category_icon: str = ""
    source_category_color: str = ""
    normalized_severity: Severity = Severity.NONE


class BinaryQuestion(_QuestionBase):
    type: Literal["yes_no", "yes_no_na", "yes_partial_no", "true_false"]
    correct_answer: Literal["yes", "no", "true", "false"]

    @property
    def kind(self) -> QuestionType:
        return QuestionType.BINARY


class ChoiceQuestion(_QuestionBase):
    type: Literal["choice"]
    options: Tuple[ChoiceOption, ...] = Field(min_length=1)

    @property
    def kind(self) -> QuestionType:
        return QuestionType.CHOICE


class MultiCheckQuestion(_QuestionBase):
    type: Literal["multi_check"]
    checklist_items: Tuple[ChecklistItem, ...] = Field(min_length=1)

    @property
    def kind(self) -> QuestionType:
        return QuestionType.MULTI_CHECK


Question = Annotated[
    Union[BinaryQuestion, ChoiceQuestion, MultiCheckQuestion],
    Field(discriminator="type"),
]


class DomainBank(_Frozen):
    """One independently authored bank: metadata, vocabulary mapping and questions."""

    domain: SourceDomain
    # domain token -> normalized severity ("none" is implicit)
    severity_map: Dict[str, Severity] = Field(default_factory=dict)
    # company size tier -> domain token -> concrete penalty
    sanction_tiers: Dict[str, Dict[str, SanctionTier]] = Field(default_factory=dict)
    category_names: Dict[str, str] = Field(default_factory=dict)
    questions: List[Question] = Field(default_factory=list)


__all__ = [
    "SKIP_ANSWERS",
    "BINARY_TYPES",
    "Severity",
    "QuestionType",
    "SourceDomain",
    "ChoiceOption",
    "ChecklistItem",
    "SanctionTier",
    "BinaryQuestion",
    "ChoiceQuestion",
    "MultiCheckQuestion",
    "Question",
    "DomainBank",
]
