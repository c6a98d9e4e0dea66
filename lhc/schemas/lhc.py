# lhc/schemas/lhc.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from lhc.core.domain import ChoiceQuestion, MultiCheckQuestion
from lhc.core.pool import AnyQuestion


class EvaluateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    answers: Dict[str, Any] = Field(default_factory=dict)
    question_ids: List[str] = Field(default_factory=list, alias="questionIds")
    company_size: Optional[str] = Field(default=None, alias="companySize")
    company_name: Optional[str] = Field(default=None, alias="companyName")


class OptionView(BaseModel):
    value: str
    text: str


class ChecklistItemView(BaseModel):
    id: str
    label: str


class QuestionView(BaseModel):
    """What the client sees: never the correct answer, option flags or item weights."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str
    legal_reference: str = Field(serialization_alias="legalReference")
    type: str
    options: Optional[List[OptionView]] = None
    checklist_items: Optional[List[ChecklistItemView]] = Field(default=None, serialization_alias="checklistItems")
    source_category: str = Field(serialization_alias="sourceCategory")
    source_category_name: str = Field(serialization_alias="sourceCategoryName")
    source_category_icon: str = Field(serialization_alias="sourceCategoryIcon")
    source_category_color: str = Field(serialization_alias="sourceCategoryColor")

    @classmethod
    def from_question(cls, q: AnyQuestion) -> "QuestionView":
        options = None
        items = None
        if isinstance(q, ChoiceQuestion):
            options = [OptionView(value=o.value, text=o.text) for o in q.options]
        elif isinstance(q, MultiCheckQuestion):
            items = [ChecklistItemView(id=i.id, label=i.label) for i in q.checklist_items]
        return cls(
            id=q.id,
            text=q.text,
            legal_reference=q.legal_reference,
            type=q.type,
            options=options,
            checklist_items=items,
            source_category=q.source_category,
            source_category_name=q.source_category_name,
            source_category_icon=q.source_category_icon,
            source_category_color=q.source_category_color,
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
