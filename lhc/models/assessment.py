# lhc/models/assessment.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy import DateTime
from sqlmodel import JSON, Column, Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # sqlite hands timestamps back without tzinfo
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class LHCAssessment(SQLModel, table=True):
    """One finished assessment. Insert-only: a retake is a new row."""

    __tablename__ = "lhc_assessments"

    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True, max_length=32)
    user_id: str = Field(index=True)
    category: str = Field(default="general", index=True)
    company_size: Optional[str] = None
    company_name: Optional[str] = None

    answers: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    selected_question_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    report: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "category": self.category,
            "answers": self.answers,
            "companySize": self.company_size,
            "companyName": self.company_name,
            "selectedQuestionIds": self.selected_question_ids,
            **(self.report or {}),
            "createdAt": _as_utc(self.created_at).isoformat() if self.created_at else None,
        }
