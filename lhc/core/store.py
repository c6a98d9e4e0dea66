# lhc/core/store.py
# Assessment persistence. Rows are only ever inserted and read back.
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from lhc.core.exceptions import AssessmentNotFoundError, PersistenceError
from lhc.models.assessment import LHCAssessment

logger = logging.getLogger(__name__)

GENERAL = "general"


def save_assessment(
    session: Session,
    *,
    user_id: str,
    answers: Dict[str, Any],
    question_ids: List[str],
    report: Dict[str, Any],
    company_size: Optional[str] = None,
    company_name: Optional[str] = None,
    category: str = GENERAL,
) -> LHCAssessment:
    row = LHCAssessment(
        user_id=user_id,
        category=category,
        company_size=company_size,
        company_name=company_name,
        answers=answers,
        selected_question_ids=list(question_ids),
        report=report,
    )
    try:
        session.add(row)
        session.commit()
        session.refresh(row)
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError("failed to store assessment", {"user_id": user_id, "error": str(e)}) from e

    logger.info("[store] saved assessment id=%s user=%s percentage=%s", row.id, user_id, report.get("percentage"))
    return row


def list_history(session: Session, user_id: str, limit: int = 10, category: str = GENERAL) -> List[LHCAssessment]:
    """Most recent first."""
    stmt = (
        select(LHCAssessment)
        .where(LHCAssessment.user_id == user_id, LHCAssessment.category == category)
        .order_by(LHCAssessment.created_at.desc())
        .limit(limit)
    )
    try:
        return list(session.exec(stmt).all())
    except SQLAlchemyError as e:
        raise PersistenceError("failed to read assessment history", {"user_id": user_id, "error": str(e)}) from e


def get_assessment(session: Session, assessment_id: str, user_id: str) -> LHCAssessment:
    try:
        row = session.get(LHCAssessment, assessment_id)
    except SQLAlchemyError as e:
        raise PersistenceError("failed to read assessment", {"assessment_id": assessment_id, "error": str(e)}) from e
    # scoped to the owner: someone else's id looks the same as a missing one
    if row is None or row.user_id != user_id:
        raise AssessmentNotFoundError("assessment not found", {"assessment_id": assessment_id})
    return row


__all__ = ["GENERAL", "save_assessment", "list_history", "get_assessment"]
