# lhc/routers/lhc.py
# General LHC: random questions from every domain bank, evaluation and
# the caller's stored assessments.
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from sqlmodel import Session

from lhc.core.db import get_session
from lhc.core.evaluator import ComplianceEvaluator
from lhc.core.exceptions import AssessmentValidationError
from lhc.core.pool import QuestionPool, get_pool
from lhc.core.report import GradeConfig, get_grades
from lhc.core.sampler import draw
from lhc.core.settings import settings
from lhc.core.store import get_assessment, list_history, save_assessment
from lhc.schemas.lhc import EvaluateRequest, QuestionView

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/general", tags=["lhc"])


def get_subject_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Caller identity, set by the upstream gateway after authentication."""
    uid = (x_user_id or "").strip()
    if not uid:
        raise HTTPException(status_code=401, detail="missing x-user-id")
    return uid


@router.get("/questions")
def get_questions(
    pool_size: int = Query(settings.DEFAULT_POOL_SIZE, ge=0, alias="poolSize"),
    pool: QuestionPool = Depends(get_pool),
):
    # oversized requests get at most the whole pool, capped at MAX_POOL_SIZE
    questions = draw(pool.questions, min(pool_size, settings.MAX_POOL_SIZE))
    logger.info("[questions] drew %d of %d", len(questions), len(pool))
    return {
        "ok": True,
        "data": {
            "questions": [QuestionView.from_question(q).to_payload() for q in questions],
            "totalPool": pool.stats["total"],
            "poolBreakdown": dict(pool.stats["byCategory"]),
        },
    }


@router.post("/evaluate")
def evaluate(
    payload: EvaluateRequest,
    user_id: str = Depends(get_subject_id),
    pool: QuestionPool = Depends(get_pool),
    grades: GradeConfig = Depends(get_grades),
    session: Session = Depends(get_session),
):
    if not payload.answers:
        raise AssessmentValidationError("Мора да одговорите на барем едно прашање", field="answers")
    if not payload.question_ids:
        raise AssessmentValidationError("Недостасуваат информации за прашањата", field="questionIds")

    # exact questions that were shown, re-resolved from their ids
    questions = pool.lookup(payload.question_ids)
    if not questions:
        raise AssessmentValidationError(
            "Не можат да се пронајдат прашањата",
            field="questionIds",
            context={"requested": len(payload.question_ids)},
        )

    company_size = payload.company_size or settings.DEFAULT_COMPANY_SIZE
    company_name = payload.company_name or settings.DEFAULT_COMPANY_NAME

    evaluator = ComplianceEvaluator.for_pool(
        pool, grades, company_size=company_size, company_name=company_name
    )
    report = evaluator.evaluate(payload.answers, questions)

    row = save_assessment(
        session,
        user_id=user_id,
        answers=payload.answers,
        question_ids=payload.question_ids,
        report=report,
        company_size=company_size,
        company_name=company_name,
    )
    return {"ok": True, "data": row.to_dict()}


@router.get("/history")
def history(
    user_id: str = Depends(get_subject_id),
    session: Session = Depends(get_session),
):
    rows = list_history(session, user_id, limit=settings.HISTORY_LIMIT)
    return {"ok": True, "data": [r.to_dict() for r in rows]}


@router.get("/assessment/{assessment_id}")
def assessment_by_id(
    assessment_id: str,
    user_id: str = Depends(get_subject_id),
    session: Session = Depends(get_session),
):
    row = get_assessment(session, assessment_id, user_id)
    return {"ok": True, "data": row.to_dict()}
