from fastapi import APIRouter, Depends

from lhc.core.pool import QuestionPool, get_pool
from lhc.core.settings import settings

router = APIRouter(prefix="", tags=["health"])


@router.get("/healthz")
def health(pool: QuestionPool = Depends(get_pool)):
    # a pool that failed to build surfaces here as a 500
    return {"ok": True, "service": settings.PROJECT_NAME, "version": settings.VERSION, "questions": len(pool)}
