# lhc/routers/diag.py
from fastapi import APIRouter, Depends

from lhc.core.pool import QuestionPool, get_pool

router = APIRouter(prefix="/_diag", tags=["diag"])


@router.get("/ping")
def diag_ping():
    return {"ok": True, "scope": "/_diag"}


@router.get("/pool")
def diag_pool(pool: QuestionPool = Depends(get_pool)):
    banks = [
        {
            "id": bank.domain.id,
            "name": bank.domain.name,
            "questions": len(bank.questions),
            "severityMap": {k: v.value for k, v in bank.severity_map.items()},
            "sizeTiers": sorted(bank.sanction_tiers),
        }
        for bank in pool.banks.values()
    ]
    return {
        "ok": True,
        "total": pool.stats["total"],
        "byCategory": dict(pool.stats["byCategory"]),
        "banks": banks,
    }
