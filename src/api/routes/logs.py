"""GET /logs — recent entries from the in-memory log buffer."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_context
from paywatch.context import AppContext

router = APIRouter()


@router.get("/logs")
async def recent_logs(
    limit: int | None = Query(None, ge=1),
    ctx: AppContext = Depends(get_context),
):
    if limit is not None and limit > ctx.logs.capacity:
        raise HTTPException(422, f"limit must be between 1 and {ctx.logs.capacity}")
    n = limit or ctx.config.logs.recent_limit
    return {
        "total": ctx.logs.count(),
        "logs": [e.to_dict() for e in ctx.logs.recent(n)],
    }
