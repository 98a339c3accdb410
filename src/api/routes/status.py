"""GET / service descriptor."""

from fastapi import APIRouter, Depends

from api.deps import get_context
from paywatch.context import AppContext

router = APIRouter()

ENDPOINTS = [
    "GET / - This status page",
    "GET /health - Health check",
    "GET /logs - View recent logs",
    "POST /test - Test email alerts",
    "POST /webhook - Stripe webhook endpoint",
]


@router.get("/")
async def status(ctx: AppContext = Depends(get_context)):
    last = ctx.logs.last()
    return {
        "status": "active",
        "service": "Stripe Failed Payment Monitor",
        "endpoints": ENDPOINTS,
        "lastActivity": last.timestamp if last else "No activity yet",
    }
