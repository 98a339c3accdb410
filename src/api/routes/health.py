"""Health endpoint."""

from fastapi import APIRouter, Depends

from api.deps import get_context
from paywatch.context import AppContext
from paywatch.models import utc_timestamp

router = APIRouter()


@router.get("/health")
async def health(ctx: AppContext = Depends(get_context)):
    secrets = ctx.config.secrets
    return {
        "status": "healthy",
        "timestamp": utc_timestamp(),
        "uptime": ctx.uptime(),
        "environment": {
            "stripe_configured": secrets.stripe_configured,
            "openai_configured": secrets.openai_configured,
            "email_configured": secrets.email_configured,
        },
    }
