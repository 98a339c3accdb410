"""POST /test — push a synthetic failed payment through the alert pipeline."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.deps import get_context
from paywatch.context import AppContext
from paywatch.models import manual_test_payment

router = APIRouter()


@router.post("/test")
async def trigger_test_alert(ctx: AppContext = Depends(get_context)):
    ctx.logs.info("Manual test triggered")
    payment = manual_test_payment()
    try:
        result = await ctx.dispatcher.dispatch(payment)
    except Exception as e:
        ctx.logs.error("Test failed", str(e))
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})

    return {
        "success": result.success,
        "message": "Test email sent successfully!" if result.success else "Test email failed to send",
        "testPayment": payment.to_stripe_dict(),
    }
