"""POST /webhook — Stripe event receiver.

The response only acknowledges receipt. Whether the alert email went out is
recorded in the log buffer, not returned to the processor.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from api.deps import get_context
from paywatch.context import AppContext
from paywatch.errors import WebhookParseError
from paywatch.models import FailedPayment, parse_webhook_event

router = APIRouter()


@router.post("/webhook")
async def receive_event(request: Request, ctx: AppContext = Depends(get_context)):
    raw = await request.body()
    try:
        event = parse_webhook_event(raw)
        ctx.logs.info(f"Received Stripe event: {event.type}")

        if event.type in ctx.config.alerts.failure_events:
            payment = FailedPayment.from_stripe_object(event.require_object())
            ctx.logs.warning("Payment failure detected", payment.log_summary())
            await ctx.dispatcher.dispatch(payment)
    except WebhookParseError as e:
        ctx.logs.error("Webhook processing failed", str(e))
        return PlainTextResponse(f"Webhook Error: {e}", status_code=400)

    return {"received": True}
