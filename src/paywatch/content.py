"""Alert email content: language-model enrichment with a templated fallback."""

from __future__ import annotations

import json
import logging

import litellm

from paywatch.logbuffer import LogBuffer
from paywatch.models import AlertContent, FailedPayment

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """Generate a professional email alert for a failed payment with the following details:

Customer: {name}
Email: {email}
Amount: ${amount}
Currency: {currency}
Failure Code: {code}
Failure Message: {message}
Payment Method: {method}

Please create:
1. A clear subject line
2. A professional email body that includes next steps
3. Keep it concise but informative

Format as JSON with "subject" and "body" fields."""

FALLBACK_BODY = """A payment has failed in your Stripe account.

Details:
- Customer: {name} ({email})
- Amount: ${amount} {currency}
- Failure Reason: {message}
- Failure Code: {code}
- Payment Method: {method}

Next Steps:
1. Review the failure reason above
2. Contact the customer if needed
3. Check your Stripe dashboard for more details

This is an automated alert from your Stripe monitoring system."""


def _fields(payment: FailedPayment) -> dict[str, str]:
    return {
        "name": payment.customer_name,
        "email": payment.customer_email,
        "amount": payment.formatted_amount,
        "currency": payment.currency_code,
        "code": payment.failure_code_text,
        "message": payment.failure_message_text,
        "method": payment.payment_method_text,
    }


def build_prompt(payment: FailedPayment) -> str:
    return PROMPT_TEMPLATE.format(**_fields(payment))


def fallback_content(payment: FailedPayment) -> AlertContent:
    """Offline alert text built only from the payment's own fields."""
    sender = (payment.customer and payment.customer.email) or "Unknown Customer"
    return AlertContent(
        subject=f"🚨 Payment Failed - ${payment.formatted_amount} from {sender}",
        body=FALLBACK_BODY.format(**_fields(payment)),
    )


def parse_content(text: str | None) -> AlertContent:
    """Read {"subject", "body"} out of a model reply, tolerating surrounding prose."""
    if not text:
        raise ValueError("Empty response from language model")
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        raise ValueError("No JSON object found in language model response")
    data = json.loads(text[start:end + 1])
    subject, body = data.get("subject"), data.get("body")
    if not isinstance(subject, str) or not isinstance(body, str):
        raise ValueError("Language model response lacks string 'subject' and 'body'")
    return AlertContent(subject=subject, body=body)


class AlertContentGenerator:
    def __init__(
        self,
        logs: LogBuffer,
        model: str = "gpt-3.5-turbo",
        max_tokens: int = 500,
        api_key: str | None = None,
    ) -> None:
        self.logs = logs
        self.model = model
        self.max_tokens = max_tokens
        self.api_key = api_key or None

    async def generate(self, payment: FailedPayment) -> AlertContent:
        content, _ = await self.generate_with_source(payment)
        return content

    async def generate_with_source(self, payment: FailedPayment) -> tuple[AlertContent, bool]:
        """Return (content, enriched). Never raises; failures fall back to the template."""
        try:
            response = await litellm.acompletion(
                model=self.model,
                messages=[{"role": "user", "content": build_prompt(payment)}],
                max_tokens=self.max_tokens,
                api_key=self.api_key,
            )
            return parse_content(response.choices[0].message.content), True
        except Exception as e:
            self.logs.error("Failed to generate email content with language model", str(e))
            return fallback_content(payment), False
