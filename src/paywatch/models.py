"""Data models for paywatch."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from paywatch.errors import WebhookParseError

UNKNOWN = "Unknown"
NOT_PROVIDED = "Not provided"
DEFAULT_CURRENCY = "USD"
MAX_MINOR_UNITS = 10**15

FAILURE_EVENT_TYPES = (
    "payment_intent.payment_failed",
    "invoice.payment_failed",
    "charge.failed",
)


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z."""
    now = now or datetime.now(UTC)
    return now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ── Log Buffer Models ──

class LogLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    level: LogLevel
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "message": self.message,
            "data": self.data,
        }


# ── Payment Models ──

@dataclass
class Customer:
    name: str | None = None
    email: str | None = None
    id: str | None = None


def _text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _minor_units(value: Any) -> int:
    """Coerce a payload amount to minor units; unusable values become 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        value = int(round(value))
    elif isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            return 0
    if not isinstance(value, int) or abs(value) > MAX_MINOR_UNITS:
        return 0
    return value


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


@dataclass
class FailedPayment:
    amount: int = 0
    currency: str | None = None
    failure_code: str | None = None
    failure_message: str | None = None
    customer: Customer | None = None
    payment_method_type: str | None = None

    @property
    def formatted_amount(self) -> str:
        whole, cents = divmod(abs(self.amount), 100)
        sign = "-" if self.amount < 0 else ""
        return f"{sign}{whole}.{cents:02d}"

    @property
    def customer_name(self) -> str:
        return (self.customer and self.customer.name) or UNKNOWN

    @property
    def customer_email(self) -> str:
        return (self.customer and self.customer.email) or NOT_PROVIDED

    @property
    def currency_code(self) -> str:
        return self.currency.upper() if self.currency else DEFAULT_CURRENCY

    @property
    def failure_code_text(self) -> str:
        return self.failure_code or UNKNOWN

    @property
    def failure_message_text(self) -> str:
        return self.failure_message or NOT_PROVIDED

    @property
    def payment_method_text(self) -> str:
        return self.payment_method_type or UNKNOWN

    @classmethod
    def from_stripe_object(cls, obj: dict[str, Any]) -> FailedPayment:
        """Build a record from a payment intent, charge or invoice payload."""
        last_error = _mapping(obj.get("last_payment_error"))
        billing = _mapping(obj.get("billing_details"))

        raw_customer = obj.get("customer")
        customer = None
        if isinstance(raw_customer, dict):
            customer = Customer(
                name=_text(raw_customer.get("name")),
                email=_text(raw_customer.get("email")),
                id=_text(raw_customer.get("id")),
            )
        elif isinstance(raw_customer, str) and raw_customer:
            customer = Customer(id=raw_customer)

        name = _text(obj.get("customer_name")) or _text(billing.get("name"))
        email = _text(obj.get("customer_email")) or _text(billing.get("email"))
        if name or email:
            customer = customer or Customer()
            customer.name = customer.name or name
            customer.email = customer.email or email

        amount = obj.get("amount")
        if amount is None:
            amount = obj.get("amount_due")

        method = (
            _text(_mapping(obj.get("payment_method_details")).get("type"))
            or _text(_mapping(last_error.get("payment_method")).get("type"))
        )

        return cls(
            amount=_minor_units(amount),
            currency=_text(obj.get("currency")),
            failure_code=_text(obj.get("failure_code")) or _text(last_error.get("code")),
            failure_message=_text(obj.get("failure_message")) or _text(last_error.get("message")),
            customer=customer,
            payment_method_type=method,
        )

    def log_summary(self) -> dict[str, Any]:
        """Amount, customer and failure code for the failure-detected log entry."""
        customer: str | dict[str, str | None] | None = None
        if self.customer is not None:
            if self.customer.name or self.customer.email:
                customer = {"name": self.customer.name, "email": self.customer.email}
            else:
                customer = self.customer.id
        return {"amount": self.amount, "customer": customer, "failure_code": self.failure_code}

    def to_stripe_dict(self) -> dict[str, Any]:
        customer = None
        if self.customer is not None:
            customer = {"name": self.customer.name, "email": self.customer.email}
        return {
            "amount": self.amount,
            "currency": self.currency,
            "failure_code": self.failure_code,
            "failure_message": self.failure_message,
            "customer": customer,
            "payment_method_details": {"type": self.payment_method_type},
        }


def manual_test_payment() -> FailedPayment:
    """Synthetic declined-card payment sent by the manual test trigger."""
    return FailedPayment(
        amount=2999,
        currency="usd",
        failure_code="card_declined",
        failure_message="Your card was declined.",
        customer=Customer(name="Test Customer", email="test@example.com"),
        payment_method_type="card",
    )


# ── Alert Models ──

@dataclass(frozen=True)
class AlertContent:
    subject: str
    body: str

    @property
    def html_body(self) -> str:
        return self.body.replace("\n", "<br>")


@dataclass
class DispatchResult:
    success: bool
    message_id: str | None = None
    error: str | None = None
    content: AlertContent | None = None
    enriched: bool = False


# ── Webhook Models ──

@dataclass
class WebhookEvent:
    type: str
    object: dict[str, Any] | None = None
    id: str | None = None

    def require_object(self) -> dict[str, Any]:
        if self.object is None:
            raise WebhookParseError(f"Event {self.type} has no data.object")
        return self.object


def parse_webhook_event(raw: bytes | str) -> WebhookEvent:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise WebhookParseError(f"Body is not valid UTF-8: {e}") from e
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise WebhookParseError(str(e)) from e

    if not isinstance(payload, dict):
        raise WebhookParseError("Event body must be a JSON object")
    event_type = payload.get("type")
    if not isinstance(event_type, str):
        raise WebhookParseError("Event is missing a string 'type'")

    data = payload.get("data")
    if data is not None and not isinstance(data, dict):
        raise WebhookParseError("Event 'data' must be an object")
    obj = (data or {}).get("object")
    if obj is not None and not isinstance(obj, dict):
        raise WebhookParseError("Event 'data.object' must be an object")

    event_id = payload.get("id")
    return WebhookEvent(
        type=event_type,
        object=obj,
        id=event_id if isinstance(event_id, str) else None,
    )
