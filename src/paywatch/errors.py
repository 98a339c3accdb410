"""Exception types raised across paywatch."""

from __future__ import annotations


class PaywatchError(Exception):
    pass


class ConfigError(PaywatchError):
    pass


class WebhookParseError(PaywatchError, ValueError):
    """Inbound webhook body could not be read as an event envelope."""


class MailDeliveryError(PaywatchError):
    """Mail transport rejected or failed to submit a message."""
