"""Process-lifetime wiring of config, log buffer, generator and dispatcher."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from paywatch.config import AppConfig
from paywatch.content import AlertContentGenerator
from paywatch.dispatcher import AlertDispatcher
from paywatch.logbuffer import LogBuffer
from paywatch.mailer import Mailer, SmtpMailer


@dataclass
class AppContext:
    config: AppConfig
    logs: LogBuffer
    generator: AlertContentGenerator
    dispatcher: AlertDispatcher
    started_at: float = field(default_factory=time.monotonic)

    def uptime(self) -> float:
        return time.monotonic() - self.started_at


def build_context(config: AppConfig, mailer: Mailer | None = None) -> AppContext:
    secrets = config.secrets
    logs = LogBuffer(capacity=config.logs.capacity)
    generator = AlertContentGenerator(
        logs,
        model=config.alerts.model,
        max_tokens=config.alerts.max_tokens,
        api_key=secrets.openai_api_key,
    )
    if mailer is None:
        mailer = SmtpMailer(
            host=config.smtp.host,
            port=config.smtp.port,
            username=secrets.alert_email,
            password=secrets.email_password,
            starttls=config.smtp.starttls,
            timeout=config.smtp.timeout,
        )
    dispatcher = AlertDispatcher(
        generator, mailer, logs, sender=secrets.sender, recipient=secrets.recipient,
    )
    return AppContext(config=config, logs=logs, generator=generator, dispatcher=dispatcher)
