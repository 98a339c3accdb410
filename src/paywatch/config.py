"""Load configuration from config/default.toml and the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomli
from pydantic import BaseModel

from paywatch.errors import ConfigError
from paywatch.models import FAILURE_EVENT_TYPES

CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "config"

DEFAULT_SENDER = "stripe-monitor@yourdomain.com"
DEFAULT_RECIPIENT = "admin@yourdomain.com"


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000


class AlertsConfig(BaseModel):
    model: str = "gpt-3.5-turbo"
    max_tokens: int = 500
    failure_events: list[str] = list(FAILURE_EVENT_TYPES)


class SmtpConfig(BaseModel):
    host: str = "smtp.gmail.com"
    port: int = 587
    starttls: bool = True
    timeout: float = 30.0


class LogsConfig(BaseModel):
    capacity: int = 100
    recent_limit: int = 50


class Secrets(BaseModel):
    stripe_secret_key: str = ""
    openai_api_key: str = ""
    alert_email: str = ""
    email_password: str = ""
    alert_email_from: str = ""
    alert_email_to: str = ""

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key)

    @property
    def openai_configured(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def email_configured(self) -> bool:
        return bool(self.alert_email)

    @property
    def sender(self) -> str:
        return self.alert_email_from or self.alert_email or DEFAULT_SENDER

    @property
    def recipient(self) -> str:
        return self.alert_email_to or self.alert_email or DEFAULT_RECIPIENT


class AppConfig(BaseModel):
    server: ServerConfig = ServerConfig()
    alerts: AlertsConfig = AlertsConfig()
    smtp: SmtpConfig = SmtpConfig()
    logs: LogsConfig = LogsConfig()
    secrets: Secrets = Secrets()

    def masked(self) -> dict[str, Any]:
        data = self.model_dump()
        data["secrets"] = {k: ("***" if v else "") for k, v in data["secrets"].items()}
        return data


_SECRET_ENV = {
    "stripe_secret_key": "STRIPE_SECRET_KEY",
    "openai_api_key": "OPENAI_API_KEY",
    "alert_email": "ALERT_EMAIL",
    "email_password": "EMAIL_PASSWORD",
    "alert_email_from": "ALERT_EMAIL_FROM",
    "alert_email_to": "ALERT_EMAIL_TO",
}


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        try:
            return tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def load_config(config_dir: Path | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    d = config_dir or CONFIG_DIR
    env = os.environ if env is None else env
    raw: dict[str, Any] = {}

    default_path = d / "default.toml"
    if default_path.exists():
        data = _load_toml(default_path)
        raw["server"] = data.get("server", {})
        raw["alerts"] = data.get("alerts", {})
        raw["smtp"] = data.get("smtp", {})
        raw["logs"] = data.get("logs", {})

    port = env.get("PORT")
    if port:
        try:
            raw.setdefault("server", {})["port"] = int(port)
        except ValueError as e:
            raise ConfigError(f"PORT must be an integer, got {port!r}") from e

    raw["secrets"] = {field: env.get(name, "") for field, name in _SECRET_ENV.items()}
    return AppConfig(**raw)
