"""Configuration loading tests."""

import pytest

from paywatch.config import DEFAULT_RECIPIENT, DEFAULT_SENDER, AppConfig, Secrets, load_config
from paywatch.errors import ConfigError


def test_defaults_without_file(tmp_path):
    config = load_config(tmp_path, env={})
    assert config.server.port == 3000
    assert config.alerts.model == "gpt-3.5-turbo"
    assert config.alerts.max_tokens == 500
    assert config.logs.capacity == 100
    assert config.logs.recent_limit == 50
    assert set(config.alerts.failure_events) == {
        "payment_intent.payment_failed", "invoice.payment_failed", "charge.failed",
    }


def test_bundled_default_toml_loads():
    config = load_config(env={})
    assert config.smtp.host == "smtp.gmail.com"
    assert config.smtp.port == 587


def test_toml_values(tmp_path):
    (tmp_path / "default.toml").write_text(
        '[server]\nport = 8080\n[alerts]\nmodel = "gpt-4o-mini"\n[logs]\ncapacity = 10\n'
    )
    config = load_config(tmp_path, env={})
    assert config.server.port == 8080
    assert config.alerts.model == "gpt-4o-mini"
    assert config.logs.capacity == 10


def test_port_env_overrides_file(tmp_path):
    (tmp_path / "default.toml").write_text("[server]\nport = 8080\n")
    assert load_config(tmp_path, env={"PORT": "9000"}).server.port == 9000


def test_invalid_port(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path, env={"PORT": "abc"})


def test_invalid_toml(tmp_path):
    (tmp_path / "default.toml").write_text("[server\n")
    with pytest.raises(ConfigError):
        load_config(tmp_path, env={})


def test_secrets_from_env(tmp_path):
    config = load_config(tmp_path, env={
        "STRIPE_SECRET_KEY": "sk_test",
        "OPENAI_API_KEY": "",
        "ALERT_EMAIL": "ops@example.com",
        "EMAIL_PASSWORD": "pw",
    })
    s = config.secrets
    assert s.stripe_configured
    assert not s.openai_configured
    assert s.email_configured
    assert s.sender == "ops@example.com"
    assert s.recipient == "ops@example.com"


def test_sender_recipient_defaults():
    s = Secrets()
    assert s.sender == DEFAULT_SENDER
    assert s.recipient == DEFAULT_RECIPIENT


def test_distinct_sender_recipient():
    s = Secrets(alert_email="ops@example.com", alert_email_from="bot@example.com", alert_email_to="oncall@example.com")
    assert s.sender == "bot@example.com"
    assert s.recipient == "oncall@example.com"


def test_masked_hides_secret_values():
    config = AppConfig(secrets=Secrets(openai_api_key="sk-live-123"))
    masked = config.masked()
    assert masked["secrets"]["openai_api_key"] == "***"
    assert masked["secrets"]["stripe_secret_key"] == ""
    assert "sk-live-123" not in str(masked)
