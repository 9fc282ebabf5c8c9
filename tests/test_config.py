from __future__ import annotations

import pytest

from academy_client.config import ConfigError, load_config

ENV_KEYS = [
    "ACADEMY_ENV",
    "ACADEMY_API_URL",
    "ACADEMY_API_URL_DEV",
    "ACADEMY_API_URL_STAGING",
    "ACADEMY_TIMEOUT_SECONDS",
    "ACADEMY_RETRY_ATTEMPTS",
    "ACADEMY_RETRY_DELAY_SECONDS",
    "ACADEMY_DEBOUNCE_MS",
    "ACADEMY_BRANCH_LOOKUP_DEBOUNCE_MS",
    "ACADEMY_VERIFY_SSL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        # registers the key so values loaded from .env files are undone too
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_defaults_match_dashboard_behaviour(monkeypatch) -> None:
    monkeypatch.setenv("ACADEMY_API_URL", "https://api.academy.test/")

    config = load_config()

    assert config.api_base_url == "https://api.academy.test"
    assert config.env_name == "dev"
    assert config.timeout_seconds is None
    assert config.retry_attempts == 3
    assert config.retry_delay_seconds == 1.0
    assert config.debounce_ms == 300
    assert config.branch_lookup_debounce_ms == 800
    assert config.verify_ssl is True


def test_environment_specific_url_wins(monkeypatch) -> None:
    monkeypatch.setenv("ACADEMY_ENV", "staging")
    monkeypatch.setenv("ACADEMY_API_URL", "https://fallback.test")
    monkeypatch.setenv("ACADEMY_API_URL_STAGING", "https://staging.test")

    assert load_config().api_base_url == "https://staging.test"


def test_missing_url_is_reported(monkeypatch) -> None:
    with pytest.raises(ConfigError, match="ACADEMY_API_URL"):
        load_config()


def test_env_file_is_loaded(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("ACADEMY_API_URL=https://from-file.test\nACADEMY_TIMEOUT_SECONDS=12.5\n", encoding="utf-8")

    config = load_config(str(env_file))

    assert config.api_base_url == "https://from-file.test"
    assert config.timeout_seconds == 12.5


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("ACADEMY_RETRY_ATTEMPTS", "0"),
        ("ACADEMY_RETRY_ATTEMPTS", "three"),
        ("ACADEMY_RETRY_DELAY_SECONDS", "-1"),
        ("ACADEMY_TIMEOUT_SECONDS", "0"),
        ("ACADEMY_DEBOUNCE_MS", "-5"),
    ],
)
def test_invalid_values_name_the_variable(monkeypatch, key: str, value: str) -> None:
    monkeypatch.setenv("ACADEMY_API_URL", "https://api.academy.test")
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError, match=key):
        load_config()


def test_verify_ssl_can_be_disabled(monkeypatch) -> None:
    monkeypatch.setenv("ACADEMY_API_URL", "https://api.academy.test")
    monkeypatch.setenv("ACADEMY_VERIFY_SSL", "false")

    assert load_config().verify_ssl is False
