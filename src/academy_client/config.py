from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TypeVar

from dotenv import load_dotenv


N = TypeVar("N", int, float)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    timeout_seconds: float | None = None
    retry_attempts: int = 3
    retry_delay_seconds: float = 1.0
    debounce_ms: int = 300
    branch_lookup_debounce_ms: int = 800
    verify_ssl: bool = True

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env(name: str) -> str:
    return (os.getenv(name) or "").strip()


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in TRUTHY


def _number(name: str, default: N, *, minimum: N, exclusive: bool = False) -> N:
    """Read ``name`` as the type of ``default`` and check it against ``minimum``."""
    raw = _env(name)
    if not raw:
        return default
    kind = type(default)
    try:
        value = kind(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid {name}: expected {kind.__name__}, got {raw!r}") from exc
    if value < minimum or (exclusive and value == minimum):
        bound = ">" if exclusive else ">="
        raise ConfigError(f"Invalid {name}: expected {bound} {minimum}, got {value}")
    return value


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = _env("ACADEMY_ENV") or "dev"
    api_base_url = _env(f"ACADEMY_API_URL_{env_name.upper()}") or _env("ACADEMY_API_URL")
    if not api_base_url:
        raise ConfigError("Missing required config values: ACADEMY_API_URL")

    # Unset means no client-side timeout at all.
    timeout_seconds: float | None = None
    if _env("ACADEMY_TIMEOUT_SECONDS"):
        timeout_seconds = _number("ACADEMY_TIMEOUT_SECONDS", 0.0, minimum=0.0, exclusive=True)

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
        retry_attempts=_number("ACADEMY_RETRY_ATTEMPTS", 3, minimum=1),
        retry_delay_seconds=_number("ACADEMY_RETRY_DELAY_SECONDS", 1.0, minimum=0.0),
        debounce_ms=_number("ACADEMY_DEBOUNCE_MS", 300, minimum=0),
        branch_lookup_debounce_ms=_number("ACADEMY_BRANCH_LOOKUP_DEBOUNCE_MS", 800, minimum=0),
        verify_ssl=_coerce_bool(os.getenv("ACADEMY_VERIFY_SSL"), True),
    )
