from __future__ import annotations

import asyncio
import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, TypeVar

from .config import ClientConfig
from .exceptions import AuthorizationFailure, DomainError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded linear backoff for idempotent reads.

    Waits ``base_delay * attempt`` seconds after each failed attempt. An
    authorization failure ends the loop at once.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    sleep: Sleep = field(default=asyncio.sleep, compare=False, repr=False)

    @classmethod
    def from_config(cls, config: ClientConfig, sleep: Sleep | None = None) -> "RetryPolicy":
        return cls(
            max_attempts=max(1, config.retry_attempts),
            base_delay=max(0.0, config.retry_delay_seconds),
            sleep=sleep or asyncio.sleep,
        )

    async def run(self, operation: Callable[[], Awaitable[T]], *, label: str = "operation") -> T:
        attempts = max(1, self.max_attempts)
        for attempt in range(1, attempts + 1):
            try:
                return await operation()
            except AuthorizationFailure:
                raise
            except DomainError as exc:
                if attempt >= attempts:
                    logger.warning(
                        "retry_exhausted",
                        extra={"operation": label, "attempts": attempt, "error_type": type(exc).__name__},
                    )
                    raise
                delay = self.base_delay * attempt
                logger.info(
                    "retry_attempt",
                    extra={
                        "operation": label,
                        "attempt": attempt,
                        "delay_seconds": delay,
                        "error_type": type(exc).__name__,
                    },
                )
                await self.sleep(delay)
        raise RuntimeError("unreachable")


class Retryable:
    """Wraps an async callable so every call goes through a retry policy."""

    def __init__(self, func: Callable[..., Awaitable[T]], policy: RetryPolicy | None = None) -> None:
        self.func = func
        self.policy = policy or RetryPolicy()
        functools.update_wrapper(self, func)

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return await self.policy.run(lambda: self.func(*args, **kwargs), label=self.func.__name__)


def retryable(method: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Marks a client method as retried with the owning client's ``retry_policy``."""

    @functools.wraps(method)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
        policy: RetryPolicy = getattr(self, "retry_policy", None) or RetryPolicy()
        return await policy.run(lambda: method(self, *args, **kwargs), label=method.__name__)

    wrapper.__retryable__ = True  # type: ignore[attr-defined]
    return wrapper
