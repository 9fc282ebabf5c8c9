from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Mapping, TypeVar

from .error_mapper import SESSION_EXPIRED_MESSAGE, error_message
from .exceptions import AuthorizationFailure, DomainError
from .notifications import NotificationCenter

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class Debouncer:
    """Runs ``callback`` once a burst of triggers has been quiet for ``delay_ms``.

    Only the waiting timer is cancelled by a new trigger; a callback that has
    already started runs to completion.
    """

    def __init__(
        self,
        delay_ms: int,
        callback: Callable[[], Awaitable[Any]],
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.delay_ms = delay_ms
        self._callback = callback
        self._sleep = sleep
        self._timer: asyncio.Task[None] | None = None
        self._running: set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def trigger(self) -> None:
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._wait_then_fire())

    def cancel(self) -> None:
        timer = self._timer
        if timer is not None and not timer.done():
            timer.cancel()
        self._timer = None

    async def _wait_then_fire(self) -> None:
        if self.delay_ms > 0:
            await self._sleep(self.delay_ms / 1000)
        task = asyncio.get_running_loop().create_task(self._callback())
        self._running.add(task)
        task.add_done_callback(self._running.discard)

    async def flush(self) -> None:
        timer = self._timer
        if timer is not None:
            await asyncio.wait({timer})
        if self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)


class FilteredListing(Generic[T]):
    """Filter state plus the latest result fetched for it.

    Every filter change schedules a debounced fetch. Each dispatched fetch is
    numbered; a response older than the last one applied is dropped, so the
    result always belongs to the newest filters that answered.
    """

    def __init__(
        self,
        fetch: Callable[[dict[str, Any]], Awaitable[T]],
        *,
        initial_filters: Mapping[str, Any] | None = None,
        debounce_ms: int = 300,
        notifications: NotificationCenter | None = None,
        title: str = "Unable to load data",
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._fetch = fetch
        self._initial_filters = dict(initial_filters or {})
        self.filters: dict[str, Any] = dict(self._initial_filters)
        self.result: T | None = None
        self.error: str | None = None
        self.session_expired = False
        self.notifications = notifications
        self.title = title
        self._seq = 0
        self._applied_seq = 0
        self._in_flight = 0
        self._debouncer = Debouncer(debounce_ms, self._dispatch, sleep=sleep)

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def set_filter(self, name: str, value: Any) -> None:
        self.update_filters(**{name: value})

    def update_filters(self, **changes: Any) -> None:
        if "page" in self.filters and "page" not in changes:
            changes["page"] = 1
        self.filters.update(changes)
        self._debouncer.trigger()

    def reset_filters(self) -> None:
        self.filters = dict(self._initial_filters)
        self._debouncer.trigger()

    def set_page(self, page: int) -> None:
        self.update_filters(page=page)

    async def refresh(self) -> T | None:
        self._debouncer.cancel()
        await self._dispatch()
        return self.result

    async def wait_idle(self) -> None:
        await self._debouncer.flush()

    def cancel(self) -> None:
        self._debouncer.cancel()

    async def _dispatch(self) -> None:
        self._seq += 1
        seq = self._seq
        snapshot = dict(self.filters)
        self._in_flight += 1
        try:
            result = await self._fetch(snapshot)
        except AuthorizationFailure:
            if self._is_current(seq):
                self.session_expired = True
                self.error = SESSION_EXPIRED_MESSAGE
            return
        except DomainError as exc:
            if self._is_current(seq):
                self.error = error_message(exc)
                if self.notifications is not None:
                    self.notifications.push_error(self.title, exc)
            return
        finally:
            self._in_flight -= 1

        if not self._is_current(seq):
            logger.debug("stale_response_discarded", extra={"seq": seq, "applied_seq": self._applied_seq})
            return
        self.result = result
        self.error = None

    def _is_current(self, seq: int) -> bool:
        if seq < self._applied_seq:
            return False
        self._applied_seq = seq
        return True
