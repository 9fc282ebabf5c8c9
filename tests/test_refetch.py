from __future__ import annotations

import asyncio
from typing import Any

import pytest

from academy_client.error_mapper import SESSION_EXPIRED_MESSAGE
from academy_client.exceptions import ServerError, UnauthorizedError
from academy_client.models import Role
from academy_client.navigation import Route
from academy_client.notifications import NotificationCenter
from academy_client.refetch import Debouncer, FilteredListing

pytestmark = pytest.mark.anyio


async def test_burst_of_changes_fetches_once_with_latest_filters(fake_sleep, sleeps) -> None:
    seen: list[dict[str, Any]] = []

    async def fetch(filters: dict[str, Any]) -> list[str]:
        seen.append(filters)
        return [filters["search"]]

    listing = FilteredListing(fetch, initial_filters={"search": "", "page": 1}, sleep=fake_sleep)
    listing.set_filter("search", "a")
    listing.set_filter("search", "al")
    listing.set_filter("search", "ali")
    assert listing.pending is True

    await listing.wait_idle()

    assert seen == [{"search": "ali", "page": 1}]
    assert sleeps == [0.3]
    assert listing.result == ["ali"]
    assert listing.loading is False


async def test_out_of_order_response_is_discarded() -> None:
    gates = {"old": asyncio.Event(), "new": asyncio.Event()}

    async def fetch(filters: dict[str, Any]) -> str:
        await gates[filters["search"]].wait()
        return filters["search"]

    listing = FilteredListing(fetch, initial_filters={"search": ""})
    listing.filters["search"] = "old"
    first = asyncio.create_task(listing.refresh())
    await asyncio.sleep(0)
    listing.filters["search"] = "new"
    second = asyncio.create_task(listing.refresh())
    await asyncio.sleep(0)

    gates["new"].set()
    await second
    gates["old"].set()
    await first

    assert listing.result == "new"
    assert listing.error is None
    assert listing.loading is False


async def test_stale_failure_does_not_replace_newer_result() -> None:
    release_old = asyncio.Event()
    notifications = NotificationCenter()

    async def fetch(filters: dict[str, Any]) -> str:
        if filters["search"] == "old":
            await release_old.wait()
            raise ServerError(message="Database offline", status_code=500)
        return filters["search"]

    listing = FilteredListing(fetch, initial_filters={"search": "old"}, notifications=notifications)
    first = asyncio.create_task(listing.refresh())
    await asyncio.sleep(0)
    listing.filters["search"] = "new"
    await listing.refresh()
    release_old.set()
    await first

    assert listing.result == "new"
    assert listing.error is None
    assert notifications.messages == []


async def test_changing_a_filter_resets_the_page(fake_sleep) -> None:
    seen: list[dict[str, Any]] = []

    async def fetch(filters: dict[str, Any]) -> None:
        seen.append(filters)

    listing = FilteredListing(fetch, initial_filters={"status": "", "page": 1}, sleep=fake_sleep)
    listing.set_page(3)
    await listing.wait_idle()
    listing.set_filter("status", "completed")
    await listing.wait_idle()

    assert seen == [{"status": "", "page": 3}, {"status": "completed", "page": 1}]


async def test_reset_restores_initial_filters(fake_sleep) -> None:
    async def fetch(filters: dict[str, Any]) -> dict[str, Any]:
        return filters

    listing = FilteredListing(fetch, initial_filters={"type": "", "page": 1}, sleep=fake_sleep)
    listing.update_filters(type="income", page=4)
    listing.reset_filters()
    await listing.wait_idle()

    assert listing.result == {"type": "", "page": 1}


async def test_domain_error_is_kept_and_notified() -> None:
    notifications = NotificationCenter()

    async def fetch(filters: dict[str, Any]) -> None:
        raise ServerError(message="Database offline", status_code=500)

    listing = FilteredListing(fetch, notifications=notifications, title="Failed to load transactions")
    assert await listing.refresh() is None

    assert listing.error == "Database offline"
    assert listing.session_expired is False
    [message] = notifications.messages
    assert message["level"] == "error"
    assert message["title"] == "Failed to load transactions"
    assert message["details"]["status_code"] == 500


async def test_authorization_failure_marks_session_expired() -> None:
    notifications = NotificationCenter()

    async def fetch(filters: dict[str, Any]) -> None:
        raise UnauthorizedError(message="Token expired", status_code=401)

    listing = FilteredListing(fetch, notifications=notifications)
    await listing.refresh()

    assert listing.session_expired is True
    assert listing.error == SESSION_EXPIRED_MESSAGE
    assert notifications.messages == []


async def test_listing_over_api_ends_session_on_401(api, recorder, store, navigator, sign_in) -> None:
    sign_in(Role.ADMIN)
    recorder.add("GET", "/api/transactions", 401, json_body={"message": "Token expired"})

    listing = FilteredListing(api.finance_client().list_transactions, initial_filters={"type": "", "page": 1})
    await listing.refresh()

    assert listing.session_expired is True
    assert store.load() is None
    assert navigator.route is Route.LOGIN
    [request] = recorder.calls("GET", "/api/transactions")
    assert request.url.params["page"] == "1"
    assert "type" not in request.url.params


async def test_started_callback_survives_a_new_trigger(fake_sleep, sleeps) -> None:
    gate = asyncio.Event()
    started: list[int] = []
    finished: list[int] = []

    async def callback() -> None:
        started.append(len(started))
        await gate.wait()
        finished.append(len(finished))

    debouncer = Debouncer(300, callback, sleep=fake_sleep)
    debouncer.trigger()
    while not started:
        await asyncio.sleep(0)

    debouncer.trigger()
    assert debouncer.pending is True
    gate.set()
    await debouncer.flush()

    assert len(started) == 2
    assert len(finished) == 2
    assert sleeps == [0.3, 0.3]


async def test_cancel_is_safe_without_or_after_a_timer(fake_sleep) -> None:
    fired: list[int] = []

    async def callback() -> None:
        fired.append(1)

    debouncer = Debouncer(300, callback, sleep=fake_sleep)
    debouncer.cancel()

    debouncer.trigger()
    await debouncer.flush()
    debouncer.cancel()

    assert fired == [1]
    assert debouncer.pending is False
