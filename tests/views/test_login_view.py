from __future__ import annotations

import pytest

from academy_client.navigation import Route
from academy_client.views import LoginView

pytestmark = pytest.mark.anyio


def login_payload(role: str, branch: dict | None = None) -> dict:
    user = {"_id": "u-9", "username": "someone", "fullName": "Some One", "role": role}
    if branch is not None:
        user["branch"] = branch
    return {"token": "fresh-token", "user": user, "message": "Login successful"}


async def test_superadmin_signs_in_without_branch(api, recorder, navigator, store, fake_sleep, sleeps) -> None:
    navigator.route = Route.LOGIN
    recorder.add("GET", "/api/auth/branches", json_body=[])
    recorder.add("POST", "/api/auth/login", json_body=login_payload("superAdmin"))

    view = LoginView(api, sleep=fake_sleep)
    view.set_username("superadmin")
    await view.wait_idle()
    view.set_password("secret")

    assert view.branch_required is False
    assert view.can_submit is True

    session = await view.submit()

    assert session is not None
    [request] = recorder.calls("POST", "/api/auth/login")
    assert recorder.body(request) == {"username": "superadmin", "password": "secret"}
    assert "authorization" not in request.headers
    assert store.load().token == "fresh-token"
    assert navigator.route is Route.DASHBOARD
    assert view.password == ""
    assert sleeps == [0.8]


async def test_single_branch_is_selected_automatically(api, recorder, fake_sleep) -> None:
    recorder.add("GET", "/api/auth/branches", json_body=[{"_id": "b-2", "name": "Bulawayo"}])
    recorder.add("POST", "/api/auth/login", json_body=login_payload("moderator", {"_id": "b-2", "name": "Bulawayo"}))

    view = LoginView(api, sleep=fake_sleep)
    view.set_username("jdoe")
    await view.wait_idle()
    view.set_password("secret")

    [lookup] = recorder.calls("GET", "/api/auth/branches")
    assert lookup.url.params["username"] == "jdoe"
    assert view.branch_id == "b-2"
    assert view.branch_required is True
    assert view.can_submit is True

    await view.submit()

    [request] = recorder.calls("POST", "/api/auth/login")
    assert recorder.body(request)["branchId"] == "b-2"


async def test_typing_burst_looks_up_branches_once(api, recorder, fake_sleep, sleeps) -> None:
    recorder.add("GET", "/api/auth/branches", json_body=[])

    view = LoginView(api, sleep=fake_sleep)
    for partial in ("jdo", "jdoe", "jdoe1"):
        view.set_username(partial)
    await view.wait_idle()

    [lookup] = recorder.calls("GET", "/api/auth/branches")
    assert lookup.url.params["username"] == "jdoe1"
    assert sleeps == [0.8]


async def test_short_username_skips_lookup(api, recorder, fake_sleep, sleeps) -> None:
    view = LoginView(api, sleep=fake_sleep)
    view.set_username("jd")
    await view.wait_idle()

    assert recorder.requests == []
    assert sleeps == []
    assert view.branches == []


async def test_branch_must_be_chosen_when_several_exist(api, recorder, fake_sleep) -> None:
    recorder.add(
        "GET",
        "/api/auth/branches",
        json_body=[{"_id": "b-1", "name": "Harare"}, {"_id": "b-2", "name": "Bulawayo"}],
    )

    view = LoginView(api, sleep=fake_sleep)
    view.set_username("jdoe")
    await view.wait_idle()
    view.set_password("secret")

    assert view.branch_id == ""
    assert view.can_submit is False
    assert await view.submit() is None
    assert view.error == "Please select a branch"
    assert recorder.calls("POST", "/api/auth/login") == []


async def test_rejected_credentials_show_server_message(api, recorder, store, fake_sleep) -> None:
    recorder.add("POST", "/api/auth/login", 401, json_body={"message": "Invalid credentials"})

    view = LoginView(api, sleep=fake_sleep)
    view.username = "jdoe"
    view.set_password("wrong")

    assert await view.submit() is None
    assert view.error == "Invalid credentials"
    assert view.loading is False
    assert store.load() is None
