from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from academy_client.auth_store import MemoryStorage, SessionStore
from academy_client.config import ClientConfig
from academy_client.models import BranchRef, Role, UserProfile
from academy_client.navigation import Navigator, Route
from academy_client.notifications import NotificationCenter
from academy_client.session import ApiSession

BASE_URL = "https://academy.test"


class ApiRecorder:
    """MockTransport handler: canned responses per (method, path), every request kept.

    Responses queued for a route are served in order; the last one repeats.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[dict[str, Any] | Exception]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        *,
        json_body: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> "ApiRecorder":
        canned: dict[str, Any] = {"status_code": status, "headers": headers or {}}
        if content is not None:
            canned["content"] = content
        elif json_body is not None:
            canned["json"] = json_body
        self.routes.setdefault((method, path), []).append(canned)
        return self

    def fail(self, method: str, path: str, error: Exception) -> "ApiRecorder":
        self.routes.setdefault((method, path), []).append(error)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"message": f"No route for {request.method} {request.url.path}"})
        canned = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(canned, Exception):
            raise canned
        return httpx.Response(**canned)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [req for req in self.requests if req.method == method and req.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def recorder() -> ApiRecorder:
    return ApiRecorder()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL)


@pytest.fixture
def store() -> SessionStore:
    return SessionStore(storage=MemoryStorage())


@pytest.fixture
def navigator() -> Navigator:
    return Navigator(route=Route.DASHBOARD)


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps: list[float]) -> Callable[[float], Any]:
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)
        await asyncio.sleep(0)

    return _sleep


@pytest.fixture
def api(config, store, navigator, recorder, fake_sleep) -> ApiSession:
    return ApiSession(
        config=config,
        store=store,
        navigator=navigator,
        notifications=NotificationCenter(),
        transport=httpx.MockTransport(recorder),
        sleep=fake_sleep,
    )


def make_user(role: Role | str, *, user_id: str = "u-1", branch_id: str | None = "b-1") -> UserProfile:
    branch = BranchRef(id=branch_id, name="Harare Central") if branch_id else None
    return UserProfile(id=user_id, full_name="Test User", username="tester", role=role, branch=branch)


@pytest.fixture
def sign_in(store: SessionStore) -> Callable[..., UserProfile]:
    def _sign_in(role: Role | str, **kwargs: Any) -> UserProfile:
        user = make_user(role, **kwargs)
        store.save("token-abc", user)
        return user

    return _sign_in
