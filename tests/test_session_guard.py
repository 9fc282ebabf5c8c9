from __future__ import annotations

from academy_client.auth_store import MemoryStorage, SessionStore
from academy_client.models import Role, UserProfile
from academy_client.navigation import Navigator, Route
from academy_client.session_guard import SessionGuard


def test_missing_session_redirects_to_login() -> None:
    navigator = Navigator(route=Route.FINANCES)
    guard = SessionGuard(SessionStore(storage=MemoryStorage()), navigator)

    assert guard.require_session("finances") is None
    assert navigator.route is Route.LOGIN
    assert navigator.history == [Route.FINANCES]


def test_existing_session_is_returned_without_navigation() -> None:
    store = SessionStore(storage=MemoryStorage())
    store.save("token-abc", UserProfile(id="u-1", username="tester", role=Role.MODERATOR))
    navigator = Navigator(route=Route.ATTENDANCE)

    session = SessionGuard(store, navigator).require_session("attendance")

    assert session is not None
    assert session.user.role is Role.MODERATOR
    assert navigator.route is Route.ATTENDANCE
