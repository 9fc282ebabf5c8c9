from __future__ import annotations

import logging
from typing import Any, Awaitable, TypeVar

from ..error_mapper import SESSION_EXPIRED_MESSAGE, error_message
from ..exceptions import AuthorizationFailure, DomainError
from ..logging_utils import log_action
from ..models import Role, SessionData
from ..navigation import Route
from ..permissions import Action, PermissionDecision, check_permission
from ..refetch import FilteredListing
from ..session import ApiSession
from ..session_guard import SessionGuard
from .state import ViewState, resolve_state

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseView:
    """Per-page state shared by every authenticated view."""

    module = "view"
    route = Route.DASHBOARD

    def __init__(self, api: ApiSession) -> None:
        self.api = api
        self.notifications = api.notifications
        self.session: SessionData | None = None
        self.error: str | None = None
        self.session_expired = False
        self._guard = SessionGuard(api.store, api.navigator)

    def mount(self) -> bool:
        self.session = self._guard.require_session(self.module)
        if self.session is None:
            return False
        self.api.navigator.navigate(self.route)
        return True

    @property
    def role(self) -> Role | None:
        return self.session.user.role if self.session else None

    @property
    def branch_id(self) -> str | None:
        if self.session is None or self.session.user.branch is None:
            return None
        return self.session.user.branch.id

    def permission(self, action: Action, target_role: Role | str | None = None) -> PermissionDecision:
        return check_permission(self.session, action, target_role)

    def can(self, action: Action, target_role: Role | str | None = None) -> bool:
        return self.permission(action, target_role).allowed

    def _require(self, action: Action, target_role: Role | str | None = None) -> bool:
        decision = self.permission(action, target_role)
        if decision.allowed:
            return True
        self.notifications.push(level="warning", title="Not allowed", message=decision.message)
        self._log(action.value, "denied")
        return False

    async def _attempt(self, title: str, operation: Awaitable[T]) -> tuple[bool, T | None]:
        """Await ``operation`` and report its own outcome as ``(ok, value)``.

        Failures become view state instead of exceptions. Callers branch on
        ``ok`` and never on ``self.error``, which any concurrent operation on
        the same view may overwrite.
        """
        try:
            return True, await operation
        except AuthorizationFailure:
            self.session_expired = True
            self.error = SESSION_EXPIRED_MESSAGE
            return False, None
        except DomainError as exc:
            self.error = error_message(exc)
            self.notifications.push_error(title, exc)
            return False, None

    async def _guarded(self, title: str, operation: Awaitable[T]) -> T | None:
        _, value = await self._attempt(title, operation)
        return value

    def listing_state(self, listing: FilteredListing[Any]) -> ViewState:
        return resolve_state(
            is_loading=listing.loading,
            error=listing.error,
            has_data=listing.result is not None,
            session_expired=self.session_expired or listing.session_expired,
        )

    def _log(self, action: str, outcome: str) -> None:
        log_action(
            logger,
            module=self.module,
            action=action,
            actor_role=self.role.value if self.role else None,
            branch_id=self.branch_id,
            outcome=outcome,
        )
