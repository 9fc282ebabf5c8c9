from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from ..error_mapper import SESSION_EXPIRED_MESSAGE, error_message
from ..exceptions import AuthorizationFailure, DomainError
from ..models_admin import Branch
from ..models_reports import BranchStats, DashboardStats, EnrollmentPoint, RecentActivity, RoleSlice
from ..navigation import Route
from ..permissions import Action
from ..session import ApiSession
from .base import BaseView

T = TypeVar("T")


class DashboardView(BaseView):
    module = "dashboard"
    route = Route.DASHBOARD

    def __init__(self, api: ApiSession) -> None:
        super().__init__(api)
        self.selected_branch = "all"
        self.branches: list[Branch] = []
        self.stats: DashboardStats | None = None
        self.activity: list[RecentActivity] = []
        self.enrollment: list[EnrollmentPoint] = []
        self.roles: list[RoleSlice] = []
        self.errors: dict[str, str] = {}
        self.loading: set[str] = set()

    @property
    def branch_filter(self) -> str | None:
        if self.can(Action.SELECT_BRANCH):
            return self.selected_branch
        return None

    @property
    def branch_stats(self) -> BranchStats | None:
        if self.stats is None or not self.can(Action.VIEW_BRANCH_STATS):
            return None
        return self.stats.branch_stats

    async def _block(self, name: str, operation: Awaitable[T]) -> T | None:
        self.loading.add(name)
        self.errors.pop(name, None)
        try:
            return await operation
        except AuthorizationFailure:
            self.session_expired = True
            self.error = SESSION_EXPIRED_MESSAGE
            return None
        except DomainError as exc:
            self.errors[name] = error_message(exc)
            return None
        finally:
            self.loading.discard(name)

    async def load_stats(self) -> None:
        stats = await self._block("stats", self.api.dashboard_client().stats(self.branch_filter))
        if stats is not None:
            self.stats = stats

    async def load_activity(self) -> None:
        activity = await self._block("activity", self.api.dashboard_client().recent_activity(self.branch_filter))
        if activity is not None:
            self.activity = activity

    async def load_charts(self) -> None:
        client = self.api.dashboard_client()

        async def both() -> tuple[list[EnrollmentPoint], list[RoleSlice]]:
            enrollment, roles = await asyncio.gather(
                client.enrollment_trends(self.branch_filter),
                client.users_by_role(self.branch_filter),
                return_exceptions=True,
            )
            for outcome in (enrollment, roles):
                if isinstance(outcome, BaseException):
                    raise outcome
            return enrollment, roles

        charts = await self._block("charts", both())
        if charts is not None:
            self.enrollment, self.roles = charts

    async def load(self) -> None:
        await asyncio.gather(self.load_stats(), self.load_activity(), self.load_charts())

    async def load_branches(self) -> None:
        if not self.can(Action.SELECT_BRANCH):
            return
        response = await self._block("branches", self.api.branches_client().list_branches())
        if response is not None:
            self.branches = response.branches

    async def select_branch(self, branch_id: str) -> None:
        if not self._require(Action.SELECT_BRANCH):
            return
        self.selected_branch = branch_id or "all"
        await self.load()

    def clear_errors(self) -> None:
        self.errors.clear()
