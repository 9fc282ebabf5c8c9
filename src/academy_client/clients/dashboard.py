from __future__ import annotations

from typing import Any

from ..models_reports import DashboardStats, EnrollmentPoint, RecentActivity, RoleSlice
from ..retry import retryable
from .base import BaseClient


def dashboard_params(branch_id: str | None) -> dict[str, Any]:
    if not branch_id or branch_id == "all":
        return {}
    return {"branchId": branch_id}


class DashboardClient(BaseClient):
    """Dashboard statistics reads; each call is retried with linear backoff."""

    @retryable
    async def stats(self, branch_id: str | None = None) -> DashboardStats:
        data = await self._get("/api/dashboard/stats", params=dashboard_params(branch_id))
        return self._parse(DashboardStats, data or {})

    @retryable
    async def recent_activity(self, branch_id: str | None = None) -> list[RecentActivity]:
        data = await self._get("/api/dashboard/recent-activity", params=dashboard_params(branch_id))
        return [self._parse(RecentActivity, item) for item in data or []]

    @retryable
    async def enrollment_trends(self, branch_id: str | None = None) -> list[EnrollmentPoint]:
        data = await self._get("/api/dashboard/charts/enrollment", params=dashboard_params(branch_id))
        return [self._parse(EnrollmentPoint, item) for item in data or []]

    @retryable
    async def users_by_role(self, branch_id: str | None = None) -> list[RoleSlice]:
        data = await self._get("/api/dashboard/charts/users-by-role", params=dashboard_params(branch_id))
        return [self._parse(RoleSlice, item) for item in data or []]
