from __future__ import annotations

import asyncio
from typing import Any

from ..models_admin import Branch, BranchesResponse, BranchForm
from ..navigation import Route
from ..permissions import Action
from ..refetch import FilteredListing, Sleep
from ..session import ApiSession
from .base import BaseView


class BranchesView(BaseView):
    """Branch directory; every mutation is reserved to the super administrator."""

    module = "branches"
    route = Route.BRANCHES

    def __init__(self, api: ApiSession, sleep: Sleep = asyncio.sleep) -> None:
        super().__init__(api)
        self.search = ""
        self.listing: FilteredListing[BranchesResponse] = FilteredListing(
            self._fetch,
            debounce_ms=api.config.debounce_ms,
            notifications=self.notifications,
            title="Unable to load branches",
            sleep=sleep,
        )

    async def _fetch(self, filters: dict[str, Any]) -> BranchesResponse:
        return await self.api.branches_client().list_branches(filters)

    @property
    def can_manage(self) -> bool:
        return self.can(Action.MANAGE_BRANCHES)

    @property
    def branches(self) -> list[Branch]:
        if self.listing.result is None:
            return []
        needle = self.search.strip().lower()
        return [branch for branch in self.listing.result.branches if needle in branch.name.lower()]

    async def load(self) -> None:
        await self.listing.refresh()

    async def create(self, form: BranchForm) -> bool:
        if not self._require(Action.MANAGE_BRANCHES):
            return False
        ok, _ = await self._attempt("Unable to create branch", self.api.branches_client().create_branch(form))
        return await self._finish("branch.create", ok, "Branch created successfully")

    async def update(self, branch_id: str, changes: dict[str, Any]) -> bool:
        if not self._require(Action.MANAGE_BRANCHES):
            return False
        ok, _ = await self._attempt(
            "Unable to update branch",
            self.api.branches_client().update_branch(branch_id, changes),
        )
        return await self._finish("branch.update", ok, "Branch updated successfully")

    async def delete(self, branch_id: str) -> bool:
        if not self._require(Action.MANAGE_BRANCHES):
            return False
        ok, _ = await self._attempt("Unable to delete branch", self.api.branches_client().delete_branch(branch_id))
        return await self._finish("branch.delete", ok, "Branch deleted successfully")

    async def toggle_status(self, branch_id: str) -> bool:
        if not self._require(Action.MANAGE_BRANCHES):
            return False
        ok, _ = await self._attempt(
            "Error updating branch status",
            self.api.branches_client().toggle_status(branch_id),
        )
        return await self._finish("branch.toggle_status", ok, "Branch status updated")

    async def _finish(self, action: str, ok: bool, message: str) -> bool:
        if not ok:
            self._log(action, "error")
            return False
        self._log(action, "ok")
        self.notifications.success("Saved", message)
        await self.listing.refresh()
        return True
