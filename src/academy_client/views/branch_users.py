from __future__ import annotations

import asyncio
from typing import Any

from ..models import Role
from ..models_admin import User, UserForm, UsersResponse
from ..navigation import Route
from ..permissions import Action, assignable_roles
from ..refetch import FilteredListing, Sleep
from ..session import ApiSession
from .base import BaseView

USER_FILTERS: dict[str, Any] = {"search": None, "role": None}


class BranchUsersView(BaseView):
    """Users of the signed-in admin's branch; admins manage moderators and staff only."""

    module = "branch_users"
    route = Route.BRANCH_USERS

    def __init__(self, api: ApiSession, sleep: Sleep = asyncio.sleep) -> None:
        super().__init__(api)
        self.listing: FilteredListing[UsersResponse] = FilteredListing(
            self._fetch,
            initial_filters=USER_FILTERS,
            debounce_ms=api.config.debounce_ms,
            notifications=self.notifications,
            title="Unable to load users",
            sleep=sleep,
        )

    async def _fetch(self, filters: dict[str, Any]) -> UsersResponse:
        return await self.api.users_client().branch_users(filters)

    @property
    def users(self) -> list[User]:
        return self.listing.result.users if self.listing.result else []

    @property
    def assignable_roles(self) -> tuple[Role, ...]:
        if not self.can(Action.MANAGE_BRANCH_USERS):
            return ()
        return assignable_roles(self.role)

    def can_manage(self, user: User) -> bool:
        return self.can(Action.MANAGE_BRANCH_USERS, user.role)

    async def load(self) -> None:
        await self.listing.refresh()

    async def create(self, form: UserForm) -> bool:
        if not self._require(Action.MANAGE_BRANCH_USERS, form.role):
            return False
        form = form.model_copy(update={"branch": form.branch or self.branch_id})
        self.error = None
        ok, _ = await self._attempt("Unable to create user", self.api.users_client().create_user(form))
        return await self._finish("branch_user.create", ok)

    async def update(self, user: User, changes: dict[str, Any]) -> bool:
        if not self._require(Action.MANAGE_BRANCH_USERS, user.role):
            return False
        new_role = changes.get("role")
        if new_role is not None and not self._require(Action.MANAGE_BRANCH_USERS, new_role):
            return False
        self.error = None
        ok, _ = await self._attempt("Unable to update user", self.api.users_client().update_user(user.id, changes))
        return await self._finish("branch_user.update", ok)

    async def delete(self, user: User) -> bool:
        if not self._require(Action.MANAGE_BRANCH_USERS, user.role):
            return False
        self.error = None
        ok, _ = await self._attempt("Unable to delete user", self.api.users_client().delete_user(user.id))
        return await self._finish("branch_user.delete", ok)

    async def _finish(self, action: str, ok: bool) -> bool:
        if not ok:
            self._log(action, "error")
            return False
        self._log(action, "ok")
        await self.listing.refresh()
        return True
