from __future__ import annotations

import asyncio
from typing import Any

from ..models import Role
from ..models_admin import Branch, User, UserForm, UsersResponse
from ..navigation import Route
from ..permissions import Action, assignable_roles
from ..refetch import FilteredListing, Sleep
from ..session import ApiSession
from .base import BaseView


class UsersView(BaseView):
    """System users across branches.

    Search and role filtering happen on the loaded list. A user can only be
    created, edited or deleted when both their current role and any new role
    are among the roles the signed-in user may assign.
    """

    module = "users"
    route = Route.USERS

    def __init__(self, api: ApiSession, sleep: Sleep = asyncio.sleep) -> None:
        super().__init__(api)
        self.search = ""
        self.role_filter = "all"
        self.branches: list[Branch] = []
        self.listing: FilteredListing[UsersResponse] = FilteredListing(
            self._fetch,
            debounce_ms=api.config.debounce_ms,
            notifications=self.notifications,
            title="Unable to load users",
            sleep=sleep,
        )

    async def _fetch(self, filters: dict[str, Any]) -> UsersResponse:
        return await self.api.users_client().list_users(filters)

    @property
    def assignable_roles(self) -> tuple[Role, ...]:
        if not self.can(Action.MANAGE_USERS):
            return ()
        return assignable_roles(self.role)

    @property
    def users(self) -> list[User]:
        if self.listing.result is None:
            return []
        needle = self.search.strip().lower()
        matches = []
        for user in self.listing.result.users:
            if self.role_filter != "all" and user.role != self.role_filter:
                continue
            haystack = (user.full_name or "", user.username, user.email or "")
            if needle and not any(needle in value.lower() for value in haystack):
                continue
            matches.append(user)
        return matches

    def can_manage(self, user: User) -> bool:
        return user.parsed_role in self.assignable_roles

    async def load(self) -> None:
        branches_task = self._guarded("Unable to load branches", self.api.branches_client().list_branches())
        _, branches = await asyncio.gather(self.listing.refresh(), branches_task)
        if branches is not None:
            self.branches = branches.branches

    def _require_role(self, role: Role | str | None) -> bool:
        if not self._require(Action.MANAGE_USERS):
            return False
        if Role.parse(role) in self.assignable_roles:
            return True
        label = role.value if isinstance(role, Role) else role
        self.notifications.push(
            level="warning",
            title="Not allowed",
            message=f"Your role cannot manage {label or 'unknown'} users.",
        )
        self._log(Action.MANAGE_USERS.value, "denied")
        return False

    async def create(self, form: UserForm) -> bool:
        if not self._require_role(form.role):
            return False
        ok, _ = await self._attempt("Unable to create user", self.api.users_client().create_user(form))
        return await self._finish("user.create", ok, "User created successfully")

    async def update(self, user: User, changes: dict[str, Any]) -> bool:
        if not self._require_role(user.role):
            return False
        new_role = changes.get("role")
        if new_role is not None and not self._require_role(new_role):
            return False
        ok, _ = await self._attempt("Unable to update user", self.api.users_client().update_user(user.id, changes))
        return await self._finish("user.update", ok, "User updated successfully")

    async def delete(self, user: User) -> bool:
        if not self._require_role(user.role):
            return False
        ok, _ = await self._attempt("Unable to delete user", self.api.users_client().delete_user(user.id))
        return await self._finish("user.delete", ok, "User deleted successfully")

    async def _finish(self, action: str, ok: bool, message: str) -> bool:
        if not ok:
            self._log(action, "error")
            return False
        self._log(action, "ok")
        self.notifications.success("Saved", message)
        await self.listing.refresh()
        return True
