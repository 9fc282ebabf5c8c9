from __future__ import annotations

from typing import Any

from ..models import MessageResponse
from ..models_admin import UserForm, UserMutationResponse, UsersResponse
from .base import BaseClient


class UsersClient(BaseClient):
    async def list_users(self, filters: dict[str, Any] | None = None) -> UsersResponse:
        data = await self._get("/api/users", params=filters)
        return self._parse(UsersResponse, data or {})

    async def branch_users(self, filters: dict[str, Any] | None = None) -> UsersResponse:
        data = await self._get("/api/users/branch-users", params=filters)
        return self._parse(UsersResponse, data or {})

    async def create_user(self, form: UserForm) -> UserMutationResponse:
        data = await self._request(
            "POST",
            "/api/users",
            json_body=form.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return self._parse(UserMutationResponse, data or {})

    async def update_user(self, user_id: str, changes: dict[str, Any]) -> UserMutationResponse:
        data = await self._request("PUT", f"/api/users/{user_id}", json_body=changes)
        return self._parse(UserMutationResponse, data or {})

    async def delete_user(self, user_id: str) -> MessageResponse:
        data = await self._request("DELETE", f"/api/users/{user_id}")
        return self._parse(MessageResponse, data or {})
