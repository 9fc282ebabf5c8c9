from __future__ import annotations

from typing import Any

from ..models import MessageResponse
from ..models_admin import Branch, BranchesResponse, BranchForm
from .base import BaseClient


class BranchesClient(BaseClient):
    async def list_branches(self, filters: dict[str, Any] | None = None) -> BranchesResponse:
        data = await self._get("/api/branches", params=filters)
        if isinstance(data, list):
            return BranchesResponse(branches=[self._parse(Branch, item) for item in data])
        return self._parse(BranchesResponse, data or {})

    async def active_branches(self) -> list[Branch]:
        data = await self._get("/api/branches/active")
        items = data.get("branches", []) if isinstance(data, dict) else data or []
        return [self._parse(Branch, item) for item in items]

    async def get_branch(self, branch_id: str) -> Branch:
        data = await self._get(f"/api/branches/{branch_id}")
        if isinstance(data, dict) and isinstance(data.get("branch"), dict):
            data = data["branch"]
        return self._parse(Branch, data)

    async def create_branch(self, form: BranchForm) -> MessageResponse:
        data = await self._request(
            "POST",
            "/api/branches",
            json_body=form.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return self._parse(MessageResponse, data or {})

    async def update_branch(self, branch_id: str, changes: dict[str, Any]) -> MessageResponse:
        data = await self._request("PUT", f"/api/branches/{branch_id}", json_body=changes)
        return self._parse(MessageResponse, data or {})

    async def delete_branch(self, branch_id: str) -> MessageResponse:
        data = await self._request("DELETE", f"/api/branches/{branch_id}")
        return self._parse(MessageResponse, data or {})

    async def toggle_status(self, branch_id: str) -> MessageResponse:
        data = await self._request("PATCH", f"/api/branches/{branch_id}/toggle-status")
        return self._parse(MessageResponse, data or {})
