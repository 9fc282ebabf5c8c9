from __future__ import annotations

import logging

from ..models import BranchOption, LoginResponse
from .base import BaseClient

logger = logging.getLogger(__name__)


class AuthClient(BaseClient):
    async def login(self, username: str, password: str, branch_id: str | None = None) -> LoginResponse:
        payload: dict[str, str] = {"username": username, "password": password}
        if branch_id:
            payload["branchId"] = branch_id
        logger.info("login_attempt", extra={"username": username, "has_branch": bool(branch_id)})
        data = await self._request("POST", "/api/auth/login", json_body=payload, authenticated=False)
        return self._parse(LoginResponse, data)

    async def branches_for_username(self, username: str) -> list[BranchOption]:
        data = await self._request(
            "GET",
            "/api/auth/branches",
            params={"username": username.strip()},
            authenticated=False,
        )
        if not isinstance(data, list):
            return []
        return [self._parse(BranchOption, item) for item in data]
