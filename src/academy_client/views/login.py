from __future__ import annotations

import asyncio
import logging

from ..error_mapper import GENERIC_ERROR_MESSAGE
from ..exceptions import ApiError
from ..models import BranchOption, SessionData
from ..refetch import Debouncer, Sleep
from ..session import ApiSession

logger = logging.getLogger(__name__)

MIN_LOOKUP_LENGTH = 3
SUPERADMIN_USERNAME = "superadmin"


class LoginView:
    """Sign-in form with a debounced lookup of the branches a username belongs to."""

    def __init__(self, api: ApiSession, sleep: Sleep = asyncio.sleep) -> None:
        self.api = api
        self.username = ""
        self.password = ""
        self.branch_id = ""
        self.branches: list[BranchOption] = []
        self.fetching_branches = False
        self.loading = False
        self.error: str | None = None
        self._lookup = Debouncer(api.config.branch_lookup_debounce_ms, self._fetch_branches, sleep=sleep)

    def set_username(self, value: str) -> None:
        self.username = value
        if len(value.strip()) < MIN_LOOKUP_LENGTH:
            self._lookup.cancel()
            self.branches = []
            self.branch_id = ""
            return
        self._lookup.trigger()

    def set_password(self, value: str) -> None:
        self.password = value

    def select_branch(self, branch_id: str) -> None:
        self.branch_id = branch_id

    @property
    def is_superadmin(self) -> bool:
        return self.username.strip().lower() == SUPERADMIN_USERNAME

    @property
    def branch_required(self) -> bool:
        return bool(self.branches) and not self.is_superadmin

    @property
    def can_submit(self) -> bool:
        if not self.username or not self.password or self.loading:
            return False
        return bool(self.branch_id) or not self.branch_required

    async def wait_idle(self) -> None:
        await self._lookup.flush()

    async def _fetch_branches(self) -> None:
        requested = self.username.strip()
        self.fetching_branches = True
        self.error = None
        try:
            branches = await self.api.auth_client().branches_for_username(requested)
        except ApiError as exc:
            logger.info("branch_lookup_failed", extra={"error_type": type(exc).__name__})
            branches = []
        finally:
            self.fetching_branches = False

        if self.username.strip() != requested:
            return
        self.branches = branches
        if len(branches) == 1:
            self.branch_id = branches[0].id
        elif self.branch_id and not any(branch.id == self.branch_id for branch in branches):
            self.branch_id = ""

    async def submit(self) -> SessionData | None:
        self.error = None
        if not self.branch_id and self.branch_required:
            self.error = "Please select a branch"
            return None
        self.loading = True
        try:
            login = await self.api.auth_client().login(
                self.username,
                self.password,
                self.branch_id or None,
            )
            session = self.api.establish(login)
        except ApiError as exc:
            self.error = exc.message or GENERIC_ERROR_MESSAGE
            logger.info("login_failed", extra={"status": exc.status_code})
            return None
        finally:
            self.loading = False
        self.password = ""
        logger.info("login_succeeded", extra={"role": session.user.role.value})
        return session
