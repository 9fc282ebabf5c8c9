from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from .auth_store import SessionStore
from .clients.attendance import AttendanceClient
from .clients.auth import AuthClient
from .clients.branches import BranchesClient
from .clients.courses import CoursesClient
from .clients.dashboard import DashboardClient
from .clients.finance import FinanceClient
from .clients.reports import ReportsClient
from .clients.students import StudentsClient
from .clients.upload import UploadClient
from .clients.users import UsersClient
from .config import ClientConfig
from .exceptions import AuthorizationFailure
from .http_client import HttpClient
from .models import LoginResponse, SessionData
from .navigation import Navigator, Route
from .notifications import NotificationCenter
from .retry import RetryPolicy, Sleep

logger = logging.getLogger(__name__)


@dataclass
class ApiSession:
    config: ClientConfig
    store: SessionStore | None = None
    navigator: Navigator | None = None
    notifications: NotificationCenter | None = None
    transport: httpx.AsyncBaseTransport | None = None
    sleep: Sleep | None = None
    http: HttpClient = field(init=False)
    retry_policy: RetryPolicy = field(init=False)

    def __post_init__(self) -> None:
        self.store = self.store or SessionStore()
        self.navigator = self.navigator or Navigator()
        self.notifications = self.notifications or NotificationCenter()
        client = None
        if self.transport is not None:
            client = httpx.AsyncClient(
                base_url=self.config.api_base_url,
                timeout=httpx.Timeout(self.config.timeout_seconds),
                verify=self.config.verify_ssl,
                transport=self.transport,
            )
        self.http = HttpClient(config=self.config, token_provider=self._current_token, client=client)
        self.http.register_auth_failure_handler(self._on_auth_failure)
        self.retry_policy = RetryPolicy.from_config(self.config, sleep=self.sleep)

    @property
    def current(self) -> SessionData | None:
        return self.store.load()

    def _current_token(self) -> str | None:
        stored = self.store.load()
        return stored.token if stored else None

    def _on_auth_failure(self, error: AuthorizationFailure) -> None:
        logger.warning(
            "auth_failure",
            extra={"status": error.status_code, "route": self.navigator.route.value},
        )
        self.store.clear()
        self.navigator.to_login()

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http)

    def students_client(self) -> StudentsClient:
        return StudentsClient(http=self.http)

    def courses_client(self) -> CoursesClient:
        return CoursesClient(http=self.http)

    def attendance_client(self) -> AttendanceClient:
        return AttendanceClient(http=self.http)

    def finance_client(self) -> FinanceClient:
        return FinanceClient(http=self.http)

    def branches_client(self) -> BranchesClient:
        return BranchesClient(http=self.http)

    def users_client(self) -> UsersClient:
        return UsersClient(http=self.http)

    def dashboard_client(self) -> DashboardClient:
        return DashboardClient(http=self.http, retry_policy=self.retry_policy)

    def reports_client(self) -> ReportsClient:
        return ReportsClient(http=self.http, retry_policy=self.retry_policy)

    def upload_client(self) -> UploadClient:
        return UploadClient(http=self.http)

    def establish(self, login: LoginResponse) -> SessionData:
        session = self.store.save(login.token, login.user)
        self.navigator.navigate(Route.DASHBOARD)
        return session

    def logout(self) -> None:
        self.store.clear()
        self.navigator.to_login()
        logger.info("logout")

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "ApiSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
