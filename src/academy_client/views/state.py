from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ViewStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"
    PARTIAL_ERROR = "partial_error"
    FATAL_ERROR = "fatal_error"
    SESSION_EXPIRED = "session_expired"


# Fixed banner text; statuses missing here show the listing error instead.
STATUS_MESSAGES: dict[ViewStatus, str] = {
    ViewStatus.LOADING: "Loading data...",
    ViewStatus.EMPTY: "No data found",
    ViewStatus.SUCCESS: "Ready",
}


@dataclass(frozen=True)
class ViewState:
    """What a listing should show right now, derived from its raw flags."""

    status: ViewStatus
    message: str | None = None
    data_available: bool = False

    @property
    def blocking(self) -> bool:
        return self.status in {ViewStatus.FATAL_ERROR, ViewStatus.SESSION_EXPIRED}

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "data_available": self.data_available,
            "blocking": self.blocking,
        }


def _status_for(*, is_loading: bool, error: str | None, has_data: bool, session_expired: bool) -> ViewStatus:
    if session_expired:
        return ViewStatus.SESSION_EXPIRED
    if is_loading:
        return ViewStatus.LOADING
    if error:
        return ViewStatus.PARTIAL_ERROR if has_data else ViewStatus.FATAL_ERROR
    return ViewStatus.SUCCESS if has_data else ViewStatus.EMPTY


def resolve_state(
    *,
    is_loading: bool,
    error: str | None,
    has_data: bool,
    session_expired: bool = False,
) -> ViewState:
    status = _status_for(
        is_loading=is_loading,
        error=error,
        has_data=has_data,
        session_expired=session_expired,
    )
    return ViewState(
        status=status,
        message=STATUS_MESSAGES.get(status, error),
        data_available=has_data and status is not ViewStatus.SESSION_EXPIRED,
    )
