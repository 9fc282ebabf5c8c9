from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .error_mapper import error_message, format_validation_errors
from .exceptions import ApiError, AuthorizationFailure, ValidationError

LEVELS = ("success", "info", "warning", "error")


def error_details(error: Exception) -> dict[str, Any]:
    """Diagnostic fields attached to an error notification."""
    details: dict[str, Any] = {"error_type": type(error).__name__}
    if isinstance(error, ApiError):
        details["status_code"] = error.status_code
        if isinstance(error, ValidationError) and error.errors:
            details["fields"] = format_validation_errors(error.errors)
    return details


@dataclass
class NotificationCenter:
    """Dismissible messages shown above the current view, oldest first."""

    messages: list[dict[str, Any]] = field(default_factory=list)

    def push(self, *, level: str, title: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
        if level not in LEVELS:
            raise ValueError(f"Unknown notification level: {level!r}")
        entry = dict(level=level, title=title, message=message, details=dict(details or {}))
        self.messages.append(entry)
        return entry

    def success(self, title: str, message: str) -> dict[str, Any]:
        return self.push(level="success", title=title, message=message)

    def push_error(self, title: str, error: Exception) -> dict[str, Any]:
        return self.push(
            level="warning" if isinstance(error, AuthorizationFailure) else "error",
            title=title,
            message=error_message(error),
            details=error_details(error),
        )

    def of_level(self, level: str) -> list[dict[str, Any]]:
        return [entry for entry in self.messages if entry["level"] == level]

    def dismiss(self, index: int) -> None:
        if index in range(len(self.messages)):
            self.messages.pop(index)

    def clear(self) -> None:
        del self.messages[:]

    def render(self) -> dict[str, Any]:
        visible = [dict(entry) for entry in self.messages]
        return {"count": len(visible), "messages": visible}
