from __future__ import annotations

from typing import Any, Mapping

from .exceptions import (
    ApiError,
    AuthorizationFailure,
    ConflictError,
    DomainError,
    FieldError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"
CONNECTION_ERROR_MESSAGE = "Unable to reach the server. Check your connection and try again."
SESSION_EXPIRED_MESSAGE = "Your session has expired. Please sign in again."


def _parse_field_errors(raw: object) -> list[FieldError]:
    if not isinstance(raw, list):
        return []
    parsed: list[FieldError] = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        msg = item.get("msg") or item.get("message")
        if not msg:
            continue
        parsed.append(FieldError(path=str(item.get("path") or ""), msg=str(msg)))
    return parsed


def map_error(status_code: int, payload: Mapping[str, object] | None) -> ApiError:
    payload = payload or {}
    errors = _parse_field_errors(payload.get("errors"))
    message = str(payload.get("message") or f"HTTP error! status: {status_code}")
    mapped: type[ApiError]
    if status_code == 401:
        mapped = UnauthorizedError
    elif status_code == 403:
        mapped = ForbiddenError
    elif errors or status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = DomainError
    return mapped(
        message=message,
        status_code=status_code,
        errors=errors,
        raw_payload=dict(payload),
    )


def format_validation_errors(errors: list[FieldError]) -> str:
    if not errors:
        return ""
    if len(errors) == 1:
        return errors[0].msg
    grouped: dict[str, list[str]] = {}
    for error in errors:
        grouped.setdefault(error.path or "general", []).append(error.msg)
    parts = []
    for path, messages in grouped.items():
        if path == "general":
            parts.append(", ".join(messages))
        else:
            parts.append(f"{path}: {', '.join(messages)}")
    return "; ".join(parts)


def field_errors(error: Exception) -> dict[str, str]:
    """First message per field path, for forms that want to highlight inputs."""
    if not isinstance(error, ValidationError):
        return {}
    result: dict[str, str] = {}
    for item in error.errors:
        if item.path and item.path not in result:
            result[item.path] = item.msg
    return result


def error_message(error: Any) -> str:
    """User-visible text for any failure raised by the client."""
    if isinstance(error, AuthorizationFailure):
        return SESSION_EXPIRED_MESSAGE
    if isinstance(error, ValidationError) and error.errors:
        return ", ".join(item.msg for item in error.errors)
    if isinstance(error, DomainError):
        return error.message or GENERIC_ERROR_MESSAGE
    if isinstance(error, str) and error:
        return error
    message = getattr(error, "message", None) or (str(error) if isinstance(error, Exception) else "")
    return message or GENERIC_ERROR_MESSAGE
