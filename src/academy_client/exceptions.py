from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FieldError:
    path: str
    msg: str


@dataclass
class ApiError(Exception):
    message: str
    status_code: int
    errors: list[FieldError] = field(default_factory=list)
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.message}"


class AuthorizationFailure(ApiError):
    """401/403: the session is no longer usable and must be terminated."""


class UnauthorizedError(AuthorizationFailure):
    pass


class ForbiddenError(AuthorizationFailure):
    pass


class DomainError(ApiError):
    """Any other failure; shown to the user, session untouched."""


class ValidationError(DomainError):
    pass


class NotFoundError(DomainError):
    pass


class ConflictError(DomainError):
    pass


class ServerError(DomainError):
    pass


class TransportError(DomainError):
    """Network failure before an HTTP response was returned."""
