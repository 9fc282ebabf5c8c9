from .auth_store import FileStorage, MemoryStorage, SessionStore
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthorizationFailure,
    ConflictError,
    DomainError,
    FieldError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .models import Role, SessionData, UserProfile
from .navigation import Navigator, Route
from .notifications import NotificationCenter
from .permissions import Action, PermissionDecision, assignable_roles, can_perform, check_permission
from .refetch import Debouncer, FilteredListing
from .retry import RetryPolicy, Retryable, retryable
from .session import ApiSession
from .session_guard import SessionGuard

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ApiError",
    "ApiSession",
    "AuthorizationFailure",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "Debouncer",
    "DomainError",
    "FieldError",
    "FileStorage",
    "FilteredListing",
    "ForbiddenError",
    "HttpClient",
    "MemoryStorage",
    "Navigator",
    "NotFoundError",
    "NotificationCenter",
    "PermissionDecision",
    "Retryable",
    "RetryPolicy",
    "Role",
    "Route",
    "ServerError",
    "SessionData",
    "SessionGuard",
    "SessionStore",
    "TransportError",
    "UnauthorizedError",
    "UserProfile",
    "ValidationError",
    "assignable_roles",
    "can_perform",
    "check_permission",
    "load_config",
    "retryable",
]
