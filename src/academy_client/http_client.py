from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable

import httpx

from .config import ClientConfig
from .downloads import DownloadedFile, filename_from_content_disposition
from .error_mapper import CONNECTION_ERROR_MESSAGE, GENERIC_ERROR_MESSAGE, map_error
from .exceptions import ApiError, AuthorizationFailure, DomainError, TransportError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], "str | None"]
AuthFailureHandler = Callable[[AuthorizationFailure], None]


def clean_params(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return None
    cleaned = {key: value for key, value in params.items() if value not in (None, "")}
    return cleaned or None


class HttpClient:
    """One request with the current bearer token, classified into result or error."""

    def __init__(
        self,
        config: ClientConfig,
        token_provider: TokenProvider | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._token_provider = token_provider
        self._client = client or httpx.AsyncClient(
            base_url=config.api_base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
            verify=config.verify_ssl,
        )
        self._auth_failure_handler: AuthFailureHandler | None = None

    def register_auth_failure_handler(self, handler: AuthFailureHandler | None) -> None:
        self._auth_failure_handler = handler

    def _headers(self, extra: Mapping[str, str] | None, authenticated: bool, accept: str) -> dict[str, str]:
        headers = {"Accept": accept}
        if authenticated and self._token_provider is not None:
            token = self._token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        if extra:
            headers.update(extra)
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
        files: Any = None,
        headers: Mapping[str, str] | None = None,
        authenticated: bool = True,
        accept: str = "application/json",
    ) -> httpx.Response:
        normalized_method = method.upper()
        normalized_path = path if path.startswith("/") else f"/{path}"
        try:
            response = await self._client.request(
                normalized_method,
                normalized_path,
                json=json_body,
                params=clean_params(params),
                files=files,
                headers=self._headers(headers, authenticated, accept),
            )
        except httpx.TransportError as exc:
            logger.warning(
                "request_transport_error",
                extra={"method": normalized_method, "path": normalized_path, "error": type(exc).__name__},
            )
            raise TransportError(message=CONNECTION_ERROR_MESSAGE, status_code=0) from exc

        if response.is_success:
            logger.debug(
                "request_ok",
                extra={"method": normalized_method, "path": normalized_path, "status": response.status_code},
            )
            return response

        error = self._error_from_response(response)
        logger.warning(
            "request_failed",
            extra={
                "method": normalized_method,
                "path": normalized_path,
                "status": response.status_code,
                "error_type": type(error).__name__,
            },
        )
        if isinstance(error, AuthorizationFailure):
            self._notify_auth_failure(error)
        raise error

    async def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
        files: Any = None,
        headers: Mapping[str, str] | None = None,
        authenticated: bool = True,
    ) -> Any:
        response = await self._send(
            method,
            path,
            json_body=json_body,
            params=params,
            files=files,
            headers=headers,
            authenticated=authenticated,
        )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise DomainError(message=GENERIC_ERROR_MESSAGE, status_code=response.status_code) from exc

    async def download(
        self,
        path: str,
        *,
        default_filename: str,
        params: Mapping[str, Any] | None = None,
    ) -> DownloadedFile:
        response = await self._send("GET", path, params=params, accept="*/*")
        filename = filename_from_content_disposition(response.headers.get("content-disposition"))
        return DownloadedFile(
            filename=filename or default_filename,
            content=response.content,
            content_type=response.headers.get("content-type"),
        )

    def _notify_auth_failure(self, error: AuthorizationFailure) -> None:
        if self._auth_failure_handler is None:
            return
        self._auth_failure_handler(error)

    @staticmethod
    def _error_from_response(response: httpx.Response) -> ApiError:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        return map_error(response.status_code, payload if isinstance(payload, dict) else None)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
