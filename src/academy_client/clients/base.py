from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from ..error_mapper import GENERIC_ERROR_MESSAGE
from ..exceptions import DomainError
from ..http_client import HttpClient
from ..retry import RetryPolicy

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass
class BaseClient:
    http: HttpClient
    retry_policy: RetryPolicy | None = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        return await self.http.request(method, path, **kwargs)

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    def _parse(self, model: type[M], data: Any) -> M:
        """Validate a successful response body; a body the model rejects is a domain failure."""
        try:
            return model.model_validate(data)
        except ModelValidationError as exc:
            logger.warning(
                "response_unparseable",
                extra={"model": model.__name__, "error_count": exc.error_count()},
            )
            raise DomainError(message=GENERIC_ERROR_MESSAGE, status_code=200, raw_payload=data) from exc
