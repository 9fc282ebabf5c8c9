from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Protocol

from platformdirs import user_data_dir
from pydantic import ValidationError as ModelValidationError

from .models import SessionData, UserProfile

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"
AUTH_STORAGE_KEYS = (TOKEN_KEY, USER_KEY)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set_many(self, values: Mapping[str, str]) -> None: ...

    def remove_many(self, keys: tuple[str, ...]) -> None: ...


@dataclass
class MemoryStorage:
    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set_many(self, values: Mapping[str, str]) -> None:
        self.values.update(values)

    def remove_many(self, keys: tuple[str, ...]) -> None:
        for key in keys:
            self.values.pop(key, None)


@dataclass
class FileStorage:
    """String key-value pairs kept in one JSON document on disk."""

    app_name: str = "academy-client"
    filename: str = "storage.json"
    path_override: Path | None = None

    def _path(self) -> Path:
        if self.path_override is not None:
            return self.path_override
        configured = os.getenv("ACADEMY_SESSION_PATH", "").strip()
        if configured:
            return Path(configured)
        return Path(user_data_dir(self.app_name, "Academy")) / self.filename

    def _read(self) -> dict[str, str]:
        path = self._path()
        if not path.exists():
            return {}
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (ValueError, OSError):
            return {}
        if not isinstance(payload, dict):
            return {}
        return {str(key): value for key, value in payload.items() if isinstance(value, str)}

    def _write(self, values: dict[str, str]) -> None:
        path = self._path()
        path.parent.mkdir(parents=True, exist_ok=True)
        # both keys must land in the same write
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(values, handle, indent=2)
            try:
                os.chmod(tmp_name, 0o600)
            except OSError as exc:
                logger.warning("session_file_chmod_failed", extra={"path": str(path), "error": str(exc)})
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set_many(self, values: Mapping[str, str]) -> None:
        current = self._read()
        current.update(values)
        self._write(current)

    def remove_many(self, keys: tuple[str, ...]) -> None:
        current = self._read()
        if not any(key in current for key in keys):
            return
        for key in keys:
            current.pop(key, None)
        if current:
            self._write(current)
        else:
            self._path().unlink(missing_ok=True)


@dataclass
class SessionStore:
    storage: KeyValueStorage = field(default_factory=FileStorage)

    def load(self) -> SessionData | None:
        token = self.storage.get(TOKEN_KEY)
        raw_user = self.storage.get(USER_KEY)
        if not token or not raw_user:
            return None
        try:
            user = UserProfile.model_validate_json(raw_user)
        except ModelValidationError:
            logger.warning("session_user_unparseable")
            return None
        return SessionData(token=token, user=user)

    def save(self, token: str, user: UserProfile) -> SessionData:
        session = SessionData(token=token, user=user)
        self.storage.set_many(
            {
                TOKEN_KEY: token,
                USER_KEY: user.model_dump_json(by_alias=True),
            }
        )
        logger.info("session_saved", extra={"user_id": user.id, "role": user.role.value})
        return session

    def clear(self) -> None:
        self.storage.remove_many(AUTH_STORAGE_KEYS)
        logger.info("session_cleared")

    def has_session(self) -> bool:
        return self.load() is not None
