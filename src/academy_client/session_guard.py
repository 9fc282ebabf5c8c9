from __future__ import annotations

import logging

from .auth_store import SessionStore
from .models import SessionData
from .navigation import Navigator

logger = logging.getLogger(__name__)


class SessionGuard:
    def __init__(self, store: SessionStore, navigator: Navigator) -> None:
        self._store = store
        self._navigator = navigator

    def require_session(self, module: str) -> SessionData | None:
        session = self._store.load()
        if session is not None:
            return session
        logger.info("session_required", extra={"view": module})
        self._navigator.to_login()
        return None
