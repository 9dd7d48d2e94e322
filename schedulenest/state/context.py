from __future__ import annotations

import logging
from typing import Any, MutableMapping

from schedulenest.data import documents, preferences
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.schemas import UserDataDocument

logger = logging.getLogger(__name__)

SESSION_SLICE = "session"
ACTIVE_CODE = "active_code"
ACTIVE_DOCUMENT = "document"


class SessionContext:
    """In-memory mirror of the active user's document.

    CRUD calls never notify the context; callers invoke ``refresh_active``
    after every mutation. The dark-mode preference is stored globally in the
    key-value store and does not depend on the active code.
    """

    def __init__(self, store: KeyValueStore, state: MutableMapping[str, Any] | None = None):
        self.store = store
        self.state = state if state is not None else {}

    @classmethod
    def from_streamlit(cls, store: KeyValueStore) -> "SessionContext":
        from schedulenest.state import session_slices

        return cls(store, session_slices.get_slice(SESSION_SLICE))

    @property
    def active_code(self) -> str | None:
        return self.state.get(ACTIVE_CODE)

    @property
    def document(self) -> UserDataDocument | None:
        return self.state.get(ACTIVE_DOCUMENT)

    @property
    def is_authenticated(self) -> bool:
        return self.document is not None

    def set_active_code(self, code: str) -> None:
        self.state[ACTIVE_CODE] = code

    def load_active(self, code: str) -> UserDataDocument | None:
        document = documents.load_for_user_code(self.store, code)
        if document is None:
            logger.info("No document available for the presented access code.")
        self.state[ACTIVE_CODE] = code
        self.state[ACTIVE_DOCUMENT] = document
        return document

    def refresh_active(self) -> UserDataDocument | None:
        code = self.active_code
        if not code:
            return None
        return self.load_active(code)

    def clear_active(self) -> None:
        self.state.pop(ACTIVE_CODE, None)
        self.state.pop(ACTIVE_DOCUMENT, None)

    @property
    def system_code(self) -> str | None:
        document = self.document
        return document.access_code if document is not None else None

    def is_dark_mode(self) -> bool:
        return preferences.is_dark_mode(self.store)

    def set_dark_mode(self, enabled: bool) -> bool:
        return preferences.set_dark_mode(self.store, enabled)

    def toggle_dark_mode(self) -> bool:
        return preferences.toggle_dark_mode(self.store)
