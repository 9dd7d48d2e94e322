from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from schedulenest.constants import DEFAULT_CATEGORIES, DEFAULT_FOLDER_ID_PREFIX
from schedulenest.data import mapping
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.schemas import Folder, UserDataDocument
from schedulenest.settings import get_settings

logger = logging.getLogger(__name__)


def create_initial_document(system_code: str) -> UserDataDocument:
    categories = list(DEFAULT_CATEGORIES)
    folders = [
        Folder(
            id=f"{DEFAULT_FOLDER_ID_PREFIX}{category}",
            name=category,
            is_default=True,
            notes=[],
        )
        for category in categories
    ]
    return UserDataDocument(
        access_code=system_code,
        schedules=[],
        todos=[],
        folders=folders,
        categories=categories,
    )


def load(store: KeyValueStore, system_code: str) -> UserDataDocument | None:
    raw = store.get(get_settings().document_key(system_code))
    if not raw:
        return None
    try:
        return UserDataDocument.model_validate_json(raw)
    except (ValidationError, json.JSONDecodeError) as exc:
        logger.warning("Discarding unreadable document for '%s': %s", system_code, exc)
        return None


def save(store: KeyValueStore, document: UserDataDocument) -> None:
    """Persist the whole document under its own ``accessCode``.

    Raises ``StorageWriteError`` when the store rejects the write.
    """
    store.set(get_settings().document_key(document.access_code), document.to_json())


def exists_for_user_code(store: KeyValueStore, user_code: str) -> bool:
    system_code = mapping.resolve(store, user_code)
    if system_code is None:
        return False
    return load(store, system_code) is not None


def register_user_code(store: KeyValueStore, user_code: str) -> UserDataDocument:
    """Map ``user_code`` and store its initial document.

    A code that already owns a document keeps it unchanged.
    """
    system_code = mapping.create_mapping(store, user_code)
    existing = load(store, system_code)
    if existing is not None:
        return existing
    document = create_initial_document(system_code)
    save(store, document)
    logger.info("Registered access code with a new document.")
    return document


def load_for_user_code(store: KeyValueStore, user_code: str) -> UserDataDocument | None:
    system_code = mapping.resolve(store, user_code)
    if system_code is None:
        return None
    return load(store, system_code)


def wipe_all(store: KeyValueStore) -> None:
    store.clear()
    logger.info("Storage wiped.")
