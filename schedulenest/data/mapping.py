"""Access code to system code mapping.

A user-visible access code never addresses storage directly: it is mapped
once to a random system code, and the system code is the key of the
user's document. Mappings are written once and never rotated.
"""

from __future__ import annotations

import logging
import secrets

from schedulenest.constants import CODE_ALPHABET
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.errors import StorageWriteError
from schedulenest.settings import get_settings

logger = logging.getLogger(__name__)


def _random_code(length: int) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def generate_system_code(length: int | None = None) -> str:
    return _random_code(length or get_settings().system_code_length)


def generate_access_code(length: int | None = None) -> str:
    return _random_code(length or get_settings().system_code_length)


def create_mapping(store: KeyValueStore, user_code: str) -> str:
    """Map ``user_code`` to a fresh system code and return the system code.

    An existing mapping is never replaced; its system code is returned
    instead. No collision retry is attempted. A write failure is logged and
    the code is returned anyway; callers confirm with ``exists_for_user_code``.
    """
    existing = resolve(store, user_code)
    if existing is not None:
        return existing
    system_code = generate_system_code()
    key = get_settings().mapping_key(user_code)
    try:
        store.set(key, system_code)
    except StorageWriteError as exc:
        logger.warning("Mapping for '%s' was not persisted: %s", user_code, exc.reason)
    return system_code


def resolve(store: KeyValueStore, user_code: str) -> str | None:
    value = store.get(get_settings().mapping_key(user_code))
    if not value:
        return None
    return value
