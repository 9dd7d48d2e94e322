from __future__ import annotations

from schedulenest.data.kv_store import KeyValueStore
from schedulenest.settings import get_settings


def is_dark_mode(store: KeyValueStore) -> bool:
    raw = store.get(get_settings().dark_mode_key)
    return str(raw or "").strip().lower() == "true"


def set_dark_mode(store: KeyValueStore, enabled: bool) -> bool:
    store.set(get_settings().dark_mode_key, "true" if enabled else "false")
    return bool(enabled)


def toggle_dark_mode(store: KeyValueStore) -> bool:
    return set_dark_mode(store, not is_dark_mode(store))
