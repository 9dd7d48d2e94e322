from __future__ import annotations

import logging

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from schedulenest.constants import KV_TABLE
from schedulenest.db import get_engine
from schedulenest.db_init import init_db
from schedulenest.errors import StorageWriteError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Synchronous string-to-string map persisted in a single SQL table.

    Every call opens and commits its own transaction; there is no locking
    between calls, so a read followed by a write is not atomic.
    """

    def __init__(self, engine: Engine, create_table: bool = True):
        self._engine = engine
        if create_table:
            init_db(engine)

    @property
    def engine(self) -> Engine:
        return self._engine

    def get(self, key: str) -> str | None:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    sql_text(f"SELECT value FROM {KV_TABLE} WHERE key = :key"),
                    {"key": key},
                ).fetchone()
        except SQLAlchemyError as exc:
            logger.error("Failed to read key '%s': %s", key, exc)
            return None
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    sql_text(
                        f"INSERT INTO {KV_TABLE} (key, value) VALUES (:key, :value) "
                        "ON CONFLICT(key) DO UPDATE SET value=EXCLUDED.value"
                    ),
                    {"key": key, "value": value},
                )
        except SQLAlchemyError as exc:
            raise StorageWriteError(key, str(exc)) from exc

    def keys(self, prefix: str = "") -> list[str]:
        query = f"SELECT key FROM {KV_TABLE}"
        params = {}
        if prefix:
            # LIKE would treat "_" in prefixes as a wildcard.
            query += " WHERE substr(key, 1, :size) = :prefix"
            params = {"size": len(prefix), "prefix": prefix}
        query += " ORDER BY key"
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(sql_text(query), params).fetchall()
        except SQLAlchemyError as exc:
            logger.error("Failed to list keys with prefix '%s': %s", prefix, exc)
            return []
        return [row[0] for row in rows]

    def clear(self) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(sql_text(f"DELETE FROM {KV_TABLE}"))
        except SQLAlchemyError as exc:
            raise StorageWriteError("*", str(exc)) from exc


_store: KeyValueStore | None = None


def get_store() -> KeyValueStore:
    global _store
    if _store is None:
        _store = KeyValueStore(get_engine())
    return _store