from __future__ import annotations

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Engine

from schedulenest.constants import KV_TABLE


def init_db(engine: Engine) -> None:
    with engine.begin() as conn:
        conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {KV_TABLE} (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
        )
