from __future__ import annotations

import re

from fastapi import Depends, Header, HTTPException

from schedulenest.constants import ACCESS_CODE_MAX_LENGTH, ACCESS_CODE_MIN_LENGTH, ACCESS_CODE_PATTERN
from schedulenest.data import documents, mapping
from schedulenest.data.kv_store import KeyValueStore, get_store

_CODE_RE = re.compile(ACCESS_CODE_PATTERN)


def get_kv_store() -> KeyValueStore:
    return get_store()


def is_valid_access_code(code: str) -> bool:
    if not code:
        return False
    if len(code) < ACCESS_CODE_MIN_LENGTH or len(code) > ACCESS_CODE_MAX_LENGTH:
        return False
    return bool(_CODE_RE.match(code))


def normalize_access_code(raw: str | None) -> str:
    code = (raw or "").strip().lower()
    if not code:
        raise HTTPException(status_code=401, detail="Missing access code")
    if not is_valid_access_code(code):
        raise HTTPException(
            status_code=400,
            detail=(
                f"Access code must be {ACCESS_CODE_MIN_LENGTH}-{ACCESS_CODE_MAX_LENGTH} "
                "lowercase letters or digits"
            ),
        )
    return code


async def require_system_code(
    x_access_code: str | None = Header(default=None, alias="X-Access-Code"),
    store: KeyValueStore = Depends(get_kv_store),
) -> str:
    code = normalize_access_code(x_access_code)
    system_code = mapping.resolve(store, code)
    if system_code is None or documents.load(store, system_code) is None:
        raise HTTPException(status_code=401, detail="Unknown access code")
    return system_code
