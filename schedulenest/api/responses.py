from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from fastapi import HTTPException

from schedulenest.constants import ENTITY_ID_PREFIXES
from schedulenest.data import documents
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.errors import MutationResult


def new_entity_id(kind: str) -> str:
    stamp = int(datetime.now(timezone.utc).timestamp() * 1000)
    return f"{ENTITY_ID_PREFIXES[kind]}_{stamp}_{uuid4().hex[:6]}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def mutation_response(result: MutationResult, entity: str) -> dict:
    if result is MutationResult.NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"{entity} not found")
    if result is MutationResult.PROTECTED:
        raise HTTPException(status_code=409, detail=f"{entity} is protected")
    return {"ok": True, "result": result.value}


def entity_payload(model) -> dict:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def stored_payload(store: KeyValueStore, system_code: str, finder, entity_id: str, fallback) -> dict:
    # Category fallback is applied on write, so echo the stored copy.
    document = documents.load(store, system_code)
    stored = finder(document, entity_id) if document is not None else None
    return entity_payload(stored if stored is not None else fallback)
