from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from schedulenest.api.auth import get_kv_store, require_system_code
from schedulenest.api.responses import entity_payload
from schedulenest.data import documents, queries
from schedulenest.data.kv_store import KeyValueStore

router = APIRouter()


def _load(store: KeyValueStore, system_code: str):
    document = documents.load(store, system_code)
    if document is None:
        raise HTTPException(status_code=404, detail="Document not found")
    return document


@router.get("/v1/document")
def get_document(
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    return _load(store, system_code).to_payload()


@router.get("/v1/day/{day}")
def get_day(
    day: date,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    document = _load(store, system_code)
    return {
        "date": day.isoformat(),
        "schedules": [entity_payload(item) for item in queries.schedules_on(document, day)],
        "todos": [entity_payload(item) for item in queries.todos_due_on(document, day)],
    }


@router.get("/v1/calendar/marked-days")
def get_marked_days(
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    document = _load(store, system_code)
    return {"days": sorted(day.isoformat() for day in queries.dates_with_entries(document))}

