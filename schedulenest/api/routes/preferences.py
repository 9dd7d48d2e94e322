from __future__ import annotations

from fastapi import APIRouter, Depends

from schedulenest.api.auth import get_kv_store
from schedulenest.data import preferences
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.schemas import DarkModePayload

router = APIRouter()


@router.get("/v1/preferences/dark-mode", response_model=DarkModePayload)
def get_dark_mode(store: KeyValueStore = Depends(get_kv_store)):
    return {"enabled": preferences.is_dark_mode(store)}


@router.put("/v1/preferences/dark-mode", response_model=DarkModePayload)
def set_dark_mode(payload: DarkModePayload, store: KeyValueStore = Depends(get_kv_store)):
    return {"enabled": preferences.set_dark_mode(store, payload.enabled)}


@router.post("/v1/preferences/dark-mode/toggle", response_model=DarkModePayload)
def toggle_dark_mode(store: KeyValueStore = Depends(get_kv_store)):
    return {"enabled": preferences.toggle_dark_mode(store)}
