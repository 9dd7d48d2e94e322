from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from schedulenest.api.auth import get_kv_store, normalize_access_code
from schedulenest.data import documents, mapping
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.errors import StorageWriteError
from schedulenest.schemas import AccessCodeResponse

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_GENERATION_ATTEMPTS = 20


@router.post("/v1/codes", response_model=AccessCodeResponse, status_code=201)
def create_code(store: KeyValueStore = Depends(get_kv_store)):
    for _ in range(MAX_GENERATION_ATTEMPTS):
        code = mapping.generate_access_code()
        if mapping.resolve(store, code) is None:
            break
    else:
        raise HTTPException(status_code=503, detail="Could not allocate a free access code")
    try:
        documents.register_user_code(store, code)
    except StorageWriteError as exc:
        logger.error("Failed to register access code: %s", exc)
        raise HTTPException(status_code=507, detail="Storage is full or unavailable")
    if not documents.exists_for_user_code(store, code):
        raise HTTPException(status_code=507, detail="Access code was not persisted")
    return {"access_code": code, "exists": True}


@router.get("/v1/codes/{code}", response_model=AccessCodeResponse)
def check_code(code: str, store: KeyValueStore = Depends(get_kv_store)):
    clean = normalize_access_code(code)
    return {"access_code": clean, "exists": documents.exists_for_user_code(store, clean)}
