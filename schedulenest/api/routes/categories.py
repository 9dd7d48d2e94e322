from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from schedulenest.api.auth import get_kv_store, require_system_code
from schedulenest.api.responses import mutation_response
from schedulenest.data import repositories
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.schemas import CategoryCreate, MutationResponse

router = APIRouter()


@router.post("/v1/categories", response_model=MutationResponse, status_code=201)
def add_category(
    payload: CategoryCreate,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    try:
        result = repositories.add_category(store, system_code, payload.name)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return mutation_response(result, "Document")


@router.delete("/v1/categories/{name}", response_model=MutationResponse)
def remove_category(
    name: str,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    return mutation_response(repositories.remove_category(store, system_code, name), "Category")
