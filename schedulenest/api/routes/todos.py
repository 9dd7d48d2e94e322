from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from schedulenest.api.auth import get_kv_store, require_system_code
from schedulenest.api.responses import entity_payload, mutation_response, new_entity_id, stored_payload, utcnow
from schedulenest.data import documents, queries, repositories
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.schemas import MutationResponse, Todo, TodoCreate, TodoPatch

router = APIRouter()


@router.get("/v1/todos")
def list_todos(
    category: str = Query("all"),
    status: str = Query("all"),
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    document = documents.load(store, system_code)
    if document is None:
        raise HTTPException(status_code=404, detail="Document not found")
    try:
        items = queries.filter_todos(document, category=category, status=status)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"items": [entity_payload(item) for item in items]}


@router.post("/v1/todos", status_code=201)
def create_todo(
    payload: TodoCreate,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    todo = Todo(
        id=new_entity_id("todo"),
        created_at=utcnow(),
        **payload.model_dump(),
    )
    mutation_response(repositories.add_todo(store, system_code, todo), "Document")
    return stored_payload(store, system_code, queries.find_todo, todo.id, todo)


@router.patch("/v1/todos/{todo_id}", response_model=MutationResponse)
def patch_todo(
    todo_id: str,
    payload: TodoPatch,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    return mutation_response(
        repositories.update_todo(store, system_code, todo_id, payload),
        "Todo",
    )


@router.delete("/v1/todos/{todo_id}", response_model=MutationResponse)
def delete_todo(
    todo_id: str,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    return mutation_response(repositories.delete_todo(store, system_code, todo_id), "Document")
