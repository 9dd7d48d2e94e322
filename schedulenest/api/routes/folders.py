from __future__ import annotations

from fastapi import APIRouter, Depends

from schedulenest.api.auth import get_kv_store, require_system_code
from schedulenest.api.responses import entity_payload, mutation_response, new_entity_id, stored_payload, utcnow
from schedulenest.data import queries, repositories
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.schemas import (
    Folder,
    FolderCreate,
    FolderPatch,
    MutationResponse,
    Note,
    NoteCreate,
    NotePatch,
)

router = APIRouter()


@router.post("/v1/folders", status_code=201)
def create_folder(
    payload: FolderCreate,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    folder = Folder(id=new_entity_id("folder"), name=payload.name, is_default=False, notes=[])
    mutation_response(repositories.add_folder(store, system_code, folder), "Document")
    return entity_payload(folder)


@router.patch("/v1/folders/{folder_id}", response_model=MutationResponse)
def patch_folder(
    folder_id: str,
    payload: FolderPatch,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    return mutation_response(repositories.update_folder(store, system_code, folder_id, payload), "Folder")


@router.delete("/v1/folders/{folder_id}", response_model=MutationResponse)
def delete_folder(
    folder_id: str,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    return mutation_response(repositories.delete_folder(store, system_code, folder_id), "Folder")


@router.post("/v1/folders/{folder_id}/notes", status_code=201)
def create_note(
    folder_id: str,
    payload: NoteCreate,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    now = utcnow()
    note = Note(
        id=new_entity_id("note"),
        title=payload.title,
        content=payload.content,
        category=payload.category,
        folder_id=folder_id,
        created_at=now,
        updated_at=now,
    )
    mutation_response(repositories.add_note(store, system_code, note, folder_id=folder_id), "Folder")
    return stored_payload(store, system_code, queries.find_note, note.id, note)


@router.patch("/v1/notes/{note_id}", response_model=MutationResponse)
def patch_note(
    note_id: str,
    payload: NotePatch,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    return mutation_response(repositories.update_note(store, system_code, note_id, payload), "Note")


@router.delete("/v1/notes/{note_id}", response_model=MutationResponse)
def delete_note(
    note_id: str,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    return mutation_response(repositories.delete_note(store, system_code, note_id), "Document")
