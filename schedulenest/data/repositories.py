from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from schedulenest.constants import FALLBACK_CATEGORY
from schedulenest.data import documents
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.errors import MutationResult
from schedulenest.schemas import (
    Folder,
    FolderPatch,
    Note,
    NotePatch,
    Schedule,
    SchedulePatch,
    Todo,
    TodoPatch,
    UserDataDocument,
)
from schedulenest.settings import get_settings

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _apply(
    store: KeyValueStore,
    system_code: str,
    mutate: Callable[[UserDataDocument], MutationResult],
) -> MutationResult:
    """Load the document, run one mutation, save the whole document back.

    Nothing is written unless the mutation reports ``APPLIED``.
    """
    document = documents.load(store, system_code)
    if document is None:
        logger.debug("No document for '%s'; mutation skipped.", system_code)
        return MutationResult.NOT_FOUND
    result = mutate(document)
    if result is MutationResult.APPLIED:
        documents.save(store, document)
    return result


def resolve_category(document: UserDataDocument, category: str | None) -> str:
    clean = (category or "").strip()
    if clean:
        return clean
    if document.categories:
        return document.categories[0]
    return FALLBACK_CATEGORY


def _index_of(items, entity_id: str) -> int:
    for index, item in enumerate(items):
        if item.id == entity_id:
            return index
    return -1


# Schedules


def add_schedule(store: KeyValueStore, system_code: str, schedule: Schedule) -> MutationResult:
    def mutate(document):
        document.schedules.append(
            schedule.model_copy(update={"category": resolve_category(document, schedule.category)})
        )
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


def update_schedule(
    store: KeyValueStore, system_code: str, schedule_id: str, patch: SchedulePatch
) -> MutationResult:
    def mutate(document):
        index = _index_of(document.schedules, schedule_id)
        if index == -1:
            return MutationResult.NOT_FOUND
        document.schedules[index] = document.schedules[index].model_copy(update=patch.changes())
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


def delete_schedule(store: KeyValueStore, system_code: str, schedule_id: str) -> MutationResult:
    def mutate(document):
        document.schedules = [item for item in document.schedules if item.id != schedule_id]
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


# Todos


def add_todo(store: KeyValueStore, system_code: str, todo: Todo) -> MutationResult:
    def mutate(document):
        document.todos.append(
            todo.model_copy(update={"category": resolve_category(document, todo.category)})
        )
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


def update_todo(store: KeyValueStore, system_code: str, todo_id: str, patch: TodoPatch) -> MutationResult:
    def mutate(document):
        index = _index_of(document.todos, todo_id)
        if index == -1:
            return MutationResult.NOT_FOUND
        document.todos[index] = document.todos[index].model_copy(update=patch.changes())
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


def delete_todo(store: KeyValueStore, system_code: str, todo_id: str) -> MutationResult:
    def mutate(document):
        document.todos = [item for item in document.todos if item.id != todo_id]
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


# Notes live inside folders; a note is created in one folder and never moved.


def add_note(
    store: KeyValueStore, system_code: str, note: Note, folder_id: str | None = None
) -> MutationResult:
    target_id = folder_id or note.folder_id

    def mutate(document):
        index = _index_of(document.folders, target_id)
        if index == -1:
            logger.debug("Folder '%s' not found; note not added.", target_id)
            return MutationResult.NOT_FOUND
        document.folders[index].notes.append(
            note.model_copy(
                update={
                    "folder_id": target_id,
                    "category": resolve_category(document, note.category),
                }
            )
        )
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


def update_note(store: KeyValueStore, system_code: str, note_id: str, patch: NotePatch) -> MutationResult:
    def mutate(document):
        for folder in document.folders:
            index = _index_of(folder.notes, note_id)
            if index == -1:
                continue
            changes = patch.changes()
            changes["updated_at"] = _utcnow()
            folder.notes[index] = folder.notes[index].model_copy(update=changes)
            return MutationResult.APPLIED
        return MutationResult.NOT_FOUND

    return _apply(store, system_code, mutate)


def delete_note(store: KeyValueStore, system_code: str, note_id: str) -> MutationResult:
    def mutate(document):
        for folder in document.folders:
            folder.notes = [item for item in folder.notes if item.id != note_id]
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


# Folders


def add_folder(store: KeyValueStore, system_code: str, folder: Folder) -> MutationResult:
    def mutate(document):
        document.folders.append(folder.model_copy(deep=True))
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


def update_folder(store: KeyValueStore, system_code: str, folder_id: str, patch: FolderPatch) -> MutationResult:
    def mutate(document):
        index = _index_of(document.folders, folder_id)
        if index == -1:
            return MutationResult.NOT_FOUND
        document.folders[index] = document.folders[index].model_copy(update=patch.changes())
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


def delete_folder(
    store: KeyValueStore,
    system_code: str,
    folder_id: str,
    protect_default: bool | None = None,
) -> MutationResult:
    """Remove a folder together with the notes it owns.

    Default folders are only kept when ``protect_default`` is true; ``None``
    falls back to the ``protect_default_folders`` setting.
    """
    if protect_default is None:
        protect_default = get_settings().protect_default_folders

    def mutate(document):
        if protect_default:
            index = _index_of(document.folders, folder_id)
            if index != -1 and document.folders[index].is_default:
                logger.info("Refusing to delete default folder '%s'.", folder_id)
                return MutationResult.PROTECTED
        document.folders = [item for item in document.folders if item.id != folder_id]
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


# Category vocabulary


def add_category(store: KeyValueStore, system_code: str, name: str) -> MutationResult:
    clean = (name or "").strip()
    if not clean:
        raise ValueError("Category name cannot be empty")

    def mutate(document):
        if clean not in document.categories:
            document.categories.append(clean)
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)


def remove_category(store: KeyValueStore, system_code: str, name: str) -> MutationResult:
    """Drop a category from the vocabulary.

    Entities still tagged with it keep the value. The last remaining
    category cannot be removed.
    """

    def mutate(document):
        if name not in document.categories:
            return MutationResult.APPLIED
        if len(document.categories) == 1:
            return MutationResult.PROTECTED
        document.categories = [item for item in document.categories if item != name]
        return MutationResult.APPLIED

    return _apply(store, system_code, mutate)
