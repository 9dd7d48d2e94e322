"""Tests for read-modify-write entity operations."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from schedulenest.data import documents, repositories
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
)

CREATED = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)


def _schedule(schedule_id="sc1", **overrides):
    fields = {
        "id": schedule_id,
        "title": "Meeting",
        "date": date(2024, 5, 1),
        "category": "업무",
        "created_at": CREATED,
    }
    fields.update(overrides)
    return Schedule(**fields)


def _todo(todo_id="t1", **overrides):
    fields = {"id": todo_id, "title": "Write report", "category": "업무", "created_at": CREATED}
    fields.update(overrides)
    return Todo(**fields)


def _note(note_id="n1", folder_id="folder_개인", **overrides):
    fields = {
        "id": note_id,
        "title": "Idea",
        "content": "Body",
        "category": "개인",
        "folder_id": folder_id,
        "created_at": CREATED,
        "updated_at": CREATED,
    }
    fields.update(overrides)
    return Note(**fields)


def _raw(store: KeyValueStore, system_code: str) -> str:
    return store.get(f"schedulenest_{system_code}")


def test_add_schedule_then_load(store, system_code):
    result = repositories.add_schedule(store, system_code, _schedule())
    assert result is MutationResult.APPLIED

    document = documents.load(store, system_code)
    assert [item.id for item in document.schedules] == ["sc1"]
    assert document.schedules[0].title == "Meeting"


def test_mutations_without_document_are_not_found(store):
    assert repositories.add_schedule(store, "ghost", _schedule()) is MutationResult.NOT_FOUND
    assert repositories.add_todo(store, "ghost", _todo()) is MutationResult.NOT_FOUND
    assert repositories.delete_todo(store, "ghost", "t1") is MutationResult.NOT_FOUND
    assert repositories.add_folder(store, "ghost", Folder(id="f", name="F")) is MutationResult.NOT_FOUND
    assert store.keys("schedulenest_") == []


def test_add_with_empty_category_falls_back_to_first_category(store, system_code):
    repositories.add_schedule(store, system_code, _schedule(category=""))
    repositories.add_todo(store, system_code, _todo(category="  "))

    document = documents.load(store, system_code)
    assert document.schedules[0].category == "개인"
    assert document.todos[0].category == "개인"


def test_add_with_empty_category_and_empty_vocabulary_uses_literal_default(store, system_code):
    document = documents.load(store, system_code)
    document.categories = []
    documents.save(store, document)

    repositories.add_todo(store, system_code, _todo(category=""))
    assert documents.load(store, system_code).todos[0].category == "기타"


def test_unknown_category_is_kept_as_orphan(store, system_code):
    repositories.add_todo(store, system_code, _todo(category="취미"))
    document = documents.load(store, system_code)
    assert document.todos[0].category == "취미"
    assert "취미" not in document.categories


def test_update_todo_missing_id_leaves_document_unchanged(store, system_code):
    repositories.add_todo(store, system_code, _todo())
    before = _raw(store, system_code)

    result = repositories.update_todo(store, system_code, "missing", TodoPatch(completed=True))

    assert result is MutationResult.NOT_FOUND
    assert _raw(store, system_code) == before


def test_update_schedule_changes_only_patched_field(store, system_code):
    repositories.add_schedule(store, system_code, _schedule("sc1", content="agenda"))
    repositories.add_schedule(store, system_code, _schedule("sc2", title="Lunch"))
    before = documents.load(store, system_code)

    result = repositories.update_schedule(store, system_code, "sc1", SchedulePatch(title="Standup"))

    assert result is MutationResult.APPLIED
    after = documents.load(store, system_code)
    assert after.schedules[0].title == "Standup"
    assert after.schedules[0].model_dump(exclude={"title"}) == before.schedules[0].model_dump(exclude={"title"})
    assert after.schedules[1] == before.schedules[1]
    assert after.todos == before.todos
    assert after.folders == before.folders


def test_update_todo_toggles_completed_without_stamping(store, system_code):
    repositories.add_todo(store, system_code, _todo())
    repositories.update_todo(store, system_code, "t1", TodoPatch(completed=True))

    todo = documents.load(store, system_code).todos[0]
    assert todo.completed is True
    assert todo.created_at == CREATED


def test_update_note_stamps_updated_at(store, system_code, monkeypatch):
    stamp = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    monkeypatch.setattr(repositories, "_utcnow", lambda: stamp)
    repositories.add_note(store, system_code, _note())
    before = documents.load(store, system_code).folders[0].notes[0]

    result = repositories.update_note(store, system_code, "n1", NotePatch(content="Edited"))

    assert result is MutationResult.APPLIED
    note = documents.load(store, system_code).folders[0].notes[0]
    assert note.content == "Edited"
    assert note.updated_at == stamp
    assert note.model_dump(exclude={"content", "updated_at"}) == before.model_dump(exclude={"content", "updated_at"})


def test_update_note_missing_id_is_not_found(store, system_code):
    assert repositories.update_note(store, system_code, "nope", NotePatch(title="x")) is MutationResult.NOT_FOUND


def test_delete_twice_matches_delete_once(store, system_code):
    repositories.add_schedule(store, system_code, _schedule("sc1"))
    repositories.add_schedule(store, system_code, _schedule("sc2"))

    assert repositories.delete_schedule(store, system_code, "sc1") is MutationResult.APPLIED
    once = _raw(store, system_code)
    assert repositories.delete_schedule(store, system_code, "sc1") is MutationResult.APPLIED
    assert _raw(store, system_code) == once
    assert [item.id for item in documents.load(store, system_code).schedules] == ["sc2"]


def test_delete_note_twice_matches_delete_once(store, system_code):
    repositories.add_note(store, system_code, _note("n1", folder_id="folder_개인"))
    repositories.add_note(store, system_code, _note("n2", folder_id="folder_기타"))

    assert repositories.delete_note(store, system_code, "n1") is MutationResult.APPLIED
    once = _raw(store, system_code)
    assert repositories.delete_note(store, system_code, "n1") is MutationResult.APPLIED
    assert _raw(store, system_code) == once
    remaining = [note.id for folder in documents.load(store, system_code).folders for note in folder.notes]
    assert remaining == ["n2"]


def test_delete_folder_twice_matches_delete_once(store, system_code):
    repositories.add_folder(store, system_code, Folder(id="folder_1", name="Trips"))

    assert repositories.delete_folder(store, system_code, "folder_1", protect_default=True) is MutationResult.APPLIED
    once = _raw(store, system_code)
    assert repositories.delete_folder(store, system_code, "folder_1", protect_default=True) is MutationResult.APPLIED
    assert _raw(store, system_code) == once
    assert "folder_1" not in [folder.id for folder in documents.load(store, system_code).folders]


def test_delete_todo_removes_matching_entry(store, system_code):
    repositories.add_todo(store, system_code, _todo("t1"))
    repositories.add_todo(store, system_code, _todo("t2"))
    repositories.delete_todo(store, system_code, "t1")
    assert [item.id for item in documents.load(store, system_code).todos] == ["t2"]


def test_add_note_lands_in_exactly_one_folder(store, system_code):
    repositories.add_note(store, system_code, _note(folder_id="folder_업무"), folder_id="folder_업무")

    document = documents.load(store, system_code)
    owners = [folder.id for folder in document.folders if any(note.id == "n1" for note in folder.notes)]
    assert owners == ["folder_업무"]


def test_add_note_folder_argument_overrides_note_folder_id(store, system_code):
    repositories.add_note(store, system_code, _note(folder_id="folder_개인"), folder_id="folder_학교")

    document = documents.load(store, system_code)
    school = next(folder for folder in document.folders if folder.id == "folder_학교")
    assert school.notes[0].folder_id == "folder_학교"


def test_add_note_to_missing_folder_is_not_found(store, system_code):
    before = _raw(store, system_code)
    result = repositories.add_note(store, system_code, _note(folder_id="folder_missing"))
    assert result is MutationResult.NOT_FOUND
    assert _raw(store, system_code) == before


def test_delete_note_scans_all_folders(store, system_code):
    repositories.add_note(store, system_code, _note("n1", folder_id="folder_개인"))
    repositories.add_note(store, system_code, _note("n2", folder_id="folder_기타"))

    repositories.delete_note(store, system_code, "n2")

    document = documents.load(store, system_code)
    remaining = [note.id for folder in document.folders for note in folder.notes]
    assert remaining == ["n1"]


def test_delete_default_folder_without_protection(store, system_code):
    result = repositories.delete_folder(store, system_code, "folder_개인", protect_default=False)

    assert result is MutationResult.APPLIED
    ids = [folder.id for folder in documents.load(store, system_code).folders]
    assert "folder_개인" not in ids
    assert len(ids) == 3


def test_delete_default_folder_uses_setting_by_default(store, system_code):
    assert repositories.delete_folder(store, system_code, "folder_기타") is MutationResult.APPLIED


def test_delete_default_folder_with_protection(store, system_code):
    before = _raw(store, system_code)
    result = repositories.delete_folder(store, system_code, "folder_개인", protect_default=True)
    assert result is MutationResult.PROTECTED
    assert _raw(store, system_code) == before


def test_delete_custom_folder_drops_its_notes(store, system_code):
    repositories.add_folder(store, system_code, Folder(id="folder_1", name="Trips"))
    repositories.add_note(store, system_code, _note("n9", folder_id="folder_1"))

    result = repositories.delete_folder(store, system_code, "folder_1", protect_default=True)

    assert result is MutationResult.APPLIED
    document = documents.load(store, system_code)
    assert all(note.id != "n9" for folder in document.folders for note in folder.notes)


def test_update_folder_renames(store, system_code):
    repositories.add_folder(store, system_code, Folder(id="folder_1", name="Trips"))
    repositories.update_folder(store, system_code, "folder_1", FolderPatch(name="Travel"))
    folder = documents.load(store, system_code).folders[-1]
    assert folder.name == "Travel"
    assert folder.is_default is False


def test_folder_patch_cannot_change_default_flag(store, system_code):
    with pytest.raises(ValidationError):
        FolderPatch.model_validate({"isDefault": False})
    with pytest.raises(ValidationError):
        FolderPatch(is_default=True)
    assert documents.load(store, system_code).folders[0].is_default is True


def test_add_and_remove_category(store, system_code):
    assert repositories.add_category(store, system_code, " 취미 ") is MutationResult.APPLIED
    assert repositories.add_category(store, system_code, "취미") is MutationResult.APPLIED
    assert documents.load(store, system_code).categories == ["개인", "업무", "학교", "기타", "취미"]

    assert repositories.remove_category(store, system_code, "업무") is MutationResult.APPLIED
    assert "업무" not in documents.load(store, system_code).categories


def test_add_blank_category_is_rejected(store, system_code):
    with pytest.raises(ValueError):
        repositories.add_category(store, system_code, "   ")


def test_last_category_cannot_be_removed(store, system_code):
    for name in ["개인", "업무", "학교"]:
        repositories.remove_category(store, system_code, name)
    assert repositories.remove_category(store, system_code, "기타") is MutationResult.PROTECTED
    assert documents.load(store, system_code).categories == ["기타"]


def test_patches_cannot_touch_identity_fields():
    with pytest.raises(ValidationError):
        SchedulePatch(id="other")
    with pytest.raises(ValidationError):
        NotePatch.model_validate({"createdAt": "2024-01-01T00:00:00Z"})
    with pytest.raises(ValidationError):
        TodoPatch(title=None)
    with pytest.raises(ValidationError):
        FolderPatch.model_validate({"notes": []})


def test_patch_changes_only_contains_explicit_fields():
    patch = TodoPatch.model_validate({"completed": True, "dueDate": ""})
    assert patch.changes() == {"completed": True, "due_date": None}
