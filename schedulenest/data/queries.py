from __future__ import annotations

from datetime import date

from schedulenest.constants import TODO_STATUS_FILTERS
from schedulenest.schemas import Folder, Note, Schedule, Todo, UserDataDocument


def _sort_key(schedule: Schedule):
    return (schedule.start_time is None, schedule.start_time or "", schedule.created_at.isoformat())


def schedules_on(document: UserDataDocument, day: date) -> list[Schedule]:
    return sorted((item for item in document.schedules if item.date == day), key=_sort_key)


def todos_due_on(document: UserDataDocument, day: date) -> list[Todo]:
    return [item for item in document.todos if item.due_date is not None and item.due_date == day]


def dates_with_entries(document: UserDataDocument) -> set[date]:
    days = {item.date for item in document.schedules}
    days.update(item.due_date for item in document.todos if item.due_date is not None)
    return days


def filter_todos(document: UserDataDocument, category: str = "all", status: str = "all") -> list[Todo]:
    if status not in TODO_STATUS_FILTERS:
        raise ValueError(f"Unknown todo status filter: {status}")
    items = []
    for todo in document.todos:
        if category != "all" and todo.category != category:
            continue
        if status == "completed" and not todo.completed:
            continue
        if status == "pending" and todo.completed:
            continue
        items.append(todo)
    return items


def find_folder(document: UserDataDocument, folder_id: str) -> Folder | None:
    for folder in document.folders:
        if folder.id == folder_id:
            return folder
    return None


def find_note(document: UserDataDocument, note_id: str) -> Note | None:
    for folder in document.folders:
        for note in folder.notes:
            if note.id == note_id:
                return note
    return None


def find_schedule(document: UserDataDocument, schedule_id: str) -> Schedule | None:
    for schedule in document.schedules:
        if schedule.id == schedule_id:
            return schedule
    return None


def find_todo(document: UserDataDocument, todo_id: str) -> Todo | None:
    for todo in document.todos:
        if todo.id == todo_id:
            return todo
    return None
