from __future__ import annotations

import datetime as dt
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _normalize_time_value(value):
    if value is None:
        return None
    if hasattr(value, "strftime"):
        return value.strftime("%H:%M")
    value_str = str(value).strip()
    return value_str[:5] if value_str else None


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _require_title(value):
    if value is None:
        raise ValueError("title may not be null")
    clean = str(value).strip()
    if not clean:
        raise ValueError("title must not be empty")
    return clean


def _reject_null(value):
    if value is None:
        raise ValueError("field may not be null")
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Schedule(CamelModel):
    id: str
    title: str
    content: Optional[str] = None
    date: dt.date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    category: str = ""
    emoji: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    created_at: dt.datetime

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        return _require_title(value)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def check_times(cls, value):
        return _normalize_time_value(value)


class Todo(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[dt.date] = None
    category: str = ""
    completed: bool = False
    emoji: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    created_at: dt.datetime

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        return _require_title(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def check_due_date(cls, value):
        return _blank_to_none(value)


class Note(CamelModel):
    id: str
    title: str
    content: str = ""
    created_at: dt.datetime
    updated_at: dt.datetime
    category: str = ""
    folder_id: str


class Folder(CamelModel):
    id: str
    name: str
    is_default: bool = False
    notes: List[Note] = Field(default_factory=list)


class UserDataDocument(CamelModel):
    access_code: str
    schedules: List[Schedule] = Field(default_factory=list)
    todos: List[Todo] = Field(default_factory=list)
    folders: List[Folder] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)

    @field_validator("categories")
    @classmethod
    def dedupe_categories(cls, value):
        seen = set()
        ordered = []
        for item in value:
            if item in seen:
                continue
            seen.add(item)
            ordered.append(item)
        return ordered

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EntityPatch(CamelModel):
    """Base for typed partial updates.

    Only fields the caller explicitly set are applied. Identity fields
    (``id``, ``createdAt``, ``updatedAt``, ``folderId``) are not declared on
    any patch, and unknown keys are rejected.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class SchedulePatch(EntityPatch):
    title: Optional[str] = None
    content: Optional[str] = None
    date: Optional[dt.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    category: Optional[str] = None
    emoji: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        return _require_title(value)

    @field_validator("date", "category")
    @classmethod
    def check_required(cls, value):
        return _reject_null(value)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def check_times(cls, value):
        return _normalize_time_value(value)


class TodoPatch(EntityPatch):
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[dt.date] = None
    category: Optional[str] = None
    completed: Optional[bool] = None
    emoji: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        return _require_title(value)

    @field_validator("category", "completed")
    @classmethod
    def check_required(cls, value):
        return _reject_null(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def check_due_date(cls, value):
        return _blank_to_none(value)


class NotePatch(EntityPatch):
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None

    @field_validator("title", "content", "category")
    @classmethod
    def check_required(cls, value):
        return _reject_null(value)


class FolderPatch(EntityPatch):
    name: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_required(cls, value):
        return _reject_null(value)


class ScheduleCreate(CamelModel):
    title: str
    content: Optional[str] = None
    date: dt.date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    category: str = ""
    emoji: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        return _require_title(value)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def check_times(cls, value):
        return _normalize_time_value(value)


class TodoCreate(CamelModel):
    title: str
    description: Optional[str] = None
    due_date: Optional[dt.date] = None
    category: str = ""
    emoji: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        return _require_title(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def check_due_date(cls, value):
        return _blank_to_none(value)


class NoteCreate(CamelModel):
    title: str
    content: str = ""
    category: str = ""

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        return _require_title(value)


class FolderCreate(CamelModel):
    name: str

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        clean = str(value).strip()
        if not clean:
            raise ValueError("name must not be empty")
        return clean


class CategoryCreate(BaseModel):
    name: str


class DarkModePayload(BaseModel):
    enabled: bool


class AccessCodeResponse(BaseModel):
    access_code: str
    exists: bool


class MutationResponse(BaseModel):
    ok: bool
    result: str
