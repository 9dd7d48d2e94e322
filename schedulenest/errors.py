"""Errors and mutation outcomes shared by the storage layer."""

from __future__ import annotations

from enum import Enum


class ScheduleNestError(Exception):
    """Base class for errors raised by the storage layer."""


class StorageWriteError(ScheduleNestError):
    """Raised when a value could not be persisted (quota, driver or serialization error).

    Recoverable: the previously stored value is left as it was.
    """

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to write '{key}': {reason}")


class MutationResult(str, Enum):
    """Outcome of one read-modify-write call."""

    APPLIED = "applied"
    NOT_FOUND = "not_found"
    PROTECTED = "protected"
