"""
Task Form Validation

Turns a submitted task form into user-facing errors for the error summary
and per-field error messages.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from taskweb.models import TASK_STATUSES
from taskweb.time_utils import local_now

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000

# ASCII digits only
_DIGITS = re.compile(r"[0-9]+")

# HTML input name -> TaskFormData attribute
FORM_FIELD_NAMES = {
    "title": "title",
    "description": "description",
    "status": "status",
    "dueDateDay": "due_date_day",
    "dueDateMonth": "due_date_month",
    "dueDateYear": "due_date_year",
    "dueDateHour": "due_date_hour",
    "dueDateMinute": "due_date_minute",
}


@dataclass
class TaskFormData:
    """Submitted task form, trimmed."""

    title: str = ""
    status: str = ""
    due_date_day: str = ""
    due_date_month: str = ""
    due_date_year: str = ""
    due_date_hour: str = ""
    due_date_minute: str = ""
    description: str | None = None

    @classmethod
    def from_form(cls, values: Mapping[str, object]) -> TaskFormData:
        """Build from request form values keyed by HTML input name."""
        cleaned: dict[str, str] = {}
        for input_name, attr in FORM_FIELD_NAMES.items():
            raw = values.get(input_name)
            cleaned[attr] = str(raw).strip() if raw is not None else ""

        description = cleaned.pop("description") or None
        return cls(description=description, **cleaned)


@dataclass(frozen=True)
class FieldError:
    """One entry in the error summary."""

    text: str
    href: str


@dataclass
class FormValidationResult:
    errors: list[FieldError] = field(default_factory=list)
    title_error: str | None = None
    description_error: str | None = None
    status_error: str | None = None
    due_date_error: str | None = None
    due_date: datetime | None = None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, attr: str, text: str, href: str) -> None:
        setattr(self, attr, text)
        self.errors.append(FieldError(text=text, href=href))


def _parse_int(value: str) -> int | None:
    if not _DIGITS.fullmatch(value):
        return None
    return int(value)


def validate_task_form(
    data: TaskFormData, now: datetime | None = None
) -> FormValidationResult:
    """
    Validate a submitted task form.

    Args:
        data: Trimmed form data
        now: Reference time for the future-date check (defaults to local now)

    Returns:
        FormValidationResult with errors in display order
    """
    result = FormValidationResult()

    if not data.title or not data.title.strip():
        result.add("title_error", "Enter a task title", "#title")
    elif len(data.title) > TITLE_MAX_LENGTH:
        result.add(
            "title_error",
            f"Task title must be {TITLE_MAX_LENGTH} characters or fewer",
            "#title",
        )

    if data.description and len(data.description) > DESCRIPTION_MAX_LENGTH:
        result.add(
            "description_error",
            f"Task description must be {DESCRIPTION_MAX_LENGTH} characters or fewer",
            "#description",
        )

    if data.status not in TASK_STATUSES:
        result.add("status_error", "Select a task status", "#status")

    _validate_due_date(data, result, now or local_now())
    return result


def _validate_due_date(
    data: TaskFormData, result: FormValidationResult, now: datetime
) -> None:
    if not data.due_date_day or not data.due_date_month or not data.due_date_year:
        result.add("due_date_error", "Enter a complete due date", "#due-date-day")
        return

    day = _parse_int(data.due_date_day)
    month = _parse_int(data.due_date_month)
    year = _parse_int(data.due_date_year)
    if (
        day is None
        or month is None
        or year is None
        or not 1 <= day <= 31
        or not 1 <= month <= 12
    ):
        result.add("due_date_error", "Enter a valid date", "#due-date-day")
        return

    hour = _parse_int(data.due_date_hour or "0")
    minute = _parse_int(data.due_date_minute or "0")
    if hour is None or minute is None or not 0 <= hour <= 23 or not 0 <= minute <= 59:
        result.add("due_date_error", "Enter a valid time", "#due-date-hour")
        return

    try:
        due_date = datetime(year, month, day, hour, minute)
    except ValueError:
        # e.g. 31 February
        result.add("due_date_error", "Enter a valid date", "#due-date-day")
        return

    if due_date <= now:
        result.add("due_date_error", "Due date must be in the future", "#due-date-day")
        return

    result.due_date = due_date


def build_iso_datetime(data: TaskFormData) -> str:
    """
    Combine the due-date fields into ``YYYY-MM-DDTHH:MM:00``.

    Expects fields that passed validation; raises ValueError otherwise.
    """
    parts = [
        _parse_int(data.due_date_year),
        _parse_int(data.due_date_month),
        _parse_int(data.due_date_day),
        _parse_int(data.due_date_hour or "0"),
        _parse_int(data.due_date_minute or "0"),
    ]
    if None in parts:
        raise ValueError("Due date fields are not numeric")
    year, month, day, hour, minute = parts
    return f"{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:00"


def build_task_payload(data: TaskFormData) -> dict[str, str | None]:
    """Request body for the backend ``POST /api/tasks``."""
    return {
        "title": data.title,
        "description": data.description or None,
        "status": data.status,
        "dueDate": build_iso_datetime(data),
    }
