"""
Task Data Models

Dataclasses for task resources returned by the backend task API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

TASK_STATUSES = ("PENDING", "IN_PROGRESS", "COMPLETED", "CANCELLED")

STATUS_LABELS = {
    "PENDING": "Pending",
    "IN_PROGRESS": "In progress",
    "COMPLETED": "Completed",
    "CANCELLED": "Cancelled",
}


@dataclass
class CreatedTask:
    """Task resource as returned by ``POST /api/tasks``."""

    id: int
    title: str
    status: str
    due_date: str
    created_at: str
    updated_at: str = ""
    description: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> CreatedTask:
        """Build from the backend's camelCase JSON body."""
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description"),
            status=data["status"],
            due_date=data["dueDate"],
            created_at=data["createdAt"],
            updated_at=data.get("updatedAt", ""),
        )

    @property
    def status_label(self) -> str:
        return STATUS_LABELS.get(self.status, self.status)
