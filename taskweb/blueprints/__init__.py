"""Blueprints package."""

from .pages import pages_bp
from .tasks import tasks_bp

__all__ = [
    "pages_bp",
    "tasks_bp",
]
