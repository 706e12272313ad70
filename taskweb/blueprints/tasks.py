"""
Tasks Blueprint

Server-rendered task creation form.

Endpoints:
- GET  /tasks/create - Render the empty task form
- POST /tasks/create - Validate the form and create the task on the backend
"""

import logging

from flask import Blueprint, render_template, request

from taskweb.forms import (
    FieldError,
    TaskFormData,
    build_task_payload,
    validate_task_form,
)
from taskweb.models import STATUS_LABELS
from taskweb.services.task_api import TaskApiError, get_task_api_client

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__, url_prefix="/tasks")

GENERIC_CREATE_ERROR = "Failed to create task. Please try again."


def _render_form(**context):
    context.setdefault("form_data", TaskFormData())
    context.setdefault("errors", [])
    return render_template("create_task.html", status_labels=STATUS_LABELS, **context)


def _submitted_values():
    if request.form:
        return request.form
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return {}
    return payload


@tasks_bp.route("/create", methods=["GET"])
def create_form():
    """Display the task creation form."""
    return _render_form()


@tasks_bp.route("/create", methods=["POST"])
def create_submit():
    """Handle task creation form submission."""
    form_data = TaskFormData.from_form(_submitted_values())

    result = validate_task_form(form_data)
    if not result.is_valid:
        return _render_form(
            errors=result.errors,
            title_error=result.title_error,
            description_error=result.description_error,
            status_error=result.status_error,
            due_date_error=result.due_date_error,
            form_data=form_data,
        )

    try:
        created_task = get_task_api_client().create_task(build_task_payload(form_data))
    except TaskApiError as e:
        logger.exception("Error creating task: %s", e)
        if e.errors:
            api_errors = [FieldError(text=err, href="#title") for err in e.errors]
        else:
            api_errors = [FieldError(text=GENERIC_CREATE_ERROR, href="#title")]
        return _render_form(errors=api_errors, form_data=form_data)

    logger.info("Created task %s", created_task.id)
    return _render_form(success=True, created_task=created_task)
