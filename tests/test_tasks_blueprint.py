"""Tests for the task creation routes."""

from unittest.mock import patch

import pytest
import requests

VALID_FORM = {
    "title": "Test Task",
    "status": "PENDING",
    "dueDateDay": "25",
    "dueDateMonth": "12",
    "dueDateYear": "2099",
    "dueDateHour": "17",
    "dueDateMinute": "00",
}

MOCK_TASK = {
    "id": 1,
    "title": "Test Task",
    "description": "Test Description",
    "status": "PENDING",
    "dueDate": "2099-12-25T17:00:00",
    "createdAt": "2099-12-06T10:00:00",
    "updatedAt": "2099-12-06T10:00:00",
}


def _form(**overrides):
    data = dict(VALID_FORM)
    data.update(overrides)
    return {k: v for k, v in data.items() if v is not None}


class TestCreateForm:
    """Tests for GET /tasks/create."""

    def test_renders_form(self, client):
        res = client.get("/tasks/create")
        assert res.status_code == 200
        assert "Create a New Task" in res.get_data(as_text=True)

    def test_includes_form_fields(self, client):
        html = client.get("/tasks/create").get_data(as_text=True)
        for field_id in (
            'id="title"',
            'id="description"',
            'id="status"',
            'id="due-date-day"',
            'id="due-date-month"',
            'id="due-date-year"',
            'id="due-date-hour"',
            'id="due-date-minute"',
        ):
            assert field_id in html

    def test_includes_csrf_field(self, client):
        html = client.get("/tasks/create").get_data(as_text=True)
        assert 'name="csrf_token"' in html

    def test_home_redirects_to_form(self, client):
        res = client.get("/")
        assert res.status_code == 302
        assert res.headers["Location"].endswith("/tasks/create")


class TestCreateSubmitValidation:
    """Tests for POST /tasks/create validation errors."""

    @patch("taskweb.services.task_api.requests.post")
    def test_missing_title(self, mock_post, client):
        res = client.post("/tasks/create", data=_form(title=None))
        assert res.status_code == 200
        assert "Enter a task title" in res.get_data(as_text=True)
        mock_post.assert_not_called()

    def test_missing_status(self, client):
        res = client.post("/tasks/create", data=_form(status=None))
        assert res.status_code == 200
        assert "Select a task status" in res.get_data(as_text=True)

    def test_incomplete_due_date(self, client):
        res = client.post(
            "/tasks/create",
            data=_form(dueDateDay="", dueDateHour=None, dueDateMinute=None),
        )
        assert res.status_code == 200
        assert "Enter a complete due date" in res.get_data(as_text=True)

    def test_past_due_date(self, client):
        res = client.post(
            "/tasks/create",
            data=_form(dueDateDay="01", dueDateMonth="01", dueDateYear="2020"),
        )
        assert res.status_code == 200
        assert "Due date must be in the future" in res.get_data(as_text=True)

    def test_accepts_json_body(self, client):
        res = client.post("/tasks/create", json=_form(title=None))
        assert res.status_code == 200
        assert "Enter a task title" in res.get_data(as_text=True)

    @pytest.mark.parametrize("body", [[1, 2], "title", 42, None])
    def test_non_object_json_body(self, client, body):
        res = client.post("/tasks/create", json=body)
        assert res.status_code == 200
        html = res.get_data(as_text=True)
        assert "Enter a task title" in html
        assert "Select a task status" in html
        assert "Enter a complete due date" in html

    def test_error_summary_links_to_fields(self, client):
        html = client.post(
            "/tasks/create", data=_form(title=None, status=None)
        ).get_data(as_text=True)
        assert 'href="#title"' in html
        assert 'href="#status"' in html

    def test_resubmitted_values_are_kept(self, client):
        html = client.post(
            "/tasks/create", data=_form(status=None, description="Keep me")
        ).get_data(as_text=True)
        assert 'value="Test Task"' in html
        assert "Keep me" in html
        assert 'value="2099"' in html

    def test_submitted_values_are_escaped(self, client):
        html = client.post(
            "/tasks/create",
            data=_form(title='<script>alert("x")</script>', status=None),
        ).get_data(as_text=True)
        assert "<script>alert" not in html
        assert "&lt;script&gt;" in html


class TestCreateSubmitBackend:
    """Tests for POST /tasks/create calls to the backend API."""

    @patch("taskweb.services.task_api.requests.post")
    def test_creates_task(self, mock_post, client, make_response):
        mock_post.return_value = make_response(201, MOCK_TASK)

        res = client.post(
            "/tasks/create", data=_form(description="Test Description")
        )

        assert res.status_code == 200
        html = res.get_data(as_text=True)
        assert "Task created successfully" in html
        assert "Test Task" in html
        assert "25 December 2099 at 17:00" in html
        assert "6 December 2099 at 10:00" in html

        _, kwargs = mock_post.call_args
        assert kwargs["json"] == {
            "title": "Test Task",
            "description": "Test Description",
            "status": "PENDING",
            "dueDate": "2099-12-25T17:00:00",
        }

    @patch("taskweb.services.task_api.requests.post")
    def test_creates_task_without_description(self, mock_post, client, make_response):
        mock_post.return_value = make_response(
            201,
            {
                **MOCK_TASK,
                "id": 2,
                "title": "Task Without Description",
                "description": None,
                "status": "IN_PROGRESS",
            },
        )

        res = client.post(
            "/tasks/create",
            data=_form(title="Task Without Description", status="IN_PROGRESS"),
        )

        assert res.status_code == 200
        assert "Task created successfully" in res.get_data(as_text=True)
        _, kwargs = mock_post.call_args
        assert kwargs["json"]["description"] is None

    @patch("taskweb.services.task_api.requests.post")
    def test_backend_validation_errors(self, mock_post, client, make_response):
        mock_post.return_value = make_response(
            400,
            {
                "status": 400,
                "message": "Validation failed",
                "errors": ["title: Title is required"],
            },
        )

        res = client.post("/tasks/create", data=_form())

        assert res.status_code == 200
        html = res.get_data(as_text=True)
        assert "title: Title is required" in html
        assert 'value="Test Task"' in html

    @patch("taskweb.services.task_api.requests.post")
    def test_network_error(self, mock_post, client):
        mock_post.side_effect = requests.ConnectionError("Network error")

        res = client.post("/tasks/create", data=_form())

        assert res.status_code == 200
        assert "Failed to create task" in res.get_data(as_text=True)

    @patch("taskweb.services.task_api.requests.post")
    def test_server_error_without_body(self, mock_post, client, make_response):
        mock_post.return_value = make_response(503, text="")

        res = client.post("/tasks/create", data=_form())

        assert res.status_code == 200
        assert "Failed to create task. Please try again." in res.get_data(
            as_text=True
        )

    @patch("taskweb.services.task_api.requests.post")
    def test_zero_prefixed_fields_send_iso_due_date(
        self, mock_post, client, make_response
    ):
        mock_post.return_value = make_response(201, MOCK_TASK)

        res = client.post(
            "/tasks/create",
            data=_form(dueDateDay="025", dueDateYear="02099", dueDateHour="017"),
        )

        assert "Task created successfully" in res.get_data(as_text=True)
        _, kwargs = mock_post.call_args
        assert kwargs["json"]["dueDate"] == "2099-12-25T17:00:00"
