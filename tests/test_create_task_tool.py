"""Tests for the create_google_tasks tool."""

import logging

import pytest
from googleapiclient.errors import HttpError
from pydantic import ValidationError

from tasks_tools.connection import AUTHORIZATION_REQUIRED_MESSAGE, FederatedConnectionError
from tasks_tools.tasks import build_task_body, create_task_tool

CREATED = {
    "kind": "tasks#task",
    "id": "new-task",
    "etag": '"xyz"',
    "title": "Buy milk",
    "status": "needsAction",
    "updated": "2026-10-18T10:00:00.000Z",
    "selfLink": "https://www.googleapis.com/tasks/v1/lists/abc/tasks/new-task",
    "position": "00000000000000000000",
}


class TestCreateTaskRequest:
    """Test the request body sent to Google."""

    @pytest.mark.asyncio
    async def test_title_only(self, connection, tasks_service):
        """Without notes or due, only the title should be sent."""
        insert = tasks_service.tasks.return_value.insert
        insert.return_value.execute.return_value = CREATED
        tool = connection(create_task_tool)

        await tool.invoke({"title": "Buy milk"})

        insert.assert_called_once_with(tasklist="@default", body={"title": "Buy milk"})
        assert "due" not in insert.call_args.kwargs["body"]

    @pytest.mark.asyncio
    async def test_due_date_normalized(self, connection, tasks_service):
        """A date should be sent as an RFC 3339 date-time."""
        insert = tasks_service.tasks.return_value.insert
        insert.return_value.execute.return_value = CREATED
        tool = connection(create_task_tool)

        await tool.invoke({"title": "Pay rent", "notes": "Transfer", "due": "2023-10-26"})

        insert.assert_called_once_with(
            tasklist="@default",
            body={
                "title": "Pay rent",
                "notes": "Transfer",
                "due": "2023-10-26T00:00:00.000Z",
            },
        )

    @pytest.mark.asyncio
    async def test_due_time_of_day_ignored(self, connection, tasks_service):
        """Time information in the due value should be dropped."""
        insert = tasks_service.tasks.return_value.insert
        insert.return_value.execute.return_value = CREATED
        tool = connection(create_task_tool)

        await tool.invoke({"title": "Pay rent", "due": "2023-10-26T18:45:00Z"})

        assert insert.call_args.kwargs["body"]["due"] == "2023-10-26T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_missing_title_rejected(self, connection, broker, tasks_service):
        """Invalid input should fail before a token is requested."""
        tool = connection(create_task_tool)

        with pytest.raises(ValidationError):
            await tool.invoke({"notes": "no title"})

        assert broker.calls == 0
        tasks_service.tasks.return_value.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_due_rejected(self, connection):
        """A due value that isn't a date should fail validation."""
        tool = connection(create_task_tool)

        with pytest.raises(ValidationError):
            await tool.invoke({"title": "Pay rent", "due": "next tuesday"})


class TestCreateTaskResult:
    """Test the returned value."""

    @pytest.mark.asyncio
    async def test_returns_provider_response(self, connection, tasks_service):
        """The created task should be returned exactly as Google sent it."""
        tasks_service.tasks.return_value.insert.return_value.execute.return_value = CREATED
        tool = connection(create_task_tool)

        result = await tool.invoke({"title": "Buy milk"})

        assert result is CREATED

    @pytest.mark.asyncio
    async def test_logs_request_and_response(self, connection, tasks_service, caplog):
        """Creating a task should log the due date and the created task."""
        tasks_service.tasks.return_value.insert.return_value.execute.return_value = CREATED
        tool = connection(create_task_tool)

        with caplog.at_level(logging.INFO, logger="tasks_tools.tasks.tools"):
            await tool.invoke({"title": "Buy milk", "due": "2023-10-26"})

        assert "processed_due=2023-10-26T00:00:00.000Z" in caplog.text
        assert "Google Task created successfully" in caplog.text


class TestCreateTaskErrors:
    """Test failure handling."""

    @pytest.mark.asyncio
    async def test_unauthorized_requires_reauthorization(
        self, connection, tasks_service, http_error
    ):
        """A 401 from Google should become FederatedConnectionError."""
        error = http_error(401, "Invalid Credentials")
        tasks_service.tasks.return_value.insert.return_value.execute.side_effect = error
        tool = connection(create_task_tool)

        with pytest.raises(FederatedConnectionError, match=AUTHORIZATION_REQUIRED_MESSAGE):
            await tool.invoke({"title": "Buy milk"})

    @pytest.mark.asyncio
    async def test_bad_request_propagates(self, connection, tasks_service, http_error, caplog):
        """Other HTTP errors should propagate unchanged and be logged."""
        error = http_error(400, "Invalid value for due")
        tasks_service.tasks.return_value.insert.return_value.execute.side_effect = error
        tool = connection(create_task_tool)

        with caplog.at_level(logging.ERROR, logger="tasks_tools.tasks.tools"):
            with pytest.raises(HttpError) as exc_info:
                await tool.invoke({"title": "Buy milk"})

        assert exc_info.value is error
        assert "Google API Error" in caplog.text

    @pytest.mark.asyncio
    async def test_unexpected_error_propagates(self, connection, tasks_service, caplog):
        """Non-HTTP errors should propagate unchanged and be logged."""
        error = TimeoutError("read timed out")
        tasks_service.tasks.return_value.insert.return_value.execute.side_effect = error
        tool = connection(create_task_tool)

        with caplog.at_level(logging.ERROR, logger="tasks_tools.tasks.tools"):
            with pytest.raises(TimeoutError) as exc_info:
                await tool.invoke({"title": "Buy milk"})

        assert exc_info.value is error
        assert "An unexpected error occurred" in caplog.text


class TestBuildTaskBody:
    """Test request body construction."""

    def test_omits_unset_fields(self):
        """Fields that are None should not appear in the body."""
        assert build_task_body("Buy milk") == {"title": "Buy milk"}

    def test_keeps_empty_notes(self):
        """An explicit empty string is a value, not an absence."""
        assert build_task_body("Buy milk", notes="") == {"title": "Buy milk", "notes": ""}
