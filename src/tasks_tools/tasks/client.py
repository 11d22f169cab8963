"""Google Tasks API client implementation."""

from __future__ import annotations

from datetime import date
from typing import Any

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from tasks_tools.concurrency import run_blocking

DEFAULT_TASKLIST = "@default"


def format_due(due: date) -> str:
    """Format a due date the way the Tasks API stores it.

    The API keeps only the date part; time of day is always midnight UTC.
    """
    return f"{due.isoformat()}T00:00:00.000Z"


def build_task_body(
    title: str,
    notes: str | None = None,
    due: date | None = None,
) -> dict[str, Any]:
    """Build an insert request body, leaving out fields that aren't set."""
    body: dict[str, Any] = {"title": title}
    if notes is not None:
        body["notes"] = notes
    if due is not None:
        body["due"] = format_due(due)
    return body


class TasksClient:
    """Google Tasks API client using a borrowed access token.

    The token comes from the federated connection and is used for this
    client's calls only; it is never refreshed or stored here.

    Usage:
        client = TasksClient(access_token)

        # List tasks in the default list
        items = await client.list_tasks(max_results=20)

        # Create a task
        task = await client.create_task({"title": "Do something"})
    """

    def __init__(self, access_token: str, tasklist_id: str = DEFAULT_TASKLIST) -> None:
        """Initialize Tasks client.

        Args:
            access_token: Delegated OAuth access token.
            tasklist_id: Task list ID. Defaults to "@default" (primary list).
        """
        self._credentials = Credentials(token=access_token)
        self.tasklist_id = tasklist_id
        self._service: Any = None

    def _get_service(self) -> Any:
        """Get or create Tasks API service."""
        if self._service is None:
            self._service = build(
                "tasks", "v1", credentials=self._credentials, cache_discovery=False
            )
        return self._service

    async def list_tasks(
        self,
        max_results: int = 20,
        show_completed: bool = True,
        show_hidden: bool = False,
    ) -> list[dict[str, Any]]:
        """List tasks in the task list (first page only).

        Args:
            max_results: Maximum number of tasks to return.
            show_completed: Include completed tasks.
            show_hidden: Include hidden tasks.

        Returns:
            Raw task resources, in the order the API returned them.

        Raises:
            googleapiclient.errors.HttpError: If the API call fails.
        """
        service = self._get_service()
        request = service.tasks().list(
            tasklist=self.tasklist_id,
            maxResults=max_results,
            showCompleted=show_completed,
            showHidden=show_hidden,
        )
        results = await run_blocking(request.execute)
        return results.get("items") or []

    async def create_task(self, body: dict[str, Any]) -> dict[str, Any]:
        """Create a new task.

        Args:
            body: Task resource, see build_task_body().

        Returns:
            The created task resource as returned by the API.

        Raises:
            googleapiclient.errors.HttpError: If the API call fails.
        """
        service = self._get_service()
        request = service.tasks().insert(tasklist=self.tasklist_id, body=body)
        return await run_blocking(request.execute)
