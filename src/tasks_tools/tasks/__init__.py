"""Google Tasks tools for AI agents.

Read and create items in the user's Google Tasks default list using the
delegated access token of the Google federated connection.

Usage:
    from tasks_tools.tasks import create_google_tasks_tool, get_google_tasks_tool

    # List tasks in the default list
    result = await get_google_tasks_tool.invoke({"maxResults": 5})
    print(result["tasksCount"])

    # Create a task
    task = await create_google_tasks_tool.invoke(
        {"title": "Review PR", "notes": "Check the tasks-tools changes", "due": "2026-01-25"}
    )

    # Token rejected by Google
    try:
        await get_google_tasks_tool.invoke({})
    except FederatedConnectionError:
        ...  # run the consent flow, then retry

OAuth Setup:
    1. Download OAuth credentials from Google Cloud Console
    2. Import: tasks-tools google import ~/Downloads/credentials.json
    3. Authorize: tasks-tools google login
"""

from __future__ import annotations

from tasks_tools.tasks.client import TasksClient, build_task_body
from tasks_tools.tasks.models import CreateTaskParams, ListTasksParams, TaskSummary
from tasks_tools.tasks.tools import (
    create_google_tasks_tool,
    create_task_tool,
    get_google_tasks_tool,
    list_tasks_tool,
    registry,
)

__all__ = [
    "TasksClient",
    "TaskSummary",
    "ListTasksParams",
    "CreateTaskParams",
    "build_task_body",
    "list_tasks_tool",
    "create_task_tool",
    "get_google_tasks_tool",
    "create_google_tasks_tool",
    "registry",
]
