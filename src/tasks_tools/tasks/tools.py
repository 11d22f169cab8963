"""Agent tools for the user's Google Tasks.

Both tools run inside the Google federated connection: the access token is
looked up per invocation and a token rejected by Google (HTTP 401) surfaces
as FederatedConnectionError so the caller can re-authorize and retry.
"""

from __future__ import annotations

import logging
from typing import Any

from googleapiclient.errors import HttpError

from tasks_tools.connection import federated_errors, get_access_token, with_google_connection
from tasks_tools.tasks.client import TasksClient, build_task_body
from tasks_tools.tasks.models import CreateTaskParams, ListTasksParams, summarize_tasks
from tasks_tools.tools import Tool, ToolRegistry

logger = logging.getLogger(__name__)


async def list_tasks(params: ListTasksParams) -> dict[str, Any]:
    """Get tasks from the user's default task list."""
    access_token = get_access_token()

    with federated_errors():
        client = TasksClient(access_token)
        items = await client.list_tasks(
            max_results=params.max_results,
            show_completed=params.show_completed,
            show_hidden=params.show_hidden,
        )

    return summarize_tasks(items)


async def create_task(params: CreateTaskParams) -> dict[str, Any]:
    """Create a task in the user's default task list.

    Returns the created task exactly as Google returned it.
    """
    access_token = get_access_token()

    with federated_errors():
        try:
            client = TasksClient(access_token)
            body = build_task_body(params.title, notes=params.notes, due=params.due)

            logger.info(
                f"Creating Google Task with due date: due={params.due} processed_due={body.get('due')}"
            )

            result = await client.create_task(body)

            logger.info(f"Google Task created successfully: {result}")
            return result
        except HttpError as e:
            logger.error(f"Google API Error: {e.content!r}")
            raise
        except Exception as e:
            logger.error(f"An unexpected error occurred: {e}")
            raise


list_tasks_tool = Tool(
    name="get_google_tasks",
    description="Get tasks from the user's Google Tasks",
    parameters=ListTasksParams,
    execute=list_tasks,
)

create_task_tool = Tool(
    name="create_google_tasks",
    description="Create a new task in the user's Google Tasks",
    parameters=CreateTaskParams,
    execute=create_task,
)

get_google_tasks_tool = with_google_connection(list_tasks_tool)
create_google_tasks_tool = with_google_connection(create_task_tool)

registry = ToolRegistry([get_google_tasks_tool, create_google_tasks_tool])
