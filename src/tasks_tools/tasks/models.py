"""Input and output shapes of the Google Tasks tools."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

NO_TITLE = "No title"


class ListTasksParams(BaseModel):
    """Parameters of the get_google_tasks tool."""

    model_config = ConfigDict(populate_by_name=True)

    max_results: int = Field(
        20,
        alias="maxResults",
        description="Maximum number of tasks to return. Default is 20.",
    )
    show_completed: bool = Field(
        True,
        alias="showCompleted",
        description="Whether to show completed tasks. Default is true.",
    )
    show_hidden: bool = Field(
        False,
        alias="showHidden",
        description="Whether to show hidden tasks. Default is false.",
    )


class CreateTaskParams(BaseModel):
    """Parameters of the create_google_tasks tool."""

    title: str = Field(description="The title of the task.")
    notes: str | None = Field(None, description="The notes for the task.")
    due: date | None = Field(
        None,
        description=(
            'The due date for the task in ISO 8601 format (e.g., "2023-10-26"). '
            "Time information will be ignored."
        ),
    )

    @field_validator("due", mode="before")
    @classmethod
    def _drop_time_of_day(cls, value: Any) -> Any:
        # Accept full date-times too; only the date part is kept
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            text = value.strip()
            try:
                return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
            except ValueError:
                return text
        return value


@dataclass
class TaskSummary:
    """Reduced view of a Google Task returned by get_google_tasks."""

    id: str | None
    title: str
    notes: str | None = None
    due: str | None = None
    status: str | None = None  # "needsAction" or "completed"
    completed: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TaskSummary:
        """Map a task resource from the API."""
        return cls(
            id=data.get("id"),
            title=data.get("title") or NO_TITLE,
            notes=data.get("notes"),
            due=data.get("due"),
            status=data.get("status"),
            completed=data.get("completed"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_tasks(items: list[dict[str, Any]] | None) -> dict[str, Any]:
    """Build the get_google_tasks result from the API items."""
    tasks = [TaskSummary.from_api(item).to_dict() for item in items or []]
    return {"tasksCount": len(tasks), "tasks": tasks}
