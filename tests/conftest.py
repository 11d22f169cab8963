"""Shared fixtures for tasks-tools tests."""

import json
from unittest.mock import MagicMock, patch

import httplib2
import pytest
from googleapiclient.errors import HttpError

from tasks_tools.connection import FederatedConnection

TASKS_URI = "https://tasks.googleapis.com/tasks/v1/lists/%40default/tasks"


def make_http_error(status: int, message: str = "Request failed") -> HttpError:
    """Build the error googleapiclient raises for a non-2xx response."""
    resp = httplib2.Response({"status": status})
    content = json.dumps({"error": {"code": status, "message": message}}).encode()
    return HttpError(resp, content, uri=TASKS_URI)


class StaticBroker:
    """Token broker that always hands out the same token."""

    def __init__(self, token: str = "test-access-token"):
        self.token = token
        self.calls = 0

    def get_access_token(self) -> str:
        self.calls += 1
        return self.token


@pytest.fixture
def broker():
    """A broker with a fixed test token."""
    return StaticBroker()


@pytest.fixture
def connection(broker):
    """A federated connection backed by the test broker."""
    return FederatedConnection(broker=broker)


@pytest.fixture
def tasks_service():
    """Replace the Google Tasks service with a mock.

    Configure responses through service.tasks.return_value.
    """
    with patch("tasks_tools.tasks.client.build") as mock_build:
        service = MagicMock()
        mock_build.return_value = service
        yield service


@pytest.fixture
def http_error():
    """Factory for googleapiclient HttpError instances."""
    return make_http_error


@pytest.fixture
def empty_google_dir(tmp_path):
    """Point the Google broker at a google/ folder with no files in it."""
    google_dir = tmp_path / "google"
    with patch("tasks_tools.google.oauth.GOOGLE_CREDENTIALS", google_dir / "credentials.json"), patch(
        "tasks_tools.google.oauth.GOOGLE_TOKEN", google_dir / "token.json"
    ):
        yield google_dir
