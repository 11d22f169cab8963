"""Federated connection handling for agent tools.

Usage:
    from tasks_tools.connection import federated_errors, get_access_token

    # Inside a tool's execute
    token = get_access_token()

    # Translate rejected tokens into a re-authorization signal
    with federated_errors():
        ...
"""

from __future__ import annotations

from tasks_tools.connection.errors import classify_error, federated_errors, http_status
from tasks_tools.connection.exceptions import (
    AUTHORIZATION_REQUIRED_MESSAGE,
    ConnectionAuthError,
    ErrorKind,
    FederatedConnectionError,
    SessionNotFoundError,
)
from tasks_tools.connection.federated import (
    FederatedConnection,
    TokenBroker,
    bind_access_token,
    get_access_token,
    with_google_connection,
)

__all__ = [
    "AUTHORIZATION_REQUIRED_MESSAGE",
    "ConnectionAuthError",
    "ErrorKind",
    "FederatedConnection",
    "FederatedConnectionError",
    "SessionNotFoundError",
    "TokenBroker",
    "bind_access_token",
    "classify_error",
    "federated_errors",
    "get_access_token",
    "http_status",
    "with_google_connection",
]
