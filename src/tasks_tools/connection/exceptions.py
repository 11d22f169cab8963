"""Federated connection exceptions."""

from __future__ import annotations

from enum import Enum

AUTHORIZATION_REQUIRED_MESSAGE = "Authorization required to access the Federated Connection"
DEFAULT_CONNECTION = "google-oauth2"


class ErrorKind(str, Enum):
    """How a failed provider call is treated by the tools."""

    REAUTH_REQUIRED = "reauth_required"
    TRANSPORT = "transport"
    OTHER = "other"


class ConnectionAuthError(Exception):
    """Base exception for federated connection errors."""

    pass


class SessionNotFoundError(ConnectionAuthError):
    """Raised when the caller has no usable federated session.

    The user must connect (or reconnect) the provider account before any
    tool that needs the connection can run.
    """

    def __init__(self, message: str, authorization_url: str | None = None):
        self.authorization_url = authorization_url
        super().__init__(message)


class FederatedConnectionError(ConnectionAuthError):
    """Raised when the provider rejects the access token.

    Orchestrators catch this specifically to run a fresh consent flow and
    retry the tool call.
    """

    kind = ErrorKind.REAUTH_REQUIRED

    def __init__(
        self,
        message: str = AUTHORIZATION_REQUIRED_MESSAGE,
        connection: str = DEFAULT_CONNECTION,
    ):
        self.connection = connection
        super().__init__(message)
