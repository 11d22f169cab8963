"""Binding delegated access tokens to tool invocations.

A FederatedConnection wraps a Tool so that, before the operation runs, the
token broker is asked for the caller's current access token. The token is
bound to the running invocation only (a ContextVar), so concurrent
invocations never see each other's credentials.

Example:
    >>> connection = FederatedConnection(broker=GoogleOAuth(scopes=["tasks"]))
    >>> tool = connection(list_tasks_tool)
    >>> result = await tool.invoke({"maxResults": 5})
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Protocol, runtime_checkable

from tasks_tools.concurrency import run_blocking
from tasks_tools.connection.exceptions import DEFAULT_CONNECTION, SessionNotFoundError
from tasks_tools.tools.base import Tool

logger = logging.getLogger(__name__)

_access_token: ContextVar[str | None] = ContextVar("tasks_tools_access_token", default=None)


@runtime_checkable
class TokenBroker(Protocol):
    """Anything that can hand out the caller's current access token."""

    def get_access_token(self) -> str:
        """Return a valid access token or raise SessionNotFoundError."""
        ...


def get_access_token() -> str:
    """Get the access token bound to the current tool invocation.

    Raises:
        SessionNotFoundError: If no connection is active for this invocation.
    """
    token = _access_token.get()
    if not token:
        raise SessionNotFoundError(
            "No federated connection session is active. "
            "Wrap the tool with a FederatedConnection before invoking it."
        )
    return token


@contextmanager
def bind_access_token(token: str) -> Iterator[str]:
    """Bind an access token for the duration of the block."""
    reset = _access_token.set(token)
    try:
        yield token
    finally:
        _access_token.reset(reset)


class FederatedConnection:
    """Pre-call hook that acquires and binds a delegated access token.

    Either pass a ready broker, or a factory that builds one per invocation
    (so no broker state is shared between calls).
    """

    def __init__(
        self,
        broker: TokenBroker | None = None,
        broker_factory: Callable[[], TokenBroker] | None = None,
        connection: str = DEFAULT_CONNECTION,
    ):
        if broker is None and broker_factory is None:
            raise ValueError("FederatedConnection needs a broker or a broker_factory")
        self._broker = broker
        self._broker_factory = broker_factory
        self.connection = connection

    def _get_broker(self) -> TokenBroker:
        if self._broker is not None:
            return self._broker
        return self._broker_factory()

    async def acquire_token(self) -> str:
        """Ask the broker for the caller's token.

        The broker may do blocking I/O (token file, refresh request), so it
        runs in a worker thread.

        Raises:
            SessionNotFoundError: If the caller has no valid session.
        """
        broker = await run_blocking(self._get_broker)
        token = await run_blocking(broker.get_access_token)
        if not token:
            raise SessionNotFoundError(f"No access token available for {self.connection}")
        return token

    def wrap(self, tool: Tool) -> Tool:
        """Return a copy of the tool whose execute runs inside this connection."""
        execute = tool.execute

        async def execute_with_connection(params: Any) -> Any:
            token = await self.acquire_token()
            logger.debug(f"Bound {self.connection} token for tool {tool.name}")
            with bind_access_token(token):
                return await execute(params)

        return dataclasses.replace(tool, execute=execute_with_connection)

    __call__ = wrap


def _google_broker() -> TokenBroker:
    from tasks_tools.google import GoogleOAuth

    return GoogleOAuth(scopes=["tasks"])


with_google_connection = FederatedConnection(broker_factory=_google_broker)
