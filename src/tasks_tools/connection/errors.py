"""Classification of provider failures.

A Google API call that fails with HTTP 401 means the borrowed access token
was rejected. That case is re-raised as FederatedConnectionError so the
caller can re-authorize and retry; every other error propagates as-is.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from googleapiclient.errors import HttpError

from tasks_tools.connection.exceptions import (
    DEFAULT_CONNECTION,
    ErrorKind,
    FederatedConnectionError,
)

logger = logging.getLogger(__name__)

UNAUTHORIZED = 401


def http_status(error: BaseException) -> int | None:
    """Return the HTTP status of a Google transport error, if it has one."""
    if not isinstance(error, HttpError):
        return None
    try:
        return int(error.resp.status)
    except (AttributeError, TypeError, ValueError):
        return None


def classify_error(error: BaseException) -> ErrorKind:
    """Decide how a failed provider call should be surfaced."""
    if not isinstance(error, HttpError):
        return ErrorKind.OTHER
    if http_status(error) == UNAUTHORIZED:
        return ErrorKind.REAUTH_REQUIRED
    return ErrorKind.TRANSPORT


@contextmanager
def federated_errors(connection: str | None = None) -> Iterator[None]:
    """Translate token rejections raised inside the block.

    Usage:
        with federated_errors():
            result = await client.list_tasks()

    Raises:
        FederatedConnectionError: If the provider answered 401.
    """
    try:
        yield
    except Exception as e:
        kind = classify_error(e)
        if kind is ErrorKind.REAUTH_REQUIRED:
            logger.info(f"Access token rejected by provider: {e}")
            raise FederatedConnectionError(connection=connection or DEFAULT_CONNECTION) from e
        raise
