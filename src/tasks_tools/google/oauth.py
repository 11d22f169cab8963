"""Token broker for the Google federated connection.

The connection's token lives in google/token.json in the authorized-user
format google.oauth2.credentials reads. GoogleOAuth hands out its access
token, refreshing it through Authlib once it has expired, and runs the
consent flow used by `tasks-tools google login`.
"""

import json
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Any

import requests
from authlib.integrations.requests_client import OAuth2Session
from authlib.oauth2 import OAuth2Error

from tasks_tools.config import GOOGLE_CREDENTIALS, GOOGLE_TOKEN
from tasks_tools.connection.exceptions import SessionNotFoundError
from tasks_tools.google.exceptions import (
    CredentialsNotFoundError,
    GoogleAuthError,
    ScopeMismatchError,
    TokenError,
)

logger = logging.getLogger(__name__)

SCOPES = {
    "tasks": "https://www.googleapis.com/auth/tasks",
    "tasks_readonly": "https://www.googleapis.com/auth/tasks.readonly",
}

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"

# Refresh a little before Google would reject the token
EXPIRY_MARGIN = 60


def resolve_scopes(names: list[str]) -> list[str]:
    """Turn scope names like "tasks" into scope URLs."""
    urls = []
    for name in names:
        if name.startswith("https://"):
            urls.append(name)
        elif name in SCOPES:
            urls.append(SCOPES[name])
        else:
            raise ValueError(f"Unknown scope: {name}. Use full URL or one of: {list(SCOPES)}")
    return urls


def expiry_timestamp(stored: dict[str, Any]) -> float | None:
    """Expiry of a stored token as a Unix timestamp (ISO strings accepted)."""
    expiry = stored.get("expiry")
    if expiry is None or expiry == "":
        return None
    if isinstance(expiry, str):
        return datetime.fromisoformat(expiry.replace("Z", "+00:00")).timestamp()
    return float(expiry)


class GoogleOAuth:
    """Hands out the Google access token of the federated connection.

    Nothing is read from disk until a token is asked for, so building a
    broker never fails on missing files.

    Example:
        >>> broker = GoogleOAuth(scopes=["tasks"])
        >>> if not broker.has_session():
        ...     print(f"Visit: {broker.get_authorization_url()}")
        ...     broker.fetch_token(input("Paste redirect URL: "))
        >>> token = broker.get_access_token()
    """

    def __init__(
        self,
        scopes: list[str] | None = None,
        token_path: str | Path | None = None,
        credentials_path: str | Path | None = None,
    ):
        """Initialize the broker.

        Args:
            scopes: Scope names (e.g., ["tasks"]) or full URLs. Defaults to ["tasks"].
            token_path: Token file. Defaults to google/token.json.
            credentials_path: OAuth client file. Defaults to google/credentials.json.
        """
        self.required_scopes = resolve_scopes(scopes or ["tasks"])
        self.token_path = Path(token_path) if token_path else GOOGLE_TOKEN
        self.credentials_path = Path(credentials_path) if credentials_path else GOOGLE_CREDENTIALS
        self._client: tuple[str, str] | None = None

    @property
    def client(self) -> tuple[str, str]:
        """OAuth client ID and secret.

        Raises:
            CredentialsNotFoundError: If the client file is missing.
            GoogleAuthError: If it isn't an 'installed' or 'web' client file.
        """
        if self._client is None:
            if not self.credentials_path.exists():
                raise CredentialsNotFoundError(str(self.credentials_path))
            try:
                data = json.loads(self.credentials_path.read_text())
                app = data["installed"] if "installed" in data else data["web"]
                self._client = (app["client_id"], app["client_secret"])
            except (ValueError, KeyError, TypeError) as e:
                raise GoogleAuthError(
                    f"Invalid OAuth client file {self.credentials_path}: "
                    "expected an 'installed' or 'web' client with client_id and client_secret"
                ) from e
        return self._client

    def _session(self) -> OAuth2Session:
        client_id, client_secret = self.client
        return OAuth2Session(
            client_id=client_id,
            client_secret=client_secret,
            scope=" ".join(self.required_scopes),
            redirect_uri="http://localhost:0",
            token_endpoint_auth_method="client_secret_post",
        )

    # =========================================================================
    # Token storage
    # =========================================================================

    def load_token(self) -> dict[str, Any] | None:
        """Stored token, or None if absent, unreadable or short of scopes."""
        if not self.token_path.exists():
            return None
        try:
            stored = json.loads(self.token_path.read_text())
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token file {self.token_path}: {e}")
            return None

        missing = set(self.required_scopes) - set(stored.get("scopes") or [])
        if missing:
            logger.warning(f"Stored token lacks scopes: {missing}")
            return None
        return stored

    def save_token(self, token: dict[str, Any]) -> dict[str, Any]:
        """Store a token endpoint response in authorized-user format.

        Raises:
            ScopeMismatchError: If Google granted fewer scopes than required.
        """
        granted = token.get("scope", "").split()
        missing = set(self.required_scopes) - set(granted)
        if missing:
            raise ScopeMismatchError(missing)

        client_id, client_secret = self.client
        stored = {
            "token": token["access_token"],
            "refresh_token": token.get("refresh_token"),
            "token_uri": TOKEN_URL,
            "client_id": client_id,
            "client_secret": client_secret,
            "scopes": granted,
            "expiry": token.get("expires_at"),
        }
        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        self.token_path.write_text(json.dumps(stored, indent=2))
        logger.info(f"Saved Google token to {self.token_path}")
        return stored

    # =========================================================================
    # Consent flow
    # =========================================================================

    def has_session(self) -> bool:
        """Whether a token with the required scopes is stored."""
        return self.load_token() is not None

    def get_authorization_url(self) -> str:
        """Consent URL the user must visit to (re)connect the account."""
        url, _state = self._session().create_authorization_url(
            AUTHORIZE_URL,
            access_type="offline",
            prompt="consent",
            include_granted_scopes="true",
        )
        return url

    def fetch_token(self, authorization_response: str) -> dict[str, Any]:
        """Exchange the redirect URL from the consent page for a token."""
        token = self._session().fetch_token(
            TOKEN_URL, authorization_response=authorization_response
        )
        return self.save_token(token)

    def refresh(self, stored: dict[str, Any]) -> dict[str, Any]:
        """Refresh an expired stored token.

        Raises:
            TokenError: If there is no refresh token or Google refuses it.
        """
        refresh_token = stored.get("refresh_token")
        if not refresh_token:
            raise TokenError("Stored token has expired and has no refresh token")

        try:
            token = self._session().refresh_token(TOKEN_URL, refresh_token=refresh_token)
        except (OAuth2Error, requests.RequestException) as e:
            raise TokenError(f"Failed to refresh token: {e}") from e

        # Google omits these from refresh responses
        token.setdefault("refresh_token", refresh_token)
        token.setdefault("scope", " ".join(stored.get("scopes") or []))
        return self.save_token(token)

    # =========================================================================
    # TokenBroker
    # =========================================================================

    def get_access_token(self) -> str:
        """Current access token, refreshed first if it has expired.

        Raises:
            SessionNotFoundError: If the account isn't connected or the stored
                session can no longer be used.
        """
        try:
            stored = self.load_token()
            if stored is None:
                raise SessionNotFoundError(
                    "No Google session found. Run 'tasks-tools google login' to connect your account.",
                    authorization_url=self.get_authorization_url(),
                )

            expires_at = expiry_timestamp(stored)
            if expires_at is not None and expires_at - EXPIRY_MARGIN < time.time():
                logger.info("Google access token expired, refreshing")
                stored = self.refresh(stored)

            if not stored.get("token"):
                raise TokenError("Stored token has no access token")
            return stored["token"]
        except (GoogleAuthError, ValueError) as e:
            raise SessionNotFoundError(f"Google session unavailable: {e}") from e

    def describe(self) -> dict[str, Any]:
        """Summary of the stored session for `tasks-tools google status`."""
        stored = self.load_token()
        if stored is None:
            return {"status": "no_session"}

        expires_at = expiry_timestamp(stored)
        expired = expires_at is not None and expires_at < time.time()
        return {
            "status": "expired" if expired else "valid",
            "scopes": stored.get("scopes") or [],
            "expires_at": datetime.fromtimestamp(expires_at).isoformat() if expires_at else None,
            "has_refresh_token": bool(stored.get("refresh_token")),
        }
