"""Google OAuth broker exceptions."""


class GoogleAuthError(Exception):
    """Base exception for Google OAuth broker errors."""

    pass


class CredentialsNotFoundError(GoogleAuthError):
    """Raised when the OAuth client credentials file is missing."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Credentials file not found at {path}. "
            "Download OAuth client credentials from Google Cloud Console and run "
            "'tasks-tools google import <path>'."
        )


class TokenError(GoogleAuthError):
    """Raised when the stored token is unusable or cannot be refreshed."""

    pass


class ScopeMismatchError(GoogleAuthError):
    """Raised when a granted token lacks the Tasks scopes we asked for."""

    def __init__(self, missing_scopes: set[str]):
        self.missing_scopes = missing_scopes
        super().__init__(f"Token missing required scopes: {missing_scopes}")
