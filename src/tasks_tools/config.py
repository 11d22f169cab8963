"""Where tasks-tools keeps the Google connection files.

    <home>/google/credentials.json - OAuth client credentials
    <home>/google/token.json       - authorized-user token of the connection

<home> is $TASKS_TOOLS_HOME when set, otherwise the repository root.
"""

import os
from collections.abc import Mapping
from pathlib import Path


def resolve_home(environ: Mapping[str, str] | None = None) -> Path:
    """Directory holding the google/ credential folder."""
    if environ is None:
        environ = os.environ
    override = environ.get("TASKS_TOOLS_HOME")
    if override:
        return Path(override).expanduser()
    # src/tasks_tools/config.py -> repo root
    return Path(__file__).resolve().parents[2]


HOME = resolve_home()
GOOGLE_DIR = HOME / "google"
GOOGLE_CREDENTIALS = GOOGLE_DIR / "credentials.json"
GOOGLE_TOKEN = GOOGLE_DIR / "token.json"


def ensure_google_dir() -> Path:
    """Create the google credentials directory if needed."""
    GOOGLE_DIR.mkdir(parents=True, exist_ok=True)
    return GOOGLE_DIR
