"""CLI for tasks-tools.

Usage:
    tasks-tools google import <path>        # Install OAuth client credentials
    tasks-tools google login                # Connect the Google account
    tasks-tools google status               # Show the stored session
    tasks-tools tasks list                  # Run get_google_tasks
    tasks-tools tasks create <title>        # Run create_google_tasks
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import shutil
import sys
import webbrowser
from pathlib import Path
from typing import Any

from tasks_tools import config

LOGIN_HINT = "Run 'tasks-tools google login' to (re)connect your Google account"


def google_import(args: argparse.Namespace) -> int:
    """Copy an OAuth client file into the google/ folder."""
    from tasks_tools.google import GoogleAuthError, GoogleOAuth

    source = Path(args.path).expanduser()
    if not source.exists():
        print(f"Error: File not found: {source}")
        return 1

    try:
        client_id, _secret = GoogleOAuth(credentials_path=source).client
    except GoogleAuthError as e:
        print(f"Error: {e}")
        return 1

    config.ensure_google_dir()
    shutil.copy2(source, config.GOOGLE_CREDENTIALS)
    print(f"Imported OAuth client {client_id[:40]}... to {config.GOOGLE_CREDENTIALS}")
    print("Next: tasks-tools google login")
    return 0


def google_login(args: argparse.Namespace) -> int:
    """Run the consent flow and store the connection's token."""
    from tasks_tools.google import GoogleAuthError, GoogleOAuth

    broker = GoogleOAuth()
    try:
        if broker.has_session() and not args.force:
            print("Google account already connected (use --force to consent again)")
            return 0
        url = broker.get_authorization_url()
    except GoogleAuthError as e:
        print(f"Error: {e}")
        return 1

    print("Grant access in the browser, then paste the URL you were redirected to.")
    print(f"\n{url}\n")
    if not args.no_browser:
        webbrowser.open(url)

    redirect_url = input("Redirect URL: ").strip()
    if not redirect_url:
        print("No URL provided; aborting.")
        return 1

    try:
        broker.fetch_token(redirect_url)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    print("Google account connected")
    return 0


def google_status(args: argparse.Namespace) -> int:
    """Print the stored session as JSON."""
    from tasks_tools.google import GoogleOAuth

    info = GoogleOAuth().describe()
    print(json.dumps(info, indent=2))
    if info["status"] == "no_session":
        print(LOGIN_HINT)
        return 1
    return 0


def run_tool(name: str, arguments: dict[str, Any]) -> int:
    """Invoke a registered tool and print its JSON result."""
    from pydantic import ValidationError

    from tasks_tools.connection import ConnectionAuthError
    from tasks_tools.tasks import registry

    tool = registry.get(name)

    try:
        result = asyncio.run(tool.invoke(arguments))
    except ValidationError as e:
        print(f"Invalid arguments for {name}:\n{e}")
        return 2
    except ConnectionAuthError as e:
        print(f"Error: {e}")
        print(LOGIN_HINT)
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


def tasks_list(args: argparse.Namespace) -> int:
    """Run get_google_tasks from command-line flags."""
    arguments: dict[str, Any] = {}
    if args.max_results is not None:
        arguments["maxResults"] = args.max_results
    if args.hide_completed:
        arguments["showCompleted"] = False
    if args.show_hidden:
        arguments["showHidden"] = True
    return run_tool("get_google_tasks", arguments)


def tasks_create(args: argparse.Namespace) -> int:
    """Run create_google_tasks from command-line flags."""
    arguments: dict[str, Any] = {"title": args.title}
    if args.notes is not None:
        arguments["notes"] = args.notes
    if args.due is not None:
        arguments["due"] = args.due
    return run_tool("create_google_tasks", arguments)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasks-tools",
        description="Google Tasks agent tools and their Google connection",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable INFO logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    google = subparsers.add_parser("google", help="Manage the Google connection")
    google_commands = google.add_subparsers(dest="google_command", help="Command")

    import_parser = google_commands.add_parser("import", help="Install OAuth client credentials")
    import_parser.add_argument("path", help="Path to the downloaded credentials.json")
    import_parser.set_defaults(handler=google_import)

    login_parser = google_commands.add_parser("login", help="Connect the Google account")
    login_parser.add_argument("--no-browser", action="store_true", help="Don't open a browser")
    login_parser.add_argument("--force", action="store_true", help="Consent again if connected")
    login_parser.set_defaults(handler=google_login)

    google_commands.add_parser("status", help="Show the stored session").set_defaults(
        handler=google_status
    )

    tasks = subparsers.add_parser("tasks", help="Run the Google Tasks tools")
    tasks_commands = tasks.add_subparsers(dest="tasks_command", help="Command")

    list_parser = tasks_commands.add_parser("list", help="List tasks in the default list")
    list_parser.add_argument("--max-results", type=int, default=None, help="Default: 20")
    list_parser.add_argument("--hide-completed", action="store_true", help="Leave out completed tasks")
    list_parser.add_argument("--show-hidden", action="store_true", help="Include hidden tasks")
    list_parser.set_defaults(handler=tasks_list)

    create_parser = tasks_commands.add_parser("create", help="Create a task in the default list")
    create_parser.add_argument("title", help="Task title")
    create_parser.add_argument("--notes", default=None, help="Task notes")
    create_parser.add_argument("--due", default=None, help="Due date, e.g. 2026-01-25")
    create_parser.set_defaults(handler=tasks_create)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
