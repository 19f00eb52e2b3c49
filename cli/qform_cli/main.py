"""Main entry point for qform CLI."""
from __future__ import annotations

import sys

from qform_cli import __version__
from qform_cli.auth import login, logout
from qform_cli.config import Config
from qform_cli.repl import Repl


def print_help():
    """Print help message."""
    print(f"""
qform CLI v{__version__}

Usage:
  qform [options] [command]

Commands:
  login [--token T]   Store a bearer token for the current API
  logout              Clear the stored token

Options:
  --api-url URL     Override API endpoint
  --all             With logout: clear every environment
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  QFORM_API_URL         Override API endpoint (same as --api-url)
  QFORM_HISTORY_LIMIT   Cap undo depth (0 = unbounded)

Without a command, starts the questionnaire editor. Type /help inside it.
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None (login, logout, None for REPL)
        api_url: str | None
        token: str | None
        logout_all: bool
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "api_url": None,
        "token": None,
        "logout_all": False,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in ("login", "logout"):
            result["command"] = arg
        elif arg in ("--api-url", "--token"):
            if i + 1 >= len(args):
                print(f"Error: {arg} requires a value")
                sys.exit(1)
            result[arg[2:].replace("-", "_")] = args[i + 1]
            i += 1
        elif arg == "--all":
            result["logout_all"] = True
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'qform --help' for usage.")
            sys.exit(1)
        else:
            print(f"Unknown command: {arg}")
            print("Run 'qform --help' for usage.")
            sys.exit(1)

        i += 1

    return result


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"qform {__version__}")
        return

    config = Config(api_url_override=args["api_url"])

    if args["command"] == "login":
        sys.exit(0 if login(config, args["token"]) else 1)

    elif args["command"] == "logout":
        sys.exit(0 if logout(config, logout_all=args["logout_all"]) else 1)

    else:
        if not config.is_authenticated:
            print(f"Not logged in to {config.api_url}; /submit will fail until you run 'qform login'.")
        Repl(config).start()


if __name__ == "__main__":
    main()
