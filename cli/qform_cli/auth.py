"""Credential handling for qform CLI."""
import getpass

from qform_cli.config import Config


def login(config: Config, token: str | None = None) -> bool:
    """
    Store a bearer token for the current environment and make it the
    default for later runs.

    Prompts (without echo) when no token is given.
    Returns True if a token was saved.
    """
    if token is None:
        try:
            token = getpass.getpass(f"Token for {config.api_url}: ")
        except (EOFError, KeyboardInterrupt):
            print()
            return False

    token = token.strip()
    if not token:
        print("No token given.")
        return False

    config.token = token
    config.default_url = config.api_url
    print(f"Token saved to {config.config_file}")
    return True


def logout(config: Config, logout_all: bool = False) -> bool:
    """
    Clear stored credentials.

    Args:
        config: Config instance
        logout_all: If True, clear all environments. If False, only current.
    """
    if logout_all:
        envs = config.list_environments()
        if not envs:
            print("No authenticated environments.")
            return True

        for env in envs:
            print(f"  Logging out of {env['url']}")

        config.clear_all()
        print("Logged out of all environments.")
        return True

    if not config.is_authenticated:
        print(f"Not logged in to {config.api_url}")
        return False

    config.clear_environment()
    print(f"Logged out of {config.api_url}")
    return True
