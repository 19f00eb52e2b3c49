"""
Configuration management for qform CLI.

Multi-environment support:
  The CLI stores a separate bearer token per API URL, so staging and local
  dev credentials can sit side by side.

  Config structure:
  {
    "environments": {
      "https://forms.example.com": {"token": "..."},
      "http://localhost:8000": {"token": "..."}
    },
    "default_url": "http://localhost:8000"
  }

Environment resolution order:
  1. QFORM_API_URL environment variable
  2. --api-url command line flag (passed to Config)
  3. default_url from config file
  4. Fallback: qform.config.settings.API_URL
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from qform.config import settings

logger = logging.getLogger(__name__)


class Config:
    """Config manager for qform CLI with multi-environment support."""

    def __init__(self, api_url_override: str | None = None, config_dir: Path | None = None):
        """
        Initialize config.

        Args:
            api_url_override: Optional --api-url flag value
            config_dir: Directory holding config.json (default ~/.qform)
        """
        self.config_dir = config_dir or Path.home() / ".qform"
        self.config_file = self.config_dir / "config.json"
        self._data: dict = {}
        self._api_url_override = api_url_override
        self._load()

    def _load(self):
        """Load config from disk. A corrupt file is treated as empty."""
        if self.config_file.exists():
            try:
                with open(self.config_file) as f:
                    self._data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("config: ignoring unreadable %s: %s", self.config_file, e)
                self._data = {}

        if "environments" not in self._data:
            self._data["environments"] = {}

    def _save(self):
        """Save config to disk with owner-only permissions."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, "w") as f:
            json.dump(self._data, f, indent=2)

        self.config_file.chmod(0o600)

    @property
    def api_url(self) -> str:
        """Current API URL, see module docstring for resolution order."""
        env_url = os.environ.get("QFORM_API_URL")
        if env_url:
            return env_url.rstrip("/")

        if self._api_url_override:
            return self._api_url_override.rstrip("/")

        return self._data.get("default_url", settings.API_URL).rstrip("/")

    @property
    def default_url(self) -> str:
        """API URL used when neither QFORM_API_URL nor --api-url is given."""
        return self._data.get("default_url", settings.API_URL)

    @default_url.setter
    def default_url(self, value: str):
        self._data["default_url"] = value.rstrip("/")
        self._save()

    def _get_env(self) -> dict:
        return self._data["environments"].get(self.api_url, {})

    def _set_env(self, key: str, value):
        self._data["environments"].setdefault(self.api_url, {})[key] = value
        self._save()

    @property
    def token(self) -> str | None:
        """Bearer token for current environment, or None."""
        return self._get_env().get("token")

    @token.setter
    def token(self, value: str):
        self._set_env("token", value)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def clear_environment(self, url: str | None = None):
        """Forget the token of one environment (default: current)."""
        target_url = (url or self.api_url).rstrip("/")
        if target_url in self._data["environments"]:
            del self._data["environments"][target_url]
            self._save()

    def clear_all(self):
        """Forget every token and delete the config file."""
        self._data = {"environments": {}}
        if self.config_file.exists():
            self.config_file.unlink()

    def list_environments(self) -> list[dict]:
        """Authenticated environments as dicts with url and is_current keys."""
        current = self.api_url
        return [
            {"url": url, "is_current": url == current}
            for url, env in self._data["environments"].items()
            if env.get("token")
        ]
