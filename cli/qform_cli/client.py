"""HTTP client for the questionnaire API (read side)."""
from __future__ import annotations

from datetime import date
from typing import Any

import httpx

from qform.config import settings


class ApiClient:
    """Synchronous HTTP client for dashboard queries."""

    def __init__(self, api_url: str, token: str | None = None, timeout: float = 30.0):
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.client = httpx.Client(timeout=timeout)

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get(self, path: str, params: dict | None = None) -> Any:
        """Make GET request."""
        res = self.client.get(f"{self.api_url}{path}", headers=self._headers(), params=params or {})
        res.raise_for_status()
        return res.json()

    def get_statistics(self, start: date, end: date) -> dict:
        """
        Aggregate counts for a date range.

        Returns {"totalResponses": int, "totalQuestionnairesActive": int,
                 "averageResponseRate": float, ...}
        """
        return self.get(
            settings.STATS_PATH,
            {"from": start.isoformat(), "to": end.isoformat()},
        )

    def close(self):
        """Close client."""
        self.client.close()
