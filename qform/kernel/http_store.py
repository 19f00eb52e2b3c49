"""
HttpStore adapter for qform kernel assembly layer.

Implements the QuestionnaireStore protocol against the remote questionnaire
API: one POST per submission, bearer-authenticated.
"""

from __future__ import annotations

from typing import Any

import httpx

from qform.kernel.assembly import QuestionnaireStore


class HttpStore(QuestionnaireStore):
    """HTTP-backed questionnaire store."""

    def __init__(
        self,
        api_url: str,
        create_path: str = "/questionary/create",
        timeout: float = 30.0,
    ):
        self.api_url = api_url.rstrip("/")
        self.create_path = create_path
        self.timeout = timeout

    async def create(self, payload: dict[str, Any], token: str) -> dict[str, Any]:
        """
        POST the wire body.

        Raises:
            httpx.HTTPError: transport failure or non-2xx response
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.api_url}{self.create_path}",
                json=payload,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {token}",
                },
            )
            response.raise_for_status()
            if not response.content:
                return {}
            return response.json()
