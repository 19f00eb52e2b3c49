"""
qform Assembly -- HttpStore Tests

The HTTP adapter posts the wire body with a bearer header and surfaces
transport errors to the session boundary. httpx.AsyncClient is mocked.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from qform.kernel.assembly import EditorSession
from qform.kernel.http_store import HttpStore


def _mock_client(mock_client_cls, response=None, side_effect=None):
    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    mock_client.post = AsyncMock(return_value=response, side_effect=side_effect)
    mock_client_cls.return_value = mock_client
    return mock_client


@pytest.mark.asyncio
async def test_posts_body_with_bearer_token():
    mock_response = MagicMock()
    mock_response.raise_for_status = MagicMock()
    mock_response.content = b'{"id": 42}'
    mock_response.json.return_value = {"id": 42}

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client = _mock_client(mock_client_cls, response=mock_response)

        store = HttpStore("http://forms.test/", timeout=5.0)
        result = await store.create({"id": 42}, "tok_abc")

    assert result == {"id": 42}
    mock_client_cls.assert_called_once_with(timeout=5.0)
    mock_client.post.assert_awaited_once()
    args, kwargs = mock_client.post.call_args
    assert args[0] == "http://forms.test/questionary/create"
    assert kwargs["json"] == {"id": 42}
    assert kwargs["headers"]["Authorization"] == "Bearer tok_abc"


@pytest.mark.asyncio
async def test_empty_response_body():
    mock_response = MagicMock()
    mock_response.raise_for_status = MagicMock()
    mock_response.content = b""

    with patch("httpx.AsyncClient") as mock_client_cls:
        _mock_client(mock_client_cls, response=mock_response)
        result = await HttpStore("http://forms.test", create_path="/q").create({}, "tok")

    assert result == {}
    mock_response.json.assert_not_called()


@pytest.mark.asyncio
async def test_non_2xx_raises():
    request = httpx.Request("POST", "http://forms.test/questionary/create")
    mock_response = MagicMock()
    mock_response.raise_for_status = MagicMock(
        side_effect=httpx.HTTPStatusError("403", request=request, response=httpx.Response(403))
    )

    with patch("httpx.AsyncClient") as mock_client_cls:
        _mock_client(mock_client_cls, response=mock_response)
        with pytest.raises(httpx.HTTPStatusError):
            await HttpStore("http://forms.test").create({}, "tok")


@pytest.mark.asyncio
async def test_session_reports_network_failure(fresh_state):
    notes = []
    with patch("httpx.AsyncClient") as mock_client_cls:
        _mock_client(mock_client_cls, side_effect=httpx.ConnectError("no route"))
        session = EditorSession(
            HttpStore("http://forms.test"),
            lambda: "tok",
            notify=lambda t, d: notes.append(t),
            state=fresh_state,
        )
        result = await session.submit()

    assert not result.ok
    assert notes == ["Error"]
    assert session.present is fresh_state.present


@pytest.mark.asyncio
async def test_session_never_calls_http_without_token(fresh_state):
    with patch("httpx.AsyncClient") as mock_client_cls:
        session = EditorSession(HttpStore("http://forms.test"), lambda: None, state=fresh_state)
        result = await session.submit()

    assert not result.ok
    mock_client_cls.assert_not_called()
