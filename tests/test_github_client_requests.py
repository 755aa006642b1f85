"""GitHub client request construction and body decoding tests."""

from __future__ import annotations

import httpx
import pytest
from github_mcp_server.errors import ToolError
from github_mcp_server.github_client import GitHubClient, upstream_error


def _client(handler) -> GitHubClient:  # noqa: ANN001
    return GitHubClient(token="tok", user_agent="ua-test/1.0", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_json_sends_bearer_headers_and_prefixes_api_root() -> None:
    seen: dict[str, str | None] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["accept"] = request.headers.get("Accept")
        seen["ua"] = request.headers.get("User-Agent")
        seen["method"] = request.method
        return httpx.Response(200, json={"login": "octocat"})

    out = await _client(handler).fetch_json("/user")

    assert out == {"login": "octocat"}
    assert seen == {
        "url": "https://api.github.com/user",
        "auth": "Bearer tok",
        "accept": "application/vnd.github.v3+json",
        "ua": "ua-test/1.0",
        "method": "GET",
    }


@pytest.mark.asyncio
async def test_fetch_json_passes_absolute_urls_through() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        return httpx.Response(200, json=[])

    out = await _client(handler).fetch_json("https://uploads.github.com/some/path?x=1")

    assert out == []
    assert seen["url"] == "https://uploads.github.com/some/path?x=1"


@pytest.mark.asyncio
async def test_fetch_json_returns_raw_text_when_body_is_not_json() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"# raw readme")

    out = await _client(handler).fetch_json("/repos/octo/repo/readme")

    assert out == "# raw readme"


@pytest.mark.asyncio
async def test_fetch_json_does_not_raise_on_http_error_status() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Not Found"})

    out = await _client(handler).fetch_json("/repos/octo/missing")

    assert out == {"message": "Not Found"}


@pytest.mark.asyncio
async def test_fetch_json_makes_a_single_attempt() -> None:
    calls = {"n": 0}

    def handler(_request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        return httpx.Response(500, json={"message": "Server Error"})

    _ = await _client(handler).fetch_json("/user")

    assert calls["n"] == 1


@pytest.mark.asyncio
async def test_fetch_json_maps_transport_failure_to_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ToolError) as exc:
        _ = await _client(handler).fetch_json("/user")

    assert exc.value.code == "Network"
    assert "connection refused" in exc.value.message


def test_client_repr_hides_token() -> None:
    client = GitHubClient(token="secret-token-value")
    assert "secret-token-value" not in repr(client)


@pytest.mark.parametrize(
    "payload,expected",
    [
        ({"message": "Bad credentials"}, "Bad credentials"),
        ({"message": ""}, None),
        ({"login": "octocat"}, None),
        ([{"message": "not an error"}], None),
        ("raw text", None),
    ],
)
def test_upstream_error_classifier(payload: object, expected: str | None) -> None:
    assert upstream_error(payload) == expected
