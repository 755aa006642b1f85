"""GitHub REST client wrapper.

Provides:
- a single GET per call with a static bearer token
- JSON decoding with a raw-text fallback (some endpoints return non-JSON bodies)
- the one place that knows how GitHub reports errors in a response body

HTTP status codes are not inspected. GitHub error bodies carry a
``message`` field, which ``upstream_error`` classifies for the dispatcher.
"""

from __future__ import annotations

import logging

import httpx

from .config import DEFAULT_API_BASE_URL, DEFAULT_USER_AGENT
from .errors import ToolError

logger = logging.getLogger(__name__)

ACCEPT_MEDIA_TYPE = "application/vnd.github.v3+json"


def upstream_error(payload: object) -> str | None:
    """Return the GitHub error message carried by ``payload``, or None.

    GitHub reports failures (404, 401, validation errors...) as an object with a
    ``message`` field. Lists and raw text are never errors.
    """
    if isinstance(payload, dict):
        message = payload.get("message")
        if message:
            return str(message)
    return None


class GitHubClient:
    """Minimal read-only GitHub REST client."""

    def __init__(
        self,
        *,
        token: str,
        api_base_url: str = DEFAULT_API_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create a GitHub REST client.

        Args:
            token: Static bearer credential.
            api_base_url: Prefix for endpoints that are not absolute URLs.
            user_agent: Fixed User-Agent identifier.
            transport: Optional httpx transport for tests.
        """
        self._token = token
        self._api_base_url = api_base_url.rstrip("/")
        self._user_agent = user_agent
        self._transport = transport

    def __repr__(self) -> str:
        return f"GitHubClient(api_base_url={self._api_base_url!r})"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": ACCEPT_MEDIA_TYPE,
            "User-Agent": self._user_agent,
        }

    def build_url(self, endpoint: str) -> str:
        """Resolve an API path (``/user``) or pass an absolute URL through."""
        if endpoint.startswith("http"):
            return endpoint
        return f"{self._api_base_url}{endpoint}"

    async def fetch_json(self, endpoint: str) -> object:
        """GET ``endpoint`` and return the decoded JSON body, or the raw text.

        Raises:
            ToolError: On transport-level failures (code "Network").
        """
        url = self.build_url(endpoint)
        logger.debug("GET %s", url)

        try:
            async with httpx.AsyncClient(
                follow_redirects=False,
                timeout=None,
                transport=self._transport,
            ) as client:
                resp = await client.get(url, headers=self._headers())
        except httpx.HTTPError as exc:
            raise ToolError(code="Network", message=str(exc) or "Network request failed") from exc

        try:
            return resp.json()
        except ValueError:
            return resp.text
