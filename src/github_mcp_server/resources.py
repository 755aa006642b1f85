"""Read-only resources.

Two fixed URIs, each backed by one canned upstream call. Unlike tools there is no
failure envelope: an unknown URI or an upstream error raises and the transport
reports it as a protocol error.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from . import reshape
from .envelope import JSON_MIME_TYPE
from .errors import ToolError
from .github_client import GitHubClient, upstream_error


@dataclass(frozen=True, slots=True)
class ResourceDescriptor:
    """A URI-addressed read-only view."""

    uri: str
    name: str
    description: str
    endpoint: str
    reshape: Callable[[object], Any]
    mime_type: str = JSON_MIME_TYPE


RESOURCES: tuple[ResourceDescriptor, ...] = (
    ResourceDescriptor(
        uri="github://user/profile",
        name="GitHub Profile",
        description="Your GitHub profile",
        endpoint="/user",
        reshape=reshape.profile_summary,
    ),
    ResourceDescriptor(
        uri="github://user/repos",
        name="Your Repositories",
        description="Your recent repos",
        endpoint="/user/repos?sort=updated&per_page=5&type=owner",
        reshape=reshape.repo_digest,
    ),
)

_BY_URI: dict[str, ResourceDescriptor] = {r.uri: r for r in RESOURCES}


def list_resources() -> tuple[ResourceDescriptor, ...]:
    return RESOURCES


class ResourceReader:
    """Resolves resource URIs to reshaped upstream data."""

    def __init__(self, *, github: GitHubClient) -> None:
        self._github = github

    async def read(self, uri: str) -> Any:
        """Fetch and reshape the resource at ``uri``.

        Raises:
            ToolError: For an unknown URI (code "NotFound") or an upstream error.
        """
        descriptor = _BY_URI.get(uri)
        if descriptor is None:
            raise ToolError(code="NotFound", message=f"Unknown resource: {uri}")

        payload = await self._github.fetch_json(descriptor.endpoint)
        message = upstream_error(payload)
        if message is not None:
            raise ToolError(code="GitHub", message=message)
        return descriptor.reshape(payload)
