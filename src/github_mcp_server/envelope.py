"""Invocation results and their MCP envelopes.

Every tool call ends in exactly one ``Success`` or ``Failure``; the server turns
that into a ``CallToolResult``. Resources use a separate JSON text envelope.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import CallToolResult, TextContent

JSON_MIME_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class Success:
    """A reshaped, JSON-serializable payload."""

    payload: Any


@dataclass(frozen=True, slots=True)
class Failure:
    """A human-readable failure message."""

    message: str


InvocationResult = Success | Failure


def to_json_text(payload: Any) -> str:
    return json.dumps(payload, indent=2, default=str)


def to_call_tool_result(result: InvocationResult) -> CallToolResult:
    """Build the tool envelope; failures are flagged with ``isError``."""
    if isinstance(result, Failure):
        return CallToolResult(
            content=[TextContent(type="text", text=f"Error: {result.message}")],
            isError=True,
        )
    return CallToolResult(content=[TextContent(type="text", text=to_json_text(result.payload))])


def to_resource_contents(payload: Any) -> list[ReadResourceContents]:
    return [ReadResourceContents(content=to_json_text(payload), mime_type=JSON_MIME_TYPE)]
