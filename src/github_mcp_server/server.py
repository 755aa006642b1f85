"""MCP server wiring for github-mcp-server.

Lists the registered tools and resources, and routes tool calls and resource
reads to the runtime built from host configuration.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

try:
    from mcp.server import Server
    from mcp.server.lowlevel.helper_types import ReadResourceContents
    from mcp.types import CallToolResult, Resource, Tool
except ImportError as exc:  # pragma: no cover
    raise ImportError("MCP library not installed. Install with: pip install mcp") from exc

from .envelope import to_call_tool_result, to_resource_contents
from .errors import ToolError
from .operations import list_operations
from .resources import list_resources as resource_descriptors
from .tools import initialize_runtime_from_env

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
logger = logging.getLogger(__name__)

server = Server("github-mcp-server")


def _tools() -> list[Tool]:
    return [
        Tool(name=op.name, description=op.description, inputSchema=op.input_schema)
        for op in list_operations()
    ]


def _resources() -> list[Resource]:
    return [
        Resource(uri=r.uri, name=r.name, description=r.description, mimeType=r.mime_type)
        for r in resource_descriptors()
    ]


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    tools = _tools()
    logger.info("Listed %s tools", len(tools))
    return tools


# Arguments are checked by each operation's own required/default handling.
@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: dict[str, Any] | None) -> CallToolResult:
    """Execute a tool and return the MCP tool envelope."""
    if not isinstance(arguments, dict):
        arguments = {}

    logger.info("Tool called: %s", name)
    runtime = initialize_runtime_from_env()
    result = await runtime.tools.invoke(name, arguments)
    return to_call_tool_result(result)


@server.list_resources()
async def list_resources() -> list[Resource]:
    """List available resources."""
    return _resources()


@server.read_resource()
async def read_resource(uri: Any) -> list[ReadResourceContents]:
    """Read resource content; unknown URIs raise."""
    uri_s = uri if isinstance(uri, str) else str(uri)

    logger.info("Resource read: %s", uri_s)
    runtime = initialize_runtime_from_env()
    payload = await runtime.resources.read(uri_s)
    return to_resource_contents(payload)


async def run_server() -> None:
    """Run the server over stdio."""
    # Fail fast on missing host configuration, before the transport opens.
    try:
        runtime = initialize_runtime_from_env()
    except ToolError as exc:
        logger.error("Startup configuration error: %s", exc.message)
        raise

    logging.getLogger().setLevel(runtime.config.log_level)

    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        logger.info("GitHub MCP Server running")
        await server.run(read_stream, write_stream, server.create_initialization_options())


async def test_server() -> None:
    """Lightweight self-test to ensure tool/resource listing works without a token."""
    tools = _tools()
    resources = _resources()
    print(f"{len(tools)} tools, {len(resources)} resources", file=sys.stderr)
