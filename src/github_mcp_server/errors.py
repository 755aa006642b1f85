"""Error type shared by the client, dispatcher and server layers.

Messages carried by a ToolError are shown to agents verbatim and must never
contain the bearer token.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ToolError(Exception):
    """An error with a stable code and an agent-visible message.

    Codes in use: Config, UserInput, GitHub, Network, NotFound.
    """

    code: str
    message: str

    def __str__(self) -> str:
        return self.message


def config_error(message: str) -> ToolError:
    """Error for missing or invalid host configuration."""
    return ToolError(code="Config", message=message)


def missing_argument_error(name: str) -> ToolError:
    """Error for a required tool argument that was not supplied."""
    return ToolError(code="UserInput", message=f"Missing required argument: {name}")


def unexpected_response_error(what: str) -> ToolError:
    """Error for an upstream payload whose shape cannot be reshaped."""
    return ToolError(code="GitHub", message=f"Unexpected {what} response")
