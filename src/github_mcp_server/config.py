"""Configuration loading for github-mcp-server.

Configuration is supplied by the host environment (e.g., MCP client config), not by the agent.
The bearer token is a secret: it is hidden from repr and must never be emitted to agents,
logs, or audit events.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from . import __version__
from .errors import config_error

DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_USER_AGENT = f"github-mcp-server/{__version__}"


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Host-provided server configuration."""

    token: str = field(repr=False)
    api_base_url: str = DEFAULT_API_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    log_level: int = logging.INFO

    audit_log_path: Path | None = None
    audit_max_bytes: int = 5 * 1024 * 1024
    audit_max_backups: int = 2


def _parse_log_level(value: str | None) -> int:
    if not value:
        return logging.INFO
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise config_error("GITHUB_MCP_LOG_LEVEL must be a logging level name (e.g. INFO, DEBUG)")
    return level


def _parse_api_base_url(value: str | None) -> str:
    if not value:
        return DEFAULT_API_BASE_URL
    url = value.strip().rstrip("/")
    if not url.startswith("https://"):
        raise config_error("GITHUB_API_URL must be an https:// URL")
    return url


def load_config_from_env() -> ServerConfig:
    """Load and validate configuration from environment variables.

    Raises:
        ToolError: If configuration is missing/invalid (code "Config").
    """
    token = os.getenv("GITHUB_TOKEN", "").strip()
    if not token:
        raise config_error("Set GITHUB_TOKEN environment variable")

    audit_path_raw = os.getenv("GITHUB_MCP_AUDIT_LOG_PATH")
    audit_path: Path | None = None
    if audit_path_raw:
        p = Path(audit_path_raw)
        if not p.is_absolute():
            raise config_error("GITHUB_MCP_AUDIT_LOG_PATH must be an absolute path when set")
        audit_path = p

    return ServerConfig(
        token=token,
        api_base_url=_parse_api_base_url(os.getenv("GITHUB_API_URL")),
        log_level=_parse_log_level(os.getenv("GITHUB_MCP_LOG_LEVEL")),
        audit_log_path=audit_path,
    )
