"""Tool dispatch layer.

This module:
- builds a per-process runtime from host-provided config
- maps a tool name + arguments onto exactly one upstream call
- converts every outcome into a Success or Failure (nothing is raised to the caller)
- writes one audit event per invocation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .audit import AuditLogger, build_event, new_correlation_id, target_from_args
from .config import ServerConfig, load_config_from_env
from .envelope import Failure, InvocationResult, Success
from .errors import ToolError
from .github_client import GitHubClient, upstream_error
from .operations import get_operation
from .resources import ResourceReader

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Executes registered operations against the GitHub client."""

    def __init__(self, *, github: GitHubClient, audit: AuditLogger) -> None:
        self._github = github
        self._audit = audit

    async def _execute(self, name: str, arguments: dict[str, Any]) -> Any:
        operation = get_operation(name)
        if operation is None:
            raise ToolError(code="UserInput", message=f"Unknown tool: {name}")

        bound = operation.bind(arguments)
        endpoint = operation.endpoint(bound)
        payload = await self._github.fetch_json(endpoint)

        message = upstream_error(payload)
        if message is not None:
            raise ToolError(code="GitHub", message=message)

        return operation.reshape(payload)

    async def invoke(self, name: str, arguments: dict[str, Any]) -> InvocationResult:
        """Run a tool and return its result; failures are reported, never raised."""
        correlation_id = new_correlation_id()
        start = self._audit.measure_start()

        result: InvocationResult
        try:
            result = Success(await self._execute(name, arguments))
        except ToolError as err:
            result = Failure(err.message)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Tool %s raised %s", name, type(exc).__name__, exc_info=True)
            result = Failure(str(exc) or type(exc).__name__)

        self._audit.write_event(
            build_event(
                correlation_id=correlation_id,
                operation=name,
                target=target_from_args(arguments),
                outcome="succeeded" if isinstance(result, Success) else "failed",
                reason=result.message if isinstance(result, Failure) else None,
                duration_ms=self._audit.measure_duration_ms(start),
            )
        )
        return result


@dataclass(frozen=True, slots=True)
class Runtime:
    """Per-process dependencies shared across requests."""

    config: ServerConfig
    audit: AuditLogger
    github: GitHubClient
    tools: ToolDispatcher
    resources: ResourceReader


_RUNTIME: Runtime | None = None


def build_runtime(config: ServerConfig) -> Runtime:
    """Wire the runtime from an explicit configuration."""
    audit = AuditLogger(
        sink_path=config.audit_log_path,
        max_bytes=config.audit_max_bytes,
        max_backups=config.audit_max_backups,
    )
    github = GitHubClient(
        token=config.token,
        api_base_url=config.api_base_url,
        user_agent=config.user_agent,
    )
    return Runtime(
        config=config,
        audit=audit,
        github=github,
        tools=ToolDispatcher(github=github, audit=audit),
        resources=ResourceReader(github=github),
    )


def initialize_runtime_from_env() -> Runtime:
    """Initialize and cache runtime from environment.

    Called at server startup (fail-fast), and used lazily by the request handlers.
    """
    global _RUNTIME  # pylint: disable=global-statement
    if _RUNTIME is not None:
        return _RUNTIME

    _RUNTIME = build_runtime(load_config_from_env())
    return _RUNTIME
