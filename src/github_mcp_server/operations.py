"""Operation registry.

Each tool is one row of a declarative table: its parameters (with defaults),
how to build the single upstream endpoint from bound arguments, and how to
reshape the upstream payload. The advertised schemas and the dispatcher are both
derived from this table, so every listed tool has exactly one dispatch entry.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from . import reshape
from .errors import missing_argument_error

_STATES = ("open", "closed", "all")
_REPO_SORTS = ("updated", "created", "pushed", "full_name")


@dataclass(frozen=True, slots=True)
class Parameter:
    """A single named tool parameter."""

    name: str
    type: str
    description: str | None = None
    enum: tuple[str, ...] | None = None
    required: bool = False
    default: Any = None

    def schema(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.enum is not None:
            out["enum"] = list(self.enum)
        if self.description:
            out["description"] = self.description
        if self.default is not None:
            out["default"] = self.default
        return out


@dataclass(frozen=True, slots=True)
class Operation:
    """A tool: name, description, parameters, endpoint template and reshape."""

    name: str
    description: str
    parameters: tuple[Parameter, ...]
    endpoint: Callable[[dict[str, Any]], str]
    reshape: Callable[[object], Any]

    @property
    def input_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {p.name: p.schema() for p in self.parameters},
        }
        required = [p.name for p in self.parameters if p.required]
        if required:
            schema["required"] = required
        return schema

    def bind(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Apply defaults and check required parameters.

        A missing or falsy optional value takes the parameter's default. Arguments
        not declared by the operation are passed through untouched.

        Raises:
            ToolError: If a required parameter is absent.
        """
        bound = dict(arguments)
        for p in self.parameters:
            value = bound.get(p.name)
            if p.required and value is None:
                raise missing_argument_error(p.name)
            if not value and p.default is not None:
                bound[p.name] = p.default
        return bound


def _per_page(value: Any) -> int:
    return int(value)


def _owner(description: str | None = None) -> Parameter:
    return Parameter("owner", "string", description=description, required=True)


def _repo(description: str | None = None) -> Parameter:
    return Parameter("repo", "string", description=description, required=True)


def _state() -> Parameter:
    return Parameter(
        "state", "string", description="Filter by state (default: open)", enum=_STATES, default="open"
    )


def _limit(what: str, default: int) -> Parameter:
    return Parameter("limit", "number", description=f"Max {what} (default: {default})", default=default)


def _list_repos_endpoint(args: dict[str, Any]) -> str:
    sort = args["sort"]
    limit = _per_page(args["limit"])
    username = args.get("username")
    if username:
        return f"/users/{username}/repos?sort={sort}&per_page={limit}"
    return f"/user/repos?sort={sort}&per_page={limit}&type=owner"


def _file_contents_endpoint(args: dict[str, Any]) -> str:
    branch = args.get("branch") or ""
    ref = f"?ref={branch}" if branch else ""
    return f"/repos/{args['owner']}/{args['repo']}/contents/{args['path']}{ref}"


def _search_endpoint(args: dict[str, Any]) -> str:
    # Same escaping as JavaScript's encodeURIComponent.
    q = quote(str(args["query"]), safe="!*'()")
    return f"/search/repositories?q={q}&per_page={_per_page(args['limit'])}"


OPERATIONS: tuple[Operation, ...] = (
    Operation(
        name="get_user",
        description="Get the authenticated GitHub user's profile info",
        parameters=(),
        endpoint=lambda _args: "/user",
        reshape=reshape.user_profile,
    ),
    Operation(
        name="list_repos",
        description="List repositories for the authenticated user or a specified user",
        parameters=(
            Parameter("username", "string", description="GitHub username (leave empty for your own repos)"),
            Parameter(
                "sort", "string", description="Sort by (default: updated)", enum=_REPO_SORTS, default="updated"
            ),
            _limit("repos to return", 10),
        ),
        endpoint=_list_repos_endpoint,
        reshape=reshape.repo_summaries,
    ),
    Operation(
        name="get_repo",
        description="Get detailed info about a specific repository",
        parameters=(_owner("Repo owner (username or org)"), _repo("Repository name")),
        endpoint=lambda args: f"/repos/{args['owner']}/{args['repo']}",
        reshape=reshape.repo_detail,
    ),
    Operation(
        name="list_issues",
        description="List issues for a repository",
        parameters=(_owner(), _repo(), _state(), _limit("issues to return", 10)),
        endpoint=lambda args: (
            f"/repos/{args['owner']}/{args['repo']}/issues"
            f"?state={args['state']}&per_page={_per_page(args['limit'])}"
        ),
        reshape=reshape.issues,
    ),
    Operation(
        name="list_pull_requests",
        description="List pull requests for a repository",
        parameters=(_owner(), _repo(), _state(), _limit("PRs to return", 10)),
        endpoint=lambda args: (
            f"/repos/{args['owner']}/{args['repo']}/pulls"
            f"?state={args['state']}&per_page={_per_page(args['limit'])}"
        ),
        reshape=reshape.pull_requests,
    ),
    Operation(
        name="get_file_contents",
        description="Get the contents of a file from a repository",
        parameters=(
            _owner(),
            _repo(),
            Parameter(
                "path",
                "string",
                description="File path (e.g. 'README.md', 'src/index.js'); empty for the repository root",
                required=True,
            ),
            Parameter("branch", "string", description="Branch name (default: the repository's default branch)"),
        ),
        endpoint=_file_contents_endpoint,
        reshape=reshape.file_contents,
    ),
    Operation(
        name="search_repos",
        description="Search GitHub repositories by keyword",
        parameters=(
            Parameter("query", "string", description="Search query", required=True),
            _limit("results", 5),
        ),
        endpoint=_search_endpoint,
        reshape=reshape.search_results,
    ),
    Operation(
        name="list_commits",
        description="List recent commits for a repository",
        parameters=(_owner(), _repo(), _limit("commits", 10)),
        endpoint=lambda args: f"/repos/{args['owner']}/{args['repo']}/commits?per_page={_per_page(args['limit'])}",
        reshape=reshape.commits,
    ),
)

_BY_NAME: dict[str, Operation] = {op.name: op for op in OPERATIONS}


def list_operations() -> tuple[Operation, ...]:
    """Return the advertised operations, in their fixed order."""
    return OPERATIONS


def get_operation(name: str) -> Operation | None:
    return _BY_NAME.get(name)
