"""Payload reshaping.

Each function takes a raw GitHub REST payload and returns the flat, stable
shape exposed to agents. Fields not listed here are dropped.
"""

from __future__ import annotations

import base64
from typing import Any

from .errors import ToolError, unexpected_response_error


def _expect_dict(payload: object, what: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise unexpected_response_error(what)
    return payload


def _expect_list(payload: object, what: str) -> list[Any]:
    if not isinstance(payload, list):
        raise unexpected_response_error(what)
    return payload


def _login(obj: object) -> str | None:
    if isinstance(obj, dict):
        return obj.get("login")
    return None


def _ref(obj: object) -> str | None:
    if isinstance(obj, dict):
        return obj.get("ref")
    return None


def user_profile(payload: object) -> dict[str, Any]:
    user = _expect_dict(payload, "user")
    return {
        "login": user.get("login"),
        "name": user.get("name"),
        "bio": user.get("bio"),
        "publicRepos": user.get("public_repos"),
        "followers": user.get("followers"),
        "following": user.get("following"),
        "createdAt": user.get("created_at"),
        "avatarUrl": user.get("avatar_url"),
        "profileUrl": user.get("html_url"),
    }


def repo_summaries(payload: object) -> list[dict[str, Any]]:
    return [
        {
            "name": r.get("name"),
            "fullName": r.get("full_name"),
            "description": r.get("description"),
            "language": r.get("language"),
            "stars": r.get("stargazers_count"),
            "forks": r.get("forks_count"),
            "isPrivate": r.get("private"),
            "updatedAt": r.get("updated_at"),
            "url": r.get("html_url"),
        }
        for r in _expect_list(payload, "repositories")
    ]


def repo_detail(payload: object) -> dict[str, Any]:
    repo = _expect_dict(payload, "repository")
    license_obj = repo.get("license")
    return {
        "fullName": repo.get("full_name"),
        "description": repo.get("description"),
        "language": repo.get("language"),
        "stars": repo.get("stargazers_count"),
        "forks": repo.get("forks_count"),
        "openIssues": repo.get("open_issues_count"),
        "isPrivate": repo.get("private"),
        "defaultBranch": repo.get("default_branch"),
        "createdAt": repo.get("created_at"),
        "updatedAt": repo.get("updated_at"),
        "topics": repo.get("topics"),
        "license": license_obj.get("name") if isinstance(license_obj, dict) else None,
        "url": repo.get("html_url"),
    }


def without_pull_requests(items: list[Any]) -> list[Any]:
    """Drop entries of the issues endpoint that are really pull requests."""
    return [it for it in items if not (isinstance(it, dict) and it.get("pull_request"))]


def issues(payload: object) -> list[dict[str, Any]]:
    return [
        {
            "number": it.get("number"),
            "title": it.get("title"),
            "state": it.get("state"),
            "author": _login(it.get("user")),
            "labels": [label.get("name") for label in it.get("labels") or [] if isinstance(label, dict)],
            "createdAt": it.get("created_at"),
            "comments": it.get("comments"),
            "url": it.get("html_url"),
        }
        for it in without_pull_requests(_expect_list(payload, "issues"))
    ]


def pull_requests(payload: object) -> list[dict[str, Any]]:
    return [
        {
            "number": pr.get("number"),
            "title": pr.get("title"),
            "state": pr.get("state"),
            "author": _login(pr.get("user")),
            "branch": _ref(pr.get("head")),
            "baseBranch": _ref(pr.get("base")),
            "createdAt": pr.get("created_at"),
            "url": pr.get("html_url"),
        }
        for pr in _expect_list(payload, "pull requests")
    ]


def file_contents(payload: object) -> dict[str, Any] | list[dict[str, Any]]:
    """Decode a file, or list a directory.

    The contents endpoint returns an object with base64 ``content`` for files and
    an array for directories. Other object shapes (symlinks, submodules) and files
    served without inline content (``encoding: "none"`` above 1 MB) are not
    supported.
    """
    if (
        isinstance(payload, dict)
        and isinstance(payload.get("content"), str)
        and payload.get("encoding", "base64") == "base64"
    ):
        # GitHub wraps base64 at 60 columns; b64decode discards the newlines.
        decoded = base64.b64decode(payload["content"])
        return {
            "path": payload.get("path"),
            "size": payload.get("size"),
            "content": decoded.decode("utf-8", errors="replace"),
        }
    if isinstance(payload, list):
        return [
            {
                "name": entry.get("name"),
                "type": entry.get("type"),
                "size": entry.get("size"),
                "path": entry.get("path"),
            }
            for entry in payload
        ]
    raise ToolError(code="GitHub", message="Could not read file")


def search_results(payload: object) -> dict[str, Any]:
    result = _expect_dict(payload, "search")
    return {
        "totalCount": result.get("total_count"),
        "repos": [
            {
                "fullName": r.get("full_name"),
                "description": r.get("description"),
                "language": r.get("language"),
                "stars": r.get("stargazers_count"),
                "url": r.get("html_url"),
            }
            for r in _expect_list(result.get("items"), "search")
        ],
    }


def commits(payload: object) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for c in _expect_list(payload, "commits"):
        commit = c.get("commit") or {}
        author = commit.get("author") or {}
        message = commit.get("message") or ""
        out.append(
            {
                "sha": (c.get("sha") or "")[:7],
                "message": message.split("\n")[0],
                "author": author.get("name"),
                "date": author.get("date"),
                "url": c.get("html_url"),
            }
        )
    return out


def profile_summary(payload: object) -> dict[str, Any]:
    user = _expect_dict(payload, "user")
    return {
        "login": user.get("login"),
        "name": user.get("name"),
        "publicRepos": user.get("public_repos"),
        "followers": user.get("followers"),
    }


def repo_digest(payload: object) -> list[dict[str, Any]]:
    return [
        {
            "name": r.get("name"),
            "language": r.get("language"),
            "stars": r.get("stargazers_count"),
        }
        for r in _expect_list(payload, "repositories")
    ]
