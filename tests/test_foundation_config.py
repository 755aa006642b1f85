"""Configuration loading tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from github_mcp_server.config import DEFAULT_API_BASE_URL, load_config_from_env
from github_mcp_server.errors import ToolError

_VARS = ("GITHUB_TOKEN", "GITHUB_API_URL", "GITHUB_MCP_AUDIT_LOG_PATH", "GITHUB_MCP_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_missing_token_is_a_config_error() -> None:
    with pytest.raises(ToolError) as exc:
        load_config_from_env()
    assert exc.value.code == "Config"
    assert "GITHUB_TOKEN" in exc.value.message


def test_blank_token_is_a_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "   ")
    with pytest.raises(ToolError):
        load_config_from_env()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "tok")

    cfg = load_config_from_env()

    assert cfg.token == "tok"
    assert cfg.api_base_url == DEFAULT_API_BASE_URL
    assert cfg.user_agent.startswith("github-mcp-server/")
    assert cfg.log_level == logging.INFO
    assert cfg.audit_log_path is None


def test_token_is_hidden_from_repr(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "super-secret-value")
    assert "super-secret-value" not in repr(load_config_from_env())


def test_api_url_override_strips_trailing_slash(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "tok")
    monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")
    assert load_config_from_env().api_base_url == "https://ghe.example.com/api/v3"


def test_api_url_must_be_https(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "tok")
    monkeypatch.setenv("GITHUB_API_URL", "http://ghe.example.com")
    with pytest.raises(ToolError) as exc:
        load_config_from_env()
    assert exc.value.code == "Config"


def test_log_level_parsing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "tok")
    monkeypatch.setenv("GITHUB_MCP_LOG_LEVEL", "debug")
    assert load_config_from_env().log_level == logging.DEBUG

    monkeypatch.setenv("GITHUB_MCP_LOG_LEVEL", "chatty")
    with pytest.raises(ToolError):
        load_config_from_env()


def test_audit_path_must_be_absolute(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "tok")
    monkeypatch.setenv("GITHUB_MCP_AUDIT_LOG_PATH", "relative/audit.jsonl")
    with pytest.raises(ToolError):
        load_config_from_env()

    monkeypatch.setenv("GITHUB_MCP_AUDIT_LOG_PATH", str(tmp_path / "audit.jsonl"))
    assert load_config_from_env().audit_log_path == tmp_path / "audit.jsonl"
