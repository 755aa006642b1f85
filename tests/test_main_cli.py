"""CLI entry point tests."""

from __future__ import annotations

import github_mcp_server.__main__ as cli
import github_mcp_server.tools as tools
import pytest


def test_parse_args_test_flag() -> None:
    assert cli.parse_args(["--test"]).test is True
    assert cli.parse_args([]).test is False


def test_missing_token_exits_with_status_1(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setattr(tools, "_RUNTIME", None)
    monkeypatch.setattr(cli.sys, "argv", ["github_mcp_server"])

    with pytest.raises(SystemExit) as exc:
        cli.main()

    assert exc.value.code == 1
    assert "GITHUB_TOKEN" in capsys.readouterr().err


def test_self_test_mode_needs_no_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setattr(cli.sys, "argv", ["github_mcp_server", "--test"])

    cli.main()
