"""Tests for the CLI commands."""

import sys
from unittest.mock import MagicMock, patch

import pytest

from drivesheet import main as cli
from drivesheet.core.client import AuthError, TransportError
from drivesheet.models.resources import ListPage

from .fakes import FakeWorkspaceClient, item


@pytest.fixture
def no_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for key in ("DRIVESHEET_SINK_NAME", "DRIVESHEET_PAGE_SIZE", "DRIVESHEET_POLL_INTERVAL"):
        monkeypatch.delenv(key, raising=False)


def run_cli(*argv: str) -> int:
    with patch.object(sys, "argv", ["drivesheet", *argv]), patch.object(cli, "setup_logging"):
        return cli.main()


@pytest.mark.usefixtures("no_config_file")
class TestCli:
    """Tests for CLI entry point."""

    def test_no_command_prints_help(self) -> None:
        assert run_cli() == 1

    def test_once_writes_rows(self) -> None:
        client = FakeWorkspaceClient([ListPage(items=[item("a.txt", 2023, 1, 1)])])

        with patch.object(cli, "build_client", return_value=client):
            assert run_cli("once") == 0

        assert client.written["sheet-1"] == [["a.txt", "2023-01-01"]]

    def test_once_reports_failure(self) -> None:
        client = MagicMock()
        client.list_files.side_effect = TransportError("unreachable")

        with patch.object(cli, "build_client", return_value=client):
            assert run_cli("once") == 1

    def test_list(self) -> None:
        client = FakeWorkspaceClient([ListPage(items=[item("a.txt", 2023, 1, 1)])])

        with patch.object(cli, "build_client", return_value=client):
            assert run_cli("list") == 0

        assert "update_values" not in client.call_names()

    def test_verify_auth(self) -> None:
        client = MagicMock()
        client.verify_connection.return_value = "me@example.com"

        with patch.object(cli, "build_client", return_value=client):
            assert run_cli("verify-auth") == 0

    def test_verify_auth_failure(self) -> None:
        with patch.object(cli, "build_client", side_effect=AuthError("denied", 401)):
            assert run_cli("verify-auth") == 1

    def test_verify_auth_rate_limited_has_no_api_hint(self, capsys) -> None:
        client = MagicMock()
        client.verify_connection.side_effect = TransportError("userRateLimitExceeded", 403)

        with patch.object(cli, "build_client", return_value=client):
            assert run_cli("verify-auth") == 1

        assert "APIs are enabled" not in capsys.readouterr().out

    def test_verify_auth_forbidden_shows_api_hint(self, capsys) -> None:
        with patch.object(cli, "build_client", side_effect=AuthError("forbidden", 403)):
            assert run_cli("verify-auth") == 1

        assert "APIs are enabled" in capsys.readouterr().out

    def test_run_stops_on_failure(self) -> None:
        client = MagicMock()
        client.list_files.side_effect = TransportError("unreachable")

        with patch.object(cli, "build_client", return_value=client):
            assert run_cli("run", "--interval", "0.01") == 1

    def test_run_keep_going_until_interrupted(self) -> None:
        client = FakeWorkspaceClient([ListPage(items=[item("a.txt", 2023, 1, 1)])] * 2)
        attempts: list[int] = []
        original_list_files = client.list_files

        def flaky_list_files(*args, **kwargs):
            attempts.append(1)
            if len(attempts) == 1:
                raise TransportError("unreachable")
            if len(attempts) == 3:
                raise KeyboardInterrupt
            return original_list_files(*args, **kwargs)

        client.list_files = flaky_list_files

        with patch.object(cli, "build_client", return_value=client):
            assert run_cli("run", "--interval", "0.01", "--keep-going") == 130

        assert len(attempts) == 3
        assert "update_values" in client.call_names()

    def test_invalid_interval(self) -> None:
        with patch.object(cli, "build_client") as build:
            assert run_cli("run", "--interval", "-5") == 1
        build.assert_not_called()
