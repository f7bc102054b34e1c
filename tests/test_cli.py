"""Tests for the command-line front end."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from channelkit.errors import InvalidRequestError
from channelkit.handlers import cli
from channelkit.models import AssetKind, HistoryItem
from channelkit.services.history import HistoryStore
from channelkit.services.studio import Studio

from .conftest import FakeRemoteClient


@pytest.fixture
def studio(fake_client: FakeRemoteClient, history: HistoryStore, output_dir: Path) -> Studio:
    return Studio(fake_client, history, output_dir=output_dir, poll_interval=0, max_wait=5.0)


@pytest.fixture
def run_cli(studio: Studio):
    """Run main() against the test studio instead of one built from the environment."""

    def _run(*argv: str) -> int:
        with patch("channelkit.handlers.cli.Studio.from_config", return_value=studio):
            return cli.main(list(argv))

    return _run


def seed(history: HistoryStore) -> None:
    history.append(
        HistoryItem(
            id="abc",
            type=AssetKind.LOGO,
            artifact_ref="output/generated-logo-abc.png",
            prompt="minimalist fox",
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )
    )


class TestBuildRequest:
    def test_banner_defaults(self) -> None:
        args = cli.build_parser().parse_args(["banner", "neon city"])

        request = cli.build_request(args)

        assert request.kind is AssetKind.BANNER
        assert request.payload.logo is None
        assert request.payload.dimensions == "2560x1440"

    def test_intro_reads_logo(self, tmp_path: Path, png_bytes: bytes) -> None:
        logo = tmp_path / "logo.png"
        logo.write_bytes(png_bytes)
        args = cli.build_parser().parse_args(["intro", "Chan", str(logo)])

        request = cli.build_request(args)

        assert request.kind is AssetKind.INTRO
        assert request.payload.logo.mime_type == "image/png"

    def test_about_options(self) -> None:
        args = cli.build_parser().parse_args(["about", "Chan", "Tech", "--tone", "Witty", "--language", "German"])

        payload = cli.build_request(args).payload

        assert (payload.tone, payload.language) == ("Witty", "German")

    def test_missing_image(self, tmp_path: Path) -> None:
        args = cli.build_parser().parse_args(["thumbnail", "Song", "Singer", str(tmp_path / "nope.jpg")])

        with pytest.raises(InvalidRequestError):
            cli.build_request(args)


class TestGenerate:
    def test_logo_success(self, run_cli, history: HistoryStore, capsys) -> None:
        assert run_cli("logo", "minimalist fox") == 0

        out = capsys.readouterr().out
        assert "Saved:" in out
        assert history.list()[0].prompt == "minimalist fox"

    def test_text_is_printed(self, run_cli, fake_client: FakeRemoteClient, capsys) -> None:
        fake_client.text = "Welcome to the channel"

        assert run_cli("about", "Chan", "Music") == 0

        assert "Welcome to the channel" in capsys.readouterr().out

    def test_invalid_input(self, run_cli, fake_client: FakeRemoteClient, capsys) -> None:
        assert run_cli("logo", "  ") == 1

        assert "Please enter a description for your logo." in capsys.readouterr().out
        assert fake_client.calls == []

    def test_remote_failure(self, run_cli, fake_client: FakeRemoteClient, capsys) -> None:
        fake_client.generate_error = RuntimeError("429 RESOURCE_EXHAUSTED")

        assert run_cli("logo", "fox") == 1

        assert "Error:" in capsys.readouterr().out

    def test_bad_image_path(self, run_cli, tmp_path: Path, capsys) -> None:
        assert run_cli("intro", "Chan", str(tmp_path / "missing.png")) == 2

        assert "not found" in capsys.readouterr().out

    def test_configuration_error(self, capsys) -> None:
        with patch("channelkit.handlers.cli.Studio.from_config", side_effect=ValueError("Invalid provider")):
            assert cli.main(["history"]) == 2

        assert "Invalid provider" in capsys.readouterr().out


class TestHistoryCommands:
    def test_empty_history(self, run_cli, capsys) -> None:
        assert run_cli("history") == 0

        assert "No generation history yet." in capsys.readouterr().out

    def test_lists_items(self, run_cli, history: HistoryStore, capsys) -> None:
        seed(history)

        run_cli("history")

        out = capsys.readouterr().out
        assert "minimalist fox" in out
        assert "Logo" in out

    @pytest.mark.parametrize("answer", ["n", "", "maybe"])
    def test_clear_declined(self, run_cli, history: HistoryStore, monkeypatch, answer: str) -> None:
        seed(history)
        monkeypatch.setattr("builtins.input", lambda _: answer)

        assert run_cli("clear-history") == 0

        assert len(history.list()) == 1

    @pytest.mark.parametrize("answer", ["y", "YES"])
    def test_clear_confirmed(self, run_cli, history: HistoryStore, monkeypatch, answer: str) -> None:
        seed(history)
        monkeypatch.setattr("builtins.input", lambda _: answer)

        assert run_cli("clear-history") == 0

        assert history.list() == []

    def test_clear_with_yes_flag(self, run_cli, history: HistoryStore) -> None:
        seed(history)

        assert run_cli("clear-history", "--yes") == 0

        assert history.list() == []
