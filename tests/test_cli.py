from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "app"
sys.path.insert(0, str(APP_DIR))

import rps_cli  # type: ignore[import-not-found]  # noqa: E402
import rps_commit_reveal  # type: ignore[import-not-found]  # noqa: E402
from rps_commit_reveal import compute_hmac  # type: ignore[import-not-found]  # noqa: E402
from rps_rules_table import format_help, format_menu, format_rules_table, style  # type: ignore[import-not-found]  # noqa: E402
from rps_protocol import build_relation_table  # type: ignore[import-not-found]  # noqa: E402


@pytest.mark.parametrize(
    "moves",
    [["Rock"], ["Rock", "Paper"], ["a", "b", "c", "d"], ["Rock", "Paper", "Rock"]],
)
def test_invalid_move_set_exits_non_zero(moves: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert rps_cli.main(["play", *moves]) == 1
    err = capsys.readouterr().err
    assert "Invalid input" in err


def test_play_until_exit(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("builtins.input", lambda prompt: "0")
    assert rps_cli.main(["play", "Rock", "Paper", "Scissors", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "HMAC key:" in out
    assert "1 - Rock" in out
    assert "Goodbye!" in out


def test_play_treats_eof_as_exit(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def eof(prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)
    assert rps_cli.main(["play", "a", "b", "c"]) == 0
    assert "Goodbye!" in capsys.readouterr().out


def test_play_reports_missing_entropy(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def boom(num_bytes: int) -> bytes:
        raise OSError("no randomness")

    monkeypatch.setattr(rps_commit_reveal.secrets, "token_bytes", boom)
    assert rps_cli.main(["play", "a", "b", "c"]) == 1
    assert "secure random source unavailable" in capsys.readouterr().err


def test_verify_command(capsys: pytest.CaptureFixture[str]) -> None:
    key = "12" * 32
    code = compute_hmac(key=key, move="Spock")
    assert rps_cli.main(["verify", "--key", key, "--move", "Spock", "--hmac", code]) == 0
    assert "OK" in capsys.readouterr().out
    assert rps_cli.main(["verify", "--key", key, "--move", "Lizard", "--hmac", code]) == 1
    assert "MISMATCH" in capsys.readouterr().err


def test_table_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert rps_cli.main(["table", "Rock", "Paper", "Scissors", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "Rules table:" in out
    assert "\x1b[" not in out


def test_rules_table_cells_are_from_user_point_of_view() -> None:
    moves = ["Rock", "Paper", "Scissors"]
    text = format_rules_table(moves, build_relation_table(moves))
    rows = {line.split("|")[1].strip(): [c.strip() for c in line.split("|")[2:-1]] for line in text.splitlines() if line.startswith("|")}
    assert rows["v PC\\User >"] == moves
    # Computer plays Rock: user's Paper wins, Scissors loses.
    assert rows["Rock"] == ["Draw", "Win", "Lose"]
    assert rows["Scissors"] == ["Win", "Lose", "Draw"]


def test_menu_lists_moves_one_based() -> None:
    assert format_menu(["x", "y", "z"]).splitlines() == [
        "Available moves:",
        "1 - x",
        "2 - y",
        "3 - z",
        "0 - exit",
        "? - help",
    ]


def test_style() -> None:
    assert style("hi", color="31", bold=True) == "\x1b[31m\x1b[1mhi\x1b[0m"
    assert style("hi", color="31", enabled=False) == "hi"


class _Terminal(io.StringIO):
    def __init__(self, *, tty: bool) -> None:
        super().__init__()
        self._tty = tty

    def isatty(self) -> bool:
        return self._tty


def test_no_color_env_disables_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "stdout", _Terminal(tty=True))
    monkeypatch.setenv("NO_COLOR", "1")
    assert rps_cli._use_color(False) is False


def test_color_follows_tty_when_no_color_is_unset_or_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "stdout", _Terminal(tty=True))
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert rps_cli._use_color(False) is True
    assert rps_cli._use_color(True) is False

    monkeypatch.setenv("NO_COLOR", "")
    assert rps_cli._use_color(False) is True

    monkeypatch.setattr(sys, "stdout", _Terminal(tty=False))
    assert rps_cli._use_color(False) is False


def test_colored_help_styles_heading_and_note() -> None:
    moves = ["Rock", "Paper", "Scissors"]
    text = format_help(moves, build_relation_table(moves), color=True)
    assert "\x1b[31m\x1b[1mRules table:\x1b[0m" in text
    assert "\x1b[32m(The intersection" in text
