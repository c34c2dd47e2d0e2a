"""Tests for operator response sources."""

import io

import pytest

from case_lifecycle.errors import ResponsesExhaustedError
from case_lifecycle.responders.console import ConsoleResponseSource
from case_lifecycle.responders.scripted import (
    AutomaticResponseSource,
    ScriptedResponseSource,
)


@pytest.mark.parametrize(
    ("typed", "expected"),
    [
        ("c\n", "c"),
        ("quit\n", "q"),
        ("?\n", "?"),
        ("\n", ""),
        ("", ""),
        (" a\n", ""),
        ("\tf\n", ""),
    ],
)
def test_console_takes_first_character(typed: str, expected: str) -> None:
    """Only a printable first character counts; Enter and EOF give ""."""
    source = ConsoleResponseSource(stream=io.StringIO(typed))

    assert source.read_key() == expected
    assert not source.automatic


def test_console_reads_one_line_per_key() -> None:
    """Each read consumes exactly one line."""
    source = ConsoleResponseSource(stream=io.StringIO("h\nc\n"))

    assert [source.read_key(), source.read_key(), source.read_key()] == ["h", "c", ""]


def test_console_defaults_to_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without a stream the operator's standard input is read."""
    monkeypatch.setattr("sys.stdin", io.StringIO("s\n"))

    assert ConsoleResponseSource().read_key() == "s"


def test_automatic_source_repeats_key() -> None:
    """The configured key answers every prompt."""
    source = AutomaticResponseSource(key="q")

    assert source.automatic
    assert [source.read_key() for _ in range(3)] == ["q", "q", "q"]


def test_scripted_source_replays_keys() -> None:
    """Keys come back in order until exhausted."""
    source = ScriptedResponseSource(keys=["h", "x", "c"])

    assert source.read_key() == "h"
    assert source.remaining == 2
    assert source.read_key() == "x"
    assert source.read_key() == "c"
    assert not source.automatic

    with pytest.raises(ResponsesExhaustedError):
        source.read_key()
