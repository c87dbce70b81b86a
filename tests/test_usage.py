import io
import subprocess

import pytest

from remotecache import usage
from remotecache.flags import Flag, FlagKind
from remotecache.usage import (
    DEFAULT_WIDTH,
    MINIMUM_WIDTH,
    console_width,
    format_help,
    print_help,
    wrap,
    wrap_line,
)

FOX = "the quick brown fox jumped over the lazy dog"


def test_wrap_line_narrow():
    expected = "the\n__quick\n__brown\n__fox\n__jumped\n__over the\n__lazy dog"
    assert wrap_line(FOX, 10, "__") == expected


def test_wrap_line_fits():
    assert wrap_line(FOX, 50, "__") == FOX


def test_wrap_line_cannot_wrap_when_padding_too_wide():
    assert wrap_line(FOX, 2, "__") == FOX


def test_wrap_line_whitespace_only_is_unchanged():
    text = " " * 40
    assert wrap_line(text, 10, "  ") == text


def test_wrap_multiline():
    text = (
        "the quick brown fox jumped over the lazy dog\n"
        "the second line is even longer than the first, with some super important\n"
        "information that overflows\n"
        "and finally a fourth line with some gibberish"
    )
    expected = (
        "the quick brown fox\n"
        "  jumped over the lazy\n"
        "  dog\n"
        "  the second line is even\n"
        "  longer than the first,\n"
        "  with some super\n"
        "  important\n"
        "  information that\n"
        "  overflows\n"
        "  and finally a fourth\n"
        "  line with some\n"
        "  gibberish"
    )
    assert wrap(text, 2, 25) == expected


def _sample_flags():
    return [
        Flag(
            "foo",
            FlagKind.STRING,
            "you really should specify this value, otherwise some terrible things will happen",
            "42",
            ("FOO",),
        ),
        Flag(
            "bar",
            FlagKind.INT,
            "this is another flag with a description long enough to test the wrapping",
            1,
            ("BAR",),
        ),
    ]


EXPECTED_HELP = """bazel-remote - A remote build cache for Bazel and other REAPI clients

USAGE:
   cli.test [options]

OPTIONS:
   --foo value you really should
      specify this value, otherwise
      some terrible things will
      happen (default: "42") [$FOO]

   --bar value this is another
      flag with a description long
      enough to test the wrapping
      (default: 1) [$BAR]

   --help, -h  show help
"""


def test_format_help(monkeypatch):
    monkeypatch.setenv("COLUMNS", "35")
    assert format_help("cli.test", _sample_flags()) == EXPECTED_HELP


def test_print_help_writes_to_stream(monkeypatch):
    monkeypatch.setenv("COLUMNS", "35")
    out = io.StringIO()
    print_help("cli.test", _sample_flags(), out)
    assert out.getvalue() == EXPECTED_HELP


def test_format_help_wide_terminal_keeps_entries_on_one_line(monkeypatch):
    monkeypatch.setenv("COLUMNS", "1000")
    text = format_help("prog", _sample_flags())
    assert "   --help, -h  show help\n" in text
    assert text.count("\n") == 11


@pytest.mark.parametrize(
    "columns, expected",
    [("35", 35), (" 50 ", 50), ("10", MINIMUM_WIDTH), ("120", 120)],
)
def test_console_width_from_columns(monkeypatch, columns, expected):
    monkeypatch.setenv("COLUMNS", columns)
    assert console_width() == expected


def test_console_width_default_when_tput_fails(monkeypatch):
    monkeypatch.delenv("COLUMNS", raising=False)

    def failing_run(*args, **kwargs):
        raise OSError("no tput")

    monkeypatch.setattr(usage.subprocess, "run", failing_run)
    assert console_width() == DEFAULT_WIDTH


def test_console_width_from_tput(monkeypatch):
    monkeypatch.delenv("COLUMNS", raising=False)

    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout="80\n", stderr="")

    monkeypatch.setattr(usage.subprocess, "run", fake_run)
    assert console_width() == 80


def test_console_width_tput_narrow_clamped(monkeypatch):
    monkeypatch.setenv("COLUMNS", "garbage")

    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout="12\n", stderr="")

    monkeypatch.setattr(usage.subprocess, "run", fake_run)
    assert console_width() == MINIMUM_WIDTH


def test_console_width_tput_garbage(monkeypatch):
    monkeypatch.delenv("COLUMNS", raising=False)

    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout="wide\n", stderr="")

    monkeypatch.setattr(usage.subprocess, "run", fake_run)
    assert console_width() == DEFAULT_WIDTH