"""Tests for podrel.output.console module."""

from __future__ import annotations

import pytest

from podrel.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.DIM) == "dim"


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_detail_hidden_unless_verbose(self) -> None:
        quiet = MockConsole()
        quiet.detail("linting pod locally")
        assert quiet.outputs == []

        loud = MockConsole(verbose=True)
        loud.detail("linting pod locally")
        assert loud.messages == ["linting pod locally"]
        assert loud.outputs[0].style == Style.DIM

    def test_prefixed_helpers(self) -> None:
        console = MockConsole()
        console.success("pod version 1.0.1 published OK")
        console.warning("rollback step failed")
        console.error("boom")
        assert console.messages == [
            "OK pod version 1.0.1 published OK",
            "warning: rollback step failed",
            "error: boom",
        ]
        assert console.has_warning()
        assert console.count(Style.ERROR) == 1

    def test_find(self) -> None:
        console = MockConsole()
        console.print("tag 1.0.1")
        console.print("tag 1.0.2")
        assert len(console.find("1.0.2")) == 1

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        assert console.verbose is False


class TestRichConsole:
    def test_detail_respects_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole(verbose=False).detail("hidden step")
        RichConsole(verbose=True).detail("shown step")
        out = capsys.readouterr().out
        assert "hidden step" not in out
        assert "shown step" in out

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("[!] The spec did not pass validation")
        assert "[!] The spec did not pass validation" in capsys.readouterr().out
