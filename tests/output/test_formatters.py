"""Tests for output mode dispatch."""

import json

from sheetgraph.output.console import SHEET_THEME, create_console, get_output
from sheetgraph.output.formatters import OutputSettings, format_result
from sheetgraph.services.result import ServiceResult


def _summary() -> ServiceResult:
    return ServiceResult(ok=True, op="summary", data={"records": 3, "eligible": 2})


class TestFormatResult:
    def test_json(self) -> None:
        parsed = json.loads(format_result(_summary(), json_output=True))
        assert parsed["ok"] is True
        assert parsed["data"]["records"] == 3

    def test_settings_win_over_flag(self) -> None:
        output = format_result(_summary(), settings=OutputSettings(quiet=True), json_output=True)
        assert output == "OK: summary"

    def test_default_is_rich(self) -> None:
        output = format_result(_summary())
        assert "records: 3" in output


class TestConsole:
    def test_string_buffer(self) -> None:
        console = create_console()
        console.print("hello", style="sg.ok")
        assert get_output(console) == "hello\n"

    def test_theme_styles(self) -> None:
        assert "sg.error" in SHEET_THEME.styles
