"""Tests for Rich Console factory and theme."""

from io import StringIO

from mentat_cli.output.console import MENTAT_THEME, create_console, get_output


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[mentat.error]boom[/mentat.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "boom" in output

    def test_custom_width(self) -> None:
        assert create_console(width=80).width == 80

    def test_default_width(self) -> None:
        assert create_console().width == 120


class TestTheme:
    def test_status_styles_defined(self) -> None:
        for name in ("mentat.ok", "mentat.error", "mentat.op", "mentat.command"):
            assert name in MENTAT_THEME.styles


def test_get_output_empty_console() -> None:
    assert get_output(create_console()) == ""
