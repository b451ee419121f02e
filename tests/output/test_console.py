"""Tests for the StringIO-backed console factory."""

from shapecheck.output.console import SHAPECHECK_THEME, create_console, get_output


class TestCreateConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_theme_styles_available(self) -> None:
        console = create_console()
        for name in SHAPECHECK_THEME.styles:
            console.get_style(name)

    def test_width_override(self) -> None:
        assert create_console(width=40).width == 40
        assert create_console().width == 120
