"""Tests for the blessed-backed display sink."""

from ctedit.terminal import TerminalInterface


class FakeTerm:
    """Stands in for blessed.Terminal with readable escape strings."""
    width = 80
    height = 24
    normal = "<normal>"
    bright_blue = "<bright_blue>"
    hide_cursor = "<hide>"
    normal_cursor = "<show>"
    home = "<home>"
    clear = "<clear>"

    def move_xy(self, x, y):
        return f"<{x},{y}>"


def test_print_run_wraps_text_in_colour(capsys):
    terminal = TerminalInterface(FakeTerm())
    terminal.print_run("let", "bright_blue")
    assert capsys.readouterr().out == "<bright_blue>let<normal>"


def test_print_run_default_colour_is_plain(capsys):
    terminal = TerminalInterface(FakeTerm())
    terminal.print_run("x = 1")
    terminal.print_run("")
    assert capsys.readouterr().out == "x = 1"


def test_move_and_cursor_visibility(capsys):
    terminal = TerminalInterface(FakeTerm())
    terminal.move_to(2, 5)
    terminal.hide_cursor()
    terminal.show_cursor()
    terminal.clear_screen()
    assert capsys.readouterr().out == "<2,5><hide><show><home><clear>"


def test_size_comes_from_blessed():
    terminal = TerminalInterface(FakeTerm())
    assert (terminal.width, terminal.height) == (80, 24)


def test_get_key_without_setup_returns_none():
    terminal = TerminalInterface(FakeTerm())
    assert terminal.get_key(timeout=0) is None
