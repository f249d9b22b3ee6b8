"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
from typing import Optional

import blessed


class TerminalInterface:
    """Display sink and key source for the editor.

    Drawing is a sequence of move_to/print_run commands written straight
    to stdout; no screen buffer is kept between refreshes.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and start reading keys through curtsies."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            self._curtsies_input = Input(keynames='curtsies')
            # Enter raw mode immediately so reads work
            self._curtsies_input.__enter__()  # type: ignore

    def cleanup(self):
        """Leave raw mode and fullscreen."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.normal + self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def clear_screen(self):
        print(self.term.home + self.term.clear, end='')

    def move_to(self, column: int, row: int):
        """Move the output position to (column, row)."""
        print(self.term.move_xy(column, row), end='')

    def print_run(self, text: str, colour: str = "normal"):
        """Print text in a named blessed colour, then reset attributes."""
        if not text:
            return
        style = getattr(self.term, colour, '') if colour != "normal" else ''
        if style:
            print(style + text + self.term.normal, end='')
        else:
            print(text, end='')

    def hide_cursor(self):
        print(self.term.hide_cursor, end='')

    def show_cursor(self):
        print(self.term.normal_cursor, end='')

    def flush(self):
        sys.stdout.flush()

    def get_key(self, timeout=None):
        """Get a single key token.

        Args:
            timeout: Seconds to wait (None blocks, 0 polls).

        Returns:
            The curtsies token as a string, or None when nothing arrived or
            input was never set up.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            ready, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not ready:
                return None
        return str(next(self._curtsies_input))  # type: ignore

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows, status line included."""
        return self.term.height
