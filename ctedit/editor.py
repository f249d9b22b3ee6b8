"""Main editor controller: wires key events to the buffer, cursor and search."""

import dataclasses
import logging
import os
import select
import signal
import sys
import termios
from pathlib import Path
from typing import Optional

from .buffer import Buffer
from .commands import CommandRegistry
from .config import config_path, load_colour_overrides
from .constants import EditorConstants
from .cursor import Cursor
from .highlight import syntax_for_path
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .search import SearchData
from .terminal import TerminalInterface
from .version import get_version_string

logger = logging.getLogger(__name__)

PATH_PROMPTS = ('save_path', 'load_path')


class Editor:
    """Terminal text editor application controller."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 config_dir: Optional[Path] = None):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.buffer = Buffer()
        self.buffer.colour_overrides = load_colour_overrides(config_path(config_dir))
        self.cursor = Cursor(size=self._view_size())
        self.search = SearchData()
        self.command_registry = CommandRegistry()
        self.version = get_version_string()
        self.running = False
        self.filename: Optional[str] = None
        self.dirty = False
        self.status_message: Optional[str] = None
        self.prompt_mode: Optional[str] = None  # None, 'save_path', 'load_path', 'find' or 'quit_confirm'
        self.prompt_input = ""
        self._search_origin: Optional[Cursor] = None
        self._interrupted = False
        self._signal_pipe_r: Optional[int] = None
        self._signal_pipe_w: Optional[int] = None

    def _view_size(self) -> tuple[int, int]:
        width = self.terminal.width - EditorConstants.TEXT_LEFT_MARGIN
        height = (self.terminal.height - EditorConstants.TEXT_TOP_MARGIN
                  - EditorConstants.STATUS_ROWS)
        return (width, height)

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        os.write(self._signal_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Ctrl-C arrives as SIGINT; route it through the quit command."""
        del signum, frame  # Unused
        self._interrupted = True
        os.write(self._signal_pipe_w, EditorConstants.INTERRUPT_PIPE_MARKER)

    def run(self):
        """Run the main editor loop until the user quits."""
        self._signal_pipe_r, self._signal_pipe_w = os.pipe()
        self.terminal.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)

        old_settings = None
        try:
            # Disable flow control so Ctrl-S reaches the editor
            try:
                old_settings = termios.tcgetattr(sys.stdin)
                new_settings = list(old_settings)
                new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            except (termios.error, OSError) as e:
                logger.debug(f"Could not disable flow control: {e}")

            need_draw = True
            while self.running:
                if need_draw:
                    self._draw()
                    need_draw = False

                ready, _, _ = select.select([0, self._signal_pipe_r], [], [])
                if self._signal_pipe_r in ready:
                    os.read(self._signal_pipe_r, 1024)
                    if self._interrupted:
                        self._interrupted = False
                        self._handle_key_event(KeyEvent(
                            key_type=KeyType.CTRL, value='c', raw='\x03', is_ctrl=True,
                        ))
                    else:
                        self._on_resize()
                    need_draw = True
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self._handle_key_event(key_event)
                        need_draw = True
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError) as e:
                    logger.debug(f"Could not restore terminal settings: {e}")
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._signal_pipe_r)
            os.close(self._signal_pipe_w)
            self._signal_pipe_r = self._signal_pipe_w = None
            self.terminal.clear_screen()
            self.terminal.cleanup()

    def _on_resize(self):
        self.cursor.resize(self._view_size())
        self.cursor.change_offset()

    # --- Rendering ---

    def header_text(self) -> str:
        if self.filename:
            name = ("*" if self.dirty else "") + self.filename
        else:
            name = EditorConstants.UNTITLED_NAME
        header = EditorConstants.HEADER_FORMAT.format(
            name=name, app=EditorConstants.APP_NAME, version=self.version,
        )
        return header[:self.terminal.width]

    def status_text(self) -> str:
        if self.prompt_mode == 'save_path':
            return EditorConstants.SAVE_PROMPT + self.prompt_input
        if self.prompt_mode == 'load_path':
            return EditorConstants.LOAD_PROMPT + self.prompt_input
        if self.prompt_mode == 'find':
            return EditorConstants.FIND_PROMPT + self.prompt_input
        if self.status_message:
            return self.status_message
        # Desired column, kept across vertical moves
        return EditorConstants.STATUS_FORMAT.format(
            x=self.cursor.x, y=self.cursor.y, lines=len(self.buffer),
        )

    def _draw(self):
        """Emit one full frame through the display sink."""
        term = self.terminal
        term.hide_cursor()
        term.clear_screen()

        term.move_to(0, EditorConstants.HEADER_ROW)
        term.print_run(self.header_text())

        width, height = self.cursor.size
        x_offset, y_offset = self.cursor.get_offset()
        for row in range(height):
            screen_row = EditorConstants.TEXT_TOP_MARGIN + row
            term.move_to(0, screen_row)
            term.print_run(EditorConstants.GUTTER_MARKER)
            term.move_to(EditorConstants.TEXT_LEFT_MARGIN, screen_row)
            for text, colour in self.buffer.line_segments(y_offset + row, x_offset, x_offset + width):
                term.print_run(text, colour)

        status = self.status_text()
        status_row = term.height - 1
        term.move_to(0, status_row)
        term.print_run(status[:term.width])

        if self.prompt_mode == 'quit_confirm':
            term.flush()
            return
        if self.prompt_mode is not None:
            term.move_to(min(len(status), term.width - 1), status_row)
        else:
            term.move_to(*self.cursor.screen_position(
                EditorConstants.TEXT_LEFT_MARGIN, EditorConstants.TEXT_TOP_MARGIN,
            ))
        term.show_cursor()
        term.flush()

    # --- Key dispatch ---

    def _handle_key_event(self, key_event: KeyEvent):
        if self._handle_prompt_mode(key_event):
            return

        self.status_message = None
        if self.command_registry.execute(self, key_event):
            self.dirty = True

    def _handle_prompt_mode(self, key_event: KeyEvent) -> bool:
        """Route the event to the active prompt.

        Returns:
            True if a prompt was active and consumed the event
        """
        if self.prompt_mode in PATH_PROMPTS:
            self._handle_path_prompt(key_event)
            return True
        if self.prompt_mode == 'find':
            self._handle_find_prompt(key_event)
            return True
        if self.prompt_mode == 'quit_confirm':
            self._handle_quit_confirm(key_event)
            return True
        return False

    def _edit_prompt(self, key_event: KeyEvent) -> Optional[str]:
        """Apply a key to the prompt line.

        Returns 'cancel', 'accept', 'edit' or None for keys the prompt
        line itself ignores.
        """
        if key_event.key_type == KeyType.SPECIAL:
            if key_event.value == 'escape':
                return 'cancel'
            if key_event.value == 'enter':
                return 'accept'
            if key_event.value == 'backspace':
                self.prompt_input = self.prompt_input[:-1]
                return 'edit'
            return None
        if key_event.key_type == KeyType.REGULAR:
            self.prompt_input += ''.join(c for c in key_event.value if ord(c) >= 32)
            return 'edit'
        return None

    def _end_prompt(self):
        self.prompt_mode = None
        self.prompt_input = ""

    # --- Save / load ---

    def start_save_prompt(self):
        self.prompt_mode = 'save_path'
        self.prompt_input = self.filename or ""

    def start_load_prompt(self):
        self.prompt_mode = 'load_path'
        self.prompt_input = self.filename or ""

    def _handle_path_prompt(self, key_event: KeyEvent):
        action = self._edit_prompt(key_event)
        if action == 'cancel':
            self._end_prompt()
        elif action == 'accept':
            mode, path = self.prompt_mode, self.prompt_input
            self._end_prompt()
            # An empty path counts as cancel
            if not path:
                return
            if mode == 'save_path':
                self.save_file(path)
            else:
                self.load_file(path)

    def load_file(self, filename: str):
        """Load filename into the buffer; a missing file gives an empty buffer."""
        self.filename = filename
        self.buffer.syntax_highlight = syntax_for_path(filename)
        self.buffer.load_file(filename)
        self.search = SearchData()
        self.cursor.reset()
        self.dirty = False
        logger.info(f"Loaded {filename} ({len(self.buffer)} lines)")

    def save_file(self, filename: str) -> bool:
        """Save the buffer to filename.

        Returns:
            True if save succeeded; on failure the dirty flag is kept and the
            error is shown in the status line.
        """
        try:
            self.buffer.save(filename)
        except OSError as e:
            logger.warning(f"Could not save {filename}: {e}")
            self.status_message = f"Error: Cannot save to {filename}: {e.strerror or e}"
            return False

        if filename != self.filename:
            self.filename = filename
            self.buffer.set_syntax(syntax_for_path(filename))
        self.dirty = False
        self.status_message = f"Saved to {filename}"
        logger.info(f"Saved {filename}")
        return True

    # --- Search session ---

    def start_search(self):
        """Open the find prompt, remembering where the cursor was."""
        self._search_origin = dataclasses.replace(self.cursor)
        self.prompt_mode = 'find'
        self.prompt_input = ""

    def _handle_find_prompt(self, key_event: KeyEvent):
        if key_event.key_type == KeyType.SPECIAL and key_event.value in ('right', 'down'):
            self._jump_to(self.search.get_next())
            return
        if key_event.key_type == KeyType.SPECIAL and key_event.value in ('left', 'up'):
            self._jump_to(self.search.get_previous())
            return

        action = self._edit_prompt(key_event)
        if action == 'edit':
            self._jump_to(self.search.find_results(self.prompt_input, self.buffer))
        elif action == 'cancel':
            if self._search_origin is not None:
                self.cursor = self._search_origin
                self.cursor.resize(self._view_size())
                self.cursor.change_offset()
            self._end_search()
        elif action == 'accept':
            self._end_search()

    def _end_search(self):
        self.search.find_results("", self.buffer)
        self._search_origin = None
        self._end_prompt()

    def _jump_to(self, match: Optional[tuple[int, int]]):
        if match is None:
            return
        x, y = match
        self.cursor.set_position(x, y)
        self.cursor.change_offset()

    # --- Quit ---

    def start_quit_confirm(self):
        self.prompt_mode = 'quit_confirm'
        self.status_message = EditorConstants.QUIT_CONFIRM_MESSAGE

    def _handle_quit_confirm(self, key_event: KeyEvent):
        if key_event.key_type == KeyType.CTRL and key_event.value == 'c':
            self.running = False
            self._end_prompt()
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            self.status_message = None
            self._end_prompt()
