"""Keyboard input handling using curtsies-style tokens."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    ALT = "alt"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw token from curtsies
    is_ctrl: bool = False
    is_alt: bool = False


SPECIAL_KEYS = frozenset({
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert', 'escape',
})


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token (e.g. '<UP>', '<Ctrl-s>', 'a') into a KeyEvent."""
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_named(key_str)

        if len(key_str) == 1:
            return self._parse_char(key_str)

        # Escape-prefixed pair without curtsies naming, e.g. '\x1bb'
        if len(key_str) == 2 and key_str[0] == '\x1b':
            return KeyEvent(key_type=KeyType.ALT, value=key_str[1], raw=key_str, is_alt=True)

        # Escape sequence curtsies could not name; never insert it as text
        if key_str.startswith('\x1b'):
            return KeyEvent(key_type=KeyType.SPECIAL, value=key_str, raw=key_str)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _parse_named(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1].lower().replace('+', '-')
        parts = name.split('-')
        base = parts[-1]
        mods = set(parts[:-1])
        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')

        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'
        elif base in ('esc', 'escape'):
            base = 'escape'

        if 'ctrl' in mods and len(base) == 1:
            return self._ctrl_event(base, key_str)
        if 'alt' in mods:
            return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
        if not mods:
            if base in ('space', 'spacebar', 'spc'):
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab':
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
        # Unknown names (function keys, shifted arrows) stay SPECIAL so they
        # never reach the document as text
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)

    def _parse_char(self, key_str: str) -> KeyEvent:
        o = ord(key_str)
        if key_str == '\t':
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
        if key_str in ('\x7f', '\x08'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
        if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
            return self._ctrl_event(chr(ord('a') + o - 1), key_str)
        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _ctrl_event(self, letter: str, raw: str) -> KeyEvent:
        # Terminals deliver Enter as Ctrl-J/Ctrl-M and Backspace as Ctrl-H
        if letter in ('j', 'm'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=raw)
        if letter == 'h':
            return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=raw)
        if letter == 'i':
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=raw)
        return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=raw, is_ctrl=True)
