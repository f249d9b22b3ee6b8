"""Text buffer: the document as a list of lines with highlight tags."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from . import storage
from .constants import EditorConstants
from .highlight import (
    DEFAULT_COLOUR,
    DEFAULT_SYNTAX,
    HighlightTag,
    SyntaxHighlighter,
    plain_colour,
)

if TYPE_CHECKING:
    from .cursor import Cursor

logger = logging.getLogger(__name__)


def decode_content(data: bytes) -> str:
    return data.decode(EditorConstants.FILE_ENCODING, EditorConstants.FILE_ERRORS)


def encode_content(text: str) -> bytes:
    return text.encode(EditorConstants.FILE_ENCODING, EditorConstants.FILE_ERRORS)


def split_lines(text: str) -> list[str]:
    """Split on '\\n' and '\\r\\n' line endings.

    A final line break does not start an extra empty line, and empty text
    still yields one blank line.
    """
    parts = text.split('\n')
    last = parts.pop()  # Text after the final break, if any
    lines = [part[:-1] if part.endswith('\r') else part for part in parts]
    if last:
        lines.append(last)
    return lines or ['']


@dataclass
class Line:
    """One document row. tags stays aligned with content after each edit."""
    content: str = ""
    tags: list[HighlightTag] = field(default_factory=list)

    def insert(self, index: int, text: str) -> None:
        self.content = self.content[:index] + text + self.content[index:]

    def delete_char(self, index: int) -> None:
        self.content = self.content[:index] + self.content[index + 1:]

    def append(self, other: Line) -> None:
        self.content += other.content

    def split_at(self, index: int) -> Line:
        """Keep content before index; return the rest as a new Line."""
        tail = Line(self.content[index:])
        self.content = self.content[:index]
        return tail

    def find_phrase(self, phrase: str, start: int) -> Optional[int]:
        """Offset of phrase relative to start, or None."""
        found = self.content.find(phrase, start)
        if found < 0:
            return None
        return found - start

    def __len__(self):
        return len(self.content)


class Buffer:
    """Ordered, never-empty list of Lines plus the active highlighter.

    Every mutating operation rescans the whole buffer so constructs that
    span lines (block comments, unterminated strings) are always resolved
    from the start of the document.
    """

    def __init__(self, syntax_highlight: Optional[SyntaxHighlighter] = DEFAULT_SYNTAX):
        self.lines: list[Line] = [Line()]
        self.syntax_highlight = syntax_highlight
        # User theme; takes precedence over the highlighter's colours
        self.colour_overrides: dict[HighlightTag, str] = {}
        self.update_syntax()

    def __len__(self):
        return len(self.lines)

    def set_syntax(self, syntax_highlight: Optional[SyntaxHighlighter]) -> None:
        self.syntax_highlight = syntax_highlight
        self.update_syntax()

    def update_syntax(self) -> None:
        """Retokenize the entire buffer, dropping any search overlay."""
        if self.syntax_highlight is not None:
            self.syntax_highlight.update_syntax(self.lines)
        else:
            for line in self.lines:
                line.tags = [HighlightTag.STANDARD] * len(line.content)

    def load(self, content: Optional[bytes]) -> None:
        """Replace the document with content; None means the read failed.

        A failed read and an empty file both leave a single blank line.
        """
        if content is None:
            self.lines = [Line()]
        else:
            self.lines = [Line(text) for text in split_lines(decode_content(content))]
        self.update_syntax()

    def load_file(self, path: str) -> None:
        try:
            content = storage.read_file(path)
        except OSError as e:
            logger.debug(f"Could not read {path}, starting empty: {e}")
            content = None
        self.load(content)

    def reset(self) -> None:
        self.lines = [Line()]
        self.update_syntax()

    def contents(self) -> bytes:
        """Lines joined by single '\\n' separators, no trailing break."""
        return encode_content('\n'.join(line.content for line in self.lines))

    def save(self, path: str) -> None:
        """Write the document to path.

        Raises:
            OSError: propagated from storage; the buffer is left unchanged.
        """
        storage.write_file(path, self.contents())

    def insert_char(self, c: str, cursor: Cursor) -> None:
        if c == '\n':
            self.new_line(cursor)
            return
        x, y = cursor.get_position()
        line = self.lines[cursor.get_line_index()]
        if c == '\t':
            line.insert(x, ' ' * EditorConstants.TAB_WIDTH)
            cursor.set_position(x + EditorConstants.TAB_WIDTH, y)
        else:
            line.insert(x, c)
            cursor.set_position(x + 1, y)
        self.update_syntax()

    def new_line(self, cursor: Cursor) -> None:
        line_index = cursor.get_line_index()
        x, y = cursor.get_position()
        tail = self.lines[line_index].split_at(x)
        self.lines.insert(line_index + 1, tail)
        self.update_syntax()
        cursor.set_position(0, y + 1)

    def delete_char(self, cursor: Cursor) -> None:
        """Backspace: remove the character before the cursor.

        At column 0 the current line is joined onto the previous one; at the
        very start of the document nothing happens.
        """
        line_index = cursor.get_line_index()
        x, y = cursor.get_position()
        if x > 0:
            self.lines[line_index].delete_char(x - 1)
            cursor.set_position(x - 1, y)
        elif y > 0:
            old_line = self.lines.pop(line_index)
            previous = self.lines[line_index - 1]
            old_length = len(previous)
            previous.append(old_line)
            cursor.set_position(old_length, y - 1)
        self.update_syntax()

    def find_phrase(self, phrase: str, index: int, start: int) -> Optional[int]:
        if not 0 <= index < len(self.lines):
            return None
        return self.lines[index].find_phrase(phrase, start)

    def line_len(self, index: int) -> int:
        if 0 <= index < len(self.lines):
            return len(self.lines[index])
        return 0

    def colour_for(self, tag: HighlightTag) -> str:
        if tag in self.colour_overrides:
            return self.colour_overrides[tag]
        if self.syntax_highlight is None:
            return plain_colour(tag)
        return self.syntax_highlight.syntax_colour(tag)

    def line_segments(self, index: int, start: int, end: int) -> list[tuple[str, str]]:
        """Visible slice [start, end) of a line as (text, colour) runs.

        Adjacent characters of the same colour share one run. Tabs are
        shown as a single space so screen columns match offsets.
        """
        if not 0 <= index < len(self.lines):
            return []
        line = self.lines[index]
        start = min(start, len(line))
        end = min(end, len(line))
        runs: list[tuple[str, str]] = []
        current_colour = None
        current_text: list[str] = []
        for i in range(start, end):
            tag = line.tags[i] if i < len(line.tags) else HighlightTag.STANDARD
            colour = self.colour_for(tag) or DEFAULT_COLOUR
            c = line.content[i]
            if c == '\t':
                c = ' '
            if colour != current_colour and current_text:
                runs.append((''.join(current_text), current_colour))
                current_text = []
            current_colour = colour
            current_text.append(c)
        if current_text:
            runs.append((''.join(current_text), current_colour))
        return runs
