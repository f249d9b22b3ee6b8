"""Lexical syntax highlighting.

A highlighter rescans the whole buffer in one left-to-right pass and
assigns one HighlightTag per character. At each position the rules are
tried in a fixed priority order (word, number, string, bracket, comment)
and the first one that matches a nonzero run wins; anything else is a
single STANDARD character.
"""

from __future__ import annotations

import keyword
import os
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from .buffer import Line


class HighlightTag(Enum):
    """Lexical classification of one character."""
    STANDARD = "standard"
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    NUMBER = "number"
    BRACKET = "bracket"
    STRING = "string"
    COMMENT = "comment"
    SEARCH_RESULT = "search_result"


DEFAULT_COLOUR = "normal"

# Values are blessed formatting attribute names
DEFAULT_COLOURS: dict[HighlightTag, str] = {
    HighlightTag.IDENTIFIER: "bright_cyan",
    HighlightTag.KEYWORD: "bright_blue",
    HighlightTag.NUMBER: "bright_yellow",
    HighlightTag.BRACKET: "yellow",
    HighlightTag.STRING: "bright_red",
    HighlightTag.COMMENT: "green",
    HighlightTag.SEARCH_RESULT: "bright_magenta",
}

BRACKETS = frozenset("(){}[]")
QUOTES = frozenset("\"'")
LINE_BREAK = "\n"


def plain_colour(tag: HighlightTag) -> str:
    """Colour used when a buffer has no highlighter: only search hits show."""
    if tag == HighlightTag.SEARCH_RESULT:
        return DEFAULT_COLOURS[HighlightTag.SEARCH_RESULT]
    return DEFAULT_COLOUR


class SyntaxHighlighter(ABC):
    """Strategy that tags buffer lines and maps tags to colours.

    The rule helpers below take the full scan text plus a start index and
    return the length of the run the rule would claim there (0 for no match).
    """

    @abstractmethod
    def update_syntax(self, lines: list[Line]) -> None:
        """Rescan every line and replace each line's tags."""

    @abstractmethod
    def syntax_colour(self, tag: HighlightTag) -> str:
        """Return the presentation colour name for a tag."""

    def word_len(self, text: str, start: int) -> int:
        length = 0
        while start + length < len(text):
            c = text[start + length]
            if c.isalpha() or c == '_' or (c.isnumeric() and length > 0):
                length += 1
            else:
                break
        return length

    def number_len(self, text: str, start: int) -> int:
        length = 0
        while start + length < len(text):
            c = text[start + length]
            if c.isnumeric() or (length > 0 and c in '_.'):
                length += 1
            else:
                break
        return length

    def string_len(self, text: str, start: int) -> int:
        """Quoted run; an unterminated string extends to the end of text."""
        quote = text[start]
        if quote not in QUOTES:
            return 0
        length = 1
        is_escaped = False
        while start + length < len(text):
            c = text[start + length]
            length += 1
            if not is_escaped and c == quote:
                break
            is_escaped = c == '\\' and not is_escaped
        return length

    def single_line_comment_len(self, text: str, start: int, marker: str) -> int:
        """Comment from marker through the next line break (inclusive)."""
        if not text.startswith(marker, start):
            return 0
        length = len(marker)
        while start + length < len(text):
            c = text[start + length]
            length += 1
            if c == LINE_BREAK:
                break
        return length

    def multi_line_comment_len(self, text: str, start: int, opener: str, closer: str) -> int:
        """Block comment with nesting; unclosed comments run to the end.

        Markers are matched before the depth check, so markers directly
        after the closing one still count: '/* a *//* b */' is one comment
        and a stray '*/' leaves depth below zero until the end of text.
        """
        if not text.startswith(opener, start):
            return 0
        length = len(opener)
        depth = 1
        while start + length < len(text):
            if text.startswith(opener, start + length):
                depth += 1
                length += len(opener)
                continue
            if text.startswith(closer, start + length):
                depth -= 1
                length += len(closer)
                continue
            if depth == 0:
                break
            length += 1
        return length

    def is_bracket(self, c: str) -> bool:
        return c in BRACKETS


class LanguageSyntax(SyntaxHighlighter):
    """Highlighter for one language mode: a keyword set plus comment markers."""

    def __init__(
        self,
        name: str,
        keywords: Iterable[str],
        extensions: Iterable[str] = (),
        line_comment: Optional[str] = "//",
        block_comment: Optional[tuple[str, str]] = ("/*", "*/"),
        colours: Optional[dict[HighlightTag, str]] = None,
    ):
        self.name = name
        self.keywords = frozenset(keywords)
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.line_comment = line_comment
        self.block_comment = block_comment
        self.colours = dict(DEFAULT_COLOURS)
        if colours:
            self.colours.update(colours)

    def __repr__(self):
        return f"LanguageSyntax({self.name!r})"

    def comment_len(self, text: str, start: int) -> int:
        # Longer candidate wins when both markers could start here
        line_len = 0
        block_len = 0
        if self.line_comment:
            line_len = self.single_line_comment_len(text, start, self.line_comment)
        if self.block_comment:
            opener, closer = self.block_comment
            block_len = self.multi_line_comment_len(text, start, opener, closer)
        return max(line_len, block_len)

    def tokenize(self, text: str) -> list[HighlightTag]:
        """Return one tag per character of text."""
        tags: list[HighlightTag] = []
        i = 0
        while i < len(text):
            word_len = self.word_len(text, i)
            if word_len > 0:
                word = text[i:i + word_len]
                tag = HighlightTag.KEYWORD if word in self.keywords else HighlightTag.IDENTIFIER
                tags.extend([tag] * word_len)
                i += word_len
                continue

            number_len = self.number_len(text, i)
            if number_len > 0:
                tags.extend([HighlightTag.NUMBER] * number_len)
                i += number_len
                continue

            string_len = self.string_len(text, i)
            if string_len > 0:
                tags.extend([HighlightTag.STRING] * string_len)
                i += string_len
                continue

            if self.is_bracket(text[i]):
                tags.append(HighlightTag.BRACKET)
                i += 1
                continue

            comment_len = self.comment_len(text, i)
            if comment_len > 0:
                tags.extend([HighlightTag.COMMENT] * comment_len)
                i += comment_len
                continue

            tags.append(HighlightTag.STANDARD)
            i += 1
        return tags

    def update_syntax(self, lines: list[Line]) -> None:
        text = ''.join(line.content + LINE_BREAK for line in lines)
        tags = self.tokenize(text)
        # Each line is followed by exactly one break marker, which is skipped
        position = 0
        for line in lines:
            end = position + len(line.content)
            line.tags = tags[position:end]
            position = end + 1

    def syntax_colour(self, tag: HighlightTag) -> str:
        return self.colours.get(tag, DEFAULT_COLOUR)


RUST_KEYWORDS = (
    "impl", "fn", "pub", "struct", "enum", "trait", "use", "for", "if", "while",
    "else", "break", "return", "continue", "mod", "macro_rules", "true", "false",
    "loop", "match", "let", "as", "mut",
)

C_KEYWORDS = (
    "auto", "break", "case", "char", "const", "continue", "default", "do",
    "double", "else", "enum", "extern", "float", "for", "goto", "if", "inline",
    "int", "long", "register", "return", "short", "signed", "sizeof", "static",
    "struct", "switch", "typedef", "union", "unsigned", "void", "volatile",
    "while",
)

JAVASCRIPT_KEYWORDS = (
    "async", "await", "break", "case", "catch", "class", "const", "continue",
    "default", "delete", "do", "else", "export", "extends", "false", "finally",
    "for", "function", "if", "import", "in", "instanceof", "let", "new", "null",
    "return", "super", "switch", "this", "throw", "true", "try", "typeof",
    "undefined", "var", "void", "while", "yield",
)

RUST_SYNTAX = LanguageSyntax("rust", RUST_KEYWORDS, extensions=(".rs",))
C_SYNTAX = LanguageSyntax("c", C_KEYWORDS, extensions=(".c", ".h"))
JAVASCRIPT_SYNTAX = LanguageSyntax(
    "javascript", JAVASCRIPT_KEYWORDS, extensions=(".js", ".mjs", ".ts"),
)
PYTHON_SYNTAX = LanguageSyntax(
    "python", keyword.kwlist, extensions=(".py", ".pyi"),
    line_comment="#", block_comment=None,
)

LANGUAGES: dict[str, LanguageSyntax] = {
    syntax.name: syntax
    for syntax in (RUST_SYNTAX, C_SYNTAX, JAVASCRIPT_SYNTAX, PYTHON_SYNTAX)
}

# Mode used for a buffer that has no file name yet
DEFAULT_SYNTAX = RUST_SYNTAX


def syntax_for_path(path: Optional[str]) -> Optional[SyntaxHighlighter]:
    """Pick a language mode by file extension.

    Returns DEFAULT_SYNTAX when path is None and None (plain text) for an
    extension no mode claims.
    """
    if path is None:
        return DEFAULT_SYNTAX
    ext = os.path.splitext(path)[1].lower()
    for syntax in LANGUAGES.values():
        if ext in syntax.extensions:
            return syntax
    return None
