"""ctedit - a small terminal text editor with syntax highlighting and search."""

from .buffer import Buffer, Line
from .cursor import Cursor, Direction
from .highlight import HighlightTag, LanguageSyntax, SyntaxHighlighter, syntax_for_path
from .search import SearchData

__all__ = [
    'Buffer',
    'Line',
    'Cursor',
    'Direction',
    'HighlightTag',
    'LanguageSyntax',
    'SyntaxHighlighter',
    'syntax_for_path',
    'SearchData',
]
