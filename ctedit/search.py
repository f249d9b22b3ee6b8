"""Phrase search over a buffer with cyclic result navigation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .highlight import HighlightTag

if TYPE_CHECKING:
    from .buffer import Buffer


class SearchData:
    """Match positions from the latest scan and the currently selected one.

    Results are (x, y) match starts in document order. Matches are tagged
    SEARCH_RESULT in the buffer until the next full retokenization.
    """

    def __init__(self):
        self.results: list[tuple[int, int]] = []
        self.index: int = 0

    def find_results(self, phrase: str, buffer: Buffer) -> Optional[tuple[int, int]]:
        """Rescan buffer for phrase and return the first match, if any.

        An empty phrase just clears the results (and the old overlay).
        """
        buffer.update_syntax()
        self.results.clear()
        self.index = 0
        if not phrase:
            return None

        for row in range(len(buffer)):
            start = 0
            while True:
                found = buffer.find_phrase(phrase, row, start)
                if found is None:
                    break
                col = start + found
                self.results.append((col, row))
                # Resume after the match so hits never overlap
                start = col + len(phrase)

        for x, y in self.results:
            tags = buffer.lines[y].tags
            for i in range(x, x + len(phrase)):
                tags[i] = HighlightTag.SEARCH_RESULT

        if self.results:
            return self.results[0]
        return None

    def get_next(self) -> Optional[tuple[int, int]]:
        if not self.results:
            return None
        self.index = (self.index + 1) % len(self.results)
        return self.results[self.index]

    def get_previous(self) -> Optional[tuple[int, int]]:
        if not self.results:
            return None
        self.index = (self.index + len(self.results) - 1) % len(self.results)
        return self.results[self.index]

    def current(self) -> Optional[tuple[int, int]]:
        if not self.results:
            return None
        return self.results[self.index]
