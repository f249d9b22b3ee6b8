"""Cursor position and viewport tracking."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .constants import EditorConstants

if TYPE_CHECKING:
    from .buffer import Buffer


class Direction(Enum):
    """Navigation direction for cursor moves."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Cursor:
    """Logical edit position plus the scroll state that keeps it visible.

    x is the desired column and survives vertical moves; render_x is the
    column actually used on the current line (x clamped to the line
    length). x_offset/y_offset are the top-left corner of the viewport and
    size is its (width, height).
    """
    x: int = 0
    y: int = 0
    render_x: int = 0
    x_offset: int = 0
    y_offset: int = 0
    size: tuple[int, int] = (80, 24)

    def __post_init__(self):
        self.resize(self.size)

    def resize(self, size: tuple[int, int]) -> None:
        width, height = size
        self.size = (
            max(EditorConstants.MIN_VIEW_WIDTH, width),
            max(EditorConstants.MIN_VIEW_HEIGHT, height),
        )

    def move_cursor(self, buffer: Buffer, direction: Direction) -> None:
        last_line = len(buffer) - 1
        if direction == Direction.UP:
            if self.y > 0:
                self.y -= 1
                self.render_x = min(self.x, buffer.line_len(self.y))
        elif direction == Direction.DOWN:
            if self.y < last_line:
                self.y += 1
                self.render_x = min(self.x, buffer.line_len(self.y))
        elif direction == Direction.RIGHT:
            self.x = self.render_x
            if self.x < buffer.line_len(self.y):
                self.x += 1
            elif self.y < last_line:
                self.y += 1
                self.x = 0
            self.render_x = self.x
        elif direction == Direction.LEFT:
            self.x = self.render_x
            if self.x > 0:
                self.x -= 1
            elif self.y > 0:
                self.y -= 1
                self.x = buffer.line_len(self.y)
            self.render_x = self.x

    def change_offset(self) -> None:
        """Scroll the minimum amount needed to bring the cursor into view."""
        width, height = self.size
        if self.y < self.y_offset:  # Up
            self.y_offset = self.y
        if self.render_x > self.x_offset + width - 1:  # Right
            self.x_offset = self.render_x - (width - 1)
        if self.y > self.y_offset + height - 1:  # Down
            self.y_offset = self.y - (height - 1)
        if self.render_x < self.x_offset:  # Left
            self.x_offset = self.render_x

    def get_position(self) -> tuple[int, int]:
        return (self.render_x, self.y)

    def set_position(self, x: int, y: int) -> None:
        self.x = x
        self.render_x = x
        self.y = y

    def get_offset(self) -> tuple[int, int]:
        return (self.x_offset, self.y_offset)

    def get_line_index(self) -> int:
        return self.y

    def screen_position(self, left_margin: int = 0, top_margin: int = 0) -> tuple[int, int]:
        """Viewport-relative (column, row) shifted by the renderer's chrome."""
        return (
            self.render_x - self.x_offset + left_margin,
            self.y - self.y_offset + top_margin,
        )

    def reset(self) -> None:
        """Return to the document origin with no scroll."""
        self.x = self.y = self.render_x = 0
        self.x_offset = self.y_offset = 0
