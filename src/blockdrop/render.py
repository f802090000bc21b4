"""Text renderer consuming board change records."""

from __future__ import annotations

from typing import Iterable, List

from .block import BlockKind
from .board import Board, CellChange
from .game_state import Update


def render_grid(board: Board) -> List[List[int]]:
    """Return a copy of the playable area without the border margin."""

    playfield = board.grid[1 : board.max_rows + 1, 1 : board.max_cols + 1]
    return [[int(cell) for cell in row] for row in playfield]


def glyph(value: int) -> str:
    return "." if value == 0 else BlockKind(value).name


class TextRenderer:
    """Keep a frame in sync with the updates a session emits.

    Only changed cells are touched, so the renderer never needs to read the
    board after its initial frame.
    """

    def __init__(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self.frame = [[0] * cols for _ in range(rows)]
        self.score = 0
        self.game_over = False

    @classmethod
    def for_board(cls, board: Board) -> "TextRenderer":
        renderer = cls(board.max_rows, board.max_cols)
        renderer.frame = render_grid(board)
        return renderer

    def apply_changes(self, changes: Iterable[CellChange]) -> None:
        for change in changes:
            row, col = change.location.row, change.location.col
            # The spawn buffer and border are never drawn.
            if 1 <= row <= self.rows and 1 <= col <= self.cols:
                self.frame[row - 1][col - 1] = change.value

    def apply(self, update: Update) -> None:
        self.apply_changes(update.changes)
        self.score = update.score
        self.game_over = update.game_over

    def render(self) -> str:
        lines = ["".join(glyph(cell) for cell in row) for row in self.frame]
        footer = f"Score: {self.score}"
        if self.game_over:
            footer += "  GAME OVER"
        lines.append(footer)
        return "\n".join(lines)


__all__ = ["TextRenderer", "glyph", "render_grid"]
