"""Board representation for the playfield.

The grid carries a one cell margin on every side.  Playable cells are rows
``1..max_rows`` and cols ``1..max_cols``; row ``0`` is a spawn buffer a
rotating block may poke into and which is wiped before every spawn.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .block import Block, BlockKind, Offsets
from .geometry import SIGN_CHART, Direction, Location, Turn, angle_to, quadrant


LOGGER = logging.getLogger(__name__)

# Default playfield dimensions.
ROWS = 15
COLS = 10

# Rows zeroed before a spawn and after a collapse.
SPAWN_BUFFER_ROWS = 2

Grid = NDArray[np.uint8]
Cells = Tuple[Location, ...]


class IllegalMoveError(ValueError):
    """Raised when a move or turn is applied that fails validation."""


@dataclass(frozen=True)
class CellChange:
    """A single cell update for renderers."""

    location: Location
    value: int


def create_empty_grid(rows: int = ROWS, cols: int = COLS) -> Grid:
    """Return an empty grid including the border margin."""

    return np.zeros((rows + 2, cols + 2), dtype=np.uint8)


class Board:
    """Occupancy grid plus the moves that act on it."""

    def __init__(self, rows: int = ROWS, cols: int = COLS) -> None:
        if rows < 1 or cols < 1:
            raise ValueError(f"Board must be at least 1x1, got {rows}x{cols}")
        self.max_rows = int(rows)
        self.max_cols = int(cols)
        self.grid: Grid = create_empty_grid(self.max_rows, self.max_cols)
        self.changed_cells: List[CellChange] = []
        self.filled_lines: List[int] = []

    # Raw grid access --------------------------------------------------
    def in_grid(self, loc: Location) -> bool:
        return 0 <= loc.row <= self.max_rows + 1 and 0 <= loc.col <= self.max_cols + 1

    def cell_at(self, loc: Location) -> int:
        """Return the value at ``loc``.

        Raises:
            IndexError: If ``loc`` is outside the grid, margin included.
        """
        if not self.in_grid(loc):
            raise IndexError("Cell out of bounds")
        return int(self.grid[loc.row, loc.col])

    def set_cell(self, loc: Location, value: int) -> None:
        """Set the value at ``loc`` without recording a change.

        Raises:
            IndexError: If ``loc`` is outside the grid, margin included.
            ValueError: If ``value`` is not a block kind.
        """
        if not self.in_grid(loc):
            raise IndexError("Cell out of bounds")
        self.grid[loc.row, loc.col] = np.uint8(BlockKind(value))

    def is_playable(self, loc: Location) -> bool:
        """Return ``True`` if a block cell may sit at ``loc``.

        Row ``0`` counts as playable so blocks can rotate into the spawn
        buffer; the side columns and the floor never do.
        """
        return 0 <= loc.row <= self.max_rows and 1 <= loc.col <= self.max_cols

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def drain_changes(self) -> List[CellChange]:
        """Return the recorded changes and start a new list."""

        changes, self.changed_cells = self.changed_cells, []
        return changes

    def _write(self, loc: Location, value: int) -> None:
        self.grid[loc.row, loc.col] = np.uint8(value)
        self.changed_cells.append(CellChange(loc, int(value)))

    def _is_free_for(self, block: Block, loc: Location) -> bool:
        if not self.is_playable(loc):
            return False
        return block.occupies(loc) or self.grid[loc.row, loc.col] == 0

    # Spawning ---------------------------------------------------------
    def can_add(self, block: Block, location: Location) -> bool:
        """Return ``True`` if ``block`` fits at ``location``.

        The check runs against a copy of the grid whose spawn buffer rows are
        cleared, mirroring what :meth:`add` does to the live grid.
        """

        view = self.grid.copy()
        view[:SPAWN_BUFFER_ROWS] = 0
        for cell in block.cells(location):
            if not self.is_playable(cell) or view[cell.row, cell.col] != 0:
                LOGGER.debug(
                    "Cannot add %s at %s: cell (%d, %d) is blocked",
                    block.kind.name,
                    location,
                    cell.row,
                    cell.col,
                )
                return False
        return True

    def add(self, block: Block, location: Location) -> None:
        """Place ``block`` at ``location`` after clearing the spawn buffer."""

        self._clear_spawn_buffer()
        block.location = location
        for cell in block.cells():
            self._write(cell, block.kind)

    def _clear_spawn_buffer(self) -> None:
        buffer = self.grid[:SPAWN_BUFFER_ROWS]
        for row, col in zip(*np.nonzero(buffer)):
            self._write(Location(int(row), int(col)), 0)

    # Translation ------------------------------------------------------
    def plan_move(self, block: Block, direction: int) -> Optional[Cells]:
        """Return the cells ``block`` would cover after one step, or ``None``.

        Each target must be playable and either empty or already covered by
        the block itself.  Nothing is mutated.
        """

        direction = Direction(direction)
        targets = []
        for cell in block.cells():
            target = cell.adjacent(direction)
            if not self._is_free_for(block, target):
                return None
            targets.append(target)
        return tuple(targets)

    def can_move(self, block: Block, direction: int) -> bool:
        return self.plan_move(block, direction) is not None

    def move(self, block: Block, direction: int, targets: Optional[Sequence[Location]] = None) -> None:
        """Move ``block`` one step towards ``direction``.

        ``targets`` is the result of :meth:`plan_move`; it is computed here
        when omitted.

        Raises:
            IllegalMoveError: If the move is not possible.
        """

        if targets is None:
            targets = self.plan_move(block, direction)
            if targets is None:
                raise IllegalMoveError(f"{block.kind.name} block cannot move {Direction(direction).name}")
        self._relocate(block, targets)
        block.location = block.location.adjacent(direction)

    # Rotation ---------------------------------------------------------
    def plan_turn(self, block: Block, turn: int) -> Optional[Offsets]:
        """Return the offsets of ``block`` turned about its pivot, or ``None``.

        An offset's magnitudes swap between row and col while the quadrant
        of its turned angle picks the signs.  The O block is symmetric and
        keeps its offsets.
        """

        turn = Turn(turn)
        if block.location is None:
            raise ValueError("Block has no location on the board")
        if block.kind is BlockKind.O:
            offsets = block.offsets
        else:
            offsets = tuple(self._turn_offset(block.pivot, offset, turn) for offset in block.offsets)
        for offset in offsets:
            if not self._is_free_for(block, block.location + offset):
                return None
        return offsets

    @staticmethod
    def _turn_offset(pivot: Location, offset: Location, turn: Turn) -> Location:
        row_sign, col_sign = SIGN_CHART[quadrant(angle_to(pivot, offset) + turn)]
        return Location(abs(offset.col) * row_sign, abs(offset.row) * col_sign)

    def can_turn(self, block: Block, turn: int) -> bool:
        return self.plan_turn(block, turn) is not None

    def turn(self, block: Block, turn: int, offsets: Optional[Offsets] = None) -> None:
        """Turn ``block`` about its pivot.

        Raises:
            IllegalMoveError: If the turn is not possible.
        """

        if offsets is None:
            offsets = self.plan_turn(block, turn)
            if offsets is None:
                raise IllegalMoveError(f"{block.kind.name} block cannot turn {Turn(turn).name}")
        self._relocate(block, [block.location + offset for offset in offsets])
        block.offsets = tuple(offsets)

    def _relocate(self, block: Block, targets: Sequence[Location]) -> None:
        for cell in block.cells():
            self._write(cell, 0)
        for cell in targets:
            self._write(cell, block.kind)

    # Line clearing ----------------------------------------------------
    def scan_filled_rows(self) -> List[int]:
        """Return the ascending indices of completely filled rows."""

        playfield = self.grid[1 : self.max_rows + 1, 1 : self.max_cols + 1]
        counts = np.count_nonzero(playfield, axis=1)
        self.filled_lines = [int(row) + 1 for row in np.flatnonzero(counts == self.max_cols)]
        for row in self.filled_lines:
            LOGGER.debug("Line %d is filled", row)
        return list(self.filled_lines)

    def collapse_rows_from(self, row: int) -> None:
        """Drop every row above ``row`` by one, overwriting ``row``."""

        if not 1 <= row <= self.max_rows:
            raise IndexError(f"Row {row} is not a playable row")
        before = self.grid.copy()
        self.grid[1 : row + 1] = before[0:row]
        self.grid[:SPAWN_BUFFER_ROWS] = 0
        for r, c in zip(*np.nonzero(before != self.grid)):
            self.changed_cells.append(CellChange(Location(int(r), int(c)), int(self.grid[r, c])))


__all__ = [
    "ROWS",
    "COLS",
    "Board",
    "CellChange",
    "IllegalMoveError",
    "create_empty_grid",
]
