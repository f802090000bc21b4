"""Block shapes and the falling block instance.

Every shape is four ``(row, col)`` offsets relative to its first cell.  The
first cell doubles as the rotation pivot, so it always stays at ``(0, 0)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from .geometry import Location

Offsets = Tuple[Location, ...]


class BlockKind(IntEnum):
    """Block kinds.  The value is what the board grid stores."""

    EMPTY = 0
    I = 1
    T = 2
    Z = 3
    S = 4
    J = 5
    L = 6
    O = 7


PLAYABLE_KINDS: Tuple[BlockKind, ...] = tuple(k for k in BlockKind if k is not BlockKind.EMPTY)

# Indexed by ``BlockKind`` value.
BLOCK_COLORS: Tuple[str, ...] = (
    "black",
    "blue",
    "coral",
    "BurlyWood",
    "Gold",
    "Teal",
    "PaleVioletRed",
    "green",
)

_BASE_SHAPES: Dict[BlockKind, List[Tuple[int, int]]] = {
    BlockKind.EMPTY: [],
    BlockKind.I: [(0, 0), (0, 1), (0, 2), (0, 3)],
    BlockKind.T: [(0, 0), (0, 1), (1, 1), (0, 2)],
    BlockKind.Z: [(0, 0), (0, 1), (1, 1), (1, 2)],
    BlockKind.S: [(0, 0), (1, 0), (1, 1), (2, 1)],
    BlockKind.J: [(0, 0), (1, 0), (2, 0), (2, -1)],
    BlockKind.L: [(0, 0), (1, 0), (2, 0), (2, 1)],
    BlockKind.O: [(0, 0), (0, 1), (1, 0), (1, 1)],
}

SHAPES: Dict[BlockKind, Offsets] = {
    kind: tuple(Location(r, c) for r, c in cells) for kind, cells in _BASE_SHAPES.items()
}


@dataclass
class Block:
    """A block on (or about to enter) the board.

    ``offsets`` holds the current orientation; ``location`` is the absolute
    position of the pivot and stays ``None`` until the board adds the block.
    """

    kind: BlockKind
    offsets: Offsets = ()
    location: Optional[Location] = None

    @classmethod
    def spawn(cls, kind: int) -> "Block":
        """Return a fresh block of ``kind`` in its spawn orientation.

        Raises:
            ValueError: If ``kind`` is unknown or :attr:`BlockKind.EMPTY`.
        """

        kind = BlockKind(kind)
        if kind is BlockKind.EMPTY:
            raise ValueError("The empty block cannot be spawned")
        return cls(kind, SHAPES[kind])

    @property
    def color(self) -> str:
        return BLOCK_COLORS[self.kind]

    @property
    def pivot(self) -> Location:
        return self.offsets[0]

    def cells(self, location: Optional[Location] = None) -> List[Location]:
        """Return the absolute cells at ``location`` (default: own location)."""

        origin = location if location is not None else self.location
        if origin is None:
            raise ValueError("Block has no location on the board")
        return [origin + offset for offset in self.offsets]

    def occupies(self, loc: Location) -> bool:
        if self.location is None:
            return False
        return any(self.location + offset == loc for offset in self.offsets)


__all__ = [
    "BlockKind",
    "PLAYABLE_KINDS",
    "BLOCK_COLORS",
    "SHAPES",
    "Block",
]
