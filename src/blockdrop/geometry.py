"""Location and direction arithmetic for the playfield.

Angles are expressed in degrees with rows growing downwards, so ``90`` points
south and ``-90`` north.  Translations only ever use the three cardinal
directions in :class:`Direction`; :class:`Turn` values are rotation deltas.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class Direction(IntEnum):
    """Translation directions in degrees."""

    EAST = 0
    SOUTH = 90
    WEST = 180


class Turn(IntEnum):
    """Rotation deltas in degrees."""

    LEFT = 90
    RIGHT = -90


# ``(row, col)`` signs picked by the quadrant a rotated offset lands in.
SIGN_CHART: Tuple[Tuple[int, int], ...] = (
    (-1, 1),
    (-1, -1),
    (1, -1),
    (1, 1),
)


@dataclass(frozen=True)
class Location:
    """Integer ``(row, col)`` position.

    Fractional coordinates are floored on construction.
    """

    row: int
    col: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "row", math.floor(self.row))
        object.__setattr__(self, "col", math.floor(self.col))

    def __add__(self, other: "Location") -> "Location":
        if not isinstance(other, Location):
            return NotImplemented
        return Location(self.row + other.row, self.col + other.col)

    def adjacent(self, direction: float) -> "Location":
        """Return the neighbouring location one step towards ``direction``."""

        d_row, d_col = step(direction)
        return Location(self.row + d_row, self.col + d_col)


def step(direction: float) -> Tuple[int, int]:
    """Return the unit ``(d_row, d_col)`` for an angle in degrees."""

    rad = math.radians(direction)
    return round(math.sin(rad)), round(math.cos(rad))


def adjacent(loc: Location, direction: float) -> Location:
    return loc.adjacent(direction)


def angle_to(origin: Location, target: Location) -> float:
    """Return the angle in degrees from ``origin`` towards ``target``.

    Downward is treated as the positive direction, hence the row term is
    negated.  Identical locations give ``0``.
    """

    if origin == target:
        return 0.0
    d_row = -target.row - origin.row
    d_col = target.col - origin.col
    return math.degrees(math.atan2(d_row, d_col))


def quadrant(degrees: float) -> int:
    """Return the quadrant index (``0``-``3``) of an angle in degrees."""

    return int((degrees % 360) // 90) % 4


__all__ = [
    "Direction",
    "Turn",
    "SIGN_CHART",
    "Location",
    "step",
    "adjacent",
    "angle_to",
    "quadrant",
]
