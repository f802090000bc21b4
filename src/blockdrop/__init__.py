"""Falling-block puzzle engine: shapes, board occupancy, moves and scoring."""

from .geometry import Direction, Location, Turn, adjacent, angle_to, quadrant
from .block import Block, BlockKind, BLOCK_COLORS, PLAYABLE_KINDS, SHAPES
from .board import Board, CellChange, IllegalMoveError
from .game_state import GameConfig, GameState, LineClear, Update
from .render import TextRenderer, render_grid

__all__ = [
    "Direction",
    "Turn",
    "Location",
    "adjacent",
    "angle_to",
    "quadrant",
    "Block",
    "BlockKind",
    "BLOCK_COLORS",
    "PLAYABLE_KINDS",
    "SHAPES",
    "Board",
    "CellChange",
    "IllegalMoveError",
    "GameConfig",
    "GameState",
    "LineClear",
    "Update",
    "TextRenderer",
    "render_grid",
]
