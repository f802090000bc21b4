"""High level game session: spawning, input requests, gravity and scoring."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .block import PLAYABLE_KINDS, Block, BlockKind
from .board import COLS, ROWS, Board, CellChange
from .geometry import Direction, Location, Turn


LOGGER = logging.getLogger(__name__)

SPAWN_ROW = 1


@dataclass
class GameConfig:
    """Per-session settings.  ``spawn_col`` defaults to the board centre."""

    rows: int = ROWS
    cols: int = COLS
    spawn_row: int = SPAWN_ROW
    spawn_col: Optional[int] = None
    seed: Optional[int] = None

    @property
    def spawn_location(self) -> Location:
        col = self.spawn_col if self.spawn_col is not None else self.cols // 2
        return Location(self.spawn_row, col)


@dataclass(frozen=True)
class LineClear:
    """Rows removed by one compaction pass, in ascending order."""

    rows: Tuple[int, ...] = ()

    @property
    def count(self) -> int:
        return len(self.rows)


@dataclass
class Update:
    """Outcome of a single request, handed to the renderer.

    ``accepted`` tells whether the requested move or turn happened.  A tick
    whose south move fails reports ``landed`` together with the line clear
    and whether a new block could be spawned.
    """

    accepted: bool
    changes: List[CellChange] = field(default_factory=list)
    score: int = 0
    game_over: bool = False
    landed: bool = False
    spawned: bool = False
    lines: Optional[LineClear] = None


@dataclass
class GameState:
    """Mutable state for a game session."""

    config: GameConfig = field(default_factory=GameConfig)
    board: Board = field(init=False)
    active: Optional[Block] = field(default=None, init=False)
    score: int = field(default=0, init=False)
    game_over: bool = field(default=False, init=False)
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.board = Board(self.config.rows, self.config.cols)
        self.rng = random.Random(self.config.seed)

    @property
    def spawn_location(self) -> Location:
        return self.config.spawn_location

    def _random_kind(self) -> BlockKind:
        return self.rng.choice(PLAYABLE_KINDS)

    def _update(self, accepted: bool, **kwargs) -> Update:
        return Update(
            accepted=accepted,
            changes=self.board.drain_changes(),
            score=self.score,
            game_over=self.game_over,
            **kwargs,
        )

    def _accepting(self) -> bool:
        return not self.game_over and self.active is not None

    def reset_game(self) -> Update:
        """Start a new session and spawn its first block.

        The returned update lists every playable cell so a renderer can draw
        the whole board.
        """

        self.board = Board(self.config.rows, self.config.cols)
        self.score = 0
        self.game_over = False
        self.active = None
        spawned = self.spawn_next()
        self.board.drain_changes()
        changes = [
            CellChange(loc, self.board.cell_at(loc))
            for loc in (
                Location(r, c)
                for r in range(1, self.board.max_rows + 1)
                for c in range(1, self.board.max_cols + 1)
            )
        ]
        return Update(
            accepted=spawned,
            changes=changes,
            score=self.score,
            game_over=self.game_over,
            spawned=spawned,
        )

    start = reset_game

    def spawn_next(self, kind: Optional[BlockKind] = None) -> bool:
        """Spawn a new active block at the spawn location.

        ``kind`` defaults to a uniformly random playable kind.  If the block
        does not fit the session ends and ``False`` is returned.
        """

        if self.game_over:
            return False
        block = Block.spawn(kind if kind is not None else self._random_kind())
        location = self.spawn_location
        if not self.board.can_add(block, location):
            self.active = None
            self.game_over = True
            LOGGER.info("Game over. Final score: %d", self.score)
            return False
        self.board.add(block, location)
        self.active = block
        LOGGER.debug("Spawned %s block at (%d, %d)", block.kind.name, location.row, location.col)
        return True

    def request_move(self, direction: int) -> Update:
        """Try to translate the active block one step."""

        if not self._accepting():
            return self._update(False)
        targets = self.board.plan_move(self.active, direction)
        if targets is None:
            LOGGER.debug("Rejected move %s", Direction(direction).name)
            return self._update(False)
        self.board.move(self.active, direction, targets)
        return self._update(True)

    def request_turn(self, turn: int) -> Update:
        """Try to rotate the active block about its pivot."""

        if not self._accepting():
            return self._update(False)
        offsets = self.board.plan_turn(self.active, turn)
        if offsets is None:
            LOGGER.debug("Rejected turn %s", Turn(turn).name)
            return self._update(False)
        self.board.turn(self.active, turn, offsets)
        return self._update(True)

    def tick(self) -> Update:
        """Advance gravity by one step.

        A failed south move means the active block has landed: filled lines
        are resolved and exactly one new block is spawned.
        """

        if not self._accepting():
            return self._update(False)
        targets = self.board.plan_move(self.active, Direction.SOUTH)
        if targets is not None:
            self.board.move(self.active, Direction.SOUTH, targets)
            return self._update(True)
        lines = self.resolve_lines()
        spawned = self.spawn_next()
        return self._update(False, landed=True, spawned=spawned, lines=lines)

    def resolve_lines(self) -> LineClear:
        """Clear filled rows and add their count to the score.

        Rows are collapsed from the bottom up.  Every collapse shifts the rows
        above it down by one, so the k-th target is offset by ``k``.
        """

        filled = self.board.scan_filled_rows()
        if not filled:
            return LineClear()
        self.score += len(filled)
        for collapsed, row in enumerate(reversed(filled)):
            self.board.collapse_rows_from(row + collapsed)
        self.board.filled_lines = []
        LOGGER.info("Cleared %d line(s), score is now %d", len(filled), self.score)
        return LineClear(tuple(filled))


__all__ = ["GameConfig", "GameState", "LineClear", "Update"]
