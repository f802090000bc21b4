from __future__ import annotations

import random

from blockdrop import BlockKind, Direction, GameConfig, GameState, TextRenderer, Turn, render_grid
from blockdrop.board import CellChange
from blockdrop.geometry import Location
from blockdrop.render import glyph


def test_render_grid_strips_border() -> None:
    state = GameState()
    state.spawn_next(BlockKind.I)
    grid = render_grid(state.board)
    assert len(grid) == 15
    assert all(len(row) == 10 for row in grid)
    assert grid[0] == [0, 0, 0, 0, 1, 1, 1, 1, 0, 0]


def test_glyphs() -> None:
    assert glyph(0) == "."
    assert glyph(int(BlockKind.Z)) == "Z"


def test_renderer_ignores_buffer_and_border_changes() -> None:
    renderer = TextRenderer(3, 3)
    renderer.apply_changes(
        [
            CellChange(Location(0, 1), 2),
            CellChange(Location(2, 4), 2),
            CellChange(Location(3, 3), 7),
        ]
    )
    assert renderer.frame == [[0, 0, 0], [0, 0, 0], [0, 0, 7]]
    assert renderer.render().splitlines() == ["...", "...", "..O", "Score: 0"]


def test_renderer_stays_in_sync_with_board() -> None:
    state = GameState(GameConfig(seed=21))
    renderer = TextRenderer.for_board(state.board)
    renderer.apply(state.start())
    inputs = random.Random(4)
    commands = (Direction.EAST, Direction.WEST, Direction.SOUTH, Turn.LEFT, Turn.RIGHT)
    for _ in range(300):
        if state.game_over:
            break
        command = inputs.choice(commands)
        if isinstance(command, Turn):
            renderer.apply(state.request_turn(command))
        else:
            renderer.apply(state.request_move(command))
        renderer.apply(state.tick())
        assert renderer.frame == render_grid(state.board)
        assert renderer.score == state.score
    assert renderer.game_over == state.game_over


def test_render_footer_reports_game_over() -> None:
    renderer = TextRenderer(1, 2)
    renderer.score = 3
    renderer.game_over = True
    assert renderer.render().splitlines()[-1] == "Score: 3  GAME OVER"
