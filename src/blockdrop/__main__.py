"""Text demo for the blockdrop engine.

Run with: `python -m blockdrop`

Plays a session with random input between gravity ticks and prints frames
produced by :class:`~blockdrop.render.TextRenderer`.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from . import Direction, GameConfig, GameState, TextRenderer, Turn


LOGGER = logging.getLogger(__name__)

_INPUTS = (Direction.EAST, Direction.WEST, Direction.SOUTH, Turn.LEFT, Turn.RIGHT)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--rows", type=int, default=15, help="Playable rows.")
    parser.add_argument("--cols", type=int, default=10, help="Playable columns.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for blocks and input.")
    parser.add_argument("--ticks", type=int, default=200, help="Maximum number of gravity ticks.")
    parser.add_argument(
        "--every",
        type=int,
        default=0,
        help="Print a frame every N ticks (0 prints only the final frame).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def play(state: GameState, renderer: TextRenderer, ticks: int, every: int = 0, seed: Optional[int] = None) -> int:
    """Drive ``state`` for up to ``ticks`` ticks and return the ticks played."""

    inputs = random.Random(seed)
    played = 0
    while played < ticks and not state.game_over:
        command = inputs.choice(_INPUTS)
        if isinstance(command, Turn):
            renderer.apply(state.request_turn(command))
        else:
            renderer.apply(state.request_move(command))
        renderer.apply(state.tick())
        played += 1
        if every and played % every == 0:
            print(renderer.render())
            print()
    return played


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    state = GameState(GameConfig(rows=args.rows, cols=args.cols, seed=args.seed))
    renderer = TextRenderer(args.rows, args.cols)
    renderer.apply(state.start())
    played = play(state, renderer, args.ticks, every=args.every, seed=args.seed)
    print(renderer.render())
    LOGGER.info("Played %d ticks, score %d", played, state.score)


if __name__ == "__main__":
    main()
