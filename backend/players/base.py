"""
Base player interface for the game engine.
"""

import random
from typing import Dict, Optional, Tuple

from domain.constants import VALID_MOVES, Direction
from domain.game_state import GameState


class Player:
    """
    Base class/interface for input adapters.

    A player looks at the current game state and returns the direction it
    wants; the driver forwards that to ``GameEngine.change_direction``.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def get_move(self, game_state: GameState) -> Direction:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of: Direction.UP, DOWN, LEFT, RIGHT
        """
        raise NotImplementedError


def safe_moves(game_state: GameState) -> Dict[Direction, Tuple[int, int]]:
    """
    Return {direction: next head} for every move that is not a reversal,
    stays on the board and avoids the body.
    """
    positions = game_state.snake_positions
    head_x, head_y = positions[0]

    moves = {}
    for move in VALID_MOVES:
        if move.is_reverse_of(game_state.direction):
            continue

        dx, dy = move.offset
        new_x, new_y = head_x + dx, head_y + dy

        # Check wall collisions
        if (new_x < 0 or new_x >= game_state.width or
            new_y < 0 or new_y >= game_state.height):
            continue

        # Check self collisions (excluding tail which will move)
        if (new_x, new_y) in positions[:-1]:
            continue

        moves[move] = (new_x, new_y)
    return moves
