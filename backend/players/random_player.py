"""
Random player implementation - picks random safe moves.
"""

from typing import List

from domain.constants import Direction
from domain.game_state import GameState
from .base import Player, safe_moves


class RandomPlayer(Player):
    """
    Picks a random direction that avoids walls and self-collisions.
    """

    def get_move(self, game_state: GameState) -> Direction:
        # Sorted so a seeded rng gives the same game every run
        valid_moves: List[Direction] = sorted(safe_moves(game_state), key=lambda d: d.value)

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return game_state.direction

        return self.rng.choice(valid_moves)
