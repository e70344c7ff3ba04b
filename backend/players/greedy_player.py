"""
Greedy player implementation - steers straight for the food.
"""

from typing import Tuple

from domain.constants import Direction
from domain.game_state import GameState
from .base import Player, safe_moves


class GreedyPlayer(Player):
    """
    Heads for the food along whichever safe move shortens the Manhattan
    distance the most; ties keep the current direction when possible.
    """

    def get_move(self, game_state: GameState) -> Direction:
        moves = safe_moves(game_state)
        if not moves:
            return game_state.direction
        if game_state.food is None:
            target = moves.get(game_state.direction)
            return game_state.direction if target else min(moves, key=lambda d: d.value)

        fx, fy = game_state.food.position

        def distance(move: Direction) -> Tuple[int, int, str]:
            x, y = moves[move]
            keep = 0 if move is game_state.direction else 1
            return (abs(fx - x) + abs(fy - y), keep, move.value)

        return min(moves, key=distance)
