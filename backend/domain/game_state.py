"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import Any, Dict, List, Optional, Tuple

from .constants import Direction
from .food import Food, FoodType

FOOD_GLYPHS = {
    FoodType.NORMAL: 'N',
    FoodType.BONUS: 'B',
    FoodType.FAST_FOOD: 'F',
    FoodType.SLOW_FOOD: 'W',
}


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        tick: number of ticks the current game has run
        snake_positions: list of (x, y), head first
        direction: direction currently applied to the snake
        food: the active Food or None
        score, level, food_eaten_count: progression counters
        speed: effective tick interval at snapshot time
        game_over: whether the game has ended
        width, height: board dimensions
    """

    def __init__(
        self,
        tick: int,
        snake_positions: List[Tuple[int, int]],
        direction: Direction,
        food: Optional[Food],
        score: int,
        level: int,
        food_eaten_count: int,
        speed: int,
        game_over: bool,
        width: int,
        height: int
    ):
        self.tick = tick
        self.snake_positions = snake_positions
        self.direction = direction
        self.food = food
        self.score = score
        self.level = level
        self.food_eaten_count = food_eaten_count
        self.speed = speed
        self.game_over = game_over
        self.width = width
        self.height = height

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        H = snake head
        S = snake body
        N/B/F/W = normal, bonus, fast and slow food
        Row 0 is printed first since moving UP decreases y.
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        if self.food is not None:
            fx, fy = self.food.position
            if 0 <= fx < self.width and 0 <= fy < self.height:
                board[fy][fx] = FOOD_GLYPHS[self.food.food_type]

        # Draw tail first so the head wins when segments overlap
        for pos_idx in range(len(self.snake_positions) - 1, -1, -1):
            x, y = self.snake_positions[pos_idx]
            if not (0 <= x < self.width and 0 <= y < self.height):
                continue
            board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = []
        for y in range(self.height):
            result.append(f"{y:2d} {' '.join(board[y])}")

        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form; tuples become lists once dumped."""
        return {
            "tick": self.tick,
            "snake_positions": [list(p) for p in self.snake_positions],
            "direction": self.direction.value,
            "food": None if self.food is None else {
                "position": list(self.food.position),
                "type": self.food.food_type.value,
            },
            "score": self.score,
            "level": self.level,
            "food_eaten_count": self.food_eaten_count,
            "speed": self.speed,
            "game_over": self.game_over,
            "width": self.width,
            "height": self.height,
        }

    def __repr__(self):
        return (
            f"<GameState tick={self.tick}, food={self.food!r}, "
            f"length={len(self.snake_positions)}, score={self.score}>"
        )
