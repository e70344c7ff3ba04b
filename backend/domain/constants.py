"""
Game constants for the snake engine.
"""

from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Movement directions. NONE only ever fills the buffered-direction slot."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    NONE = "NONE"

    @property
    def offset(self) -> Tuple[int, int]:
        return _OFFSETS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def is_reverse_of(self, other: "Direction") -> bool:
        return self is not Direction.NONE and self.opposite is other


# Up => y - 1, so row 0 is the top of the board
_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.NONE: (0, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.NONE: Direction.NONE,
}

UP = Direction.UP
DOWN = Direction.DOWN
LEFT = Direction.LEFT
RIGHT = Direction.RIGHT
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Board
MIN_GRID_SIZE = 3
INITIAL_SNAKE_LENGTH = 3
DEFAULT_SNAKE_NAME = "Player"

# Progression
FOOD_PER_LEVEL = 5
INITIAL_LEVEL = 1
INITIAL_BASE_SPEED = 150  # tick interval in milliseconds
LEVEL_SPEED_STEP = 20
MIN_BASE_SPEED = 50

# Temporary speed effects
SPEED_EFFECT_TICKS = 20
FAST_SPEED_DELTA = 50
FAST_SPEED_FLOOR = 30
SLOW_SPEED_DELTA = 100
SLOW_SPEED_CEILING = 300

# Food spawning
MAX_SPAWN_ATTEMPTS = 100
FALLBACK_FOOD_CELL = (5, 5)
