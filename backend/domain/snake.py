"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Tuple

from .constants import DEFAULT_SNAKE_NAME, INITIAL_SNAKE_LENGTH, Direction


class Snake:
    """
    Represents the player's snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        name: display label shown by the presentation layer
    """

    def __init__(self, start_x: int, start_y: int, name: str = DEFAULT_SNAKE_NAME):
        # Laid out horizontally as if already moving right
        self.positions = deque(
            (start_x - i, start_y) for i in range(INITIAL_SNAKE_LENGTH)
        )
        self.name = name

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Tuple[int, int]:
        return self.positions[-1]

    @property
    def length(self) -> int:
        return len(self.positions)

    def move(self, direction: Direction) -> None:
        """
        Advance one cell in the given direction.

        Every segment takes the cell its predecessor held before the move.
        No bounds checking happens here; an off-board head is left for the
        engine to detect.
        """
        dx, dy = direction.offset
        hx, hy = self.head
        self.positions.appendleft((hx + dx, hy + dy))
        self.positions.pop()

    def grow(self) -> None:
        """Duplicate the tail; the copy is pulled into place on later moves."""
        self.positions.append(self.tail)

    def check_self_collision(self) -> bool:
        head = self.head
        return any(segment == head for segment in list(self.positions)[1:])

    def rename(self, new_name: str) -> None:
        """Change the display name. Blank names are ignored."""
        if new_name and new_name.strip():
            self.name = new_name

    def __str__(self):
        return f"{self.name}'s Snake (Length: {self.length})"

    def __repr__(self):
        return f"<Snake name={self.name!r} head={self.head} length={self.length}>"
