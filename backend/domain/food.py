"""
Food entity and the food type table.
"""

from enum import Enum
from typing import Optional, Tuple


class FoodType(str, Enum):
    NORMAL = "NORMAL"
    BONUS = "BONUS"
    FAST_FOOD = "FAST_FOOD"
    SLOW_FOOD = "SLOW_FOOD"

    @property
    def points(self) -> int:
        return FOOD_POINTS[self]

    @property
    def speed_effect(self) -> int:
        """+1 speeds the game up, -1 slows it down, 0 leaves it alone."""
        return FOOD_SPEED_EFFECTS[self]


FOOD_POINTS = {
    FoodType.NORMAL: 10,
    FoodType.BONUS: 50,
    FoodType.FAST_FOOD: 5,
    FoodType.SLOW_FOOD: 15,
}

FOOD_SPEED_EFFECTS = {
    FoodType.NORMAL: 0,
    FoodType.BONUS: 0,
    FoodType.FAST_FOOD: 1,
    FoodType.SLOW_FOOD: -1,
}

FOOD_LABELS = {
    FoodType.NORMAL: "Student A",
    FoodType.BONUS: "Student B",
    FoodType.FAST_FOOD: "Student C",
    FoodType.SLOW_FOOD: "Student D",
}

FOOD_EFFECT_TEXT = {
    FoodType.NORMAL: "+10 points",
    FoodType.BONUS: "+50 points",
    FoodType.FAST_FOOD: "Speed Boost",
    FoodType.SLOW_FOOD: "Speed Slow",
}

# Upper bounds of the [0, 100) roll, checked in order
FOOD_TYPE_THRESHOLDS = (
    (60, FoodType.NORMAL),
    (80, FoodType.BONUS),
    (90, FoodType.FAST_FOOD),
    (100, FoodType.SLOW_FOOD),
)


def food_type_for_roll(roll: int) -> FoodType:
    """Map a uniform draw in [0, 100) onto the weighted food distribution."""
    for upper, food_type in FOOD_TYPE_THRESHOLDS:
        if roll < upper:
            return food_type
    raise ValueError(f"Food roll out of range: {roll}")


class Food:
    """
    A single food item on the board.

    Attributes:
        position: (x, y) cell
        food_type: one of FoodType
        label: display name; defaults to the per-type label
    """

    def __init__(
        self,
        position: Tuple[int, int],
        food_type: FoodType = FoodType.NORMAL,
        label: Optional[str] = None,
    ):
        self.position = tuple(position)
        self.food_type = food_type
        if label and label.strip():
            self.label = label
        else:
            self.label = FOOD_LABELS[food_type]

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]

    @property
    def points(self) -> int:
        return self.food_type.points

    @property
    def speed_effect(self) -> int:
        return self.food_type.speed_effect

    def description(self) -> str:
        return f"{self.label}: {FOOD_EFFECT_TEXT[self.food_type]}"

    def __str__(self):
        return f"{self.label}'s Food ({self.food_type.value}) at ({self.x}, {self.y})"

    def __repr__(self):
        return f"<Food type={self.food_type.value} at={self.position}>"
