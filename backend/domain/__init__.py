"""
Domain entities for the snake game engine.

This module contains the core game entities that are independent of
presentation concerns (rendering, input devices, file storage).
"""

from .constants import Direction, UP, DOWN, LEFT, RIGHT, VALID_MOVES, FOOD_PER_LEVEL
from .snake import Snake
from .food import Food, FoodType, food_type_for_roll
from .events import (
    ScoreUpdated,
    LevelUpdated,
    FoodEaten,
    SpeedChanged,
    GameOver,
    HighScoreUpdated,
)
from .high_score import SessionHighScore, monotonic_max
from .game_state import GameState

__all__ = [
    'Direction', 'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'FOOD_PER_LEVEL',
    'Snake',
    'Food', 'FoodType', 'food_type_for_roll',
    'ScoreUpdated', 'LevelUpdated', 'FoodEaten', 'SpeedChanged', 'GameOver',
    'HighScoreUpdated',
    'SessionHighScore', 'monotonic_max',
    'GameState',
]
