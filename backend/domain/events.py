"""
Notifications emitted by the engine.

The engine queues these in an outbox; the driver drains it after each call
and reacts (redraw, persist the high score, retime the tick source).
"""

from dataclasses import dataclass

from .food import FoodType


@dataclass(frozen=True)
class ScoreUpdated:
    score: int


@dataclass(frozen=True)
class LevelUpdated:
    level: int


@dataclass(frozen=True)
class FoodEaten:
    food_type: FoodType


@dataclass(frozen=True)
class SpeedChanged:
    effect: int  # +1 boost, -1 slow, 0 back to normal


@dataclass(frozen=True)
class GameOver:
    reason: str  # 'wall' or 'self'


@dataclass(frozen=True)
class HighScoreUpdated:
    high_score: int
