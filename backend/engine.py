"""
Single-player snake simulation engine.

The engine owns one game at a time (snake, food and progression counters)
and is advanced exclusively by external calls: ``update()`` once per tick and
``change_direction()`` whenever input arrives. It has no timers of its own.
Everything a presentation layer needs to react to is queued as an event and
handed over by ``drain_events()``.
"""

import logging
import random
from typing import List, Optional, Tuple

from domain.constants import (
    DEFAULT_SNAKE_NAME,
    FALLBACK_FOOD_CELL,
    FAST_SPEED_DELTA,
    FAST_SPEED_FLOOR,
    FOOD_PER_LEVEL,
    INITIAL_BASE_SPEED,
    INITIAL_LEVEL,
    INITIAL_SNAKE_LENGTH,
    LEVEL_SPEED_STEP,
    MAX_SPAWN_ATTEMPTS,
    MIN_BASE_SPEED,
    MIN_GRID_SIZE,
    SLOW_SPEED_CEILING,
    SLOW_SPEED_DELTA,
    SPEED_EFFECT_TICKS,
    Direction,
)
from domain.events import (
    FoodEaten,
    GameOver,
    HighScoreUpdated,
    LevelUpdated,
    ScoreUpdated,
    SpeedChanged,
)
from domain.food import Food, FoodType, food_type_for_roll
from domain.game_state import GameState
from domain.high_score import SessionHighScore
from domain.snake import Snake

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Manages:
      - Board (width, height)
      - Snake and its buffered direction
      - The single active food item
      - Score, level and speed progression
      - Outbox of notifications for the driver
    """

    def __init__(
        self,
        grid_width: int,
        grid_height: int,
        snake_name: str = DEFAULT_SNAKE_NAME,
        high_score: Optional[SessionHighScore] = None,
        rng: Optional[random.Random] = None
    ):
        if grid_width < MIN_GRID_SIZE or grid_height < MIN_GRID_SIZE:
            raise ValueError(
                f"Grid must be at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE}, "
                f"got {grid_width}x{grid_height}."
            )

        self.width = grid_width
        self.height = grid_height
        self.snake_name = snake_name
        self.high_score = high_score if high_score is not None else SessionHighScore()
        self.rng = rng if rng is not None else random.Random()

        self._events: List[object] = []
        self._initialize_game()

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------

    def _initialize_game(self):
        # Keep the whole initial body on the board even on a 3-wide grid
        start_x = max(self.width // 2, INITIAL_SNAKE_LENGTH - 1)
        start_y = self.height // 2

        self.snake = Snake(start_x, start_y, self.snake_name)
        self.direction = Direction.RIGHT
        self.pending_direction = Direction.NONE

        self.score = 0
        self.level = INITIAL_LEVEL
        self.food_eaten_count = 0
        self.base_speed = INITIAL_BASE_SPEED
        self.speed_boost_timer = 0
        self.speed_slow_timer = 0
        self.is_game_over = False
        self.death_reason: Optional[str] = None
        self.tick_count = 0

        self.food: Optional[Food] = None
        self._spawn_food()

        # Re-announce so a fresh display picks up the carried-over values
        self._emit(HighScoreUpdated(self.high_score.value))
        self._emit(LevelUpdated(self.level))

        logger.info(
            f"New game on {self.width}x{self.height} grid for {self.snake.name}; "
            f"session high score {self.high_score.value}"
        )

    def restart(self):
        """Replace the current game wholesale. The session high score survives."""
        self._initialize_game()

    def _end_game(self, reason: str):
        self.is_game_over = True
        self.death_reason = reason
        logger.info(
            f"Game over ({reason}) after {self.tick_count} ticks: "
            f"score={self.score}, level={self.level}, length={self.snake.length}"
        )
        self._emit(GameOver(reason))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def update(self):
        """
        Execute one tick:
          1) Count down speed effects
          2) Apply the buffered direction
          3) Move the snake
          4) Wall collision ends the game
          5) Self collision ends the game
          6) Eat the food if the head landed on it
        """
        if self.is_game_over:
            return

        self.tick_count += 1
        self._update_speed_effects()

        if self.pending_direction is not Direction.NONE:
            self.direction = self.pending_direction

        self.snake.move(self.direction)
        x, y = self.snake.head

        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            self._end_game("wall")
            return

        if self.snake.check_self_collision():
            self._end_game("self")
            return

        if self.food is not None and self.snake.head == self.food.position:
            self._eat_food()

    def change_direction(self, direction: Direction) -> bool:
        """
        Buffer a direction change for the next tick.

        A request that reverses the direction currently applied is ignored.
        The check is against the applied direction, not the buffered one, so
        two presses within a tick cannot chain into a reversal. The last
        accepted request before a tick wins.

        Returns:
            True if the request was buffered, False if it was rejected
        """
        if direction.is_reverse_of(self.direction):
            logger.debug(f"Ignored reversal {direction.value} while moving {self.direction.value}")
            return False

        self.pending_direction = direction
        return True

    def place_food(self, position: Tuple[int, int], food_type: FoodType = FoodType.NORMAL):
        """
        Replace the active food with one at an explicit position.
        """
        x, y = position
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"Food out of bounds at {(x, y)}.")
        self.food = Food((x, y), food_type)

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _eat_food(self):
        food = self.food
        points = food.points

        if food.speed_effect > 0:
            self.speed_boost_timer = SPEED_EFFECT_TICKS
            self._emit(SpeedChanged(food.speed_effect))
        elif food.speed_effect < 0:
            self.speed_slow_timer = SPEED_EFFECT_TICKS
            self._emit(SpeedChanged(food.speed_effect))

        self.snake.grow()
        self.score += points
        self.food_eaten_count += 1

        # Checked once, before the score notification; a level-up below must
        # not trigger another comparison
        if self.high_score.offer(self.score):
            self._emit(HighScoreUpdated(self.score))

        self._emit(ScoreUpdated(self.score))
        self._emit(FoodEaten(food.food_type))

        if self.food_eaten_count >= FOOD_PER_LEVEL:
            self.level += 1
            self.food_eaten_count = 0
            self.base_speed = max(MIN_BASE_SPEED, self.base_speed - LEVEL_SPEED_STEP)
            logger.info(f"Level up: {self.level} (base speed {self.base_speed})")
            self._emit(LevelUpdated(self.level))

        self._spawn_food()

    def _update_speed_effects(self):
        if self.speed_boost_timer > 0:
            self.speed_boost_timer -= 1
        if self.speed_slow_timer > 0:
            self.speed_slow_timer -= 1

        # Normal speed is announced on every tick where both effects are off,
        # never when just one of them runs out
        if self.speed_boost_timer == 0 and self.speed_slow_timer == 0:
            self._emit(SpeedChanged(0))

    def _random_free_cell(self) -> Tuple[int, int]:
        """
        Return a random cell not occupied by the snake.

        Gives up after a bounded number of draws and returns the fixed
        fallback cell, which may overlap the snake on a nearly full board.
        """
        occupied = set(self.snake.positions)
        for _ in range(MAX_SPAWN_ATTEMPTS):
            x = self.rng.randrange(self.width)
            y = self.rng.randrange(self.height)
            if (x, y) not in occupied:
                return (x, y)

        fallback = (
            min(FALLBACK_FOOD_CELL[0], self.width - 1),
            min(FALLBACK_FOOD_CELL[1], self.height - 1),
        )
        logger.warning(
            f"No free cell after {MAX_SPAWN_ATTEMPTS} attempts; "
            f"placing food at fallback {fallback}"
        )
        return fallback

    def _spawn_food(self):
        position = self._random_free_cell()
        food_type = food_type_for_roll(self.rng.randrange(100))
        self.food = Food(position, food_type)
        logger.debug(f"Spawned {food_type.value} food at {position}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def effective_speed(self) -> int:
        """
        Tick interval to use right now. A speed boost wins over a slow-down
        when both are active.
        """
        speed = self.base_speed
        if self.speed_boost_timer > 0:
            speed = max(FAST_SPEED_FLOOR, speed - FAST_SPEED_DELTA)
        elif self.speed_slow_timer > 0:
            speed = min(SLOW_SPEED_CEILING, speed + SLOW_SPEED_DELTA)
        return speed

    @property
    def session_high_score(self) -> int:
        return self.high_score.value

    @property
    def body(self) -> List[Tuple[int, int]]:
        return list(self.snake.positions)

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            tick=self.tick_count,
            snake_positions=self.body,
            direction=self.direction,
            food=self.food,
            score=self.score,
            level=self.level,
            food_eaten_count=self.food_eaten_count,
            speed=self.effective_speed(),
            game_over=self.is_game_over,
            width=self.width,
            height=self.height
        )

    # ------------------------------------------------------------------
    # Outbox
    # ------------------------------------------------------------------

    def _emit(self, event):
        logger.debug(f"Event: {event}")
        self._events.append(event)

    def drain_events(self) -> List[object]:
        """Return queued events in emission order and empty the outbox."""
        events = self._events
        self._events = []
        return events

    def __repr__(self):
        return (
            f"<GameEngine {self.width}x{self.height} score={self.score} "
            f"level={self.level} game_over={self.is_game_over}>"
        )
