"""
Tests for engine.py - the single-player simulation engine.

Food is placed explicitly with place_food() before every tick that should
eat, so randomly spawned food never lands in the snake's path by accident.
"""

import logging
import os
import random
import sys
from collections import deque

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import DOWN, LEFT, RIGHT, UP, Direction  # noqa: E402
from domain.events import (  # noqa: E402
    FoodEaten,
    GameOver,
    HighScoreUpdated,
    LevelUpdated,
    ScoreUpdated,
    SpeedChanged,
)
from domain.food import FoodType  # noqa: E402
from domain.game_state import GameState  # noqa: E402
from domain.high_score import SessionHighScore  # noqa: E402
from engine import GameEngine  # noqa: E402


class StubRng:
    """Returns the same value for every draw and counts the draws."""

    def __init__(self, value: int):
        self.value = value
        self.calls = 0

    def randrange(self, n):
        self.calls += 1
        return self.value % n


def make_engine(width=20, height=20, **kwargs) -> GameEngine:
    kwargs.setdefault("rng", random.Random(1234))
    engine = GameEngine(width, height, **kwargs)
    engine.drain_events()
    return engine


def eat(engine: GameEngine, food_type: FoodType = FoodType.NORMAL):
    """Put food right in front of the head and tick onto it."""
    hx, hy = engine.snake.head
    dx, dy = engine.direction.offset
    engine.place_food((hx + dx, hy + dy), food_type)
    engine.update()


def park_food(engine: GameEngine):
    """Move the food to a corner well away from the snake's row."""
    engine.place_food((0, 0))


def place_snake(engine: GameEngine, positions, direction: Direction):
    engine.snake.positions = deque(positions)
    engine.direction = direction
    engine.pending_direction = Direction.NONE


class TestConstruction:
    """Tests for building a new engine."""

    def test_initial_state(self):
        """A new engine starts a running game with a 3-segment snake facing right."""
        engine = GameEngine(20, 20, rng=random.Random(0))

        assert engine.body == [(10, 10), (9, 10), (8, 10)]
        assert engine.direction is RIGHT
        assert engine.pending_direction is Direction.NONE
        assert engine.score == 0
        assert engine.level == 1
        assert engine.food_eaten_count == 0
        assert engine.base_speed == 150
        assert engine.effective_speed() == 150
        assert engine.is_game_over is False
        assert engine.session_high_score == 0
        assert engine.food is not None

    def test_initial_events_announce_high_score_and_level(self):
        """Construction queues the carried-over high score and level 1."""
        engine = GameEngine(20, 20, high_score=SessionHighScore(40), rng=random.Random(0))

        assert engine.drain_events() == [HighScoreUpdated(40), LevelUpdated(1)]
        assert engine.drain_events() == []

    @pytest.mark.parametrize("width,height", [(2, 10), (10, 2), (0, 0), (-5, 20)])
    def test_grid_too_small_raises(self, width, height):
        """Grids narrower or shorter than 3 cells are rejected up front."""
        with pytest.raises(ValueError):
            GameEngine(width, height)

    def test_smallest_grid_keeps_snake_on_board(self):
        """On a 3x3 grid the whole initial body is inside the board."""
        engine = GameEngine(3, 3, rng=random.Random(0))

        assert engine.body == [(2, 1), (1, 1), (0, 1)]
        for x, y in engine.body:
            assert 0 <= x < 3 and 0 <= y < 3

    def test_snake_name_is_used(self):
        engine = GameEngine(10, 10, snake_name="Ada", rng=random.Random(0))
        assert engine.snake.name == "Ada"

    def test_default_high_score_is_private(self):
        """Engines built without a shared high score do not share one."""
        first = GameEngine(10, 10, rng=random.Random(0))
        second = GameEngine(10, 10, rng=random.Random(0))
        assert first.high_score is not second.high_score


class TestDirection:
    """Tests for change_direction() and the buffered slot."""

    @pytest.mark.parametrize("direction", [UP, DOWN, RIGHT])
    def test_non_reverse_direction_applied_next_tick(self, direction):
        """Any direction other than the reverse becomes current after update()."""
        engine = make_engine()
        park_food(engine)

        assert engine.change_direction(direction) is True
        assert engine.direction is RIGHT  # not applied until the tick

        engine.update()
        assert engine.direction is direction

    def test_reverse_direction_rejected(self):
        """Reversing straight back into the body is ignored."""
        engine = make_engine()
        park_food(engine)

        assert engine.change_direction(LEFT) is False
        engine.update()

        assert engine.direction is RIGHT
        assert engine.snake.head == (11, 10)

    def test_reversal_checked_against_applied_direction(self):
        """Two presses in one tick cannot sneak a reversal through."""
        engine = make_engine()
        park_food(engine)

        assert engine.change_direction(UP) is True
        # LEFT is the reverse of the applied RIGHT, even though UP is buffered
        assert engine.change_direction(LEFT) is False
        engine.update()

        assert engine.direction is UP

    def test_last_request_before_tick_wins(self):
        engine = make_engine()
        park_food(engine)

        engine.change_direction(UP)
        engine.change_direction(DOWN)
        engine.update()

        assert engine.direction is DOWN
        assert engine.snake.head == (10, 11)

    def test_turn_then_reverse_of_new_direction_rejected(self):
        engine = make_engine()
        park_food(engine)

        engine.change_direction(UP)
        engine.update()

        assert engine.change_direction(DOWN) is False
        assert engine.change_direction(LEFT) is True


class TestWallCollision:
    """Tests for leaving the board."""

    @pytest.mark.parametrize("positions,direction,expected_head", [
        ([(0, 5), (1, 5), (2, 5)], LEFT, (-1, 5)),
        ([(9, 5), (8, 5), (7, 5)], RIGHT, (10, 5)),
        ([(5, 0), (5, 1), (5, 2)], UP, (5, -1)),
        ([(5, 9), (5, 8), (5, 7)], DOWN, (5, 10)),
    ])
    def test_head_off_board_ends_game(self, positions, direction, expected_head):
        """A head at x=-1, x=width, y=-1 or y=height ends the game that tick."""
        engine = make_engine(10, 10)
        engine.place_food((5, 5))
        place_snake(engine, positions, direction)

        engine.update()

        assert engine.snake.head == expected_head
        assert engine.is_game_over is True
        assert engine.death_reason == "wall"
        assert engine.drain_events() == [SpeedChanged(0), GameOver("wall")]

    def test_running_into_right_wall_from_start(self):
        engine = make_engine(20, 20)
        park_food(engine)

        for _ in range(9):
            engine.update()
        assert engine.is_game_over is False

        engine.update()
        assert engine.is_game_over is True

    def test_no_food_effects_on_wall_tick(self):
        """Score, length and counters are untouched on the tick that ends the game."""
        engine = make_engine(10, 10)
        engine.place_food((5, 5), FoodType.BONUS)
        place_snake(engine, [(9, 5), (8, 5), (7, 5)], RIGHT)

        engine.update()

        assert engine.score == 0
        assert engine.food_eaten_count == 0
        assert engine.snake.length == 3
        assert engine.food.position == (5, 5)


class TestSelfCollision:
    """Tests for running into the body."""

    def test_turning_into_body_ends_game(self):
        engine = make_engine(10, 10)
        engine.place_food((0, 0))
        place_snake(engine, [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)], LEFT)

        engine.change_direction(DOWN)
        engine.update()

        assert engine.is_game_over is True
        assert engine.death_reason == "self"
        assert engine.drain_events() == [SpeedChanged(0), GameOver("self")]

    def test_following_the_tail_is_safe(self):
        """Moving into the cell the tail leaves this tick is not a collision."""
        engine = make_engine(10, 10)
        engine.place_food((0, 0))
        place_snake(engine, [(5, 5), (6, 5), (6, 6), (5, 6)], LEFT)

        engine.change_direction(DOWN)
        engine.update()

        assert engine.is_game_over is False
        assert engine.body == [(5, 6), (5, 5), (6, 5), (6, 6)]


class TestGameOverState:
    """Tests for the terminal state."""

    def test_update_is_noop_after_game_over(self):
        engine = make_engine(10, 10)
        engine.place_food((5, 5))
        place_snake(engine, [(9, 5), (8, 5), (7, 5)], RIGHT)
        engine.update()
        engine.drain_events()
        body = engine.body
        ticks = engine.tick_count

        engine.update()
        engine.update()

        assert engine.body == body
        assert engine.tick_count == ticks
        assert engine.drain_events() == []

    def test_restart_after_game_over(self):
        engine = make_engine(10, 10)
        engine.place_food((5, 5))
        place_snake(engine, [(9, 5), (8, 5), (7, 5)], RIGHT)
        engine.update()

        engine.restart()

        assert engine.is_game_over is False
        assert engine.death_reason is None
        assert engine.body == [(5, 5), (4, 5), (3, 5)]
        assert engine.direction is RIGHT


class TestEating:
    """Tests for food consumption and scoring."""

    def test_score_for_each_food_type(self):
        """Normal, Bonus, FastFood and SlowFood add up to 80."""
        engine = make_engine()

        for food_type in (FoodType.NORMAL, FoodType.BONUS, FoodType.FAST_FOOD, FoodType.SLOW_FOOD):
            eat(engine, food_type)

        assert engine.score == 80
        assert engine.food_eaten_count == 4
        assert engine.level == 1

    def test_eating_grows_snake(self):
        engine = make_engine()

        eat(engine)
        assert engine.snake.length == 4
        park_food(engine)
        engine.update()
        assert engine.snake.length == 4
        assert len(set(engine.body)) == 4

    def test_new_food_spawned_after_eating(self):
        engine = make_engine()
        eaten_at = (11, 10)
        engine.place_food(eaten_at, FoodType.NORMAL)

        engine.update()

        assert engine.food is not None
        assert engine.food.position not in engine.body

    def test_event_order_for_first_food(self):
        """Speed reset, speed boost, high score, score, food eaten - in that order."""
        engine = make_engine()

        eat(engine, FoodType.FAST_FOOD)

        assert engine.drain_events() == [
            SpeedChanged(0),
            SpeedChanged(1),
            HighScoreUpdated(5),
            ScoreUpdated(5),
            FoodEaten(FoodType.FAST_FOOD),
        ]

    def test_slow_food_event(self):
        engine = make_engine()

        eat(engine, FoodType.SLOW_FOOD)

        events = engine.drain_events()
        assert events[:2] == [SpeedChanged(0), SpeedChanged(-1)]
        assert engine.speed_slow_timer == 20
        assert engine.speed_boost_timer == 0

    def test_no_high_score_event_below_shared_best(self):
        high_score = SessionHighScore(100)
        engine = make_engine(high_score=high_score)

        eat(engine, FoodType.BONUS)

        assert engine.drain_events() == [
            SpeedChanged(0),
            ScoreUpdated(50),
            FoodEaten(FoodType.BONUS),
        ]
        assert engine.session_high_score == 100

    def test_high_score_only_on_strictly_greater(self):
        """Tying the session best does not fire a high score event."""
        engine = make_engine(high_score=SessionHighScore(10))

        eat(engine, FoodType.NORMAL)

        assert HighScoreUpdated(10) not in engine.drain_events()


class TestLevelling:
    """Tests for level progression."""

    def test_fifth_food_levels_up_once(self):
        engine = make_engine()

        for _ in range(4):
            eat(engine)
        engine.drain_events()

        eat(engine)
        events = engine.drain_events()

        assert [e for e in events if isinstance(e, LevelUpdated)] == [LevelUpdated(2)]
        assert events[-1] == LevelUpdated(2)
        assert engine.level == 2
        assert engine.food_eaten_count == 0
        assert engine.base_speed == 130

        eat(engine)
        assert not any(isinstance(e, LevelUpdated) for e in engine.drain_events())
        assert engine.food_eaten_count == 1

    def test_level_up_does_not_touch_score_or_high_score(self):
        engine = make_engine()

        for _ in range(4):
            eat(engine)
        eat(engine)

        events = engine.drain_events()
        high_score_events = [e for e in events if isinstance(e, HighScoreUpdated)]
        assert engine.score == 50
        assert engine.session_high_score == 50
        # one per food, never an extra one for the level-up
        assert len(high_score_events) == 5

    def test_base_speed_floor(self):
        engine = make_engine()
        engine.base_speed = 60
        engine.food_eaten_count = 4

        eat(engine)
        assert engine.base_speed == 50

        engine.food_eaten_count = 4
        eat(engine)
        assert engine.base_speed == 50
        assert engine.level == 3


class TestSpeedEffects:
    """Tests for the temporary speed timers and effective_speed()."""

    def test_effective_speed_without_effects(self):
        engine = make_engine()
        assert engine.effective_speed() == engine.base_speed

    def test_fast_effect(self):
        engine = make_engine()
        engine.speed_boost_timer = 5
        assert engine.effective_speed() == 100

        engine.base_speed = 60
        assert engine.effective_speed() == 30

    def test_slow_effect(self):
        engine = make_engine()
        engine.speed_slow_timer = 5
        assert engine.effective_speed() == 250

        engine.base_speed = 250
        assert engine.effective_speed() == 300

    def test_fast_wins_when_both_active(self):
        engine = make_engine()
        engine.speed_boost_timer = 5
        engine.speed_slow_timer = 5
        assert engine.effective_speed() == 100

    def test_effective_speed_is_pure(self):
        engine = make_engine()
        engine.speed_boost_timer = 3
        engine.effective_speed()
        engine.effective_speed()
        assert engine.speed_boost_timer == 3
        assert engine.drain_events() == []

    def test_fast_food_lasts_twenty_ticks(self):
        engine = make_engine(60, 5)
        eat(engine, FoodType.FAST_FOOD)
        engine.drain_events()
        engine.place_food((0, 0))

        for _ in range(19):
            engine.update()
        assert engine.speed_boost_timer == 1
        assert engine.drain_events() == []

        engine.update()
        assert engine.speed_boost_timer == 0
        assert engine.drain_events() == [SpeedChanged(0)]
        assert engine.effective_speed() == engine.base_speed

    def test_clear_fires_only_when_both_expire(self):
        engine = make_engine()
        park_food(engine)
        engine.speed_boost_timer = 1
        engine.speed_slow_timer = 3

        engine.update()
        assert engine.drain_events() == []
        assert engine.effective_speed() == 250

        engine.update()
        assert engine.drain_events() == []

        engine.update()
        assert engine.drain_events() == [SpeedChanged(0)]

    def test_clear_repeated_on_every_idle_tick(self):
        """With no effect active, every tick announces normal speed."""
        engine = make_engine()
        park_food(engine)

        engine.update()
        assert SpeedChanged(0) in engine.drain_events()

        engine.update()
        engine.update()
        assert engine.drain_events() == [SpeedChanged(0), SpeedChanged(0)]

    def test_speed_effect_comes_from_food_type(self):
        """The boost or slow-down follows the eaten food's own speed effect."""
        for food_type in FoodType:
            engine = make_engine()
            eat(engine, food_type)
            events = engine.drain_events()

            expected = [SpeedChanged(0)]
            if food_type.speed_effect:
                expected.append(SpeedChanged(food_type.speed_effect))
            assert [e for e in events if isinstance(e, SpeedChanged)] == expected
            assert (engine.speed_boost_timer > 0) == (food_type.speed_effect > 0)
            assert (engine.speed_slow_timer > 0) == (food_type.speed_effect < 0)


class TestFoodSpawning:
    """Tests for random food placement."""

    def test_food_never_on_snake(self):
        for seed in range(50):
            engine = GameEngine(4, 4, rng=random.Random(seed))
            assert engine.food.position not in engine.body

    def test_fallback_cell_after_bounded_attempts(self, caplog):
        """When every draw hits the snake, food goes to the fixed fallback cell."""
        rng = StubRng(10)  # always (10, 10): the head on a 20x20 grid

        with caplog.at_level(logging.WARNING, logger="engine"):
            engine = GameEngine(20, 20, rng=rng)

        assert engine.food.position == (5, 5)
        # 100 attempts of two draws each plus the type roll
        assert rng.calls == 201
        assert "fallback" in caplog.text

    def test_fallback_cell_clamped_to_small_grid(self):
        engine = GameEngine(3, 3, rng=StubRng(1))  # always (1, 1), a body cell
        assert engine.food.position == (2, 2)

    @pytest.mark.parametrize("roll,expected", [
        (0, FoodType.NORMAL),
        (59, FoodType.NORMAL),
        (60, FoodType.BONUS),
        (79, FoodType.BONUS),
        (80, FoodType.FAST_FOOD),
        (89, FoodType.FAST_FOOD),
        (90, FoodType.SLOW_FOOD),
        (99, FoodType.SLOW_FOOD),
    ])
    def test_food_type_from_roll(self, roll, expected):
        class RollRng:
            def __init__(self):
                self.draws = iter([0, 0, roll])

            def randrange(self, n):
                return next(self.draws)

        engine = GameEngine(20, 20, rng=RollRng())
        assert engine.food.food_type is expected
        assert engine.food.position == (0, 0)

    def test_place_food_out_of_bounds_raises(self):
        engine = make_engine(10, 10)
        with pytest.raises(ValueError):
            engine.place_food((10, 3))
        with pytest.raises(ValueError):
            engine.place_food((3, -1))


class TestSessionHighScore:
    """Tests for the high score carried across games."""

    def test_restart_keeps_high_score(self):
        engine = make_engine()
        eat(engine, FoodType.BONUS)

        engine.restart()

        assert engine.score == 0
        assert engine.session_high_score == 50
        assert engine.drain_events()[-2:] == [HighScoreUpdated(50), LevelUpdated(1)]

    def test_high_score_monotonic_across_games(self):
        engine = make_engine()
        seen = []

        for food_type in (FoodType.BONUS, FoodType.NORMAL, FoodType.SLOW_FOOD):
            eat(engine, food_type)
            seen.append(engine.session_high_score)
            engine.restart()
            seen.append(engine.session_high_score)

        assert seen == sorted(seen)
        assert engine.session_high_score == 50

    def test_engines_share_high_score(self):
        shared = SessionHighScore()
        first = make_engine(high_score=shared)
        second = make_engine(high_score=shared)

        eat(first, FoodType.BONUS)

        assert second.session_high_score == 50
        eat(second, FoodType.NORMAL)
        assert not any(isinstance(e, HighScoreUpdated) for e in second.drain_events())


class TestSnapshot:
    """Tests for get_current_state()."""

    def test_get_current_state(self):
        engine = make_engine(10, 10)
        engine.place_food((1, 1), FoodType.BONUS)

        state = engine.get_current_state()

        assert isinstance(state, GameState)
        assert state.snake_positions == engine.body
        assert state.food.position == (1, 1)
        assert state.width == 10
        assert state.height == 10
        assert state.speed == 150
        assert state.game_over is False

    def test_snapshot_not_affected_by_later_moves(self):
        engine = make_engine(10, 10)
        engine.place_food((0, 0))
        state = engine.get_current_state()

        engine.update()

        assert state.snake_positions == [(5, 5), (4, 5), (3, 5)]
