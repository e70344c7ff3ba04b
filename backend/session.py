"""
Presentation-side driver for the snake engine.

GameSession plays the role a window would: it calls ``update()`` on a
schedule, forwards input, drains the engine's events after every call and
reacts to them (retime the tick, persist the all-time high score, summarise
the finished game).
"""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Callable, List, Optional

from domain.constants import Direction
from domain.events import GameOver, HighScoreUpdated, LevelUpdated, SpeedChanged
from domain.game_state import GameState
from engine import GameEngine
from players.base import Player
from players.keymap import PAUSE, RESTART, translate_key
from services.high_score_store import HighScoreStore

logger = logging.getLogger(__name__)


@dataclass
class GameSummary:
    score: int
    level: int
    length: int
    ticks: int
    finished: bool
    reason: Optional[str]
    session_high_score: int
    all_time_high_score: int
    new_all_time_high: bool
    new_session_high: bool

    def to_dict(self):
        return asdict(self)


class GameSession:
    """
    Drives one engine across any number of games.

    Attributes:
        engine: the GameEngine being driven
        store: optional HighScoreStore for the all-time best
        all_time_high: best score ever, loaded from the store at startup
        tick_interval: milliseconds until the next update() should run
        paused: while True, tick() does nothing
        summary: GameSummary of the last finished game, None while playing
    """

    def __init__(self, engine: GameEngine, store: Optional[HighScoreStore] = None):
        self.engine = engine
        self.store = store
        self.all_time_high = store.load() if store is not None else 0
        self.paused = False
        self.tick_interval = engine.effective_speed()
        self.summary: Optional[GameSummary] = None
        self.games_played = 0

        self._dispatch(engine.drain_events())

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------

    def _dispatch(self, events: List[object]):
        for event in events:
            if isinstance(event, HighScoreUpdated):
                self._on_high_score(event.high_score)
            elif isinstance(event, (LevelUpdated, SpeedChanged)):
                self.tick_interval = self.engine.effective_speed()
            elif isinstance(event, GameOver):
                self.games_played += 1
                self.summary = self.summarize(finished=True)
                logger.info(f"Game summary: {self.summary}")

    def _on_high_score(self, score: int):
        if score > self.all_time_high:
            self.all_time_high = score
            if self.store is not None:
                self.store.save(score)

    def summarize(self, finished: bool) -> GameSummary:
        """
        Summarise the current game.

        The new-high flags use >= on purpose: a final score equal to the
        standing record still counts, unlike the strict check during play.
        """
        engine = self.engine
        score = engine.score
        session_high = engine.session_high_score
        return GameSummary(
            score=score,
            level=engine.level,
            length=engine.snake.length,
            ticks=engine.tick_count,
            finished=finished,
            reason=engine.death_reason,
            session_high_score=session_high,
            all_time_high_score=self.all_time_high,
            new_all_time_high=finished and score >= self.all_time_high and score > 0,
            new_session_high=finished and score >= session_high and score > 0,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def tick(self) -> List[object]:
        """
        Run one update unless paused or over.

        Returns:
            The events produced by this tick
        """
        if self.paused or self.engine.is_game_over:
            return []
        self.engine.update()
        events = self.engine.drain_events()
        self._dispatch(events)
        return events

    def toggle_pause(self) -> bool:
        if self.engine.is_game_over:
            return self.paused
        self.paused = not self.paused
        return self.paused

    def restart(self):
        self.engine.restart()
        self.paused = False
        self.summary = None
        self.tick_interval = self.engine.effective_speed()
        self._dispatch(self.engine.drain_events())

    def handle_key(self, key_name: str) -> bool:
        """
        Apply a raw key press.

        Arrow keys and WASD steer, space pauses, escape restarts once the
        game is paused or over.

        Returns:
            True if the key did something
        """
        action = translate_key(key_name)
        if action is None:
            return False

        if isinstance(action, Direction):
            if self.engine.is_game_over:
                return False
            return self.engine.change_direction(action)

        if action == PAUSE:
            if self.engine.is_game_over:
                return False
            self.toggle_pause()
            return True

        if action == RESTART:
            if self.paused or self.engine.is_game_over:
                self.restart()
                return True
            return False

        return False

    def play(
        self,
        player: Player,
        max_ticks: Optional[int] = None,
        realtime: bool = False,
        on_tick: Optional[Callable[[GameState, List[object]], None]] = None
    ) -> GameSummary:
        """
        Let a player drive the current game until it ends or max_ticks pass.

        Args:
            player: input adapter asked for a direction before every tick
            max_ticks: stop early after this many ticks (None = no limit)
            realtime: sleep tick_interval between ticks like a real timer would
            on_tick: called with the new state and events after each tick
        """
        self.paused = False
        ticks = 0
        while not self.engine.is_game_over:
            if max_ticks is not None and ticks >= max_ticks:
                logger.info(f"Stopping after {ticks} ticks without a game over")
                return self.summarize(finished=False)

            move = player.get_move(self.engine.get_current_state())
            self.engine.change_direction(move)
            events = self.tick()
            ticks += 1

            if on_tick is not None:
                on_tick(self.engine.get_current_state(), events)
            if realtime:
                time.sleep(self.tick_interval / 1000)

        return self.summary
