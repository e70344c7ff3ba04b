import argparse
import json
import logging
import random
from typing import Dict, List, Optional

from config import Settings, load_settings
from domain.game_state import GameState
from domain.high_score import SessionHighScore
from engine import GameEngine
from players.variant_registry import AVAILABLE_VARIANTS, DEFAULT_VARIANT, get_player_class, list_variants
from services.high_score_store import HighScoreStore
from session import GameSession

logger = logging.getLogger(__name__)


# -------------------------------
# Session Function
# -------------------------------

def run_session(settings: Settings, game_params: argparse.Namespace) -> Dict:
    """
    Plays one or more autopilot games back to back in a single session.

    Args:
        settings: Settings from the environment (grid size, names, file paths)
        game_params: An object (like argparse.Namespace) containing the run
                     options (games, max_ticks, player, seed, realtime, show_board).

    Returns:
        A dictionary summarising the session (per-game summaries and high scores).
    """
    seed = getattr(game_params, 'seed', None)
    rng = random.Random(seed)

    engine = GameEngine(
        grid_width=settings.grid_width,
        grid_height=settings.grid_height,
        snake_name=settings.snake_name,
        high_score=SessionHighScore(),
        rng=rng
    )
    store = HighScoreStore(settings.high_score_file)
    session = GameSession(engine, store)

    player_cls = get_player_class(getattr(game_params, 'player', DEFAULT_VARIANT))
    player = player_cls(rng=random.Random(seed))

    show_board = getattr(game_params, 'show_board', False)

    def print_tick(state: GameState, events: List[object]):
        print("\n" + state.print_board())
        print(f"Tick {state.tick} | score {state.score} | level {state.level} | speed {state.speed}ms")

    games: List[Dict] = []
    for game_number in range(game_params.games):
        if game_number > 0:
            session.restart()

        summary = session.play(
            player,
            max_ticks=game_params.max_ticks,
            realtime=getattr(game_params, 'realtime', False),
            on_tick=print_tick if show_board else None
        )
        games.append(summary.to_dict())
        print(
            f"Game {game_number + 1}: score {summary.score}, level {summary.level}, "
            f"{'ended by ' + str(summary.reason) if summary.finished else 'stopped at tick limit'}"
        )

    return {
        "snake": engine.snake.name,
        "player": player_cls.__name__,
        "games": games,
        "session_high_score": engine.session_high_score,
        "all_time_high_score": session.all_time_high
    }


# -------------------------------
# Main Entry Point
# -------------------------------

def build_parser(settings: Settings) -> argparse.ArgumentParser:
    player_help = "; ".join(f"{v['key']} = {v['description']}" for v in list_variants())
    parser = argparse.ArgumentParser(
        description="Run headless snake games driven by an autopilot player."
    )
    parser.add_argument("--width", type=int, required=False, default=settings.grid_width,
                        help="Width of the board in cells (at least 3)")
    parser.add_argument("--height", type=int, required=False, default=settings.grid_height,
                        help="Height of the board in cells (at least 3)")
    parser.add_argument("--games", type=int, required=False, default=1,
                        help="Number of games to play in this session")
    parser.add_argument("--max-ticks", type=int, required=False, default=1000,
                        help="Stop a game after this many ticks")
    parser.add_argument("--snake-name", type=str, required=False, default=settings.snake_name,
                        help="Display name of the snake")
    parser.add_argument("--player", type=str, required=False, default=DEFAULT_VARIANT,
                        choices=AVAILABLE_VARIANTS,
                        help="Autopilot that steers the snake: " + player_help)
    parser.add_argument("--seed", type=int, required=False, default=None,
                        help="Random seed for food placement and the random player")
    parser.add_argument("--high-score-file", type=str, required=False,
                        default=settings.high_score_file,
                        help="File holding the all-time high score")
    parser.add_argument("--realtime", action="store_true",
                        help="Sleep between ticks at the game's current speed")
    parser.add_argument("--show-board", action="store_true",
                        help="Print the board after every tick")
    parser.add_argument("--list-players", action="store_true",
                        help="List the available autopilot players and exit")
    return parser


def main(argv: Optional[List[str]] = None):
    settings = load_settings()
    args = build_parser(settings).parse_args(argv)

    if args.list_players:
        for variant in list_variants():
            print(f"{variant['key']:<10} {variant['description']}")
        return None

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.games < 1:
        raise ValueError("At least one game must be played.")

    settings.grid_width = args.width
    settings.grid_height = args.height
    settings.snake_name = args.snake_name
    settings.high_score_file = args.high_score_file

    result = run_session(settings, args)

    print("\nSession Result Summary:")
    print(json.dumps(result, indent=2))
    return result


if __name__ == "__main__":
    main()
