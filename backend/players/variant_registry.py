"""
Registry of autopilot players.

Maps player keys (e.g., 'random', 'greedy') to player classes so the CLI can
pick one by name. Every player class takes an optional ``rng`` keyword.
"""

from typing import Dict, Optional, Tuple, Type

from .base import Player
from .greedy_player import GreedyPlayer
from .random_player import RandomPlayer

DEFAULT_VARIANT = "greedy"

# key -> (player class, description)
PLAYER_VARIANTS: Dict[str, Tuple[Type[Player], str]] = {
    "random": (RandomPlayer, "Random safe move each tick"),
    "greedy": (GreedyPlayer, "Safe move that gets closest to the food"),
}

# Canonical list of available variant keys (for CLI choices)
AVAILABLE_VARIANTS = list(PLAYER_VARIANTS.keys())


def get_player_class(variant_key: Optional[str] = None) -> Type[Player]:
    """
    Get the player class for a given variant key.

    Args:
        variant_key: One of 'random', 'greedy'. If None or empty, returns default.

    Returns:
        The player class (subclass of Player).

    Raises:
        ValueError: If variant_key is not recognized.
    """
    if not variant_key or variant_key.strip() == "":
        variant_key = DEFAULT_VARIANT

    variant_key = variant_key.strip().lower()

    if variant_key not in PLAYER_VARIANTS:
        available = ", ".join(AVAILABLE_VARIANTS)
        raise ValueError(
            f"Unknown player variant '{variant_key}'. Available variants: {available}"
        )

    return PLAYER_VARIANTS[variant_key][0]


def list_variants() -> list:
    """
    Return metadata about all available player variants.

    Returns:
        List of dicts with 'key' and 'description' for each variant.
    """
    return [
        {"key": key, "description": description}
        for key, (_, description) in PLAYER_VARIANTS.items()
    ]
