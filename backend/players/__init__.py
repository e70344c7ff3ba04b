"""
Player implementations for the snake game.

This module contains the input adapters that decide which direction the
snake should take next, plus the key table used by interactive drivers.
"""

from .base import Player
from .base import safe_moves
from .random_player import RandomPlayer
from .greedy_player import GreedyPlayer
from .keymap import translate_key, KEY_BINDINGS, PAUSE, RESTART
from .variant_registry import get_player_class, list_variants, AVAILABLE_VARIANTS

__all__ = [
    'Player',
    'RandomPlayer',
    'GreedyPlayer',
    'safe_moves',
    'translate_key',
    'KEY_BINDINGS',
    'PAUSE',
    'RESTART',
    'get_player_class',
    'list_variants',
    'AVAILABLE_VARIANTS',
]
