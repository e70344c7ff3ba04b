"""
Key-name translation for interactive drivers.

Raw key events are turned into either a Direction (forwarded to
``GameEngine.change_direction``) or a session command name.
"""

from typing import Optional, Union

from domain.constants import Direction

PAUSE = "pause"
RESTART = "restart"

KEY_BINDINGS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "space": PAUSE,
    "escape": RESTART,
}


def translate_key(key_name: str) -> Optional[Union[Direction, str]]:
    """Return the Direction or command bound to key_name, or None if unbound."""
    if not key_name:
        return None
    return KEY_BINDINGS.get(key_name.strip().lower())
