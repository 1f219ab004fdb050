"""
Controls
=========
Maps blessed keystrokes to game events.
"""

from typing import Optional

from .events import Event, Jump, Quit


JUMP_KEYS = ('w', ' ')
QUIT_KEYS = ('q',)
CTRL_C = '\x03'


def decode_key(key) -> Optional[Event]:
    """Translate a single key press from blessed's inkey()."""
    if key is None or not key:
        return None

    # Escape sequences (arrows, function keys) carry no game meaning
    if key.is_sequence:
        return None

    if str(key) == CTRL_C:
        return Quit()

    key_str = key.lower()
    if key_str in JUMP_KEYS:
        return Jump()
    if key_str in QUIT_KEYS:
        return Quit()
    return None
