"""
Layout
=======
Derives the playfield grid from the terminal size.

The screen stacks three bordered boxes: a one-row distance HUD, the
playfield and a one-row control bar. Whatever height is left after the
HUD, control bar and six border rows goes to the playfield.
"""

from typing import Tuple

from .components import GridLayout
from .config import (
    GameConfig, DEFAULT_CONFIG, HUD_ROWS, CONTROL_ROWS, BORDER_ROWS
)


def compute_layout(width: int, height: int,
                   config: GameConfig = DEFAULT_CONFIG) -> GridLayout:
    """Build the grid layout for a terminal of width x height cells.

    The playfield never shrinks below config.min_rows x config.min_cols
    so the game keeps running on tiny terminals (the frame just gets
    clipped).
    """
    rows = height - HUD_ROWS - CONTROL_ROWS - BORDER_ROWS
    rows = max(rows, config.min_rows)

    # Logical cells are two columns wide; two columns go to the border.
    cols = (width - 2) // 2
    cols = max(cols, config.min_cols)

    return GridLayout(width=width, height=height, rows=rows, cols=cols)


def terminal_size(term) -> Tuple[int, int]:
    """Return (width, height) of a blessed Terminal."""
    return term.width, term.height
