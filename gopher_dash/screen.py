"""
Screen Output
==============
Double-buffered terminal presenter.

Frames arrive as whole lines. Sprites are two columns wide, so the
buffer compares rows instead of single cells and rewrites only the rows
that changed. No screen clears needed after the first paint.
"""

from typing import List, Optional, Tuple

from blessed import Terminal


# ANSI 256 color constants
NEON_YELLOW = 226
NEON_RED = 196

GRAY_MED = 245

WHITE = 255


Row = Tuple[str, int]


class DoubleBuffer:
    """
    Row-level double buffer.

    Keeps the last presented frame as the front buffer. present() diffs
    the new frame against it and returns the escape sequences for the
    changed rows only.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.front: List[Optional[Row]] = []
        self._normal = term.normal  # Cache reset sequence

    def invalidate(self):
        """Forget the front buffer so the next present repaints everything."""
        self.front = []

    def present(self, frame) -> str:
        """
        Swap in a new frame and generate output for changed rows.

        Rows the previous frame had but the new one lacks are cleared.
        """
        back: List[Optional[Row]] = list(zip(frame.lines, frame.colors))
        output_parts = []
        normal = self._normal

        for y, row in enumerate(back):
            if y < len(self.front) and self.front[y] == row:
                continue
            text, color = row
            output_parts.append(self.term.move_xy(0, y))
            # Reset colors to prevent bleed
            output_parts.append(normal)
            output_parts.append(self.term.color(color))
            output_parts.append(text)
            output_parts.append(normal)
            output_parts.append(self.term.clear_eol)

        for y in range(len(back), len(self.front)):
            output_parts.append(self.term.move_xy(0, y))
            output_parts.append(normal)
            output_parts.append(self.term.clear_eol)

        self.front = back
        return ''.join(output_parts)
