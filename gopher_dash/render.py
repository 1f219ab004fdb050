"""
Frame Rendering
================
Pure functions turning the game model into lines of text.

Nothing here touches the terminal. A Frame is a list of lines plus one
color per line; the screen module decides how to get it on screen.
Widths are measured in terminal columns (wcwidth), so the two-column
emoji sprites line up with the box borders.
"""

import math
from dataclasses import dataclass
from typing import List

from wcwidth import wcwidth

from .components import GameModel, GridLayout, ObstacleKind, RunState
from .config import (
    GameConfig, DEFAULT_CONFIG,
    PLAYER_CHAR, GROUND_CHAR, ROCK_CHAR, BLANK_CELL,
    CONTROLS_RUNNING, CONTROLS_GAME_OVER, RESIZING_TEXT,
    MIN_TERMINAL_WIDTH, MIN_TERMINAL_HEIGHT, GAME_OVER_PANEL_HEIGHT,
)
from .screen import GRAY_MED, NEON_RED, NEON_YELLOW, WHITE


@dataclass
class Frame:
    """One full screen of text."""
    lines: List[str]
    colors: List[int]

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)


# =============================================================================
# TEXT HELPERS
# =============================================================================

def display_width(text: str) -> int:
    """Number of terminal columns text occupies."""
    return sum(max(wcwidth(ch), 0) for ch in text)


def fit(text: str, width: int) -> str:
    """Pad or truncate text to exactly width columns.

    A wide character that would straddle the edge is dropped and the gap
    padded with a space.
    """
    out = []
    used = 0
    for ch in text:
        w = max(wcwidth(ch), 0)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return ''.join(out) + ' ' * (width - used)


def center(text: str, width: int) -> str:
    left = max(width - display_width(text), 0) // 2
    return fit(' ' * left + text, width)


def box(lines: List[str], width: int) -> List[str]:
    """Wrap lines in a single-line border exactly width columns wide."""
    inner = max(width - 2, 0)
    edge = '─' * inner
    framed = ['┌' + edge + '┐']
    for line in lines:
        framed.append('│' + fit(line, inner) + '│')
    framed.append('└' + edge + '┘')
    return framed


# =============================================================================
# PLAYFIELD
# =============================================================================

def render_grid(run: RunState, layout: GridLayout,
                config: GameConfig = DEFAULT_CONFIG) -> List[List[str]]:
    """Build the rows x cols sprite grid for a running game."""
    rows, cols = layout.rows, layout.cols
    grid = [[BLANK_CELL] * cols for _ in range(rows)]

    ground = layout.ground_row
    grid[ground] = [GROUND_CHAR] * cols

    for ob in run.obstacles:
        if ob.position < 0 or ob.position >= cols:
            continue
        if ob.kind is ObstacleKind.HOLE:
            grid[ground][ob.position] = BLANK_CELL
        elif ob.kind is ObstacleKind.ROCK and ground - 1 >= 0:
            grid[ground - 1][ob.position] = ROCK_CHAR

    px, py = config.player_column, run.player_height
    if 0 <= py < rows and px < cols:
        grid[py][px] = PLAYER_CHAR

    return grid


def grid_lines(grid: List[List[str]]) -> List[str]:
    return [''.join(row) for row in grid]


# =============================================================================
# GAME OVER PANEL
# =============================================================================

def countdown_seconds(run: RunState, now: float) -> int:
    """Whole seconds (rounded up) until a restart is allowed."""
    return max(int(math.ceil(run.restart_eligible_at - now)), 0)


def render_game_over_panel(model: GameModel, now: float) -> List[str]:
    """Text lines shown in place of the playfield after a crash."""
    lines = [
        'Game over!',
        f'Distance: {model.run.distance}',
        f'High score: {model.high_score}',
    ]
    remaining = countdown_seconds(model.run, now)
    if remaining > 0:
        lines.append(f'You can go again in {remaining}…')
    else:
        lines.append('Press Space to go again')
    return lines


# =============================================================================
# FULL VIEW
# =============================================================================

def render_view(model: GameModel, now: float,
                config: GameConfig = DEFAULT_CONFIG) -> Frame:
    """Render HUD, playfield (or game-over panel) and control bar."""
    layout = model.layout
    if (layout is None or layout.width < MIN_TERMINAL_WIDTH
            or layout.height < MIN_TERMINAL_HEIGHT):
        return Frame([RESIZING_TEXT], [GRAY_MED])

    width = layout.width
    lines: List[str] = []
    colors: List[int] = []

    def stack(panel: List[str], color: int):
        lines.extend(panel)
        colors.extend([color] * len(panel))

    stack(box([f'Distance: {model.run.distance}'], width), NEON_YELLOW)

    if model.run.is_over:
        message = render_game_over_panel(model, now)
        inner = [center(line, width - 2) for line in message]
        inner += [''] * (GAME_OVER_PANEL_HEIGHT - len(inner))
        stack(box(inner, width), NEON_RED)
        stack(box([CONTROLS_GAME_OVER], width), GRAY_MED)
    else:
        playfield = grid_lines(render_grid(model.run, layout, config))
        stack(box(playfield, width), WHITE)
        stack(box([CONTROLS_RUNNING], width), GRAY_MED)

    # Clip to the terminal when the playfield hit its minimum size
    return Frame(lines[:layout.height], colors[:layout.height])
