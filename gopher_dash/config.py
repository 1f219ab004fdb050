"""
Game Configuration
===================
Tuning constants for timing, physics, sprites and layout.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# TIMING
# =============================================================================

START_FRAME = 0.045        # seconds per tick at the start of a run (~22 FPS)
MIN_FRAME = 0.010          # floor for the speed ramp
ACCEL_FACTOR = 0.998       # frame interval multiplier per tick
COOLDOWN_SECONDS = 2.0     # restart delay after a crash
GAME_OVER_REFRESH = 0.25   # countdown redraw interval on the game-over panel


# =============================================================================
# PHYSICS
# =============================================================================

GRAVITY = 1
JUMP_VELOCITY = -4


# =============================================================================
# SPRITES
# =============================================================================
# Every sprite is two terminal columns wide.

PLAYER_CHAR = '\U0001F439'   # hamster
GROUND_CHAR = '\U0001F7EB'   # brown square
ROCK_CHAR = '\U0001FAA8'     # rock
BLANK_CELL = '  '


# =============================================================================
# GAMEPLAY
# =============================================================================

PLAYER_COLUMN = 2          # fixed horizontal slot, also the collision column
MIN_GAP_CELLS = 4          # logical cells between hazards
SPAWN_CHANCE = 0.12
SPAWN_JITTER = 4           # spawn offset is drawn from range(SPAWN_JITTER)
DESPAWN_THRESHOLD = -1     # obstacles left of this are dropped

HIGH_SCORE_FILE = '.gopherdash_highscore'


# =============================================================================
# LAYOUT
# =============================================================================

HUD_ROWS = 1
CONTROL_ROWS = 1
BORDER_ROWS = 2 * 3        # three boxes, two border rows each
MIN_ROWS = 5
MIN_COLS = 10
MIN_TERMINAL_WIDTH = 4
MIN_TERMINAL_HEIGHT = 4
GAME_OVER_PANEL_HEIGHT = 7


# =============================================================================
# UI STRINGS
# =============================================================================

CONTROLS_RUNNING = 'W/Space = jump   Q = quit'
CONTROLS_GAME_OVER = 'Q = quit'
RESIZING_TEXT = 'Resizing…'


@dataclass(frozen=True)
class GameConfig:
    """Tunable parameters for a game session."""
    start_frame: float = START_FRAME
    min_frame: Optional[float] = MIN_FRAME  # None disables the floor
    accel_factor: float = ACCEL_FACTOR
    cooldown_seconds: float = COOLDOWN_SECONDS
    game_over_refresh: float = GAME_OVER_REFRESH
    gravity: int = GRAVITY
    jump_velocity: int = JUMP_VELOCITY
    player_column: int = PLAYER_COLUMN
    min_gap_cells: int = MIN_GAP_CELLS
    spawn_chance: float = SPAWN_CHANCE
    spawn_jitter: int = SPAWN_JITTER
    despawn_threshold: int = DESPAWN_THRESHOLD
    min_rows: int = MIN_ROWS
    min_cols: int = MIN_COLS


DEFAULT_CONFIG = GameConfig()
