"""
Component Definitions
======================
Game state records. All components are frozen dataclasses with no
behavior beyond derived properties; the game loop replaces them
instead of mutating them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .config import START_FRAME


# =============================================================================
# WORLD COMPONENTS
# =============================================================================

class ObstacleKind(str, Enum):
    """Hazard variants. Both kill a grounded runner."""
    HOLE = 'hole'
    ROCK = 'rock'


@dataclass(frozen=True)
class Obstacle:
    """A hazard at a horizontal logical cell (one cell = two columns)."""
    position: int
    kind: ObstacleKind

    def shifted(self, dx: int = -1) -> 'Obstacle':
        return Obstacle(self.position + dx, self.kind)


@dataclass(frozen=True)
class GridLayout:
    """Playfield dimensions derived from the terminal size."""
    width: int
    height: int
    rows: int
    cols: int

    @property
    def ground_row(self) -> int:
        return self.rows - 1

    @property
    def rest_height(self) -> int:
        """Row the runner stands on: one row above the ground."""
        return self.rows - 2


# =============================================================================
# RUN STATE
# =============================================================================

@dataclass(frozen=True)
class RunState:
    """Mutable-by-replacement state of a single play-through."""
    distance: int = 0
    player_height: int = 0
    vertical_velocity: int = 0
    obstacles: Tuple[Obstacle, ...] = ()
    frame_interval: float = START_FRAME
    generation: int = 0
    is_over: bool = False
    restart_eligible_at: float = 0.0


@dataclass(frozen=True)
class GameModel:
    """Everything the game loop owns: the run, the layout and the record."""
    run: RunState
    layout: Optional[GridLayout] = None
    high_score: int = 0

    @property
    def is_grounded(self) -> bool:
        """True when the runner stands at rest height."""
        if self.layout is None:
            return False
        return self.run.player_height >= self.layout.rest_height
