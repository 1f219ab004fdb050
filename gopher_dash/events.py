"""
Events and Effects
===================
Inputs consumed by the game loop and the side effects it requests.

Events arrive one at a time on a single stream. The game loop never
performs side effects itself; it returns effect records that the app
carries out (scheduling, persistence, exiting).
"""

from dataclasses import dataclass
from typing import Union


# =============================================================================
# EVENTS
# =============================================================================

@dataclass(frozen=True)
class Tick:
    """Timer tick tagged with the run generation it was scheduled for."""
    generation: int


@dataclass(frozen=True)
class Jump:
    pass


@dataclass(frozen=True)
class Resize:
    """Terminal dimensions in columns and rows."""
    width: int
    height: int


@dataclass(frozen=True)
class Quit:
    pass


Event = Union[Tick, Jump, Resize, Quit]


# =============================================================================
# EFFECTS
# =============================================================================

@dataclass(frozen=True)
class ScheduleTick:
    """Deliver Tick(generation) after delay seconds."""
    delay: float
    generation: int


@dataclass(frozen=True)
class SaveHighScore:
    score: int


@dataclass(frozen=True)
class Exit:
    pass


Effect = Union[ScheduleTick, SaveHighScore, Exit]
