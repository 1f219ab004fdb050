"""
Systems
========
Per-tick update steps. Each system is a plain function that takes the
current values and returns new ones; the game loop runs them in order:

    physics -> scroll -> spawn -> collision -> speed ramp
"""

from typing import Optional, Tuple

from .components import Obstacle, GridLayout
from .config import GameConfig, DEFAULT_CONFIG


# =============================================================================
# PHYSICS
# =============================================================================

def physics_system(height: int, velocity: int, layout: GridLayout,
                   config: GameConfig = DEFAULT_CONFIG) -> Tuple[int, int]:
    """Apply gravity for one tick and return (height, velocity).

    Rows grow downward, so a jump is a negative velocity. Reaching the
    rest height lands the runner and kills its velocity.
    """
    velocity += config.gravity
    height += velocity

    rest = layout.rest_height
    if height >= rest:
        height = rest
        velocity = 0

    # Head bump at the top of the playfield on very short terminals
    if height < 0:
        height = 0

    return height, velocity


# =============================================================================
# SCROLLING
# =============================================================================

def scroll_system(obstacles: Tuple[Obstacle, ...],
                  config: GameConfig = DEFAULT_CONFIG) -> Tuple[Obstacle, ...]:
    """Move every obstacle one cell left and drop the ones that left the grid.

    Obstacles survive one cell past the left edge so they are drawn for
    one extra frame before removal.
    """
    shifted = (ob.shifted(-1) for ob in obstacles)
    return tuple(ob for ob in shifted if ob.position >= config.despawn_threshold)


# =============================================================================
# COLLISION
# =============================================================================

def collision_system(obstacles: Tuple[Obstacle, ...], grounded: bool,
                     config: GameConfig = DEFAULT_CONFIG) -> Optional[Obstacle]:
    """Return the first obstacle that hits the runner this tick, if any.

    Holes and rocks share one rule: they only hit a runner standing at
    rest height in the detection column. Jumping clears both.
    """
    if not grounded:
        return None
    for ob in obstacles:
        if ob.position == config.player_column:
            return ob
    return None


# =============================================================================
# SPEED RAMP
# =============================================================================

def speed_ramp(frame_interval: float,
               config: GameConfig = DEFAULT_CONFIG) -> float:
    """Shrink the tick interval by the acceleration factor."""
    frame_interval *= config.accel_factor
    if config.min_frame is not None and frame_interval < config.min_frame:
        frame_interval = config.min_frame
    return frame_interval
