"""
Obstacle Spawner
=================
Probabilistic hazard spawning at the right edge of the playfield.

The random source is injected so runs are reproducible under a seed.
Any object with random() and randrange(n), such as random.Random,
will do.
"""

from typing import Optional, Protocol, Tuple

from .components import Obstacle, ObstacleKind
from .config import GameConfig, DEFAULT_CONFIG


class RandomSource(Protocol):
    def random(self) -> float: ...

    def randrange(self, stop: int) -> int: ...


def furthest_position(obstacles: Tuple[Obstacle, ...]) -> int:
    """Rightmost obstacle position, or -1 when the field is empty."""
    return max((ob.position for ob in obstacles), default=-1)


def roll_obstacle(cols: int, rng: RandomSource,
                  config: GameConfig = DEFAULT_CONFIG) -> Optional[Obstacle]:
    """Roll the spawn chance and, on success, build a new obstacle.

    Kind is a coin flip; position is the right edge plus a small jitter.
    """
    if rng.random() >= config.spawn_chance:
        return None
    kind = ObstacleKind.ROCK if rng.random() < 0.5 else ObstacleKind.HOLE
    return Obstacle(cols + rng.randrange(config.spawn_jitter), kind)


def spawn_system(obstacles: Tuple[Obstacle, ...], cols: int,
                 rng: RandomSource,
                 config: GameConfig = DEFAULT_CONFIG) -> Tuple[Obstacle, ...]:
    """Possibly append a new obstacle, keeping the minimum gap.

    No random number is drawn while the last hazard is still too close
    to the right edge.
    """
    if furthest_position(obstacles) >= cols - config.min_gap_cells - 1:
        return obstacles

    spawned = roll_obstacle(cols, rng, config)
    if spawned is None:
        return obstacles
    return obstacles + (spawned,)
