"""
Game Loop
==========
The runner's state machine.

update() is a pure reducer: it takes the current GameModel and one
event and returns the next model plus the effects the caller must carry
out. Two phases exist, running and game over; quitting is an effect,
not a phase.

Ticks are tagged with the run generation they were scheduled for.
Restarting bumps the generation, so timers still in flight from the
previous run are recognised and dropped when they arrive.
"""

import logging
import random
import time
from dataclasses import replace
from typing import Callable, List, Optional, Tuple

from .components import GameModel, GridLayout, RunState
from .config import GameConfig, DEFAULT_CONFIG
from .events import (
    Event, Effect, Tick, Jump, Resize, Quit,
    ScheduleTick, SaveHighScore, Exit
)
from .layout import compute_layout
from .render import Frame, render_view
from .spawner import RandomSource, spawn_system
from .systems import physics_system, scroll_system, collision_system, speed_ramp


LOGGER = logging.getLogger(__name__)


# =============================================================================
# STATE CONSTRUCTION
# =============================================================================

def new_run(layout: Optional[GridLayout], generation: int = 0,
            config: GameConfig = DEFAULT_CONFIG) -> RunState:
    """Fresh run state with the runner standing at rest height."""
    return RunState(
        distance=0,
        player_height=layout.rest_height if layout is not None else 0,
        vertical_velocity=0,
        obstacles=(),
        frame_interval=config.start_frame,
        generation=generation,
        is_over=False,
        restart_eligible_at=0.0,
    )


def initial_model(high_score: int = 0,
                  config: GameConfig = DEFAULT_CONFIG) -> GameModel:
    """Model before the first resize: no layout, generation 0."""
    return GameModel(run=new_run(None, 0, config), layout=None,
                     high_score=max(0, high_score))


def restart(model: GameModel,
            config: GameConfig = DEFAULT_CONFIG) -> Tuple[GameModel, List[Effect]]:
    """Start a new run, invalidating every pending tick of the old one."""
    generation = model.run.generation + 1
    run = new_run(model.layout, generation, config)
    LOGGER.info('Starting run (generation %d)', generation)
    return replace(model, run=run), [ScheduleTick(run.frame_interval, generation)]


# =============================================================================
# REDUCER
# =============================================================================

def update(model: GameModel, event: Event, *, now: float, rng: RandomSource,
           config: GameConfig = DEFAULT_CONFIG) -> Tuple[GameModel, List[Effect]]:
    """Apply one event and return (new_model, effects)."""
    if isinstance(event, Tick):
        return _on_tick(model, event, now, rng, config)
    if isinstance(event, Jump):
        return _on_jump(model, now, config)
    if isinstance(event, Resize):
        return _on_resize(model, event, config)
    if isinstance(event, Quit):
        return model, [Exit()]
    raise TypeError(f'Unknown event: {event!r}')


def _on_tick(model: GameModel, tick: Tick, now: float, rng: RandomSource,
             config: GameConfig) -> Tuple[GameModel, List[Effect]]:
    run = model.run

    # Stale timer from an earlier run
    if tick.generation != run.generation:
        LOGGER.debug('Dropping stale tick: generation %d, current %d',
                     tick.generation, run.generation)
        return model, []

    # Keep the countdown on the game-over panel ticking
    if run.is_over:
        return model, [ScheduleTick(config.game_over_refresh, run.generation)]

    layout = model.layout
    if layout is None:
        return model, [ScheduleTick(run.frame_interval, run.generation)]

    height, velocity = physics_system(
        run.player_height, run.vertical_velocity, layout, config
    )
    obstacles = scroll_system(run.obstacles, config)
    obstacles = spawn_system(obstacles, layout.cols, rng, config)
    hit = collision_system(obstacles, height >= layout.rest_height, config)

    run = replace(
        run,
        distance=run.distance + 1,
        player_height=height,
        vertical_velocity=velocity,
        obstacles=obstacles,
        frame_interval=speed_ramp(run.frame_interval, config),
    )
    model = replace(model, run=run)

    effects: List[Effect] = []
    if hit is not None:
        LOGGER.info('Hit a %s at distance %d', hit.kind.value, run.distance)
        model, effects = _game_over(model, now, config)

    effects.append(ScheduleTick(run.frame_interval, run.generation))
    return model, effects


def _game_over(model: GameModel, now: float,
               config: GameConfig) -> Tuple[GameModel, List[Effect]]:
    run = replace(model.run, is_over=True,
                  restart_eligible_at=now + config.cooldown_seconds)
    effects: List[Effect] = []
    high_score = model.high_score
    if run.distance > high_score:
        high_score = run.distance
        LOGGER.info('New high score: %d', high_score)
        effects.append(SaveHighScore(high_score))
    return replace(model, run=run, high_score=high_score), effects


def _on_jump(model: GameModel, now: float,
             config: GameConfig) -> Tuple[GameModel, List[Effect]]:
    run = model.run
    if run.is_over:
        if now < run.restart_eligible_at:
            return model, []
        return restart(model, config)

    # No double jump: only a grounded runner can take off
    if not model.is_grounded:
        return model, []
    run = replace(run, vertical_velocity=config.jump_velocity)
    return replace(model, run=run), []


def _on_resize(model: GameModel, event: Resize,
               config: GameConfig) -> Tuple[GameModel, List[Effect]]:
    layout = compute_layout(event.width, event.height, config)
    run = replace(model.run, player_height=layout.rest_height)
    return replace(model, run=run, layout=layout), []


# =============================================================================
# GAME LOOP
# =============================================================================

class GameLoop:
    """
    Owns the game model and feeds events through the reducer.

    The clock and random source are injected so tests can drive the
    loop deterministically.
    """

    def __init__(self, high_score: int = 0, *,
                 config: Optional[GameConfig] = None,
                 rng: Optional[RandomSource] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.config = config or DEFAULT_CONFIG
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock
        self.model = initial_model(high_score, self.config)

    @property
    def run(self) -> RunState:
        return self.model.run

    @property
    def is_over(self) -> bool:
        return self.model.run.is_over

    def start(self) -> List[Effect]:
        """Effects that kick off the first run."""
        LOGGER.info('Starting run (generation %d)', self.model.run.generation)
        return [ScheduleTick(self.model.run.frame_interval,
                             self.model.run.generation)]

    def dispatch(self, event: Event) -> List[Effect]:
        """Process one event and return the effects to carry out."""
        self.model, effects = update(
            self.model, event, now=self.clock(), rng=self.rng,
            config=self.config
        )
        return effects

    def view(self) -> Frame:
        """Render the current model."""
        return render_view(self.model, self.clock(), self.config)
