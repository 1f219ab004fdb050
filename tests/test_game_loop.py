from dataclasses import replace

import pytest

from gopher_dash.components import Obstacle, ObstacleKind
from gopher_dash.config import GameConfig
from gopher_dash.events import Tick, Jump, Resize, Quit, ScheduleTick, SaveHighScore, Exit
from gopher_dash.game import GameLoop, initial_model, update


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


class ScriptedRandom:
    """Returns queued values, then a value that never triggers a spawn."""

    def __init__(self, floats=(), ints=()) -> None:
        self.floats = list(floats)
        self.ints = list(ints)

    def random(self) -> float:
        return self.floats.pop(0) if self.floats else 0.99

    def randrange(self, stop: int) -> int:
        return self.ints.pop(0) if self.ints else 0


def make_loop(rng=None, config=None, high_score=0, width=82, height=24):
    # 82x24 terminal -> 16 rows (rest height 14), 40 cols
    clock = FakeClock()
    loop = GameLoop(high_score, config=config, rng=rng or ScriptedRandom(), clock=clock)
    loop.dispatch(Resize(width, height))
    return loop, clock


def place(loop, *obstacles):
    loop.model = replace(loop.model, run=replace(loop.run, obstacles=tuple(obstacles)))


def tick(loop, times=1):
    effects = []
    for _ in range(times):
        effects = loop.dispatch(Tick(loop.run.generation))
    return effects


def test_each_tick_adds_one_distance_and_runner_stays_grounded():
    loop, _ = make_loop()
    for expected in range(1, 51):
        effects = tick(loop)
        assert loop.run.distance == expected
        assert loop.run.player_height == 14
        assert loop.run.vertical_velocity == 0
        assert effects == [ScheduleTick(loop.run.frame_interval, 0)]


def test_jump_arc_lands_back_at_rest_height():
    loop, _ = make_loop()
    loop.dispatch(Jump())
    assert loop.run.vertical_velocity == -4

    heights = []
    for _ in range(7):
        tick(loop)
        heights.append(loop.run.player_height)

    assert heights == [11, 9, 8, 8, 9, 11, 14]
    assert loop.run.vertical_velocity == 0
    tick(loop, 5)
    assert loop.run.player_height == 14


def test_jump_while_airborne_keeps_velocity():
    loop, _ = make_loop()
    loop.dispatch(Jump())
    tick(loop)
    assert loop.run.vertical_velocity == -3
    loop.dispatch(Jump())
    assert loop.run.vertical_velocity == -3


def test_stale_tick_changes_nothing():
    loop, _ = make_loop()
    tick(loop, 3)
    before = loop.model
    assert loop.dispatch(Tick(before.run.generation + 1)) == []
    assert loop.model == before


@pytest.mark.parametrize("kind", [ObstacleKind.HOLE, ObstacleKind.ROCK])
def test_grounded_runner_hits_obstacle_in_detection_column(kind):
    loop, clock = make_loop()
    clock.advance(10.0)
    place(loop, Obstacle(3, kind))
    tick(loop)
    assert loop.run.obstacles[0].position == 2
    assert loop.is_over
    assert loop.run.restart_eligible_at == pytest.approx(12.0)


@pytest.mark.parametrize("kind", [ObstacleKind.HOLE, ObstacleKind.ROCK])
def test_airborne_runner_clears_obstacle(kind):
    loop, _ = make_loop()
    place(loop, Obstacle(3, kind))
    loop.dispatch(Jump())
    tick(loop)
    assert loop.run.player_height == 11
    assert not loop.is_over


def test_obstacle_reaches_runner_after_cols_minus_two_ticks():
    # Spawn on the first tick: chance roll, hole (>= 0.5), offset 0
    loop, _ = make_loop(rng=ScriptedRandom(floats=[0.0, 0.9], ints=[0]))
    tick(loop)
    assert loop.run.obstacles == (Obstacle(40, ObstacleKind.HOLE),)

    tick(loop, 37)
    assert loop.run.obstacles[0].position == 3
    assert not loop.is_over

    tick(loop)
    assert loop.run.obstacles[0].position == 2
    assert loop.is_over


def test_crash_saves_new_high_score():
    loop, _ = make_loop(high_score=0)
    tick(loop, 4)
    place(loop, Obstacle(3, ObstacleKind.ROCK))
    effects = tick(loop)
    assert loop.model.high_score == 5
    assert effects[0] == SaveHighScore(5)
    assert isinstance(effects[-1], ScheduleTick)


def test_crash_below_high_score_does_not_save():
    loop, _ = make_loop(high_score=100)
    place(loop, Obstacle(3, ObstacleKind.ROCK))
    effects = tick(loop)
    assert loop.is_over
    assert loop.model.high_score == 100
    assert not any(isinstance(effect, SaveHighScore) for effect in effects)


def test_coinciding_hits_trigger_game_over_once():
    loop, _ = make_loop()
    place(loop, Obstacle(3, ObstacleKind.HOLE), Obstacle(3, ObstacleKind.ROCK))
    effects = tick(loop)
    assert loop.is_over
    assert sum(isinstance(effect, SaveHighScore) for effect in effects) == 1


def test_restart_ignored_during_cooldown_then_allowed():
    loop, clock = make_loop()
    place(loop, Obstacle(3, ObstacleKind.ROCK))
    tick(loop)
    over = loop.model

    clock.advance(1.5)
    assert loop.dispatch(Jump()) == []
    assert loop.model == over

    clock.advance(0.5)
    effects = loop.dispatch(Jump())
    assert not loop.is_over
    assert effects == [ScheduleTick(0.045, 1)]


def test_restart_resets_run():
    loop, clock = make_loop()
    tick(loop, 20)
    place(loop, Obstacle(3, ObstacleKind.HOLE), Obstacle(30, ObstacleKind.ROCK))
    tick(loop)
    assert loop.is_over
    clock.advance(5.0)
    loop.dispatch(Jump())

    run = loop.run
    assert run.distance == 0
    assert run.obstacles == ()
    assert run.frame_interval == 0.045
    assert run.generation == 1
    assert run.is_over is False
    assert run.player_height == 14
    assert run.vertical_velocity == 0
    assert loop.model.high_score == 21


def test_ticks_from_previous_run_are_dropped_after_restart():
    loop, clock = make_loop()
    place(loop, Obstacle(3, ObstacleKind.ROCK))
    tick(loop)
    clock.advance(3.0)
    loop.dispatch(Jump())
    before = loop.model
    assert loop.dispatch(Tick(0)) == []
    assert loop.model == before


def test_game_over_tick_reschedules_countdown_refresh():
    loop, _ = make_loop()
    place(loop, Obstacle(3, ObstacleKind.ROCK))
    tick(loop)
    before = loop.model
    assert tick(loop) == [ScheduleTick(0.25, 0)]
    assert loop.model == before


def test_speed_ramp_compounds_without_floor():
    loop, _ = make_loop(config=GameConfig(min_frame=None))
    previous = loop.run.frame_interval
    for _ in range(500):
        tick(loop)
        assert loop.run.frame_interval < previous
        previous = loop.run.frame_interval
    assert loop.run.frame_interval == pytest.approx(0.045 * 0.998 ** 500)
    assert loop.run.frame_interval == pytest.approx(0.0165, abs=1e-4)


def test_speed_ramp_stops_at_floor():
    loop, _ = make_loop(config=GameConfig(min_frame=0.02))
    tick(loop, 1000)
    assert loop.run.frame_interval == 0.02


def test_quit_exits_without_touching_state():
    loop, _ = make_loop()
    tick(loop, 3)
    before = loop.model
    assert loop.dispatch(Quit()) == [Exit()]
    assert loop.model == before


def test_resize_updates_layout_without_scheduling():
    loop, _ = make_loop()
    assert loop.dispatch(Resize(40, 30)) == []
    assert loop.model.layout.rows == 22
    assert loop.model.layout.cols == 19
    assert loop.run.player_height == 20


def test_tick_before_first_resize_only_reschedules():
    loop = GameLoop(rng=ScriptedRandom(), clock=FakeClock())
    assert loop.start() == [ScheduleTick(0.045, 0)]
    effects = loop.dispatch(Tick(0))
    assert effects == [ScheduleTick(0.045, 0)]
    assert loop.run.distance == 0


def test_jump_before_first_resize_is_ignored():
    loop = GameLoop(rng=ScriptedRandom(), clock=FakeClock())
    loop.dispatch(Jump())
    assert loop.run.vertical_velocity == 0


def test_update_is_pure():
    model = initial_model(7)
    new_model, effects = update(model, Resize(82, 24), now=0.0, rng=ScriptedRandom())
    assert model.layout is None
    assert new_model.layout is not None
    assert new_model.high_score == 7
    assert effects == []


def test_unknown_event_is_rejected():
    with pytest.raises(TypeError):
        update(initial_model(), object(), now=0.0, rng=ScriptedRandom())


def test_negative_high_score_starts_at_zero():
    assert initial_model(-3).high_score == 0
