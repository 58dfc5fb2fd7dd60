# src/tests/test_state.py
import random
from src.flappy.config import DEATH_MESSAGE, SPAWN_PERIOD
from src.flappy.pipes import Pipe
from src.flappy.state import GameState, Phase, StopCause


def make_state(seed: int = 1) -> GameState:
    return GameState(rng=random.Random(seed))


def test_render_only_tick_moves_nothing():
    s = make_state()
    s.update(no_advance=True)
    assert s.frame == 1
    assert (s.character.y, s.character.velocity) == (283, 0)
    assert s.ground.offset == 0
    assert s.phase is Phase.READY


def test_first_real_tick():
    s = make_state()
    s.update(no_advance=True)
    s.start()
    s.update()
    assert s.frame == 2
    assert s.character.velocity == -1
    assert s.character.y == 283.5
    assert s.ground.offset == 3


def test_spawn_period():
    s = make_state()
    counts = {}
    for _ in range(3 * SPAWN_PERIOD):
        s.update(no_advance=True)
        counts[s.frame] = len(s.pipes)
    assert counts[109] == 0
    assert counts[110] == 1
    assert counts[111] == 1
    assert counts[219] == 1
    assert counts[220] == 2
    assert counts[330] == 3
    assert all(p.x == s.width for p in s.pipes)


def test_pipe_generation_is_seeded():
    a, b = make_state(7), make_state(7)
    for _ in range(3 * SPAWN_PERIOD):
        a.update(no_advance=True)
        b.update(no_advance=True)
    assert [(p.top_height, p.bottom_height) for p in a.pipes] == \
           [(p.top_height, p.bottom_height) for p in b.pipes]


def test_prune_keeps_order():
    s = make_state()
    keep_a = Pipe(x=300, top_height=60, bottom_height=60)
    keep_b = Pipe(x=350, top_height=70, bottom_height=70)
    s.pipes = [
        Pipe(x=-150, top_height=60, bottom_height=60),
        keep_a,
        Pipe(x=-101, top_height=60, bottom_height=60),
        keep_b,
    ]
    s.update(no_advance=True)
    assert s.pipes == [keep_a, keep_b]


def test_collision_stops_in_same_tick():
    s = make_state()
    s.start()
    s.pipes = [Pipe(x=150, top_height=400, bottom_height=50)]
    messages = []
    s.add_stop_listener(messages.append)
    s.update()
    assert s.phase is Phase.STOPPED
    assert s.stop_cause is StopCause.COLLISION
    assert s.stop_message == DEATH_MESSAGE
    assert messages == [DEATH_MESSAGE]
    assert s.frame == 1


def test_out_of_bounds_stops():
    s = make_state()
    s.start()
    s.character.y = 560
    s.update()
    snap = s.snapshot()
    assert snap.phase is Phase.STOPPED
    assert snap.stop_cause is StopCause.BOUNDS
    assert snap.stop_message == "you died."
    assert not snap.alive


def test_ticks_after_stop_are_noops():
    s = make_state()
    s.start()
    s.stop()
    before = s.snapshot()
    for _ in range(5):
        s.update()
    assert s.snapshot() == before


def test_stop_is_idempotent():
    s = make_state()
    s.start()
    calls = []
    s.add_stop_listener(calls.append)
    assert s.stop(StopCause.MANUAL, "bye")
    first = s.snapshot()
    assert not s.stop(StopCause.COLLISION, "again")
    assert s.snapshot() == first
    assert calls == ["bye"]


def test_score_callback():
    s = make_state()
    s.start()
    scores = []
    s.add_score_listener(scores.append)
    # one step before the score window (97 < x < 100), bird inside the gap
    s.pipes = [Pipe(x=102, top_height=100, bottom_height=100)]
    s.update()
    assert s.phase is Phase.RUNNING
    assert s.score == 1
    assert scores == [1]
    s.update()
    assert s.score == 1


def test_start_only_from_ready():
    s = make_state()
    assert s.start()
    assert not s.start()
    s.stop()
    assert not s.start()
    assert s.phase is Phase.STOPPED


def test_snapshot_is_a_copy():
    s = make_state()
    s.pipes = [Pipe(x=300, top_height=60, bottom_height=60)]
    snap = s.snapshot()
    s.pipes[0].x = 10
    s.character.y = 0
    assert snap.pipes[0].x == 300
    assert snap.character.y == 283


def test_bounds_wins_when_both_end_the_same_tick():
    s = make_state()
    s.start()
    s.character.y = 560
    # bottom piece spans 500..600, overlapping the bird after it leaves the screen
    s.pipes = [Pipe(x=150, top_height=50, bottom_height=100)]
    messages = []
    s.add_stop_listener(messages.append)
    s.update()
    assert s.stop_cause is StopCause.BOUNDS
    assert messages == [DEATH_MESSAGE]
