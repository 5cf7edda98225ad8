"""Tests for the playback stepper.

Critical Invariants:
- the index always stays within -1 … len-1
- tick advances at most one step per elapsed deadline
- any manual move cancels the pending advance and leaves the stepper paused
- reaching the last step finishes playback, whether by timer or by hand
"""

import pytest

from engine.stepper import MIN_SPEED, SPEED_PRESETS, Stepper, StepperState
from steps import Message


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def trace(n):
    return tuple(Message(message=f"step {i}") for i in range(n))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stepper(clock):
    s = Stepper(speed=1.0, clock=clock)
    s.load(trace(3))
    return s


def test_load_parks_before_first_step(stepper):
    assert stepper.current_idx == -1
    assert stepper.state == StepperState.PAUSED
    assert stepper.current_step is None
    assert not stepper.has_pending_advance


def test_empty_trace_is_idle():
    s = Stepper()
    s.load(())

    assert s.state == StepperState.IDLE
    assert not s.play(0)
    assert not s.next_step()


def test_next_and_prev_respect_bounds(stepper):
    assert stepper.prev_step() is False
    assert [stepper.next_step() for _ in range(4)] == [True, True, True, False]
    assert stepper.current_idx == 2
    assert stepper.is_at_end
    assert stepper.prev_step()
    assert stepper.current_idx == 1


def test_goto_validates_range(stepper):
    stepper.goto_step(2)
    assert stepper.current_step.message == "step 2"
    stepper.goto_step(-1)
    assert stepper.current_step is None
    with pytest.raises(IndexError):
        stepper.goto_step(3)
    with pytest.raises(IndexError):
        stepper.goto_step(-2)


def test_rewind_and_jump_to_end(stepper):
    stepper.jump_to_end()
    assert stepper.current_idx == 2
    stepper.rewind()
    assert stepper.current_idx == -1


def test_tick_waits_for_the_deadline(stepper, clock):
    assert stepper.play()
    assert stepper.is_playing

    clock.now = 0.5
    assert not stepper.tick()
    assert stepper.current_idx == -1

    clock.now = 1.0
    assert stepper.tick()
    assert stepper.current_idx == 0


def test_tick_advances_once_per_deadline(stepper):
    stepper.play(now=0)

    assert stepper.tick(now=10)
    assert stepper.current_idx == 0
    assert not stepper.tick(now=10.5)
    assert stepper.tick(now=11)
    assert stepper.current_idx == 1


def test_playback_finishes_at_last_step(stepper):
    stepper.play(now=0)
    for t in (1, 2, 3):
        assert stepper.tick(now=t)

    assert stepper.is_finished
    assert stepper.current_idx == 2
    assert not stepper.has_pending_advance
    assert not stepper.tick(now=100)
    assert not stepper.play(now=100)


def test_stepping_onto_the_last_step_finishes(stepper):
    for _ in range(3):
        stepper.next_step()

    assert stepper.is_finished
    assert not stepper.next_step()
    assert stepper.is_finished
    assert not stepper.play(now=0)


def test_stepping_back_from_the_end_pauses(stepper):
    stepper.goto_step(2)
    assert stepper.is_finished

    assert stepper.prev_step()
    assert stepper.state == StepperState.PAUSED
    assert stepper.play(now=0)


def test_pause_cancels_pending_advance(stepper):
    stepper.play(now=0)
    stepper.pause()

    assert stepper.state == StepperState.PAUSED
    assert not stepper.tick(now=5)
    assert stepper.current_idx == -1


@pytest.mark.parametrize("move, expected", [
    (lambda s: s.next_step(),    StepperState.PAUSED),
    (lambda s: s.prev_step(),    StepperState.PAUSED),
    (lambda s: s.goto_step(1),   StepperState.PAUSED),
    (lambda s: s.rewind(),       StepperState.PAUSED),
    (lambda s: s.jump_to_end(),  StepperState.FINISHED),
])
def test_manual_moves_stop_playback(stepper, move, expected):
    stepper.play(now=0)
    move(stepper)

    assert stepper.state == expected
    assert not stepper.has_pending_advance
    index = stepper.current_idx
    assert not stepper.tick(now=50)
    assert stepper.current_idx == index


def test_load_drops_pending_advance(stepper):
    stepper.play(now=0)
    stepper.load(trace(2))

    assert stepper.state == StepperState.PAUSED
    assert not stepper.tick(now=5)


def test_toggle_play(stepper):
    stepper.toggle_play(now=0)
    assert stepper.is_playing
    stepper.toggle_play(now=0)
    assert stepper.state == StepperState.PAUSED


def test_speed_presets(stepper):
    stepper.set_speed("fast")
    assert stepper.speed == SPEED_PRESETS["fast"]
    with pytest.raises(ValueError):
        stepper.set_speed("warp")

    stepper.set_speed_value(0)
    assert stepper.speed == MIN_SPEED


def test_on_step_fires_for_each_shown_step(clock):
    seen = []
    s = Stepper(on_step=seen.append, clock=clock)
    steps = trace(2)
    s.load(steps)
    s.next_step()
    s.next_step()
    s.rewind()

    assert seen == list(steps)


def test_reset_returns_to_idle(stepper):
    stepper.next_step()
    stepper.reset()

    assert stepper.state == StepperState.IDLE
    assert stepper.steps == ()
    assert stepper.current_idx == -1


def test_to_dict(stepper):
    stepper.next_step()
    data = stepper.to_dict()

    assert data["state"] == "paused"
    assert data["index"] == 0
    assert data["total_steps"] == 3
    assert data["overlay"]["message"] == "step 0"
