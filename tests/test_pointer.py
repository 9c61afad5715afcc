"""Tests for pointer tracking."""

import pytest

from liquidwarp.pointer import PointerState, PointerTracker


def test_pointer_starts_at_rest():
    """A fresh tracker has every field at zero."""
    tracker = PointerTracker()

    assert tracker.state == PointerState(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


def test_move_normalises_position():
    """Event coordinates are divided by the viewport size."""
    tracker = PointerTracker()
    tracker.on_pointer_move(200, 150, 800, 600)

    assert tracker.x == 0.25
    assert tracker.y == 0.25


def test_velocity_is_delta_from_previous_event():
    """Velocity is current minus previous position, then prev is overwritten."""
    tracker = PointerTracker()
    tracker.on_pointer_move(200, 150, 800, 600)
    tracker.on_pointer_move(400, 150, 800, 600)

    s = tracker.state
    assert s.v_x == pytest.approx(0.25)
    assert s.v_y == pytest.approx(0.0)
    assert s.prev_x == 0.5
    assert s.prev_y == 0.25


def test_moving_left_and_up_gives_negative_velocity():
    """Screen-space directions carry through to the velocity sign."""
    tracker = PointerTracker()
    tracker.on_pointer_move(400, 300, 800, 600)
    tracker.on_pointer_move(300, 200, 800, 600)

    assert tracker.v_x < 0
    assert tracker.v_y < 0


def test_out_of_viewport_coordinates_are_accepted():
    """Positions outside the viewport map outside [0, 1] without error."""
    tracker = PointerTracker()
    tracker.on_pointer_move(-80, 1200, 800, 600)

    assert tracker.x == pytest.approx(-0.1)
    assert tracker.y == pytest.approx(2.0)


def test_decay_velocity_multiplies_by_point_nine():
    """Each decay scales both velocity components by 0.9."""
    tracker = PointerTracker()
    tracker.on_pointer_move(400, 300, 800, 600)

    tracker.decay_velocity()
    assert tracker.v_x == pytest.approx(0.45)
    assert tracker.v_y == pytest.approx(0.45)

    tracker.decay_velocity()
    assert tracker.v_x == pytest.approx(0.405)


def test_decay_leaves_position_untouched():
    """Decay only affects velocity."""
    tracker = PointerTracker()
    tracker.on_pointer_move(400, 300, 800, 600)
    tracker.decay_velocity()

    assert tracker.x == 0.5
    assert tracker.state.prev_x == 0.5


def test_tracker_wraps_given_state():
    """A tracker mutates the state object it was handed."""
    state = PointerState()
    tracker = PointerTracker(state)
    tracker.on_pointer_move(80, 60, 800, 600)

    assert state.x == pytest.approx(0.1)
