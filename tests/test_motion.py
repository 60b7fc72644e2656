import pytest

from treecard_hand.config import GestureConfig
from treecard_hand.events import MoveEvent, PalmMoveEvent, ZoomEvent
from treecard_hand.motion import HISTORY_LEN, MotionState, decay_motion, pan_delta, steer_speed, translate_motion
from treecard_hand.stabilizer import StabilizerResult
from treecard_hand.types import FingerState, GestureLabel, HandFeatures, ThumbDirection


THRESHOLD = 0.0078125  # exact in binary


def _features(center=(0.5, 0.5), scale=0.1):
    return HandFeatures(
        fingers=FingerState(True, True, True, True, True),
        pinch_distance=0.3,
        palm_width=0.09,
        palm_center=center,
        hand_scale=scale,
        thumb_direction=ThumbDirection.LEVEL,
        pinch_point=(0.4, 0.4),
    )


def _result(label=GestureLabel.OPEN_PALM, stable=True):
    return StabilizerResult(label=label, streak=5 if stable else 1, stable=stable, just_stabilized=False)


def _of(events, kind):
    return [e for e in events if isinstance(e, kind)]


def test_pan_delta_threshold_is_exclusive():
    assert pan_delta((0.5, 0.5), (0.5078125, 0.5), THRESHOLD) is None
    assert pan_delta((0.5, 0.5), (0.5, 0.4921875), THRESHOLD) is None
    assert pan_delta((0.5, 0.5), (0.515625, 0.5), THRESHOLD) == (-0.015625, 0.0)


def test_pan_is_mirrored_and_scaled():
    config = GestureConfig(min_pan_delta=THRESHOLD, pan_sensitivity=25.0)
    state = MotionState(last_palm_position=(0.5, 0.5), last_hand_scale=0.1)
    events = translate_motion(state, _features((0.515625, 0.5)), _result(), config)
    assert _of(events, PalmMoveEvent) == [PalmMoveEvent(-0.015625 * 25.0, 0.0)]


def test_pan_at_exact_threshold_does_not_fire():
    config = GestureConfig(min_pan_delta=THRESHOLD)
    state = MotionState(last_palm_position=(0.5, 0.5), last_hand_scale=0.1)
    events = translate_motion(state, _features((0.5078125, 0.5)), _result(), config)
    assert _of(events, PalmMoveEvent) == []


def test_history_is_bounded():
    state = MotionState()
    for i in range(10):
        translate_motion(state, _features((0.1 * i, 0.5)), _result(), GestureConfig())
        assert len(state.position_history) <= HISTORY_LEN
    assert len(state.position_history) == HISTORY_LEN


def test_first_control_frame_sets_baselines_only():
    state = MotionState()
    events = translate_motion(state, _features((0.3, 0.3), scale=0.2), _result(), GestureConfig())
    assert _of(events, PalmMoveEvent) == []
    assert _of(events, ZoomEvent) == []
    assert state.last_palm_position == (0.3, 0.3)
    assert state.last_hand_scale == 0.2


def test_zoom_uses_smoothed_scale():
    config = GestureConfig(zoom_sensitivity=10.0)
    state = MotionState(last_palm_position=(0.5, 0.5), last_hand_scale=0.1)
    events = translate_motion(state, _features(scale=0.2), _result(), config)
    (zoom,) = _of(events, ZoomEvent)
    assert zoom.delta == pytest.approx(0.01 * 10.0)
    assert state.last_hand_scale == pytest.approx(0.11)


def test_no_control_outside_open_palm():
    state = MotionState(last_palm_position=(0.5, 0.5), last_hand_scale=0.1)
    events = translate_motion(state, _features((0.9, 0.9), scale=0.3), _result(GestureLabel.CLOSED_FIST), GestureConfig())
    assert _of(events, PalmMoveEvent) == []
    assert _of(events, ZoomEvent) == []
    assert state.last_palm_position is None
    assert state.last_hand_scale is None


def test_unstable_open_palm_does_not_pan():
    state = MotionState(last_palm_position=(0.5, 0.5))
    events = translate_motion(state, _features((0.9, 0.5)), _result(stable=False), GestureConfig())
    assert _of(events, PalmMoveEvent) == []


def test_photo_locked_suppresses_emission_but_tracks():
    config = GestureConfig(photo_locked=True)
    state = MotionState(last_palm_position=(0.5, 0.5), last_hand_scale=0.1)
    events = translate_motion(state, _features((0.6, 0.5), scale=0.2), _result(), config)
    assert _of(events, PalmMoveEvent) == []
    assert _of(events, ZoomEvent) == []
    assert state.last_palm_position == (0.6, 0.5)
    assert state.last_hand_scale == pytest.approx(0.11)


def test_pan_leaves_momentum_that_decays():
    config = GestureConfig(pan_sensitivity=25.0, momentum_gain=0.1, momentum_decay=0.9)
    state = MotionState(last_palm_position=(0.5, 0.5), last_hand_scale=0.1)
    events = translate_motion(state, _features((0.51, 0.5)), _result(), config)
    assert _of(events, MoveEvent) == [MoveEvent(0.0)]
    assert state.rotation_momentum == pytest.approx(-0.025)

    events = translate_motion(state, _features((0.51, 0.5)), _result(GestureLabel.CLOSED_FIST), config)
    (move,) = _of(events, MoveEvent)
    assert move.speed == pytest.approx(-0.0225)

    (move,) = decay_motion(state, config)
    assert move.speed == pytest.approx(-0.02025)


def test_momentum_hard_reset_on_pinch_and_selection():
    state = MotionState(rotation_momentum=0.5)
    events = translate_motion(state, _features(), _result(GestureLabel.PINCH, stable=False), GestureConfig())
    assert _of(events, MoveEvent) == [MoveEvent(0.0)]

    state = MotionState(rotation_momentum=0.5)
    events = translate_motion(state, _features(), _result(GestureLabel.VICTORY), GestureConfig(photo_selected=True))
    assert _of(events, MoveEvent) == [MoveEvent(0.0)]

    state = MotionState(rotation_momentum=0.5)
    assert decay_motion(state, GestureConfig(photo_selected=True)) == [MoveEvent(0.0)]


def test_decay_snaps_to_zero_and_drops_baselines():
    state = MotionState(last_palm_position=(0.5, 0.5), last_hand_scale=0.1, rotation_momentum=1e-4)
    state.position_history.append((0.5, 0.5))
    assert decay_motion(state, GestureConfig()) == [MoveEvent(0.0)]
    assert state.last_palm_position is None
    assert state.last_hand_scale is None
    assert len(state.position_history) == 0


def test_thumb_zoom_is_opt_in():
    state = MotionState()
    events = translate_motion(state, _features(), _result(GestureLabel.THUMB_UP), GestureConfig())
    assert _of(events, ZoomEvent) == []

    config = GestureConfig(thumb_zoom_step=0.5)
    assert _of(translate_motion(state, _features(), _result(GestureLabel.THUMB_UP), config), ZoomEvent) == [ZoomEvent(-0.5)]
    assert _of(translate_motion(state, _features(), _result(GestureLabel.THUMB_DOWN), config), ZoomEvent) == [ZoomEvent(0.5)]


def test_steer_speed_dead_zone_and_gain():
    config = GestureConfig(steer_gain=0.1, steer_dead_zone=0.01)
    assert steer_speed((0.2, 0.5), config) == pytest.approx(0.03)
    assert steer_speed((0.8, 0.5), config) == pytest.approx(-0.03)
    assert steer_speed((0.45, 0.5), config) == 0.0
    assert steer_speed((0.0, 0.5), GestureConfig(steer_gain=0.0)) == 0.0


def test_off_center_hand_replaces_momentum_outside_control():
    state = MotionState(rotation_momentum=-0.025)
    events = translate_motion(state, _features((0.2, 0.5)), _result(GestureLabel.CLOSED_FIST), GestureConfig())
    (move,) = _of(events, MoveEvent)
    assert move.speed == pytest.approx(0.03)

    state = MotionState(rotation_momentum=-0.025)
    events = translate_motion(state, _features((0.2, 0.5)), _result(stable=False), GestureConfig())
    (move,) = _of(events, MoveEvent)
    assert move.speed == pytest.approx(-0.0225)
