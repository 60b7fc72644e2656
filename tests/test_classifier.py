import pytest

from conftest import make_hand
from treecard_hand.classifier import classify, classify_landmarks
from treecard_hand.types import FingerState, GestureLabel, ThumbDirection


@pytest.mark.parametrize(
    "shape, expected",
    [
        ("open_palm", GestureLabel.OPEN_PALM),
        ("fist", GestureLabel.CLOSED_FIST),
        ("thumb_up", GestureLabel.THUMB_UP),
        ("thumb_down", GestureLabel.THUMB_DOWN),
        ("victory", GestureLabel.VICTORY),
        ("pointing", GestureLabel.POINTING_UP),
        ("i_love_you", GestureLabel.I_LOVE_YOU),
        ("pinch", GestureLabel.PINCH),
        ("middle_ring", GestureLabel.NONE),
    ],
)
def test_classify_synthetic_hands(shape, expected):
    assert classify_landmarks(make_hand(shape)) is expected


@pytest.mark.parametrize("cx, cy, scale", [(0.2, 0.5, 0.08), (0.5, 0.9, 0.12), (0.8, 0.6, 0.15)])
def test_open_palm_and_fist_anywhere_in_frame(cx, cy, scale):
    assert classify_landmarks(make_hand("open_palm", cx, cy, scale)) is GestureLabel.OPEN_PALM
    assert classify_landmarks(make_hand("fist", cx, cy, scale)) is GestureLabel.CLOSED_FIST


def test_classification_is_pure():
    hand = make_hand("victory")
    assert classify_landmarks(hand) is classify_landmarks(hand)
    classify_landmarks(make_hand("pinch"))
    assert classify_landmarks(hand) is GestureLabel.VICTORY


def test_no_hand_is_none():
    assert classify_landmarks(None) is GestureLabel.NONE


def _fingers(thumb=False, index=False, middle=False, ring=False, pinky=False):
    return FingerState(thumb, index, middle, ring, pinky)


def test_pinch_beats_open_palm():
    all_open = _fingers(True, True, True, True, True)
    assert classify(all_open, 0.01, ThumbDirection.LEVEL) is GestureLabel.PINCH
    assert classify(all_open, 0.2, ThumbDirection.LEVEL) is GestureLabel.OPEN_PALM


def test_pinch_needs_middle_finger():
    collapsed = _fingers(True, True, False, False, False)
    assert classify(collapsed, 0.01, ThumbDirection.LEVEL) is not GestureLabel.PINCH


def test_four_of_five_is_not_open_palm():
    assert classify(_fingers(False, True, True, True, True), 0.3, ThumbDirection.LEVEL) is GestureLabel.NONE


def test_level_thumb_falls_back_to_fist():
    assert classify(_fingers(thumb=True), 0.3, ThumbDirection.LEVEL) is GestureLabel.CLOSED_FIST


def test_fist_rule_precedes_pointing():
    # One finger out with the thumb tucked is still a fist.
    assert classify(_fingers(index=True), 0.3, ThumbDirection.LEVEL) is GestureLabel.CLOSED_FIST
    assert classify_landmarks(make_hand("pointing_tucked")) is GestureLabel.CLOSED_FIST
    assert classify(_fingers(thumb=True, index=True), 0.3, ThumbDirection.UP) is GestureLabel.POINTING_UP


def test_pointing_ignores_thumb():
    # Thumb+index "L" shape; the thumb-tucked variant is taken by the fist rule.
    assert classify_landmarks(make_hand("pointing")) is GestureLabel.POINTING_UP
    for direction in ThumbDirection:
        assert classify(_fingers(thumb=True, index=True), 0.3, direction) is GestureLabel.POINTING_UP


def test_victory_ignores_thumb():
    assert classify(_fingers(True, True, True), 0.3, ThumbDirection.LEVEL) is GestureLabel.VICTORY
    assert classify(_fingers(False, True, True), 0.3, ThumbDirection.LEVEL) is GestureLabel.VICTORY
