from PIL import Image
import pytest

from core.models import RenderConfig
from core.services.fade_sequencer import FadeSequencer, centered_position, ramp_sizes

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


@pytest.fixture
def overlay():
    return Image.new("RGB", (70, 70), WHITE)


@pytest.fixture
def sequencer():
    return FadeSequencer()


def test_centered_position(base_frame, overlay):
    assert centered_position(base_frame, overlay) == (15, 15)
    assert centered_position(base_frame, Image.new("RGB", (71, 30))) == (14, 35)


def test_ramp_sizes_grow_by_fixed_step():
    assert ramp_sizes(70, 40, 5) == [(10, 10), (22, 16), (34, 22), (46, 28), (58, 34)]
    assert ramp_sizes(70, 70, 0) == []


def test_ramp_frames_are_independent_snapshots(base_frame, overlay, sequencer):
    frames = sequencer.ramp_frames(base_frame, overlay, (15, 15), 40)

    assert len(frames) == 40
    assert frames[0].tobytes() != frames[1].tobytes()
    # first frame only has the 10x10 start size drawn
    assert frames[0].getpixel((24, 24)) == WHITE
    assert frames[0].getpixel((26, 26)) == BLACK
    # step is (70 - 10) // 40 = 1, so the last frame is 49x49
    assert frames[-1].getpixel((63, 63)) == WHITE
    assert frames[-1].getpixel((65, 65)) == BLACK
    assert base_frame.getpixel((20, 20)) == BLACK


def test_no_fade_emits_identical_frames(base_frame, overlay, sequencer):
    frames = sequencer.sequence(base_frame, overlay, RenderConfig(1000, 10))

    assert len(frames) == 10
    assert all(frame is frames[0] for frame in frames)
    assert frames[0].getpixel((15, 15)) == WHITE
    assert frames[0].getpixel((84, 84)) == WHITE
    assert frames[0].getpixel((14, 14)) == BLACK


def test_no_fade_with_zero_frames_emits_nothing(base_frame, overlay, sequencer):
    assert sequencer.sequence(base_frame, overlay, RenderConfig(0, 30)) == []


@pytest.mark.parametrize(
    "millis, fps, expected",
    [(4000, 10, 5 + 30 + 5), (3000, 2, 1 + 4 + 1), (3000, 30, 15 + 60 + 15), (3000, 1, 2)],
)
def test_fade_frame_counts(base_frame, overlay, sequencer, millis, fps, expected):
    assert len(sequencer.sequence(base_frame, overlay, RenderConfig(millis, fps))) == expected


@pytest.mark.parametrize("millis", [3000, 4500, 10000, 60000])
def test_ramp_length_ignores_display_time(millis, sequencer):
    plan = sequencer.plan(RenderConfig(millis, 24))
    assert plan.ramp_frame_count == 12


def test_plan_is_none_below_minimum_display_time(sequencer):
    assert sequencer.plan(RenderConfig(2999, 30)) is None


def test_fade_out_replays_fade_in_reversed(base_frame, overlay, sequencer):
    frames = sequencer.sequence(base_frame, overlay, RenderConfig(4000, 10))
    fade_in, fade_out = frames[:5], frames[-5:]

    assert all(a is b for a, b in zip(fade_in, reversed(fade_out)))
    assert len({id(frame) for frame in fade_in}) == 5


def test_hold_shows_full_size_overlay(base_frame, overlay, sequencer):
    frames = sequencer.sequence(base_frame, overlay, RenderConfig(4000, 10))
    hold = frames[5:35]

    assert all(frame is hold[0] for frame in hold)
    assert hold[0].getpixel((84, 84)) == WHITE
    # the largest ramp frame is 58x58 with a step of (70 - 10) // 5 = 12
    assert frames[4].getpixel((72, 72)) == WHITE
    assert frames[4].getpixel((84, 84)) == BLACK


def test_tiny_overlay_does_not_fail(base_frame, sequencer):
    tiny = Image.new("RGB", (3, 3), WHITE)
    frames = sequencer.sequence(base_frame, tiny, RenderConfig(3000, 10))
    assert len(frames) == 5 + 20 + 5
