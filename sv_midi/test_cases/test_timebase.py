import pytest

from sv_midi import ConfigurationError, ValidationError
from sv_midi.timebase import format_seconds, frame_to_ticks, frames_to_seconds, seconds_to_ticks, tempo_microseconds


def test_half_second_at_120_bpm_is_one_beat():
    seconds = frames_to_seconds(24000, 48000)
    assert seconds == 0.5
    assert seconds_to_ticks(seconds, 120, 1024) == 1024
    assert frame_to_ticks(24000, 48000, 120, 1024) == 1024


def test_ticks_truncate_instead_of_rounding():
    # 1 frame at 48 kHz is ~0.04 ticks, 47 frames ~1.98 ticks
    assert frame_to_ticks(1, 48000, 120, 1024) == 0
    assert frame_to_ticks(47, 48000, 120, 1024) == 2
    assert seconds_to_ticks(0.999, 60, 1) == 0


def test_exact_boundary_is_not_lost_to_float_error():
    assert frame_to_ticks(29, 100, 60, 100) == 29
    assert frame_to_ticks(44100 * 7, 44100, 97.5, 960) == 10920


def test_each_model_uses_its_own_sample_rate():
    assert frame_to_ticks(44100, 44100, 120, 480) == frame_to_ticks(48000, 48000, 120, 480) == 960


@pytest.mark.parametrize('sample_rate', [0, -44100])
def test_non_positive_sample_rate_is_fatal(sample_rate):
    with pytest.raises(ValidationError):
        frames_to_seconds(100, sample_rate)
    with pytest.raises(ConfigurationError):
        frame_to_ticks(100, sample_rate, 120, 1024)


def test_non_positive_tempo_and_resolution_are_fatal():
    with pytest.raises(ValidationError):
        seconds_to_ticks(1.0, 0, 1024)
    with pytest.raises(ValidationError):
        seconds_to_ticks(1.0, 120, 0)
    with pytest.raises(ValidationError):
        tempo_microseconds(-5)


def test_tempo_microseconds():
    assert tempo_microseconds(120) == 500000
    assert tempo_microseconds(90) == 666667


def test_format_seconds():
    assert format_seconds(0.5) == '+0:00.500'
    assert format_seconds(65.5) == '+1:05.500'
    assert format_seconds(3725.25) == '+1:02:05.250'
    assert format_seconds(90061.0) == '+1:01:01:01.000'
    assert format_seconds(-1.5) == '-0:01.500'
