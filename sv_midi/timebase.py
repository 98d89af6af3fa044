"""sv_midi.timebase

Conversions between sample frames, seconds and MIDI ticks.

Ticks are always obtained by truncation: a duration that is non-zero in
seconds but shorter than one tick collapses to zero ticks, which is what the
"insufficient resolution" diagnostic reports.
"""
from fractions import Fraction
import math

from .validators import validate_sample_rate, validate_tempo, validate_ticks_per_beat


def frames_to_seconds(frame: int, sample_rate: int) -> float:
    """Convert a sample frame offset to seconds.

    Args:
        frame: Frame offset relative to the model start
        sample_rate: Model sample rate in Hz

    Returns:
        Elapsed time in seconds

    Raises:
        ValidationError: If sample_rate is not positive

    Example:
        >>> frames_to_seconds(24000, 48000)
        0.5
    """
    validate_sample_rate(sample_rate)
    return frame / sample_rate


def seconds_to_ticks(seconds: float, bpm: float, ticks_per_beat: int) -> int:
    """Convert seconds to an absolute tick count at a fixed tempo.

    Args:
        seconds: Elapsed time in seconds
        bpm: Tempo in beats per minute
        ticks_per_beat: MIDI resolution

    Returns:
        ``floor(seconds * bpm / 60 * ticks_per_beat)``

    Example:
        >>> seconds_to_ticks(0.5, 120, 1024)
        1024
    """
    validate_tempo(bpm)
    validate_ticks_per_beat(ticks_per_beat)
    return math.floor(seconds * (bpm / 60.0) * ticks_per_beat)


def frame_to_ticks(frame: int, sample_rate: int, bpm: float, ticks_per_beat: int) -> int:
    """Convert a frame offset straight to ticks without float rounding error.

    Same result as ``seconds_to_ticks(frames_to_seconds(frame, sample_rate), ...)``
    evaluated in exact rational arithmetic, so a frame that lands exactly on
    a tick boundary never truncates to the tick before it.

    Args:
        frame: Frame offset relative to the model start
        sample_rate: Model sample rate in Hz
        bpm: Tempo in beats per minute
        ticks_per_beat: MIDI resolution

    Returns:
        Absolute tick count
    """
    validate_sample_rate(sample_rate)
    validate_tempo(bpm)
    validate_ticks_per_beat(ticks_per_beat)
    exact = Fraction(frame) / Fraction(sample_rate) * Fraction(bpm) / 60 * ticks_per_beat
    return math.floor(exact)


def tempo_microseconds(bpm: float) -> int:
    """Return the tempo meta-event value (microseconds per beat) for a bpm."""
    validate_tempo(bpm)
    return round(60_000_000 / bpm)


def format_seconds(value: float) -> str:
    """Format seconds as a signed clock string for diagnostics.

    Example:
        >>> format_seconds(65.5)
        '+1:05.500'
        >>> format_seconds(3725.25)
        '+1:02:05.250'
    """
    sign = '-' if math.copysign(1.0, value) < 0 else '+'
    value = abs(value)
    days, value = divmod(value, 86400.0)
    hours, value = divmod(value, 3600.0)
    minutes, secs = divmod(value, 60.0)
    days, hours, minutes = int(days), int(hours), int(minutes)

    if days == 0 and hours == 0:
        return f"{sign}{minutes}:{secs:06.3f}"
    if days == 0:
        return f"{sign}{hours}:{minutes:02d}:{secs:06.3f}"
    return f"{sign}{days}:{hours:02d}:{minutes:02d}:{secs:06.3f}"
