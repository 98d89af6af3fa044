"""sv_midi.tables

Fixed MIDI constants and the clip-identifier lookup tables.

Play parameters name their sound by a clip identifier. Note layers map it to
a General MIDI program, instant layers to a key on the percussion channel.
Unknown identifiers fall back to the ``DEFAULT_*`` entries.
"""
from types import MappingProxyType
from typing import Mapping

PERCUSSION_CHANNEL = 9
MELODIC_CHANNELS = tuple(c for c in range(16) if c != PERCUSSION_CHANNEL)

VELOCITY_DEFAULT = 64
VELOCITY_RELEASE = 0

CONTROLLER_VOLUME = 7
CONTROLLER_PAN = 10

DEFAULT_MAX_POLYPHONY = 24

DEFAULT_PROGRAM = 0
DEFAULT_PERCUSSION_KEY = 0

PROGRAMS: Mapping[str, int] = MappingProxyType({
    'piano': 0,
    'elecpiano': 5,
    'organ': 17,
    'beep': 80,
})

PERCUSSION_KEYS: Mapping[str, int] = MappingProxyType({
    'bass': 35,
    'bounce': 27,
    'clap': 39,
    'click': 33,
    'cowbell': 56,
    'hihat': 42,
    'kick': 41,
    'silent': 0,
    'snare': 38,
    'stick': 30,
    'strike': 49,
    'tap': 32,
})


def program_for(clip_id: str) -> int:
    """Return the program number for a clip identifier (0 when unknown)."""
    return PROGRAMS.get(clip_id, DEFAULT_PROGRAM)


def percussion_key_for(clip_id: str) -> int:
    """Return the percussion key for a clip identifier (0 when unknown)."""
    return PERCUSSION_KEYS.get(clip_id, DEFAULT_PERCUSSION_KEY)


def pan_controller_value(pan: float) -> int:
    """Map a pan position in [-1, 1] to a pan controller value in [0, 127].

    Example:
        >>> pan_controller_value(0.0)
        64
        >>> pan_controller_value(1.0)
        127
    """
    return max(0, min(127, int(round(64 + pan * 63.5))))
