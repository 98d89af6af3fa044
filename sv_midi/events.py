"""sv_midi.events

Event records passed between the projector, sequencer and encoder.

Channel events (``NoteOn``, ``NoteOff``, ``ProgramChange``, ``ControlChange``)
and meta events (``Tempo``, ``ChannelPrefix``, ``InstrumentName``, ``Text``,
``EndOfTrack``) are plain frozen dataclasses; :mod:`sv_midi.writer` turns
them into ``mido`` messages.
"""
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class NoteOn:
    channel: int
    key: int
    velocity: int


@dataclass(frozen=True)
class NoteOff:
    channel: int
    key: int
    velocity: int


@dataclass(frozen=True)
class Text:
    data: bytes


@dataclass(frozen=True)
class Tempo:
    microseconds_per_beat: int


@dataclass(frozen=True)
class ChannelPrefix:
    channel: int


@dataclass(frozen=True)
class InstrumentName:
    data: bytes


@dataclass(frozen=True)
class ProgramChange:
    channel: int
    program: int


@dataclass(frozen=True)
class ControlChange:
    channel: int
    controller: int
    value: int


@dataclass(frozen=True)
class EndOfTrack:
    pass


Payload = Union[NoteOn, NoteOff, Text]
TrackEventKind = Union[NoteOn, NoteOff, Text, Tempo, ChannelPrefix, InstrumentName,
                       ProgramChange, ControlChange, EndOfTrack]

# NoteOn before NoteOff before everything else at an identical (tick, anchor)
_CLASS_RANKS = {NoteOn: 0, NoteOff: 1}


def class_rank(payload) -> int:
    return _CLASS_RANKS.get(type(payload), 2)


@dataclass(frozen=True)
class AbsoluteEvent:
    """An event placed at an absolute tick.

    Attributes:
        tick: Absolute tick of the event.
        anchor_tick: Tick of the event that opened the logical note. Equal to
            ``tick`` for NoteOn and Text, the paired NoteOn's tick for NoteOff.
        seconds: Source position in seconds, used only for diagnostics since
            the tick conversion is lossy.
        payload: NoteOn, NoteOff or Text.
    """

    tick: int
    anchor_tick: int
    seconds: float
    payload: Payload

    @property
    def sort_key(self):
        return (self.tick, self.anchor_tick, class_rank(self.payload))


@dataclass(frozen=True)
class TrackEvent:
    """An event with a delta time relative to the previous event of the track."""

    delta: int
    event: TrackEventKind
