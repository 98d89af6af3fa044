"""sv_midi.writer

Serializes a ConversionResult to a type 0 Standard MIDI File with mido.

mido encodes meta-event text as latin-1. Text and instrument names are UTF-8
bytes here, so they are decoded as latin-1 before handing them over, which
makes mido write the original bytes unchanged.
"""
from typing import Union

import mido

from .conversion_result import ConversionResult
from .events import (ChannelPrefix, ControlChange, EndOfTrack, InstrumentName, NoteOff, NoteOn,
                     ProgramChange, Tempo, Text, TrackEvent)
from .exceptions import ExportError


def _bytes_to_meta_text(data: bytes) -> str:
    return data.decode('latin-1')


def to_mido_message(track_event: TrackEvent) -> Union[mido.Message, mido.MetaMessage]:
    """Convert one track event to the equivalent mido message.

    Args:
        track_event: Delta-timed event

    Returns:
        mido Message or MetaMessage with ``time`` set to the delta

    Raises:
        ExportError: If the event type is unknown
    """
    event, delta = track_event.event, track_event.delta

    if isinstance(event, NoteOn):
        return mido.Message('note_on', channel=event.channel, note=event.key, velocity=event.velocity, time=delta)
    if isinstance(event, NoteOff):
        return mido.Message('note_off', channel=event.channel, note=event.key, velocity=event.velocity, time=delta)
    if isinstance(event, ProgramChange):
        return mido.Message('program_change', channel=event.channel, program=event.program, time=delta)
    if isinstance(event, ControlChange):
        return mido.Message('control_change', channel=event.channel, control=event.controller,
                            value=event.value, time=delta)
    if isinstance(event, Tempo):
        return mido.MetaMessage('set_tempo', tempo=event.microseconds_per_beat, time=delta)
    if isinstance(event, ChannelPrefix):
        return mido.MetaMessage('channel_prefix', channel=event.channel, time=delta)
    if isinstance(event, InstrumentName):
        return mido.MetaMessage('instrument_name', name=_bytes_to_meta_text(event.data), time=delta)
    if isinstance(event, Text):
        return mido.MetaMessage('text', text=_bytes_to_meta_text(event.data), time=delta)
    if isinstance(event, EndOfTrack):
        return mido.MetaMessage('end_of_track', time=delta)
    raise ExportError(f"cannot convert {type(event).__name__} to a MIDI message")


def build_midi_file(result: ConversionResult) -> mido.MidiFile:
    """Build a single-track mido.MidiFile from a conversion result."""
    midi_file = mido.MidiFile(type=0, ticks_per_beat=result.ticks_per_beat)
    track = mido.MidiTrack()
    midi_file.tracks.append(track)
    for track_event in result.track:
        track.append(to_mido_message(track_event))
    return midi_file


def write_midi_file(result: ConversionResult, output_path: str) -> None:
    """Write a conversion result to a .mid file.

    Args:
        result: ConversionResult instance
        output_path: Path to output MIDI file

    Raises:
        ExportError: If the file cannot be built or written
    """
    try:
        build_midi_file(result).save(output_path)
    except (OSError, ValueError) as e:
        raise ExportError(f"Failed to write MIDI file {output_path}: {e}")
