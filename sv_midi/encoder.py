"""sv_midi.encoder

Builds the track header and delta-encodes the sequenced body.

This is the only place absolute ticks are turned into deltas; after it the
track is a self-contained list of (delta, event) pairs.
"""
import logging
from itertools import accumulate
from typing import List, Sequence

from .channels import ChannelAssignment
from .config import ExportConfig
from .conversion_result import ConversionResult
from .diagnostics import DiagnosticCollector, DiagnosticKind
from .events import (AbsoluteEvent, ChannelPrefix, ControlChange, EndOfTrack, InstrumentName,
                     ProgramChange, Tempo, TrackEvent)
from .exceptions import SequencingError
from .resolver import LayerResolver
from .tables import CONTROLLER_PAN, CONTROLLER_VOLUME, pan_controller_value, program_for
from .timebase import tempo_microseconds

logger = logging.getLogger(__name__)


def encode_deltas(events: Sequence[AbsoluteEvent], trim_leading_silence: bool = False) -> List[TrackEvent]:
    """Convert sequenced absolute events to delta-timed track events.

    Args:
        events: Events in sequenced (non-decreasing tick) order
        trim_leading_silence: Start the first event at delta 0 instead of its
            absolute tick

    Returns:
        One TrackEvent per input event

    Raises:
        SequencingError: If the ticks ever decrease
    """
    body: List[TrackEvent] = []
    previous = None
    for event in events:
        if previous is None:
            delta = 0 if trim_leading_silence else event.tick
        else:
            delta = event.tick - previous
            if delta < 0:
                raise SequencingError(f"event at tick {event.tick} follows an event at tick {previous}")
        body.append(TrackEvent(delta=delta, event=event.payload))
        previous = event.tick
    return body


def accumulate_ticks(track_events: Sequence[TrackEvent]) -> List[int]:
    """Re-accumulate deltas into absolute ticks (the inverse of encode_deltas)."""
    return list(accumulate(e.delta for e in track_events))


class TrackAssembler:
    """Assembles the single output track.

    Attributes:
        resolver: Used to fetch the play parameters of each note layer.
        config: Tempo, resolution and leading-silence setting.
        diagnostics: Collector receiving instrument-name warnings.
    """

    def __init__(self, resolver: LayerResolver, config: ExportConfig, diagnostics: DiagnosticCollector) -> None:
        self.resolver = resolver
        self.config = config
        self.diagnostics = diagnostics

    def build_header(self, assignments: Sequence[ChannelAssignment]) -> List[TrackEvent]:
        """Emit the tempo and per-channel setup events.

        The percussion channel gets no setup of its own.

        Raises:
            DocumentError: If a note layer has no play parameters
        """
        header = [TrackEvent(0, Tempo(tempo_microseconds(self.config.bpm)))]

        for assignment in assignments:
            channel, layer = assignment.channel, assignment.layer
            name = layer.display_name
            params = self.resolver.play_parameters_for(layer)

            if not name.isascii():
                self.diagnostics.add(
                    DiagnosticKind.NON_ASCII_INSTRUMENT_NAME,
                    f"non-ASCII instrument name '{name.encode('unicode_escape').decode('ascii')}'; "
                    f"it may be mishandled by other music software",
                    layer=name)

            header.append(TrackEvent(0, ChannelPrefix(channel)))
            header.append(TrackEvent(0, InstrumentName(name.encode('utf-8'))))
            header.append(TrackEvent(0, ProgramChange(channel, program_for(params.clip_id))))
            if params.mute:
                header.append(TrackEvent(0, ControlChange(channel, CONTROLLER_VOLUME, 0)))
            # TODO: map params.gain (0.0-4.0, default 1.0) to a volume controller value
            header.append(TrackEvent(0, ControlChange(channel, CONTROLLER_PAN, pan_controller_value(params.pan))))

        return header

    def encode_body(self, events: Sequence[AbsoluteEvent]) -> List[TrackEvent]:
        return encode_deltas(events, trim_leading_silence=self.config.trim_leading_silence)

    def assemble(self, assignments: Sequence[ChannelAssignment], events: Sequence[AbsoluteEvent]) -> ConversionResult:
        """Build the complete track.

        Args:
            assignments: Channel assignments of the kept note layers
            events: Validated events in sequenced order

        Returns:
            ConversionResult holding header, body, end marker and diagnostics
        """
        header = self.build_header(assignments)
        body = self.encode_body(events)
        logger.info("assembled track: %d header events, %d body events", len(header), len(body))
        return ConversionResult(
            ticks_per_beat=self.config.ticks_per_beat,
            bpm=self.config.bpm,
            header=header,
            body=body,
            end_of_track=TrackEvent(0, EndOfTrack()),
            diagnostics=self.diagnostics.to_list(),
            channel_assignments={a.layer.display_name: a.channel for a in assignments},
        )
