"""sv_midi.projector

Turns layer points into absolute-tick events.

Three rules, one per layer type:

- notes layers produce a NoteOn/NoteOff pair per point on the layer's channel;
- time instant layers produce a fixed-length NoteOn/NoteOff pair per point on
  the percussion channel, keyed by the layer's clip identifier;
- text layers produce one Text event per point.

Each NoteOff carries the tick of its NoteOn as ``anchor_tick`` so the
sequencer can close a note before opening the next one at the same tick.
"""
import logging
from typing import List, Sequence

from .channels import ChannelAssignment
from .config import ExportConfig
from .diagnostics import DiagnosticCollector, DiagnosticKind
from .document import Layer, Point
from .events import AbsoluteEvent, NoteOff, NoteOn, Text
from .exceptions import ProjectionError
from .resolver import LayerResolver
from .tables import PERCUSSION_CHANNEL, VELOCITY_DEFAULT, VELOCITY_RELEASE, percussion_key_for
from .timebase import format_seconds, frame_to_ticks, frames_to_seconds

logger = logging.getLogger(__name__)


def _escape(text: str) -> str:
    return text.encode('unicode_escape').decode('ascii')


class EventProjector:
    """Projects resolved layers onto the tick timeline.

    Attributes:
        resolver: Lookup helper over the source document.
        config: Tempo and resolution used for every conversion.
        diagnostics: Collector receiving generation-time warnings.
    """

    def __init__(self, resolver: LayerResolver, config: ExportConfig, diagnostics: DiagnosticCollector) -> None:
        self.resolver = resolver
        self.config = config
        self.diagnostics = diagnostics

    def _ticks(self, frame: int, sample_rate: int) -> int:
        return frame_to_ticks(frame, sample_rate, self.config.bpm, self.config.ticks_per_beat)

    @staticmethod
    def _check_frame(point: Point, layer: Layer) -> None:
        if point.frame < 0:
            raise ProjectionError(
                f"point on {layer.type} layer '{layer.display_name}' has negative frame {point.frame}",
                layer=layer.display_name, frame=point.frame)

    def project_notes_layer(self, layer: Layer, channel: int) -> List[AbsoluteEvent]:
        """Project a notes layer onto a channel.

        Args:
            layer: Layer of type ``notes``
            channel: Assigned MIDI channel

        Returns:
            NoteOn/NoteOff pairs in point order

        Raises:
            ProjectionError: If a point has no value or duration, a negative
                frame or duration, or a value that is not a MIDI key
            DocumentError: If the layer's model or dataset is missing
        """
        model = self.resolver.model_for(layer)
        name = layer.display_name
        events: List[AbsoluteEvent] = []

        for point in self.resolver.points_for(layer):
            self._check_frame(point, layer)
            if point.value is None:
                raise ProjectionError(
                    f"point at frame {point.frame} on notes layer '{name}' has no value",
                    layer=name, frame=point.frame)
            if point.duration is None:
                raise ProjectionError(
                    f"point at frame {point.frame} on notes layer '{name}' has no duration",
                    layer=name, frame=point.frame)
            if point.duration < 0:
                raise ProjectionError(
                    f"point at frame {point.frame} on notes layer '{name}' has negative duration {point.duration}",
                    layer=name, frame=point.frame)
            if not float(point.value).is_integer() or not 0 <= point.value <= 127:
                raise ProjectionError(
                    f"point at frame {point.frame} on notes layer '{name}' has value {point.value} "
                    f"that is not a MIDI key 0-127",
                    layer=name, frame=point.frame)
            key = int(point.value)

            seconds_on = frames_to_seconds(point.frame, model.sample_rate)
            seconds_off = frames_to_seconds(point.frame + point.duration, model.sample_rate)
            tick_on = self._ticks(point.frame, model.sample_rate)
            tick_off = self._ticks(point.frame + point.duration, model.sample_rate)

            # Stray right-clicks while drawing leave such notes behind; they
            # are reported, not removed.
            if point.duration <= 1:
                self.diagnostics.add(
                    DiagnosticKind.COLLAPSED_NOTE,
                    f"collapsed note on notes layer '{_escape(name)}' at {format_seconds(seconds_on)}",
                    layer=name, seconds=seconds_on)

            if tick_on == tick_off:
                self.diagnostics.add(
                    DiagnosticKind.INSUFFICIENT_RESOLUTION,
                    f"insufficient resolution to represent MIDI note on notes layer '{_escape(name)}' "
                    f"at {format_seconds(seconds_on)}",
                    layer=name, seconds=seconds_on)

            events.append(AbsoluteEvent(
                tick=tick_on, anchor_tick=tick_on, seconds=seconds_on,
                payload=NoteOn(channel=channel, key=key, velocity=VELOCITY_DEFAULT)))
            events.append(AbsoluteEvent(
                tick=tick_off, anchor_tick=tick_on, seconds=seconds_off,
                payload=NoteOff(channel=channel, key=key, velocity=VELOCITY_RELEASE)))

        logger.debug("notes layer '%s': %d events on channel %d", name, len(events), channel)
        return events

    def project_instants_layer(self, layer: Layer) -> List[AbsoluteEvent]:
        """Project a time instants layer onto the percussion channel.

        Instants have no duration; each one becomes a note a quarter of a beat
        long.

        Args:
            layer: Layer of type ``timeinstants``

        Returns:
            NoteOn/NoteOff pairs in point order

        Raises:
            DocumentError: If the layer's model, dataset or play parameters
                are missing
        """
        model = self.resolver.model_for(layer)
        key = percussion_key_for(self.resolver.play_parameters_for(layer).clip_id)
        length = self.config.ticks_per_beat // 4
        name = layer.display_name
        events: List[AbsoluteEvent] = []

        for point in self.resolver.points_for(layer):
            self._check_frame(point, layer)
            seconds_on = frames_to_seconds(point.frame, model.sample_rate)
            tick_on = self._ticks(point.frame, model.sample_rate)
            tick_off = tick_on + length

            if tick_on == tick_off:
                self.diagnostics.add(
                    DiagnosticKind.INSUFFICIENT_RESOLUTION,
                    f"insufficient resolution to represent MIDI note on instants layer '{_escape(name)}' "
                    f"at {format_seconds(seconds_on)}",
                    layer=name, seconds=seconds_on)

            events.append(AbsoluteEvent(
                tick=tick_on, anchor_tick=tick_on, seconds=seconds_on,
                payload=NoteOn(channel=PERCUSSION_CHANNEL, key=key, velocity=VELOCITY_DEFAULT)))
            # no real release moment, report the onset
            events.append(AbsoluteEvent(
                tick=tick_off, anchor_tick=tick_on, seconds=seconds_on,
                payload=NoteOff(channel=PERCUSSION_CHANNEL, key=key, velocity=VELOCITY_RELEASE)))

        logger.debug("instants layer '%s': %d events, key %d", name, len(events), key)
        return events

    def project_text_layer(self, layer: Layer) -> List[AbsoluteEvent]:
        """Project a text layer to Text meta events carrying UTF-8 labels.

        Raises:
            DocumentError: If the layer's model or dataset is missing
        """
        model = self.resolver.model_for(layer)
        name = layer.display_name
        events: List[AbsoluteEvent] = []

        for point in self.resolver.points_for(layer):
            self._check_frame(point, layer)
            label = point.label or ''
            seconds = frames_to_seconds(point.frame, model.sample_rate)
            tick = self._ticks(point.frame, model.sample_rate)

            if not label.isascii():
                self.diagnostics.add(
                    DiagnosticKind.NON_ASCII_LABEL,
                    f"non-ASCII label '{_escape(label)}' on text layer '{_escape(name)}' at "
                    f"{format_seconds(seconds)}; it may be mishandled by other music software",
                    layer=name, seconds=seconds)

            events.append(AbsoluteEvent(
                tick=tick, anchor_tick=tick, seconds=seconds,
                payload=Text(data=label.encode('utf-8'))))

        logger.debug("text layer '%s': %d events", name, len(events))
        return events

    def project(self, assignments: Sequence[ChannelAssignment], instants_layers: Sequence[Layer],
                text_layers: Sequence[Layer]) -> List[AbsoluteEvent]:
        """Project every layer, notes first, then instants, then text.

        Returns:
            Unordered events in projection order (layer, then point)
        """
        events: List[AbsoluteEvent] = []
        for assignment in assignments:
            events.extend(self.project_notes_layer(assignment.layer, assignment.channel))
        for layer in instants_layers:
            events.extend(self.project_instants_layer(layer))
        for layer in text_layers:
            events.extend(self.project_text_layer(layer))
        logger.info("projected %d events from %d layers",
                    len(events), len(assignments) + len(instants_layers) + len(text_layers))
        return events
