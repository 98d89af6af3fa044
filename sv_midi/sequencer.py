"""sv_midi.sequencer

Orders projected events into a single stream and checks the result.

The order key is ``(tick, anchor_tick, class_rank)``. When one note ends on
the tick another begins, the ending NoteOff carries the earlier start tick as
its anchor and therefore sorts before the new NoteOn:

    tick    |-1- - - - -2- - - - -3-|
    note A  | [=========]           |
    note B  |           [=========] |

The class rank (NoteOn, NoteOff, other) only breaks the remaining ties, such
as two zero-length notes at one instant. ``sorted`` is stable, so equal keys
keep projection order.
"""
import logging
from typing import Dict, List, Sequence, Tuple

from .diagnostics import DiagnosticCollector, DiagnosticKind
from .events import AbsoluteEvent, NoteOff, NoteOn
from .exceptions import SequencingError
from .tables import DEFAULT_MAX_POLYPHONY
from .timebase import format_seconds

logger = logging.getLogger(__name__)


def sequence_events(events: Sequence[AbsoluteEvent]) -> List[AbsoluteEvent]:
    """Return the events in final track order.

    Args:
        events: Events from every layer, in projection order

    Returns:
        New list sorted by ``(tick, anchor_tick, class_rank)``
    """
    return sorted(events, key=lambda e: e.sort_key)


def validate_sequence(events: Sequence[AbsoluteEvent], diagnostics: DiagnosticCollector,
                      max_polyphony: int = DEFAULT_MAX_POLYPHONY) -> None:
    """Scan an ordered stream for polyphony and overlap problems.

    Excessive polyphony is reported once when the count first exceeds the
    ceiling and again only after it has fallen back to the ceiling. A note
    overlap is reported every time a second note opens on a (channel, key)
    that is already sounding. Events are never changed or dropped.

    Args:
        events: Events in sequenced order
        diagnostics: Collector receiving the warnings
        max_polyphony: Number of simultaneous notes allowed

    Raises:
        SequencingError: If a NoteOff has no open NoteOn to close
    """
    polyphony = 0
    warned = False
    open_notes: Dict[Tuple[int, int], int] = {}

    for event in events:
        payload = event.payload

        if isinstance(payload, NoteOn):
            polyphony += 1
            if polyphony > max_polyphony and not warned:
                diagnostics.add(
                    DiagnosticKind.EXCESSIVE_POLYPHONY,
                    f"excessive polyphony ({polyphony} notes) at {format_seconds(event.seconds)}",
                    seconds=event.seconds)
                warned = True

            key = (payload.channel, payload.key)
            open_notes[key] = open_notes.get(key, 0) + 1
            if open_notes[key] >= 2:
                diagnostics.add(
                    DiagnosticKind.NOTE_OVERLAP,
                    f"note overlap on channel {payload.channel} key {payload.key} "
                    f"at {format_seconds(event.seconds)}",
                    seconds=event.seconds)

        elif isinstance(payload, NoteOff):
            if polyphony <= 0:
                raise SequencingError(
                    f"NoteOff on channel {payload.channel} key {payload.key} at tick {event.tick} "
                    f"without any sounding note")
            polyphony -= 1
            if polyphony <= max_polyphony:
                warned = False

            key = (payload.channel, payload.key)
            count = open_notes.get(key, 0)
            if count <= 0:
                raise SequencingError(
                    f"NoteOff on channel {payload.channel} key {payload.key} at tick {event.tick} "
                    f"without a matching NoteOn")
            if count == 1:
                del open_notes[key]
            else:
                open_notes[key] = count - 1


class EventSequencer:
    """Sequencer with a configured polyphony ceiling.

    Example:
        >>> sequencer = EventSequencer(max_polyphony=24)
        >>> ordered = sequencer.generate_sequence(events, diagnostics)
        >>> ordered[0].tick <= ordered[-1].tick
        True
    """

    def __init__(self, max_polyphony: int = DEFAULT_MAX_POLYPHONY) -> None:
        self.max_polyphony = max_polyphony

    def sequence(self, events: Sequence[AbsoluteEvent]) -> List[AbsoluteEvent]:
        return sequence_events(events)

    def validate(self, events: Sequence[AbsoluteEvent], diagnostics: DiagnosticCollector) -> None:
        validate_sequence(events, diagnostics, max_polyphony=self.max_polyphony)

    def generate_sequence(self, events: Sequence[AbsoluteEvent],
                          diagnostics: DiagnosticCollector) -> List[AbsoluteEvent]:
        """Sort and validate in one step.

        Returns:
            Events in track order
        """
        ordered = self.sequence(events)
        self.validate(ordered, diagnostics)
        logger.info("sequenced %d events", len(ordered))
        return ordered
