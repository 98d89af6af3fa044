"""sv_midi.conversion_result

Data class holding a finished conversion.
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .diagnostics import Diagnostic
from .events import EndOfTrack, TrackEvent


@dataclass
class ConversionResult:
    """Container for the converted track and its diagnostics.

    The track is split the way the writer consumes it: header events (all
    with delta 0), the delta-encoded body, and the end-of-track marker.
    """

    ticks_per_beat: int
    bpm: float
    header: List[TrackEvent] = field(default_factory=list)
    body: List[TrackEvent] = field(default_factory=list)
    end_of_track: TrackEvent = field(default_factory=lambda: TrackEvent(delta=0, event=EndOfTrack()))
    diagnostics: List[Diagnostic] = field(default_factory=list)
    channel_assignments: Dict[str, int] = field(default_factory=dict)

    @property
    def track(self) -> List[TrackEvent]:
        """Every event of the track in output order."""
        return self.header + self.body + [self.end_of_track]

    def event_counts(self) -> Dict[str, int]:
        return dict(Counter(type(e.event).__name__ for e in self.body))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result summary to a dictionary.

        Returns:
            Dictionary with settings, channel map, body event counts and
            diagnostics. Track events themselves are not included.
        """
        return {
            'bpm': self.bpm,
            'ticks_per_beat': self.ticks_per_beat,
            'channel_assignments': dict(self.channel_assignments),
            'header_events': len(self.header),
            'body_events': len(self.body),
            'event_counts': self.event_counts(),
            'duration_ticks': sum(e.delta for e in self.body),
            'diagnostics': [d.to_dict() for d in self.diagnostics],
        }
