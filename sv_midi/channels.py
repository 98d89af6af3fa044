"""sv_midi.channels

Assigns MIDI channels to note layers.

Every note layer gets its own channel; channel 9 is kept for the merged
percussion layers, which leaves fifteen channels for note layers.
"""
from dataclasses import dataclass
import logging
from typing import List, Sequence

from .diagnostics import DiagnosticCollector, DiagnosticKind
from .document import Layer
from .tables import MELODIC_CHANNELS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelAssignment:
    channel: int
    layer: Layer


def assign_channels(note_layers: Sequence[Layer], diagnostics: DiagnosticCollector) -> List[ChannelAssignment]:
    """Assign channels to note layers in document order.

    Args:
        note_layers: Note layers in the order they appear in the document
        diagnostics: Collector receiving the overflow warning

    Returns:
        One ChannelAssignment per kept layer. Layers past the fifteenth are
        dropped and reported once, not individually.

    Example:
        >>> [a.channel for a in assign_channels(layers[:11], DiagnosticCollector())]
        [0, 1, 2, 3, 4, 5, 6, 7, 8, 10, 11]
    """
    if len(note_layers) > len(MELODIC_CHANNELS):
        dropped = len(note_layers) - len(MELODIC_CHANNELS)
        diagnostics.add(
            DiagnosticKind.TOO_MANY_NOTE_LAYERS,
            f"project has {len(note_layers)} notes layers but only {len(MELODIC_CHANNELS)} "
            f"MIDI channels are available; {dropped} layer(s) will be dropped",
        )

    assignments = [ChannelAssignment(channel=channel, layer=layer)
                   for channel, layer in zip(MELODIC_CHANNELS, note_layers)]
    for assignment in assignments:
        logger.debug("notes layer '%s' -> channel %d", assignment.layer.display_name, assignment.channel)
    return assignments
