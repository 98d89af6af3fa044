"""sv_midi.diagnostics

Typed, non-fatal conversion warnings.

Each stage of the pipeline receives the same :class:`DiagnosticCollector`
and appends to it. Nothing is printed here; the caller decides how to
surface the collected list.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from .timebase import format_seconds


class DiagnosticKind(str, Enum):
    TOO_MANY_NOTE_LAYERS = 'too-many-note-layers'
    COLLAPSED_NOTE = 'collapsed-note'
    INSUFFICIENT_RESOLUTION = 'insufficient-resolution'
    EXCESSIVE_POLYPHONY = 'excessive-polyphony'
    NOTE_OVERLAP = 'note-overlap'
    NON_ASCII_INSTRUMENT_NAME = 'non-ascii-instrument-name'
    NON_ASCII_LABEL = 'non-ascii-label'


@dataclass(frozen=True)
class Diagnostic:
    """A warning with enough context to find the offending input."""

    kind: DiagnosticKind
    message: str
    layer: Optional[str] = None
    seconds: Optional[float] = None

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'message': self.message,
            'layer': self.layer,
            'seconds': self.seconds,
            'time': format_seconds(self.seconds) if self.seconds is not None else None,
        }


class DiagnosticCollector:
    """Ordered list of diagnostics shared by all conversion stages."""

    def __init__(self) -> None:
        self._items: List[Diagnostic] = []

    def add(self, kind: DiagnosticKind, message: str, layer: Optional[str] = None,
            seconds: Optional[float] = None) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, message=message, layer=layer, seconds=seconds)
        self._items.append(diagnostic)
        return diagnostic

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self._items if d.kind == kind]

    def to_list(self) -> List[Diagnostic]:
        return list(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)
