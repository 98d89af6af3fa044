"""sv_midi.exceptions

Custom exception classes for project conversion errors.

Every exception here is fatal: it aborts the whole conversion before any
track data is produced. Recoverable problems are reported as diagnostics
instead (see :mod:`sv_midi.diagnostics`).
"""
from typing import Optional


class SvMidiError(Exception):
    """Base exception for all conversion errors."""
    pass


class DocumentError(SvMidiError):
    """Exception raised when the project document is malformed or incomplete."""

    def __init__(self, message: str, layer: Optional[str] = None):
        super().__init__(message)
        self.layer = layer


class ProjectionError(SvMidiError):
    """Exception raised when a layer point cannot be turned into events."""

    def __init__(self, message: str, layer: Optional[str] = None, frame: Optional[int] = None):
        super().__init__(message)
        self.layer = layer
        self.frame = frame


class SequencingError(SvMidiError):
    """Exception raised when the ordered event stream breaks an invariant."""
    pass


class ConfigurationError(SvMidiError):
    """Exception raised when configuration is invalid."""
    pass


class ExportError(SvMidiError):
    """Exception raised when writing the MIDI file or a report fails."""
    pass
