"""sv_midi.validators

Input validation functions for conversion settings.
"""
import os

from .exceptions import ConfigurationError


class ValidationError(ConfigurationError):
    """Exception raised when validation fails."""
    pass


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_document_path(path: str) -> None:
    """Validate project file path exists and is readable.

    Args:
        path: Path to the project file

    Raises:
        ValidationError: If path is invalid or file doesn't exist
    """
    if not isinstance(path, (str, os.PathLike)):
        raise ValidationError(f"path must be a string, got {type(path).__name__}")
    if not str(path):
        raise ValidationError("path cannot be empty")
    if not os.path.exists(path):
        raise ValidationError(f"project file not found: {path}")
    if not os.path.isfile(path):
        raise ValidationError(f"path is not a file: {path}")


def validate_ticks_per_beat(ticks_per_beat: int) -> None:
    """Validate ticks per beat value.

    Args:
        ticks_per_beat: Ticks per beat value

    Raises:
        ValidationError: If value is invalid
    """
    if not isinstance(ticks_per_beat, int) or isinstance(ticks_per_beat, bool):
        raise ValidationError(f"ticks_per_beat must be an integer, got {type(ticks_per_beat).__name__}")
    if ticks_per_beat <= 0:
        raise ValidationError(f"ticks_per_beat must be positive, got {ticks_per_beat}")
    # SMF metrical time division is a 15-bit field
    if ticks_per_beat > 0x7FFF:
        raise ValidationError(f"ticks_per_beat must be at most {0x7FFF}, got {ticks_per_beat}")


def validate_tempo(bpm: float) -> None:
    """Validate tempo value (beats per minute).

    Args:
        bpm: Tempo in beats per minute

    Raises:
        ValidationError: If tempo is invalid
    """
    if not _is_number(bpm):
        raise ValidationError(f"bpm must be a number, got {type(bpm).__name__}")
    if not bpm > 0:
        raise ValidationError(f"bpm must be positive, got {bpm}")


def validate_sample_rate(sample_rate: int) -> None:
    """Validate a model sample rate.

    Args:
        sample_rate: Samples per second

    Raises:
        ValidationError: If sample rate is invalid
    """
    if not _is_number(sample_rate):
        raise ValidationError(f"sample_rate must be a number, got {type(sample_rate).__name__}")
    if not sample_rate > 0:
        raise ValidationError(f"sample_rate must be positive, got {sample_rate}")


def validate_max_polyphony(max_polyphony: int) -> None:
    """Validate the polyphony ceiling.

    Args:
        max_polyphony: Number of simultaneous notes allowed before warning

    Raises:
        ValidationError: If the ceiling is invalid
    """
    if not isinstance(max_polyphony, int) or isinstance(max_polyphony, bool):
        raise ValidationError(f"max_polyphony must be an integer, got {type(max_polyphony).__name__}")
    if max_polyphony < 1:
        raise ValidationError(f"max_polyphony must be at least 1, got {max_polyphony}")
