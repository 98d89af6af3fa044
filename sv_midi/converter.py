"""sv_midi.converter

End-to-end conversion: document in, track out.
"""
import logging
from typing import Optional

from .channels import assign_channels
from .config import ExportConfig
from .conversion_result import ConversionResult
from .diagnostics import DiagnosticCollector
from .document import LAYER_INSTANTS, LAYER_NOTES, LAYER_TEXT, SvDocument, load_document
from .encoder import TrackAssembler
from .projector import EventProjector
from .resolver import LayerResolver
from .sequencer import EventSequencer
from .validators import validate_document_path
from .writer import write_midi_file

logger = logging.getLogger(__name__)


def convert_document(document: SvDocument, config: Optional[ExportConfig] = None) -> ConversionResult:
    """Convert a loaded project into a single MIDI track.

    Args:
        document: Parsed project
        config: Conversion settings; defaults when None

    Returns:
        ConversionResult with the track and every diagnostic raised on the way

    Raises:
        SvMidiError: On any fatal problem. No partial result is returned.

    Example:
        >>> result = convert_document(load_document('song.sv'), ExportConfig(bpm=90))
        >>> for diagnostic in result.diagnostics:
        ...     print(diagnostic)
    """
    config = (config or ExportConfig()).validate()
    diagnostics = DiagnosticCollector()
    resolver = LayerResolver(document)

    assignments = assign_channels(resolver.layers_of_type(LAYER_NOTES), diagnostics)
    projector = EventProjector(resolver, config, diagnostics)
    events = projector.project(
        assignments,
        resolver.layers_of_type(LAYER_INSTANTS),
        resolver.layers_of_type(LAYER_TEXT),
    )

    ordered = EventSequencer(max_polyphony=config.max_polyphony).generate_sequence(events, diagnostics)
    return TrackAssembler(resolver, config, diagnostics).assemble(assignments, ordered)


def convert_file(input_path: str, output_path: str, config: Optional[ExportConfig] = None) -> ConversionResult:
    """Load a project file, convert it and write a MIDI file.

    Nothing is written when conversion fails.

    Raises:
        ValidationError: If input_path is not an existing file
        SvMidiError: On any fatal conversion or export problem
    """
    validate_document_path(input_path)
    logger.info("loading %s", input_path)
    document = load_document(input_path)
    result = convert_document(document, config)
    write_midi_file(result, output_path)
    logger.info("wrote %s", output_path)
    return result
