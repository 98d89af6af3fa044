from .document import SvDocument, Layer, Model, Dataset, Point, PlayParameters, load_document, parse_document
from .timebase import frames_to_seconds, seconds_to_ticks, frame_to_ticks, tempo_microseconds, format_seconds
from .resolver import LayerResolver
from .channels import ChannelAssignment, assign_channels
from .events import AbsoluteEvent, NoteOn, NoteOff, Text, TrackEvent
from .projector import EventProjector
from .sequencer import EventSequencer, sequence_events, validate_sequence
from .encoder import TrackAssembler, encode_deltas, accumulate_ticks
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticCollector
from .config import ExportConfig, load_export_config
from .conversion_result import ConversionResult
from .converter import convert_document, convert_file
from .writer import build_midi_file, write_midi_file
from .exporter import export_report, export_json, export_yaml, export_text
from .validators import ValidationError
from .exceptions import SvMidiError, DocumentError, ProjectionError, SequencingError, ConfigurationError, ExportError

__all__ = [
	'SvDocument', 'Layer', 'Model', 'Dataset', 'Point', 'PlayParameters', 'load_document', 'parse_document',
	'frames_to_seconds', 'seconds_to_ticks', 'frame_to_ticks', 'tempo_microseconds', 'format_seconds',
	'LayerResolver',
	'ChannelAssignment', 'assign_channels',
	'AbsoluteEvent', 'NoteOn', 'NoteOff', 'Text', 'TrackEvent',
	'EventProjector',
	'EventSequencer', 'sequence_events', 'validate_sequence',
	'TrackAssembler', 'encode_deltas', 'accumulate_ticks',
	'Diagnostic', 'DiagnosticKind', 'DiagnosticCollector',
	'ExportConfig', 'load_export_config',
	'ConversionResult',
	'convert_document', 'convert_file',
	'build_midi_file', 'write_midi_file',
	'export_report', 'export_json', 'export_yaml', 'export_text',
	'ValidationError',
	'SvMidiError', 'DocumentError', 'ProjectionError', 'SequencingError', 'ConfigurationError', 'ExportError',
]
