"""sv_midi.exporter

Export conversion reports to various formats (JSON, YAML, text).
"""
import json

import yaml

from .conversion_result import ConversionResult
from .exceptions import ExportError


def export_json(result: ConversionResult, output_path: str) -> None:
    """Export the conversion report to a JSON file.

    Args:
        result: ConversionResult instance
        output_path: Path to output JSON file

    Raises:
        ExportError: If export fails
    """
    try:
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
    except (OSError, TypeError, ValueError) as e:
        raise ExportError(f"Failed to export JSON: {e}")


def export_yaml(result: ConversionResult, output_path: str) -> None:
    """Export the conversion report to a YAML file.

    Args:
        result: ConversionResult instance
        output_path: Path to output YAML file

    Raises:
        ExportError: If export fails
    """
    try:
        with open(output_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(result.to_dict(), f, default_flow_style=False, allow_unicode=True, sort_keys=False)
    except (OSError, yaml.YAMLError) as e:
        raise ExportError(f"Failed to export YAML: {e}")


def export_text(result: ConversionResult, output_path: str) -> None:
    """Export the conversion report to a human-readable text file.

    Args:
        result: ConversionResult instance
        output_path: Path to output text file

    Raises:
        ExportError: If export fails
    """
    summary = result.to_dict()
    try:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write("=== MIDI Export Report ===\n\n")
            f.write(f"Tempo: {summary['bpm']} bpm\n")
            f.write(f"Resolution: {summary['ticks_per_beat']} ticks per beat\n")
            f.write(f"Length: {summary['duration_ticks']} ticks\n\n")

            if summary['channel_assignments']:
                f.write("Channels:\n")
                for name, channel in summary['channel_assignments'].items():
                    f.write(f"  {channel:2d}: {name}\n")
                f.write("\n")

            f.write(f"Events: {summary['body_events']}\n")
            for kind, count in sorted(summary['event_counts'].items()):
                f.write(f"  {kind}: {count}\n")
            f.write("\n")

            diagnostics = summary['diagnostics']
            f.write(f"Diagnostics ({len(diagnostics)} total):\n")
            for d in diagnostics:
                f.write(f"  [{d['kind']}] {d['message']}\n")
    except OSError as e:
        raise ExportError(f"Failed to export text: {e}")


def export_report(result: ConversionResult, output_path: str, format: str = 'json') -> None:
    """Export the conversion report to the specified format.

    Args:
        result: ConversionResult instance
        output_path: Path to output file
        format: Export format ('json', 'yaml', 'text')

    Raises:
        ExportError: If format is unsupported or export fails
    """
    format = format.lower()

    if format == 'json':
        export_json(result, output_path)
    elif format in ('yaml', 'yml'):
        export_yaml(result, output_path)
    elif format == 'text' or format == 'txt':
        export_text(result, output_path)
    else:
        raise ExportError(f"Unsupported export format: {format}. Supported formats: json, yaml, text")
