"""Command-line entry point: convert a project file to a MIDI file."""
import argparse
import logging
from typing import Optional, Sequence

from .config import load_export_config
from .converter import convert_file
from .exceptions import SvMidiError
from .exporter import export_report

logger = logging.getLogger('sv_midi')


def _positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    if not value > 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text!r}")
    return value


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sv-midi',
        description="Export the notes, time instants and text layers of an annotation project "
                    "to a single-track MIDI file.",
    )
    parser.add_argument('input_path', help="Input project file path")
    parser.add_argument('output_path', help="Converted MIDI file path")
    parser.add_argument('-t', '--midi-bpm', type=_positive_float, default=None,
                        help="Fixed MIDI tempo used for exporting (default 120)")
    parser.add_argument('-x', '--midi-ticks-per-beat', type=_positive_int, default=None,
                        help="Number of MIDI ticks per beat (default 1024)")
    parser.add_argument('-s', '--trim-leading-silence', action='store_true', default=None,
                        help="Trim the leading silence before the first event")
    parser.add_argument('--max-polyphony', type=_positive_int, default=None,
                        help="Simultaneous notes allowed before warning (default 24)")
    parser.add_argument('-c', '--config', default=None,
                        help="YAML file with default settings")
    parser.add_argument('--report', default=None,
                        help="Also write a conversion report to this path")
    parser.add_argument('--report-format', default='json', choices=['json', 'yaml', 'text'],
                        help="Report format (default json)")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help="Log progress details")
    verbosity.add_argument('-q', '--quiet', action='store_true', help="Only log errors")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the converter.

    Returns:
        0 on success (diagnostics allowed), 1 on a fatal conversion error
    """
    args = build_parser().parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')

    try:
        config = load_export_config(args.config).with_overrides(
            bpm=args.midi_bpm,
            ticks_per_beat=args.midi_ticks_per_beat,
            trim_leading_silence=args.trim_leading_silence,
            max_polyphony=args.max_polyphony,
        )
        result = convert_file(args.input_path, args.output_path, config)
        for diagnostic in result.diagnostics:
            logger.warning("%s", diagnostic)
        if args.report:
            export_report(result, args.report, args.report_format)
    except SvMidiError as e:
        logger.error("%s", e)
        return 1

    if result.diagnostics:
        logger.info("finished with %d warning(s)", len(result.diagnostics))
    return 0
