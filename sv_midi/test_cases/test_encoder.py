import pytest

from sv_midi import (AbsoluteEvent, DiagnosticCollector, DiagnosticKind, ExportConfig, LayerResolver, NoteOff,
                     NoteOn, Point, SequencingError, Text, TrackAssembler, TrackEvent, accumulate_ticks,
                     encode_deltas)
from sv_midi.channels import assign_channels
from sv_midi.events import ChannelPrefix, ControlChange, EndOfTrack, InstrumentName, ProgramChange, Tempo


def _events(ticks):
    return [AbsoluteEvent(tick=t, anchor_tick=t, seconds=0.0, payload=Text(b'%d' % t)) for t in ticks]


def test_deltas_from_absolute_ticks():
    body = encode_deltas(_events([480, 480, 580, 830]))
    assert [e.delta for e in body] == [480, 0, 100, 250]
    assert body[0].event == Text(b'480')


def test_trim_leading_silence_zeroes_first_delta():
    body = encode_deltas(_events([480, 480, 580, 830]), trim_leading_silence=True)
    assert [e.delta for e in body] == [0, 0, 100, 250]


def test_accumulating_deltas_restores_ticks():
    ticks = [3, 3, 17, 1024, 1024, 5000]
    assert accumulate_ticks(encode_deltas(_events(ticks))) == ticks
    assert accumulate_ticks(encode_deltas(_events(ticks), trim_leading_silence=True)) == [t - 3 for t in ticks]


def test_decreasing_ticks_are_fatal():
    with pytest.raises(SequencingError):
        encode_deltas(_events([10, 5]))


def test_empty_body():
    assert encode_deltas([]) == []


def _assembler(document, config=None):
    diagnostics = DiagnosticCollector()
    resolver = LayerResolver(document)
    assignments = assign_channels(resolver.layers_of_type('notes'), diagnostics)
    return TrackAssembler(resolver, config or ExportConfig(), diagnostics), assignments, diagnostics


def test_header_layout(builder):
    builder.add_layer('notes', [], name='raw', presentation_name='Organ', clip_id='organ', pan=-1.0)
    builder.add_layer('notes', [], name='Muted', clip_id='beep', mute=True, pan=1.0)
    builder.add_layer('timeinstants', [], clip_id='kick')
    assembler, assignments, diagnostics = _assembler(builder.build(), ExportConfig(bpm=120.0))

    header = assembler.build_header(assignments)

    assert all(e.delta == 0 for e in header)
    assert [e.event for e in header] == [
        Tempo(500000),
        ChannelPrefix(0),
        InstrumentName(b'Organ'),
        ProgramChange(0, 17),
        ControlChange(0, 10, 0),
        ChannelPrefix(1),
        InstrumentName(b'Muted'),
        ProgramChange(1, 80),
        ControlChange(1, 7, 0),
        ControlChange(1, 10, 127),
    ]
    assert len(diagnostics) == 0


def test_percussion_channel_gets_no_setup(builder):
    builder.add_layer('timeinstants', [Point(frame=0)], clip_id='snare')
    assembler, assignments, _ = _assembler(builder.build())

    header = assembler.build_header(assignments)

    assert [e.event for e in header] == [Tempo(500000)]


def test_non_ascii_instrument_name_is_reported_and_kept(builder):
    builder.add_layer('notes', [], name='Flûte', clip_id='unknown-clip')
    assembler, assignments, diagnostics = _assembler(builder.build())

    header = assembler.build_header(assignments)

    assert InstrumentName('Flûte'.encode('utf-8')) in [e.event for e in header]
    assert ProgramChange(0, 0) in [e.event for e in header]
    assert len(diagnostics.of_kind(DiagnosticKind.NON_ASCII_INSTRUMENT_NAME)) == 1


def test_assemble(builder):
    builder.add_layer('notes', [], name='Lead')
    assembler, assignments, _ = _assembler(builder.build(), ExportConfig(trim_leading_silence=True))
    events = [
        AbsoluteEvent(96, 96, 0.0, NoteOn(0, 60, 64)),
        AbsoluteEvent(192, 96, 0.0, NoteOff(0, 60, 0)),
    ]

    result = assembler.assemble(assignments, events)

    assert [e.delta for e in result.body] == [0, 96]
    assert result.end_of_track == TrackEvent(0, EndOfTrack())
    assert result.track[-1] == result.end_of_track
    assert len(result.track) == len(result.header) + 3
    assert result.channel_assignments == {'Lead': 0}
