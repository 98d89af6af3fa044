from sv_midi import DiagnosticCollector, DiagnosticKind, Layer, assign_channels


def _layers(count):
    return [Layer(id=i, type='notes', name=f"layer {i}", model=i) for i in range(count)]


def test_fifteen_layers_get_distinct_channels_without_9():
    diagnostics = DiagnosticCollector()
    assignments = assign_channels(_layers(15), diagnostics)

    channels = [a.channel for a in assignments]
    assert channels == [0, 1, 2, 3, 4, 5, 6, 7, 8, 10, 11, 12, 13, 14, 15]
    assert len(set(channels)) == 15
    assert [a.layer.id for a in assignments] == list(range(15))
    assert len(diagnostics) == 0


def test_sixteenth_layer_is_dropped_with_one_diagnostic():
    diagnostics = DiagnosticCollector()
    layers = _layers(16)
    assignments = assign_channels(layers, diagnostics)

    assert len(assignments) == 15
    assert layers[15] not in [a.layer for a in assignments]
    assert len(diagnostics.of_kind(DiagnosticKind.TOO_MANY_NOTE_LAYERS)) == 1


def test_overflow_is_reported_once_not_per_layer():
    diagnostics = DiagnosticCollector()
    assignments = assign_channels(_layers(20), diagnostics)

    assert len(assignments) == 15
    assert len(diagnostics) == 1


def test_no_layers():
    diagnostics = DiagnosticCollector()
    assert assign_channels([], diagnostics) == []
    assert len(diagnostics) == 0
