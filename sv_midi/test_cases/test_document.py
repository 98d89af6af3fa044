import pytest

from sv_midi import DocumentError, LayerResolver, Point, convert_document, load_document, parse_document


def test_parse_sample_project(sample_xml):
    document = parse_document(sample_xml)

    assert [m.id for m in document.models] == [1, 3, 5]
    assert document.models[0].sample_rate == 48000
    assert document.models[0].dataset == 2
    assert document.datasets[0].points == [Point(frame=0, value=60, duration=24000, label='', level=1.0)]
    assert [layer.type for layer in document.layers] == ['notes', 'timeinstants', 'text', 'waveform']
    assert document.layers[0].display_name == 'Lead'
    assert document.layers[1].display_name == 'Instants'
    assert document.play_parameters[0].clip_id == 'organ'
    assert document.play_parameters[0].mute is False
    assert document.play_parameters[1].model == 3


def test_load_compressed_project(sample_project):
    document = load_document(str(sample_project))
    assert len(document.layers) == 4


def test_load_plain_xml(tmp_path, sample_xml):
    path = tmp_path / 'plain.sv'
    path.write_text(sample_xml, encoding='utf-8')
    assert len(load_document(str(path)).datasets) == 3


def test_integral_float_values_are_accepted():
    document = parse_document(
        '<sv><data><dataset id="1" dimensions="3">'
        '<point frame="10" value="60.0" duration="5"/></dataset></data></sv>')
    assert document.datasets[0].points[0].value == 60


@pytest.mark.parametrize('xml', [
    '<sv><data><dataset id="1"><point frame="10" value="sixty"/></dataset></data></sv>',
    '<sv><data><dataset id="1"><point value="60"/></dataset></data></sv>',
    '<sv><data><dataset id="1"><point frame="-4"/></dataset></data></sv>',
    '<sv><data><model id="1"/></data></sv>',
    '<sv><data><playparameters model="1" mute="maybe"/></data></sv>',
    '<sv></sv>',
    '<project><data/></project>',
    '<sv><data>',
])
def test_malformed_documents_are_rejected(xml):
    with pytest.raises(DocumentError):
        parse_document(xml)


def test_unreadable_file(tmp_path):
    with pytest.raises(DocumentError):
        load_document(str(tmp_path / 'missing.sv'))


def test_resolver_joins(sample_xml):
    resolver = LayerResolver(parse_document(sample_xml))
    [notes] = resolver.layers_of_type('notes')

    assert resolver.model_for(notes).id == 1
    assert resolver.dataset_for(notes).id == 2
    assert len(resolver.points_for(notes)) == 1
    assert resolver.play_parameters_for(notes).clip_id == 'organ'


def test_resolver_reports_missing_references(sample_xml):
    document = parse_document(sample_xml)
    resolver = LayerResolver(document)
    [text] = resolver.layers_of_type('text')

    # the text layer's model has no play parameters record
    with pytest.raises(DocumentError) as excinfo:
        resolver.play_parameters_for(text)
    assert excinfo.value.layer == 'Text'

    document.datasets.pop()
    with pytest.raises(DocumentError):
        LayerResolver(document).dataset_for(text)


def test_model_without_dataset(builder):
    layer = builder.add_layer('notes', [])
    document = builder.build()
    model = document.models[0]
    document.models[0] = type(model)(id=model.id, sample_rate=model.sample_rate, dataset=None)

    with pytest.raises(DocumentError):
        LayerResolver(document).dataset_for(layer)


def test_fractional_values_on_ignored_layers_still_load(sample_xml):
    extra = (
        '<model id="20" name="" sampleRate="48000" start="0" end="4800" type="sparse" dimensions="2"'
        ' resolution="1" notifyOnAdd="true" dataset="21"/>'
        '<dataset id="21" dimensions="2"><point frame="100" value="0.734" label=""/></dataset>'
        '<layer id="22" type="timevalues" name="Loudness" model="20"/>'
    )
    document = parse_document(sample_xml.replace('<layer id="7"', extra + '<layer id="7"'))

    assert document.datasets[-1].points[0].value == 0.734
    result = convert_document(document)
    assert result.channel_assignments == {'Lead': 0}
    assert result.diagnostics == []


def test_empty_presentation_name_is_used_as_is():
    document = parse_document(
        '<sv><data><layer id="1" type="notes" name="Notes" model="2" presentationName=""/>'
        '<layer id="3" type="notes" name="Bass" model="4"/></data></sv>')

    assert document.layers[0].display_name == ''
    assert document.layers[1].display_name == 'Bass'
