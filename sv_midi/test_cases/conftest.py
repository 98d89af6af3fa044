import bz2

import pytest

from sv_midi import Dataset, Layer, Model, PlayParameters, Point, SvDocument


class DocumentBuilder:
    """Builds small in-memory projects, one model and dataset per layer."""

    def __init__(self):
        self.document = SvDocument()
        self._next_id = 1

    def _new_id(self):
        value = self._next_id
        self._next_id += 1
        return value

    def add_layer(self, layer_type, points, name=None, presentation_name=None, sample_rate=48000,
                  clip_id='piano', mute=False, pan=0.0, play_parameters=True):
        model_id = self._new_id()
        dataset_id = self._new_id()
        layer_id = self._new_id()
        self.document.models.append(Model(id=model_id, sample_rate=sample_rate, dataset=dataset_id))
        self.document.datasets.append(Dataset(id=dataset_id, points=list(points)))
        layer = Layer(id=layer_id, type=layer_type, name=name or f"{layer_type}-{layer_id}",
                      model=model_id, presentation_name=presentation_name)
        self.document.layers.append(layer)
        if play_parameters:
            self.document.play_parameters.append(
                PlayParameters(model=model_id, mute=mute, pan=pan, clip_id=clip_id))
        return layer

    def build(self):
        return self.document


@pytest.fixture
def builder():
    return DocumentBuilder()


SAMPLE_PROJECT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE sonic-visualiser>
<sv>
  <data>
    <model id="1" name="" sampleRate="48000" start="0" end="96000" type="sparse" dimensions="3"
           resolution="1" notifyOnAdd="true" dataset="2" subtype="note" valueQuantization="0"
           minimum="60" maximum="60" units="MIDI Pitch"/>
    <dataset id="2" dimensions="3">
      <point frame="0" value="60" duration="24000" level="1" label="" />
    </dataset>
    <model id="3" name="" sampleRate="48000" start="0" end="48000" type="sparse" dimensions="1"
           resolution="1" notifyOnAdd="true" dataset="4"/>
    <dataset id="4" dimensions="1">
      <point frame="48000" label="" />
    </dataset>
    <model id="5" name="" sampleRate="48000" start="0" end="24000" type="sparse" dimensions="2"
           resolution="1" notifyOnAdd="true" dataset="6" subtype="text"/>
    <dataset id="6" dimensions="2">
      <point frame="24000" label="verse" />
    </dataset>
    <layer id="7" type="notes" name="Notes" model="1" presentationName="Lead"/>
    <layer id="8" type="timeinstants" name="Instants" model="3"/>
    <layer id="9" type="text" name="Text" model="5"/>
    <layer id="10" type="waveform" name="Waveform" model="1"/>
    <playparameters mute="false" pan="0" gain="1" clipId="organ" model="1">
      <plugin identifier="ladspa" program="default"/>
    </playparameters>
    <playparameters mute="false" pan="0" gain="1" clipId="kick" model="3"/>
  </data>
  <display/>
  <selections/>
</sv>
"""


@pytest.fixture
def sample_project(tmp_path):
    """A compressed project file with one notes, one instants and one text layer."""
    path = tmp_path / 'sample.sv'
    path.write_bytes(bz2.compress(SAMPLE_PROJECT_XML.encode('utf-8')))
    return path


@pytest.fixture
def sample_xml():
    return SAMPLE_PROJECT_XML


@pytest.fixture
def make_builder():
    return DocumentBuilder
