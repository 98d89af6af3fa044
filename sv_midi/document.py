"""sv_midi.document

In-memory shape of an annotation project and a loader for project files.

A project file is a bzip2-compressed XML document. The parts this package
reads all live under ``<sv><data>``::

    <model id="1" sampleRate="48000" dataset="2" .../>
    <dataset id="2" dimensions="3">
        <point frame="0" value="60" duration="24000" label=""/>
    </dataset>
    <layer id="3" type="notes" name="Notes" model="1" presentationName="Piano"/>
    <playparameters mute="false" pan="0" gain="1" clipId="piano" model="1"/>

Everything else (display, selections, plugin settings) is ignored.
"""
import bz2
import os
from dataclasses import dataclass, field
from typing import List, Optional
import xml.etree.ElementTree as ET

from .exceptions import DocumentError

LAYER_NOTES = 'notes'
LAYER_INSTANTS = 'timeinstants'
LAYER_TEXT = 'text'

_BZIP2_MAGIC = b'BZh'


@dataclass(frozen=True)
class Point:
    """One timestamped datum of a dataset."""

    frame: int
    value: Optional[float] = None
    duration: Optional[int] = None
    label: Optional[str] = None
    level: Optional[float] = None


@dataclass(frozen=True)
class Dataset:
    """Ordered point collection referenced by a model."""

    id: int
    points: List[Point] = field(default_factory=list)
    dimensions: int = 0


@dataclass(frozen=True)
class Model:
    """Sampled-audio context the points of a layer are measured against."""

    id: int
    sample_rate: int
    dataset: Optional[int] = None
    name: str = ''
    type: str = ''


@dataclass(frozen=True)
class Layer:
    """A named, typed view over a model."""

    id: int
    type: str
    name: str
    model: int
    presentation_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.presentation_name is not None:
            return self.presentation_name
        return self.name


@dataclass(frozen=True)
class PlayParameters:
    """Per-model playback settings.

    ``gain`` is kept for completeness but nothing maps it to MIDI yet.
    """

    model: int
    mute: bool = False
    pan: float = 0.0
    gain: float = 1.0
    clip_id: str = ''


@dataclass
class SvDocument:
    """Container for every record the converter consumes."""

    models: List[Model] = field(default_factory=list)
    datasets: List[Dataset] = field(default_factory=list)
    layers: List[Layer] = field(default_factory=list)
    play_parameters: List[PlayParameters] = field(default_factory=list)


def _attr(element: ET.Element, name: str, required: bool = True) -> Optional[str]:
    value = element.get(name)
    if value is None and required:
        raise DocumentError(f"<{element.tag}> is missing required attribute '{name}'")
    return value


def _int_attr(element: ET.Element, name: str, required: bool = True) -> Optional[int]:
    raw = _attr(element, name, required)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        number = float(raw)
    except ValueError:
        raise DocumentError(f"<{element.tag}> attribute '{name}' is not a number: {raw!r}")
    if not number.is_integer():
        raise DocumentError(f"<{element.tag}> attribute '{name}' is not an integer: {raw!r}")
    return int(number)


def _float_attr(element: ET.Element, name: str, default: Optional[float]) -> Optional[float]:
    raw = element.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise DocumentError(f"<{element.tag}> attribute '{name}' is not a number: {raw!r}")


def _bool_attr(element: ET.Element, name: str, default: bool) -> bool:
    raw = element.get(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in ('true', '1'):
        return True
    if lowered in ('false', '0'):
        return False
    raise DocumentError(f"<{element.tag}> attribute '{name}' is not a boolean: {raw!r}")


def _parse_point(element: ET.Element) -> Point:
    frame = _int_attr(element, 'frame')
    duration = _int_attr(element, 'duration', required=False)
    if frame < 0:
        raise DocumentError(f"<point> frame must be non-negative, got {frame}")
    if duration is not None and duration < 0:
        raise DocumentError(f"<point> duration must be non-negative, got {duration}")
    return Point(
        frame=frame,
        value=_float_attr(element, 'value', None),
        duration=duration,
        label=element.get('label'),
        level=_float_attr(element, 'level', None),
    )


def _parse_model(element: ET.Element) -> Model:
    return Model(
        id=_int_attr(element, 'id'),
        sample_rate=_int_attr(element, 'sampleRate'),
        dataset=_int_attr(element, 'dataset', required=False),
        name=element.get('name', ''),
        type=element.get('type', ''),
    )


def _parse_dataset(element: ET.Element) -> Dataset:
    return Dataset(
        id=_int_attr(element, 'id'),
        points=[_parse_point(p) for p in element.findall('point')],
        dimensions=_int_attr(element, 'dimensions', required=False) or 0,
    )


def _parse_layer(element: ET.Element) -> Layer:
    return Layer(
        id=_int_attr(element, 'id'),
        type=_attr(element, 'type'),
        name=element.get('name', ''),
        model=_int_attr(element, 'model'),
        presentation_name=element.get('presentationName'),
    )


def _parse_play_parameters(element: ET.Element) -> PlayParameters:
    return PlayParameters(
        model=_int_attr(element, 'model'),
        mute=_bool_attr(element, 'mute', False),
        pan=_float_attr(element, 'pan', 0.0),
        gain=_float_attr(element, 'gain', 1.0),
        clip_id=element.get('clipId', ''),
    )


def parse_document(xml_text: str) -> SvDocument:
    """Parse project XML into an :class:`SvDocument`.

    Args:
        xml_text: Decompressed project XML

    Returns:
        SvDocument with models, datasets, layers and play parameters in
        document order

    Raises:
        DocumentError: If the XML is malformed or a record is incomplete
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise DocumentError(f"Failed to parse project XML: {e}")
    if root.tag != 'sv':
        raise DocumentError(f"unexpected root element <{root.tag}>, expected <sv>")
    data = root.find('data')
    if data is None:
        raise DocumentError("project has no <data> element")

    return SvDocument(
        models=[_parse_model(e) for e in data.findall('model')],
        datasets=[_parse_dataset(e) for e in data.findall('dataset')],
        layers=[_parse_layer(e) for e in data.findall('layer')],
        play_parameters=[_parse_play_parameters(e) for e in data.findall('playparameters')],
    )


def load_document(path: str) -> SvDocument:
    """Load a project file from disk.

    bzip2-compressed files are decompressed first; uncompressed XML is read
    as is.

    Args:
        path: Path to the project file

    Returns:
        Parsed SvDocument

    Raises:
        DocumentError: If the file cannot be read, decompressed or parsed
    """
    try:
        with open(path, 'rb') as f:
            raw = f.read()
    except OSError as e:
        raise DocumentError(f"Failed to read project file {os.fspath(path)}: {e}")

    if raw.startswith(_BZIP2_MAGIC):
        try:
            raw = bz2.decompress(raw)
        except (OSError, ValueError) as e:
            raise DocumentError(f"Failed to decompress project file {os.fspath(path)}: {e}")

    try:
        xml_text = raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise DocumentError(f"Project file {os.fspath(path)} is not UTF-8 XML: {e}")
    return parse_document(xml_text)
