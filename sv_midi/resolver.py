"""sv_midi.resolver

Read-only joins across layer -> model -> dataset -> play parameters.

A missing reference means the document has a shape the converter does not
understand, so every lookup raises :class:`DocumentError` rather than
returning ``None``.
"""
from typing import Dict, List

from .document import Dataset, Layer, Model, PlayParameters, Point, SvDocument
from .exceptions import DocumentError


class LayerResolver:
    """Lookup helper over an :class:`SvDocument`.

    Example:
        >>> resolver = LayerResolver(load_document('song.sv'))
        >>> for layer in resolver.layers_of_type('notes'):
        ...     model = resolver.model_for(layer)
        ...     print(layer.display_name, model.sample_rate)
    """

    def __init__(self, document: SvDocument) -> None:
        self.document = document
        # first record wins when ids repeat
        self._models: Dict[int, Model] = {}
        for model in document.models:
            self._models.setdefault(model.id, model)
        self._datasets: Dict[int, Dataset] = {}
        for dataset in document.datasets:
            self._datasets.setdefault(dataset.id, dataset)
        self._play_parameters: Dict[int, PlayParameters] = {}
        for params in document.play_parameters:
            self._play_parameters.setdefault(params.model, params)

    def layers_of_type(self, layer_type: str) -> List[Layer]:
        """Return layers with the given type tag, in document order."""
        return [layer for layer in self.document.layers if layer.type == layer_type]

    def model_for(self, layer: Layer) -> Model:
        model = self._models.get(layer.model)
        if model is None:
            raise DocumentError(
                f"{layer.type} layer '{layer.display_name}' refers to missing model {layer.model}",
                layer=layer.display_name,
            )
        return model

    def dataset_for(self, layer: Layer) -> Dataset:
        model = self.model_for(layer)
        if model.dataset is None:
            raise DocumentError(
                f"model {model.id} of {layer.type} layer '{layer.display_name}' has no dataset",
                layer=layer.display_name,
            )
        dataset = self._datasets.get(model.dataset)
        if dataset is None:
            raise DocumentError(
                f"model {model.id} of {layer.type} layer '{layer.display_name}' "
                f"refers to missing dataset {model.dataset}",
                layer=layer.display_name,
            )
        return dataset

    def points_for(self, layer: Layer) -> List[Point]:
        return list(self.dataset_for(layer).points)

    def play_parameters_for(self, layer: Layer) -> PlayParameters:
        params = self._play_parameters.get(layer.model)
        if params is None:
            raise DocumentError(
                f"no play parameters for model {layer.model} of {layer.type} layer '{layer.display_name}'",
                layer=layer.display_name,
            )
        return params
