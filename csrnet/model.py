"""
Sequential Neural-Network Model Scaffold

Layers hold their weights and biases as sparse `Matrix` instances.
Compiling a model infers each layer's weight shape and randomly initializes anything missing.
"""

import json
import logging
from functools import reduce
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .sparse import Matrix

logger = logging.getLogger(__name__)

ACTIVATIONS = ("relu", "sigmoid", "softmax", "tanh", "linear")
OPTIMIZERS = ("sgd", "adam", "rmsprop")
LOSSES = ("meanSquaredError", "crossEntropy")


class ModelError(Exception):
    @classmethod
    def assert_in(cls, x, options: Sequence, what: str):
        if x not in options:
            raise cls(f'Invalid {what} {x!r}, expecting one of {tuple(options)}')


class Dense(object):
    """ Fully-connected layer """

    type = "dense"

    def __init__(self, *, units: int, activation: str,
                 use_bias: bool = True, trainable: bool = True,
                 input_shape: Optional[Sequence[int]] = None,
                 weights: Optional[Matrix] = None, biases: Optional[Matrix] = None):
        ModelError.assert_in(activation, ACTIVATIONS, "activation")
        if not isinstance(units, int) or units <= 0:
            raise ModelError(f'Invalid units {units!r}: must be a positive integer')
        self.units = units
        self.activation = activation
        self.use_bias = use_bias
        self.trainable = trainable
        self.input_shape = list(input_shape) if input_shape is not None else None
        self.weights = weights
        self.biases = biases

    def __repr__(self):
        return f'<{self.__class__.__name__}(units={self.units}, activation={self.activation})>'

    def to_dict(self) -> dict:
        return dict(
            type=self.type,
            units=self.units,
            activation=self.activation,
            use_bias=self.use_bias,
            trainable=self.trainable,
            input_shape=self.input_shape,
            weights=self.weights.to_dict() if self.weights is not None else None,
            biases=self.biases.to_dict() if self.biases is not None else None,
        )

    @classmethod
    def from_dict(cls, d: dict) -> "Dense":
        if d.get('type', cls.type) != cls.type:
            raise ModelError(f'Unsupported layer type {d["type"]!r}')
        return cls(
            units=d['units'],
            activation=d['activation'],
            use_bias=d.get('use_bias', True),
            trainable=d.get('trainable', True),
            input_shape=d.get('input_shape'),
            weights=Matrix.from_dict(d['weights']) if d.get('weights') else None,
            biases=Matrix.from_dict(d['biases']) if d.get('biases') else None,
        )


class CompileOptions(object):
    def __init__(self, optimizer: str, loss: str):
        ModelError.assert_in(optimizer, OPTIMIZERS, "optimizer")
        ModelError.assert_in(loss, LOSSES, "loss")
        self.optimizer = optimizer
        self.loss = loss

    def to_dict(self) -> dict:
        return dict(optimizer=self.optimizer, loss=self.loss)


class Model(object):
    """ Sequential stack of layers """

    def __init__(self):
        self.layers: List[Dense] = []
        self.compile_options: Optional[CompileOptions] = None

    @classmethod
    def sequential(cls) -> "Model":
        return cls()

    @staticmethod
    def dense(**kw) -> Dense:
        """ Create a `Dense` layer. See `Dense` for arguments. """
        return Dense(**kw)

    @property
    def compiled(self) -> bool:
        return self.compile_options is not None

    def add(self, layer: Dense) -> None:
        """ Append `layer`. Layers added after `compile` are ignored. """
        if self.compiled:
            logger.warning(f'Ignoring {layer!r}, added to an already-compiled model')
            return
        self.layers.append(layer)

    def compile(self, optimizer: str, loss: str, rand_function: Optional[Callable[[], float]] = None) -> None:
        """ Set training options, infer each layer's weight shape, and initialize missing weights & biases.
        Weights are `units` x `inputs`, where `inputs` is the flattened `input_shape` for the first layer,
        and the previous layer's `units` thereafter. Biases are `units` x 1. """
        options = CompileOptions(optimizer=optimizer, loss=loss)
        if self.layers and not self.layers[0].input_shape:
            raise ModelError('The first layer requires an `input_shape`')
        self.compile_options = options
        logger.info(f'Compiling model of {len(self.layers)} layers with {optimizer}/{loss}')

        inputs = None
        for index, layer in enumerate(self.layers):
            if index == 0:
                inputs = reduce(lambda acc, x: acc * x, layer.input_shape, 1)
            if layer.weights is None:
                layer.weights = Matrix.random(layer.units, inputs, rand_function)
            if layer.use_bias and layer.biases is None:
                layer.biases = Matrix.random(layer.units, 1, rand_function)
            logger.debug(f'Layer {index}: weights {layer.weights!r}, biases {layer.biases!r}')
            inputs = layer.units

    def to_dict(self) -> dict:
        return dict(
            layers=[layer.to_dict() for layer in self.layers],
            compile_options=self.compile_options.to_dict() if self.compiled else None,
        )

    @classmethod
    def from_dict(cls, d: dict) -> "Model":
        model = cls()
        model.layers = [Dense.from_dict(layer) for layer in d['layers']]
        options = d.get('compile_options')
        if options:
            model.compile_options = CompileOptions(**options)
        return model

    def to_json(self, **kw) -> str:
        return json.dumps(self.to_dict(), **kw)

    @classmethod
    def from_json(cls, s: str) -> "Model":
        return cls.from_dict(json.loads(s))

    def save(self, file) -> None:
        Path(file).write_text(self.to_json())

    @classmethod
    def load(cls, file) -> "Model":
        return cls.from_json(Path(file).read_text())
