"""
Demo: build, compile, summarize, and save a small sequential model.
"""

import logging

from csrnet import Model

""" 'Configuration' of the demo """
OUTPUT = "model.json"
INPUT_SHAPE = [10, 10]
HIDDEN_UNITS = 100
PLOT = False


def build_model() -> Model:
    model = Model.sequential()
    model.add(Model.dense(units=HIDDEN_UNITS, activation="relu", input_shape=INPUT_SHAPE))
    model.add(Model.dense(units=1, activation="linear"))
    model.compile(optimizer="sgd", loss="meanSquaredError")
    return model


def summarize(model: Model):
    """ Tabulate each layer's weight & bias shapes and densities """
    import pandas as pd

    records = []
    for layer in model.layers:
        w, b = layer.weights, layer.biases
        records.append(dict(
            activation=layer.activation,
            units=layer.units,
            weights=f'{w.rows}x{w.cols}',
            density=w.nnz / (w.rows * w.cols),
            biases=f'{b.rows}x{b.cols}' if b is not None else '-',
        ))
    return pd.DataFrame.from_records(records)


def plot(model: Model):
    import matplotlib.pyplot as plt

    weights = model.layers[0].weights
    plt.imshow(weights.to_numpy(), aspect='auto', cmap='coolwarm')
    plt.colorbar()
    plt.title(f'Layer 0 weights ({weights.rows}x{weights.cols})')
    plt.show()


def main():
    logging.basicConfig(level=logging.INFO)
    model = build_model()
    print(summarize(model))
    model.save(OUTPUT)
    print(f'Saved model to {OUTPUT}')
    if PLOT:
        plot(model)


if __name__ == '__main__':
    main()
