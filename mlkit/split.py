# mlkit/split.py
from __future__ import annotations
import logging
import math

import numpy as np

from mlkit.errors import InvalidArgument

logger = logging.getLogger(__name__)


def shuffle(n: int, seed: int | None = None) -> np.ndarray:
    """
    Permutación de [0, n) con un generador determinístico.
    Misma semilla -> misma permutación (dentro de esta implementación).
    """
    idx = np.arange(int(n))
    rng = np.random.default_rng(seed)
    rng.shuffle(idx)
    return idx


def split_indices(n: int, test_ratio: float = 0.1, seed: int | None = 41):
    """
    Índices de train y test para n muestras.
      - test_size = floor(n * test_ratio)
      - los primeros train_size índices permutados van a train, el resto a test
    Devuelve: train_idx, test_idx
    """
    test_ratio = float(test_ratio)
    if not 0.0 < test_ratio < 1.0:
        raise InvalidArgument(f"test_ratio debe estar en (0, 1), se recibió {test_ratio}.")

    n = int(n)
    test_size = int(math.floor(n * test_ratio))
    train_size = n - test_size

    idx = shuffle(n, seed)
    logger.debug("split: n=%d train=%d test=%d seed=%s", n, train_size, test_size, seed)
    return idx[:train_size], idx[train_size:]


def train_test_split(X, y, test_ratio: float = 0.1, seed: int | None = 41):
    """
    Split básico sobre arrays sueltos, con la misma regla que Dataset.train_test_split.
    Devuelve copias: X_train, X_test, y_train, y_test
    """
    X = np.asarray(X)
    y = np.asarray(y)
    if X.shape[0] != y.shape[0]:
        raise InvalidArgument("X e y deben tener la misma cantidad de filas.")

    train_idx, test_idx = split_indices(X.shape[0], test_ratio, seed)
    return X[train_idx].copy(), X[test_idx].copy(), y[train_idx].copy(), y[test_idx].copy()
