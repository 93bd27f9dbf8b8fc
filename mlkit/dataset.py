# mlkit/dataset.py
from __future__ import annotations
import logging

import numpy as np

from mlkit.errors import DimensionMismatch, InvalidArgument
from mlkit.scaler import minmax_scale_, standard_scale_
from mlkit.split import split_indices

logger = logging.getLogger(__name__)


def _as_feature_matrix(features) -> np.ndarray:
    try:
        X = np.array(features, dtype=float)  # copia propia
    except ValueError as e:
        raise DimensionMismatch(f"Todas las filas deben tener la misma cantidad de features: {e}") from e

    if X.size == 0 and X.ndim < 2:
        return X.reshape(0, 0)
    if X.ndim != 2:
        raise DimensionMismatch(f"features debe ser 2D (n_samples, n_features), se recibió ndim={X.ndim}.")
    if not np.all(np.isfinite(X)):
        raise InvalidArgument("features contiene valores no finitos (NaN o inf).")
    return X


def _as_label_vector(labels) -> np.ndarray:
    y = np.array(labels)
    if y.size == 0:
        return np.zeros(0, dtype=np.int64)
    if y.ndim != 1:
        raise DimensionMismatch(f"labels debe ser 1D, se recibió ndim={y.ndim}.")

    if not np.issubdtype(y.dtype, np.integer):
        if not np.issubdtype(y.dtype, np.floating) or not np.all(np.mod(y, 1) == 0):
            raise InvalidArgument("Las etiquetas deben ser enteros.")
    y = y.astype(np.int64)

    if np.any(y < 0):
        raise InvalidArgument("Las etiquetas deben ser enteros no negativos.")
    return y


class Dataset:
    """
    Matriz de features (n, d) + vector de etiquetas (n,) alineados por posición.

    - El Dataset es dueño de sus arrays: copia lo que recibe.
    - features / labels se exponen como vistas de solo lectura.
    - normalize() y standardize() modifican in place y no guardan
      los parámetros (min/max, mean/std): no se pueden reaplicar a otros datos.
    """
    def __init__(self, features=None, labels=None):
        X = _as_feature_matrix([] if features is None else features)
        y = _as_label_vector([] if labels is None else labels)

        if X.shape[0] != y.shape[0]:
            raise DimensionMismatch(
                f"features y labels deben tener la misma cantidad de filas ({X.shape[0]} != {y.shape[0]})."
            )

        self._X = X
        self._y = y

    @property
    def features(self) -> np.ndarray:
        view = self._X.view()
        view.flags.writeable = False
        return view

    @property
    def labels(self) -> np.ndarray:
        view = self._y.view()
        view.flags.writeable = False
        return view

    def size(self) -> int:
        return int(self._X.shape[0])

    def num_features(self) -> int:
        if self._X.shape[0] == 0:
            return 0
        return int(self._X.shape[1])

    def __len__(self):
        return self.size()

    def __repr__(self):
        return f"Dataset(n_samples={self.size()}, n_features={self.num_features()})"

    def _subset(self, idx) -> "Dataset":
        # fancy indexing ya copia; Dataset() vuelve a copiar, no hay aliasing
        return Dataset(self._X[idx], self._y[idx])

    def train_test_split(self, test_ratio: float = 0.1, seed: int | None = 41):
        """
        Partición reproducible por semilla.
          - test_size = floor(n * test_ratio), train_size = n - test_size
          - test_size == 0 es válido (test vacío)
          - n == 0 -> dos datasets vacíos
        Devuelve: (train, test), ambos independientes de self.
        """
        train_idx, test_idx = split_indices(self.size(), test_ratio, seed)
        train, test = self._subset(train_idx), self._subset(test_idx)
        logger.debug("train_test_split -> train=%d test=%d", train.size(), test.size())
        return train, test

    def normalize(self) -> None:
        """Min-max por columna a [0, 1]. Columnas constantes quedan igual."""
        minmax_scale_(self._X)

    def standardize(self) -> None:
        """z-score por columna con std muestral (n-1). Columnas con std 0 quedan igual."""
        standard_scale_(self._X)
