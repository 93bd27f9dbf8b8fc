# mlkit/knn.py
from __future__ import annotations
import logging
from collections import Counter

import numpy as np

from mlkit.dataset import Dataset
from mlkit.distance import as_metric
from mlkit.errors import DimensionMismatch, InvalidArgument, ModelNotFitted

logger = logging.getLogger(__name__)


class KNNClassifier:
    """
    KNN manual (lazy learner):
      - fit(dataset) solo copia los datos de entrenamiento
      - find_k_nearest(x): índices de los min(k, n_train) vecinos más cercanos
      - majority_vote(idx): voto por mayoría, empate -> etiqueta más chica
      - predict(x) / predict(X)
      - score(test_dataset): accuracy contra las etiquetas del propio test

    metric: DistanceMetric, nombre ('euclidean', 'manhattan', ...) o
    cualquier callable f(a, b) -> float. Por defecto euclidean.
    """
    def __init__(self, k: int = 3, metric=None):
        k = int(k)
        if k < 1:
            raise InvalidArgument(f"k debe ser >= 1, se recibió k={k}.")
        self.k = k
        self.metric = as_metric(metric)

        self.X_ = None
        self.y_ = None

    def __repr__(self):
        return f"KNNClassifier(k={self.k}, metric={self.metric!r})"

    @property
    def is_fitted(self) -> bool:
        return self.X_ is not None

    def _check_fitted(self):
        if self.X_ is None:
            raise ModelNotFitted("KNN no está fitteado. Llamá fit() primero.")

    def fit(self, dataset, y=None) -> "KNNClassifier":
        """
        Guarda una copia propia del set de entrenamiento.
        Acepta un Dataset, o X, y sueltos. Un segundo fit reemplaza al anterior.
        """
        if y is not None or not isinstance(dataset, Dataset):
            dataset = Dataset(dataset, y)

        if dataset.size() == 0:
            raise InvalidArgument("No se puede entrenar con un dataset vacío.")

        self.X_ = np.array(dataset.features, dtype=float)
        self.y_ = np.array(dataset.labels, dtype=np.int64)
        logger.debug("fit: %d muestras, %d features, k=%d", self.X_.shape[0], self.X_.shape[1], self.k)
        return self

    def _as_sample(self, sample) -> np.ndarray:
        x = np.asarray(sample, dtype=float).ravel()
        if x.shape[0] != self.X_.shape[1]:
            raise DimensionMismatch(
                f"La muestra tiene {x.shape[0]} features, el entrenamiento tiene {self.X_.shape[1]}."
            )
        if not np.all(np.isfinite(x)):
            raise InvalidArgument("La muestra contiene valores no finitos (NaN o inf).")
        return x

    def find_k_nearest(self, sample) -> np.ndarray:
        """
        Índices de los min(k, n_train) vecinos, ordenados por distancia ascendente.
        Empates de distancia -> índice de entrenamiento ascendente.
        """
        self._check_fitted()
        x = self._as_sample(sample)

        dist = self.metric.distances_to(x, self.X_)  # (N,)
        if np.any(np.isnan(dist)):
            raise InvalidArgument(f"La métrica {self.metric!r} devolvió NaN.")
        n = dist.shape[0]
        k = min(self.k, n)

        if k < n:
            # selección parcial: todo lo que está a distancia <= k-ésima
            # (incluye los empates en el borde, así el desempate por índice es exacto)
            kth = np.argpartition(dist, kth=k - 1)[k - 1]
            cand = np.flatnonzero(dist <= dist[kth])
        else:
            cand = np.arange(n)

        order = np.lexsort((cand, dist[cand]))  # clave primaria: distancia
        return cand[order[:k]]

    def majority_vote(self, neighbor_indices) -> int:
        idx = np.asarray(neighbor_indices, dtype=np.int64).ravel()
        if idx.shape[0] == 0:
            raise InvalidArgument("majority_vote necesita al menos un vecino.")
        self._check_fitted()

        counts = Counter(self.y_[idx].tolist())
        best = max(counts.values())
        return int(min(label for label, c in counts.items() if c == best))

    def _predict_one(self, x) -> int:
        return self.majority_vote(self.find_k_nearest(x))

    def predict(self, X):
        """
        1D -> una etiqueta (int)
        2D -> array de etiquetas, mismo orden que las filas
        """
        self._check_fitted()
        X = np.asarray(X, dtype=float)
        if X.ndim <= 1:
            return self._predict_one(X)
        if X.ndim != 2:
            raise DimensionMismatch("predict espera una muestra 1D o una matriz 2D.")
        if X.shape[1] != self.X_.shape[1]:
            raise DimensionMismatch(
                f"Las muestras tienen {X.shape[1]} features, el entrenamiento tiene {self.X_.shape[1]}."
            )
        return np.array([self._predict_one(row) for row in X], dtype=np.int64)

    def score(self, test_dataset: Dataset) -> float:
        """correct / n_test contra las etiquetas de test_dataset. Test vacío -> 0.0"""
        self._check_fitted()
        if test_dataset.size() == 0:
            return 0.0

        y_pred = self.predict(test_dataset.features)
        correct = int(np.sum(y_pred == test_dataset.labels))
        return correct / test_dataset.size()
