# mlkit/distance.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable

import numpy as np

from mlkit.errors import DimensionMismatch, InvalidArgument


def _as_pair(a, b):
    a = np.asarray(a, dtype=float).ravel()
    b = np.asarray(b, dtype=float).ravel()
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatch(
            f"Los vectores deben tener el mismo largo ({a.shape[0]} != {b.shape[0]})."
        )
    return a, b


def _check_p(p) -> float:
    # p finito: con p=inf, 0**0 daría d(a, a) = 1 (para L-inf usar chebyshev)
    p = float(p)
    if not (p >= 1.0 and np.isfinite(p)):
        raise InvalidArgument(f"minkowski requiere 1 <= p < inf, se recibió p={p}.")
    return p


def euclidean_distance(a, b) -> float:
    """L2: sqrt(sum((a_i - b_i)^2))"""
    a, b = _as_pair(a, b)
    diff = a - b
    return float(np.sqrt(np.sum(diff * diff)))


def manhattan_distance(a, b) -> float:
    """L1: sum(|a_i - b_i|)"""
    a, b = _as_pair(a, b)
    return float(np.sum(np.abs(a - b)))


def chebyshev_distance(a, b) -> float:
    """L-inf: max(|a_i - b_i|). Dos vectores vacíos están a distancia 0."""
    a, b = _as_pair(a, b)
    if a.shape[0] == 0:
        return 0.0
    return float(np.max(np.abs(a - b)))


def minkowski_distance(a, b, p: float = 2.0) -> float:
    """
    (sum(|a_i - b_i|^p))^(1/p), con p >= 1.
      - p=1 -> manhattan
      - p=2 -> euclidean
      - p->inf tiende a chebyshev
    """
    p = _check_p(p)
    a, b = _as_pair(a, b)
    return float(np.sum(np.abs(a - b) ** p) ** (1.0 / p))


class DistanceMetric(ABC):
    """
    Estrategia de distancia que consume KNNClassifier.

    Contrato:
      - compute(a, b) >= 0
      - compute(a, a) == 0
      - compute(a, b) == compute(b, a)
      - largos distintos -> DimensionMismatch
    """
    name = "custom"

    @abstractmethod
    def compute(self, a, b) -> float:
        ...

    def __call__(self, a, b) -> float:
        return self.compute(a, b)

    def distances_to(self, x: np.ndarray, X: np.ndarray) -> np.ndarray:
        # x: (D,), X: (N,D) -> dist: (N,)
        return np.array([self.compute(x, row) for row in X], dtype=float)

    def __repr__(self):
        return f"{type(self).__name__}()"


class EuclideanDistance(DistanceMetric):
    name = "euclidean"

    def compute(self, a, b) -> float:
        return euclidean_distance(a, b)

    def distances_to(self, x, X):
        diff = X - x[None, :]
        return np.sqrt(np.sum(diff * diff, axis=1))


class ManhattanDistance(DistanceMetric):
    name = "manhattan"

    def compute(self, a, b) -> float:
        return manhattan_distance(a, b)

    def distances_to(self, x, X):
        return np.sum(np.abs(X - x[None, :]), axis=1)


class ChebyshevDistance(DistanceMetric):
    name = "chebyshev"

    def compute(self, a, b) -> float:
        return chebyshev_distance(a, b)

    def distances_to(self, x, X):
        if X.shape[1] == 0:
            return np.zeros(X.shape[0], dtype=float)
        return np.max(np.abs(X - x[None, :]), axis=1)


class MinkowskiDistance(DistanceMetric):
    name = "minkowski"

    def __init__(self, p: float = 2.0):
        self.p = _check_p(p)

    def compute(self, a, b) -> float:
        return minkowski_distance(a, b, self.p)

    def distances_to(self, x, X):
        return np.sum(np.abs(X - x[None, :]) ** self.p, axis=1) ** (1.0 / self.p)

    def __repr__(self):
        return f"MinkowskiDistance(p={self.p})"


class FunctionDistance(DistanceMetric):
    """Adapta una función f(a, b) -> float al contrato de DistanceMetric."""

    def __init__(self, fn: Callable):
        self.fn = fn
        self.name = getattr(fn, "__name__", "custom")

    def compute(self, a, b) -> float:
        a, b = _as_pair(a, b)
        return float(self.fn(a, b))

    def __repr__(self):
        return f"FunctionDistance({self.name})"


_REGISTRY = {
    "euclidean": EuclideanDistance,
    "manhattan": ManhattanDistance,
    "chebyshev": ChebyshevDistance,
    "minkowski": MinkowskiDistance,
}


def get_metric(name: str, **kwargs) -> DistanceMetric:
    key = str(name).lower()
    if key not in _REGISTRY:
        raise InvalidArgument(
            f"Métrica desconocida: {name!r}. Opciones: {', '.join(sorted(_REGISTRY))}."
        )
    return _REGISTRY[key](**kwargs)


def as_metric(metric) -> DistanceMetric:
    """None -> euclidean, str -> registro, callable -> FunctionDistance."""
    if metric is None:
        return EuclideanDistance()
    if isinstance(metric, DistanceMetric):
        return metric
    if isinstance(metric, str):
        return get_metric(metric)
    if callable(metric):
        return FunctionDistance(metric)
    raise InvalidArgument(f"metric debe ser DistanceMetric, str o callable, no {type(metric).__name__}.")
