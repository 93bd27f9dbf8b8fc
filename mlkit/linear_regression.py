# mlkit/linear_regression.py
from __future__ import annotations
import logging

import numpy as np

from mlkit.dataset import Dataset
from mlkit.errors import DimensionMismatch, InvalidArgument, ModelNotFitted
from mlkit.metrics import r2_score

logger = logging.getLogger(__name__)


class LinearRegression:
    """
    Regresión lineal manual: y = bias + w1*x1 + ... + wd*xd

    method:
      - 'normal': mínimos cuadrados cerrados (np.linalg.lstsq sobre [1, X])
      - 'gradient': descenso por gradiente sobre el MSE

    API parecida a sklearn:
      - fit(X, y) o fit(dataset)  (con un Dataset, las etiquetas son el target)
      - predict(x) / predict(X)
      - score(X, y) -> R²
      - weights_, bias_
    """
    def __init__(self, learning_rate: float = 0.01, n_iterations: int = 1000, method: str = "normal"):
        self.learning_rate = float(learning_rate)
        self.n_iterations = int(n_iterations)
        self.method = str(method)

        if self.method not in ("normal", "gradient"):
            raise InvalidArgument("method soporta 'normal' o 'gradient'.")
        if not self.learning_rate > 0:
            raise InvalidArgument(f"learning_rate debe ser > 0, se recibió {learning_rate}.")
        if self.n_iterations < 1:
            raise InvalidArgument(f"n_iterations debe ser >= 1, se recibió {n_iterations}.")

        self.weights_ = None
        self.bias_ = None

    def __repr__(self):
        return f"LinearRegression(method={self.method!r})"

    @property
    def is_fitted(self) -> bool:
        return self.weights_ is not None

    def _check_fitted(self):
        if self.weights_ is None:
            raise ModelNotFitted("LinearRegression no está fitteado. Llamá fit() primero.")

    @staticmethod
    def _as_training_data(X, y):
        if isinstance(X, Dataset) and y is None:
            return np.array(X.features, dtype=float), np.array(X.labels, dtype=float)

        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float).ravel()
        if X.ndim != 2:
            raise DimensionMismatch("LinearRegression.fit espera X 2D (n_samples, n_features).")
        if X.shape[0] != y.shape[0]:
            raise DimensionMismatch("X e y deben tener la misma cantidad de muestras.")
        return X, y

    def fit(self, X, y=None) -> "LinearRegression":
        X, y = self._as_training_data(X, y)
        if X.shape[0] == 0:
            raise InvalidArgument("No se puede entrenar con un dataset vacío.")
        if not (np.all(np.isfinite(X)) and np.all(np.isfinite(y))):
            raise InvalidArgument("X e y deben ser finitos.")

        if self.method == "normal":
            self._fit_normal_equation(X, y)
        else:
            self._fit_gradient_descent(X, y)

        logger.debug("fit (%s): bias=%.6g weights=%s", self.method, self.bias_, self.weights_.tolist())
        return self

    def _fit_normal_equation(self, X, y):
        # columna de unos para el intercepto; lstsq tolera X^T X singular
        A = np.hstack([np.ones((X.shape[0], 1)), X])
        theta, *_ = np.linalg.lstsq(A, y, rcond=None)
        self.bias_ = float(theta[0])
        self.weights_ = theta[1:]

    def _fit_gradient_descent(self, X, y):
        m, d = X.shape
        w = np.zeros(d, dtype=float)
        b = 0.0

        for _ in range(self.n_iterations):
            error = X @ w + b - y
            grad_w = X.T @ error / m
            grad_b = float(np.mean(error))

            w -= self.learning_rate * grad_w
            b -= self.learning_rate * grad_b

            if not (np.all(np.isfinite(w)) and np.isfinite(b)):
                raise InvalidArgument(
                    f"El descenso por gradiente divergió (learning_rate={self.learning_rate}). "
                    "Probá un learning_rate menor o normalizar las features."
                )

        self.weights_ = w
        self.bias_ = b

    def predict(self, X):
        """
        1D -> un valor (float)
        2D -> array de predicciones, mismo orden que las filas
        """
        self._check_fitted()
        X = np.asarray(X, dtype=float)
        d = self.weights_.shape[0]

        if X.ndim <= 1:
            x = X.ravel()
            if x.shape[0] != d:
                raise DimensionMismatch(f"La muestra tiene {x.shape[0]} features, el modelo tiene {d}.")
            return float(x @ self.weights_ + self.bias_)

        if X.ndim != 2 or X.shape[1] != d:
            raise DimensionMismatch(f"predict espera una matriz (n, {d}).")
        return X @ self.weights_ + self.bias_

    def score(self, X, y=None) -> float:
        """R² sobre (X, y) o sobre un Dataset."""
        X, y = self._as_training_data(X, y)
        return r2_score(y, self.predict(X))
