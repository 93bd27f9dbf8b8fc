# mlkit/scaler.py
from __future__ import annotations
import logging

import numpy as np

logger = logging.getLogger(__name__)


def minmax_scale_(X: np.ndarray) -> np.ndarray:
    """
    Min-max por columna, IN PLACE:
      x_scaled = (x - min) / (max - min)

    Columnas constantes (max == min) no se tocan: nunca divide por cero.
    X tiene que ser un array float 2D escribible.
    """
    if X.shape[0] == 0:
        return X

    col_min = X.min(axis=0)
    col_max = X.max(axis=0)
    # a mitades: max - min puede exceder el rango float, max/2 - min/2 no
    half_span = col_max / 2 - col_min / 2
    cols = half_span > 0

    skipped = np.flatnonzero(~cols)
    if skipped.size:
        logger.debug("normalize: columnas constantes sin cambios %s", skipped.tolist())

    X[:, cols] = (X[:, cols] / 2 - col_min[cols] / 2) / half_span[cols]
    return X


def standard_scale_(X: np.ndarray) -> np.ndarray:
    """
    z-score por columna, IN PLACE:
      x_scaled = (x - mean) / std

    std muestral (ddof=1). Columnas con std == 0 (o mean/std fuera del
    rango float) no se tocan.
    Con menos de 2 filas la std muestral no está definida: no se hace nada.
    """
    if X.shape[0] < 2:
        return X

    mean = X.mean(axis=0)
    std = X.std(axis=0, ddof=1)
    cols = (std > 0) & np.isfinite(std) & np.isfinite(mean)

    skipped = np.flatnonzero(~cols)
    if skipped.size:
        logger.debug("standardize: columnas con std 0 o no finita sin cambios %s", skipped.tolist())

    X[:, cols] = (X[:, cols] - mean[cols]) / std[cols]
    return X
