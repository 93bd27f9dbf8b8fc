# mlkit/loader.py
"""
Ingesta de CSV -> Dataset.

load_csv nunca lanza: devuelve un LoadResult con el Dataset o con el motivo
de la falla. Las etiquetas de texto se mapean a enteros con un LabelEncoder
propio de cada llamada (no hay estado global).
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

import numpy as np
import pandas as pd

from mlkit.dataset import Dataset
from mlkit.errors import LoadFailure

logger = logging.getLogger(__name__)


class LoadError(Enum):
    BAD_EXTENSION = "bad_extension"
    UNREADABLE = "unreadable"
    MALFORMED = "malformed"
    NON_NUMERIC_FEATURE = "non_numeric_feature"
    BAD_LABEL = "bad_label"
    BAD_LABEL_COLUMN = "bad_label_column"
    EMPTY = "empty"


@dataclass
class LabelEncoder:
    """Texto -> id entero, asignados 0, 1, 2, ... en orden de aparición."""
    mapping: Dict[str, int] = field(default_factory=dict)

    def encode(self, text: str) -> int:
        if text not in self.mapping:
            self.mapping[text] = len(self.mapping)
        return self.mapping[text]

    def decode(self, label: int) -> str:
        return self.classes_[int(label)]

    @property
    def classes_(self) -> Dict[int, str]:
        return {v: k for k, v in self.mapping.items()}

    def __len__(self):
        return len(self.mapping)


@dataclass
class LoadResult:
    dataset: Optional[Dataset] = None
    encoder: Optional[LabelEncoder] = None
    error: Optional[LoadError] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Dataset:
        if self.error is not None:
            raise LoadFailure(self.error, self.message)
        return self.dataset


def _fail(error: LoadError, message: str) -> LoadResult:
    logger.warning("load_csv: %s (%s)", message, error.value)
    return LoadResult(error=error, message=message)


def load_csv(path, has_header: bool = True, label_column: int = -1) -> LoadResult:
    """
    Lee un CSV delimitado por comas.
      - has_header: saltear la primera fila
      - label_column: índice de la columna de etiqueta (-1 = última)

    Falla (sin lanzar) si:
      - la extensión no es .csv
      - el archivo no se puede leer
      - alguna celda de feature no es numérica o finita (aborta toda la carga)
      - alguna fila no tiene celda de etiqueta
      - no quedó ninguna fila
    """
    path = Path(path)
    if path.suffix.lower() != ".csv":
        return _fail(LoadError.BAD_EXTENSION, f"Se esperaba un .csv: {path}")
    if not path.is_file():
        return _fail(LoadError.UNREADABLE, f"No se encontró el archivo: {path}")

    try:
        df = pd.read_csv(
            path,
            header=None,
            skiprows=1 if has_header else 0,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return _fail(LoadError.EMPTY, f"El CSV no tiene filas de datos: {path}")
    except pd.errors.ParserError as e:
        return _fail(LoadError.MALFORMED, f"CSV mal formado {path}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        return _fail(LoadError.UNREADABLE, f"No se pudo leer {path}: {e}")

    if df.shape[0] == 0:
        return _fail(LoadError.EMPTY, f"El CSV no tiene filas de datos: {path}")

    n_cols = df.shape[1]
    col = label_column + n_cols if label_column < 0 else label_column
    if not 0 <= col < n_cols:
        return _fail(
            LoadError.BAD_LABEL_COLUMN,
            f"label_column={label_column} fuera de rango para {n_cols} columnas",
        )

    df = df.fillna("")
    label_name = df.columns[col]
    feature_cols = [c for c in df.columns if c != label_name]

    # fila corta: sin celda de etiqueta -> se aborta la carga
    raw = df[label_name].astype(str).str.strip()
    missing = np.flatnonzero((raw == "").to_numpy())
    if missing.size:
        return _fail(
            LoadError.MALFORMED,
            f"Fila {int(missing[0])} sin etiqueta en columna {label_name}",
        )

    features = np.empty((df.shape[0], len(feature_cols)), dtype=float)
    for j, c in enumerate(feature_cols):
        values = pd.to_numeric(df[c], errors="coerce").to_numpy(dtype=float)
        bad = np.flatnonzero(~np.isfinite(values))
        if bad.size:
            i = int(bad[0])
            return _fail(
                LoadError.NON_NUMERIC_FEATURE,
                f"Valor no numérico {df[c].iloc[i]!r} en fila {i}, columna {c}",
            )
        features[:, j] = values

    # etiquetas: si alguna no es numérica, se internan todas como texto
    numeric = pd.to_numeric(raw, errors="coerce").to_numpy(dtype=float)
    encoder = None
    if np.all(np.isfinite(numeric)):
        labels = numeric.astype(np.int64)
        if np.any(labels < 0):
            return _fail(LoadError.BAD_LABEL, f"Etiquetas negativas en {path}")
    else:
        encoder = LabelEncoder()
        labels = [encoder.encode(cell) for cell in raw.tolist()]
        logger.info("load_csv: %d etiquetas de texto mapeadas a enteros", len(encoder))

    dataset = Dataset(features, labels)
    logger.debug("load_csv: %s -> %r", path, dataset)
    return LoadResult(dataset=dataset, encoder=encoder)
