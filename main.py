import argparse
import logging
import sys

import numpy as np

from mlkit.distance import get_metric
from mlkit.errors import MLKitError
from mlkit.knn import KNNClassifier
from mlkit.loader import load_csv
from mlkit.metrics import classification_report, confusion_matrix


logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# ================================
# CONFIGURACIÓN
# ================================

CSV_PATH     = "data/ejemplo.csv"
HAS_HEADER   = True
LABEL_COLUMN = -1          # -1 = última columna

SCALING      = "normalize" # 'normalize', 'standardize' o 'none'
TEST_RATIO   = 0.2
SEED         = 41

K            = 5
METRIC       = "euclidean"
MINKOWSKI_P  = 3.0


# ================================
# FUNCIONES AUXILIARES
# ================================

def build_metric(name: str, p: float):
    if name == "minkowski":
        return get_metric(name, p=p)
    return get_metric(name)


def run(
    csv_path: str = CSV_PATH,
    has_header: bool = HAS_HEADER,
    label_column: int = LABEL_COLUMN,
    scaling: str = SCALING,
    test_ratio: float = TEST_RATIO,
    seed: int = SEED,
    k: int = K,
    metric: str = METRIC,
    p: float = MINKOWSKI_P,
) -> float:
    """
    Pipeline completo:
      1) Cargar CSV
      2) Escalar (opcional, in place)
      3) Dividir en train / test
      4) Entrenar KNN
      5) Predecir una muestra, el test completo y evaluar

    Devuelve la accuracy sobre test.
    """
    # 1) Cargar dataset
    result = load_csv(csv_path, has_header=has_header, label_column=label_column)
    dataset = result.unwrap()
    logger.info(f"Dataset: {dataset.size()} muestras, {dataset.num_features()} features")

    # 2) Escalar
    if scaling == "normalize":
        dataset.normalize()
    elif scaling == "standardize":
        dataset.standardize()

    # 3) Dividir en train / test
    train, test = dataset.train_test_split(test_ratio=test_ratio, seed=seed)
    logger.info(f"Train samples: {train.size()}, Test samples: {test.size()}")

    # 4) Entrenar
    model = KNNClassifier(k=k, metric=build_metric(metric, p))
    model.fit(train)
    logger.info(f"Modelo: {model!r}")

    target_names = result.encoder.classes_ if result.encoder is not None else None

    if test.size() == 0:
        logger.warning("El test quedó vacío: no hay nada que evaluar.")
        return 0.0

    # 5) Predecir y evaluar
    sample = test.features[0]
    label = model.predict(sample)
    shown = target_names[label] if target_names else label
    logger.info(f"Muestra {np.round(sample, 3).tolist()} -> {shown}")

    y_pred = model.predict(test.features)
    acc = model.score(test)

    logger.info(f"Accuracy: {acc * 100:.2f}%")
    print("Matriz de confusión:")
    print(confusion_matrix(test.labels, y_pred))
    print("Reporte de clasificación:")
    print(classification_report(test.labels, y_pred, target_names=target_names))

    return acc


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Clasificador KNN sobre un CSV")
    parser.add_argument("csv_path", nargs="?", default=CSV_PATH, help="CSV con features y etiqueta")
    parser.add_argument("--no-header", action="store_true", help="El CSV no tiene fila de encabezado")
    parser.add_argument("--label-column", type=int, default=LABEL_COLUMN)
    parser.add_argument("--scaling", choices=["normalize", "standardize", "none"], default=SCALING)
    parser.add_argument("--test-ratio", type=float, default=TEST_RATIO)
    parser.add_argument("--seed", type=int, default=SEED)
    parser.add_argument("-k", type=int, default=K, help="Cantidad de vecinos")
    parser.add_argument(
        "--metric",
        choices=["euclidean", "manhattan", "chebyshev", "minkowski"],
        default=METRIC,
    )
    parser.add_argument("-p", type=float, default=MINKOWSKI_P, help="p de minkowski")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        run(
            csv_path=args.csv_path,
            has_header=not args.no_header,
            label_column=args.label_column,
            scaling=args.scaling,
            test_ratio=args.test_ratio,
            seed=args.seed,
            k=args.k,
            metric=args.metric,
            p=args.p,
        )
    except MLKitError as e:
        logger.error(f"[ERROR] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
