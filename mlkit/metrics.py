# mlkit/metrics.py
from __future__ import annotations
import numpy as np

from mlkit.errors import DimensionMismatch


def _pair(y_true, y_pred):
    y_true = np.asarray(y_true).ravel()
    y_pred = np.asarray(y_pred).ravel()
    if y_true.shape[0] != y_pred.shape[0]:
        raise DimensionMismatch("y_true y y_pred deben tener mismo largo.")
    return y_true, y_pred


def accuracy_score(y_true, y_pred) -> float:
    y_true, y_pred = _pair(y_true, y_pred)
    if y_true.shape[0] == 0:
        return 0.0
    return float(np.mean(y_true == y_pred))


def confusion_matrix(y_true, y_pred, labels=None):
    """cm[i, j] = cantidad con etiqueta real labels[i] y predicha labels[j]"""
    y_true, y_pred = _pair(y_true, y_pred)

    if labels is None:
        labels = np.unique(np.concatenate([y_true, y_pred]))
    labels = list(labels)
    idx = {lab: i for i, lab in enumerate(labels)}

    cm = np.zeros((len(labels), len(labels)), dtype=int)
    for yt, yp in zip(y_true.tolist(), y_pred.tolist()):
        if yt in idx and yp in idx:
            cm[idx[yt], idx[yp]] += 1
    return cm


def _counts(y_true, y_pred, target_class):
    y_true, y_pred = _pair(y_true, y_pred)
    tp = int(np.sum((y_pred == target_class) & (y_true == target_class)))
    fp = int(np.sum((y_pred == target_class) & (y_true != target_class)))
    fn = int(np.sum((y_pred != target_class) & (y_true == target_class)))
    return tp, fp, fn


def precision_score(y_true, y_pred, target_class) -> float:
    tp, fp, _ = _counts(y_true, y_pred, target_class)
    return tp / (tp + fp) if (tp + fp) > 0 else 0.0


def recall_score(y_true, y_pred, target_class) -> float:
    tp, _, fn = _counts(y_true, y_pred, target_class)
    return tp / (tp + fn) if (tp + fn) > 0 else 0.0


def f1_score(y_true, y_pred, target_class) -> float:
    prec = precision_score(y_true, y_pred, target_class)
    rec = recall_score(y_true, y_pred, target_class)
    return (2 * prec * rec / (prec + rec)) if (prec + rec) > 0 else 0.0


def _per_class(cm):
    # por clase a partir de la matriz: tp en la diagonal
    tp = np.diag(cm).astype(float)
    pred_tot = cm.sum(axis=0).astype(float)
    true_tot = cm.sum(axis=1).astype(float)

    prec = np.divide(tp, pred_tot, out=np.zeros_like(tp), where=pred_tot > 0)
    rec = np.divide(tp, true_tot, out=np.zeros_like(tp), where=true_tot > 0)
    denom = prec + rec
    f1 = np.divide(2 * prec * rec, denom, out=np.zeros_like(tp), where=denom > 0)
    return prec, rec, f1, true_tot.astype(int)


def classification_report(y_true, y_pred, labels=None, target_names=None, digits=4):
    """
    Reporte estilo sklearn (simplificado).
    target_names: dict {etiqueta: nombre} opcional, p.ej. LabelEncoder.classes_
    Devuelve string.
    """
    y_true, y_pred = _pair(y_true, y_pred)

    if labels is None:
        labels = np.unique(np.concatenate([y_true, y_pred]))
    labels = list(labels)
    names = target_names or {}

    cm = confusion_matrix(y_true, y_pred, labels=labels)
    prec, rec, f1, support = _per_class(cm)
    total = int(support.sum())

    lines = [f"{'class':<15}{'precision':>10}{'recall':>10}{'f1':>10}{'support':>10}"]
    for i, lab in enumerate(labels):
        name = str(names.get(lab, lab))
        lines.append(f"{name:<15}{prec[i]:>10.{digits}f}{rec[i]:>10.{digits}f}{f1[i]:>10.{digits}f}{int(support[i]):>10d}")

    def avg(values, weights=None):
        if len(values) == 0 or (weights is not None and total == 0):
            return 0.0
        return float(np.average(values, weights=weights))

    acc = accuracy_score(y_true, y_pred)
    lines.append("")
    lines.append(f"{'accuracy':<15}{acc:>30.{digits}f}{total:>10d}")
    for title, w in (("macro avg", None), ("weighted avg", support)):
        lines.append(
            f"{title:<15}{avg(prec, w):>10.{digits}f}{avg(rec, w):>10.{digits}f}{avg(f1, w):>10.{digits}f}{total:>10d}"
        )

    return "\n".join(lines)


# ==================== regresión ====================

def _float_pair(y_true, y_pred):
    y_true, y_pred = _pair(y_true, y_pred)
    return y_true.astype(float), y_pred.astype(float)


def mean_squared_error(y_true, y_pred) -> float:
    """MSE = mean((y_true - y_pred)^2). 0.0 con entrada vacía."""
    y_true, y_pred = _float_pair(y_true, y_pred)
    if y_true.shape[0] == 0:
        return 0.0
    diff = y_true - y_pred
    return float(np.mean(diff * diff))


def root_mean_squared_error(y_true, y_pred) -> float:
    return float(np.sqrt(mean_squared_error(y_true, y_pred)))


def mean_absolute_error(y_true, y_pred) -> float:
    y_true, y_pred = _float_pair(y_true, y_pred)
    if y_true.shape[0] == 0:
        return 0.0
    return float(np.mean(np.abs(y_true - y_pred)))


def r2_score(y_true, y_pred) -> float:
    """
    R² = 1 - SS_res / SS_tot
    Con y_true constante (SS_tot == 0): 1.0 si la predicción es exacta, si no 0.0
    """
    y_true, y_pred = _float_pair(y_true, y_pred)
    if y_true.shape[0] == 0:
        return 0.0

    ss_res = float(np.sum((y_true - y_pred) ** 2))
    ss_tot = float(np.sum((y_true - y_true.mean()) ** 2))
    if ss_tot == 0:
        return 1.0 if ss_res == 0 else 0.0
    return 1.0 - ss_res / ss_tot
