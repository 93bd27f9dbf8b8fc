"""
Unit tests for classification and regression metrics.
"""

import numpy as np
import pytest

from mlkit.errors import DimensionMismatch
from mlkit.metrics import (
    accuracy_score,
    classification_report,
    confusion_matrix,
    f1_score,
    mean_absolute_error,
    mean_squared_error,
    precision_score,
    r2_score,
    recall_score,
    root_mean_squared_error,
)


Y_TRUE = [0, 1, 2, 1, 0]
Y_PRED = [0, 1, 2, 2, 0]


def test_accuracy():
    assert accuracy_score(Y_TRUE, Y_PRED) == pytest.approx(0.8)
    assert accuracy_score([], []) == 0.0
    with pytest.raises(DimensionMismatch):
        accuracy_score([0, 1], [0])


def test_confusion_matrix():
    cm = confusion_matrix(Y_TRUE, Y_PRED)
    expected = np.array([[2, 0, 0], [0, 1, 1], [0, 0, 1]])
    np.testing.assert_array_equal(cm, expected)
    assert cm.sum() == len(Y_TRUE)


def test_confusion_matrix_explicit_labels():
    cm = confusion_matrix([1, 1], [1, 3], labels=[3, 1])
    np.testing.assert_array_equal(cm, [[0, 0], [1, 1]])


def test_precision_recall_f1():
    assert precision_score(Y_TRUE, Y_PRED, 2) == pytest.approx(0.5)
    assert recall_score(Y_TRUE, Y_PRED, 2) == pytest.approx(1.0)
    assert f1_score(Y_TRUE, Y_PRED, 2) == pytest.approx(2 / 3)

    assert recall_score(Y_TRUE, Y_PRED, 1) == pytest.approx(0.5)
    assert precision_score(Y_TRUE, Y_PRED, 1) == pytest.approx(1.0)


def test_scores_for_absent_class_are_zero():
    assert precision_score(Y_TRUE, Y_PRED, 9) == 0.0
    assert recall_score(Y_TRUE, Y_PRED, 9) == 0.0
    assert f1_score(Y_TRUE, Y_PRED, 9) == 0.0


def test_classification_report():
    report = classification_report(Y_TRUE, Y_PRED, target_names={0: "tuerca", 1: "clavo"})
    lines = report.splitlines()
    assert lines[0].split() == ["class", "precision", "recall", "f1", "support"]
    assert lines[1].startswith("tuerca")
    assert lines[2].startswith("clavo")
    assert lines[3].startswith("2")
    assert "0.8000" in report
    assert "macro avg" in report and "weighted avg" in report


def test_regression_errors():
    y_true = [3.0, -0.5, 2.0, 7.0]
    y_pred = [2.5, 0.0, 2.0, 8.0]
    assert mean_squared_error(y_true, y_pred) == pytest.approx(0.375)
    assert root_mean_squared_error(y_true, y_pred) == pytest.approx(np.sqrt(0.375))
    assert mean_absolute_error(y_true, y_pred) == pytest.approx(0.5)
    assert r2_score(y_true, y_pred) == pytest.approx(0.9486081370449679)


def test_regression_metrics_edge_cases():
    assert mean_squared_error([], []) == 0.0
    assert mean_absolute_error([], []) == 0.0
    assert r2_score([], []) == 0.0
    assert r2_score([2.0, 2.0], [2.0, 2.0]) == 1.0
    assert r2_score([2.0, 2.0], [1.0, 3.0]) == 0.0
    with pytest.raises(DimensionMismatch):
        mean_squared_error([1.0, 2.0], [1.0])
