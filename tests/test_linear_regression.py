"""
Unit tests for the linear regression model.

Tests both fitting methods, prediction shapes and argument validation.
"""

import numpy as np
import pytest

from mlkit.dataset import Dataset
from mlkit.errors import DimensionMismatch, InvalidArgument, ModelNotFitted
from mlkit.linear_regression import LinearRegression


@pytest.fixture
def plane():
    """Exact samples of y = 3 + 2*x1 - x2 on [0, 1]^2."""
    rng = np.random.default_rng(7)
    X = rng.uniform(0.0, 1.0, size=(40, 2))
    y = 3.0 + 2.0 * X[:, 0] - X[:, 1]
    return X, y


def test_normal_equation_recovers_coefficients(plane):
    X, y = plane
    model = LinearRegression().fit(X, y)
    assert model.is_fitted
    assert model.bias_ == pytest.approx(3.0)
    np.testing.assert_allclose(model.weights_, [2.0, -1.0], atol=1e-9)


def test_gradient_descent_converges(plane):
    X, y = plane
    model = LinearRegression(learning_rate=0.5, n_iterations=5000, method="gradient").fit(X, y)
    assert model.bias_ == pytest.approx(3.0, abs=1e-3)
    np.testing.assert_allclose(model.weights_, [2.0, -1.0], atol=1e-3)


def test_predict_single_and_batch(plane):
    X, y = plane
    model = LinearRegression().fit(X, y)
    assert model.predict([1.0, 1.0]) == pytest.approx(4.0)
    pred = model.predict(X)
    assert pred.shape == (40,)
    np.testing.assert_allclose(pred, y, atol=1e-9)


def test_score_is_r2(plane):
    X, y = plane
    model = LinearRegression().fit(X, y)
    assert model.score(X, y) == pytest.approx(1.0)


def test_fit_from_dataset():
    ds = Dataset([[0.0], [1.0], [2.0], [3.0]], [1, 3, 5, 7])
    model = LinearRegression().fit(ds)
    assert model.bias_ == pytest.approx(1.0)
    np.testing.assert_allclose(model.weights_, [2.0], atol=1e-9)
    assert model.score(ds) == pytest.approx(1.0)


def test_singular_design_still_fits():
    # columnas duplicadas: X^T X no es invertible
    X = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
    y = np.array([2.0, 4.0, 6.0])
    model = LinearRegression().fit(X, y)
    np.testing.assert_allclose(model.predict(X), y, atol=1e-9)


def test_unfitted_model_raises():
    model = LinearRegression()
    assert not model.is_fitted
    with pytest.raises(ModelNotFitted):
        model.predict([1.0, 2.0])


@pytest.mark.parametrize(
    "kwargs",
    [{"method": "sgd"}, {"learning_rate": 0.0}, {"learning_rate": -1.0}, {"n_iterations": 0}],
)
def test_invalid_arguments(kwargs):
    with pytest.raises(InvalidArgument):
        LinearRegression(**kwargs)


def test_fit_rejects_bad_data():
    with pytest.raises(InvalidArgument):
        LinearRegression().fit(np.zeros((0, 2)), [])
    with pytest.raises(InvalidArgument):
        LinearRegression().fit([[1.0], [np.nan]], [1.0, 2.0])
    with pytest.raises(DimensionMismatch):
        LinearRegression().fit([[1.0], [2.0]], [1.0])
    with pytest.raises(DimensionMismatch):
        LinearRegression().fit([1.0, 2.0], [1.0, 2.0])


def test_predict_dimension_mismatch(plane):
    X, y = plane
    model = LinearRegression().fit(X, y)
    with pytest.raises(DimensionMismatch):
        model.predict([1.0])
    with pytest.raises(DimensionMismatch):
        model.predict([[1.0, 2.0, 3.0]])


def test_gradient_descent_divergence_raises(plane):
    X, y = plane
    model = LinearRegression(learning_rate=1e6, n_iterations=1000, method="gradient")
    with pytest.raises(InvalidArgument):
        model.fit(X * 1000, y)


def test_matches_sklearn(plane):
    sklearn_linear = pytest.importorskip("sklearn.linear_model")
    X, y = plane
    y = y + np.random.default_rng(1).normal(0.0, 0.1, size=y.shape)
    ours = LinearRegression().fit(X, y)
    ref = sklearn_linear.LinearRegression().fit(X, y)
    np.testing.assert_allclose(ours.weights_, ref.coef_, atol=1e-8)
    assert ours.bias_ == pytest.approx(ref.intercept_)
