"""
End-to-end tests for the driver script.
"""

import os

import pytest

import main


DATA_CSV = os.path.join(os.path.dirname(__file__), os.pardir, "data", "ejemplo.csv")


@pytest.mark.parametrize("scaling", ["normalize", "standardize", "none"])
def test_run_pipeline(scaling, capsys):
    acc = main.run(csv_path=DATA_CSV, scaling=scaling, test_ratio=0.25, seed=3, k=3)
    assert 0.0 <= acc <= 1.0

    out = capsys.readouterr().out
    assert "Reporte de clasificación:" in out


def test_main_exit_codes(tmp_path):
    assert main.main([DATA_CSV, "--metric", "minkowski", "-p", "3", "-k", "1"]) == 0
    assert main.main([str(tmp_path / "missing.csv")]) == 1
    assert main.main([DATA_CSV, "--test-ratio", "1.5"]) == 1
    assert main.main([DATA_CSV, "-k", "0"]) == 1
