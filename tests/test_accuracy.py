import json

import numpy as np
import pytest

from nfieldquad import accuracy
from nfieldquad.config_parser import AccuracyConfig

YAML_CONFIG = """
defaults:
    run:
        seed: 0
        tolerance: 1.0e-6

configs:
    -   run:
            grid:
                -   n: [2, 4]
                    modes: [8, 16]
    -   run:
            defaults:
                n: 3
                modes: 8
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "accuracy.yaml"
    path.write_text(YAML_CONFIG)
    return str(path)


def test_random_coefficients():
    c = accuracy.random_coefficients(12, seed=4, scale=2.0)
    assert c.shape == (12,)
    assert np.iscomplexobj(c)
    np.testing.assert_array_equal(c, accuracy.random_coefficients(12, 4, 2.0))
    assert not np.array_equal(c, accuracy.random_coefficients(12, 5, 2.0))


@pytest.mark.parametrize("n", [2, 4, 6])
def test_run_accuracy_check(n):
    config = AccuracyConfig(
        n=n,
        modes=20,
        basis="hermite",
        seed=7,
        coeff_scale=1.0,
        dense_pts=None,
        tolerance=1e-6,
    )
    result = accuracy.run_accuracy_check(config)
    assert result.passed
    assert result.rel_error < 1e-6
    assert result.elapsed >= 0.0


def test_too_coarse_reference_fails():
    config = AccuracyConfig(
        n=4,
        modes=20,
        basis="hermite",
        seed=7,
        coeff_scale=1.0,
        dense_pts=40,
        tolerance=1e-6,
    )
    assert not accuracy.run_accuracy_check(config).passed


def test_main(config_file, tmp_path):
    output = tmp_path / "results.json"
    exit_code = accuracy.main(["--config", config_file, "--output", str(output)])
    assert exit_code == 0

    results = json.loads(output.read_text())
    # the n = 3 run is rejected by the config parser and skipped
    assert len(results) == 4
    assert {(r["config"]["n"], r["config"]["modes"]) for r in results} == {
        (2, 8),
        (2, 16),
        (4, 8),
        (4, 16),
    }
    assert all(r["passed"] for r in results)


def test_main_single_run(config_file, tmp_path):
    output = tmp_path / "results.json"
    accuracy.main(["--config", config_file, "--run", "1", "--output", str(output)])
    results = json.loads(output.read_text())
    assert len(results) == 1
    assert results[0]["config"]["n"] == 2
    assert results[0]["config"]["modes"] == 16


def test_print_config(config_file, capsys):
    assert accuracy.main(["--config", config_file, "--print-config"]) == 0
    assert "'modes': 16" in capsys.readouterr().out


def test_main_reports_failures(tmp_path):
    path = tmp_path / "strict.yaml"
    path.write_text(
        "defaults:\n    run:\n        n: 4\n        modes: 20\n        dense_pts: 40\n"
    )
    assert accuracy.main(["--config", str(path)]) == 1


def test_main_fails_when_no_check_ran(tmp_path):
    path = tmp_path / "rejected.yaml"
    path.write_text(
        "defaults:\n    run:\n        modes: 8\n"
        "configs:\n    -   run:\n            grid:\n                -   n: [1, 3]\n"
    )
    assert accuracy.main(["--config", str(path)]) == 1
