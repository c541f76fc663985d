from functools import partial

import pytest

from nfieldquad import config_parser


@pytest.fixture
def base_config() -> dict:
    config = {
        "n": 4,
        "modes": 30,
        "basis": "hermite",
        "seed": 3,
        "coeff_scale": 0.5,
        "dense_pts": 4001,
        "tolerance": 1e-7,
    }
    return config


def test_parse(base_config):
    parsed = config_parser.parse_accuracy_config(base_config)
    assert isinstance(parsed, config_parser.AccuracyConfig)
    assert parsed == config_parser.AccuracyConfig(
        n=4,
        modes=30,
        basis="hermite",
        seed=3,
        coeff_scale=0.5,
        dense_pts=4001,
        tolerance=1e-7,
    )


def test_defaults():
    parsed = config_parser.parse_accuracy_config({"n": 2, "modes": 5})
    assert parsed.basis == "hermite"
    assert parsed.seed == 0
    assert parsed.dense_pts is None
    assert parsed.tolerance == 1e-6


def test_does_not_mutate_input(base_config):
    config = base_config.copy()
    config_parser.parse_accuracy_config(config)
    assert config == base_config


def test_argument_validation():
    validate = partial(config_parser.validate_type_and_bounds, dtype=int)

    n1, n2, n3 = (1, 2, 3)
    n = (1, 2, 3)
    validate(n1, n2, n3, lower=1, upper=3, length=3)
    validate(*n, lower=1, upper=3, length=3)
    validate(*list(n), lower=1, upper=3, length=3)

    with pytest.raises(config_parser.ConfigParsingError):
        validate(*n, lower=2)
    with pytest.raises(config_parser.ConfigParsingError):
        validate(*n, length=2)
    with pytest.raises(config_parser.ConfigParsingError):
        validate(True)


@pytest.mark.parametrize(
    "key, value",
    [
        ("n", 3),
        ("n", 0),
        ("n", 4.0),
        ("modes", 0),
        ("modes", "30"),
        ("basis", "laguerre"),
        ("seed", -1),
        ("coeff_scale", -1.0),
        ("dense_pts", 1),
        ("tolerance", "1e-6"),
    ],
)
def test_invalid_values(base_config, key, value):
    config = base_config.copy()
    config[key] = value
    with pytest.raises(config_parser.ConfigParsingError):
        config_parser.parse_accuracy_config(config)


@pytest.mark.parametrize("key", ["n", "modes"])
def test_missing_key(base_config, key):
    config = base_config.copy()
    del config[key]
    with pytest.raises(config_parser.ConfigParsingError, match=f"Missing key: {key}"):
        config_parser.parse_accuracy_config(config)


def test_unknown_key(base_config):
    config = base_config.copy()
    config["learning_rate"] = 0.1
    with pytest.raises(config_parser.ConfigParsingError, match="Unrecognized keys"):
        config_parser.parse_accuracy_config(config)
