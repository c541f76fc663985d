from typing import Any, NamedTuple

from .bases import available_bases


class ConfigParsingError(Exception):
    """A meaningful error to raise."""

    pass


class AccuracyConfig(NamedTuple):
    """Validated settings for one accuracy check.

    Attributes:
    -----------
    n: int
        Order of the field product, a positive even integer.

    modes: int
        Number of modes M in the field.

    basis: str
        Registered eigenbasis name.

    seed: int
        Seed for the random coefficient vector.

    coeff_scale: float
        Standard deviation of the real and imaginary parts of the
        coefficients.

    dense_pts: int | None
        Number of points of the dense reference grid. None picks a grid
        from the number of modes.

    tolerance: float
        Largest relative error between rule and reference that passes.

    Example:
    --------
    >>> parse_accuracy_config({"n": 4, "modes": 30})
    AccuracyConfig(n=4, modes=30, basis='hermite', seed=0, coeff_scale=1.0, dense_pts=None, tolerance=1e-06)
    """

    n: int
    modes: int
    basis: str
    seed: int
    coeff_scale: float
    dense_pts: int | None
    tolerance: float


DEFAULTS = {
    "basis": "hermite",
    "seed": 0,
    "coeff_scale": 1.0,
    "dense_pts": None,
    "tolerance": 1e-6,
}


def validate_type_and_bounds(
    *args: tuple[Any, ...],
    dtype: type | tuple[type, ...],
    lower: int | float | None = None,
    upper: int | float | None = None,
    equal: list[str] | set[str] | None = None,
    length: int | None = None,
) -> None:
    """Validate the types and bounds of arguments.

    Bounds are inclusive. If equal is not None, the values checked must be in
    the set of valid arguments provided for the check. Length is the number of
    arguments passed in args. Booleans never pass as numbers.
    """

    def is_equal(value: Any) -> bool:
        if equal is None:
            return True
        return value in equal

    def is_in_bounds(value: Any) -> bool:
        lb = lower is None or value >= lower
        ub = upper is None or value <= upper
        return lb and ub

    def is_type(value: Any) -> bool:
        return isinstance(value, dtype) and not isinstance(value, bool)

    if length:
        if len(args) != length:
            raise ConfigParsingError(
                f"Expected {length} arguments. Got {len(args)} instead."
            )

    for arg in args:
        if not is_type(arg):
            raise ConfigParsingError(
                f"Argument must be a {dtype}. Got {arg} of type {type(arg)} instead."
            )
        if not (is_in_bounds(arg) and is_equal(arg)):
            raise ConfigParsingError(
                f"Argument must be a {dtype} between {lower} and {upper}"
                + (f" and one of {sorted(equal)}" if equal is not None else "")
                + f". Got {arg} instead."
            )


def get_key(key: str, config: dict):
    try:
        return config.pop(key)
    except KeyError:
        raise ConfigParsingError(f"Missing key: {key}")


def parse_accuracy_config(config: dict) -> AccuracyConfig:
    """Parser for a single accuracy check.

    ``n`` and ``modes`` are required, every other key falls back to
    :data:`DEFAULTS`. Unknown keys are an error.
    """
    config = {**DEFAULTS, **config}
    _ = config.pop("name", None)
    _ = config.pop("desc", None)

    n = get_key("n", config)
    validate_type_and_bounds(n, dtype=int, lower=2)
    if n % 2:
        raise ConfigParsingError(f"n must be even. Got {n} instead.")

    modes = get_key("modes", config)
    validate_type_and_bounds(modes, dtype=int, lower=1)

    basis = get_key("basis", config)
    validate_type_and_bounds(basis, dtype=str, equal=set(available_bases()))

    seed = get_key("seed", config)
    validate_type_and_bounds(seed, dtype=int, lower=0)

    coeff_scale = get_key("coeff_scale", config)
    validate_type_and_bounds(coeff_scale, dtype=(int, float), lower=0.0)

    dense_pts = get_key("dense_pts", config)
    if dense_pts is not None:
        validate_type_and_bounds(dense_pts, dtype=int, lower=2)

    tolerance = get_key("tolerance", config)
    validate_type_and_bounds(tolerance, dtype=(int, float), lower=0.0)

    if config.keys():
        raise ConfigParsingError(f"Unrecognized keys: {config.keys()}")

    return AccuracyConfig(
        n=n,
        modes=modes,
        basis=basis,
        seed=seed,
        coeff_scale=float(coeff_scale),
        dense_pts=dense_pts,
        tolerance=float(tolerance),
    )
