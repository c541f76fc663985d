"""Registry of eigenbases that n-field rules can be built for.

Each basis bundles the two numerical primitives the rule construction needs:

quadrature(j, num_modes) -> (t, w_scaled)
    A Gauss rule in the natural variable t of the basis, exact for the
    polynomial part of a product of 2j fields of ``num_modes`` modes. The
    weights come with the natural weight function divided out, for the
    Hermite basis w_i exp(t_i^2).

eigmat(num_modes, points) -> np.ndarray
    The matrix whose (i, k) entry is the k-th eigenfunction at ``points[i]``.

Only the harmonic-oscillator basis ("hermite") is registered by default.
"""

import logging
from collections.abc import Callable
from typing import NamedTuple

import numpy as np

from .hermite import hermite_functions, hermite_quadrature

__all__ = [
    "Basis",
    "UnsupportedBasisError",
    "available_bases",
    "eigmat",
    "get_basis",
    "register_basis",
]

QuadratureFn = Callable[[int, int], tuple[np.ndarray, np.ndarray]]
EigmatFn = Callable[[int, np.ndarray], np.ndarray]


class UnsupportedBasisError(ValueError):
    """Raised when a basis name has no registered implementation."""

    def __init__(self, basis: str):
        self.basis = basis
        super().__init__(f"{basis} basis not implemented yet")


class Basis(NamedTuple):
    """A family of eigenfunctions together with its raw quadrature.

    Attributes:
    -----------
    name: str
        Key used to look the basis up.

    quadrature: QuadratureFn
        Raw rule generator taking (j, num_modes).

    eigmat: EigmatFn
        Eigenbasis matrix builder taking (num_modes, points).
    """

    name: str
    quadrature: QuadratureFn
    eigmat: EigmatFn


_REGISTRY: dict[str, Basis] = {}


def register_basis(basis: Basis, overwrite: bool = False) -> None:
    if basis.name in _REGISTRY and not overwrite:
        raise ValueError(
            f"Basis {basis.name!r} is already registered. "
            "Pass overwrite=True to replace it."
        )
    logging.debug(f"Registering basis {basis.name!r}")
    _REGISTRY[basis.name] = basis


def get_basis(name: str) -> Basis:
    try:
        return _REGISTRY[name]
    except (KeyError, TypeError):
        raise UnsupportedBasisError(name) from None


def available_bases() -> list[str]:
    return sorted(_REGISTRY)


def eigmat(basis: str, num_modes: int, points) -> np.ndarray:
    """Transform from ``num_modes`` coefficients of ``basis`` onto ``points``.

    Use this with a uniform grid when the field is needed in position space;
    the nodes of an n-field rule are not uniformly spaced.
    """
    return get_basis(basis).eigmat(num_modes, np.asarray(points))


register_basis(
    Basis(name="hermite", quadrature=hermite_quadrature, eigmat=hermite_functions)
)
