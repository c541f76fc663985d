"""Quadrature rules for exact n-field integrals.

A field represented by M coefficients in an eigenbasis,

.. math:

    \\psi(x) = \\sum_{j=0}^{M-1} c_j \\phi_j(x),

is mapped onto a quadrature grid by a matrix T, ``psi = T @ c``. Together
with the weights w, any product of n fields is then integrated exactly by

.. math:

    \\int dx\\, |\\psi(x)|^n = \\sum_i w_i |\\psi(x_i)|^n.

Derivation for the Hermite basis: with J = n / 2 the integrand is
:math:`P(x) e^{-J x^2}` where P is a polynomial of degree at most
2J(M - 1). Substituting :math:`t = \\sqrt{J} x` gives

.. math:

    \\int dt\\, e^{-t^2} P(t / \\sqrt{J}) / \\sqrt{J},

which a Gauss-Hermite rule of degree JM integrates exactly. Rewriting
:math:`P(x_i) = |\\psi(x_i)|^n e^{t_i^2}` gives the nodes
:math:`x_i = t_i / \\sqrt{J}` and weights
:math:`w_i = w^{GH}_i e^{t_i^2} / \\sqrt{J}`. The product
:math:`w^{GH}_i e^{t_i^2}` is taken from the basis directly, since for a few
hundred nodes the first factor underflows and the second overflows.

Warning: the nodes are not uniformly spaced. To look at the field in
position space build a transform onto a grid of your choice with
:func:`nfieldquad.bases.eigmat`.
"""

import logging
import numbers
from typing import NamedTuple

import numpy as np

from .bases import Basis, get_basis

__all__ = [
    "InvalidModeCountError",
    "InvalidOrderError",
    "NFieldTransform",
    "build_quadrature",
    "build_transform",
    "nfieldtrans",
    "order_to_j",
    "validate_num_modes",
]


class InvalidOrderError(ValueError):
    """Raised when the order of the field product is not a positive even integer."""

    def __init__(self, n=None):
        self.n = n
        super().__init__("n must be a positive and even integer")


class InvalidModeCountError(ValueError):
    """Raised when the number of modes is not a positive integer."""

    def __init__(self, num_modes=None):
        self.num_modes = num_modes
        super().__init__("M must be a positive integer")


class NFieldTransform(NamedTuple):
    """Quadrature grid, weights and basis-to-grid transform.

    Attributes:
    -----------
    x: np.ndarray
        Quadrature nodes, shape (J * M,).

    w: np.ndarray
        Quadrature weights aligned with x.

    T: np.ndarray
        Transform of shape (len(x), M) with ``(T @ c)[i] = psi(x[i])``.
    """

    x: np.ndarray
    w: np.ndarray
    T: np.ndarray


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def order_to_j(n: int) -> int:
    """Validate the order n of the field product and return J = n / 2."""
    if not _is_integer(n) or n <= 0 or n % 2 != 0:
        raise InvalidOrderError(n)
    return int(n) // 2


def validate_num_modes(num_modes: int) -> int:
    if not _is_integer(num_modes) or num_modes < 1:
        raise InvalidModeCountError(num_modes)
    return int(num_modes)


def build_quadrature(
    j: int, num_modes: int, basis: Basis
) -> tuple[np.ndarray, np.ndarray]:
    """Rescale the degree-(j * num_modes) rule of ``basis`` to x = t / sqrt(j).

    ``basis.quadrature`` returns its weights with the natural weight already
    divided out, w_i exp(t_i^2) evaluated at the raw node t. Forming
    exp(x**2) in the rescaled variable instead is only correct for j = 1.
    """
    t, scaled_w = basis.quadrature(j, num_modes)
    sqrt_j = np.sqrt(j)
    x = t / sqrt_j
    w = scaled_w / sqrt_j

    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(w))):
        raise FloatingPointError(
            f"Non-finite quadrature rule of degree {j * num_modes} "
            f"for the {basis.name} basis."
        )

    return x, w


def build_transform(num_modes: int, x: np.ndarray, basis: Basis) -> np.ndarray:
    return basis.eigmat(num_modes, x)


def nfieldtrans(n: int, M: int, basis: str = "hermite") -> NFieldTransform:
    """Construct a grid, weights and transform for exact n-field integrals.

    Args:
    -----
    n: int
        Order of the field product. Must be a positive even integer.

    M: int
        Number of modes in the field. Must be a positive integer; this is
        checked here rather than left to the quadrature generator.

    basis: str
        Name of the eigenbasis representing the field. Default "hermite".

    Returns:
    --------
    NFieldTransform
        (x, w, T) such that ``sum(w * abs(T @ c) ** n)`` equals the integral
        of ``|psi|^n`` for any coefficient vector c of length M.

    Raises:
    -------
    InvalidOrderError
        n is not a positive even integer.

    InvalidModeCountError
        M is not a positive integer.

    UnsupportedBasisError
        No basis with the given name is registered.

    FloatingPointError
        The rule of degree n / 2 * M has non-finite nodes or weights.

    Example:
    --------
    >>> rng = np.random.default_rng(0)
    >>> c = rng.normal(size=30) + 1j * rng.normal(size=30)
    >>> x, w, T = nfieldtrans(2, 30)
    >>> bool(np.isclose(np.sum(w * np.abs(T @ c) ** 2), np.sum(np.abs(c) ** 2)))
    True
    """
    j = order_to_j(n)
    eigenbasis = get_basis(basis)
    num_modes = validate_num_modes(M)

    logging.debug(
        f"Building {n}-field rule for {num_modes} {eigenbasis.name} modes "
        f"with {j * num_modes} nodes"
    )
    x, w = build_quadrature(j, num_modes, eigenbasis)
    T = build_transform(num_modes, x, eigenbasis)

    return NFieldTransform(x=x, w=w, T=T)
