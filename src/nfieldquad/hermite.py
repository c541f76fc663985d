"""Harmonic-oscillator eigenbasis.

The normalized Hermite functions

.. math:

    \\phi_j(x) = (2^j j! \\sqrt{\\pi})^{-1/2} H_j(x) e^{-x^2 / 2}

are the eigenstates of the dimensionless quantum harmonic oscillator. They
are evaluated with the three-term recurrence

.. math:

    \\phi_{j+1}(x) = \\sqrt{2 / (j + 1)}\\, x\\, \\phi_j(x)
        - \\sqrt{j / (j + 1)}\\, \\phi_{j-1}(x)

which never forms :math:`H_j` or :math:`j!` explicitly. The Gaussian factor
is carried as a per-point logarithm and only applied when a column is
stored, so points far out (where :math:`e^{-x^2/2}` alone underflows) still
get the right values for high modes.
"""

import numpy as np
from scipy.special import roots_hermite

__all__ = ["hermite_functions", "hermite_quadrature"]


def _hermite_columns(num_modes: int, x: np.ndarray):
    """Yield phi_0(x), ..., phi_{num_modes - 1}(x) one column at a time."""
    # phi_j = cur * exp(log_scale); cur is renormalized to stay below one
    log_scale = -0.5 * x**2
    prev = np.zeros_like(x)
    cur = np.full_like(x, np.pi ** (-0.25))

    for j in range(num_modes):
        yield cur * np.exp(log_scale)
        nxt = np.sqrt(2.0 / (j + 1)) * x * cur - np.sqrt(j / (j + 1)) * prev
        prev, cur = cur, nxt

        norm = np.maximum(np.abs(cur), 1.0)
        prev = prev / norm
        cur = cur / norm
        log_scale = log_scale + np.log(norm)


def hermite_functions(num_modes: int, x: np.ndarray) -> np.ndarray:
    """Evaluate the first ``num_modes`` Hermite functions at ``x``.

    Args:
    -----
    num_modes: int
        Number of modes M. Must be at least one.

    x: np.ndarray
        Evaluation points, any array-like that flattens to one dimension.

    Returns:
    --------
    np.ndarray
        Matrix of shape (len(x), num_modes) whose column j holds phi_j(x).
    """
    if num_modes < 1:
        raise ValueError(f"num_modes must be at least 1. Got {num_modes}.")

    x = np.asarray(x, dtype=np.float64).ravel()
    phi = np.empty((x.shape[0], num_modes), dtype=np.float64)
    for j, column in enumerate(_hermite_columns(num_modes, x)):
        phi[:, j] = column
    return phi


def hermite_quadrature(j: int, num_modes: int) -> tuple[np.ndarray, np.ndarray]:
    """Gauss-Hermite rule of degree ``j * num_modes`` with scaled weights.

    A product of 2j fields built from ``num_modes`` Hermite functions is a
    polynomial of degree 2j(num_modes - 1) times exp(-j x^2), which this rule
    integrates exactly after the change of variables t = sqrt(j) x.

    Returns the nodes t_i and the weights w_i exp(t_i^2). The plain weights
    underflow for a few hundred nodes, so the scaled ones are computed from
    the Christoffel function instead,

    .. math:

        w_i e^{t_i^2} = 1 / \\sum_{k=0}^{N-1} \\phi_k(t_i)^2,

    which only involves Hermite functions of order one.
    """
    num_pts = j * num_modes
    t, _ = roots_hermite(num_pts)
    christoffel = np.zeros_like(t)
    for column in _hermite_columns(num_pts, t):
        christoffel += column**2
    return t, 1.0 / christoffel
