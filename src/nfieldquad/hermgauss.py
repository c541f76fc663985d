"""hermgauss

Gauss-Hermite nodes and weights. For a function :math:`f(x)` supported on the
real line, Gauss-Hermite quadrature estimates integrals of the form

.. math:

    I(f) = \\int_{-\\infty}^{+\\infty} e^{-x^2} f(x) dx

by the finite sum

.. math:

   I(f) \\approx \\sum_{i=1}^{N} w_i f(x_i)

which is exact whenever :math:`f` is a polynomial of degree at most
:math:`2N - 1`.

Notes:
- Precision: The n-field rules built on top of this module are expected to be
  exact to machine precision, so the nodes and weights are kept in float64.
  Downcasting to float32 loses roughly half of the digits of an interaction
  energy.

- Normalizing results:  The weights are unnormalized and sum to
  :math:`\\sqrt{\\pi}`. Dividing by :math:`\\sqrt{\\pi}` turns the sum into an
  expectation under a Gaussian measure.

References:
[1] https://en.wikipedia.org/wiki/Gauss%E2%80%93Hermite_quadrature
"""

import numpy as np

__all__ = ["hermgauss"]

GaussHermiteLocsAndValues = tuple[np.ndarray, np.ndarray]


def hermgauss(num_pts: int, dtype=np.float64) -> GaussHermiteLocsAndValues:
    """Nodes and weights of the ``num_pts``-point Gauss-Hermite rule.

    Nodes are sorted ascending and symmetric about zero, weights are positive.
    A non-positive ``num_pts`` raises the ``ValueError`` of
    :func:`numpy.polynomial.hermite.hermgauss`.
    """
    locs, vals = np.polynomial.hermite.hermgauss(num_pts)
    locs = locs.astype(dtype, copy=False)
    vals = vals.astype(dtype, copy=False)
    return locs, vals
