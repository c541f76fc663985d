"""Dense-grid reference integrals.

The n-field rules are checked against a brute-force integral of the field on
a fine uniform grid. The eigenfunctions decay like a Gaussian outside the
classical turning points, so the trapezoidal rule converges spectrally on a
grid that covers them with some margin.
"""

import numpy as np
from scipy.integrate import trapezoid

from .bases import eigmat

__all__ = ["dense_grid", "dense_nfield_integral", "relative_error"]


def dense_grid(
    num_modes: int, num_pts: int | None = None, extent: float | None = None
) -> np.ndarray:
    """Uniform grid on [-extent, extent].

    The default extent is twice the outermost turning point sqrt(2M + 1) of
    the highest mode plus a fixed margin. The default resolution puts roughly
    twenty points on the shortest wavelength of the field.
    """
    turning_point = np.sqrt(2 * num_modes + 1)
    if extent is None:
        extent = 2.0 * turning_point + 4.0
    if num_pts is None:
        num_pts = int(20 * extent * turning_point) + 1
    return np.linspace(-extent, extent, num_pts)


def dense_nfield_integral(
    c: np.ndarray,
    n: int,
    basis: str = "hermite",
    num_pts: int | None = None,
    extent: float | None = None,
) -> float:
    """int |psi(x)|^n dx by the trapezoidal rule on :func:`dense_grid`."""
    c = np.asarray(c)
    x = dense_grid(c.shape[0], num_pts=num_pts, extent=extent)
    psi = eigmat(basis, c.shape[0], x) @ c
    return float(trapezoid(np.abs(psi) ** n, x))


def relative_error(value: float, reference: float) -> float:
    return float(abs(value - reference) / abs(reference))
