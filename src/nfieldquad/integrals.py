"""n-field integrals evaluated on a rule from :func:`nfieldquad.nfieldtrans`.

All functions take the weights ``w`` and the transform ``T`` of a rule and a
(complex) coefficient vector ``c``. They are jit-compiled, so a rule built
once can be reused cheaply for many coefficient vectors.

64-bit mode is enabled on import. This is a process-wide jax setting, so every
jax computation in the same interpreter runs in double precision from then on.
The rules are exact to machine precision only in double precision.
"""

from functools import partial

import jax

jax.config.update("jax_enable_x64", True)

import jax.numpy as jnp  # noqa: E402
from jax import Array  # noqa: E402

__all__ = [
    "field_on_nodes",
    "interaction_energy",
    "nfield_integral",
    "population",
    "projected_nonlinearity",
]


@jax.jit
def field_on_nodes(T: Array, c: Array) -> Array:
    """psi(x_i) = sum_j c_j phi_j(x_i)"""
    return T @ c


@partial(jax.jit, static_argnames="n")
def nfield_integral(w: Array, T: Array, c: Array, n: int) -> Array:
    """sum_i w_i |psi(x_i)|^n

    Exact only when the rule was built for the same order n.
    """
    psi = field_on_nodes(T, c)
    return jnp.sum(w * jnp.abs(psi) ** n)


@jax.jit
def population(w: Array, T: Array, c: Array) -> Array:
    """N = int |psi|^2 dx, requires a rule with n = 2."""
    return nfield_integral(w, T, c, 2)


@jax.jit
def interaction_energy(w: Array, T: Array, c: Array) -> Array:
    """U = int |psi|^4 dx, requires a rule with n = 4."""
    return nfield_integral(w, T, c, 4)


@jax.jit
def projected_nonlinearity(w: Array, T: Array, c: Array) -> Array:
    """Project |psi|^2 psi back onto the modes of the field.

    Computes

    .. math:

        P_j = \\int dx\\, \\phi_j(x) |\\psi(x)|^2 \\psi(x)
            = \\sum_i w_i T_{ij} |\\psi(x_i)|^2 \\psi(x_i)

    which is the nonlinear term of the projected Gross-Pitaevskii equation.
    The integrand is a product of four fields, so the rule must be built
    with n = 4 for the projection to be exact.
    """
    psi = field_on_nodes(T, c)
    return T.T @ (w * jnp.abs(psi) ** 2 * psi)
