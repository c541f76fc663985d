"""Exact quadrature rules for integrals of products of n classical fields.

Importing :mod:`nfieldquad.integrals` switches jax to 64-bit mode for the
whole process (``jax_enable_x64``), since the rules are only exact to
machine precision in double precision.
"""

from .bases import (
    Basis,
    UnsupportedBasisError,
    available_bases,
    eigmat,
    get_basis,
    register_basis,
)
from .hermgauss import hermgauss
from .hermite import hermite_functions
from .transform import (
    InvalidModeCountError,
    InvalidOrderError,
    NFieldTransform,
    nfieldtrans,
)

__version__ = "0.1.0"

__all__ = [
    "Basis",
    "InvalidModeCountError",
    "InvalidOrderError",
    "NFieldTransform",
    "UnsupportedBasisError",
    "available_bases",
    "eigmat",
    "get_basis",
    "hermgauss",
    "hermite_functions",
    "nfieldtrans",
    "register_basis",
]
