import numpy as np
import pytest

from nfieldquad import nfieldtrans
from nfieldquad.bases import (
    _REGISTRY,
    Basis,
    UnsupportedBasisError,
    available_bases,
    eigmat,
    get_basis,
    register_basis,
)
from nfieldquad.hermite import hermite_functions, hermite_quadrature


@pytest.fixture
def scaled_basis():
    """Hermite functions of a trap twice as wide, registered for one test."""

    def quadrature(j, num_modes):
        return hermite_quadrature(j, num_modes)

    def build(num_modes, x):
        return hermite_functions(num_modes, np.asarray(x) / 2.0) / np.sqrt(2.0)

    basis = Basis(name="wide_hermite", quadrature=quadrature, eigmat=build)
    register_basis(basis)
    yield basis
    _REGISTRY.pop(basis.name)


def test_default_registry():
    assert available_bases() == ["hermite"]
    basis = get_basis("hermite")
    assert basis.eigmat is hermite_functions
    assert basis.quadrature is hermite_quadrature


@pytest.mark.parametrize("name", ["laguerre", "", "Hermite", None, ["hermite"]])
def test_get_unknown_basis(name):
    with pytest.raises(UnsupportedBasisError) as excinfo:
        get_basis(name)
    assert str(excinfo.value) == f"{name} basis not implemented yet"
    assert excinfo.value.basis == name


def test_register_refuses_overwrite():
    with pytest.raises(ValueError, match="already registered"):
        register_basis(get_basis("hermite"))


def test_register_overwrite():
    basis = get_basis("hermite")
    register_basis(basis, overwrite=True)
    assert get_basis("hermite") is basis


def test_eigmat_on_uniform_grid():
    x = np.linspace(-6.0, 6.0, 121)
    T = eigmat("hermite", 12, x)
    assert T.shape == (121, 12)
    np.testing.assert_array_equal(T, hermite_functions(12, x))


def test_eigmat_unknown_basis():
    with pytest.raises(UnsupportedBasisError):
        eigmat("chebyshev", 4, np.zeros(3))


def test_registered_basis_is_used_by_nfieldtrans(scaled_basis):
    assert "wide_hermite" in available_bases()
    x, w, T = nfieldtrans(2, 6, "wide_hermite")
    np.testing.assert_array_equal(T, scaled_basis.eigmat(6, x))
