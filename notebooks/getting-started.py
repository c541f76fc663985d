# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.17.1
#   kernelspec:
#     display_name: .venv
#     language: python
#     name: python3
# ---

# %% [markdown]
# # Exact n-field integrals of classical fields

# %% [markdown]
# ## Summary
#
# In mean-field simulations of Bose gases (the projected Gross-Pitaevskii
# equation, PGPE) the classical field is stored as $M$ complex coefficients
# in a basis of harmonic-oscillator eigenstates,
# $$
#     \psi(x) = \sum_{j=0}^{M-1} c_j \phi_j(x).
# $$
# Observables such as the population $N = \int dx\, |\psi|^2$ or the
# interaction energy $U = \int dx\, |\psi|^4$ are integrals of products of
# $n$ fields. `nfieldquad.nfieldtrans(n, M)` returns a grid $x$, weights $w$
# and a transform $T$ such that
# $$
#     \int dx\, |\psi(x)|^n = \sum_i w_i |(T c)_i|^n
# $$
# holds exactly (up to rounding) for every coefficient vector $c$.

# %%
import numpy as np

from nfieldquad import eigmat, nfieldtrans
from nfieldquad import integrals
from nfieldquad.reference import dense_nfield_integral

# %% [markdown]
# Importing `nfieldquad.integrals` turns on `jax_enable_x64` for the whole
# session, so any other jax code run in this notebook is in double precision
# from here on.

# %% [markdown]
# ## C-field population
#
# A random superposition of all modes is a high temperature state and the
# hardest case for the rule. The population computed on the grid agrees with
# the direct sum over coefficients.

# %%
M = 30
rng = np.random.default_rng(0)
c = rng.normal(size=M) + 1j * rng.normal(size=M)

x, w, T = nfieldtrans(2, M)
psi = T @ c
print(np.sum(w * np.abs(psi) ** 2), np.sum(np.abs(c) ** 2))

# %% [markdown]
# ## Interaction energy
#
# The four-field product needs twice as many nodes. The result is compared
# with a brute-force integral on a fine uniform grid.

# %%
x, w, T = nfieldtrans(4, M)
print(integrals.interaction_energy(w, T, c), dense_nfield_integral(c, 4))

# %% [markdown]
# The same rule gives the PGPE nonlinear term $P[|\psi|^2 \psi]$ in the
# mode basis, and its overlap with $c$ is the interaction energy again.

# %%
proj = integrals.projected_nonlinearity(w, T, c)
print(np.vdot(c, proj).real)

# %% [markdown]
# ## Position space
#
# The quadrature nodes are not uniformly spaced and should not be used to
# look at the field. Build a transform onto a grid of your choice instead.

# %%
x_uniform = np.linspace(-10.0, 10.0, 401)
psi_uniform = eigmat("hermite", M, x_uniform) @ c
print(x_uniform[np.argmax(np.abs(psi_uniform))])
