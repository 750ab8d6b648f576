"""Shared pytest fixtures for ensem_core tests."""

from __future__ import annotations

import numpy as np
import pytest

from ensem_core import ElementKind, Ensemble


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def real_ens(rng):
    """8 bins x 5 time slices of positive real data."""
    data = 1.0 + rng.random((8, 5))
    return Ensemble.from_bins(data)


@pytest.fixture
def complex_ens(rng):
    """8 bins x 5 time slices of complex data."""
    data = (1.0 + rng.random((8, 5))) + 1j * rng.random((8, 5))
    return Ensemble.from_bins(data)


@pytest.fixture
def scalar_ens(rng):
    """8 bins x 1 slice, broadcastable against the 5-slice fixtures."""
    return Ensemble.from_bins(2.0 + rng.random((8, 1)), kind=ElementKind.real)
