"""ensem_core.core.enums
=======================

Closed tags used by the ensemble engine.

ElementKind
-----------
real      imaginary parts are identically zero (file tag 0)
complex   both components carry data (file tag 1)

ResamplingKind
--------------
jackknife   rescale factor -(nbin - 1)
bootstrap   rescale factor sqrt(nbin - 1)
"""

from __future__ import annotations

from enum import Enum, IntEnum


class ElementKind(IntEnum):
    """Element type of an ensemble; the value is the on-disk type tag."""

    real = 0
    complex = 1


class ResamplingKind(str, Enum):
    """How the bins of an ensemble were produced."""

    jackknife = "jackknife"
    bootstrap = "bootstrap"


class CompatibilityClass(str, Enum):
    """Shape relation between the two operands of a binary operation."""

    equal_length = "equal_length"
    broadcast_a = "broadcast_a"
    broadcast_b = "broadcast_b"
    incompatible = "incompatible"
