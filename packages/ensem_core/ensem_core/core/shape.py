"""ensem_core.core.shape

Shape compatibility, broadcasting and element-kind promotion.

Two ensembles combine when they have the same number of bins and either
the same length or one of them has length 1.  A length-1 operand is a
broadcast singleton: its single time-slice is paired with every slice of
the other operand (index ``min(t, length - 1)``).  Every binary operation
goes through ``broadcast_pair`` so the rule lives in one place.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from ensem_core.core.enums import CompatibilityClass, ElementKind
from ensem_core.core.ensemble import Ensemble
from ensem_core.errors import ShapeError


def compatibility_class(a: Ensemble, b: Ensemble) -> CompatibilityClass:
    """Classify how ``a`` and ``b`` line up along the time axis."""
    if a.nbin != b.nbin or a.resampling != b.resampling:
        return CompatibilityClass.incompatible
    if a.length == b.length:
        return CompatibilityClass.equal_length
    if a.length == 1:
        return CompatibilityClass.broadcast_a
    if b.length == 1:
        return CompatibilityClass.broadcast_b
    return CompatibilityClass.incompatible


def promote_kind(*kinds: ElementKind) -> ElementKind:
    """Real only if every operand is real."""
    if any(k is ElementKind.complex for k in kinds):
        return ElementKind.complex
    return ElementKind.real


def require_compatible(a: Ensemble, b: Ensemble, op: str) -> CompatibilityClass:
    """Return the compatibility class, raising ``ShapeError`` if incompatible."""
    cls = compatibility_class(a, b)
    if cls is CompatibilityClass.incompatible:
        if a.nbin != b.nbin:
            reason = f"bin counts differ ({a.nbin} vs {b.nbin})"
        elif a.resampling != b.resampling:
            reason = (
                f"resampling differs ({a.resampling.value} vs {b.resampling.value})"
            )
        else:
            reason = f"lengths {a.length} and {b.length} do not broadcast"
        raise ShapeError(f"{op}: ensembles not compatible, {reason}")
    return cls


def broadcast_pair(a: Ensemble, b: Ensemble, op: str) -> Tuple[np.ndarray, np.ndarray]:
    """Both operands' data as ``(nbin, max(length))`` read-only views."""
    require_compatible(a, b, op)
    shape = (a.nbin, max(a.length, b.length))
    return np.broadcast_to(a.data, shape), np.broadcast_to(b.data, shape)
