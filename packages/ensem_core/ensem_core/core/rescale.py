"""ensem_core.core.rescale

Rescaling of bin fluctuations around the per-slice mean.

Bins of a resampled ensemble are strongly correlated replicas of the same
data.  Stored ensembles keep their fluctuations scaled *up* so that they
look like independent measurements.  A nonlinear operation must act on the
actual resampled values, so it is bracketed: each operand is rescaled
*down*, the naive element-wise operation is applied, and the result is
rescaled back *up*::

    x  ->  avg + (x - avg) * factor

with ``factor = -(nbin - 1)`` for jackknife and ``sqrt(nbin - 1)`` for
bootstrap ensembles.  Linear operations commute with the transform and
skip the bracket.
"""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

from ensem_core.core.enums import ResamplingKind
from ensem_core.core.ensemble import Ensemble
from ensem_core.errors import ShapeError


def rescale_factor(nbin: int, resampling: ResamplingKind = ResamplingKind.jackknife) -> float:
    """Scale applied to fluctuations when rescaling up."""
    resampling = ResamplingKind(resampling)
    if resampling is ResamplingKind.jackknife:
        return -float(nbin - 1)
    return math.sqrt(float(nbin - 1))


def rescale_around_mean(ens: Ensemble, factor: float) -> Ensemble:
    """Replace every bin by ``avg + (x - avg) * factor`` slice by slice."""
    with np.errstate(invalid="ignore", over="ignore"):
        avg = ens.data.mean(axis=0, keepdims=True)
        scaled = avg + (ens.data - avg) * factor
    return ens.like(scaled)


def rescale_up(ens: Ensemble) -> Ensemble:
    return rescale_around_mean(ens, rescale_factor(ens.nbin, ens.resampling))


def rescale_down(ens: Ensemble) -> Ensemble:
    factor = rescale_factor(ens.nbin, ens.resampling)
    if factor == 0.0:
        raise ShapeError(
            f"rescaling needs at least two bins, got nbin={ens.nbin}"
        )
    return rescale_around_mean(ens, 1.0 / factor)


def bracketed(compute: Callable[..., Ensemble], *operands: Ensemble) -> Ensemble:
    """Rescale ``operands`` down, apply ``compute``, rescale the result up."""
    return rescale_up(compute(*(rescale_down(e) for e in operands)))
