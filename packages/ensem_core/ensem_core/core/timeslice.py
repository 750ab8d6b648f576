"""ensem_core.core.timeslice

Operations along the time axis: shifts, sub-ranges, concatenation and bin
replication.  All are linear and never rescale.
"""

from __future__ import annotations

import operator

import numpy as np

from ensem_core.core.ensemble import Ensemble
from ensem_core.core.shape import promote_kind
from ensem_core.errors import RangeError, ShapeError


def _as_index(op: str, name: str, value) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise RangeError(f"{op}: {name} must be an integer, got {value!r}") from None


def cshift(ens: Ensemble, amount: int) -> Ensemble:
    """Periodic shift: ``result[t] = ens[(t + amount) mod length]``."""
    return ens.like(np.roll(ens.data, -_as_index("cshift", "amount", amount), axis=1))


def shift(ens: Ensemble, amount: int) -> Ensemble:
    """Non-periodic shift; the slices that wrap around are zeroed.

    A positive ``amount`` zeroes the last ``amount`` slices, a negative one
    the first ``-amount`` slices.
    """
    amount = _as_index("shift", "amount", amount)
    if abs(amount) > ens.length:
        raise RangeError(
            f"shift: |{amount}| exceeds the ensemble length {ens.length}"
        )
    data = np.roll(ens.data, -amount, axis=1)
    if amount > 0:
        data[:, ens.length - amount:] = 0.0
    elif amount < 0:
        data[:, :-amount] = 0.0
    return ens.like(data)


def extract(ens: Ensemble, first: int, last: int) -> Ensemble:
    """Inclusive range ``[first, last]`` of time-slices."""
    first = _as_index("extract", "first", first)
    last = _as_index("extract", "last", last)
    for index in (first, last):
        if index < 0 or index >= ens.length:
            raise RangeError(
                f"extract: index {index} out of bounds for length {ens.length}"
            )
    if last < first:
        raise RangeError(f"extract: indices out of order ({first} > {last})")
    return ens.like(ens.data[:, first:last + 1])


def concatenate(a: Ensemble, b: Ensemble) -> Ensemble:
    """Slices of ``a`` followed by slices of ``b`` in every bin."""
    if a.nbin != b.nbin:
        raise ShapeError(
            f"concatenate: bin counts differ ({a.nbin} vs {b.nbin})"
        )
    if a.resampling != b.resampling:
        raise ShapeError(
            f"concatenate: resampling differs "
            f"({a.resampling.value} vs {b.resampling.value})"
        )
    data = np.concatenate([a.data, b.data], axis=1)
    return a.like(data, promote_kind(a.kind, b.kind))


def replicate(ens: Ensemble, times: int) -> Ensemble:
    """Repeat every bin ``times`` times in place, giving ``nbin * times`` bins.

    This inflates the bin count for concatenation workflows; the result is
    not a new resampling of the data.
    """
    times = _as_index("replicate", "times", times)
    if times < 1:
        raise RangeError(f"replicate: times must be >= 1, got {times}")
    return ens.like(np.repeat(ens.data, times, axis=0))
