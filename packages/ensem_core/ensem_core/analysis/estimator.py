"""ensem_core.analysis.estimator

Mean and standard error of an ensemble, slice by slice.

For each time-slice ``t`` with bins ``x_n``::

    mean = (1/N) * sum_n x_n
    err  = sqrt( sum_n |x_n - mean|^2 / ((N - 1) * N) )

The ``(N - 1) * N`` denominator is the standard error of the mean of the
stored bins.  Stored bins are kept with their fluctuations rescaled up
(``ensem_core.core.rescale``), so they behave like independent samples and
no further correction is applied here.  This holds for both resampling
kinds, given their respective rescale factors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from ensem_core.core.enums import ElementKind
from ensem_core.core.ensemble import Ensemble

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalcResult:
    """Per-slice ``(mean, err)`` summary of an ensemble.

    Attributes
    ----------
    kind : ElementKind
        Kind of the source ensemble.
    mean : np.ndarray, shape (length,), complex128
    err : np.ndarray, shape (length,), float64
    nbin : int
        Bin count of the source ensemble.
    """

    kind: ElementKind
    mean: np.ndarray
    err: np.ndarray
    nbin: int

    def __len__(self) -> int:
        return int(self.mean.shape[0])

    def __iter__(self) -> Iterator[Tuple[complex, float]]:
        for m, e in zip(self.mean, self.err):
            yield complex(m), float(e)

    def __getitem__(self, t: int) -> Tuple[complex, float]:
        return complex(self.mean[t]), float(self.err[t])

    @property
    def ratio(self) -> np.ndarray:
        """``err / mean.real``, 0 where the mean vanishes."""
        re = self.mean.real
        safe = np.where(re != 0.0, re, 1.0)
        return np.where(re != 0.0, self.err / safe, 0.0)


def estimate(ens: Ensemble) -> CalcResult:
    """Mean and standard error of every time-slice of ``ens``."""
    n = ens.nbin
    data = ens.data
    with np.errstate(divide="ignore", invalid="ignore"):
        mean = data.mean(axis=0)
        diff = data - mean
        sq = (diff.real * diff.real + diff.imag * diff.imag).sum(axis=0)
        err = np.sqrt(sq / float((n - 1) * n))
    if ens.is_real:
        mean = mean.real.astype(np.complex128)

    logger.debug("estimated %d time slices over %d bins", ens.length, n)
    mean.setflags(write=False)
    err.setflags(write=False)
    return CalcResult(kind=ens.kind, mean=mean, err=err, nbin=n)
