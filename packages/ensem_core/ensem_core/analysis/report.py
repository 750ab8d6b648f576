"""ensem_core.analysis.report

Plain-text rendering of ensembles and estimator results.

Real rows read ``t   mean err   err/mean``; complex rows read
``t   ( re , im )   err``.  Single-slice results use compact ``%g``
fields, longer ones padded columns so they line up.
"""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from ensem_core.analysis.estimator import CalcResult
from ensem_core.core.ensemble import Ensemble
from ensem_core.core.enums import ElementKind
from ensem_core.io.ensemble_file import DEFAULT_PRECISION, dumps_ensemble

_REAL_FMT = ("%d   %g %g   %g", "%4d   %- 13.6g %- 13.6g   %- 13.6g")
_COMPLEX_FMT = ("%d   ( %g , %g )   %g", "%4d   ( %- 13.6g , %- 13.6g )   %- 13.6g")


def format_calc(result: CalcResult) -> str:
    padded = 1 if len(result) > 1 else 0
    lines: List[str] = []
    if result.kind is ElementKind.real:
        fmt = _REAL_FMT[padded]
        for t, ((mean, err), rat) in enumerate(zip(result, result.ratio)):
            lines.append(fmt % (t, mean.real, err, rat))
    else:
        fmt = _COMPLEX_FMT[padded]
        for t, (mean, err) in enumerate(result):
            lines.append(fmt % (t, mean.real, mean.imag, err))
    return "\n".join(line.rstrip() for line in lines) + "\n"


def print_calc(result: CalcResult, stream: Optional[TextIO] = None) -> None:
    (stream or sys.stdout).write(format_calc(result))


def format_ensemble(ens: Ensemble, precision: int = DEFAULT_PRECISION) -> str:
    """Ensemble rendered in its on-disk text layout."""
    return dumps_ensemble(ens, precision=precision)


def print_ensemble(
    ens: Ensemble, stream: Optional[TextIO] = None, precision: int = DEFAULT_PRECISION
) -> None:
    (stream or sys.stdout).write(format_ensemble(ens, precision))
