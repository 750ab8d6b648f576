"""ensem_core

Arithmetic over jackknife/bootstrap ensembles with error propagation.

Public API:
    from ensem_core import Ensemble, estimate, read_ensemble, write_ensemble

Layers:
    ensem_core.core       Ensemble value type, shape rules, rescaling, arithmetic
    ensem_core.analysis   Mean/error estimator and text report
    ensem_core.io         Ensemble text file format
    ensem_core.cli        `ensem` command line tool
"""

from ensem_core.analysis.estimator import CalcResult, estimate
from ensem_core.analysis.report import (
    format_calc,
    format_ensemble,
    print_calc,
    print_ensemble,
)
from ensem_core.core.arithmetic import (
    add,
    apply_function,
    arctan2,
    cmplx,
    conjugate,
    cos,
    divide,
    exp,
    imag_part,
    log,
    multiply,
    negate,
    norm2,
    power,
    real_part,
    sin,
    sqrt,
    subtract,
    times_i,
)
from ensem_core.core.enums import CompatibilityClass, ElementKind, ResamplingKind
from ensem_core.core.ensemble import Ensemble, from_scalar, from_sequence
from ensem_core.core.rescale import (
    rescale_around_mean,
    rescale_down,
    rescale_factor,
    rescale_up,
)
from ensem_core.core.shape import compatibility_class, promote_kind
from ensem_core.core.timeslice import concatenate, cshift, extract, replicate, shift
from ensem_core.errors import (
    ElementKindError,
    EnsembleIOError,
    EnsemError,
    ParseError,
    RangeError,
    ShapeError,
)
from ensem_core.io.ensemble_file import (
    dump_ensemble,
    dumps_ensemble,
    load_ensemble,
    loads_ensemble,
    read_ensemble,
    write_ensemble,
)

__version__ = "0.1.0"
