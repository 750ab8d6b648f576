"""ensem_core.core.arithmetic

Element-wise arithmetic on ensembles.

Binary operations accept two ensembles, or an ensemble and a scalar on
either side.  Ensemble operands are paired through the broadcast rule in
``ensem_core.core.shape``; the result has the first ensemble's bin count
and the longer of the two lengths.

Linear operations (add, subtract, negate, conjugate, real/imag parts,
multiplication by i, scalar add/multiply) act on the stored bins directly.
Nonlinear ones (ensemble multiply/divide, norm2, arctan2, power and the
real functions) go through ``rescale.bracketed`` exactly once.

Division by a real zero is not trapped: it yields ``inf``/``nan`` per IEEE
rules, and the rescale bracket then spreads the ``nan`` over the slice.
"""

from __future__ import annotations

from typing import Callable, Union

import numpy as np

from ensem_core.core.enums import ElementKind
from ensem_core.core.ensemble import Ensemble, Scalar, is_scalar, scalar_kind
from ensem_core.core.rescale import bracketed
from ensem_core.core.shape import broadcast_pair, promote_kind
from ensem_core.errors import ElementKindError

Operand = Union[Ensemble, Scalar]


# ---------------------------------------------------------------------------
# Complex-pair kernels
# ---------------------------------------------------------------------------


def _compose(re: np.ndarray, im: np.ndarray) -> np.ndarray:
    # Assign parts separately; ``re + 1j * im`` turns inf into nan.
    out = np.empty(np.broadcast(re, im).shape, dtype=np.complex128)
    out.real = re
    out.imag = im
    return out


def _divide_arrays(x: np.ndarray, y: np.ndarray, divisor_kind: ElementKind) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        if divisor_kind is ElementKind.real:
            return _compose(x.real / y.real, x.imag / y.real)
        denom = 1.0 / (y.real * y.real + y.imag * y.imag)
        return _compose(
            (x.real * y.real + x.imag * y.imag) * denom,
            (x.imag * y.real - x.real * y.imag) * denom,
        )


def _multiply_arrays(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    with np.errstate(invalid="ignore", over="ignore"):
        return _compose(
            x.real * y.real - x.imag * y.imag,
            x.real * y.imag + x.imag * y.real,
        )


def _require_real(op: str, *operands: Ensemble) -> None:
    if any(e.is_complex for e in operands):
        raise ElementKindError(f"{op} requires real ensembles")


def _require_ensemble(op: str, a: Operand, b: Operand) -> None:
    if not isinstance(a, Ensemble) and not isinstance(b, Ensemble):
        raise TypeError(f"{op}: at least one operand must be an Ensemble")


# ---------------------------------------------------------------------------
# Binary operations
# ---------------------------------------------------------------------------


def add(a: Operand, b: Operand) -> Ensemble:
    """Bin-wise ``a + b``."""
    _require_ensemble("add", a, b)
    if is_scalar(b):
        a, b = b, a
    if is_scalar(a):
        kind = promote_kind(b.kind, scalar_kind(a))
        return b.like(b.data + a, kind)
    x, y = broadcast_pair(a, b, "add")
    return a.like(x + y, promote_kind(a.kind, b.kind))


def subtract(a: Operand, b: Operand) -> Ensemble:
    """Bin-wise ``a - b``."""
    _require_ensemble("subtract", a, b)
    if is_scalar(b):
        return a.like(a.data - b, promote_kind(a.kind, scalar_kind(b)))
    if is_scalar(a):
        return b.like(a - b.data, promote_kind(b.kind, scalar_kind(a)))
    x, y = broadcast_pair(a, b, "subtract")
    return a.like(x - y, promote_kind(a.kind, b.kind))


def _naive_multiply(a: Ensemble, b: Ensemble) -> Ensemble:
    x, y = broadcast_pair(a, b, "multiply")
    return a.like(_multiply_arrays(x, y), promote_kind(a.kind, b.kind))


def multiply(a: Operand, b: Operand) -> Ensemble:
    """Product of two ensembles, or scaling of an ensemble by a constant.

    Ensemble x ensemble products are nonlinear in the bin fluctuations and
    are bracketed by the rescale protocol; a constant factor is linear and
    applied directly.
    """
    _require_ensemble("multiply", a, b)
    if is_scalar(b):
        a, b = b, a
    if is_scalar(a):
        kind = promote_kind(b.kind, scalar_kind(a))
        return b.like(_multiply_arrays(np.asarray(a, dtype=np.complex128), b.data), kind)
    return bracketed(_naive_multiply, a, b)


def _naive_divide(a: Ensemble, b: Ensemble) -> Ensemble:
    x, y = broadcast_pair(a, b, "divide")
    return a.like(_divide_arrays(x, y, b.kind), promote_kind(a.kind, b.kind))


def divide(a: Operand, b: Operand) -> Ensemble:
    """Quotient ``a / b``.

    A real divisor divides both components by its real part; a complex
    divisor uses ``conj(b) / |b|^2``.  ``scalar / ensemble`` is promoted to
    a constant ensemble so it goes through the rescale bracket.
    """
    _require_ensemble("divide", a, b)
    if is_scalar(b):
        kind = promote_kind(a.kind, scalar_kind(b))
        divisor = np.asarray(b, dtype=np.complex128)
        return a.like(_divide_arrays(a.data, divisor, scalar_kind(b)), kind)
    if is_scalar(a):
        a = Ensemble.from_scalar(a, b.nbin, 1, b.resampling)
    return bracketed(_naive_divide, a, b)


# ---------------------------------------------------------------------------
# Unary operations
# ---------------------------------------------------------------------------


def negate(ens: Ensemble) -> Ensemble:
    return ens.like(-ens.data)


def conjugate(ens: Ensemble) -> Ensemble:
    """Complex conjugate; the identity on real ensembles."""
    if ens.is_real:
        return ens.like(ens.data)
    return ens.like(np.conj(ens.data))


def real_part(ens: Ensemble) -> Ensemble:
    return ens.like(ens.data.real, ElementKind.real)


def imag_part(ens: Ensemble) -> Ensemble:
    return ens.like(ens.data.imag, ElementKind.real)


def times_i(ens: Ensemble) -> Ensemble:
    """Multiply by the imaginary unit: ``(re, im) -> (-im, re)``."""
    d = ens.data
    re = np.zeros(d.shape) if ens.is_real else -d.imag
    return ens.like(_compose(re, d.real), ElementKind.complex)


def _naive_norm2(ens: Ensemble) -> Ensemble:
    d = ens.data
    with np.errstate(over="ignore"):
        return ens.like(d.real * d.real + d.imag * d.imag, ElementKind.real)


def norm2(ens: Ensemble) -> Ensemble:
    """``re^2 + im^2`` per element; always real."""
    return bracketed(_naive_norm2, ens)


def cmplx(re: Ensemble, im: Ensemble) -> Ensemble:
    """Complex ensemble with real part ``re`` and imaginary part ``im``."""
    _require_real("cmplx", re, im)
    x, y = broadcast_pair(re, im, "cmplx")
    return re.like(_compose(x.real, y.real), ElementKind.complex)


# ---------------------------------------------------------------------------
# Nonlinear real functions
# ---------------------------------------------------------------------------


def _naive_arctan2(y: Ensemble, x: Ensemble) -> Ensemble:
    a, b = broadcast_pair(y, x, "arctan2")
    return y.like(np.arctan2(a.real, b.real), ElementKind.real)


def arctan2(y: Ensemble, x: Ensemble) -> Ensemble:
    """Bin-wise ``atan2(y, x)`` of two real ensembles."""
    _require_real("arctan2", y, x)
    return bracketed(_naive_arctan2, y, x)


def apply_function(ens: Ensemble, func: Callable[[np.ndarray], np.ndarray]) -> Ensemble:
    """Apply a vectorised real function to every bin of a real ensemble.

    ``func`` receives the rescaled ``(nbin, length)`` float array and must
    return an array of the same shape.
    """
    _require_real(getattr(func, "__name__", "apply_function"), ens)

    def _naive(e: Ensemble) -> Ensemble:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            out = np.asarray(func(e.data.real), dtype=np.float64)
        if out.shape != e.shape:
            raise ValueError(
                f"function returned shape {out.shape}, expected {e.shape}"
            )
        return e.like(out, ElementKind.real)

    return bracketed(_naive, ens)


def power(ens: Ensemble, exponent: float) -> Ensemble:
    """``ens ** exponent`` for a real ensemble and a real exponent."""
    if np.iscomplexobj(exponent):
        raise ElementKindError("power requires a real exponent")
    _require_real("power", ens)
    p = float(exponent)
    return apply_function(ens, lambda x: np.power(x, p))


def sqrt(ens: Ensemble) -> Ensemble:
    return apply_function(ens, np.sqrt)


def exp(ens: Ensemble) -> Ensemble:
    return apply_function(ens, np.exp)


def log(ens: Ensemble) -> Ensemble:
    return apply_function(ens, np.log)


def sin(ens: Ensemble) -> Ensemble:
    return apply_function(ens, np.sin)


def cos(ens: Ensemble) -> Ensemble:
    return apply_function(ens, np.cos)
