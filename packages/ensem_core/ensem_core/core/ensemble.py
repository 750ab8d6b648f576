"""ensem_core.core.ensemble

The ``Ensemble`` value type.

An ensemble holds ``nbin`` resampled replicas (jackknife or bootstrap bins)
of an observable measured on ``length`` time-slices.  Storage is a dense
complex128 array of shape ``(nbin, length)``; the flat row-major view
satisfies ``storage[t + length * n] == data[n, t]``.

Ensembles are immutable.  Every operation allocates fresh storage and
returns a new ``Ensemble``; the backing array is flagged read-only so that
accidental in-place edits fail loudly.

Usage
-----
::

    from ensem_core import Ensemble

    a = Ensemble.from_bins([[1.0, 2.0], [1.1, 2.1], [0.9, 1.9]])
    b = Ensemble.from_scalar(2.0, nbin=3, length=1)
    c = (a * b - 1.0).estimate()
"""

from __future__ import annotations

import numbers
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np

from ensem_core.core.enums import ElementKind, ResamplingKind
from ensem_core.errors import ElementKindError, ShapeError

Scalar = Union[int, float, complex, np.number]


def is_scalar(value: Any) -> bool:
    """True for Python and numpy numbers (the operands of scalar broadcast ops)."""
    return isinstance(value, numbers.Number)


def scalar_kind(value: Scalar) -> ElementKind:
    return ElementKind.complex if np.iscomplexobj(value) else ElementKind.real


class Ensemble:
    """Immutable collection of resampled bins over a time axis.

    Parameters
    ----------
    data : array_like, shape (nbin, length)
        Bin values.  Always copied.
    kind : ElementKind
        ``real`` forces every imaginary part to exactly 0.0.
    resampling : ResamplingKind
        Selects the rescale factor used by nonlinear operations.
    """

    __slots__ = ("_data", "_kind", "_resampling")

    # Make numpy scalars defer to our reflected operators.
    __array_ufunc__ = None

    def __init__(
        self,
        data: Any,
        kind: ElementKind,
        resampling: ResamplingKind = ResamplingKind.jackknife,
    ) -> None:
        arr = np.array(data, dtype=np.complex128)
        if arr.ndim != 2:
            raise ShapeError(
                f"ensemble data must be 2-D (nbin, length), got shape {arr.shape}"
            )
        nbin, length = arr.shape
        if nbin <= 0 or length <= 0:
            raise ShapeError(f"invalid ensemble shape nbin={nbin}, length={length}")

        kind = ElementKind(kind)
        if kind is ElementKind.real:
            arr.imag = 0.0
        arr.setflags(write=False)

        self._data = arr
        self._kind = kind
        self._resampling = ResamplingKind(resampling)

    # -- constructors -----------------------------------------------------

    @classmethod
    def from_scalar(
        cls,
        value: Scalar,
        nbin: int,
        length: int,
        resampling: ResamplingKind = ResamplingKind.jackknife,
    ) -> "Ensemble":
        """Every bin and time-slice set to ``value``."""
        _check_extent(nbin, length)
        data = np.full((nbin, length), value, dtype=np.complex128)
        return cls(data, scalar_kind(value), resampling)

    @classmethod
    def from_sequence(
        cls,
        values: Sequence[Scalar],
        nbin: int,
        resampling: ResamplingKind = ResamplingKind.jackknife,
    ) -> "Ensemble":
        """Every bin gets the same per-slice ``values`` (no fluctuations)."""
        row = np.asarray(values)
        if row.ndim != 1:
            raise ShapeError(f"expected a 1-D sequence, got shape {row.shape}")
        _check_extent(nbin, row.shape[0])
        data = np.tile(row.astype(np.complex128), (nbin, 1))
        return cls(data, scalar_kind(row), resampling)

    @classmethod
    def from_bins(
        cls,
        values: Any,
        kind: Optional[ElementKind] = None,
        resampling: ResamplingKind = ResamplingKind.jackknife,
    ) -> "Ensemble":
        """Build from an explicit ``(nbin, length)`` array.

        ``kind`` defaults to complex when ``values`` has a complex dtype.
        An explicit real ``kind`` rejects values with nonzero imaginary parts.
        """
        arr = np.asarray(values)
        if kind is None:
            kind = scalar_kind(arr)
        elif ElementKind(kind) is ElementKind.real and np.any(np.imag(arr) != 0):
            raise ElementKindError("real ensemble given values with nonzero imaginary parts")
        return cls(arr, kind, resampling)

    def like(self, data: Any, kind: Optional[ElementKind] = None) -> "Ensemble":
        """New ensemble sharing this one's resampling (and kind unless given)."""
        return Ensemble(data, self._kind if kind is None else kind, self._resampling)

    # -- accessors --------------------------------------------------------

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def storage(self) -> np.ndarray:
        return self._data.reshape(-1)

    @property
    def kind(self) -> ElementKind:
        return self._kind

    @property
    def resampling(self) -> ResamplingKind:
        return self._resampling

    @property
    def nbin(self) -> int:
        return self._data.shape[0]

    @property
    def length(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    @property
    def is_real(self) -> bool:
        return self._kind is ElementKind.real

    @property
    def is_complex(self) -> bool:
        return self._kind is ElementKind.complex

    def __repr__(self) -> str:
        return (
            f"Ensemble(kind={self._kind.name}, nbin={self.nbin}, "
            f"length={self.length}, resampling={self._resampling.value})"
        )

    # -- operators --------------------------------------------------------
    # Lazy imports: the arithmetic modules import this one.

    def __add__(self, other):
        from ensem_core.core import arithmetic
        return arithmetic.add(self, other) if _operand(other) else NotImplemented

    def __radd__(self, other):
        from ensem_core.core import arithmetic
        return arithmetic.add(other, self) if _operand(other) else NotImplemented

    def __sub__(self, other):
        from ensem_core.core import arithmetic
        return arithmetic.subtract(self, other) if _operand(other) else NotImplemented

    def __rsub__(self, other):
        from ensem_core.core import arithmetic
        return arithmetic.subtract(other, self) if _operand(other) else NotImplemented

    def __mul__(self, other):
        from ensem_core.core import arithmetic
        return arithmetic.multiply(self, other) if _operand(other) else NotImplemented

    def __rmul__(self, other):
        from ensem_core.core import arithmetic
        return arithmetic.multiply(other, self) if _operand(other) else NotImplemented

    def __truediv__(self, other):
        from ensem_core.core import arithmetic
        return arithmetic.divide(self, other) if _operand(other) else NotImplemented

    def __rtruediv__(self, other):
        from ensem_core.core import arithmetic
        return arithmetic.divide(other, self) if _operand(other) else NotImplemented

    def __neg__(self):
        from ensem_core.core import arithmetic
        return arithmetic.negate(self)

    def __pow__(self, exponent):
        from ensem_core.core import arithmetic
        return arithmetic.power(self, exponent) if is_scalar(exponent) else NotImplemented

    def conj(self) -> "Ensemble":
        from ensem_core.core import arithmetic
        return arithmetic.conjugate(self)

    @property
    def real(self) -> "Ensemble":
        from ensem_core.core import arithmetic
        return arithmetic.real_part(self)

    @property
    def imag(self) -> "Ensemble":
        from ensem_core.core import arithmetic
        return arithmetic.imag_part(self)

    def norm2(self) -> "Ensemble":
        from ensem_core.core import arithmetic
        return arithmetic.norm2(self)

    def estimate(self):
        from ensem_core.analysis.estimator import estimate
        return estimate(self)


def _operand(value: Any) -> bool:
    return isinstance(value, Ensemble) or is_scalar(value)


def _check_extent(nbin: int, length: int) -> None:
    if nbin <= 0 or length <= 0:
        raise ShapeError(f"invalid ensemble shape nbin={nbin}, length={length}")


def from_scalar(value, nbin, length, resampling=ResamplingKind.jackknife) -> Ensemble:
    return Ensemble.from_scalar(value, nbin, length, resampling)


def from_sequence(values, nbin, resampling=ResamplingKind.jackknife) -> Ensemble:
    return Ensemble.from_sequence(values, nbin, resampling)
