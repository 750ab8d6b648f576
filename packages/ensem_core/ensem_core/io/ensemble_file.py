"""ensem_core.io.ensemble_file

Line-oriented text format for ensembles.

Layout
------
::

    <nbin> <length> <type> 0 1
    <t> <re>            # real, type 0
    <t> <re> <im>       # complex, type 1

Records are grouped per bin: all ``length`` slices of bin 0, then bin 1,
and so on.  Inside a bin the time index must run ``0 .. length-1``.  The
last two header fields are a reserved column and the column count; only
one column is supported.

Floats are written with ``%.{precision}g`` (at least 12 significant
digits), so integral values come out without a decimal point.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, TextIO, Tuple, Union

import numpy as np

from ensem_core.core.enums import ElementKind, ResamplingKind
from ensem_core.core.ensemble import Ensemble
from ensem_core.errors import EnsembleIOError, ParseError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_PRECISION = 12
MIN_PRECISION = 12
MAX_PRECISION = 17


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def _check_precision(precision: int) -> int:
    precision = int(precision)
    if not MIN_PRECISION <= precision <= MAX_PRECISION:
        raise ValueError(
            f"precision must be in [{MIN_PRECISION}, {MAX_PRECISION}], got {precision}"
        )
    return precision


def _iter_lines(ens: Ensemble, precision: int) -> Iterator[str]:
    p = _check_precision(precision)
    yield f"{ens.nbin} {ens.length} {int(ens.kind)} 0 1\n"
    for row in ens.data:
        for t, value in enumerate(row):
            if ens.is_real:
                yield f"{t} {value.real:.{p}g}\n"
            else:
                yield f"{t} {value.real:.{p}g} {value.imag:.{p}g}\n"


def dump_ensemble(ens: Ensemble, fp: TextIO, precision: int = DEFAULT_PRECISION) -> None:
    """Write ``ens`` to an open text stream."""
    fp.writelines(_iter_lines(ens, precision))


def dumps_ensemble(ens: Ensemble, precision: int = DEFAULT_PRECISION) -> str:
    return "".join(_iter_lines(ens, precision))


def write_ensemble(path: PathLike, ens: Ensemble, precision: int = DEFAULT_PRECISION) -> None:
    """Write ``ens`` to ``path``, replacing any existing file.

    Raises
    ------
    EnsembleIOError
        If the file cannot be opened for writing.
    """
    text = dumps_ensemble(ens, precision)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as exc:
        raise EnsembleIOError(f"cannot open {path} for writing: {exc}") from exc
    logger.debug("wrote %r to %s", ens, path)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def _parse_int(field: str, source: str, lineno: int) -> int:
    try:
        return int(field)
    except ValueError:
        raise ParseError(f"expected an integer, got {field!r}", source, lineno) from None


def _parse_float(field: str, source: str, lineno: int) -> float:
    try:
        return float(field)
    except ValueError:
        raise ParseError(f"expected a number, got {field!r}", source, lineno) from None


def _parse_header(line: str, source: str, lineno: int) -> Tuple[int, int, ElementKind]:
    fields = line.split()
    if len(fields) != 5:
        raise ParseError(
            f"header needs 5 fields, got {len(fields)}: {line.strip()!r}", source, lineno
        )
    nbin, length, tag, _reserved, ncol = (_parse_int(f, source, lineno) for f in fields)
    if ncol != 1:
        raise ParseError(f"only 1 column is supported, got {ncol}", source, lineno)
    if tag not in (ElementKind.real, ElementKind.complex):
        raise ParseError(f"unsupported type tag {tag}", source, lineno)
    if nbin <= 0 or length <= 0:
        raise ParseError(
            f"invalid ensemble shape nbin={nbin}, length={length}", source, lineno
        )
    return nbin, length, ElementKind(tag)


def parse_lines(
    lines: Iterable[str],
    source: str = "<string>",
    resampling: ResamplingKind = ResamplingKind.jackknife,
) -> Ensemble:
    """Parse the ensemble text format from an iterable of lines."""
    numbered = enumerate(lines, start=1)

    first = next(numbered, None)
    if first is None:
        raise ParseError("missing header line", source)
    nbin, length, kind = _parse_header(first[1], source, first[0])

    ncols = 2 if kind is ElementKind.real else 3
    # Grown record by record; the header alone does not size the buffer.
    values: List[complex] = []
    for n in range(nbin):
        for k in range(length):
            record = next(numbered, None)
            if record is None:
                raise ParseError(
                    f"unexpected end of data at bin {n}, time slice {k}", source
                )
            lineno, line = record
            fields = line.split()
            if len(fields) != ncols:
                raise ParseError(
                    f"expected {ncols} space separated values, got {line.strip()!r}",
                    source,
                    lineno,
                )
            t = _parse_int(fields[0], source, lineno)
            if t != k:
                raise ParseError(f"expected time slice {k}, got {t}", source, lineno)
            re = _parse_float(fields[1], source, lineno)
            im = _parse_float(fields[2], source, lineno) if ncols == 3 else 0.0
            values.append(complex(re, im))

    for lineno, line in numbered:
        if line.strip():
            logger.warning(
                "%s:%d: ignoring content after %d records", source, lineno, nbin * length
            )
            break

    data = np.array(values, dtype=np.complex128).reshape(nbin, length)
    return Ensemble(data, kind, resampling)


def load_ensemble(
    fp: TextIO,
    resampling: ResamplingKind = ResamplingKind.jackknife,
    source: str = "<stream>",
) -> Ensemble:
    return parse_lines(fp, source=source, resampling=resampling)


def loads_ensemble(
    text: str,
    resampling: ResamplingKind = ResamplingKind.jackknife,
    source: str = "<string>",
) -> Ensemble:
    return parse_lines(io.StringIO(text), source=source, resampling=resampling)


def read_ensemble(
    path: PathLike,
    resampling: ResamplingKind = ResamplingKind.jackknife,
) -> Ensemble:
    """Read an ensemble file.

    Raises
    ------
    EnsembleIOError
        If the file cannot be opened.
    ParseError
        If the contents do not follow the format.
    """
    try:
        f = open(path, "r", encoding="utf-8")
    except OSError as exc:
        raise EnsembleIOError(f"cannot open {path} for reading: {exc}") from exc
    with f:
        try:
            ens = parse_lines(f, source=str(path), resampling=resampling)
        except UnicodeDecodeError as exc:
            raise ParseError(f"not UTF-8 text: {exc.reason}", str(path)) from exc
    logger.debug("read %r from %s", ens, path)
    return ens
