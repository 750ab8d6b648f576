"""
ensem_core.errors

Typed exceptions raised by the ensemble engine and its file layer.
"""

from __future__ import annotations

from typing import Optional


class EnsemError(Exception):
    """Base ensem error."""


class ShapeError(EnsemError, ValueError):
    """Bin-count mismatch, or a length mismatch outside the broadcast rule."""


class ElementKindError(EnsemError, TypeError):
    """Operation requires real operands but received complex ones."""


class RangeError(EnsemError, IndexError):
    """Shift magnitude, extraction bounds or replication count out of range."""


class ParseError(EnsemError, ValueError):
    def __init__(self, message: str, source: str = "<string>", lineno: Optional[int] = None):
        where = source if lineno is None else f"{source}:{lineno}"
        super().__init__(f"{where}: {message}")
        self.source = source
        self.lineno = lineno


class EnsembleIOError(EnsemError, OSError):
    pass
