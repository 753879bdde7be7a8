"""typeshape.errors
==================

Exceptions raised by the catalog. Each one also derives from the builtin
exception a caller would naturally catch for the same condition.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union


class TypeshapeError(Exception):
    """Base class for all catalog errors."""


class UnsupportedType(TypeshapeError, TypeError):
    """Raised when a type expression is not a primitive, vector or tuple."""

    def __init__(self, type_expr: Any, reason: str | None = None) -> None:
        self.type_expr = type_expr
        message = f"Unsupported type {type_expr!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TypeNameCollision(TypeshapeError, ValueError):
    """Raised when one canonical name would describe two different shapes."""

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        super().__init__(f"Type name {name!r} {detail}")


class CatalogWriteError(TypeshapeError, OSError):
    """Raised when the catalog document cannot be written to ``path``."""

    def __init__(self, path: Union[str, Path], reason: str = "") -> None:
        self.path = Path(path)
        message = f"{self.path}: file could not be opened to write the type catalog"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


__all__ = ["TypeshapeError", "UnsupportedType", "TypeNameCollision", "CatalogWriteError"]
