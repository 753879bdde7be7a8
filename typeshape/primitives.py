"""typeshape.primitives
=======================

Central registry of the closed primitive enumeration. Each entry pairs the
canonical name with the numpy character code of the matching C type, so the
host byte-size model and the name table can never drift apart. ``wchar_t`` has
no numpy code; its width comes from :mod:`ctypes`.
"""

from __future__ import annotations

import ctypes
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np


@dataclass(frozen=True)
class PrimitiveSpec:
    """Registry entry for one primitive kind."""

    name: str
    code: Optional[str]

    @property
    def dtype(self) -> np.dtype:
        if self.code is None:
            return np.dtype(f"u{ctypes.sizeof(ctypes.c_wchar)}")
        return np.dtype(self.code)

    @property
    def size(self) -> int:
        return int(self.dtype.itemsize)


PRIMITIVE_REGISTRY: Dict[str, PrimitiveSpec] = {
    entry.name: entry
    for entry in (
        PrimitiveSpec("char", "b"),
        PrimitiveSpec("short int", "h"),
        PrimitiveSpec("unsigned short int", "H"),
        PrimitiveSpec("int", "i"),
        PrimitiveSpec("unsigned int", "I"),
        PrimitiveSpec("long int", "l"),
        PrimitiveSpec("unsigned long int", "L"),
        PrimitiveSpec("long long int", "q"),
        PrimitiveSpec("unsigned long long int", "Q"),
        PrimitiveSpec("bool", "?"),
        PrimitiveSpec("float", "f"),
        PrimitiveSpec("double", "d"),
        PrimitiveSpec("long double", "g"),
        PrimitiveSpec("wchar_t", None),
    )
}

_BY_CODE: Dict[str, str] = {}
for _entry in PRIMITIVE_REGISTRY.values():
    if _entry.code is not None:
        _BY_CODE.setdefault(np.dtype(_entry.code).char, _entry.name)


def get_primitive(name: str) -> PrimitiveSpec:
    """Lookup ``name`` in :data:`PRIMITIVE_REGISTRY` with a helpful error."""

    try:
        return PRIMITIVE_REGISTRY[name]
    except KeyError as exc:
        raise KeyError(f"Unknown primitive {name!r}. Registry keys: {sorted(PRIMITIVE_REGISTRY)}") from exc


def primitive_for_scalar(scalar_type: type) -> Optional[str]:
    """Return the primitive name of a numpy scalar type, or ``None``."""

    try:
        char = np.dtype(scalar_type).char
    except TypeError:
        return None
    return _BY_CODE.get(char)


__all__ = ["PRIMITIVE_REGISTRY", "PrimitiveSpec", "get_primitive", "primitive_for_scalar"]
