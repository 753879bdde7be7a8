"""typeshape.layout
==================

Host byte-size model. Every supported type expression maps onto a numpy dtype
whose ``itemsize`` is the C footprint of the type on this host:

* primitives use the dtype of their C character code,
* dynamic vectors are three pointer-sized words (the container handle, never
  the contents),
* fixed arrays are a numpy subarray of their element,
* tuples are an aligned structured dtype, which follows the C struct layout
  rules including padding.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from .constants import VECTOR_HANDLE_WORDS
from .errors import UnsupportedType
from .names import as_type_expr
from .primitives import get_primitive
from .types import Primitive, Tuple, Vector


def dtype_of(type_expr: Any) -> np.dtype:
    """Return the numpy dtype modelling the in-memory layout of ``type_expr``."""

    expr = as_type_expr(type_expr)
    if isinstance(expr, Primitive):
        return get_primitive(expr.name).dtype
    if isinstance(expr, Vector):
        if expr.length is None:
            return np.dtype((np.intp, (VECTOR_HANDLE_WORDS,)))
        return np.dtype((dtype_of(expr.element), (expr.length,)))
    if isinstance(expr, Tuple):
        fields = [(f"f{index}", dtype_of(item)) for index, item in enumerate(expr.elements)]
        return np.dtype(fields, align=True)
    raise UnsupportedType(type_expr, "no byte layout for this shape")


def size_of(type_expr: Any) -> int:
    """Byte footprint of ``type_expr`` on this host."""

    return int(dtype_of(type_expr).itemsize)


__all__ = ["dtype_of", "size_of"]
