"""typeshape.names
=================

Canonical naming of type expressions.

Primitives resolve to the fixed names of :data:`~typeshape.primitives.PRIMITIVE_REGISTRY`.
Vectors and tuples resolve to structural names built from their components
(``vector<int>``, ``array<double,4>``, ``tuple<int,float,bool>``), so the same
shape gets the same name on every host. A :class:`TypeNames` table can bind an
explicit name to a composite shape, and those aliases propagate into the
structural names of enclosing types.

Objects outside the closed variant get a fallback name derived from the Python
type identity. Fallback names are opaque tokens for display only; such objects
are rejected later by the descriptor builder.
"""

from __future__ import annotations

import collections.abc
import typing
from typing import Any, Callable, Dict, Optional

import numpy as np

from .errors import TypeNameCollision, UnsupportedType
from .primitives import PRIMITIVE_REGISTRY, primitive_for_scalar
from .types import Primitive, Tuple, Vector

_BUILTIN_PRIMITIVES: Dict[Any, str] = {
    bool: "bool",
    int: "int",
    float: "double",
}

_SEQUENCE_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)


def as_type_expr(obj: Any) -> Any:
    """Coerce ``obj`` into a :class:`Primitive`, :class:`Vector` or :class:`Tuple`.

    Only the outermost level is coerced; components are coerced when they are
    visited. Objects that match none of the shapes are returned unchanged.
    """

    if isinstance(obj, (Primitive, Vector, Tuple)):
        return obj
    if isinstance(obj, str):
        return Primitive(obj) if obj in PRIMITIVE_REGISTRY else obj
    origin = typing.get_origin(obj)
    args = typing.get_args(obj)
    if origin in _SEQUENCE_ORIGINS and len(args) == 1:
        return Vector(args[0])
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return Vector(args[0])
        if args:
            return Tuple(*args)
    if isinstance(obj, type):
        if obj in _BUILTIN_PRIMITIVES:
            return Primitive(_BUILTIN_PRIMITIVES[obj])
        if issubclass(obj, np.generic):
            name = primitive_for_scalar(obj)
            return Primitive(name) if name else obj
    return obj


def normalize(obj: Any) -> Any:
    """Recursively coerce ``obj`` so equal shapes compare and hash equal."""

    expr = as_type_expr(obj)
    if isinstance(expr, Vector):
        return Vector(normalize(expr.element), expr.length)
    if isinstance(expr, Tuple):
        return Tuple(*(normalize(item) for item in expr.elements))
    return expr


def fallback_name(obj: Any) -> str:
    """Name derived from Python's type identity. Not portable."""

    if isinstance(obj, type):
        if obj.__module__ == "builtins":
            return obj.__qualname__
        return f"{obj.__module__}.{obj.__qualname__}"
    return repr(obj)


def _structural_name(obj: Any, lookup: Optional[Callable[[Any], Optional[str]]]) -> str:
    expr = as_type_expr(obj)
    if lookup is not None:
        alias = lookup(expr)
        if alias is not None:
            return alias
    if isinstance(expr, Primitive):
        return expr.name
    if isinstance(expr, Vector):
        inner = _structural_name(expr.element, lookup)
        if expr.length is None:
            return f"vector<{inner}>"
        return f"array<{inner},{expr.length}>"
    if isinstance(expr, Tuple):
        return "tuple<" + ",".join(_structural_name(item, lookup) for item in expr.elements) + ">"
    return fallback_name(expr)


def canonical_name(obj: Any) -> str:
    """Return the canonical name of ``obj`` without consulting any aliases."""

    return _structural_name(obj, None)


class TypeNames:
    """Name table with explicit aliases for composite shapes."""

    def __init__(self) -> None:
        self._aliases: Dict[Any, str] = {}
        self._by_name: Dict[str, Any] = {}

    def define(self, type_expr: Any, name: str) -> str:
        """Bind ``name`` to the composite ``type_expr`` and return it.

        Binding the same pair twice is a no-op. A name already bound to a
        different shape, a primitive name, or a second name for a shape that
        already has one raises :class:`TypeNameCollision`.
        """

        if not name:
            raise ValueError("type name must be a non-empty string")
        expr = normalize(type_expr)
        if isinstance(expr, Primitive):
            if name == expr.name:
                return name
            raise TypeNameCollision(name, f"cannot rename primitive {expr.name!r}")
        if not isinstance(expr, (Vector, Tuple)):
            raise UnsupportedType(type_expr, "only vectors and tuples can be named")
        if name in PRIMITIVE_REGISTRY:
            raise TypeNameCollision(name, "is reserved for a primitive type")
        bound = self._by_name.get(name)
        if bound is not None and bound != expr:
            raise TypeNameCollision(name, f"is already bound to {canonical_name(bound)!r}")
        previous = self._aliases.get(expr)
        if previous is not None and previous != name:
            raise TypeNameCollision(name, f"shape is already named {previous!r}")
        self._aliases[expr] = name
        self._by_name[name] = expr
        return name

    def alias_of(self, type_expr: Any) -> Optional[str]:
        """Explicit name bound to ``type_expr``, if any."""

        expr = normalize(type_expr)
        if not isinstance(expr, (Vector, Tuple)):
            return None
        try:
            return self._aliases.get(expr)
        except TypeError:
            # unhashable leaves never carry aliases
            return None

    def resolve(self, type_expr: Any) -> str:
        """Canonical name of ``type_expr``, preferring explicit aliases."""

        return _structural_name(type_expr, self.alias_of)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)


__all__ = [
    "TypeNames",
    "as_type_expr",
    "canonical_name",
    "fallback_name",
    "normalize",
]
