"""typeshape.types
=================

Foundational data structures used throughout the package: the closed variant
of type expressions fed into the catalog, and the descriptor nodes the
catalog produces from them.

Three shapes are recognised and nothing else:

``Primitive``
    One member of the closed primitive enumeration (see
    :mod:`typeshape.primitives`).
``Vector``
    A homogeneous aggregate of one element type. ``length=None`` models a
    dynamically sized container; an integer length models a fixed array.
``Tuple``
    A heterogeneous aggregate with at least one component. Component order is
    significant.

The module stays definitions-only so that importing it never triggers runtime
side effects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from typing import Tuple as _Tuple
from typing import Union


@dataclass(frozen=True)
class Primitive:
    """Atomic type identified by its canonical primitive name."""

    name: str


@dataclass(frozen=True)
class Vector:
    """Homogeneous aggregate of ``element``.

    Parameters
    ----------
    element:
        Type expression of each element. Python annotations are accepted and
        coerced lazily by the name resolver.
    length:
        ``None`` for dynamically sized containers, otherwise the fixed number
        of elements.
    """

    element: Any
    length: Optional[int] = None

    def __post_init__(self) -> None:
        if self.length is not None and (not isinstance(self.length, int) or self.length < 1):
            raise ValueError(f"Vector length must be a positive integer, got {self.length!r}")


@dataclass(frozen=True)
class Tuple:
    """Heterogeneous, fixed-arity aggregate; ``elements`` keep declaration order."""

    elements: _Tuple[Any, ...]

    def __init__(self, *elements: Any) -> None:
        if len(elements) == 1 and isinstance(elements[0], (list, tuple)):
            elements = tuple(elements[0])
        if not elements:
            raise ValueError("Tuple needs at least one component")
        object.__setattr__(self, "elements", tuple(elements))


TypeExpr = Union[Primitive, Vector, Tuple]


@dataclass(frozen=True)
class Descriptor:
    """Output node describing one type's shape.

    ``name`` is set on primitive nodes only, ``size`` on primitive and vector
    nodes (and on tuple nodes when tuple sizes are enabled), ``length`` on
    fixed-size vectors. ``children`` holds exactly one node for a vector and
    one node per component, in order, for a tuple.
    """

    kind: str
    name: Optional[str] = None
    size: Optional[int] = None
    length: Optional[int] = None
    children: _Tuple["Descriptor", ...] = field(default_factory=tuple)


__all__ = [
    "Primitive",
    "Vector",
    "Tuple",
    "TypeExpr",
    "Descriptor",
]
