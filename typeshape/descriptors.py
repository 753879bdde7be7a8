"""typeshape.descriptors
========================

Recursive descriptor construction. :func:`build_descriptor` walks a type
expression structurally and returns an immutable :class:`~typeshape.types.Descriptor`
tree; nothing is attached anywhere until the whole tree has been built, so a
rejected component never leaves a partial node behind.

The XML side lives here too: :func:`descriptor_to_element` renders one tree
under a parent element and :func:`element_to_descriptor` reads it back.
"""

from __future__ import annotations

import hashlib
import json
import xml.etree.ElementTree as ET
from typing import Any, List, Optional, Tuple

from .constants import (
    LENGTH_ATTR,
    NAME_ATTR,
    PRIMITIVE_TAG,
    SIZE_ATTR,
    TUPLE_TAG,
    VECTOR_TAG,
)
from .errors import UnsupportedType
from .layout import size_of
from .names import as_type_expr
from .primitives import PRIMITIVE_REGISTRY
from .types import Descriptor, Primitive, Tuple as TupleType, Vector

_KINDS = (PRIMITIVE_TAG, VECTOR_TAG, TUPLE_TAG)


def build_descriptor(type_expr: Any, *, tuple_sizes: bool = False) -> Descriptor:
    """Return the descriptor tree for ``type_expr``.

    Parameters
    ----------
    type_expr:
        A :class:`Primitive`, :class:`Vector` or :class:`Tuple`, or a Python
        annotation that coerces to one.
    tuple_sizes:
        Record the aligned byte footprint on tuple nodes as well.

    Raises
    ------
    UnsupportedType
        If ``type_expr`` or any component is outside the three shapes.
    """

    expr = as_type_expr(type_expr)
    if isinstance(expr, Primitive):
        if expr.name not in PRIMITIVE_REGISTRY:
            raise UnsupportedType(type_expr, f"unknown primitive {expr.name!r}")
        return Descriptor(PRIMITIVE_TAG, name=expr.name, size=size_of(expr))
    if isinstance(expr, Vector):
        child = build_descriptor(expr.element, tuple_sizes=tuple_sizes)
        return Descriptor(VECTOR_TAG, size=size_of(expr), length=expr.length, children=(child,))
    if isinstance(expr, TupleType):
        children = tuple(build_descriptor(item, tuple_sizes=tuple_sizes) for item in expr.elements)
        size = size_of(expr) if tuple_sizes else None
        return Descriptor(TUPLE_TAG, size=size, children=children)
    raise UnsupportedType(type_expr, "expected a primitive, vector or tuple")


def _signature_payload(descriptor: Descriptor) -> Tuple[Any, ...]:
    return (
        descriptor.kind,
        descriptor.name,
        descriptor.length,
        tuple(_signature_payload(child) for child in descriptor.children),
    )


def descriptor_signature(descriptor: Descriptor) -> str:
    """Return a structural fingerprint of ``descriptor``.

    Sizes are left out so the fingerprint only depends on the shape.
    """

    blob = json.dumps(_signature_payload(descriptor), separators=(",", ":"))
    return hashlib.md5(blob.encode()).hexdigest()


def descriptor_to_element(descriptor: Descriptor, parent: ET.Element) -> ET.Element:
    """Append the element tree of ``descriptor`` under ``parent``."""

    node = ET.SubElement(parent, descriptor.kind)
    if descriptor.name is not None:
        node.set(NAME_ATTR, descriptor.name)
    if descriptor.size is not None:
        node.set(SIZE_ATTR, str(descriptor.size))
    if descriptor.length is not None:
        node.set(LENGTH_ATTR, str(descriptor.length))
    for child in descriptor.children:
        descriptor_to_element(child, node)
    return node


def attach_descriptor(type_expr: Any, parent: ET.Element, *, tuple_sizes: bool = False) -> ET.Element:
    """Build the descriptor of ``type_expr`` and attach it under ``parent``."""

    return descriptor_to_element(build_descriptor(type_expr, tuple_sizes=tuple_sizes), parent)


def _int_attr(node: ET.Element, attr: str) -> Optional[int]:
    value = node.get(attr)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"<{node.tag}> has a non-integer {attr}={value!r}") from exc


def element_to_descriptor(node: ET.Element) -> Descriptor:
    """Parse a descriptor element produced by :func:`descriptor_to_element`."""

    if node.tag not in _KINDS:
        raise ValueError(f"Unexpected descriptor element <{node.tag}>")
    children: List[Descriptor] = [element_to_descriptor(child) for child in node]
    if node.tag == PRIMITIVE_TAG and children:
        raise ValueError("<primitive> elements cannot have children")
    if node.tag == VECTOR_TAG and len(children) != 1:
        raise ValueError(f"<vector> needs exactly one child, found {len(children)}")
    if node.tag == TUPLE_TAG and not children:
        raise ValueError("<tuple> needs at least one child")
    return Descriptor(
        node.tag,
        name=node.get(NAME_ATTR),
        size=_int_attr(node, SIZE_ATTR),
        length=_int_attr(node, LENGTH_ATTR),
        children=tuple(children),
    )


__all__ = [
    "build_descriptor",
    "descriptor_signature",
    "descriptor_to_element",
    "attach_descriptor",
    "element_to_descriptor",
]
