"""Public package interface for typeshape."""

from .catalog import CatalogConfig, CatalogEntry, CatalogStats, TypeCatalog
from .descriptors import attach_descriptor, build_descriptor, descriptor_signature
from .document import DocumentWriter, read_document, render_document
from .errors import CatalogWriteError, TypeNameCollision, TypeshapeError, UnsupportedType
from .layout import dtype_of, size_of
from .names import TypeNames, as_type_expr, canonical_name
from .types import Descriptor, Primitive, Tuple, TypeExpr, Vector

__all__ = [
    "TypeCatalog",
    "CatalogConfig",
    "CatalogEntry",
    "CatalogStats",
    "DocumentWriter",
    "render_document",
    "read_document",
    "build_descriptor",
    "attach_descriptor",
    "descriptor_signature",
    "TypeNames",
    "canonical_name",
    "as_type_expr",
    "dtype_of",
    "size_of",
    "Primitive",
    "Vector",
    "Tuple",
    "TypeExpr",
    "Descriptor",
    "TypeshapeError",
    "UnsupportedType",
    "TypeNameCollision",
    "CatalogWriteError",
]
