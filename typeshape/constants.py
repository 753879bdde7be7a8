"""typeshape.constants
=====================

Fixed labels of the catalog document plus default paths. Keeping them here
avoids import cycles between the builder, the catalog and the writer, and
makes the document schema easy to find in one place.
"""

from __future__ import annotations

ROOT_TAG = "forsyde_types"
DATA_TYPE_TAG = "data_type"
PRIMITIVE_TAG = "primitive"
VECTOR_TAG = "vector"
TUPLE_TAG = "tuple"

NAME_ATTR = "name"
SIZE_ATTR = "size"
LENGTH_ATTR = "length"

XML_DECLARATION = '<?xml version="1.0" ?>'
GENERATOR_COMMENT = "<!-- Automatically generated by ForSyDe -->"

# std::vector keeps begin/end/capacity pointers.
VECTOR_HANDLE_WORDS = 3

DEFAULT_OUTPUT = "types.xml"
UNSUPPORTED_LOG = "unsupported_types.jsonl"

__all__ = [
    "ROOT_TAG",
    "DATA_TYPE_TAG",
    "PRIMITIVE_TAG",
    "VECTOR_TAG",
    "TUPLE_TAG",
    "NAME_ATTR",
    "SIZE_ATTR",
    "LENGTH_ATTR",
    "XML_DECLARATION",
    "GENERATOR_COMMENT",
    "VECTOR_HANDLE_WORDS",
    "DEFAULT_OUTPUT",
    "UNSUPPORTED_LOG",
]
