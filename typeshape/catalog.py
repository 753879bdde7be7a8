"""typeshape.catalog
===================

Type catalog for process-network value types. This module implements
:class:`TypeCatalog`, the registry that owns every descriptor produced during
an introspection run. Actors ask the catalog to register the types flowing
over their channels and get the canonical name back; the catalog keeps exactly
one ``data_type`` entry per name, in registration order, ready to be written
out by :mod:`typeshape.document`.

A catalog is an ordinary object: create one per introspection phase and pass it
to every call site that registers types. Registrations are serialised by an
internal lock, so actors running on several threads can share one catalog
without breaking the one-entry-per-name rule.
"""

from __future__ import annotations

import logging
import threading
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from .constants import DATA_TYPE_TAG, NAME_ATTR, ROOT_TAG, UNSUPPORTED_LOG
from .descriptors import build_descriptor, descriptor_signature, descriptor_to_element
from .errors import TypeNameCollision, UnsupportedType
from .logging_utils import log_unsupported
from .names import TypeNames, normalize
from .types import Descriptor, Tuple, Vector

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configs
# -----------------------------------------------------------------------------
@dataclass
class CatalogConfig:
    """Configuration knobs for the catalog and its document.

    ``indent`` is the string used per nesting level of the rendered document.
    An integer is turned into that many spaces and ``None`` disables
    indentation.
    """

    tuple_sizes: bool = False
    require_explicit_names: bool = False
    detect_collisions: bool = True
    audit_unsupported: bool = False
    unsupported_log: str = UNSUPPORTED_LOG
    indent: Union[str, int, None] = "  "

    def __post_init__(self) -> None:
        if self.indent is None:
            self.indent = ""
        elif isinstance(self.indent, int):
            self.indent = " " * max(0, self.indent)


@dataclass
class CatalogStats:
    registered: int = 0
    dedup_hits: int = 0
    unsupported: int = 0
    flushes: int = 0


@dataclass(frozen=True)
class CatalogEntry:
    """One top-level ``data_type`` entry."""

    name: str
    descriptor: Descriptor
    signature: str
    type_expr: Any = field(compare=False, repr=False, default=None)


class TypeCatalog:
    """Keep one descriptor per canonical type name."""

    def __init__(self, config: CatalogConfig | None = None, type_names: TypeNames | None = None) -> None:
        self.config = config or CatalogConfig()
        self.type_names = type_names or TypeNames()
        self.stats = CatalogStats()
        self._entries: Dict[str, CatalogEntry] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def define_type_name(self, type_expr: Any, name: str) -> str:
        """Give the composite ``type_expr`` an explicit canonical name."""

        with self._lock:
            return self.type_names.define(type_expr, name)

    def canonical_name(self, type_expr: Any) -> str:
        """Return the name ``type_expr`` would be registered under."""

        with self._lock:
            return self.type_names.resolve(type_expr)

    def ensure_registered(self, type_expr: Any) -> str:
        """Make sure ``type_expr`` has an entry and return its canonical name.

        Registering a shape that is already present returns the existing name
        without rebuilding anything. Unsupported shapes raise
        :class:`UnsupportedType` and leave the catalog unchanged. When collision
        detection is on, a second, different shape resolving to an existing
        name raises :class:`TypeNameCollision`.
        """

        with self._lock:
            name = self.type_names.resolve(type_expr)
            existing = self._entries.get(name)
            if existing is not None:
                if not self.config.detect_collisions or existing.type_expr == normalize(type_expr):
                    self.stats.dedup_hits += 1
                    logger.debug("type %s already registered", name)
                    return name

            descriptor = self._build(name, type_expr)
            signature = descriptor_signature(descriptor)
            if existing is not None:
                if existing.signature != signature:
                    raise TypeNameCollision(name, "already describes a different shape")
                self.stats.dedup_hits += 1
                return name

            self._entries[name] = CatalogEntry(name, descriptor, signature, normalize(type_expr))
            self.stats.registered += 1
            logger.debug("registered type %s as <%s>", name, descriptor.kind)
            return name

    def _build(self, name: str, type_expr: Any) -> Descriptor:
        try:
            if self.config.require_explicit_names:
                unnamed = self._first_unnamed_composite(normalize(type_expr))
                if unnamed is not None:
                    raise UnsupportedType(
                        type_expr,
                        f"composite {self.type_names.resolve(unnamed)!r} must be named before registration",
                    )
            return build_descriptor(type_expr, tuple_sizes=self.config.tuple_sizes)
        except UnsupportedType as exc:
            self.stats.unsupported += 1
            logger.warning("rejected type %s: %s", name, exc)
            if self.config.audit_unsupported:
                log_unsupported(name, str(exc), self.config.unsupported_log)
            raise

    def _first_unnamed_composite(self, expr: Any) -> Any:
        """Outermost vector or tuple in ``expr`` without an explicit name."""

        if not isinstance(expr, (Vector, Tuple)):
            return None
        if self.type_names.alias_of(expr) is None:
            return expr
        components = (expr.element,) if isinstance(expr, Vector) else expr.elements
        for item in components:
            unnamed = self._first_unnamed_composite(item)
            if unnamed is not None:
                return unnamed
        return None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, name: str) -> Optional[Descriptor]:
        """Descriptor registered under ``name``, if any."""

        with self._lock:
            entry = self._entries.get(name)
        return entry.descriptor if entry else None

    def entries(self) -> List[CatalogEntry]:
        with self._lock:
            return list(self._entries.values())

    def names(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def to_element(self) -> ET.Element:
        """Build a fresh ``forsyde_types`` element tree of every entry."""

        root = ET.Element(ROOT_TAG)
        for entry in self.entries():
            node = ET.SubElement(root, DATA_TYPE_TAG)
            node.set(NAME_ATTR, entry.name)
            descriptor_to_element(entry.descriptor, node)
        return root


__all__ = ["TypeCatalog", "CatalogConfig", "CatalogStats", "CatalogEntry"]
