"""typeshape.document
====================

Serialisation of a :class:`~typeshape.catalog.TypeCatalog` into the XML type
document consumed by external tools, and the matching reader.

The document is a fixed preamble followed by the ``forsyde_types`` root::

    <?xml version="1.0" ?>
    <!-- Automatically generated by ForSyDe -->
    <forsyde_types>
      <data_type name="vector&lt;int&gt;">
        <vector size="24">
          <primitive name="int" size="4" />
        </vector>
      </data_type>
    </forsyde_types>

Rendering is deterministic, so flushing an unchanged catalog twice yields
byte-identical files.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Union

from .catalog import TypeCatalog
from .constants import DATA_TYPE_TAG, DEFAULT_OUTPUT, GENERATOR_COMMENT, NAME_ATTR, ROOT_TAG, XML_DECLARATION
from .descriptors import element_to_descriptor
from .errors import CatalogWriteError
from .types import Descriptor

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def render_document(catalog: TypeCatalog) -> str:
    """Return the full text of the catalog document."""

    root = catalog.to_element()
    indent = catalog.config.indent
    if indent:
        ET.indent(root, space=indent)
    body = ET.tostring(root, encoding="unicode")
    return "\n".join([XML_DECLARATION, GENERATOR_COMMENT, body]) + "\n"


class DocumentWriter:
    """Write the document of ``catalog`` to disk."""

    def __init__(self, catalog: TypeCatalog) -> None:
        self.catalog = catalog

    def render(self) -> str:
        return render_document(self.catalog)

    def flush(self, path: PathLike = DEFAULT_OUTPUT) -> Path:
        """Write the document to ``path`` and return it as a :class:`Path`.

        The destination is opened for writing directly, so a symlinked
        destination updates the file it points to.

        Raises
        ------
        CatalogWriteError
            If ``path`` cannot be written. The catalog is left untouched.
        """

        target = Path(path)
        text = self.render()
        try:
            with target.open("w", encoding="utf-8") as handle:
                handle.write(text)
        except OSError as exc:
            raise CatalogWriteError(target, exc.strerror or str(exc)) from exc
        self.catalog.stats.flushes += 1
        logger.info("wrote %d types to %s", len(self.catalog), target)
        return target


def read_document(path: PathLike) -> Dict[str, Descriptor]:
    """Parse a catalog document back into ``{name: descriptor}``.

    Entries keep document order.
    """

    root = ET.parse(Path(path)).getroot()
    if root.tag != ROOT_TAG:
        raise ValueError(f"{path}: expected <{ROOT_TAG}> root, found <{root.tag}>")
    types: Dict[str, Descriptor] = {}
    for node in root:
        if node.tag != DATA_TYPE_TAG:
            raise ValueError(f"{path}: unexpected <{node.tag}> under <{ROOT_TAG}>")
        name = node.get(NAME_ATTR)
        if not name:
            raise ValueError(f"{path}: <{DATA_TYPE_TAG}> without a {NAME_ATTR} attribute")
        if name in types:
            raise ValueError(f"{path}: duplicate type name {name!r}")
        children = list(node)
        if len(children) != 1:
            raise ValueError(f"{path}: type {name!r} needs exactly one descriptor, found {len(children)}")
        types[name] = element_to_descriptor(children[0])
    return types


__all__ = ["DocumentWriter", "render_document", "read_document"]
