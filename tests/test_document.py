from __future__ import annotations

import sys
import xml.etree.ElementTree as ET
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import numpy as np
import pytest

from typeshape.catalog import CatalogConfig, TypeCatalog
from typeshape.descriptors import attach_descriptor
from typeshape.document import DocumentWriter, read_document, render_document
from typeshape.errors import CatalogWriteError
from typeshape.types import Tuple, Vector

HANDLE_SIZE = 3 * np.dtype(np.intp).itemsize


def make_catalog(*shapes, **options) -> TypeCatalog:
    catalog = TypeCatalog(CatalogConfig(**options))
    for shape in shapes:
        catalog.ensure_registered(shape)
    return catalog


def parse(path: Path) -> ET.Element:
    return ET.parse(path).getroot()


def test_empty_catalog_flush(tmp_path: Path):
    target = DocumentWriter(make_catalog()).flush(tmp_path / "types.xml")
    text = target.read_text()
    assert text.startswith('<?xml version="1.0" ?>\n<!-- Automatically generated by ForSyDe -->\n')
    root = parse(target)
    assert root.tag == "forsyde_types"
    assert len(root) == 0


def test_flush_twice_is_byte_identical(tmp_path: Path):
    writer = DocumentWriter(make_catalog("int", Vector(Tuple("char", "double"))))
    first = writer.flush(tmp_path / "a.xml").read_bytes()
    second = writer.flush(tmp_path / "b.xml").read_bytes()
    assert first == second
    assert writer.catalog.stats.flushes == 2


def test_primitive_entry_schema(tmp_path: Path):
    target = DocumentWriter(make_catalog("double")).flush(tmp_path / "types.xml")
    root = parse(target)
    entries = root.findall("data_type")
    assert [entry.get("name") for entry in entries] == ["double"]
    (primitive,) = list(entries[0])
    assert primitive.tag == "primitive"
    assert primitive.attrib == {"name": "double", "size": "8"}


def test_duplicate_registration_writes_one_entry(tmp_path: Path):
    catalog = make_catalog(Tuple("int", "float", "bool"), Tuple("int", "float", "bool"))
    root = parse(DocumentWriter(catalog).flush(tmp_path / "types.xml"))
    assert [entry.get("name") for entry in root] == ["tuple<int,float,bool>"]
    (tuple_node,) = list(root[0])
    assert tuple_node.tag == "tuple"
    assert "size" not in tuple_node.attrib
    assert [child.get("name") for child in tuple_node] == ["int", "float", "bool"]


def test_vector_of_tuple_document(tmp_path: Path):
    catalog = make_catalog(Vector(Tuple("char", "double")))
    root = parse(DocumentWriter(catalog).flush(tmp_path / "types.xml"))
    entry = root.find("data_type")
    assert entry.get("name") == "vector<tuple<char,double>>"
    (vector_node,) = list(entry)
    assert vector_node.tag == "vector"
    assert vector_node.get("size") == str(HANDLE_SIZE)
    (tuple_node,) = list(vector_node)
    assert [(child.tag, child.get("name")) for child in tuple_node] == [
        ("primitive", "char"),
        ("primitive", "double"),
    ]


def test_tuple_size_attribute_when_enabled(tmp_path: Path):
    catalog = make_catalog(Tuple("char", "double"), tuple_sizes=True)
    root = parse(DocumentWriter(catalog).flush(tmp_path / "types.xml"))
    assert root.find("data_type/tuple").get("size") == "16"


def test_unwritable_destination_reports_path(tmp_path: Path):
    catalog = make_catalog("int", Vector("float"))
    writer = DocumentWriter(catalog)
    bad_path = tmp_path / "missing" / "types.xml"
    with pytest.raises(CatalogWriteError) as excinfo:
        writer.flush(bad_path)
    assert excinfo.value.path == bad_path
    assert str(bad_path) in str(excinfo.value)
    assert isinstance(excinfo.value, OSError)

    assert catalog.names() == ["int", "vector<float>"]
    good = writer.flush(tmp_path / "types.xml")
    assert [entry.get("name") for entry in parse(good)] == ["int", "vector<float>"]
    assert catalog.stats.flushes == 1


def test_flush_onto_directory_fails_cleanly(tmp_path: Path):
    target = tmp_path / "out"
    target.mkdir()
    with pytest.raises(CatalogWriteError):
        DocumentWriter(make_catalog("int")).flush(target)
    assert list(tmp_path.iterdir()) == [target]


def test_read_document_restores_descriptors(tmp_path: Path):
    catalog = make_catalog(
        "wchar_t",
        Vector("int", length=3),
        Tuple(Vector("float"), "long int"),
    )
    target = DocumentWriter(catalog).flush(tmp_path / "types.xml")
    restored = read_document(target)
    assert list(restored) == catalog.names()
    for name in catalog.names():
        assert restored[name] == catalog.get(name)


def test_read_document_rejects_malformed(tmp_path: Path):
    bad = tmp_path / "bad.xml"
    bad.write_text("<forsyde_types><data_type name='x'><vector size='8'/></data_type></forsyde_types>")
    with pytest.raises(ValueError):
        read_document(bad)
    other = tmp_path / "other.xml"
    other.write_text("<process_network/>")
    with pytest.raises(ValueError):
        read_document(other)


def test_render_without_indent_is_single_line():
    catalog = make_catalog("bool", indent=None)
    body = render_document(catalog).splitlines()[2]
    assert body == '<forsyde_types><data_type name="bool"><primitive name="bool" size="1" /></data_type></forsyde_types>'


def test_attach_descriptor_under_parent():
    parent = ET.Element("port")
    node = attach_descriptor(Vector("short int"), parent)
    assert parent[0] is node
    assert node.tag == "vector"
    assert node[0].attrib == {"name": "short int", "size": "2"}


def test_flush_through_symlink_updates_target(tmp_path: Path):
    real = tmp_path / "real.xml"
    real.write_text("old")
    link = tmp_path / "link.xml"
    link.symlink_to(real)
    DocumentWriter(make_catalog("int")).flush(link)
    assert link.is_symlink()
    assert [entry.get("name") for entry in parse(real)] == ["int"]


def test_flush_ignores_neighbouring_tmp_entries(tmp_path: Path):
    (tmp_path / "types.xml.tmp").mkdir()
    stray = tmp_path / "notes.xml.tmp"
    stray.write_text("keep me")
    target = DocumentWriter(make_catalog("bool")).flush(tmp_path / "types.xml")
    assert [entry.get("name") for entry in parse(target)] == ["bool"]
    assert (tmp_path / "types.xml.tmp").is_dir()
    assert stray.read_text() == "keep me"
