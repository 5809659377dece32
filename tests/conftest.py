# tests/conftest.py — v1
"""Shared test fixtures for unit and integration tests.

Provides a report writer, a matching source tree, sample records and
settings isolated from any local .env file.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Callable
from pathlib import Path

import pytest

from hypatia.config.settings import Settings
from hypatia.core.models import Collection, FileRecord

EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"
EMPTY_SHA1 = "da39a3ee5e6b4b0d3255bfef95601890afd80709"

# Element name in the report -> key in the file dicts used by tests
FILE_ELEMENTS = (
    ("filename", "filename"),
    ("exportPath", "export_path"),
    ("filetype", "filetype"),
    ("filesize", "filesize"),
    ("md5", "md5"),
    ("sha1", "sha1"),
    ("title", "title"),
    ("type", "type"),
    ("medium", "medium"),
    ("originalPath", "original_path"),
    ("diskImage", "disk_image"),
    ("created", "created"),
    ("accessed", "accessed"),
    ("modified", "modified"),
    ("accessRights", "access_rights"),
)

DEFAULT_COLLECTION = {
    "title": "Example Papers",
    "callNumber": "M1437",
    "series": "Series 1: Floppy disks",
}


def file_entry(**overrides: str) -> dict[str, str]:
    """A complete file description for foo.txt, an empty text file."""
    entry = {
        "id": "1",
        "filename": "foo.txt",
        "export_path": "files/foo.txt",
        "filetype": "Text",
        "filesize": "0 B",
        "md5": EMPTY_MD5,
        "sha1": EMPTY_SHA1,
        "title": "Foo",
        "type": "Text",
        "medium": "Paper",
    }
    entry.update(overrides)
    return entry


def build_report_xml(
    files: list[dict[str, str]],
    collection: dict[str, str] | None = None,
    nested: bool = True,
    root_tag: str = "ftkReport",
    with_header: bool = True,
) -> str:
    """Render a report; nested=True puts files two directories deep."""
    root = ET.Element(root_tag)
    if with_header:
        header = ET.SubElement(root, "collection")
        for tag, value in (collection if collection is not None else DEFAULT_COLLECTION).items():
            ET.SubElement(header, tag).text = value

    parent = root
    if nested:
        parent = ET.SubElement(ET.SubElement(root, "directory", {"name": "export"}),
                               "directory", {"name": "files"})
    for entry in files:
        attrib = {"id": entry["id"]} if entry.get("id") is not None else {}
        node = ET.SubElement(parent, "file", attrib)
        for tag, key in FILE_ELEMENTS:
            if entry.get(key) is not None:
                ET.SubElement(node, tag).text = entry[key]
    return ET.tostring(root, encoding="unicode")


@pytest.fixture
def write_report(tmp_path: Path) -> Callable[..., Path]:
    """Write a report file under tmp_path and return its path."""

    def _write(files: list[dict[str, str]], name: str = "report.xml", **kwargs) -> Path:
        path = tmp_path / name
        path.write_text(build_report_xml(files, **kwargs), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    """Export directory holding files/foo.txt (empty)."""
    root = tmp_path / "export"
    (root / "files").mkdir(parents=True)
    (root / "files" / "foo.txt").write_bytes(b"")
    return root


@pytest.fixture
def destination_root(tmp_path: Path) -> Path:
    root = tmp_path / "packages"
    root.mkdir()
    return root


@pytest.fixture
def settings(destination_root: Path) -> Settings:
    return Settings(_env_file=None, destination_root=destination_root)


@pytest.fixture
def sample_collection() -> Collection:
    return Collection(
        title="Example Papers", call_number="M1437",
        series="Series 1: Floppy disks", file_count=1,
    )


@pytest.fixture
def sample_record() -> FileRecord:
    """Fully populated record for foo.txt."""
    return FileRecord(
        filename="foo.txt",
        export_path="files/foo.txt",
        filetype="Text",
        filesize="0 B",
        md5=EMPTY_MD5,
        sha1=EMPTY_SHA1,
        title="Foo",
        type="Text",
        medium="Paper",
        local_id="1",
        unique_combo="1_foo.txt",
    )


@pytest.fixture
def make_entry() -> Callable[..., dict[str, str]]:
    """Factory for file descriptions, see file_entry()."""
    return file_entry


@pytest.fixture(autouse=True)
def _restore_hypatia_logger():
    """Undo setup_logging() side effects between tests."""
    root = logging.getLogger("hypatia")
    level, handlers = root.level, list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers
