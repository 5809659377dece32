# src/report/parser.py — v1
"""Forensic-export report parser.

Reads an FTK-style XML report into a Collection and a mapping of
unique_combo -> FileRecord. Expected shape:

    <ftkReport>
      <collection>
        <title/> <callNumber/> <series/> <fileCount/>
      </collection>
      <directory name="...">          (nested to any depth)
        <file id="...">
          <filename/> <exportPath/> <md5/> <sha1/> ...
        </file>
      </directory>
    </ftkReport>

Any structural violation raises MalformedReportError; nothing from a
partially parsed report is returned.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path

from hypatia.core.errors import (
    DuplicateIdentifierError,
    MalformedReportError,
    NotFoundError,
)
from hypatia.core.models import Collection, FileRecord
from hypatia.report.tree import iter_leaves

ROOT_TAG = "ftkReport"
COLLECTION_TAG = "collection"
DIRECTORY_TAG = "directory"
FILE_TAG = "file"

# Child element name -> FileRecord field
REQUIRED_FILE_FIELDS: dict[str, str] = {
    "filename": "filename",
    "exportPath": "export_path",
    "md5": "md5",
    "sha1": "sha1",
}
OPTIONAL_FILE_FIELDS: dict[str, str] = {
    "filetype": "filetype",
    "filesize": "filesize",
    "title": "title",
    "type": "type",
    "medium": "medium",
    "originalPath": "original_path",
    "diskImage": "disk_image",
    "created": "created",
    "accessed": "accessed",
    "modified": "modified",
    "accessRights": "access_rights",
}

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def make_unique_combo(local_id: str, filename: str) -> str:
    """Build the package identifier from a report-local id and a filename.

    The id is the distinguishing part; the filename is sanitized so the
    result is usable as a directory name.
    """
    safe_id = _UNSAFE_CHARS.sub("_", local_id.strip()).strip("_")
    safe_name = _UNSAFE_CHARS.sub("_", filename.strip()).strip("_")
    return f"{safe_id}_{safe_name}"


class ReportParser:
    """Parse a forensic-export report into collection and file records."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or logging.getLogger(__name__)

    def parse(self, report_path: Path | str) -> tuple[Collection, dict[str, FileRecord]]:
        """Parse the report eagerly.

        Args:
            report_path: Path to the XML report.

        Returns:
            (Collection, mapping of unique_combo to FileRecord), mapping in
            report order.

        Raises:
            NotFoundError: If the report is missing or unreadable.
            MalformedReportError: If the report violates the schema.
            DuplicateIdentifierError: If two file nodes share an identifier.
        """
        root = self._load(report_path)
        collection = self._parse_collection(root)

        records: dict[str, FileRecord] = {}
        origins: dict[str, str] = {}
        for position, node in enumerate(_iter_file_nodes(root), start=1):
            record = self._parse_file(node, position)
            where = _describe(node, position)
            if record.unique_combo in records:
                raise DuplicateIdentifierError(
                    record.unique_combo, origins[record.unique_combo], where,
                )
            records[record.unique_combo] = record
            origins[record.unique_combo] = where

        if collection.file_count is not None and collection.file_count != len(records):
            self._log.warning(
                "Report %s declares %d files but describes %d",
                report_path, collection.file_count, len(records),
            )
        self._log.info(
            "Parsed report %s: collection=%r, %d file records",
            report_path, collection.title, len(records),
        )
        return collection, records

    def iter_records(self, report_path: Path | str) -> Iterator[FileRecord]:
        """Yield FileRecords lazily without the uniqueness check."""
        root = self._load(report_path)
        for position, node in enumerate(_iter_file_nodes(root), start=1):
            yield self._parse_file(node, position)

    def read_collection(self, report_path: Path | str) -> Collection:
        """Parse only the collection header."""
        return self._parse_collection(self._load(report_path))

    # --- Internal ---

    def _load(self, report_path: Path | str) -> ET.Element:
        path = Path(report_path)
        if not path.is_file():
            raise NotFoundError(path, "report")
        try:
            tree = ET.parse(path)
        except ET.ParseError as exc:
            raise MalformedReportError(f"Malformed XML in {path}: {exc}") from exc
        except OSError as exc:
            raise NotFoundError(path, "report") from exc

        root = tree.getroot()
        if root.tag != ROOT_TAG:
            raise MalformedReportError(
                f"Unexpected root element <{root.tag}> in {path}, expected <{ROOT_TAG}>"
            )
        self._log.debug("Loaded report %s", path)
        return root

    def _parse_collection(self, root: ET.Element) -> Collection:
        header = root.find(COLLECTION_TAG)
        if header is None:
            raise MalformedReportError("Report has no <collection> header")

        title = _text(header, "title")
        call_number = _text(header, "callNumber")
        missing = [name for name, value in (("title", title), ("callNumber", call_number))
                   if not value]
        if missing:
            raise MalformedReportError(
                f"Collection header is missing: {', '.join(missing)}"
            )

        raw_count = _text(header, "fileCount")
        file_count: int | None = None
        if raw_count is not None:
            try:
                file_count = int(raw_count)
            except ValueError as exc:
                raise MalformedReportError(
                    f"Collection fileCount is not an integer: {raw_count!r}"
                ) from exc

        return Collection(
            title=title,
            call_number=call_number,
            series=_text(header, "series"),
            file_count=file_count,
        )

    def _parse_file(self, node: ET.Element, position: int) -> FileRecord:
        values: dict[str, str | None] = {}
        missing: list[str] = []
        for tag, field in REQUIRED_FILE_FIELDS.items():
            value = _text(node, tag)
            if not value:
                missing.append(tag)
            values[field] = value
        if missing:
            raise MalformedReportError(
                f"File node {_describe(node, position)} is missing: {', '.join(missing)}"
            )

        filename = values["filename"]
        if "/" in filename or "\\" in filename or filename in (".", ".."):
            raise MalformedReportError(
                f"File node {_describe(node, position)} has a non-leaf filename: {filename!r}"
            )

        for tag, field in OPTIONAL_FILE_FIELDS.items():
            values[field] = _text(node, tag)

        local_id = (node.get("id") or "").strip() or str(position)
        return FileRecord(
            local_id=local_id,
            unique_combo=make_unique_combo(local_id, filename),
            **values,
        )


def _iter_file_nodes(root: ET.Element) -> Iterator[ET.Element]:
    return iter_leaves(
        root,
        children=lambda el: (c for c in el if c.tag in (DIRECTORY_TAG, FILE_TAG)),
        is_leaf=lambda el: el.tag == FILE_TAG,
    )


def _text(element: ET.Element, tag: str) -> str | None:
    """Stripped text of a direct child, None when absent or blank."""
    child = element.find(tag)
    if child is None or child.text is None:
        return None
    value = child.text.strip()
    return value or None


def _describe(node: ET.Element, position: int) -> str:
    node_id = node.get("id")
    return f"#{position} (id={node_id})" if node_id else f"#{position}"
