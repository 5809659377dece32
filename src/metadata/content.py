# src/metadata/content.py — v1
"""Content-structure metadata (contentMetadata.xml).

One resource node describing the payload file, with its location under
the export directory and the checksums declared by the export tool.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from hypatia.core.models import FileRecord
from hypatia.metadata.xml_utils import require

CHECKSUM_FIELDS = ("md5", "sha1")


def build_content(record: FileRecord) -> ET.Element:
    """Build the contentMetadata document for one file record.

    Checksums are copied verbatim from the record, never recomputed.

    Raises:
        MissingFieldError: If filename, export_path, md5 or sha1 is not set.
    """
    filename = require(record, "filename")
    export_path = require(record, "export_path")
    checksums = {name: require(record, name) for name in CHECKSUM_FIELDS}

    root = ET.Element("contentMetadata", {"type": "file", "objectId": record.unique_combo})
    resource = ET.SubElement(root, "resource", {"id": record.unique_combo, "type": "file"})

    file_attrib = {"id": filename}
    if record.filetype:
        file_attrib["format"] = record.filetype
    if record.filesize:
        file_attrib["size"] = record.filesize
    file_el = ET.SubElement(resource, "file", file_attrib)

    ET.SubElement(file_el, "location", {"type": "filesystem"}).text = export_path
    for name, digest in checksums.items():
        ET.SubElement(file_el, "checksum", {"type": name}).text = digest

    return root
