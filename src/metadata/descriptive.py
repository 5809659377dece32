# src/metadata/descriptive.py — v1
"""Descriptive metadata (descMetadata.xml) as a MODS v3 record."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from hypatia.core.models import FileRecord
from hypatia.metadata.xml_utils import MODS_NS, qname, require

MODS_VERSION = "3.3"


def build_descriptive(record: FileRecord) -> ET.Element:
    """Build a MODS record with title, resource type and physical form.

    Raises:
        MissingFieldError: If title, type or medium is not set.
    """
    title = require(record, "title")
    resource_type = require(record, "type")
    medium = require(record, "medium")

    mods = ET.Element(qname(MODS_NS, "mods"), {"version": MODS_VERSION})

    title_info = ET.SubElement(mods, qname(MODS_NS, "titleInfo"))
    ET.SubElement(title_info, qname(MODS_NS, "title")).text = title

    ET.SubElement(mods, qname(MODS_NS, "typeOfResource")).text = resource_type

    physical = ET.SubElement(mods, qname(MODS_NS, "physicalDescription"))
    ET.SubElement(physical, qname(MODS_NS, "form")).text = medium

    dates = [
        ("dateCreated", {}, record.created),
        ("dateOther", {"type": "accessed"}, record.accessed),
        ("dateModified", {}, record.modified),
    ]
    if any(value for _, _, value in dates):
        origin = ET.SubElement(mods, qname(MODS_NS, "originInfo"))
        for tag, attrib, value in dates:
            if value:
                ET.SubElement(origin, qname(MODS_NS, tag), attrib).text = value

    if record.access_rights:
        ET.SubElement(
            mods, qname(MODS_NS, "accessCondition"), {"type": "useAndReproduction"},
        ).text = record.access_rights

    return mods
