# src/metadata/rights.py — v1
"""Rights metadata (rightsMetadata.xml): fixed public policy."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from hypatia.core.models import FileRecord
from hypatia.metadata.xml_utils import RIGHTS_NS, qname

DEFAULT_SCHEMA_VERSION = "0.1"

# access type -> machine groups granted
DEFAULT_POLICY: dict[str, tuple[str, ...]] = {
    "discover": ("public",),
    "read": ("public",),
    "edit": (),
}


def build_rights(
    record: FileRecord | None = None,
    schema_version: str = DEFAULT_SCHEMA_VERSION,
) -> ET.Element:
    """Build the default rights document.

    The record is accepted for a uniform builder signature but does not
    influence the output.
    """
    root = ET.Element(qname(RIGHTS_NS, "rightsMetadata"), {"version": schema_version})
    for access_type, groups in DEFAULT_POLICY.items():
        access = ET.SubElement(root, qname(RIGHTS_NS, "access"), {"type": access_type})
        machine = ET.SubElement(access, qname(RIGHTS_NS, "machine"))
        for group in groups:
            ET.SubElement(machine, qname(RIGHTS_NS, "group")).text = group
    return root
