# src/metadata/xml_utils.py — v1
"""Namespaces and serialization shared by the metadata builders."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from hypatia.core.errors import MissingFieldError
from hypatia.core.models import FileRecord

MODS_NS = "http://www.loc.gov/mods/v3"
RIGHTS_NS = "http://hydra-collab.stanford.edu/schemas/rightsMetadata/v1"
RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
HYDRA_NS = "http://projecthydra.org/ns/relations#"
FEDORA_NS = "info:fedora/fedora-system:def/relations-external#"
FEDORA_MODEL_NS = "info:fedora/fedora-system:def/model#"

FEDORA_URI_PREFIX = "info:fedora/"

for _prefix, _uri in (
    ("mods", MODS_NS),
    ("rights", RIGHTS_NS),
    ("rdf", RDF_NS),
    ("hydra", HYDRA_NS),
    ("fedora", FEDORA_NS),
    ("fedora-model", FEDORA_MODEL_NS),
):
    ET.register_namespace(_prefix, _uri)


def qname(namespace: str, tag: str) -> str:
    """Clark-notation tag, e.g. {http://www.loc.gov/mods/v3}title."""
    return f"{{{namespace}}}{tag}"


def fedora_uri(pid: str) -> str:
    """Prefix a bare pid with info:fedora/ unless it already carries the prefix."""
    if pid.startswith(FEDORA_URI_PREFIX):
        return pid
    return f"{FEDORA_URI_PREFIX}{pid}"


def require(record: FileRecord, field: str) -> str:
    """Return a populated record attribute or raise MissingFieldError."""
    value = getattr(record, field, None)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingFieldError(field, record.unique_combo)
    return value


def to_xml_bytes(element: ET.Element) -> bytes:
    """Serialize a document as indented UTF-8 with an XML declaration."""
    tree = ET.ElementTree(element)
    ET.indent(tree, space="  ", level=0)
    return ET.tostring(element, encoding="utf-8", xml_declaration=True) + b"\n"
