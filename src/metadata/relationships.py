# src/metadata/relationships.py — v1
"""Relationship metadata (RELS-EXT.xml) as RDF/XML."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from hypatia.core.models import FileRecord
from hypatia.metadata.resolver import RelationshipResolver, StaticRelationshipResolver
from hypatia.metadata.xml_utils import (
    FEDORA_MODEL_NS,
    FEDORA_NS,
    HYDRA_NS,
    RDF_NS,
    fedora_uri,
    qname,
    require,
)

DEFAULT_GOVERNING_POLICY = "hypatia:default_apo"


def build_relationships(
    record: FileRecord,
    resolver: RelationshipResolver | None = None,
    governing_policy: str = DEFAULT_GOVERNING_POLICY,
) -> ET.Element:
    """Build RELS-EXT with governance, membership and model assertions.

    Args:
        record: File record; unique_combo becomes the RDF subject.
        resolver: Supplies parent collection and object model pids.
            Defaults to placeholders.
        governing_policy: Pid of the admin policy object.

    Raises:
        MissingFieldError: If unique_combo is not set.
    """
    subject = require(record, "unique_combo")
    resolver = resolver or StaticRelationshipResolver()

    rdf = ET.Element(qname(RDF_NS, "RDF"))
    description = ET.SubElement(
        rdf, qname(RDF_NS, "Description"), {qname(RDF_NS, "about"): fedora_uri(subject)},
    )
    relations = [
        (HYDRA_NS, "isGovernedBy", governing_policy),
        (FEDORA_NS, "isMemberOf", resolver.parent_collection(record)),
        (FEDORA_MODEL_NS, "hasModel", resolver.object_model(record)),
    ]
    for namespace, predicate, target in relations:
        ET.SubElement(
            description,
            qname(namespace, predicate),
            {qname(RDF_NS, "resource"): fedora_uri(target)},
        )
    return rdf
