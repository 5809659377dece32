# src/metadata/resolver.py — v1
"""Relationship resolvers: fill parent membership and object model.

The relationship builder does not know which destination collection or
content model a record belongs to; an injected resolver supplies both.
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

from hypatia.core.models import Collection, FileRecord

DEFAULT_PARENT_PLACEHOLDER = "hypatia:unresolved_collection"
DEFAULT_MODEL_PLACEHOLDER = "hypatia:unresolved_model"
DEFAULT_FILE_MODEL = "afmodel:FileAsset"


@runtime_checkable
class RelationshipResolver(Protocol):
    """Supplies the two context-dependent relations of RELS-EXT."""

    def parent_collection(self, record: FileRecord) -> str:
        """Pid of the collection the record's object is a member of."""
        ...

    def object_model(self, record: FileRecord) -> str:
        """Pid of the content model the record's object conforms to."""
        ...


class StaticRelationshipResolver:
    """Return fixed values for every record (placeholders by default)."""

    def __init__(
        self,
        parent: str = DEFAULT_PARENT_PLACEHOLDER,
        model: str = DEFAULT_MODEL_PLACEHOLDER,
    ) -> None:
        self._parent = parent
        self._model = model

    def parent_collection(self, record: FileRecord) -> str:
        return self._parent

    def object_model(self, record: FileRecord) -> str:
        return self._model


class CollectionRelationshipResolver:
    """Derive membership from the parsed collection's call number.

    A call number such as "M1437" maps to the pid "<namespace>:M1437".
    """

    def __init__(
        self,
        collection: Collection,
        namespace: str = "hypatia",
        model: str = DEFAULT_FILE_MODEL,
    ) -> None:
        slug = re.sub(r"[^A-Za-z0-9._-]+", "_", collection.call_number.strip()).strip("_")
        self._parent = f"{namespace}:{slug}"
        self._model = model

    def parent_collection(self, record: FileRecord) -> str:
        return self._parent

    def object_model(self, record: FileRecord) -> str:
        return self._model
