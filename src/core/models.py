# src/core/models.py — v1
"""Shared Pydantic domain models produced by the report parser.

Collection and FileRecord are immutable once parsed; every downstream
component (metadata builders, assembler, pipeline) imports them from here.
"""

from __future__ import annotations

from pydantic import BaseModel


class Collection(BaseModel):
    """Collection-level attributes read once from the report header."""

    model_config = {"frozen": True}

    title: str
    call_number: str
    series: str | None = None
    file_count: int | None = None


class FileRecord(BaseModel):
    """One digitized file described by the report.

    Checksums are carried exactly as the export tool declared them.
    unique_combo names the package directory and is the subject of the
    relationship document.
    """

    model_config = {"frozen": True}

    filename: str
    export_path: str
    md5: str
    sha1: str
    local_id: str
    unique_combo: str
    filetype: str | None = None
    filesize: str | None = None
    title: str | None = None
    type: str | None = None
    medium: str | None = None

    # Optional FTK file details
    original_path: str | None = None
    disk_image: str | None = None
    created: str | None = None
    accessed: str | None = None
    modified: str | None = None
    access_rights: str | None = None
