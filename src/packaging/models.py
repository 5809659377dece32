# src/packaging/models.py — v1
"""Package-writer models: PackageHandle, PackageManifest."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class PackageHandle(BaseModel):
    """An open, not yet finalized package directory."""

    path: Path
    added: list[str] = Field(default_factory=list)
    finalized: bool = False


class PackageManifest(BaseModel):
    """Checksum listing produced when a package is finalized.

    entries maps each added file name (relative to the payload directory)
    to {algorithm: hex digest}.
    """

    path: Path
    algorithms: list[str]
    entries: dict[str, dict[str, str]] = Field(default_factory=dict)
    manifest_files: list[str] = Field(default_factory=list)

    def digest(self, name: str, algorithm: str) -> str | None:
        """Digest of one entry, None when the entry or algorithm is absent."""
        return self.entries.get(name, {}).get(algorithm)
