# src/packaging/base_package_writer.py — v1
"""Abstract package writer interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from hypatia.packaging.models import PackageHandle, PackageManifest


class BasePackageWriter(ABC):
    """Unified interface for package-format backends."""

    @abstractmethod
    def create(self, directory: Path) -> PackageHandle:
        """Create an empty package directory and return a handle to it."""

    @abstractmethod
    def add_file(self, handle: PackageHandle, name: str, content: bytes | Path) -> None:
        """Add bytes, or a copy of a file on disk, under a leaf name."""

    @abstractmethod
    def finalize(self, handle: PackageHandle, info: dict[str, str] | None = None) -> PackageManifest:
        """Seal the package and persist its checksum manifest."""

    @abstractmethod
    def verify(self, directory: Path) -> bool:
        """Check a finalized package against its manifests."""
