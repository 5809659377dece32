# src/packaging/writer_factory.py — v1
"""Factory: instantiate the package writer from configuration."""

from __future__ import annotations

from hypatia.config.settings import Settings
from hypatia.packaging.bagit_writer import BagItWriter
from hypatia.packaging.base_package_writer import BasePackageWriter


def create_package_writer(settings: Settings) -> BasePackageWriter:
    """Create the BagIt writer with the configured checksum algorithms."""
    return BagItWriter(
        checksums=settings.checksum_algorithms_list,
        source_organization=settings.source_organization,
    )
