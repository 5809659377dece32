# src/packaging/bagit_writer.py — v1
"""BagIt package writer (default backend), built on the bagit library.

Files are staged flat in the package directory; finalize() turns the
directory into a bag in place, moving everything into data/ and writing
one manifest per checksum algorithm.
"""

from __future__ import annotations

import logging
import shutil
import threading
from pathlib import Path

import bagit

from hypatia.core.errors import PackageWriteError
from hypatia.packaging.base_package_writer import BasePackageWriter
from hypatia.packaging.layout import PAYLOAD_DIR, is_leaf_name
from hypatia.packaging.models import PackageHandle, PackageManifest

logger = logging.getLogger(__name__)

DEFAULT_CHECKSUMS = ("md5", "sha1")

# bagit.make_bag() chdirs into the bag while it works, which is process-wide.
_BAGIT_LOCK = threading.Lock()


class BagItWriter(BasePackageWriter):
    """Write packages as BagIt bags on the local filesystem."""

    def __init__(
        self,
        checksums: list[str] | tuple[str, ...] | None = None,
        source_organization: str = "",
    ) -> None:
        """Initialize with manifest algorithms.

        Args:
            checksums: Algorithms for manifest-<alg>.txt files.
            source_organization: Written to bag-info.txt when set.
        """
        self._checksums = list(checksums or DEFAULT_CHECKSUMS)
        self._source_organization = source_organization

    @property
    def checksums(self) -> list[str]:
        return list(self._checksums)

    def create(self, directory: Path) -> PackageHandle:
        """Create the package directory; it must not exist yet."""
        path = Path(directory).resolve()
        if path.exists():
            raise PackageWriteError(f"Package directory already exists: {path}")
        try:
            path.mkdir(parents=True)
        except OSError as exc:
            raise PackageWriteError(f"Cannot create package directory {path}: {exc}") from exc
        logger.debug("Created package directory %s", path)
        return PackageHandle(path=path)

    def add_file(self, handle: PackageHandle, name: str, content: bytes | Path) -> None:
        """Write bytes or copy a file into the package.

        Raises:
            PackageWriteError: If the package is finalized, the name is not a
                leaf name, or the name was already added.
            FileNotFoundError: If content is a path that does not exist.
        """
        if handle.finalized:
            raise PackageWriteError(f"Package {handle.path} is already finalized")
        if not is_leaf_name(name):
            raise PackageWriteError(f"Not a leaf file name: {name!r}")
        if name in handle.added:
            raise PackageWriteError(f"{name!r} already added to {handle.path}")

        target = handle.path / name
        if isinstance(content, Path):
            shutil.copy2(str(content), str(target))
        else:
            target.write_bytes(content)
        handle.added.append(name)

    def finalize(self, handle: PackageHandle, info: dict[str, str] | None = None) -> PackageManifest:
        """Make the bag and return its payload manifest.

        Args:
            handle: Package returned by create().
            info: Extra bag-info.txt tags.
        """
        if handle.finalized:
            raise PackageWriteError(f"Package {handle.path} is already finalized")

        bag_info = dict(info or {})
        if self._source_organization:
            bag_info.setdefault("Source-Organization", self._source_organization)

        with _BAGIT_LOCK:
            try:
                bag = bagit.make_bag(
                    str(handle.path), bag_info=bag_info, checksums=self._checksums,
                )
            except (bagit.BagError, OSError) as exc:
                raise PackageWriteError(f"Cannot finalize {handle.path}: {exc}") from exc
        handle.finalized = True

        entries: dict[str, dict[str, str]] = {}
        for key, digests in bag.payload_entries().items():
            name = Path(key).relative_to(PAYLOAD_DIR).as_posix()
            entries[name] = dict(digests)

        manifest = PackageManifest(
            path=handle.path,
            algorithms=sorted(bag.algorithms),
            entries=entries,
            manifest_files=sorted(p.name for p in handle.path.glob("manifest-*.txt")),
        )
        logger.info(
            "Finalized package %s (%d payload files, %s)",
            handle.path.name, len(entries), ",".join(manifest.algorithms),
        )
        return manifest

    def verify(self, directory: Path) -> bool:
        """Validate every manifest of a finalized bag against disk."""
        path = Path(directory).resolve()
        with _BAGIT_LOCK:
            try:
                bag = bagit.Bag(str(path))
                bag.validate()
            except bagit.BagValidationError as exc:
                logger.warning("Package %s failed validation: %s", path, exc)
                return False
            except bagit.BagError as exc:
                logger.warning("Not a readable package %s: %s", path, exc)
                return False
        return True
