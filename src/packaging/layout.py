# src/packaging/layout.py — v1
"""Package directory conventions.

Before finalize:  {destination_root}/{unique_combo}/{metadata files, payload}
After finalize:   {destination_root}/{unique_combo}/data/{...} plus bagit.txt,
                  bag-info.txt, manifest-<alg>.txt and tagmanifest-<alg>.txt.
"""

from __future__ import annotations

from pathlib import Path

DESCRIPTIVE_FILE = "descMetadata.xml"
CONTENT_FILE = "contentMetadata.xml"
RIGHTS_FILE = "rightsMetadata.xml"
RELATIONSHIP_FILE = "RELS-EXT.xml"

METADATA_FILES = (DESCRIPTIVE_FILE, CONTENT_FILE, RIGHTS_FILE, RELATIONSHIP_FILE)

PAYLOAD_DIR = "data"


def package_dir(destination_root: Path, unique_combo: str) -> Path:
    """Return the directory of one package."""
    return destination_root / unique_combo


def payload_dir(package_path: Path) -> Path:
    """Return the data/ directory of a finalized package."""
    return package_path / PAYLOAD_DIR


def manifest_path(package_path: Path, algorithm: str) -> Path:
    """Return manifest-<algorithm>.txt of a finalized package."""
    return package_path / f"manifest-{algorithm}.txt"


def is_leaf_name(name: str) -> bool:
    """True for a plain file name with no directory components."""
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name
