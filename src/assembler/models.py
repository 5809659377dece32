# src/assembler/models.py — v1
"""Assembly result: per-record outcome of building one package."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from hypatia.core.errors import PackageWarning
from hypatia.packaging.models import PackageManifest

# Per-record progression; "failed" can be reached from any state.
AssemblyState = Literal[
    "parsed", "metadata_built", "payload_copied", "payload_missing", "finalized", "failed",
]


@dataclass
class AssemblyResult:
    """Outcome of assembling one FileRecord."""

    identifier: str
    state: AssemblyState = "parsed"
    package_path: Path | None = None
    manifest: PackageManifest | None = None
    warnings: list[PackageWarning] = field(default_factory=list)
    error: str | None = None
    payload_copied: bool = False

    @property
    def finalized(self) -> bool:
        return self.state == "finalized"

    @property
    def clean(self) -> bool:
        """Finalized with no recorded defects."""
        return self.finalized and not self.warnings

    @property
    def defect_codes(self) -> list[str]:
        return [w.code for w in self.warnings]
