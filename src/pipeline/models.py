# src/pipeline/models.py — v1
"""Pipeline result: per-record outcomes and tallies for one report."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from hypatia.assembler.models import AssemblyResult
from hypatia.core.models import Collection


@dataclass
class ProcessResult:
    """Result of processing one report."""

    report_path: Path
    collection: Collection
    destination_root: Path
    results: list[AssemblyResult] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def outcomes(self) -> list[tuple[str, AssemblyResult]]:
        """(identifier, result) pairs in report order."""
        return [(r.identifier, r) for r in self.results]

    @property
    def clean(self) -> int:
        return sum(1 for r in self.results if r.clean)

    @property
    def defective(self) -> int:
        """Finalized packages carrying at least one recorded defect."""
        return sum(1 for r in self.results if r.finalized and r.warnings)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.state == "failed")

    def summary(self) -> str:
        return (
            f"{len(self.results)} records: {self.clean} clean, "
            f"{self.defective} with defects, {self.failed} failed"
        )
