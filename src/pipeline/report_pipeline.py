# src/pipeline/report_pipeline.py — v1
"""Report pipeline: parse a report once, then assemble every record.

Usage:
    pipeline = ReportPipeline(settings)
    result = await pipeline.process(report_path, source_root)

Fatal errors (missing report or source directory, malformed report,
duplicate identifiers, unusable destination) propagate before any package
is written. After parsing, records are assembled independently on a
bounded worker pool; a failure in one record never stops the others.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from pathlib import Path

from hypatia.assembler.assembler import PackageAssembler
from hypatia.assembler.models import AssemblyResult
from hypatia.config.repository import RepositoryConfig, init_repository
from hypatia.config.settings import Settings, resolve_destination_root
from hypatia.core.errors import ConfigurationError, HypatiaError, NotFoundError
from hypatia.core.models import Collection, FileRecord
from hypatia.logging.context import set_report_context
from hypatia.metadata.resolver import RelationshipResolver
from hypatia.packaging.base_package_writer import BasePackageWriter
from hypatia.pipeline.models import ProcessResult
from hypatia.report.parser import ReportParser


class ReportPipeline:
    """Turn a forensic-export report into finalized packages.

    Args:
        settings: Run configuration. Loaded from .env if None.
        resolver: Relationship resolver used for every record.
        resolver_factory: Builds a resolver from the parsed collection;
            ignored when resolver is given.
        writer: Package-format backend shared by all records.
        logger: Log sink. Defaults to this module's logger.

    Raises:
        ConfigurationError: If the repository configuration cannot be
            initialized.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        resolver: RelationshipResolver | None = None,
        resolver_factory: Callable[[Collection], RelationshipResolver] | None = None,
        writer: BasePackageWriter | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._resolver = resolver
        self._resolver_factory = resolver_factory
        self._writer = writer
        self._log = logger or logging.getLogger(__name__)
        self._repository = init_repository(
            self._settings.repository_config,
            environment=self._settings.repository_environment,
        )

    @property
    def repository(self) -> RepositoryConfig:
        return self._repository

    async def process(
        self,
        report_path: Path | str,
        source_root: Path | str | None = None,
    ) -> ProcessResult:
        """Parse the report and assemble one package per file record.

        Args:
            report_path: Forensic-export report.
            source_root: Directory export paths are relative to. Falls back
                to settings.source_root.

        Returns:
            ProcessResult with one AssemblyResult per record, report order.
        """
        t0 = time.perf_counter()
        report_path = Path(report_path)
        set_report_context(str(report_path))

        source = self._resolve_source_root(source_root)
        destination = resolve_destination_root(self._settings)

        parser = ReportParser(logger=self._log)
        collection, records = parser.parse(report_path)

        assembler = PackageAssembler(
            destination,
            settings=self._settings,
            source_root=source,
            writer=self._writer,
            resolver=self._build_resolver(collection),
            collection=collection,
            logger=self._log,
        )

        self._log.info(
            "Assembling %d packages from %s into %s (workers=%d)",
            len(records), report_path, destination, self._settings.max_workers,
        )
        semaphore = asyncio.Semaphore(self._settings.max_workers)

        async def _run(record: FileRecord) -> AssemblyResult:
            async with semaphore:
                return await asyncio.to_thread(self._assemble_isolated, assembler, record)

        results = await asyncio.gather(*(_run(r) for r in records.values()))

        result = ProcessResult(
            report_path=report_path,
            collection=collection,
            destination_root=destination,
            results=list(results),
            duration_seconds=round(time.perf_counter() - t0, 2),
        )
        self._log.info("Finished %s: %s", report_path, result.summary())
        return result

    # --- Internal ---

    def _resolve_source_root(self, source_root: Path | str | None) -> Path:
        root = source_root if source_root is not None else self._settings.source_root
        if root is None:
            raise ConfigurationError("no source root configured")
        root = Path(root).expanduser().resolve()
        if not root.is_dir():
            raise NotFoundError(root, "source directory")
        return root

    def _build_resolver(self, collection: Collection) -> RelationshipResolver | None:
        if self._resolver is not None:
            return self._resolver
        if self._resolver_factory is not None:
            return self._resolver_factory(collection)
        return None

    def _assemble_isolated(self, assembler: PackageAssembler, record: FileRecord) -> AssemblyResult:
        """Assemble one record, converting any exception into a failed result."""
        try:
            return assembler.assemble(record)
        except HypatiaError as exc:
            self._log.error("Failed to assemble %s: %s", record.unique_combo, exc)
            return AssemblyResult(identifier=record.unique_combo, state="failed", error=str(exc))
        except Exception as exc:
            self._log.exception("Failed to assemble %s", record.unique_combo)
            return AssemblyResult(identifier=record.unique_combo, state="failed", error=str(exc))


def process_report(
    report_path: Path | str,
    source_root: Path | str | None = None,
    settings: Settings | None = None,
    **kwargs: object,
) -> ProcessResult:
    """Synchronous convenience wrapper around ReportPipeline.process()."""
    pipeline = ReportPipeline(settings=settings, **kwargs)  # type: ignore[arg-type]
    return asyncio.run(pipeline.process(report_path, source_root))
