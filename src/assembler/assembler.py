# src/assembler/assembler.py — v1
"""Package assembler: one FileRecord in, one finalized BagIt package out.

Per record:
  1. Build the four metadata documents in memory (nothing on disk yet)
  2. Create {destination_root}/{unique_combo} and add the documents
  3. Copy source_root/export_path into the package as filename
  4. Finalize through the package writer, which writes the manifests
  5. Cross-check manifest digests against the digests the report declared

A missing payload is recorded as MissingPayloadWarning and the package
is still finalized. Any other failure raises; a package directory left
unfinalized by such a failure is removed.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from hypatia.assembler.models import AssemblyResult
from hypatia.config.settings import Settings
from hypatia.core.errors import (
    ChecksumMismatchWarning,
    ConfigurationError,
    MissingPayloadWarning,
    NotFoundError,
    PackageWriteError,
)
from hypatia.core.models import Collection, FileRecord
from hypatia.logging.context import set_record_context
from hypatia.metadata.content import build_content
from hypatia.metadata.descriptive import build_descriptive
from hypatia.metadata.relationships import build_relationships
from hypatia.metadata.resolver import RelationshipResolver, StaticRelationshipResolver
from hypatia.metadata.rights import build_rights
from hypatia.metadata.xml_utils import to_xml_bytes
from hypatia.packaging.base_package_writer import BasePackageWriter
from hypatia.packaging.layout import (
    CONTENT_FILE,
    DESCRIPTIVE_FILE,
    METADATA_FILES,
    RELATIONSHIP_FILE,
    RIGHTS_FILE,
    is_leaf_name,
    package_dir,
)
from hypatia.packaging.writer_factory import create_package_writer


class PackageAssembler:
    """Assemble BagIt packages from parsed file records.

    Args:
        destination_root: Existing directory that receives one
            sub-directory per package.
        settings: Metadata and packaging options. Loaded from .env if None.
        source_root: Default directory export paths are relative to.
        writer: Package-format backend. Built from settings if None.
        resolver: Supplies membership and model relations.
        collection: Parsed collection, copied into bag-info.txt.
        logger: Log sink. Defaults to this module's logger.
    """

    def __init__(
        self,
        destination_root: Path,
        settings: Settings | None = None,
        source_root: Path | None = None,
        writer: BasePackageWriter | None = None,
        resolver: RelationshipResolver | None = None,
        collection: Collection | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._destination_root = Path(destination_root).resolve()
        self._source_root = source_root
        self._writer = writer or create_package_writer(self._settings)
        self._resolver = resolver or StaticRelationshipResolver(
            parent=self._settings.parent_collection_placeholder,
            model=self._settings.object_model_placeholder,
        )
        self._collection = collection
        self._log = logger or logging.getLogger(__name__)

    @property
    def destination_root(self) -> Path:
        return self._destination_root

    def build_documents(self, record: FileRecord) -> dict[str, bytes]:
        """Serialize the four metadata documents for a record.

        Raises:
            MissingFieldError: If a builder lacks a required attribute.
        """
        return {
            DESCRIPTIVE_FILE: to_xml_bytes(build_descriptive(record)),
            CONTENT_FILE: to_xml_bytes(build_content(record)),
            RIGHTS_FILE: to_xml_bytes(
                build_rights(record, schema_version=self._settings.rights_schema_version)
            ),
            RELATIONSHIP_FILE: to_xml_bytes(
                build_relationships(
                    record,
                    resolver=self._resolver,
                    governing_policy=self._settings.governing_policy,
                )
            ),
        }

    def assemble(self, record: FileRecord, source_root: Path | None = None) -> AssemblyResult:
        """Build and finalize the package for one record.

        Args:
            record: Parsed file record.
            source_root: Overrides the assembler's default source root.

        Returns:
            AssemblyResult in state "finalized", possibly with warnings.

        Raises:
            ConfigurationError: If no source root is configured.
            NotFoundError: If the source root is not a directory.
            MissingFieldError: If a metadata document cannot be built.
            PackageWriteError: If the package cannot be laid out or sealed.
        """
        root = self._resolve_source_root(source_root)
        set_record_context(record.unique_combo)
        try:
            return self._assemble(record, root)
        finally:
            set_record_context(None)

    # --- Internal ---

    def _assemble(self, record: FileRecord, root: Path) -> AssemblyResult:
        result = AssemblyResult(identifier=record.unique_combo)

        documents = self.build_documents(record)
        result.state = "metadata_built"

        if not is_leaf_name(record.filename) or record.filename in METADATA_FILES:
            raise PackageWriteError(
                f"Payload name {record.filename!r} is not usable inside a package"
            )
        payload_source = (root / record.export_path.replace("\\", "/")).resolve()
        if not payload_source.is_relative_to(root):
            raise PackageWriteError(
                f"Export path {record.export_path!r} points outside {root}"
            )

        target = package_dir(self._destination_root, record.unique_combo)
        if target.exists():
            if not self._settings.overwrite_existing:
                raise PackageWriteError(f"Package already exists: {target}")
            self._log.info("Replacing existing package %s", target)
            shutil.rmtree(target)

        handle = self._writer.create(target)
        result.package_path = handle.path
        try:
            for name, content in documents.items():
                self._writer.add_file(handle, name, content)

            try:
                self._writer.add_file(handle, record.filename, payload_source)
            except FileNotFoundError:
                warning = MissingPayloadWarning(
                    record.unique_combo, f"payload not found at {payload_source}",
                )
                result.warnings.append(warning)
                result.state = "payload_missing"
                self._log.warning(
                    "Missing payload for %s: %s (package will lack its payload)",
                    record.unique_combo, payload_source,
                )
            else:
                result.payload_copied = True
                result.state = "payload_copied"

            result.manifest = self._writer.finalize(handle, info=self._bag_info(record))
        except Exception:
            if not handle.finalized:
                shutil.rmtree(handle.path, ignore_errors=True)
                result.package_path = None
            raise

        if result.payload_copied and self._settings.verify_declared_checksums:
            result.warnings.extend(self._check_declared_digests(record, result))

        result.state = "finalized"
        self._log.info(
            "Assembled %s -> %s%s",
            record.unique_combo, result.package_path,
            f" with defects: {', '.join(result.defect_codes)}" if result.warnings else "",
        )
        return result

    def _resolve_source_root(self, source_root: Path | None) -> Path:
        root = source_root if source_root is not None else self._source_root
        if root is None:
            raise ConfigurationError("no source root configured")
        root = Path(root).expanduser().resolve()
        if not root.is_dir():
            raise NotFoundError(root, "source directory")
        return root

    def _bag_info(self, record: FileRecord) -> dict[str, str]:
        info = {
            "External-Identifier": record.unique_combo,
            "External-Description": record.title or record.filename,
            "Internal-Sender-Identifier": record.export_path,
        }
        if self._collection is not None:
            info["Bag-Group-Identifier"] = self._collection.call_number
            info["Internal-Sender-Description"] = self._collection.title
        return info

    def _check_declared_digests(
        self, record: FileRecord, result: AssemblyResult,
    ) -> list[ChecksumMismatchWarning]:
        """Compare manifest digests of the payload with the report's."""
        warnings: list[ChecksumMismatchWarning] = []
        if result.manifest is None:
            return warnings
        for algorithm, declared in (("md5", record.md5), ("sha1", record.sha1)):
            computed = result.manifest.digest(record.filename, algorithm)
            if computed is None:
                continue
            if computed.lower() != declared.strip().lower():
                self._log.warning(
                    "%s mismatch for %s: declared %s, computed %s",
                    algorithm, record.unique_combo, declared, computed,
                )
                warnings.append(ChecksumMismatchWarning(
                    record.unique_combo,
                    f"{algorithm} declared {declared}, computed {computed}",
                ))
        return warnings
