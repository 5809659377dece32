# tests/unit/pipeline/test_unit_report_pipeline.py — v1
"""Tests for pipeline/report_pipeline.py — per-report orchestration."""

from __future__ import annotations

import tempfile

import pytest

from hypatia.config.settings import Settings
from hypatia.core.errors import (
    ConfigurationError,
    DuplicateIdentifierError,
    MalformedReportError,
    NotFoundError,
)
from hypatia.metadata.resolver import CollectionRelationshipResolver
from hypatia.packaging.bagit_writer import BagItWriter
from hypatia.pipeline.report_pipeline import ReportPipeline, process_report


class _ExplodingWriter(BagItWriter):
    """Raises an unexpected error for one package only."""

    def add_file(self, handle, name, content):
        if handle.path.name.startswith("2_"):
            raise RuntimeError("unexpected")
        super().add_file(handle, name, content)


@pytest.fixture
def three_files(make_entry, source_root):
    (source_root / "files" / "bar.txt").write_bytes(b"")
    return [
        make_entry(),
        make_entry(id="2", filename="bar.txt", export_path="files/bar.txt"),
        make_entry(id="3", filename="gone.txt", export_path="files/gone.txt"),
    ]


class TestProcess:
    @pytest.mark.asyncio
    async def test_one_package_per_record(self, settings, write_report, three_files,
                                          source_root, destination_root):
        report = write_report(three_files)
        result = await ReportPipeline(settings).process(report, source_root)

        assert [i for i, _ in result.outcomes] == ["1_foo.txt", "2_bar.txt", "3_gone.txt"]
        assert result.destination_root == destination_root.resolve()
        assert result.collection.call_number == "M1437"
        assert sorted(p.name for p in destination_root.iterdir()) == [
            "1_foo.txt", "2_bar.txt", "3_gone.txt",
        ]
        assert (result.clean, result.defective, result.failed) == (2, 1, 0)
        assert result.results[2].defect_codes == ["missing_payload"]

    @pytest.mark.asyncio
    async def test_source_root_from_settings(self, destination_root, write_report,
                                             make_entry, source_root):
        settings = Settings(_env_file=None, destination_root=destination_root,
                            source_root=source_root)
        result = await ReportPipeline(settings).process(write_report([make_entry()]))
        assert result.clean == 1

    @pytest.mark.asyncio
    async def test_failure_isolated(self, settings, write_report, make_entry, source_root):
        report = write_report([
            make_entry(),
            make_entry(id="2", filename="bar.txt", title=None),
            make_entry(id="3", filename="baz.txt"),
        ])
        result = await ReportPipeline(settings).process(report, source_root)
        states = [r.state for r in result.results]
        assert states == ["finalized", "failed", "finalized"]
        assert "title" in result.results[1].error
        assert result.results[1].package_path is None

    @pytest.mark.asyncio
    async def test_unexpected_error_isolated(self, settings, write_report, three_files,
                                             source_root):
        pipeline = ReportPipeline(settings, writer=_ExplodingWriter())
        result = await pipeline.process(write_report(three_files), source_root)
        assert [r.state for r in result.results] == ["finalized", "failed", "finalized"]
        assert result.results[1].error == "unexpected"

    @pytest.mark.asyncio
    async def test_single_worker(self, destination_root, write_report, three_files, source_root):
        settings = Settings(_env_file=None, destination_root=destination_root, max_workers=1)
        result = await ReportPipeline(settings).process(write_report(three_files), source_root)
        assert len(result.results) == 3
        assert result.failed == 0

    @pytest.mark.asyncio
    async def test_empty_report(self, settings, write_report, source_root, destination_root):
        result = await ReportPipeline(settings).process(write_report([]), source_root)
        assert result.results == []
        assert list(destination_root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_resolver_factory(self, settings, write_report, make_entry, source_root):
        pipeline = ReportPipeline(settings, resolver_factory=CollectionRelationshipResolver)
        result = await pipeline.process(write_report([make_entry()]), source_root)
        rels = (result.results[0].package_path / "data" / "RELS-EXT.xml").read_text()
        assert "info:fedora/hypatia:M1437" in rels
        assert "info:fedora/afmodel:FileAsset" in rels

    @pytest.mark.asyncio
    async def test_temp_destination_fallback(self, tmp_path, monkeypatch, write_report,
                                             make_entry, source_root):
        monkeypatch.setattr(tempfile, "tempdir", str(tmp_path / "tmp"))
        (tmp_path / "tmp").mkdir()
        result = await ReportPipeline(Settings(_env_file=None)).process(
            write_report([make_entry()]), source_root,
        )
        expected = (tmp_path / "tmp" / "hypatia_packages").resolve()
        assert result.destination_root == expected
        assert (expected / "1_foo.txt" / "bagit.txt").is_file()


class TestFatalErrors:
    @pytest.mark.asyncio
    async def test_missing_report(self, settings, source_root, tmp_path, destination_root):
        with pytest.raises(NotFoundError):
            await ReportPipeline(settings).process(tmp_path / "absent.xml", source_root)
        assert list(destination_root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_malformed_report(self, settings, source_root, tmp_path):
        report = tmp_path / "bad.xml"
        report.write_text("<ftkReport><collection>", encoding="utf-8")
        with pytest.raises(MalformedReportError):
            await ReportPipeline(settings).process(report, source_root)

    @pytest.mark.asyncio
    async def test_duplicate_writes_nothing(self, settings, write_report, make_entry,
                                            source_root, destination_root):
        report = write_report([make_entry(), make_entry()])
        with pytest.raises(DuplicateIdentifierError):
            await ReportPipeline(settings).process(report, source_root)
        assert list(destination_root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_no_source_root(self, settings, write_report, make_entry):
        with pytest.raises(ConfigurationError, match="no source root"):
            await ReportPipeline(settings).process(write_report([make_entry()]))

    @pytest.mark.asyncio
    async def test_missing_source_root(self, settings, write_report, make_entry, tmp_path):
        with pytest.raises(NotFoundError, match="source directory"):
            await ReportPipeline(settings).process(
                write_report([make_entry()]), tmp_path / "absent",
            )

    def test_bad_repository_config(self, destination_root, tmp_path):
        settings = Settings(_env_file=None, destination_root=destination_root,
                            repository_config=tmp_path / "absent.json")
        with pytest.raises(ConfigurationError, match="Repository config"):
            ReportPipeline(settings)


class TestProcessReport:
    def test_sync_wrapper(self, settings, write_report, make_entry, source_root):
        result = process_report(write_report([make_entry()]), source_root, settings=settings)
        assert result.clean == 1
        assert result.summary() == "1 records: 1 clean, 0 with defects, 0 failed"

    def test_repository_default(self, settings):
        assert ReportPipeline(settings).repository.source == "default"
