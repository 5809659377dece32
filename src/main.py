# src/main.py — v1
"""CLI entry point: process, inspect, verify commands.

Usage:
    hypatia process <report> [-s SOURCE] [-o DEST] [options]
    hypatia inspect <report>
    hypatia verify <package_dir> [<package_dir> ...]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from hypatia.version import __version__

if TYPE_CHECKING:
    from hypatia.config.settings import Settings

logger = logging.getLogger("hypatia.main")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = _load_settings(args)
        _setup_logging(settings, args.verbose)
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="hypatia",
        description=f"hypatia v{__version__}: forensic-export reports to BagIt packages",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- process ---
    p_process = subparsers.add_parser(
        "process", help="Build one package per file described in a report",
    )
    p_process.add_argument("report", type=Path, help="Path to the FTK export report")
    p_process.add_argument(
        "-s", "--source-root", type=Path, default=None,
        help="Directory the report's export paths are relative to (default: SOURCE_ROOT)",
    )
    p_process.add_argument(
        "-o", "--destination-root", type=Path, default=None,
        help="Directory receiving packages (default: DESTINATION_ROOT or a temp dir)",
    )
    p_process.add_argument(
        "--repository-config", type=Path, default=None,
        help="Repository configuration JSON (default: built-in defaults)",
    )
    p_process.add_argument(
        "--environment", default=None,
        help="Section of the repository configuration to use",
    )
    p_process.add_argument(
        "--workers", type=int, default=None,
        help="Maximum packages assembled concurrently",
    )
    p_process.add_argument(
        "--overwrite", action="store_true",
        help="Replace packages that already exist",
    )
    p_process.add_argument(
        "--member-of-collection", action="store_true",
        help="Derive isMemberOf from the report's call number instead of a placeholder",
    )
    p_process.set_defaults(func=_cmd_process)

    # --- inspect ---
    p_inspect = subparsers.add_parser(
        "inspect", help="Parse a report and list its file records",
    )
    p_inspect.add_argument("report", type=Path, help="Path to the FTK export report")
    p_inspect.set_defaults(func=_cmd_inspect)

    # --- verify ---
    p_verify = subparsers.add_parser(
        "verify", help="Validate finalized packages against their manifests",
    )
    p_verify.add_argument("packages", type=Path, nargs="+", help="Package directories")
    p_verify.set_defaults(func=_cmd_verify)

    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    from hypatia.config.settings import load_settings

    overrides: dict[str, object] = {}
    for option, field in (
        ("source_root", "source_root"),
        ("destination_root", "destination_root"),
        ("repository_config", "repository_config"),
        ("environment", "repository_environment"),
        ("workers", "max_workers"),
    ):
        value = getattr(args, option, None)
        if value is not None:
            overrides[field] = value
    if getattr(args, "overwrite", False):
        overrides["overwrite_existing"] = True
    return load_settings(**overrides)


def _cmd_process(args: argparse.Namespace, settings: Settings) -> int:
    """Run the full pipeline over one report."""
    from hypatia.metadata.resolver import CollectionRelationshipResolver
    from hypatia.pipeline.report_pipeline import ReportPipeline

    resolver_factory = CollectionRelationshipResolver if args.member_of_collection else None
    pipeline = ReportPipeline(settings=settings, resolver_factory=resolver_factory)
    result = asyncio.run(pipeline.process(args.report))

    print(f"\nProcessed {result.report_path}:")
    print(f"  Collection:    {result.collection.title} ({result.collection.call_number})")
    print(f"  Destination:   {result.destination_root}")
    print(f"  Records:       {len(result.results)}")
    print(f"  Clean:         {result.clean}")
    print(f"  With defects:  {result.defective}")
    print(f"  Failed:        {result.failed}")
    print(f"  Duration:      {result.duration_seconds:.1f}s")
    for identifier, outcome in result.outcomes:
        if outcome.state == "failed":
            print(f"  FAILED  {identifier}: {outcome.error}")
        elif outcome.warnings:
            print(f"  DEFECT  {identifier}: {', '.join(outcome.defect_codes)}")
    return 0


def _cmd_inspect(args: argparse.Namespace, settings: Settings) -> int:
    """Print the collection header and every parsed record."""
    from hypatia.report.parser import ReportParser

    collection, records = ReportParser().parse(args.report)
    print(f"\nCollection: {collection.title}")
    print(f"  Call number:  {collection.call_number}")
    print(f"  Series:       {collection.series or '-'}")
    print(f"  Declared:     {collection.file_count if collection.file_count is not None else '-'}")
    print(f"  Described:    {len(records)}")
    for identifier, record in records.items():
        print(f"  {identifier}  {record.export_path}  md5={record.md5}")
    return 0


def _cmd_verify(args: argparse.Namespace, settings: Settings) -> int:
    """Validate each package; non-zero exit if any is invalid."""
    from hypatia.packaging.writer_factory import create_package_writer

    writer = create_package_writer(settings)
    invalid = 0
    for package in args.packages:
        ok = writer.verify(package)
        print(f"  {'valid  ' if ok else 'INVALID'}  {package}")
        invalid += 0 if ok else 1
    return 1 if invalid else 0


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from hypatia.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    # Quiet the bagit library's per-file chatter
    logging.getLogger("bagit").setLevel(logging.DEBUG if verbose else logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
