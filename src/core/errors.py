# src/core/errors.py — v1
"""Error and warning taxonomy.

Fatal errors abort a whole run: NotFoundError, MalformedReportError,
DuplicateIdentifierError, ConfigurationError. Per-record problems that
still yield a package are recorded as PackageWarning instances on the
assembly result instead of being raised.
"""

from __future__ import annotations


class HypatiaError(Exception):
    """Base class for all hypatia errors."""


class NotFoundError(HypatiaError):
    """A report file or source directory does not exist or is unreadable."""

    def __init__(self, path: object, what: str = "path") -> None:
        self.path = path
        self.what = what
        super().__init__(f"{what} not found: {path}")


class MalformedReportError(HypatiaError, ValueError):
    """The report does not match the expected schema."""


class DuplicateIdentifierError(MalformedReportError):
    """Two file nodes derive the same unique identifier."""

    def __init__(self, identifier: str, first: str, second: str) -> None:
        self.identifier = identifier
        self.first = first
        self.second = second
        super().__init__(
            f"Duplicate package identifier {identifier!r} "
            f"(file nodes {first} and {second})"
        )


class MissingFieldError(HypatiaError, ValueError):
    """A metadata builder needs a FileRecord attribute that is not set."""

    def __init__(self, field: str, identifier: str | None = None) -> None:
        self.field = field
        self.identifier = identifier
        where = f" on record {identifier!r}" if identifier else ""
        super().__init__(f"Required field {field!r} is missing{where}")


class ConfigurationError(HypatiaError):
    """Configuration is absent, inconsistent, or points at an unusable location."""


class PackageWriteError(HypatiaError):
    """The package-format backend could not create or seal a package."""


# --- Per-record warnings ---


class PackageWarning(UserWarning):
    """A defect recorded against a finalized package."""

    code = "package_defect"

    def __init__(self, identifier: str, message: str) -> None:
        self.identifier = identifier
        self.message = message
        super().__init__(f"{identifier}: {message}")


class MissingPayloadWarning(PackageWarning):
    """The payload file named by export_path was not found at copy time."""

    code = "missing_payload"


class ChecksumMismatchWarning(PackageWarning):
    """A manifest digest differs from the digest declared in the report."""

    code = "checksum_mismatch"
