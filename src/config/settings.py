# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for deployment-specific settings: where reports
and source files live, where packages go, BagIt checksum algorithms,
relationship defaults and logging.
"""

from __future__ import annotations

import hashlib
import os
import tempfile
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hypatia.core.errors import ConfigurationError

__all__ = ["ConfigurationError", "Settings", "load_settings", "resolve_destination_root"]

DEFAULT_DESTINATION_DIRNAME = "hypatia_packages"

# Algorithms the BagIt writer can put in manifest-<alg>.txt
SUPPORTED_CHECKSUMS = ("md5", "sha1", "sha256", "sha512")


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Locations ===
    source_root: Path | None = None
    destination_root: Path | None = None
    overwrite_existing: bool = False

    # === Repository configuration ===
    repository_config: Path | None = None
    repository_environment: str = "development"

    # === Packaging ===
    checksum_algorithms: str = "md5,sha1"
    verify_declared_checksums: bool = True
    source_organization: str = ""
    max_workers: int = 4

    # === Metadata ===
    rights_schema_version: str = "0.1"
    governing_policy: str = "hypatia:default_apo"
    parent_collection_placeholder: str = "hypatia:unresolved_collection"
    object_model_placeholder: str = "hypatia:unresolved_model"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_workers must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field rules; all violations are reported together."""
        errors: list[str] = []

        algorithms = self.checksum_algorithms_list
        if not algorithms:
            errors.append("CHECKSUM_ALGORITHMS must name at least one algorithm")
        unknown = [a for a in algorithms
                   if a not in SUPPORTED_CHECKSUMS or a not in hashlib.algorithms_available]
        if unknown:
            errors.append(
                f"CHECKSUM_ALGORITHMS has unsupported entries: {', '.join(unknown)}"
            )

        if self.verify_declared_checksums and not {"md5", "sha1"} & set(algorithms):
            errors.append(
                "VERIFY_DECLARED_CHECKSUMS requires md5 or sha1 in CHECKSUM_ALGORITHMS"
            )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def checksum_algorithms_list(self) -> list[str]:
        """Parse comma-separated checksum algorithms."""
        return [a.strip().lower() for a in self.checksum_algorithms.split(",") if a.strip()]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]


def resolve_destination_root(settings: Settings) -> Path:
    """Return a usable, absolute destination root, creating it if needed.

    Falls back to <platform temp dir>/hypatia_packages when unconfigured.

    Raises:
        ConfigurationError: If the location exists but is not a writable
            directory, or cannot be created.
    """
    root = settings.destination_root
    if root is None:
        root = Path(tempfile.gettempdir()) / DEFAULT_DESTINATION_DIRNAME
    root = root.expanduser().resolve()

    if root.exists() and not root.is_dir():
        raise ConfigurationError(f"Destination root is not a directory: {root}")
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigurationError(f"Cannot create destination root {root}: {exc}") from exc
    if not os.access(root, os.W_OK | os.X_OK):
        raise ConfigurationError(f"Destination root is not writable: {root}")
    return root
