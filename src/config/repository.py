# src/config/repository.py — v1
"""Repository connection configuration, initialized once at startup.

The packaging core never talks to the repository; it only needs this
step to succeed (or fail loudly) before a run begins. A configuration
file is a JSON object keyed by environment name:

    {"development": {"url": "http://127.0.0.1:8983/fedora",
                     "user": "fedoraAdmin", "password": "fedoraAdmin"},
     "production":  {...}}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

from hypatia.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class RepositoryConfig(BaseModel):
    """Connection details for the downstream repository."""

    model_config = {"frozen": True}

    url: str = "http://127.0.0.1:8983/fedora"
    user: str = "fedoraAdmin"
    password: str = "fedoraAdmin"
    environment: str = "development"
    source: str = "default"


def init_repository(
    config_path: Path | str | None = None,
    environment: str = "development",
) -> RepositoryConfig:
    """Load repository configuration, or the built-in default when no path.

    Args:
        config_path: JSON configuration file. None selects the default.
        environment: Section of the file to use.

    Returns:
        The resolved RepositoryConfig.

    Raises:
        ConfigurationError: If the file is missing, unparsable, lacks the
            environment, or has invalid values.
    """
    if config_path is None:
        logger.debug("No repository config given, using defaults")
        return RepositoryConfig(environment=environment)

    path = Path(config_path).expanduser()
    if not path.is_file():
        raise ConfigurationError(f"Repository config not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read repository config {path}: {exc}") from exc

    if not isinstance(data, dict) or environment not in data:
        raise ConfigurationError(
            f"Repository config {path} has no {environment!r} environment"
        )

    section = data[environment]
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"Repository config {path}: {environment!r} must be an object"
        )

    try:
        config = RepositoryConfig(**section, environment=environment, source=str(path))
    except (TypeError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid repository config {path}: {exc}") from exc

    logger.info("Repository config loaded from %s (%s): %s", path, environment, config.url)
    return config
