"""hypatia: forensic-export reports to BagIt archival packages."""

from hypatia.version import __version__

__all__ = ["__version__"]
