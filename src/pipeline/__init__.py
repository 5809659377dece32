"""Report-to-packages pipeline."""
