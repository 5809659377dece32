"""Logging setup and contextual log records."""
