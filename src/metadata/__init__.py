"""Metadata document builders: descriptive, content, rights, relationships."""
