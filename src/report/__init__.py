"""Forensic-export report parsing."""
