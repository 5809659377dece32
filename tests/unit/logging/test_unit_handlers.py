# tests/unit/logging/test_unit_handlers.py — v1
"""Tests for logging/handlers.py — file rotation handler."""

from __future__ import annotations

import pytest

from hypatia.logging.handlers import create_rotating_handler, parse_size


class TestParseSize:
    def test_mb(self):
        assert parse_size("10MB") == 10 * 1024 * 1024

    def test_kb_with_space(self):
        assert parse_size("512 KB") == 512 * 1024

    def test_gb(self):
        assert parse_size("1GB") == 1024 * 1024 * 1024

    def test_bare_bytes(self):
        assert parse_size("2048") == 2048
        assert parse_size(4096) == 4096

    def test_case_insensitive(self):
        assert parse_size("10mb") == 10 * 1024 * 1024

    @pytest.mark.parametrize("value", ["10bytes", "MB", "0MB", "-5"])
    def test_invalid_format(self, value):
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size(value)

    def test_non_positive_int(self):
        with pytest.raises(ValueError, match="positive"):
            parse_size(0)


class TestCreateRotatingHandler:
    def test_creates_parent_dirs(self, tmp_path):
        log_file = tmp_path / "nested" / "run.log"
        handler = create_rotating_handler(log_file, rotation="1KB", retention=3)
        try:
            assert log_file.parent.is_dir()
            assert handler.maxBytes == 1024
            assert handler.backupCount == 3
        finally:
            handler.close()
