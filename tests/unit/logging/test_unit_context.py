# tests/unit/logging/test_unit_context.py — v1
"""Tests for logging/context.py — contextual logging variables."""

from __future__ import annotations

import contextvars

from hypatia.logging.context import (
    clear_context,
    get_context,
    set_record_context,
    set_report_context,
)


class TestLogContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_initial_state(self):
        ctx = get_context()
        assert ctx.report is None
        assert ctx.record is None

    def test_set_report_and_record(self):
        set_report_context("r.xml")
        set_record_context("1_foo.txt")
        ctx = get_context()
        assert ctx.report == "r.xml"
        assert ctx.record == "1_foo.txt"

    def test_record_reset(self):
        set_record_context("1_foo.txt")
        set_record_context(None)
        assert get_context().record is None

    def test_as_dict_filters_none(self):
        set_report_context("r.xml")
        assert get_context().as_dict() == {"report": "r.xml"}

    def test_clear(self):
        set_report_context("r.xml")
        set_record_context("1_foo.txt")
        clear_context()
        assert get_context().as_dict() == {}

    def test_isolated_per_context(self):
        set_report_context("outer.xml")

        def _inner():
            set_report_context("inner.xml")
            return get_context().report

        assert contextvars.copy_context().run(_inner) == "inner.xml"
        assert get_context().report == "outer.xml"
