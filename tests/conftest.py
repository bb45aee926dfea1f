"""Shared pytest fixtures for z-xcmake tests."""

from __future__ import annotations

import io
from datetime import datetime, timezone

import pytest

from z_xcmake.translator import TraceTranslator

FIXED_TIME = datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_time():
    return FIXED_TIME


@pytest.fixture
def translate_text():
    """Translate trace text in memory; returns (makefile_text, report)."""

    def _translate(text: str, invocation: str = "", **kwargs):
        out = io.StringIO()
        report = TraceTranslator(**kwargs).translate(
            io.StringIO(text), out, invocation=invocation, generated_at=FIXED_TIME
        )
        return out.getvalue(), report

    return _translate
