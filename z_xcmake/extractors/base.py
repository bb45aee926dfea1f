"""Extractor interface and registry.

Extractors are tried in registration order; the first whose header pattern
matches a line owns it and may consume the lines that belong to the record.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable

from z_xcmake.models.records import Record
from z_xcmake.reader import LogReader
from z_xcmake.report import TranslationReport

# A path token as written in step headers: spaces are backslash-escaped.
PATH_TOKEN = r"((?:\\.|[^\s\\])+)"


@dataclass
class ExtractContext:
    reader: LogReader
    report: TranslationReport
    is_defined: Callable[[str], bool]

    def skip(self, kind: str, reason: str, line_no: int | None = None) -> None:
        self.reader.abandon_record()
        self.report.skip(self.reader.line_no if line_no is None else line_no, kind, reason)


@runtime_checkable
class RecordExtractor(Protocol):
    """Interface that every record extractor must satisfy."""

    kind: str
    header_re: re.Pattern[str]

    def extract(self, match: re.Match[str], line: str, ctx: ExtractContext) -> Record | None: ...


EXTRACTOR_REGISTRY: list[RecordExtractor] = []


def register_extractor(extractor: RecordExtractor) -> None:
    """Register an extractor instance; a kind may only be registered once."""
    if any(e.kind == extractor.kind for e in EXTRACTOR_REGISTRY):
        raise ValueError(f"Extractor for {extractor.kind!r} already registered")
    EXTRACTOR_REGISTRY.append(extractor)
