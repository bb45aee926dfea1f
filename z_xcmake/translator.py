"""Trace-to-Makefile translation pass."""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

from z_xcmake.emitter import RuleEmitter
from z_xcmake.exceptions import RuleFileError, TraceOpenError
from z_xcmake.extractors import classify
from z_xcmake.extractors.base import ExtractContext
from z_xcmake.graph_builder import BuildGraphBuilder
from z_xcmake.models.graph import BuildGraph
from z_xcmake.reader import LogReader
from z_xcmake.report import TranslationReport

logger = logging.getLogger(__name__)


class TraceTranslator:
    """
    Translate a captured build trace into a Makefile.

    Phase 1: scan() reads the trace once and builds the BuildGraph.
    Phase 2: RuleEmitter writes the graph.

    A fatal error in phase 1 means nothing is written. translate_file()
    additionally writes through a temporary file so the destination is only
    replaced by a complete rule file.
    """

    def __init__(self, timing_wrapper: str = "time") -> None:
        self.timing_wrapper = timing_wrapper

    def scan(self, trace: TextIO) -> tuple[BuildGraph, TranslationReport]:
        reader = LogReader(trace, timing_wrapper=self.timing_wrapper)
        builder = BuildGraphBuilder()
        report = TranslationReport()
        ctx = ExtractContext(reader=reader, report=report, is_defined=builder.is_defined)

        while True:
            line = reader.next_line()
            if line is None:
                break
            kind, record = classify(line, ctx)
            if kind != "other" or line.strip():
                report.record(kind)
            if record is not None:
                builder.add(record)

        graph = builder.graph
        report.rules = len(graph)
        report.linked = list(graph.linked)
        report.signing_commands = len(graph.signing)
        logger.info(
            "Scanned %d lines: %d rules, %d linked, %d skipped",
            reader.line_no,
            report.rules,
            len(report.linked),
            len(report.skipped),
        )
        return graph, report

    def translate(
        self,
        trace: TextIO,
        out: TextIO,
        invocation: str = "",
        generated_at: datetime | None = None,
    ) -> TranslationReport:
        """Translate ``trace`` into ``out``. Fatal errors propagate before any write."""
        graph, report = self.scan(trace)
        if generated_at is None:
            generated_at = datetime.now(timezone.utc)
        RuleEmitter(out).emit(graph, invocation, generated_at)
        return report

    def translate_file(
        self,
        trace_path: str | Path,
        makefile_path: str | Path,
        invocation: str = "",
    ) -> TranslationReport:
        """Translate a trace file and atomically replace ``makefile_path``.

        The header timestamp is the trace's modification time, so translating
        an unchanged trace reproduces the same file.
        """
        trace_path = Path(trace_path)
        try:
            trace = open(trace_path, errors="replace")
        except OSError as e:
            raise TraceOpenError(str(trace_path), e.strerror or str(e)) from e
        with trace:
            generated_at = datetime.fromtimestamp(os.fstat(trace.fileno()).st_mtime, timezone.utc)
            graph, report = self.scan(trace)

        dest = Path(makefile_path)
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{dest.name}.", dir=str(dest.parent))
        except OSError as e:
            raise RuleFileError(str(dest), e.strerror or str(e)) from e

        try:
            with os.fdopen(fd, "w") as out:
                RuleEmitter(out).emit(graph, invocation, generated_at)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, dest)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise RuleFileError(str(dest), e.strerror or str(e)) from e
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info("Wrote %s (%d rules)", dest, report.rules)
        return report
