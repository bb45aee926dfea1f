"""Extractor for batched Swift frontend steps.

One ``swift-frontend`` invocation compiles several ``-primary-file`` sources,
each paired positionally with an ``-o`` object. Whole-module builds carry no
``-primary-file`` and cannot be split into per-object rules.
"""

from __future__ import annotations

import logging
import re

from z_xcmake.escaping import dollar_escape, unescape
from z_xcmake.extractors.base import ExtractContext, register_extractor
from z_xcmake.models.records import SwiftBatchRecord
from z_xcmake.reader import extract_option

logger = logging.getLogger(__name__)

_NOOP_PREFIXES = ("builtin-swiftTaskExecution -- ",)
_NOOP_FLAGS_RE = re.compile(r" -frontend-parseable-output(?=\s|$)")


def strip_task_execution(invocation: str) -> str:
    """Remove build-service wrappers that make no sense outside the build tool."""
    for prefix in _NOOP_PREFIXES:
        if invocation.startswith(prefix):
            invocation = invocation[len(prefix) :]
    return _NOOP_FLAGS_RE.sub("", invocation)


class SwiftCompileExtractor:
    kind = "swift"
    # SwiftCompile normal arm64 ... / CompileSwift normal arm64 ... (older traces)
    header_re = re.compile(r"^(?:SwiftCompile|CompileSwift|CompileSwiftSources) \S+ \S+")

    def extract(
        self, match: re.Match[str], line: str, ctx: ExtractContext
    ) -> SwiftBatchRecord | None:
        header_line_no = ctx.reader.line_no
        ctx.reader.begin_record(line)
        directory = ctx.reader.next_directory_context()
        invocation = ctx.reader.next_invocation()
        if invocation is None:
            ctx.skip(self.kind, "no frontend invocation after directory line", header_line_no)
            return None

        invocation = strip_task_execution(invocation)
        sources = extract_option(invocation, "-primary-file")
        if not sources:
            ctx.skip(
                self.kind,
                "no -primary-file (whole-module optimization is not supported)",
                header_line_no,
            )
            return None
        objects = extract_option(invocation, "-o")
        if len(objects) != len(sources):
            logger.warning(
                "Line %d: %d -primary-file values but %d -o values, pairing the first %d",
                header_line_no,
                len(sources),
                len(objects),
                min(len(sources), len(objects)),
            )

        pairs = []
        for obj, source in zip(objects, sources):
            obj = unescape("{}()", obj)
            source = unescape("$'&{}*", source).replace("$", "$$")
            pairs.append((obj, source))
        return SwiftBatchRecord(
            command=dollar_escape(invocation), pairs=pairs, directory=directory
        )


register_extractor(SwiftCompileExtractor())
