"""Extractor for clang ``CompileC`` steps."""

from __future__ import annotations

import logging
import re

from z_xcmake.escaping import dollar_escape, escape, unescape
from z_xcmake.extractors.base import PATH_TOKEN, ExtractContext, register_extractor
from z_xcmake.models.records import CompileRecord

logger = logging.getLogger(__name__)


class CompileCExtractor:
    kind = "compile"
    # CompileC <object> <source> normal arm64 c com.apple.compilers... (in target ...)
    header_re = re.compile(rf"^CompileC {PATH_TOKEN} {PATH_TOKEN}")

    def extract(self, match: re.Match[str], line: str, ctx: ExtractContext) -> CompileRecord | None:
        header_line_no = ctx.reader.line_no
        ctx.reader.begin_record(line)
        directory = ctx.reader.next_directory_context()
        invocation = ctx.reader.next_invocation()
        if invocation is None:
            ctx.skip(self.kind, "no compiler invocation after directory line", header_line_no)
            return None

        obj = escape("$&", unescape("{}()", match.group(1)))
        source = unescape("'", dollar_escape(match.group(2)))
        logger.debug("Compile %s <- %s", obj, source)
        return CompileRecord(
            object_path=obj,
            source_path=source,
            command=dollar_escape(invocation),
            directory=directory,
        )


register_extractor(CompileCExtractor())
