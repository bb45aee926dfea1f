"""Extractor for ``Ld`` link steps."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from z_xcmake.escaping import dollar_escape, escape, unescape_all
from z_xcmake.extractors.base import PATH_TOKEN, ExtractContext, register_extractor
from z_xcmake.models.records import LinkRecord
from z_xcmake.reader import extract_option

logger = logging.getLogger(__name__)


def read_file_list(path: str) -> list[str]:
    """Read a linker ``-filelist`` artifact: one raw object path per line.

    An unreadable list yields no entries.
    """
    try:
        text = Path(path).read_text(errors="replace")
    except OSError as e:
        logger.warning("Cannot read link file list %s: %s", path, e)
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


class LinkExtractor:
    kind = "link"
    # Ld <executable> normal arm64 (in target ...)
    header_re = re.compile(rf"^Ld {PATH_TOKEN}")

    def extract(self, match: re.Match[str], line: str, ctx: ExtractContext) -> LinkRecord | None:
        header_line_no = ctx.reader.line_no
        ctx.reader.begin_record(line)
        directory = ctx.reader.next_directory_context()
        invocation = ctx.reader.next_invocation()
        if invocation is None:
            ctx.skip(self.kind, "no linker invocation after directory line", header_line_no)
            return None

        file_lists = extract_option(invocation, "-filelist")
        if not file_lists:
            ctx.skip(self.kind, "linker invocation has no -filelist", header_line_no)
            return None

        executable = escape("&$", match.group(1))
        objects: list[str] = []
        for entry in read_file_list(unescape_all(file_lists[0])):
            # File lists hold raw paths; targets are stored in header token form.
            token = escape(" $&", entry)
            if token == executable or not ctx.is_defined(token):
                logger.debug("Link %s: ignoring file list entry %s", executable, entry)
                continue
            if token not in objects:
                objects.append(token)

        return LinkRecord(
            executable=executable,
            command=dollar_escape(invocation),
            objects=objects,
            directory=directory,
        )


register_extractor(LinkExtractor())
