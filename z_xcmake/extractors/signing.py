"""Extractor for post-link ``codesign`` and ``touch`` commands."""

from __future__ import annotations

import re

from z_xcmake.escaping import dollar_escape
from z_xcmake.extractors.base import ExtractContext, register_extractor
from z_xcmake.models.records import SigningRecord


class SigningExtractor:
    kind = "signing"
    header_re = re.compile(r"^\s+/usr/bin/(?:codesign|touch)\b")

    def extract(self, match: re.Match[str], line: str, ctx: ExtractContext) -> SigningRecord:
        return SigningRecord(command=dollar_escape(line.strip()))


register_extractor(SigningExtractor())
