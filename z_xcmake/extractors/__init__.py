"""Record extractors — registered on import, tried in the order listed."""

from __future__ import annotations

from z_xcmake.extractors import (
    compile_c,  # noqa: F401
    link,  # noqa: F401
    signing,  # noqa: F401
    swift_compile,  # noqa: F401
)
from z_xcmake.extractors.base import EXTRACTOR_REGISTRY, ExtractContext
from z_xcmake.models.records import Record, Unrecognized


def classify(line: str, ctx: ExtractContext) -> tuple[str, Record | None]:
    """Classify one trace line and extract its record.

    Returns ``(kind, record)``; ``record`` is ``None`` when a recognized
    record had to be skipped. Unmatched lines come back as Unrecognized.
    """
    for extractor in EXTRACTOR_REGISTRY:
        m = extractor.header_re.match(line)
        if m:
            return extractor.kind, extractor.extract(m, line, ctx)
    return "other", Unrecognized(line=line)
