"""Per-pass diagnostics: record counts and recoverable skips."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass
class SkippedRecord:
    line_no: int
    kind: str
    reason: str


@dataclass
class TranslationReport:
    """Outcome of one translation pass."""

    counts: Counter = field(default_factory=Counter)  # {record kind: occurrences}
    skipped: list[SkippedRecord] = field(default_factory=list)
    rules: int = 0
    linked: list[str] = field(default_factory=list)
    signing_commands: int = 0
    callbacks: list[Callable[[SkippedRecord], None]] = field(default_factory=list, repr=False)

    def record(self, kind: str) -> None:
        self.counts[kind] += 1

    def skip(self, line_no: int, kind: str, reason: str) -> None:
        s = SkippedRecord(line_no=line_no, kind=kind, reason=reason)
        self.skipped.append(s)
        logger.warning("Line %d: skipping %s record: %s", line_no, kind, reason)
        for cb in self.callbacks:
            try:
                cb(s)
            except Exception:
                logger.debug("Skip callback error for line %d", line_no, exc_info=True)

    def get_summary(self) -> dict[str, Any]:
        return {
            "records": dict(sorted(self.counts.items())),
            "rules": self.rules,
            "linked": list(self.linked),
            "signing_commands": self.signing_commands,
            "skipped": [
                {"line": s.line_no, "kind": s.kind, "reason": s.reason} for s in self.skipped
            ],
        }
