"""Sequential line reader over a captured build trace.

A record header moves the reader from IDLE to AWAITING_DIRECTORY; the
``cd <path>`` line moves it to AWAITING_INVOCATION; the invocation line (or
giving up on it) returns it to IDLE.
"""

from __future__ import annotations

import enum
import logging
import re
from typing import TextIO

from z_xcmake.escaping import dollar_escape, escape, unescape
from z_xcmake.exceptions import DirectoryContextError

logger = logging.getLogger(__name__)

_CD_RE = re.compile(r"^\s*cd (.+?)\s*$")

# Lines allowed between a step's directory line and its invocation line.
_COMPANION_RE = re.compile(r"^\s*$|response file|^\s+export \w+=")

# A token may contain backslash-escaped characters, including whitespace.
_TOKEN = r"((?:\\.|[^\s\\])+)"


class ReaderState(enum.Enum):
    IDLE = "idle"
    AWAITING_DIRECTORY = "awaiting_directory"
    AWAITING_INVOCATION = "awaiting_invocation"


def extract_option(line: str, option: str) -> list[str]:
    """Return the value after every ``<option> <value>`` on ``line``.

    Escaped whitespace does not end a value, so ``-o a\\ b.o`` yields ``a\\ b.o``.
    """
    pattern = re.compile(rf"(?:^|\s){re.escape(option)}\s+{_TOKEN}")
    return pattern.findall(line)


class LogReader:
    """Single-pass reader with one line of lookahead."""

    def __init__(self, stream: TextIO, timing_wrapper: str = "time") -> None:
        self._stream = stream
        self._pending: str | None = None
        self._has_pending = False
        self.timing_wrapper = timing_wrapper
        self.line_no = 0
        self.state = ReaderState.IDLE
        self.header = ""

    def _read(self) -> str | None:
        raw = self._stream.readline()
        if not raw:
            return None
        return raw.rstrip("\r\n")

    def peek(self) -> str | None:
        """Return the next line without consuming it."""
        if not self._has_pending:
            self._pending = self._read()
            self._has_pending = True
        return self._pending

    def next_line(self) -> str | None:
        """Consume the next line; ``None`` at end of trace."""
        line = self.peek()
        self._has_pending = False
        self._pending = None
        if line is not None:
            self.line_no += 1
        return line

    def begin_record(self, header: str) -> None:
        self.state = ReaderState.AWAITING_DIRECTORY
        self.header = header

    def next_directory_context(self) -> str:
        """Consume the ``cd <path>`` line and return the recipe prefix for the step.

        The prefix ends with the timing wrapper, so the invocation text can be
        appended to it directly.
        """
        if self.state is not ReaderState.AWAITING_DIRECTORY:
            raise RuntimeError(f"directory context read in state {self.state.value}")
        line = self.next_line()
        m = _CD_RE.match(line) if line is not None else None
        if not m:
            raise DirectoryContextError(self.line_no, self.header, line)

        path = unescape("'^$()&", m.group(1))
        path = escape(" ", path)
        path = dollar_escape(path)
        self.state = ReaderState.AWAITING_INVOCATION

        prefix = f"\tcd {path} && \\\n\t"
        if self.timing_wrapper:
            prefix += f"{self.timing_wrapper} "
        return prefix

    def next_invocation(self) -> str | None:
        """Skip companion lines and consume the step's invocation line.

        Invocation lines are indented. If the next significant line is not,
        the invocation is missing: ``None`` is returned and that line stays
        unread so the caller classifies it as usual.
        """
        if self.state is not ReaderState.AWAITING_INVOCATION:
            raise RuntimeError(f"invocation read in state {self.state.value}")
        self.state = ReaderState.IDLE
        while True:
            line = self.peek()
            if line is None:
                return None
            if _COMPANION_RE.search(line):
                self.next_line()
                continue
            if not line[:1].isspace():
                logger.debug("Line %d: no invocation for %r", self.line_no + 1, self.header)
                return None
            self.next_line()
            return line.strip()

    def abandon_record(self) -> None:
        self.state = ReaderState.IDLE
