r"""Serialize a BuildGraph as a Makefile.

Layout::

    # Generated by z-xcmake at 2026-10-17T09:30:00+00:00
    # ARGS: -scheme App -configuration Debug

    default: main

    <output>: <prerequisites>
    \tcd <dir> && \
    \ttime <command>
    \t@touch <output>
    ...

    main: <linked executables>
    \t<signing command>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

from z_xcmake.escaping import shell_escape
from z_xcmake.models.graph import BuildGraph, BuildTarget, Comment

logger = logging.getLogger(__name__)

HEADER_PREFIX = "# Generated by z-xcmake at "
ARGS_PREFIX = "# ARGS: "
AGGREGATE_TARGET = "main"


@dataclass
class RuleFileHeader:
    """Header recorded at the top of a generated rule file."""

    generated_at: datetime
    invocation: str


def format_timestamp(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat(timespec="seconds")


def read_header(path: str | Path) -> RuleFileHeader | None:
    """Read back the header of a rule file; None if absent or unparseable."""
    try:
        with open(path) as f:
            first = f.readline().rstrip("\r\n")
            second = f.readline().rstrip("\r\n")
    except OSError:
        return None
    if not first.startswith(HEADER_PREFIX) or not second.startswith(ARGS_PREFIX):
        return None
    try:
        generated_at = datetime.fromisoformat(first[len(HEADER_PREFIX) :])
    except ValueError:
        return None
    return RuleFileHeader(generated_at=generated_at, invocation=second[len(ARGS_PREFIX) :])


class RuleEmitter:
    """Write one rule file from a finished BuildGraph."""

    def __init__(self, out: TextIO) -> None:
        self.out = out

    def emit(self, graph: BuildGraph, invocation: str, generated_at: datetime) -> None:
        w = self.out.write
        # Only line breaks are replaced; the rest is compared verbatim on read-back.
        args = invocation.replace("\r", " ").replace("\n", " ")
        w(f"{HEADER_PREFIX}{format_timestamp(generated_at)}\n")
        w(f"{ARGS_PREFIX}{args}\n")
        w(f"\ndefault: {AGGREGATE_TARGET}\n")

        for entry in graph.entries:
            if isinstance(entry, BuildTarget):
                self._write_rule(entry)
            elif isinstance(entry, Comment):
                self._write_comment(entry.text)

        w(f"\n{self._rule_line(AGGREGATE_TARGET, graph.linked)}\n")
        for command in graph.signing:
            w(f"\t{command}\n")

        logger.debug(
            "Emitted %d rules, %d linked, %d signing commands",
            len(graph.targets),
            len(graph.linked),
            len(graph.signing),
        )

    @staticmethod
    def _rule_line(output: str, prerequisites: list[str] | tuple[str, ...]) -> str:
        line = f"{output}:"
        if prerequisites:
            line += " " + " ".join(shell_escape(p) for p in prerequisites)
        return line

    def _write_rule(self, target: BuildTarget) -> None:
        output = shell_escape(target.output)
        self.out.write(
            f"\n{self._rule_line(output, target.prerequisites)}\n"
            f"{target.directory}{target.command}\n"
            f"\t@touch {output}\n"
        )

    def _write_comment(self, text: str) -> None:
        # A trailing backslash would continue the comment onto the next line.
        if text.endswith("\\"):
            text += " "
        self.out.write(f"# {text}\n")
