"""Accumulate extracted records into a BuildGraph."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from z_xcmake.models.graph import BuildGraph, BuildTarget, Comment
from z_xcmake.models.records import (
    CompileRecord,
    LinkRecord,
    Record,
    SigningRecord,
    SwiftBatchRecord,
    Unrecognized,
)

logger = logging.getLogger(__name__)


class BuildGraphBuilder:
    """
    Own the BuildGraph for one pass.

    The first record that defines an output wins; later definitions of the
    same output are dropped without comment.
    """

    def __init__(self) -> None:
        self.graph = BuildGraph()

    def is_defined(self, output: str) -> bool:
        return output in self.graph.targets

    def define(
        self,
        output: str,
        prerequisites: Iterable[str],
        directory: str,
        command: str,
    ) -> bool:
        """Insert a target unless ``output`` already has one. Returns True if inserted."""
        if output in self.graph.targets:
            logger.debug("Already defined, dropping: %s", output)
            return False
        target = BuildTarget(
            output=output,
            prerequisites=tuple(prerequisites),
            directory=directory,
            command=command,
        )
        self.graph.targets[output] = target
        self.graph.entries.append(target)
        return True

    def add(self, record: Record) -> None:
        if isinstance(record, CompileRecord):
            self.define(record.object_path, [record.source_path], record.directory, record.command)
        elif isinstance(record, SwiftBatchRecord):
            for obj, source in record.pairs:
                self.define(obj, [source], record.directory, record.command)
        elif isinstance(record, LinkRecord):
            inserted = self.define(
                record.executable, record.objects, record.directory, record.command
            )
            if inserted and not record.is_intermediate:
                self.graph.linked.append(record.executable)
        elif isinstance(record, SigningRecord):
            self.graph.signing.append(record.command)
        elif isinstance(record, Unrecognized):
            if record.line.strip():
                self.graph.entries.append(Comment(text=record.line))
        else:
            raise TypeError(f"Unknown record type: {type(record).__name__}")
