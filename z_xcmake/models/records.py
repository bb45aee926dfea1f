"""Record variants recognized in a build trace."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass
class CompileRecord:
    """One object file compiled from one source file."""

    object_path: str
    source_path: str
    command: str
    directory: str  # ready-to-embed recipe prefix, see LogReader.next_directory_context


@dataclass
class SwiftBatchRecord:
    """One compiler invocation producing several objects."""

    command: str
    pairs: list[tuple[str, str]]  # [(object_path, source_path), ...]
    directory: str


@dataclass
class LinkRecord:
    executable: str
    command: str
    objects: list[str] = field(default_factory=list)  # already filtered to defined outputs
    directory: str = ""

    @property
    def is_intermediate(self) -> bool:
        """Pseudo-link steps that only merge objects into another ``.o``."""
        return self.executable.endswith(".o")


@dataclass
class SigningRecord:
    command: str


@dataclass
class Unrecognized:
    line: str


Record = Union[CompileRecord, SwiftBatchRecord, LinkRecord, SigningRecord, Unrecognized]
