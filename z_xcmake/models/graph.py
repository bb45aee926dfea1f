"""Build graph data model consumed by the rule emitter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass
class BuildTarget:
    """One rule: output, prerequisites, recipe prefix and command."""

    output: str
    prerequisites: tuple[str, ...]
    directory: str
    command: str


@dataclass
class Comment:
    """A trace line carried into the rule file for traceability."""

    text: str


Entry = Union[BuildTarget, Comment]


@dataclass
class BuildGraph:
    """Targets keyed by output, in first-seen order.

    ``entries`` interleaves targets with passthrough comments in trace order;
    ``targets`` indexes the same BuildTarget objects by output.
    """

    entries: list[Entry] = field(default_factory=list)
    targets: dict[str, BuildTarget] = field(default_factory=dict)
    linked: list[str] = field(default_factory=list)
    signing: list[str] = field(default_factory=list)

    def __contains__(self, output: str) -> bool:
        return output in self.targets

    def __len__(self) -> int:
        return len(self.targets)
