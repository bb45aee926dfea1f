"""z-xcmake: translate xcodebuild traces into incremental Makefiles."""

__version__ = "0.1.0"

from z_xcmake.emitter import RuleEmitter, RuleFileHeader, read_header
from z_xcmake.exceptions import (
    DirectoryContextError,
    RuleFileError,
    TraceOpenError,
    XcmakeError,
)
from z_xcmake.graph_builder import BuildGraphBuilder
from z_xcmake.models.graph import BuildGraph, BuildTarget
from z_xcmake.reader import LogReader
from z_xcmake.report import TranslationReport
from z_xcmake.translator import TraceTranslator

__all__ = [
    "BuildGraph",
    "BuildGraphBuilder",
    "BuildTarget",
    "DirectoryContextError",
    "LogReader",
    "RuleEmitter",
    "RuleFileError",
    "RuleFileHeader",
    "TraceOpenError",
    "TraceTranslator",
    "TranslationReport",
    "XcmakeError",
    "read_header",
]
