"""Test helpers for z_xcmake — build xcodebuild-shaped traces.

Usage::

    from z_xcmake.testing import TraceBuilder

    trace = (
        TraceBuilder()
        .compile_c("/obj/a.o", "/src/a.c")
        .link("/out/App", "/obj/App.LinkFileList")
        .codesign("/out/App")
        .text()
    )

Paths are written exactly as given, so callers pass them in trace form
(``My\\ App`` for a space).
"""

from __future__ import annotations

from pathlib import Path

_TOOLCHAIN = (
    "/Applications/Xcode.app/Contents/Developer/Toolchains/XcodeDefault.xctoolchain/usr/bin"
)
_TARGET = "(in target 'App' from project 'App')"


class TraceBuilder:
    """Fluent builder for synthetic build traces."""

    def __init__(self, directory: str = "/Users/dev/App") -> None:
        self.directory = directory
        self._lines: list[str] = []

    def line(self, text: str) -> TraceBuilder:
        self._lines.append(text)
        return self

    def _step(self, header: str, invocation: str | None, directory: str | None) -> TraceBuilder:
        self._lines.append(header)
        self._lines.append(f"    cd {directory or self.directory}")
        if invocation is not None:
            self._lines.append(f"    {invocation}")
        self._lines.append("")
        return self

    def compile_c(
        self,
        obj: str,
        source: str,
        directory: str | None = None,
        flags: str = "-x c -target arm64-apple-macos13.0",
    ) -> TraceBuilder:
        return self._step(
            f"CompileC {obj} {source} normal arm64 c "
            f"com.apple.compilers.llvm.clang.1_0.compiler {_TARGET}",
            f"{_TOOLCHAIN}/clang {flags} -c {source} -o {obj}",
            directory,
        )

    def swift(
        self,
        pairs: list[tuple[str, str]],
        directory: str | None = None,
    ) -> TraceBuilder:
        """One batched frontend job compiling ``pairs`` of (object, source)."""
        sources = " ".join(s for _, s in pairs)
        primaries = " ".join(f"-primary-file {s}" for _, s in pairs)
        outputs = " ".join(f"-o {o}" for o, _ in pairs)
        return self._step(
            f"SwiftCompile normal arm64 {sources} {_TARGET}",
            f"builtin-swiftTaskExecution -- {_TOOLCHAIN}/swift-frontend -frontend -c "
            f"{sources} {primaries} -frontend-parseable-output -module-name App {outputs}",
            directory,
        )

    def swift_whole_module(self, sources: list[str], directory: str | None = None) -> TraceBuilder:
        return self._step(
            f"CompileSwiftSources normal arm64 com.apple.xcode.tools.swift.compiler {_TARGET}",
            f"{_TOOLCHAIN}/swiftc -module-name App -wmo {' '.join(sources)}",
            directory,
        )

    def link(
        self,
        executable: str,
        file_list: str | None,
        directory: str | None = None,
    ) -> TraceBuilder:
        filelist = f" -filelist {file_list}" if file_list else ""
        return self._step(
            f"Ld {executable} normal {_TARGET}",
            f"{_TOOLCHAIN}/clang -Xlinker -reproducible -target arm64-apple-macos13.0"
            f"{filelist} -o {executable}",
            directory,
        )

    def header_only(self, header: str, directory: str | None = None) -> TraceBuilder:
        """A step header and directory line with no invocation."""
        return self._step(header, None, directory)

    def codesign(self, path: str) -> TraceBuilder:
        self._lines.append(f"    /usr/bin/codesign --force --sign - --timestamp\\=none {path}")
        return self

    def touch(self, path: str) -> TraceBuilder:
        self._lines.append(f"    /usr/bin/touch -c {path}")
        return self

    def text(self) -> str:
        return "\n".join(self._lines) + "\n"

    def write(self, path: str | Path) -> Path:
        path = Path(path)
        path.write_text(self.text())
        return path


def write_file_list(path: str | Path, objects: list[str]) -> Path:
    """Write a linker file list with one raw object path per line."""
    path = Path(path)
    path.write_text("".join(f"{o}\n" for o in objects))
    return path
