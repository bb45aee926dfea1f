"""Tests for RuleEmitter and header read-back."""

from __future__ import annotations

import io
from pathlib import Path

from z_xcmake.emitter import RuleEmitter, read_header
from z_xcmake.graph_builder import BuildGraphBuilder
from z_xcmake.models.records import Unrecognized

DIR = "\tcd /d && \\\n\ttime "


def _emit(builder: BuildGraphBuilder, fixed_time, invocation: str = "-scheme App") -> str:
    out = io.StringIO()
    RuleEmitter(out).emit(builder.graph, invocation, fixed_time)
    return out.getvalue()


class TestRuleEmitter:
    def test_full_layout(self, fixed_time):
        b = BuildGraphBuilder()
        b.define("a.o", ["a.c"], DIR, "clang -c a.c")
        b.add(Unrecognized("note"))
        b.define("app", ["a.o"], DIR, "ld -filelist f -o app")
        b.graph.linked.append("app")
        b.graph.signing.append("/usr/bin/codesign app")

        assert _emit(b, fixed_time) == (
            "# Generated by z-xcmake at 2026-10-17T09:30:00+00:00\n"
            "# ARGS: -scheme App\n"
            "\n"
            "default: main\n"
            "\n"
            "a.o: a.c\n"
            "\tcd /d && \\\n"
            "\ttime clang -c a.c\n"
            "\t@touch a.o\n"
            "# note\n"
            "\n"
            "app: a.o\n"
            "\tcd /d && \\\n"
            "\ttime ld -filelist f -o app\n"
            "\t@touch app\n"
            "\n"
            "main: app\n"
            "\t/usr/bin/codesign app\n"
        )

    def test_empty_graph(self, fixed_time):
        text = _emit(BuildGraphBuilder(), fixed_time, invocation="")
        assert text.endswith("default: main\n\nmain:\n")
        assert "# ARGS: \n" in text

    def test_target_tokens_shell_escaped(self, fixed_time):
        b = BuildGraphBuilder()
        b.define(r"/obj/lib(1)/a\$b.o", [r"/src/My\ App/a.c"], DIR, "cc")
        text = _emit(b, fixed_time)
        assert "\n/obj/lib\\(1\\)/a$$b.o: /src/My\\ App/a.c\n" in text
        assert "\t@touch /obj/lib\\(1\\)/a$$b.o\n" in text

    def test_rule_without_prerequisites(self, fixed_time):
        b = BuildGraphBuilder()
        b.define("app", [], DIR, "ld")
        assert "\napp:\n" in _emit(b, fixed_time)

    def test_comment_trailing_backslash(self, fixed_time):
        b = BuildGraphBuilder()
        b.add(Unrecognized("continued \\"))
        assert "# continued \\ \n" in _emit(b, fixed_time)

    def test_multiline_invocation_joined(self, fixed_time):
        text = _emit(BuildGraphBuilder(), fixed_time, invocation="-scheme App\r\n-quiet")
        assert "# ARGS: -scheme App  -quiet\n" in text

    def test_invocation_whitespace_preserved(self, fixed_time):
        invocation = '-scheme App OTHER_CFLAGS="-DA  -DB"'
        text = _emit(BuildGraphBuilder(), fixed_time, invocation=invocation)
        assert f"# ARGS: {invocation}\n" in text

    def test_escaped_parens_not_doubled(self, fixed_time):
        b = BuildGraphBuilder()
        b.define(r"/obj/lib(1)/a.o", [r"/src/lib\(1\)/a.c"], DIR, "cc")
        text = _emit(b, fixed_time)
        assert "\n/obj/lib\\(1\\)/a.o: /src/lib\\(1\\)/a.c\n" in text


class TestReadHeader:
    def test_round_trip(self, tmp_path: Path, fixed_time):
        path = tmp_path / "Makefile"
        path.write_text(_emit(BuildGraphBuilder(), fixed_time, invocation="-scheme App -quiet"))
        header = read_header(path)
        assert header is not None
        assert header.generated_at == fixed_time
        assert header.invocation == "-scheme App -quiet"

    def test_round_trip_keeps_exact_invocation(self, tmp_path: Path, fixed_time):
        invocation = '-scheme App  OTHER_CFLAGS="-DA  -DB" '
        path = tmp_path / "Makefile"
        path.write_text(_emit(BuildGraphBuilder(), fixed_time, invocation=invocation))
        header = read_header(path)
        assert header is not None
        assert header.invocation == invocation

    def test_foreign_makefile(self, tmp_path: Path):
        path = tmp_path / "Makefile"
        path.write_text("all:\n\tcc main.c\n")
        assert read_header(path) is None

    def test_missing_file(self, tmp_path: Path):
        assert read_header(tmp_path / "nope") is None
