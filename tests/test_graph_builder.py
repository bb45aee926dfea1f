"""Tests for BuildGraphBuilder — first definition wins."""

from __future__ import annotations

import pytest

from z_xcmake.graph_builder import BuildGraphBuilder
from z_xcmake.models.graph import BuildTarget, Comment
from z_xcmake.models.records import (
    CompileRecord,
    LinkRecord,
    SigningRecord,
    SwiftBatchRecord,
    Unrecognized,
)

DIR = "\tcd /d && \\\n\ttime "


class TestDefine:
    def test_inserts_in_order(self):
        b = BuildGraphBuilder()
        assert b.define("b.o", ["b.c"], DIR, "cc b.c")
        assert b.define("a.o", ["a.c"], DIR, "cc a.c")
        assert list(b.graph.targets) == ["b.o", "a.o"]
        assert b.graph.targets["a.o"] == BuildTarget("a.o", ("a.c",), DIR, "cc a.c")

    def test_first_definition_wins(self):
        b = BuildGraphBuilder()
        b.define("a.o", ["a.c"], DIR, "first")
        assert not b.define("a.o", ["other.c"], DIR, "second")
        assert len(b.graph) == 1
        assert b.graph.targets["a.o"].command == "first"
        assert b.graph.targets["a.o"].prerequisites == ("a.c",)

    def test_is_defined(self):
        b = BuildGraphBuilder()
        b.define("a.o", [], DIR, "cc")
        assert b.is_defined("a.o")
        assert not b.is_defined("b.o")
        assert "a.o" in b.graph


class TestAdd:
    def test_swift_batch_fans_out_with_shared_command(self):
        b = BuildGraphBuilder()
        b.add(
            SwiftBatchRecord(
                command="swift-frontend ...",
                pairs=[("a.o", "a.swift"), ("b.o", "b.swift"), ("c.o", "c.swift")],
                directory=DIR,
            )
        )
        assert len(b.graph) == 3
        for obj, src in [("a.o", "a.swift"), ("b.o", "b.swift"), ("c.o", "c.swift")]:
            assert b.graph.targets[obj].prerequisites == (src,)
            assert b.graph.targets[obj].command == "swift-frontend ..."

    def test_swift_batch_skips_already_defined_members(self):
        b = BuildGraphBuilder()
        b.add(CompileRecord("a.o", "a.c", "clang", DIR))
        b.add(SwiftBatchRecord("swift", [("a.o", "a.swift"), ("b.o", "b.swift")], DIR))
        assert b.graph.targets["a.o"].command == "clang"
        assert b.graph.targets["b.o"].command == "swift"

    def test_linked_excludes_object_relinks(self):
        b = BuildGraphBuilder()
        b.add(LinkRecord("merged.o", "ld -r", ["a.o"], DIR))
        b.add(LinkRecord("App", "ld", ["merged.o"], DIR))
        assert b.graph.linked == ["App"]
        assert "merged.o" in b.graph

    def test_relinking_same_executable_listed_once(self):
        b = BuildGraphBuilder()
        b.add(LinkRecord("App", "ld first", [], DIR))
        b.add(LinkRecord("App", "ld second", [], DIR))
        assert b.graph.linked == ["App"]
        assert b.graph.targets["App"].command == "ld first"

    def test_signing_appended_without_graph_effect(self):
        b = BuildGraphBuilder()
        b.add(SigningRecord("/usr/bin/codesign App"))
        b.add(SigningRecord("/usr/bin/touch -c App"))
        assert b.graph.signing == ["/usr/bin/codesign App", "/usr/bin/touch -c App"]
        assert len(b.graph) == 0

    def test_comments_interleaved_and_blank_lines_dropped(self):
        b = BuildGraphBuilder()
        b.add(Unrecognized("note one"))
        b.add(CompileRecord("a.o", "a.c", "clang", DIR))
        b.add(Unrecognized("   "))
        b.add(Unrecognized("note two"))
        entries = b.graph.entries
        assert entries[0] == Comment("note one")
        assert isinstance(entries[1], BuildTarget)
        assert entries[2] == Comment("note two")
        assert len(entries) == 3

    def test_unknown_record_type(self):
        with pytest.raises(TypeError):
            BuildGraphBuilder().add("not a record")
