# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("llvmlite")

from llook.errors import IRLoadError, UnresolvedBlockName
from llook.index import TextData
from llook.indexer import build_index
from llook.loader import load_ir, parse_module, split_lines
from llook.resolver import definitions_of, predecessors_of, uses_of
from llook.value_id import ValueKind

SELECT_LL = """\
; ModuleID = 'select'
source_filename = "select.c"

define i32 @select(i32 %n) {
entry:
  %a = add i32 %n, 1
  %b = mul i32 %a, %a
  %c = icmp sgt i32 %b, 10
  br i1 %c, label %big, label %small

big:
  br label %done

small:
  br label %done

done:
  %r = phi i32 [ %a, %big ], [ %b, %small ]
  ret i32 %r
}

define i32 @caller() {
entry:
  %v = call i32 @select(i32 3)
  %0 = add i32 %v, 2
  ret i32 %0
}

declare void @ext()
"""


def _indexed():
	module = parse_module(SELECT_LL)
	lines = SELECT_LL.splitlines()
	return module, build_index(lines, module)


def _inst(module, fn: str, block: str, name: str):
	for b in module.get_function(fn).basic_blocks():
		if b.name() != block:
			continue
		for inst in b.instructions():
			if inst.display_name() == name:
				return inst
	raise KeyError(name)


def test_adapter_hands_out_stable_handles() -> None:
	module = parse_module(SELECT_LL)
	select = module.get_function("select")
	assert select is module.get_function("select")
	assert [b.name() for b in select.basic_blocks()] == ["entry", "big", "small", "done"]
	assert module.get_function("ext").is_declaration()
	assert module.get_function("nope") is None
	entry = select.basic_blocks()[0]
	first = entry.first_instruction()
	assert first is not None and first.display_name() == "a"
	assert first.parent_block() is entry


def test_index_lines_for_parsed_module() -> None:
	module, index = _indexed()
	select = module.get_function("select")
	blocks = {b.name(): b for b in select.basic_blocks()}

	assert index[select.id()] == TextData(4, "select")
	assert index[blocks["entry"].id()] == TextData(5, "entry")
	assert index[blocks["big"].id()] == TextData(11, "big")
	assert index[blocks["done"].id()] == TextData(17, "done")
	assert index[_inst(module, "select", "entry", "a").id()] == TextData(6, "a")
	assert index[_inst(module, "select", "done", "r").id()] == TextData(18, "r")

	caller = module.get_function("caller")
	caller_entry = caller.basic_blocks()[0]
	assert index[caller_entry.id()] == TextData(23, "entry")
	unnamed = caller_entry.instructions()[1]
	assert index[unnamed.id()] == TextData(25, "")
	assert str(index[unnamed.id()]) == "25, <nameless instruction>"


def test_defs_and_uses_for_parsed_module() -> None:
	module, index = _indexed()
	a = _inst(module, "select", "entry", "a")
	c = _inst(module, "select", "entry", "c")
	br = _inst(module, "select", "entry", "")
	call = _inst(module, "caller", "entry", "v")

	assert definitions_of(a, index) == []
	assert definitions_of(c, index) == [TextData(7, "b")]
	br_defs = definitions_of(br, index)
	assert br_defs[0] == TextData(8, "c")
	assert sorted(d.line_number for d in br_defs[1:]) == [11, 14]
	assert definitions_of(call, index) == []

	assert sorted(uses_of(a.id(), index)) == [7, 7, 18]
	assert uses_of(call.id(), index) == [25]
	assert uses_of(module.get_function("select").id(), index) == [24]


def test_predecessors_for_parsed_module() -> None:
	module, index = _indexed()
	r = _inst(module, "select", "done", "r")
	done = module.get_function("select").basic_blocks()[3]

	assert predecessors_of(r.id(), index) == [TextData(11, "big"), TextData(14, "small")]
	assert sorted(p.line_number for p in predecessors_of(done.id(), index)) == [11, 14]


def test_text_not_matching_module_fails() -> None:
	module = parse_module(SELECT_LL)
	lines = SELECT_LL.replace("\nsmall:", "\nelsewhere:").splitlines()
	with pytest.raises(UnresolvedBlockName) as exc:
		build_index(lines, module)
	assert exc.value.line_number == 14


def test_load_ir_from_text_and_bitcode(tmp_path: Path) -> None:
	ll = tmp_path / "select.ll"
	ll.write_text(SELECT_LL, encoding="utf-8")
	loaded = load_ir(ll)
	assert loaded.lines[3] == "define i32 @select(i32 %n) {"

	bc = tmp_path / "select.bc"
	bc.write_bytes(loaded.module.module.as_bitcode())
	from_bc = load_ir(ll, bc)
	index = build_index(from_bc.lines, from_bc.module)
	assert len([k for k in index if k.kind is ValueKind.FUNCTION]) == 2


def test_load_ir_errors(tmp_path: Path) -> None:
	with pytest.raises(IRLoadError):
		load_ir(tmp_path / "absent.ll")
	bad = tmp_path / "bad.ll"
	bad.write_text("define i32 @f( {\n", encoding="utf-8")
	with pytest.raises(IRLoadError) as exc:
		load_ir(bad)
	assert exc.value.path == str(bad)


def test_split_lines_breaks_on_newline_only() -> None:
	assert split_lines("a\x0cb\r\nc d\n") == ("a\x0cb", "c d")
	assert split_lines("x\n\n") == ("x", "")
	assert split_lines("") == ()


def test_form_feed_in_comment_keeps_line_numbers(tmp_path: Path) -> None:
	ll = tmp_path / "ff.ll"
	ll.write_text("; page one\x0c page two\ndefine i32 @f() {\nentry:\n  ret i32 0\n}\n", encoding="utf-8")
	loaded = load_ir(ll)
	index = build_index(loaded.lines, loaded.module)

	fn = loaded.module.get_function("f")
	assert index[fn.id()] == TextData(2, "f")
	assert index[fn.basic_blocks()[0].id()] == TextData(3, "entry")


def test_crlf_text_is_indexed(tmp_path: Path) -> None:
	ll = tmp_path / "crlf.ll"
	ll.write_bytes(b"define i32 @f() {\r\nentry:\r\n  ret i32 0\r\n}\r\n")
	loaded = load_ir(ll)
	assert loaded.lines[1] == "entry:"
	index = build_index(loaded.lines, loaded.module)
	assert index.at_line(2) == loaded.module.get_function("f").basic_blocks()[0].id()


def test_non_utf8_text_is_a_load_error(tmp_path: Path) -> None:
	ll = tmp_path / "latin1.ll"
	ll.write_bytes(b"; caf\xe9\ndefine i32 @f() {\nentry:\n  ret i32 0\n}\n")
	with pytest.raises(IRLoadError) as exc:
		load_ir(ll)
	assert exc.value.path == str(ll)
	assert "UTF-8" in exc.value.message
