# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from llook.errors import QueryError
from llook.index import Index, TextData
from llook.indexer import build_index
from llook.loader import load_ir
from llook.resolver import definitions_of, predecessors_of, uses_of
from llook.value_id import ValueId, ValueKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryOptions:
	ll_path: Path
	bc_path: Path | None = None
	line: int | None = None  # None: report every indexed line
	sort_uses: bool = False
	skip_unsupported: bool = False


@dataclass(frozen=True)
class LineReport:
	kind: str  # "instruction" | "basic_block" | "function"
	text: TextData
	definitions: list[TextData]
	uses: list[int]
	predecessors: list[TextData]

	def to_dict(self) -> dict[str, Any]:
		return {
			"kind": self.kind,
			"line_number": self.text.line_number,
			"name": self.text.name,
			"definitions": [d.to_dict() for d in self.definitions],
			"uses": list(self.uses),
			"predecessors": [p.to_dict() for p in self.predecessors],
		}

	def format_human(self) -> str:
		out = [f"{self.kind.replace('_', ' ')}: {self.text}"]
		if self.definitions:
			out.append("  definitions:")
			out.extend(f"    {d}" for d in self.definitions)
		if self.predecessors:
			out.append("  predecessors:")
			out.extend(f"    {p}" for p in self.predecessors)
		if self.uses:
			out.append("  uses: " + ", ".join(str(n) for n in self.uses))
		return "\n".join(out)


@dataclass(frozen=True)
class QueryReport:
	path: str
	entries: list[LineReport]

	def to_dict(self) -> dict[str, Any]:
		return {"path": self.path, "entries": [e.to_dict() for e in self.entries]}

	def format_human(self) -> str:
		return "\n".join(e.format_human() for e in self.entries)


def describe(value: ValueId, index: Index, *, sort_uses: bool = False, skip_unsupported: bool = False) -> LineReport:
	"""Collect what the index knows about a single value."""
	text = index[value]
	defs: list[TextData] = []
	preds: list[TextData] = []
	if value.kind is ValueKind.INSTRUCTION:
		defs = definitions_of(value.handle, index)
	if value.kind in (ValueKind.INSTRUCTION, ValueKind.BASIC_BLOCK):
		preds = predecessors_of(value, index)
	uses = uses_of(value, index, skip_unsupported=skip_unsupported)
	if sort_uses:
		uses = sorted(uses)
	return LineReport(kind=value.kind.name.lower(), text=text, definitions=defs, uses=uses, predecessors=preds)


def run_query(opts: QueryOptions) -> QueryReport:
	loaded = load_ir(opts.ll_path, opts.bc_path)
	index = build_index(loaded.lines, loaded.module)
	if opts.line is not None:
		value = index.at_line(opts.line)
		if value is None:
			raise QueryError("no function, block or instruction on this line", line_number=opts.line, path=str(opts.ll_path))
		targets = [value]
	else:
		targets = [index.at_line(n) for n in index.lines()]
	logger.debug("describing %d values", len(targets))
	entries = [
		describe(v, index, sort_uses=opts.sort_uses, skip_unsupported=opts.skip_unsupported)
		for v in targets
		if v is not None
	]
	return QueryReport(path=str(opts.ll_path), entries=entries)


__all__ = ["QueryOptions", "LineReport", "QueryReport", "describe", "run_query"]
