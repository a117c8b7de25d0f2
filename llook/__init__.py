# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
llook: map LLVM IR values to the text lines that define and use them.

Stages:
  indexer:  walk `.ll` lines and the parsed module together into an Index
  resolver: answer definitions/uses/predecessors queries against the Index
  query:    file loading plus per-line reports for the `llook` CLI
"""

from llook.errors import (
	LlookError,
	UnindexedConsumer,
	UnindexedOperand,
	UnresolvedBlockName,
	UnresolvedFunctionName,
	UnsupportedUseConsumer,
)
from llook.index import Index, TextData
from llook.indexer import build_index
from llook.resolver import definitions_of, predecessors_of, uses_of
from llook.value_id import ValueId, ValueKind

__all__ = [
	"LlookError",
	"UnindexedConsumer",
	"UnindexedOperand",
	"UnresolvedBlockName",
	"UnresolvedFunctionName",
	"UnsupportedUseConsumer",
	"Index",
	"TextData",
	"build_index",
	"definitions_of",
	"predecessors_of",
	"uses_of",
	"ValueId",
	"ValueKind",
]
