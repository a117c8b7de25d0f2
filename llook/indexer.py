# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Dual-walk indexer: text lines and the structural module, in lock-step.

The textual renderer prints one line per instruction, in structural order,
between a block header and the next header. Inside a block the walk is
therefore positional: each line is the next instruction. Functions and
blocks are matched by name instead, and block names only against the blocks
of the function whose header was seen last.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Optional, Sequence

from llook.errors import UnresolvedBlockName, UnresolvedFunctionName
from llook.index import Index, TextData
from llook.model import BasicBlock, Instruction, StructuralModule
from llook.text_classifier import LineKind, classify_line
from llook.value_id import ValueId, block_id, function_id, instruction_id

logger = logging.getLogger(__name__)


class _DualWalk:
	def __init__(self, module: StructuralModule) -> None:
		self.module = module
		self.entries: dict[ValueId, TextData] = {}
		self.current_function_blocks: Sequence[BasicBlock] = ()
		self.awaiting_instruction = False
		self.pending_instruction: Optional[Instruction] = None

	def feed(self, line_number: int, line: str) -> None:
		if self.awaiting_instruction:
			self._take_instruction(line_number)
			return
		cls = classify_line(line)
		if cls.kind is LineKind.BLOCK_HEADER:
			self._enter_block(line_number, cls.name or "")
		elif cls.kind is LineKind.FUNCTION_HEADER:
			self._enter_function(line_number, cls.name)

	def _take_instruction(self, line_number: int) -> None:
		inst = self.pending_instruction
		assert inst is not None
		self.entries[instruction_id(inst)] = TextData(line_number, inst.display_name())
		self.pending_instruction = inst.next_instruction()
		self.awaiting_instruction = self.pending_instruction is not None

	def _enter_block(self, line_number: int, name: str) -> None:
		for block in self.current_function_blocks:
			if block.name() == name:
				break
		else:
			raise UnresolvedBlockName(
				"block label does not name a block of the current function",
				line_number=line_number,
				name=name,
			)
		self.entries[block_id(block)] = TextData(line_number, name)
		self.pending_instruction = block.first_instruction()
		self.awaiting_instruction = self.pending_instruction is not None

	def _enter_function(self, line_number: int, name: str | None) -> None:
		if name is None:
			raise UnresolvedFunctionName("function definition carries no recognizable name", line_number=line_number)
		fn = self.module.get_function(name)
		if fn is None:
			raise UnresolvedFunctionName(
				"function definition does not name a function of the module",
				line_number=line_number,
				name=name,
			)
		self.entries[function_id(fn)] = TextData(line_number, name)
		self.current_function_blocks = fn.basic_blocks()
		self.awaiting_instruction = False
		self.pending_instruction = None


def build_index(lines: Sequence[str], module: StructuralModule) -> Index:
	"""
	Walk `lines` and `module` together and return the resulting Index.

	Raises `UnresolvedFunctionName` / `UnresolvedBlockName` when a header in
	the text names nothing in the structure; no Index exists in that case.
	"""
	walk = _DualWalk(module)
	for line_number, line in enumerate(lines, start=1):
		walk.feed(line_number, line)
	if logger.isEnabledFor(logging.DEBUG):
		kinds = Counter(key.kind.name.lower() for key in walk.entries)
		logger.debug("indexed %d lines: %s", len(lines), dict(sorted(kinds.items())))
	return Index(walk.entries)


__all__ = ["build_index"]
