# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Def/use queries answered against a built Index.

Nothing here looks at the text again: operands and use-chains come from the
structural model, and the Index only turns structural ids into lines.
"""

from __future__ import annotations

import logging

from llook.errors import UnindexedConsumer, UnindexedOperand, UnsupportedUseConsumer
from llook.index import Index, TextData
from llook.model import Instruction, iter_uses
from llook.value_id import ValueId, ValueKind, block_id

logger = logging.getLogger(__name__)


def definitions_of(instruction: Instruction, index: Index) -> list[TextData]:
	"""
	TextData of every instruction or block operand of `instruction`, in operand order.

	Constants, globals, arguments and callees have no line of their own and
	are skipped.
	"""
	defs: list[TextData] = []
	for i in range(instruction.operand_count()):
		op = instruction.operand(i)
		if op.kind not in (ValueKind.INSTRUCTION, ValueKind.BASIC_BLOCK):
			continue
		data = index.get(op)
		if data is None:
			raise UnindexedOperand(f"operand {i} ({op.kind.name.lower()}) is not in the index")
		defs.append(data)
	return defs


def uses_of(value: ValueId, index: Index, *, skip_unsupported: bool = False) -> list[int]:
	"""
	Line numbers of the instructions consuming `value`, in use-chain order.

	Use-chain order comes from the IR library and is not sorted by line.
	A consumer that is not an instruction raises `UnsupportedUseConsumer`
	unless `skip_unsupported` is set, in which case the use is dropped.
	"""
	first_use = getattr(value.handle, "first_use", None)
	if first_use is None:
		raise UnsupportedUseConsumer(f"{value.kind.name.lower()} values have no use-chain")
	line_numbers: list[int] = []
	for use in iter_uses(first_use()):
		user = use.consumer()
		if not user.is_instruction:
			if skip_unsupported:
				logger.debug("skipping %s consumer of %s", user.kind.name.lower(), value.kind.name.lower())
				continue
			raise UnsupportedUseConsumer(f"use consumer is a {user.kind.name.lower()}, not an instruction")
		data = index.get(user)
		if data is None:
			raise UnindexedConsumer("consuming instruction is not in the index")
		line_numbers.append(data.line_number)
	return line_numbers


def predecessors_of(value: ValueId, index: Index) -> list[TextData]:
	"""
	Predecessor blocks of a phi (its incoming blocks) or of a basic block.

	For a block the predecessors are the parent blocks of the terminators
	found on its use-chain, each reported once.
	"""
	if value.kind is ValueKind.INSTRUCTION:
		incoming = list(value.handle.incoming_blocks())
	elif value.kind is ValueKind.BASIC_BLOCK:
		incoming = []
		for use in iter_uses(value.handle.first_use()):
			user = use.consumer()
			if not user.is_instruction:
				raise UnsupportedUseConsumer(f"block used by a {user.kind.name.lower()}, not a terminator")
			pred = block_id(user.handle.parent_block())
			if pred not in incoming:
				incoming.append(pred)
	else:
		raise UnsupportedUseConsumer(f"{value.kind.name.lower()} values have no predecessors")
	preds: list[TextData] = []
	for block in incoming:
		data = index.get(block)
		if data is None:
			raise UnindexedOperand("predecessor block is not in the index")
		preds.append(data)
	return preds


__all__ = ["definitions_of", "uses_of", "predecessors_of"]
