# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Structural model over `llvmlite.binding` modules.

llvmlite hands out a fresh `ValueRef` on every iteration and exposes no
use lists, so the adapter walks the module once: it wraps each function,
block and instruction exactly once (keyed by the underlying LLVM pointer,
which is what `ValueRef` equality and hashing compare) and derives every
value's use-chain from the operands of all instructions.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Sequence

from llook.value_id import ValueId, block_id, function_id, instruction_id, other_id


class LlvmUse:
	__slots__ = ("_consumer", "_next")

	def __init__(self, consumer: ValueId, next_use: Optional["LlvmUse"]) -> None:
		self._consumer = consumer
		self._next = next_use

	def consumer(self) -> ValueId:
		return self._consumer

	def next_use(self) -> Optional["LlvmUse"]:
		return self._next


class _Used:
	"""Shared use-chain storage; uses are pushed onto the head like LLVM does."""

	ref: Any
	_first_use: Optional[LlvmUse]

	def first_use(self) -> Optional[LlvmUse]:
		return self._first_use

	def _add_use(self, consumer: ValueId) -> None:
		self._first_use = LlvmUse(consumer, self._first_use)


class LlvmValue(_Used):
	"""Any value that is not a function, block or instruction (argument, global, constant)."""

	def __init__(self, ref: Any) -> None:
		self.ref = ref
		self._first_use = None

	def id(self) -> ValueId:
		return other_id(self)


class LlvmInstruction(_Used):
	def __init__(self, ref: Any, block: "LlvmBasicBlock") -> None:
		self.ref = ref
		self._block = block
		self._next: Optional[LlvmInstruction] = None
		self._operands: list[ValueId] = []
		self._incoming: list[ValueId] = []
		self._first_use = None

	def __repr__(self) -> str:
		return f"<LlvmInstruction {self.ref.opcode} {self.ref.name!r}>"

	def id(self) -> ValueId:
		return instruction_id(self)

	def next_instruction(self) -> Optional["LlvmInstruction"]:
		return self._next

	def display_name(self) -> str:
		return self.ref.name

	def operand_count(self) -> int:
		return len(self._operands)

	def operand(self, i: int) -> ValueId:
		return self._operands[i]

	def parent_block(self) -> "LlvmBasicBlock":
		return self._block

	def incoming_blocks(self) -> Sequence[ValueId]:
		return tuple(self._incoming)


class LlvmBasicBlock(_Used):
	def __init__(self, ref: Any) -> None:
		self.ref = ref
		self._name = ref.name
		self._instructions: list[LlvmInstruction] = []
		self._first_use = None

	def __repr__(self) -> str:
		return f"<LlvmBasicBlock {self._name!r}>"

	def id(self) -> ValueId:
		return block_id(self)

	def name(self) -> str:
		return self._name

	def first_instruction(self) -> Optional[LlvmInstruction]:
		return self._instructions[0] if self._instructions else None

	def instructions(self) -> Sequence[LlvmInstruction]:
		return tuple(self._instructions)


class LlvmFunction(_Used):
	def __init__(self, ref: Any) -> None:
		self.ref = ref
		self._name = ref.name
		self._blocks: list[LlvmBasicBlock] = []
		self._first_use = None

	def __repr__(self) -> str:
		return f"<LlvmFunction {self._name!r}>"

	def id(self) -> ValueId:
		return function_id(self)

	def name(self) -> str:
		return self._name

	def basic_blocks(self) -> Sequence[LlvmBasicBlock]:
		return tuple(self._blocks)

	def is_declaration(self) -> bool:
		return not self._blocks


class LlvmModule:
	"""Wraps a parsed `llvm.ModuleRef`; keep it alive as long as any handle is used."""

	def __init__(self, module: Any) -> None:
		self.module = module
		self._functions: dict[str, LlvmFunction] = {}
		self._ids: dict[Any, ValueId] = {}
		for fn_ref in module.functions:
			fn = LlvmFunction(fn_ref)
			self._functions[fn.name()] = fn
			self._ids[fn_ref] = function_id(fn)
			for block_ref in fn_ref.blocks:
				block = LlvmBasicBlock(block_ref)
				fn._blocks.append(block)
				self._ids[block_ref] = block_id(block)
				prev: Optional[LlvmInstruction] = None
				for inst_ref in block_ref.instructions:
					inst = LlvmInstruction(inst_ref, block)
					block._instructions.append(inst)
					self._ids[inst_ref] = instruction_id(inst)
					if prev is not None:
						prev._next = inst
					prev = inst
		self._link_operands()

	def _link_operands(self) -> None:
		for inst in self.instructions():
			inst_key = instruction_id(inst)
			for op_ref in inst.ref.operands:
				op = self._value_for(op_ref)
				inst._operands.append(op)
				op.handle._add_use(inst_key)
			if inst.ref.opcode == "phi":
				inst._incoming = [self._value_for(b) for b in inst.ref.incoming_blocks]

	def _value_for(self, ref: Any) -> ValueId:
		found = self._ids.get(ref)
		if found is not None:
			return found
		# Arguments, globals and constants are never visited by the block walk.
		vid = other_id(LlvmValue(ref))
		self._ids[ref] = vid
		return vid

	def functions(self) -> Sequence[LlvmFunction]:
		return tuple(self._functions.values())

	def get_function(self, name: str) -> Optional[LlvmFunction]:
		return self._functions.get(name)

	def instructions(self) -> Iterator[LlvmInstruction]:
		for fn in self._functions.values():
			for block in fn._blocks:
				yield from block._instructions


__all__ = ["LlvmUse", "LlvmValue", "LlvmInstruction", "LlvmBasicBlock", "LlvmFunction", "LlvmModule"]
