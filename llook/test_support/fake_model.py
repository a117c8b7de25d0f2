# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
In-memory structural model for tests.

Builders mirror the shape of a parsed module closely enough that the indexer
and resolver cannot tell the difference, without needing llvmlite:

	m = FakeModule()
	f = m.add_function("f")
	entry = f.add_block("entry")
	x = entry.add_instruction("x")
	entry.add_instruction("", operands=[x, FakeConstant()])
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from llook.value_id import ValueId, block_id, function_id, instruction_id, other_id


class FakeUse:
	def __init__(self, consumer: ValueId, next_use: Optional["FakeUse"]) -> None:
		self._consumer = consumer
		self._next = next_use

	def consumer(self) -> ValueId:
		return self._consumer

	def next_use(self) -> Optional["FakeUse"]:
		return self._next


class _Used:
	def __init__(self) -> None:
		self._first_use: Optional[FakeUse] = None

	def first_use(self) -> Optional[FakeUse]:
		return self._first_use

	def add_use(self, consumer: ValueId) -> None:
		self._first_use = FakeUse(consumer, self._first_use)


class FakeConstant(_Used):
	"""A value with no line of its own (literal, global, argument)."""

	def id(self) -> ValueId:
		return other_id(self)


class FakeInstruction(_Used):
	def __init__(self, name: str, block: "FakeBlock") -> None:
		super().__init__()
		self._name = name
		self._block = block
		self._next: Optional[FakeInstruction] = None
		self._operands: list[ValueId] = []
		self._incoming: list[ValueId] = []

	def __repr__(self) -> str:
		return f"<FakeInstruction {self._name!r}>"

	def id(self) -> ValueId:
		return instruction_id(self)

	def next_instruction(self) -> Optional["FakeInstruction"]:
		return self._next

	def display_name(self) -> str:
		return self._name

	def operand_count(self) -> int:
		return len(self._operands)

	def operand(self, i: int) -> ValueId:
		return self._operands[i]

	def parent_block(self) -> "FakeBlock":
		return self._block

	def incoming_blocks(self) -> Sequence[ValueId]:
		return tuple(self._incoming)


class FakeBlock(_Used):
	def __init__(self, name: str, function: "FakeFunction") -> None:
		super().__init__()
		self._name = name
		self.function = function
		self.instructions: list[FakeInstruction] = []

	def __repr__(self) -> str:
		return f"<FakeBlock {self._name!r}>"

	def id(self) -> ValueId:
		return block_id(self)

	def name(self) -> str:
		return self._name

	def first_instruction(self) -> Optional[FakeInstruction]:
		return self.instructions[0] if self.instructions else None

	def add_instruction(
		self,
		name: str = "",
		*,
		operands: Iterable[object] = (),
		incoming: Iterable["FakeBlock"] = (),
	) -> FakeInstruction:
		inst = FakeInstruction(name, self)
		if self.instructions:
			self.instructions[-1]._next = inst
		self.instructions.append(inst)
		for op in operands:
			vid = op.id()  # type: ignore[attr-defined]
			inst._operands.append(vid)
			op.add_use(inst.id())  # type: ignore[attr-defined]
		inst._incoming = [b.id() for b in incoming]
		return inst


class FakeFunction(_Used):
	def __init__(self, name: str) -> None:
		super().__init__()
		self._name = name
		self.blocks: list[FakeBlock] = []

	def __repr__(self) -> str:
		return f"<FakeFunction {self._name!r}>"

	def id(self) -> ValueId:
		return function_id(self)

	def name(self) -> str:
		return self._name

	def basic_blocks(self) -> Sequence[FakeBlock]:
		return tuple(self.blocks)

	def add_block(self, name: str) -> FakeBlock:
		block = FakeBlock(name, self)
		self.blocks.append(block)
		return block


class FakeModule:
	def __init__(self) -> None:
		self._functions: dict[str, FakeFunction] = {}

	def functions(self) -> Sequence[FakeFunction]:
		return tuple(self._functions.values())

	def get_function(self, name: str) -> Optional[FakeFunction]:
		return self._functions.get(name)

	def add_function(self, name: str) -> FakeFunction:
		fn = FakeFunction(name)
		self._functions[name] = fn
		return fn
