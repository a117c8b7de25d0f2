# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Structural model consumed by the indexer and resolver.

The IR library owns the real graph. These protocols are the only surface the
core relies on; `llook.llvm_model` implements them over `llvmlite.binding`
and the tests implement them in memory.

Handles are compared by identity. A model must hand out the same handle
object for the same structural node every time (operands, use consumers and
block lists all included), otherwise index lookups miss.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from llook.value_id import ValueId


class Use(Protocol):
	def consumer(self) -> ValueId:
		...

	def next_use(self) -> Optional["Use"]:
		...


class Instruction(Protocol):
	def next_instruction(self) -> Optional["Instruction"]:
		...

	def display_name(self) -> str:
		"""IR-native name of the instruction; empty for unnamed values."""
		...

	def operand_count(self) -> int:
		...

	def operand(self, i: int) -> ValueId:
		...

	def first_use(self) -> Optional[Use]:
		...

	def parent_block(self) -> "BasicBlock":
		...

	def incoming_blocks(self) -> Sequence[ValueId]:
		"""Incoming blocks of a phi, in incoming order; empty for anything else."""
		...


class BasicBlock(Protocol):
	def name(self) -> str:
		...

	def first_instruction(self) -> Optional[Instruction]:
		...

	def first_use(self) -> Optional[Use]:
		...


class Function(Protocol):
	def name(self) -> str:
		...

	def basic_blocks(self) -> Sequence[BasicBlock]:
		...

	def first_use(self) -> Optional[Use]:
		...


class StructuralModule(Protocol):
	def functions(self) -> Iterable[Function]:
		...

	def get_function(self, name: str) -> Optional[Function]:
		...


def iter_uses(first: Optional[Use]) -> list[Use]:
	"""Materialize a use-chain, following `next_use` until it runs out."""
	uses: list[Use] = []
	cur = first
	while cur is not None:
		uses.append(cur)
		cur = cur.next_use()
	return uses


__all__ = ["Use", "Instruction", "BasicBlock", "Function", "StructuralModule", "iter_uses"]
