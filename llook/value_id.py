# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class ValueKind(Enum):
	INSTRUCTION = auto()
	BASIC_BLOCK = auto()
	FUNCTION = auto()
	OTHER = auto()


@dataclass(frozen=True)
class ValueId:
	"""
Identity of a structural IR value.

Equality and hashing follow the wrapped handle, never the value's name:
two blocks both called `entry` in different functions are different ids.
"""

	kind: ValueKind
	handle: Any

	@property
	def is_instruction(self) -> bool:
		return self.kind is ValueKind.INSTRUCTION

	@property
	def is_block(self) -> bool:
		return self.kind is ValueKind.BASIC_BLOCK

	@property
	def is_function(self) -> bool:
		return self.kind is ValueKind.FUNCTION


def instruction_id(handle: Any) -> ValueId:
	return ValueId(ValueKind.INSTRUCTION, handle)


def block_id(handle: Any) -> ValueId:
	return ValueId(ValueKind.BASIC_BLOCK, handle)


def function_id(handle: Any) -> ValueId:
	return ValueId(ValueKind.FUNCTION, handle)


def other_id(handle: Any) -> ValueId:
	return ValueId(ValueKind.OTHER, handle)


__all__ = ["ValueKind", "ValueId", "instruction_id", "block_id", "function_id", "other_id"]
