# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator

from llook.value_id import ValueId

NAMELESS = "<nameless instruction>"


@dataclass(frozen=True)
class TextData:
	"""Where a structural value lives in the text: 1-based line plus its name."""

	line_number: int
	name: str = ""

	@property
	def is_nameless(self) -> bool:
		return not self.name

	def __str__(self) -> str:
		return f"{self.line_number}, {self.name or NAMELESS}"

	def to_dict(self) -> dict[str, object]:
		return {"line_number": self.line_number, "name": self.name}


class Index(Mapping[ValueId, TextData]):
	"""
	Read-only map from structural identity to its TextData.

	Instances are produced by `llook.indexer.build_index`; the entries handed
	in are copied behind a mapping proxy and never change afterwards.
	"""

	__slots__ = ("_entries", "_by_line")

	def __init__(self, entries: Mapping[ValueId, TextData]) -> None:
		self._entries = MappingProxyType(dict(entries))
		self._by_line = MappingProxyType({data.line_number: key for key, data in self._entries.items()})

	def __getitem__(self, key: ValueId) -> TextData:
		return self._entries[key]

	def __iter__(self) -> Iterator[ValueId]:
		return iter(self._entries)

	def __len__(self) -> int:
		return len(self._entries)

	def __repr__(self) -> str:
		return f"Index({len(self._entries)} entries)"

	def at_line(self, line_number: int) -> ValueId | None:
		"""Return the value recorded for `line_number`, if any."""
		return self._by_line.get(line_number)

	def lines(self) -> list[int]:
		return sorted(self._by_line)


__all__ = ["NAMELESS", "TextData", "Index"]
