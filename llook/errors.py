# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class LlookError(Exception):
	"""
	A structured, serializable error for llook.

	`reason_code` is stable per class so callers and JSON consumers can match
	on it instead of on message text.
	"""

	reason_code: ClassVar[str] = "llook-error"

	message: str
	line_number: int | None = None
	name: str | None = None
	path: str | None = None

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"line_number": self.line_number,
			"name": self.name,
			"path": self.path,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.path:
			parts.append(f"path={self.path}")
		if self.line_number is not None:
			parts.append(f"line={self.line_number}")
		if self.name is not None:
			parts.append(f"name={self.name!r}")
		return " ".join(parts)


class IndexBuildError(LlookError):
	"""The textual and structural views diverged; indexing was aborted."""

	reason_code: ClassVar[str] = "index-build"


class UnresolvedFunctionName(IndexBuildError):
	reason_code: ClassVar[str] = "unresolved-function-name"


class UnresolvedBlockName(IndexBuildError):
	reason_code: ClassVar[str] = "unresolved-block-name"


class ResolveError(LlookError):
	"""A def/use query could not be answered from the index."""

	reason_code: ClassVar[str] = "resolve"


class UnindexedOperand(ResolveError):
	reason_code: ClassVar[str] = "unindexed-operand"


class UnindexedConsumer(ResolveError):
	reason_code: ClassVar[str] = "unindexed-consumer"


class UnsupportedUseConsumer(ResolveError):
	reason_code: ClassVar[str] = "unsupported-use-consumer"


class IRLoadError(LlookError):
	reason_code: ClassVar[str] = "ir-load"


class QueryError(LlookError):
	reason_code: ClassVar[str] = "query"


__all__ = [
	"LlookError",
	"IndexBuildError",
	"UnresolvedFunctionName",
	"UnresolvedBlockName",
	"ResolveError",
	"UnindexedOperand",
	"UnindexedConsumer",
	"UnsupportedUseConsumer",
	"IRLoadError",
	"QueryError",
]
