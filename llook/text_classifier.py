# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Line classifier for textual LLVM IR.

Every line is looked at on its own: it either opens a function definition,
opens a basic block, or is a plain body line. The dual-walk indexer decides
what a plain line means from its own position in the structure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

# Bare identifiers in the textual grammar: [-a-zA-Z$._][-a-zA-Z$._0-9]*.
# Numbered labels are also legal block headers, hence the relaxed first char.
_IDENT = r'(?:"[^"]*"|[-A-Za-z$._0-9]+)'

_BLOCK_HEADER = re.compile(rf"^({_IDENT}):")
_FUNC_HEADER = re.compile(r"^define\s")
_FUNC_NAME = re.compile(rf"@({_IDENT})\(")


class LineKind(Enum):
	FUNCTION_HEADER = auto()
	BLOCK_HEADER = auto()
	BODY = auto()


@dataclass(frozen=True)
class LineClass:
	kind: LineKind
	name: str | None = None


BODY_LINE = LineClass(LineKind.BODY)


def strip_quotes(span: str) -> str:
	"""Drop the surrounding quotes of a quoted IR name; bare names pass through."""
	if '"' in span:
		return span[1:-1]
	return span


def classify_line(line: str) -> LineClass:
	"""
	Classify a single raw line of IR text.

	Leading whitespace is ignored. A block label must start the line, so a
	colon further along (inside a metadata string, for instance) cannot be
	mistaken for a label. A `define` line whose name cannot be read is still
	a function header, with `name` left as None.
	"""
	text = line.lstrip()
	m = _BLOCK_HEADER.match(text)
	if m is not None:
		return LineClass(LineKind.BLOCK_HEADER, strip_quotes(m.group(1)))
	if _FUNC_HEADER.match(text):
		name = _FUNC_NAME.search(text)
		if name is None:
			return LineClass(LineKind.FUNCTION_HEADER)
		return LineClass(LineKind.FUNCTION_HEADER, strip_quotes(name.group(1)))
	return BODY_LINE


__all__ = ["LineKind", "LineClass", "BODY_LINE", "strip_quotes", "classify_line"]
