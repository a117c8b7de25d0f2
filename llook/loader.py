# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from llvmlite import binding as llvm  # type: ignore

from llook.errors import IRLoadError
from llook.llvm_model import LlvmModule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedIR:
	"""Text and structure of one IR module; the index is only valid alongside both."""

	path: Path
	lines: tuple[str, ...]
	module: LlvmModule


def split_lines(text: str) -> tuple[str, ...]:
	"""Split on newlines only, the way editors number lines; a trailing CR is dropped."""
	lines = text.split("\n")
	if lines and lines[-1] == "":
		lines.pop()
	return tuple(line[:-1] if line.endswith("\r") else line for line in lines)


def parse_module(text: str | None = None, *, bitcode: bytes | None = None, path: Path | None = None) -> LlvmModule:
	"""Parse textual IR (or bitcode when given) with llvmlite and wrap it."""
	try:
		if bitcode is not None:
			ref = llvm.parse_bitcode(bitcode)
		else:
			ref = llvm.parse_assembly(text or "")
	except RuntimeError as err:
		raise IRLoadError(f"llvm failed to parse module: {err}".strip(), path=str(path) if path else None) from err
	return LlvmModule(ref)


def load_ir(ll_path: Path, bc_path: Path | None = None) -> LoadedIR:
	"""
	Read `ll_path` as the textual form and build the structural form.

	With `bc_path`, the structure comes from that bitcode (e.g. produced by
	`llvm-as` from the same `.ll`); otherwise the text itself is parsed.
	"""
	try:
		text = ll_path.read_bytes().decode("utf-8")
	except OSError as err:
		raise IRLoadError(f"cannot read IR text: {err.strerror}", path=str(ll_path)) from err
	except UnicodeDecodeError as err:
		raise IRLoadError(f"IR text is not valid UTF-8 at byte {err.start}", path=str(ll_path)) from err
	bitcode: bytes | None = None
	if bc_path is not None:
		try:
			bitcode = bc_path.read_bytes()
		except OSError as err:
			raise IRLoadError(f"cannot read bitcode: {err.strerror}", path=str(bc_path)) from err
	module = parse_module(text, bitcode=bitcode, path=bc_path or ll_path)
	lines = split_lines(text)
	logger.debug("loaded %s: %d lines, %d functions", ll_path, len(lines), len(module.functions()))
	return LoadedIR(path=ll_path, lines=lines, module=module)


__all__ = ["LoadedIR", "split_lines", "parse_module", "load_ir"]
