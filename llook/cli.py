# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from llook.errors import LlookError
from llook.query import QueryOptions, run_query


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="llook", description="Map LLVM IR values to the lines that define and use them")
	p.add_argument("ll", type=Path, help="Path to the textual IR (.ll)")
	p.add_argument(
		"--bitcode",
		type=Path,
		default=None,
		help="Load the structure from this bitcode (.bc) instead of parsing the .ll text",
	)
	p.add_argument("--line", type=int, default=None, help="Only report the value on this 1-based line")
	p.add_argument("--sort-uses", action="store_true", help="Sort use lines instead of keeping use-chain order")
	p.add_argument(
		"--skip-unsupported",
		action="store_true",
		help="Drop uses whose consumer is not an instruction instead of failing",
	)
	p.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
	p.add_argument("-v", "--verbose", action="store_true", help="Log indexing progress to stderr")
	return p


def main(argv: list[str] | None = None) -> int:
	p = _build_parser()
	args = p.parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(name)s: %(levelname)s: %(message)s",
		stream=sys.stderr,
	)

	opts = QueryOptions(
		ll_path=args.ll,
		bc_path=args.bitcode,
		line=args.line,
		sort_uses=bool(args.sort_uses),
		skip_unsupported=bool(args.skip_unsupported),
	)
	try:
		report = run_query(opts)
	except LlookError as err:
		if args.json:
			print(json.dumps({"ok": False, "error": err.to_dict()}, sort_keys=True, separators=(",", ":")))
		else:
			print(err.format_human(), file=sys.stderr)
		return 2

	if args.json:
		print(json.dumps({"ok": True, **report.to_dict()}, sort_keys=True, separators=(",", ":")))
	else:
		print(report.format_human())
	return 0


__all__ = ["main"]
