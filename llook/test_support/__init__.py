# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for tests that need a structural module without llvmlite.
"""

from llook.test_support.fake_model import (
	FakeBlock,
	FakeConstant,
	FakeFunction,
	FakeInstruction,
	FakeModule,
	FakeUse,
)

__all__ = ["FakeBlock", "FakeConstant", "FakeFunction", "FakeInstruction", "FakeModule", "FakeUse"]
