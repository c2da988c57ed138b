# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import sys
import time

# progress is written to stderr, as the generated tables may be written to stdout
_quiet: bool = False

def SetQuiet(quiet: bool) -> None:
	global _quiet
	_quiet = quiet

def Info(msg: str) -> None:
	if not _quiet:
		print(msg, file=sys.stderr)

class Task:
	def __init__(self, name: str) -> None:
		self._name = name
		self._start = 0.0
	def __enter__(self) -> 'Task':
		self._start = time.time()
		Info(f'{self._name}...')
		return self
	def __exit__(self, excType, *args) -> bool:
		if excType is None:
			Info(f'{self._name} done in {time.time() - self._start:.3f}s')
		return False
