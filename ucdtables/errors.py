# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen

class UcdError(RuntimeError):
	pass

class ParseError(UcdError):
	def __init__(self, msg: str, line: str, fieldIndex: int|None = None, fieldName: str|None = None) -> None:
		self.msg = msg
		self.line = line
		self.fieldIndex = fieldIndex
		self.fieldName = fieldName
		self.lineNumber: int|None = None
		self.path: str|None = None
		super().__init__(self._describe())
	def _describe(self) -> str:
		out = self.msg
		if self.fieldName is not None:
			out = f'{out} (field {self.fieldIndex + 1} [{self.fieldName}])'
		if self.path is not None:
			out = f'[{self.path}:{self.lineNumber}] {out}'
		elif self.lineNumber is not None:
			out = f'[line {self.lineNumber}] {out}'
		return f'{out} in line [{self.line}]'
	def locate(self, path: str|None, lineNumber: int) -> 'ParseError':
		self.path = path
		self.lineNumber = lineNumber
		self.args = (self._describe(),)
		return self

class EncodeError(UcdError):
	def __init__(self, msg: str, value: str, table: str|None = None) -> None:
		self.msg = msg
		self.value = value
		self.table = table
		super().__init__(self._describe())
	def _describe(self) -> str:
		if self.table is None:
			return f'Cannot encode string {self.value!r} ({self.msg})'
		return f'Cannot encode string {self.value!r} for table [{self.table}] ({self.msg})'
	def forTable(self, table: str) -> 'EncodeError':
		self.table = table
		self.args = (self._describe(),)
		return self
