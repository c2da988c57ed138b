# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import os
import sys
from typing import Iterable, TextIO

from .automaton import AutomatonBuilder
from .encoding import CodepointKey, PackString, SmallestUnsignedType, StringKey
from .errors import EncodeError
from .ranges import Ranges
from .tables import CompiledTable
from . import log

class WriterConfig:
	def __init__(self, name: str, fstDir: str|None = None, charLiterals: bool = False, argv: list[str]|None = None) -> None:
		self.name = name
		self.fstDir = fstDir
		self.charLiterals = charLiterals
		if argv is None:
			argv = [os.path.basename(sys.argv[0])] + sys.argv[1:]
		self.argv = argv
	def automaton(self) -> bool:
		return self.fstDir is not None

class StrHelp:
	@staticmethod
	def constName(name: str) -> str:
		return name.upper()
	@staticmethod
	def fileName(name: str) -> str:
		return name.lower()
	@staticmethod
	def char(cp: int) -> str|None:
		# surrogates cannot be written as character literals
		if cp >= 0xd800 and cp <= 0xdfff:
			return None
		if cp == ord('\'') or cp == ord('\\'):
			return f'U\'\\{chr(cp)}\''
		if cp < 0x20 or cp == 0x7f:
			return f'U\'\\x{cp:02x}\''
		if cp < 0x80:
			return f'U\'{chr(cp)}\''
		if cp <= 0xffff:
			return f'U\'\\u{cp:04x}\''
		return f'U\'\\U{cp:08x}\''
	@staticmethod
	def string(s: str) -> str:
		out = '"'

		# escape everything but printable ascii as fixed-size octal-sequences of the utf-8 encoding
		for b in s.encode('utf-8'):
			if b == ord('"') or b == ord('\\'):
				out += f'\\{chr(b)}'
			elif b >= 0x20 and b < 0x7f:
				out += chr(b)
			else:
				out += f'\\{b:03o}'
		return out + '"'

# writes compiled tables as c++ source-code, either as literal arrays of ranges, or as automaton-blobs,
#	which are written to separate files in the fst-directory and embedded into the source-code
class TableWriter:
	Namespace: str = 'ucd::gen'
	EntriesPerLine: int = 4

	def __init__(self, stream: TextIO, config: WriterConfig) -> None:
		self._stream = stream
		self._config = config
		self._wroteHeader = False
		self._closed = False
	def __enter__(self) -> 'TableWriter':
		return self
	def __exit__(self, *args) -> bool:
		self.close()
		return False
	def close(self) -> None:
		if self._wroteHeader and not self._closed:
			self._stream.write('}\n')
			self._stream.flush()
		self._closed = True

	def _header(self) -> None:
		if self._wroteHeader:
			return
		if self._closed:
			raise RuntimeError('Table writer has already been closed')
		self._wroteHeader = True
		self._stream.write('#pragma once\n')
		self._stream.write('\n')
		for include in ['array', 'cinttypes', 'tuple', 'utility']:
			self._stream.write(f'#include <{include}>\n')
		self._stream.write('\n')
		self._stream.write('/*\n')
		self._stream.write('*\tDO NOT EDIT THIS FILE. IT WAS AUTOMATICALLY GENERATED BY:\n')
		self._stream.write('*\n')
		self._stream.write(f'*\t{" ".join(self._config.argv)}\n')
		self._stream.write('*\n')
		self._stream.write('*\tAll data are based on the information provided by the unicode character database.\n')
		self._stream.write('*/\n')
		self._stream.write(f'namespace {TableWriter.Namespace} {{\n')
	def _beginBlock(self, msg: str) -> None:
		self._header()
		self._stream.write(f'\n\t/* {msg} */\n')
	def _codepoint(self, cp: int) -> str|None:
		if self._config.charLiterals:
			return StrHelp.char(cp)
		return f'0x{cp:05x}'
	def _codepointType(self) -> str:
		return ('char32_t' if self._config.charLiterals else 'uint32_t')
	def _array(self, name: str, tp: str, entries: list[str]) -> None:
		if len(entries) == 0:
			self._stream.write(f'\tinline constexpr std::array<{tp}, 0> {name} = {{}};\n')
			return
		self._stream.write(f'\tinline constexpr std::array<{tp}, {len(entries)}> {name} = {{{{\n')
		for i in range(0, len(entries), TableWriter.EntriesPerLine):
			self._stream.write('\t\t' + ' '.join(f'{e},' for e in entries[i:i + TableWriter.EntriesPerLine]) + '\n')
		self._stream.write('\t}};\n')

	def _rangeEntries(self, table: CompiledTable) -> list[str]:
		entries: list[str] = []

		# ranges with non-scalar start or end are silently dropped when writing character literals
		for r in table.ranges:
			first, last = self._codepoint(r.first), self._codepoint(r.last)
			if first is None or last is None:
				continue
			if r.value is None:
				entries.append(f'{{ {first}, {last} }}')
			else:
				entries.append(f'{{ {first}, {last}, {r.value} }}')
		return entries
	def _literalRanges(self, table: CompiledTable) -> None:
		name, cpType = StrHelp.constName(table.name), self._codepointType()
		entries = self._rangeEntries(table)
		if table.kind == 'set':
			self._array(name, f'std::pair<{cpType}, {cpType}>', entries)
		else:
			valType = SmallestUnsignedType(r.value for r in table.ranges)
			self._array(name, f'std::tuple<{cpType}, {cpType}, {valType}>', entries)
	def _literalEnum(self, table: CompiledTable) -> None:
		self._array(f'{StrHelp.constName(table.name)}_ENUM', 'const char*', [StrHelp.string(v) for v in table.enumValues])
	def _literalStrings(self, table: CompiledTable) -> None:
		name, entries = StrHelp.constName(table.name), []

		# string tables never drop entries, surrogates are written as cast integers instead
		if table.kind == 'strings':
			for cp, value in table.entries:
				literal = self._codepoint(cp)
				if literal is None:
					literal = f'{self._codepointType()}(0x{cp:05x})'
				entries.append(f'{{ {literal}, {StrHelp.string(value)} }}')
			self._array(name, f'std::pair<{self._codepointType()}, const char*>', entries)
		elif table.kind == 'stringCodepoints':
			for key, cp in table.entries:
				literal = self._codepoint(cp)
				if literal is None:
					literal = f'{self._codepointType()}(0x{cp:05x})'
				entries.append(f'{{ {StrHelp.string(key)}, {literal} }}')
			self._array(name, f'std::pair<const char*, {self._codepointType()}>', entries)
		else:
			valType = SmallestUnsignedType(table.values())
			for key, value in table.entries:
				entries.append(f'{{ {StrHelp.string(key)}, {value} }}')
			self._array(name, f'std::pair<const char*, {valType}>', entries)

	def _buildAutomaton(self, table: CompiledTable) -> bytes:
		builder = AutomatonBuilder(table.kind != 'set')

		# feed the full uncompressed and ordered key-stream into the automaton
		try:
			if table.kind == 'set':
				for cp in Ranges.codepoints(table.ranges):
					builder.insert(CodepointKey(cp))
			elif table.kind == 'strings':
				for cp, value in table.entries:
					builder.insert(CodepointKey(cp), PackString(value))
			elif table.keyedByCodepoint():
				for cp, value in table.entries:
					builder.insert(CodepointKey(cp), value)
			else:
				for key, value in table.entries:
					builder.insert(StringKey(key), value)
		except EncodeError as e:
			raise e.forTable(table.name)
		return builder.finish()
	def _writeAutomaton(self, table: CompiledTable, blob: bytes) -> None:
		fileName = f'{StrHelp.fileName(table.name)}.fst'
		with open(os.path.join(self._config.fstDir, fileName), 'wb') as file:
			file.write(blob)
		self._stream.write(f'\tinline constexpr uint8_t {StrHelp.constName(table.name)}[] = {{\n')
		self._stream.write(f'#embed "{fileName}"\n')
		self._stream.write('\t};\n')

	def table(self, table: CompiledTable) -> None:
		kind = ('fst-set' if table.kind == 'set' else 'fst-map') if self._config.automaton() else 'literal'
		log.Info(f'Creating {table.kind}-table [{StrHelp.constName(table.name)}] as [{kind}]...')

		# build the automaton before anything is written, to prevent partially written tables
		blob = (self._buildAutomaton(table) if self._config.automaton() else None)

		# write the block and the table
		self._beginBlock(f'{table.kind}-table [{StrHelp.constName(table.name)}] ({kind})')
		if table.kind == 'enum':
			self._literalEnum(table)
		if blob is not None:
			self._writeAutomaton(table, blob)
		elif table.kind in ['set', 'ints', 'enum']:
			self._literalRanges(table)
		else:
			self._literalStrings(table)
		self._stream.flush()

	def ranges(self, name: str, codepoints: Iterable[int]) -> None:
		self.table(CompiledTable.rangeSet(name, codepoints))
	def rangesToEnum(self, name: str, enumMap: dict[str, Iterable[int]], order: list[str]|None = None) -> None:
		self.table(CompiledTable.enum(name, enumMap, order))
	def rangesToUnsignedInteger(self, name: str, mapping: dict[int, int]) -> None:
		self.table(CompiledTable.rangeInts(name, mapping))
	def codepointToString(self, name: str, mapping: dict[int, str]) -> None:
		self.table(CompiledTable.rangeStrings(name, mapping))
	def stringToCodepoint(self, name: str, mapping: dict[str, int]) -> None:
		self.table(CompiledTable.stringCodepoints(name, mapping))
	def stringToUnsignedInteger(self, name: str, mapping: dict[str, int]) -> None:
		self.table(CompiledTable.stringInts(name, mapping))
