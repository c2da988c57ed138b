# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
from typing import Iterable

from .ranges import Range, Ranges
from .encoding import StringKey

# compiled tables are created once from the accumulated facts and are never modified afterwards
#	set:              codepoint ranges without a value
#	ints:             codepoint ranges mapped to unsigned integers
#	strings:          codepoints mapped to strings
#	stringCodepoints: strings mapped to codepoints
#	stringInts:       strings mapped to unsigned integers
#	enum:             codepoint ranges mapped to the index of the enum-value (ints) and the list of enum-values
class CompiledTable:
	Kinds: list[str] = ['set', 'ints', 'strings', 'stringCodepoints', 'stringInts', 'enum']

	def __init__(self, kind: str, name: str) -> None:
		if kind not in CompiledTable.Kinds:
			raise RuntimeError(f'Unknown table kind [{kind}] encountered')
		self.kind = kind
		self.name = name
		self.ranges: list[Range] = []
		self.entries: list[tuple[int|str, int|str]] = []
		self.enumValues: list[str] = []
	def __repr__(self) -> str:
		return f'CompiledTable({self.kind}, {self.name}, {len(self.ranges)} ranges, {len(self.entries)} entries)'
	def keyedByCodepoint(self) -> bool:
		return self.kind in ['set', 'ints', 'strings', 'enum']
	def values(self) -> list[int|str]:
		return [v for _, v in self.entries]

	@staticmethod
	def rangeSet(name: str, codepoints: Iterable[int]) -> 'CompiledTable':
		out = CompiledTable('set', name)
		out.ranges = Ranges.fromSet(codepoints)
		return out
	@staticmethod
	def rangeInts(name: str, mapping: dict[int, int]) -> 'CompiledTable':
		if any(type(v) != int or v < 0 for v in mapping.values()):
			raise RuntimeError(f'Table [{name}] must map to unsigned integers')
		out = CompiledTable('ints', name)
		out.ranges = Ranges.fromMap(mapping)
		out.entries = [(cp, mapping[cp]) for cp in sorted(mapping)]
		return out
	@staticmethod
	def rangeStrings(name: str, mapping: dict[int, str]) -> 'CompiledTable':
		if any(type(v) != str for v in mapping.values()):
			raise RuntimeError(f'Table [{name}] must map to strings')
		out = CompiledTable('strings', name)
		out.ranges = Ranges.fromMap(mapping)
		out.entries = [(cp, mapping[cp]) for cp in sorted(mapping)]
		return out
	@staticmethod
	def stringCodepoints(name: str, mapping: dict[str, int]) -> 'CompiledTable':
		if any(type(v) != int or v < Range.RangeFirst or v > Range.RangeLast for v in mapping.values()):
			raise RuntimeError(f'Table [{name}] must map to codepoints')
		out = CompiledTable('stringCodepoints', name)
		out.entries = [(k, mapping[k]) for k in sorted(mapping, key=StringKey)]
		return out
	@staticmethod
	def stringInts(name: str, mapping: dict[str, int]) -> 'CompiledTable':
		if any(type(v) != int or v < 0 for v in mapping.values()):
			raise RuntimeError(f'Table [{name}] must map to unsigned integers')
		out = CompiledTable('stringInts', name)
		out.entries = [(k, mapping[k]) for k in sorted(mapping, key=StringKey)]
		return out
	@staticmethod
	def enum(name: str, enumMap: dict[str, Iterable[int]], order: list[str]|None = None) -> 'CompiledTable':
		# the enum-values are indexed by the given order or otherwise by first occurrence
		values = (list(enumMap.keys()) if order is None else list(order))
		if len(set(values)) != len(values):
			raise RuntimeError(f'Enum [{name}] contains duplicate values')
		for value in enumMap:
			if value not in values:
				raise RuntimeError(f'Enum [{name}] value [{value}] is missing from the order')

		# map all codepoints to the index of their value
		mapping: dict[int, int] = {}
		for value, codepoints in enumMap.items():
			index = values.index(value)
			for cp in codepoints:
				mapping[cp] = index
		out = CompiledTable.rangeInts(name, mapping)
		out.kind = 'enum'
		out.enumValues = values
		return out

# accumulates facts into tables keyed by their logical name
#	duplicate keys with different values: the last write wins, unless strict is set, in which case it fails
class TableCompiler:
	def __init__(self, strict: bool = False) -> None:
		self._strict = strict
		self._kinds: dict[str, str] = {}
		self._tables: dict[str, dict] = {}
	def _table(self, table: str, kind: str) -> dict:
		if table not in self._tables:
			self._kinds[table] = kind
			self._tables[table] = {}
		elif self._kinds[table] != kind:
			raise RuntimeError(f'Table [{table}] is a [{self._kinds[table]}] table and cannot accept [{kind}] facts')
		return self._tables[table]
	def _store(self, table: str, kind: str, key: int|str, value) -> None:
		entries = self._table(table, kind)
		if self._strict and key in entries and entries[key] != value:
			desc = (f'{key:04X}' if type(key) == int else repr(key))
			raise RuntimeError(f'Conflicting values [{entries[key]!r}, {value!r}] for key [{desc}] in table [{table}]')
		entries[key] = value
	def _codepoint(self, cp: int) -> int:
		if cp < Range.RangeFirst or cp > Range.RangeLast:
			raise RuntimeError(f'Invalid codepoint [{cp:x}] encountered')
		return cp

	def tableNames(self) -> list[str]:
		return list(self._tables.keys())
	def addCodepoint(self, table: str, cp: int) -> None:
		self._table(table, 'set')[self._codepoint(cp)] = None
	def addValue(self, table: str, cp: int, value: int|str) -> None:
		self._store(table, 'codepointValues', self._codepoint(cp), value)
	def addStringCodepoint(self, table: str, key: str, cp: int) -> None:
		self._store(table, 'stringCodepoints', key, self._codepoint(cp))
	def addStringValue(self, table: str, key: str, value: int) -> None:
		self._store(table, 'stringInts', key, value)

	def compile(self, table: str, name: str|None = None) -> CompiledTable:
		if table not in self._tables:
			raise RuntimeError(f'Unknown table [{table}]')
		kind, entries, name = self._kinds[table], self._tables[table], (table if name is None else name)
		if kind == 'set':
			return CompiledTable.rangeSet(name, entries.keys())
		if kind == 'stringCodepoints':
			return CompiledTable.stringCodepoints(name, entries)
		if kind == 'stringInts':
			return CompiledTable.stringInts(name, entries)

		# codepoint values must be either all integers or all strings
		if all(type(v) == int for v in entries.values()):
			return CompiledTable.rangeInts(name, entries)
		if all(type(v) == str for v in entries.values()):
			return CompiledTable.rangeStrings(name, entries)
		raise RuntimeError(f'Table [{table}] mixes integer and string values')
	def compileEnum(self, table: str, order: list[str]|None = None, name: str|None = None) -> CompiledTable:
		if table not in self._tables or self._kinds[table] != 'codepointValues':
			raise RuntimeError(f'Table [{table}] is not a codepoint value table')

		# invert the codepoint map into the enum map (in order of first occurrence of the values)
		enumMap: dict[str, list[int]] = {}
		for cp, value in self._tables[table].items():
			enumMap.setdefault(value, []).append(cp)
		return CompiledTable.enum((table if name is None else name), enumMap, order)
