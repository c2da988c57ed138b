# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
from typing import Iterable

# ranges are lists of range-objects, which must be sorted and must not overlap/neighbor each other if same value
#	=> use Ranges.fromMap/Ranges.fromSet to compress arbitrary codepoint maps/sets into range lists
# ranges map the inclusive [first-last] to a single value (None for plain sets, int or str otherwise)
# invariant for ranges: (first >= 0) and (first <= last) and (last <= 0x10ffff)

class Range:
	RangeFirst: int = 0
	RangeLast: int = 0x10ffff

	def __init__(self, first: int, last: int, value: int|str|None = None) -> None:
		if first < Range.RangeFirst or last > Range.RangeLast or first > last:
			raise RuntimeError(f'Malformed range [{first:05x}-{last:05x}] encountered')
		if value is not None and type(value) not in (int, str):
			raise RuntimeError('Malformed value encountered')
		self.first = first
		self.last = last
		self.value = value
	def __str__(self) -> str:
		return f'[{self.first:05x}-{self.last:05x}/{self.span()}] -> {self.value!r}'
	def __repr__(self) -> str:
		return self.__str__()
	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Range):
			return NotImplemented
		return (self.first, self.last, self.value) == (other.first, other.last, other.value)
	def astuple(self) -> tuple:
		if self.value is None:
			return (self.first, self.last)
		return (self.first, self.last, self.value)
	def merge(self, other: 'Range') -> 'Range':
		if self.value != other.value:
			raise RuntimeError('Cannot merge ranges of different value')
		return Range(min(self.first, other.first), max(self.last, other.last), self.value)
	def span(self) -> int:
		return (self.last - self.first + 1)
	def neighbors(self, right: 'Range') -> bool:
		return (self.last + 1 == right.first)
	def overlap(self, other: 'Range') -> bool:
		return (self.last >= other.first and self.first <= other.last)
	def contains(self, cp: int) -> bool:
		return (self.first <= cp <= self.last)

class Ranges:
	@staticmethod
	def _appOrMerge(out: list[Range], other: Range) -> None:
		if len(out) > 0 and out[-1].neighbors(other) and out[-1].value == other.value:
			out[-1] = out[-1].merge(other)
		else:
			out.append(other)

	@staticmethod
	def _scan(items: Iterable[tuple[int, int|str|None]]) -> list[Range]:
		out: list[Range] = []
		first, last, value = None, None, None

		# single scan over the sorted codepoints, merging neighbors of equal value
		for cp, v in items:
			if first is not None and last + 1 == cp and value == v:
				last = cp
				continue
			if first is not None:
				out.append(Range(first, last, value))
			first, last, value = cp, cp, v
		if first is not None:
			out.append(Range(first, last, value))
		return out
	@staticmethod
	def fromMap(mapping: dict[int, int|str]) -> list[Range]:
		return Ranges._scan((cp, mapping[cp]) for cp in sorted(mapping))
	@staticmethod
	def fromSet(codepoints: Iterable[int]) -> list[Range]:
		return Ranges._scan((cp, None) for cp in sorted(set(codepoints)))
	@staticmethod
	def compress(ranges: list[Range]) -> list[Range]:
		Ranges.wellFormed(ranges)
		out: list[Range] = []
		for r in ranges:
			Ranges._appOrMerge(out, r)
		return out
	@staticmethod
	def wellFormed(ranges: list[Range]) -> None:
		for i in range(1, len(ranges)):
			if ranges[i - 1].first > ranges[i].first:
				raise RuntimeError('Order of ranges violation encountered')
			if ranges[i - 1].overlap(ranges[i]):
				raise RuntimeError('Overlapping ranges encountered')
	@staticmethod
	def minimal(ranges: list[Range]) -> bool:
		return all(not (ranges[i - 1].neighbors(ranges[i]) and ranges[i - 1].value == ranges[i].value) for i in range(1, len(ranges)))
	@staticmethod
	def lookup(ranges: list[Range], cp: int) -> Range|None:
		left, right = 0, len(ranges) - 1

		# binary search for the last range starting at or before the codepoint
		while left <= right:
			center = (left + right) // 2
			if ranges[center].first > cp:
				right = center - 1
			elif ranges[center].last < cp:
				left = center + 1
			else:
				return ranges[center]
		return None
	@staticmethod
	def complement(a: list[Range]) -> list[Range]:
		out: list[Range] = []
		lastEnd = Range.RangeFirst - 1

		# invert the range including between 0 and the range
		for r in a:
			if r.first > lastEnd + 1:
				out.append(Range(lastEnd + 1, r.first - 1))
			lastEnd = r.last

		# add the final inversion up to the last codepoint
		if lastEnd < Range.RangeLast:
			out.append(Range(lastEnd + 1, Range.RangeLast))
		return out
	@staticmethod
	def codepoints(ranges: list[Range]) -> Iterable[int]:
		for r in ranges:
			yield from range(r.first, r.last + 1)
