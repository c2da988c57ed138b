# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
from dataclasses import replace
from typing import Iterable, Iterator

from .parser import UnicodeDataRecord

# expands the legacy range-pairs of UnicodeData.txt, such as:
#	AC00;<Hangul Syllable, First>;Lo;0;L;;;;;N;;;;;
#	D7A3;<Hangul Syllable, Last>;Lo;0;L;;;;;N;;;;;
# into one record per codepoint, cloned from the first row with an empty name
class RangeExpander:
	def __init__(self, records: Iterable[UnicodeDataRecord]) -> None:
		self._source: Iterator[UnicodeDataRecord] = iter(records)

		# lookahead state: either holding exactly one record or empty
		self._holding = False
		self._lookahead: UnicodeDataRecord|None = None

		# active expansion: template record and the next/last codepoint to emit
		self._template: UnicodeDataRecord|None = None
		self._next = 0
		self._last = -1
	def __iter__(self) -> 'RangeExpander':
		return self
	def _pull(self) -> UnicodeDataRecord|None:
		if self._holding:
			self._holding = False
			out, self._lookahead = self._lookahead, None
			return out
		return next(self._source, None)
	def _peek(self) -> UnicodeDataRecord|None:
		if not self._holding:
			self._lookahead = next(self._source, None)
			self._holding = (self._lookahead is not None)
		return self._lookahead
	def __next__(self) -> UnicodeDataRecord:
		# emit the remaining records of an active range
		if self._template is not None:
			if self._next <= self._last:
				out = replace(self._template, codepoint=self._next, name='')
				self._next += 1
				return out
			self._template = None

		# fetch the next record and check if it starts a range (only if the end-marker directly follows)
		record = self._pull()
		if record is None:
			raise StopIteration
		if not record.isRangeStart():
			return record
		end = self._peek()
		if end is None or not end.isRangeEnd():
			return record

		# consume the end-marker and start the expansion
		self._pull()
		self._template, self._next, self._last = record, record.codepoint, end.codepoint
		return self.__next__()
