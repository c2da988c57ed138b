# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import re
from dataclasses import dataclass, field
from typing import Iterator

from .errors import ParseError
from . import log

MaxCodepoint: int = 0x10ffff

# fields of a single row of UnicodeData.txt in their fixed order (https://www.unicode.org/reports/tr44/#UnicodeData.txt)
FieldNames: list[str] = [
	'codepoint', 'name', 'general category', 'canonical combining class', 'bidi class', 'decomposition',
	'numeric type decimal', 'numeric type digit', 'numeric type numeric', 'bidi mirrored', 'unicode1 name',
	'iso comment', 'simple uppercase mapping', 'simple lowercase mapping', 'simple titlecase mapping'
]
FieldsMandatory: list[int] = [0, 2, 4, 9]

# formatting tags of decomposition mappings (https://www.unicode.org/reports/tr44/#Formatting_Tags_Table)
DecompositionTags: list[str] = [
	'font', 'noBreak', 'initial', 'medial', 'final', 'isolated', 'circle', 'super',
	'sub', 'vertical', 'wide', 'narrow', 'small', 'square', 'fraction', 'compat'
]
MaxDecompositionLength: int = 18

_hexPattern = re.compile('[0-9A-Fa-f]+')
_intPattern = re.compile('[+-]?[0-9]+')
_digitPattern = re.compile('[0-9]+')

def ParseCodepoint(text: str) -> int:
	if _hexPattern.fullmatch(text) is None:
		raise ParseError(f'Invalid hexadecimal codepoint [{text}] encountered', text)
	value = int(text, 16)
	if value > MaxCodepoint:
		raise ParseError(f'Codepoint [{text}] exceeds [{MaxCodepoint:X}]', text)
	return value

def FormatCodepoint(cp: int) -> str:
	return f'{cp:04X}'

def _ParseSigned(text: str, what: str) -> int:
	if _intPattern.fullmatch(text) is None:
		raise ParseError(f'Invalid integer {what} [{text}] encountered', text)
	value = int(text)
	if value < -2**63 or value > 2**63 - 1:
		raise ParseError(f'Integer {what} [{text}] does not fit into 64 bits', text)
	return value

@dataclass(frozen=True)
class NumericValue:
	numerator: int
	denominator: int|None = None

	def isRational(self) -> bool:
		return self.denominator is not None
	def __str__(self) -> str:
		if self.denominator is None:
			return str(self.numerator)
		return f'{self.numerator}/{self.denominator}'

def ParseNumeric(text: str) -> NumericValue|None:
	if len(text) == 0:
		return None
	if '/' not in text:
		return NumericValue(_ParseSigned(text, 'value'))
	numerator, denominator = text.split('/', 1)
	return NumericValue(_ParseSigned(numerator, 'numerator'), _ParseSigned(denominator, 'denominator'))

class Decomposition:
	def __init__(self, tag: str|None = None, mapping: list[int]|tuple[int, ...] = ()) -> None:
		if tag is not None and tag not in DecompositionTags:
			raise ParseError(f'Invalid decomposition formatting tag [{tag}] encountered', tag)
		self.tag = tag
		self._mapping: list[int] = []
		for cp in mapping:
			self.push(cp)
	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Decomposition):
			return NotImplemented
		return self.tag == other.tag and self._mapping == other._mapping
	def __repr__(self) -> str:
		return f'Decomposition({self.tag!r}, {[FormatCodepoint(cp) for cp in self._mapping]})'
	def __str__(self) -> str:
		mapping = ' '.join(FormatCodepoint(cp) for cp in self._mapping)
		if self.tag is None:
			return mapping
		return f'<{self.tag}> {mapping}'
	def push(self, cp: int) -> None:
		if len(self._mapping) >= MaxDecompositionLength:
			raise ParseError(f'Invalid decomposition mapping (more than {MaxDecompositionLength} codepoints)', FormatCodepoint(cp))
		self._mapping.append(cp)
	def mapping(self) -> tuple[int, ...]:
		return tuple(self._mapping)
	def isCanonical(self) -> bool:
		return self.tag is None

def ParseDecomposition(text: str, codepoint: int) -> Decomposition:
	# an empty mapping maps the codepoint canonically to itself
	if len(text) == 0:
		return Decomposition(None, [codepoint])

	# extract the optional formatting tag
	tag, chars = None, text
	if text.startswith('<'):
		end = text.find('>')
		if end < 0:
			raise ParseError(f'Unterminated decomposition formatting tag [{text}] encountered', text)
		tag, chars = text[1:end], text[end + 1:]
	out = Decomposition(tag)

	# push the codepoints in order (capacity is checked by the decomposition)
	values = chars.split()
	if len(values) == 0:
		raise ParseError(f'Decomposition mapping [{text}] does not contain any codepoints', text)
	for value in values:
		out.push(ParseCodepoint(value))
	return out

@dataclass
class UnicodeDataRecord:
	codepoint: int = 0
	name: str = ''
	generalCategory: str = ''
	combiningClass: int = 0
	bidiClass: str = ''
	decomposition: Decomposition = field(default_factory=Decomposition)
	numericDecimal: int|None = None
	numericDigit: int|None = None
	numericValue: NumericValue|None = None
	bidiMirrored: bool = False
	unicode1Name: str = ''
	isoComment: str = ''
	simpleUppercase: int|None = None
	simpleLowercase: int|None = None
	simpleTitlecase: int|None = None

	def isRangeStart(self) -> bool:
		return self.name.startswith('<') and self.name.endswith('>') and 'First' in self.name
	def isRangeEnd(self) -> bool:
		return self.name.startswith('<') and self.name.endswith('>') and 'Last' in self.name
	def __str__(self) -> str:
		return FormatRecord(self)

def _Optional(value, fmt) -> str:
	return '' if value is None else fmt(value)

def FormatRecord(record: UnicodeDataRecord) -> str:
	decomposition = record.decomposition
	if decomposition.isCanonical() and decomposition.mapping() == (record.codepoint,):
		decomposition = ''
	fields = [
		FormatCodepoint(record.codepoint), record.name, record.generalCategory, str(record.combiningClass),
		record.bidiClass, str(decomposition), _Optional(record.numericDecimal, str), _Optional(record.numericDigit, str),
		_Optional(record.numericValue, str), ('Y' if record.bidiMirrored else 'N'), record.unicode1Name,
		record.isoComment, _Optional(record.simpleUppercase, FormatCodepoint),
		_Optional(record.simpleLowercase, FormatCodepoint), _Optional(record.simpleTitlecase, FormatCodepoint)
	]
	return ';'.join(fields)

def _ParseByte(text: str, what: str) -> int:
	if _digitPattern.fullmatch(text) is None:
		raise ParseError(f'Invalid {what} [{text}] encountered', text)
	value = int(text)
	if value > 0xff:
		raise ParseError(f'{what.capitalize()} [{text}] exceeds [255]', text)
	return value

def ParseRecord(line: str) -> UnicodeDataRecord:
	line = line.strip()
	fields = line.split(';')
	if len(fields) != len(FieldNames):
		raise ParseError(f'Invalid field count [{len(fields)}] encountered (expected {len(FieldNames)})', line)
	for index in FieldsMandatory:
		if len(fields[index]) == 0:
			raise ParseError('Mandatory field is empty', line, index, FieldNames[index])

	# parse the fields in order and attach the field to any error raised by the sub-parsers
	out, index = UnicodeDataRecord(), 0
	try:
		out.codepoint = ParseCodepoint(fields[0])
		index = 1
		out.name = fields[1]
		index = 2
		out.generalCategory = fields[2]
		index = 3
		out.combiningClass = (0 if len(fields[3]) == 0 else _ParseByte(fields[3], 'canonical combining class'))
		index = 4
		out.bidiClass = fields[4]
		index = 5
		out.decomposition = ParseDecomposition(fields[5], out.codepoint)
		index = 6
		out.numericDecimal = (None if len(fields[6]) == 0 else _ParseByte(fields[6], 'decimal digit'))
		index = 7
		out.numericDigit = (None if len(fields[7]) == 0 else _ParseByte(fields[7], 'digit'))
		index = 8
		out.numericValue = ParseNumeric(fields[8])
		index = 9
		if fields[9] not in ['Y', 'N']:
			raise ParseError(f'Invalid mirrored flag [{fields[9]}] encountered (expected Y or N)', fields[9])
		out.bidiMirrored = (fields[9] == 'Y')
		index = 10
		out.unicode1Name = fields[10]
		index = 11
		out.isoComment = fields[11]
		index = 12
		out.simpleUppercase = (None if len(fields[12]) == 0 else ParseCodepoint(fields[12]))
		index = 13
		out.simpleLowercase = (None if len(fields[13]) == 0 else ParseCodepoint(fields[13]))
		index = 14
		out.simpleTitlecase = (None if len(fields[14]) == 0 else ParseCodepoint(fields[14]))
	except ParseError as e:
		raise ParseError(e.msg, line, index, FieldNames[index]) from e
	return out

# yields the data lines of a ucd file (comments and blank lines are skipped)
def ReadDataLines(path: str) -> Iterator[tuple[int, str]]:
	with open(path, 'r', encoding='utf-8') as file:
		for number, line in enumerate(file, start=1):
			data = line.split('#')[0].strip()
			if len(data) > 0:
				yield number, data

def ParseUnicodeData(path: str) -> list[UnicodeDataRecord]:
	log.Info(f'Parsing [{path}]...')
	records: list[UnicodeDataRecord] = []
	for number, line in ReadDataLines(path):
		try:
			records.append(ParseRecord(line))
		except ParseError as e:
			raise e.locate(path, number)
	return records

# parse the generic format of ucd files [cp(..cp);field;field...] into (first, last, fields)
def ParseFieldLine(line: str) -> tuple[int, int, list[str]]:
	fields = [s.strip() for s in line.split(';')]
	if len(fields) < 2:
		raise ParseError(f'Line with an invalid field count encountered [{fields[0]}]', line)
	cp, fields = fields[0], fields[1:]
	if '..' not in cp:
		return ParseCodepoint(cp), ParseCodepoint(cp), fields
	first, last = cp.split('..', 1)
	return ParseCodepoint(first), ParseCodepoint(last), fields

def _ParseFieldFile(path: str) -> Iterator[tuple[int, int, list[str]]]:
	log.Info(f'Parsing [{path}]...')
	for number, line in ReadDataLines(path):
		try:
			yield ParseFieldLine(line)
		except ParseError as e:
			raise e.locate(path, number)

# Jamo.txt (https://www.unicode.org/reports/tr44/#Jamo.txt)
def ParseJamo(path: str) -> dict[int, str]:
	out: dict[int, str] = {}
	for first, last, fields in _ParseFieldFile(path):
		for cp in range(first, last + 1):
			out[cp] = fields[0]
	return out

@dataclass(frozen=True)
class NameAlias:
	codepoint: int
	alias: str
	label: str

# NameAliases.txt (https://www.unicode.org/reports/tr44/#NameAliases.txt)
def ParseNameAliases(path: str) -> list[NameAlias]:
	out: list[NameAlias] = []
	for first, last, fields in _ParseFieldFile(path):
		if first != last or len(fields) != 2 or len(fields[0]) == 0:
			raise ParseError('Malformed name alias encountered', ';'.join([FormatCodepoint(first)] + fields))
		out.append(NameAlias(first, fields[0], fields[1]))
	return out
