# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import pytest

from ucdtables.errors import ParseError
from ucdtables.parser import (
	Decomposition, NumericValue, FormatRecord, ParseCodepoint, ParseDecomposition, ParseFieldLine,
	ParseJamo, ParseNameAliases, ParseNumeric, ParseRecord, ParseUnicodeData
)

def _line(**fields) -> str:
	values = ['0041', 'LATIN CAPITAL LETTER A', 'Lu', '0', 'L', '', '', '', '', 'N', '', '', '', '0061', '']
	for index, value in fields.items():
		values[int(index[1:])] = value
	return ';'.join(values)

@pytest.mark.parametrize('line', [
	'249D;PARENTHESIZED LATIN SMALL LETTER B;So;0;L;<compat> 0028 0062 0029;;;;N;;;;;',
	'000D;<control>;Cc;0;B;;;;;N;CARRIAGE RETURN (CR);;;;',
	'00BC;VULGAR FRACTION ONE QUARTER;No;0;ON;<fraction> 0031 2044 0034;;;1/4;N;FRACTION ONE QUARTER;;;;',
	'0041;LATIN CAPITAL LETTER A;Lu;0;L;;;;;N;;;;0061;',
	'0061;LATIN SMALL LETTER A;Ll;0;L;;;;;N;;;0041;;0041',
	'0F33;TIBETAN DIGIT HALF ZERO;No;0;L;;;;-1/2;N;;;;;',
	'0031;DIGIT ONE;Nd;0;EN;;1;1;1;N;;;;;',
	'0300;COMBINING GRAVE ACCENT;Mn;230;NSM;;;;;N;NON-SPACING GRAVE;;;;',
	'00C0;LATIN CAPITAL LETTER A WITH GRAVE;Lu;0;L;0041 0300;;;;N;LATIN CAPITAL LETTER A GRAVE;;;00E0;',
	'1F600;GRINNING FACE;So;0;ON;;;;;N;;;;;',
	'2045;LEFT SQUARE BRACKET WITH QUILL;Ps;0;ON;;;;;Y;;;;;',
])
def test_record_round_trip(line):
	assert FormatRecord(ParseRecord(line)) == line
	assert str(ParseRecord(line + '\n')) == line

def test_record_fields():
	record = ParseRecord('249D;PARENTHESIZED LATIN SMALL LETTER B;So;0;L;<compat> 0028 0062 0029;;;;N;;;;;')
	assert record.codepoint == 0x249d
	assert record.name == 'PARENTHESIZED LATIN SMALL LETTER B'
	assert record.generalCategory == 'So'
	assert record.decomposition.tag == 'compat'
	assert record.decomposition.mapping() == (0x28, 0x62, 0x29)
	assert record.numericValue is None
	assert not record.bidiMirrored

	record = ParseRecord('00BC;VULGAR FRACTION ONE QUARTER;No;0;ON;<fraction> 0031 2044 0034;;;1/4;N;FRACTION ONE QUARTER;;;;')
	assert record.numericValue == NumericValue(1, 4)
	assert record.numericValue.isRational()
	assert record.unicode1Name == 'FRACTION ONE QUARTER'

	record = ParseRecord('0F33;TIBETAN DIGIT HALF ZERO;No;0;L;;;;-1/2;N;;;;;')
	assert record.numericValue == NumericValue(-1, 2)

	record = ParseRecord('0031;DIGIT ONE;Nd;0;EN;;1;1;1;N;;;;;')
	assert (record.numericDecimal, record.numericDigit) == (1, 1)
	assert record.numericValue == NumericValue(1)
	assert not record.numericValue.isRational()

	record = ParseRecord('0061;LATIN SMALL LETTER A;Ll;0;L;;;;;N;;;0041;;0041')
	assert record.simpleUppercase == 0x41
	assert record.simpleLowercase is None
	assert record.simpleTitlecase == 0x41

def test_empty_decomposition_maps_to_itself():
	record = ParseRecord('0041;LATIN CAPITAL LETTER A;Lu;0;L;;;;;N;;;;0061;')
	assert record.decomposition.isCanonical()
	assert record.decomposition.mapping() == (0x41,)

def test_empty_combining_class_is_zero():
	assert ParseRecord(_line(f3='')).combiningClass == 0

def test_range_markers():
	first = ParseRecord('AC00;<Hangul Syllable, First>;Lo;0;L;;;;;N;;;;;')
	last = ParseRecord('D7A3;<Hangul Syllable, Last>;Lo;0;L;;;;;N;;;;;')
	assert first.isRangeStart() and not first.isRangeEnd()
	assert last.isRangeEnd() and not last.isRangeStart()
	assert not ParseRecord('0000;<control>;Cc;0;BN;;;;;N;NULL;;;;').isRangeStart()

def test_field_count():
	with pytest.raises(ParseError, match='field count'):
		ParseRecord('0041;LATIN CAPITAL LETTER A;Lu;0;L;;;;;N;;;;0061')
	with pytest.raises(ParseError, match='field count'):
		ParseRecord(_line() + ';')

def test_mandatory_fields():
	with pytest.raises(ParseError) as e:
		ParseRecord(_line(f2=''))
	assert e.value.fieldName == 'general category'

@pytest.mark.parametrize('fields, fieldName', [
	({ 'f0': '00G1' }, 'codepoint'),
	({ 'f0': '110000' }, 'codepoint'),
	({ 'f3': 'x' }, 'canonical combining class'),
	({ 'f3': '256' }, 'canonical combining class'),
	({ 'f5': '<foo> 0041' }, 'decomposition'),
	({ 'f5': '<compat>' }, 'decomposition'),
	({ 'f6': 'a' }, 'numeric type decimal'),
	({ 'f8': '1/2/3' }, 'numeric type numeric'),
	({ 'f9': 'X' }, 'bidi mirrored'),
	({ 'f13': 'zz' }, 'simple lowercase mapping'),
])
def test_invalid_fields(fields, fieldName):
	with pytest.raises(ParseError) as e:
		ParseRecord(_line(**fields))
	assert e.value.fieldName == fieldName
	assert fieldName in str(e.value)

def test_numeric_values():
	assert ParseNumeric('') is None
	assert ParseNumeric('12') == NumericValue(12)
	assert ParseNumeric('-12') == NumericValue(-12)
	assert str(ParseNumeric('1/4')) == '1/4'
	assert ParseNumeric('9223372036854775807') == NumericValue(2**63 - 1)
	with pytest.raises(ParseError, match='numerator'):
		ParseNumeric('a/2')
	with pytest.raises(ParseError, match='denominator'):
		ParseNumeric('1/x')
	with pytest.raises(ParseError, match='64 bits'):
		ParseNumeric('9223372036854775808')

def test_decomposition_capacity():
	mapping = ' '.join(['0041'] * 18)
	assert len(ParseDecomposition(mapping, 0x100).mapping()) == 18
	with pytest.raises(ParseError, match='more than 18'):
		ParseDecomposition(mapping + ' 0041', 0x100)

	decomposition = Decomposition('font')
	for _ in range(18):
		decomposition.push(0x41)
	with pytest.raises(ParseError):
		decomposition.push(0x41)

def test_decomposition_tags():
	assert ParseDecomposition('<noBreak> 0020', 0xa0) == Decomposition('noBreak', [0x20])
	assert str(ParseDecomposition('0041 0300', 0xc0)) == '0041 0300'
	with pytest.raises(ParseError, match='formatting tag'):
		ParseDecomposition('<nobreak> 0020', 0xa0)

def test_codepoints():
	assert ParseCodepoint('10FFFF') == 0x10ffff
	assert ParseCodepoint('0000') == 0
	with pytest.raises(ParseError):
		ParseCodepoint('')
	with pytest.raises(ParseError):
		ParseCodepoint('-41')

def test_field_line():
	assert ParseFieldLine('1100; G') == (0x1100, 0x1100, ['G'])
	assert ParseFieldLine('0041..005A; Lu') == (0x41, 0x5a, ['Lu'])
	with pytest.raises(ParseError):
		ParseFieldLine('0041')

def test_parse_file(tmp_path):
	path = tmp_path / 'UnicodeData.txt'
	path.write_text('# comment\n0041;LATIN CAPITAL LETTER A;Lu;0;L;;;;;N;;;;0061;\n\n0042;LATIN CAPITAL LETTER B;Lu;0;L;;;;;N;;;;0062;\n')
	records = ParseUnicodeData(str(path))
	assert [r.codepoint for r in records] == [0x41, 0x42]

def test_parse_file_error_location(tmp_path):
	path = tmp_path / 'UnicodeData.txt'
	path.write_text('0041;LATIN CAPITAL LETTER A;Lu;0;L;;;;;N;;;;0061;\n0042;LATIN CAPITAL LETTER B;Lu;0;L;;;;;Q;;;;0062;\n')
	with pytest.raises(ParseError) as e:
		ParseUnicodeData(str(path))
	assert e.value.lineNumber == 2
	assert f'{path}:2' in str(e.value)

def test_parse_jamo(tmp_path):
	path = tmp_path / 'Jamo.txt'
	path.write_text('# Jamo.txt\n1100; G     # HANGUL CHOSEONG KIYEOK\n1101; GG    # HANGUL CHOSEONG SSANGKIYEOK\n110B;       # HANGUL CHOSEONG IEUNG\n')
	assert ParseJamo(str(path)) == { 0x1100: 'G', 0x1101: 'GG', 0x110b: '' }

def test_parse_name_aliases(tmp_path):
	path = tmp_path / 'NameAliases.txt'
	path.write_text('0000;NULL;control\n0000;NUL;abbreviation\n')
	aliases = ParseNameAliases(str(path))
	assert [(a.codepoint, a.alias, a.label) for a in aliases] == [(0, 'NULL', 'control'), (0, 'NUL', 'abbreviation')]

	path.write_text('0000;NULL\n')
	with pytest.raises(ParseError):
		ParseNameAliases(str(path))
