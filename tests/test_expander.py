# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
from ucdtables.expander import RangeExpander
from ucdtables.parser import ParseRecord

def _records(*lines):
	return [ParseRecord(line) for line in lines]

def test_expand_range():
	records = _records(
		'0041;A;Lu;0;L;;;;;N;;;;;',
		'0041;<X, First>;Lo;0;L;;;;;N;;;;;',
		'0043;<X, Last>;Lo;0;L;;;;;N;;;;;',
		'0044;B;Lu;0;L;;;;;N;;;;;',
	)
	out = [(r.codepoint, r.name, r.generalCategory) for r in RangeExpander(records)]
	assert out == [(0x41, 'A', 'Lu'), (0x41, '', 'Lo'), (0x42, '', 'Lo'), (0x43, '', 'Lo'), (0x44, 'B', 'Lu')]

def test_expanded_records_clone_the_start():
	records = _records('4E00;<CJK Ideograph, First>;Lo;0;L;;;;;N;;;;;', '4E02;<CJK Ideograph, Last>;Lo;0;L;;;;;N;;;;;')
	out = list(RangeExpander(records))
	assert [r.codepoint for r in out] == [0x4e00, 0x4e01, 0x4e02]
	assert all(r.decomposition == records[0].decomposition for r in out)
	assert all((r.generalCategory, r.bidiClass, r.combiningClass) == ('Lo', 'L', 0) for r in out)

	records = _records('0041;<X, First>;So;0;ON;<compat> 0020 0301;;;;N;;;;;', '0042;<X, Last>;So;0;ON;;;;;N;;;;;')
	out = list(RangeExpander(records))
	assert [(r.codepoint, r.name, str(r.decomposition)) for r in out] == [(0x41, '', '<compat> 0020 0301'), (0x42, '', '<compat> 0020 0301')]

def test_expand_hangul():
	records = _records(
		'ABFF;UNASSIGNED;Cn;0;L;;;;;N;;;;;',
		'AC00;<Hangul Syllable, First>;Lo;0;L;;;;;N;;;;;',
		'D7A3;<Hangul Syllable, Last>;Lo;0;L;;;;;N;;;;;',
		'D7B0;HANGUL JUNGSEONG O-YEO;Lo;0;L;;;;;N;;;;;',
	)
	out = list(RangeExpander(records))
	assert len(out) == 11174
	assert out[1].codepoint == 0xac00 and out[-2].codepoint == 0xd7a3
	assert all(r.name == '' for r in out[1:-1])

def test_unpaired_start_passes_through():
	records = _records(
		'3400;<CJK Ideograph Extension A, First>;Lo;0;L;;;;;N;;;;;',
		'0041;A;Lu;0;L;;;;;N;;;;;',
		'4E00;<CJK Ideograph, First>;Lo;0;L;;;;;N;;;;;',
	)
	out = [(r.codepoint, r.name) for r in RangeExpander(records)]
	assert out == [(0x3400, '<CJK Ideograph Extension A, First>'), (0x41, 'A'), (0x4e00, '<CJK Ideograph, First>')]

def test_single_codepoint_range():
	records = _records('0041;<X, First>;Lo;0;L;;;;;N;;;;;', '0041;<X, Last>;Lo;0;L;;;;;N;;;;;')
	assert [(r.codepoint, r.name) for r in RangeExpander(records)] == [(0x41, '')]

def test_pulls_lazily():
	pulled = []
	def source():
		for line in ['0041;A;Lu;0;L;;;;;N;;;;;', '0042;B;Lu;0;L;;;;;N;;;;;']:
			pulled.append(line)
			yield ParseRecord(line)

	expander = RangeExpander(source())
	assert next(expander).name == 'A'
	assert len(pulled) == 1
	assert next(expander).name == 'B'
	assert list(expander) == []
	assert list(expander) == []

def test_empty():
	assert list(RangeExpander([])) == []
