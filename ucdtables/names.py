# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
from .ranges import Range

# hangul syllable names (https://www.unicode.org/versions/Unicode15.0.0/ch03.pdf#page=75)
HangulSBase: int = 0xac00
HangulLCount: int = 19
HangulVCount: int = 21
HangulTCount: int = 28
HangulNCount: int = HangulVCount * HangulTCount
HangulSCount: int = HangulLCount * HangulNCount
RangeHangulSyllable: Range = Range(HangulSBase, HangulSBase + HangulSCount - 1)

HangulLNames: list[str] = ['G', 'GG', 'N', 'D', 'DD', 'R', 'M', 'B', 'BB', 'S', 'SS', '', 'J', 'JJ', 'C', 'K', 'T', 'P', 'H']
HangulVNames: list[str] = [
	'A', 'AE', 'YA', 'YAE', 'EO', 'E', 'YEO', 'YE', 'O', 'WA', 'WAE',
	'OE', 'YO', 'U', 'WEO', 'WE', 'WI', 'YU', 'EU', 'YI', 'I'
]
HangulTNames: list[str] = [
	'', 'G', 'GG', 'GS', 'N', 'NJ', 'NH', 'D', 'L', 'LG', 'LM', 'LB', 'LS', 'LT',
	'LP', 'LH', 'M', 'B', 'BS', 'S', 'SS', 'NG', 'J', 'C', 'K', 'T', 'P', 'H'
]

# ranges of the cjk unified ideographs, whose names are derived from their codepoint
RangesIdeograph: list[Range] = [
	Range(0x3400, 0x4dbf), Range(0x4e00, 0x9fff), Range(0x20000, 0x2a6df), Range(0x2a700, 0x2b739),
	Range(0x2b740, 0x2b81d), Range(0x2b820, 0x2cea1), Range(0x2ceb0, 0x2ebe0), Range(0x2ebf0, 0x2ee5d),
	Range(0x30000, 0x3134a), Range(0x31350, 0x323af)
]

def HangulName(cp: int) -> str|None:
	if not RangeHangulSyllable.contains(cp):
		return None
	index = cp - HangulSBase
	l, v, t = index // HangulNCount, (index % HangulNCount) // HangulTCount, index % HangulTCount
	return f'HANGUL SYLLABLE {HangulLNames[l]}{HangulVNames[v]}{HangulTNames[t]}'

def IdeographName(cp: int) -> str|None:
	if not any(r.contains(cp) for r in RangesIdeograph):
		return None
	return f'CJK UNIFIED IDEOGRAPH-{cp:04X}'

# normalize a character name for loose matching (https://www.unicode.org/reports/tr44/#UAX44-LM2)
#	ignore case, whitespace, underscores and medial hyphens (except for the hyphen of U+1180 HANGUL JUNGSEONG O-E)
def NormalizeCharacterName(name: str) -> str:
	out = ''
	for i, c in enumerate(name):
		if c.isspace() or c == '_':
			continue
		if c == '-' and 0 < i < len(name) - 1 and name[i - 1].isalnum() and name[i + 1].isalnum():
			continue
		out += c.lower()

	# U+1180 would otherwise collide with U+116C HANGUL JUNGSEONG OE
	if ''.join(c for c in name if not c.isspace() and c != '_').lower() == 'hanguljungseongo-e':
		return 'hanguljungseongo-e'
	return out
