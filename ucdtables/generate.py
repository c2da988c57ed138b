# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import argparse
import io
import os
import sys
from typing import TextIO

from .errors import UcdError, ParseError
from .expander import RangeExpander
from .names import HangulName, IdeographName, NormalizeCharacterName
from .parser import FormatRecord, ParseJamo, ParseNameAliases, ParseRecord, ParseUnicodeData, ReadDataLines, UnicodeDataRecord
from .ranges import Ranges
from .tables import TableCompiler
from .writer import StrHelp, TableWriter, WriterConfig
from . import log

# tag-bits of the names-table (the lower 32 bits contain the codepoint)
NameTagExplicit: int = 1 << 32
NameTagAlias: int = 1 << 33
NameTagHangul: int = 1 << 34
NameTagIdeograph: int = 1 << 35

def _UcdPath(ucdDir: str, fileName: str) -> str:
	path = os.path.join(ucdDir, fileName)
	if not os.path.isfile(path):
		raise UcdError(f'Unable to find [{fileName}] in [{ucdDir}]')
	return path

def LoadUnicodeData(ucdDir: str) -> list[UnicodeDataRecord]:
	return list(RangeExpander(ParseUnicodeData(_UcdPath(ucdDir, 'UnicodeData.txt'))))

# General_Category (https://www.unicode.org/reports/tr44/#General_Category_Values)
def MakeGeneralCategory(args: argparse.Namespace, writer: TableWriter) -> None:
	records = LoadUnicodeData(args.ucd_dir)

	# collect the categories of all codepoints and add the unassigned codepoints as Cn
	compiler = TableCompiler()
	for record in records:
		compiler.addValue('categories', record.codepoint, record.generalCategory)
		compiler.addCodepoint(record.generalCategory, record.codepoint)
	if not args.no_unassigned:
		for cp in Ranges.codepoints(Ranges.complement(Ranges.fromSet(r.codepoint for r in records))):
			compiler.addValue('categories', cp, 'Cn')
			compiler.addCodepoint('Cn', cp)

	# write either a single enum-table or one table per category
	if args.enum:
		writer.table(compiler.compileEnum('categories', name=args.name))
		return
	for category in compiler.tableNames():
		if category != 'categories':
			writer.table(compiler.compile(category))

# Canonical_Combining_Class (https://www.unicode.org/reports/tr44/#Canonical_Combining_Class_Values)
def MakeCombiningClass(args: argparse.Namespace, writer: TableWriter) -> None:
	records = LoadUnicodeData(args.ucd_dir)
	compiler = TableCompiler()
	for record in records:
		if record.combiningClass != 0:
			compiler.addValue(args.name, record.codepoint, record.combiningClass)
	if args.name not in compiler.tableNames():
		writer.rangesToUnsignedInteger(args.name, {})
	else:
		writer.table(compiler.compile(args.name))

# Jamo_Short_Name (https://www.unicode.org/reports/tr44/#Jamo.txt)
def MakeJamoShortName(args: argparse.Namespace, writer: TableWriter) -> None:
	writer.codepointToString(args.name, ParseJamo(_UcdPath(args.ucd_dir, 'Jamo.txt')))

# character names including aliases and algorithmically derived names
#	names already taken keep their first codepoint (explicit names precede aliases, hangul and ideograph names)
def MakeNames(args: argparse.Namespace, writer: TableWriter) -> None:
	records = LoadUnicodeData(args.ucd_dir)
	names: dict[str, tuple[int, int]] = {}
	def add(name: str, cp: int, tag: int) -> None:
		if args.normalize:
			name = NormalizeCharacterName(name)
		if name not in names:
			names[name] = (cp, tag)
		elif names[name][0] == cp:
			names[name] = (cp, names[name][1] | tag)

	# add the explicit names (range-expanded records have an empty name and placeholders are bracketed)
	for record in records:
		if len(record.name) > 0 and not record.name.startswith('<'):
			add(record.name, record.codepoint, NameTagExplicit)
	if not args.no_aliases:
		for alias in ParseNameAliases(_UcdPath(args.ucd_dir, 'NameAliases.txt')):
			add(alias.alias, alias.codepoint, NameTagAlias)

	# add the algorithmically derived names of the expanded ranges
	for record in records:
		if len(record.name) > 0:
			continue
		hangul, ideograph = HangulName(record.codepoint), IdeographName(record.codepoint)
		if hangul is not None and not args.no_hangul:
			add(hangul, record.codepoint, NameTagHangul)
		elif ideograph is not None and not args.no_ideograph:
			add(ideograph, record.codepoint, NameTagIdeograph)

	if args.tagged:
		writer.stringToUnsignedInteger(args.name, { k: (cp | tag) for k, (cp, tag) in names.items() })
	else:
		writer.stringToCodepoint(args.name, { k: cp for k, (cp, _) in names.items() })

# re-emit UnicodeData.txt to validate the parser by diffing the output with the input
def TestUnicodeData(args: argparse.Namespace, out: TextIO) -> int:
	path, mismatches = _UcdPath(args.ucd_dir, 'UnicodeData.txt'), 0
	log.Info(f'Parsing [{path}]...')
	for number, line in ReadDataLines(path):
		try:
			formatted = FormatRecord(ParseRecord(line))
		except ParseError as e:
			raise e.locate(path, number)
		if formatted != line:
			log.Info(f'Mismatch in line [{number}]: [{line}] => [{formatted}]')
			mismatches += 1
		out.write(f'{formatted}\n')
	if mismatches > 0:
		log.Info(f'Found [{mismatches}] mismatching lines')
		return 1
	return 0

def _PrepareOutput(config: WriterConfig) -> None:
	if config.automaton() and not os.path.isdir(config.fstDir):
		os.makedirs(config.fstDir)

def _WriteOutput(config: WriterConfig, source: str) -> None:
	if not config.automaton():
		sys.stdout.write(source)
		sys.stdout.flush()
		return

	# the source-code is written next to the automaton-files, which it embeds
	with open(os.path.join(config.fstDir, f'{StrHelp.fileName(config.name)}.h'), 'w', encoding='utf-8') as file:
		file.write(source)

def ParseArgs(argv: list[str]|None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(
		prog = 'ucd-tables',
		description = 'Compile the Unicode character database into compact lookup tables (literal range arrays or fst automatons)',
	)
	parser.add_argument('--quiet', action='store_true', help='Do not report any progress on stderr.')
	commands = parser.add_subparsers(dest='command', required=True)

	# common arguments of all table-generating commands
	def command(name: str, defName: str, make, desc: str, chars: bool = True) -> argparse.ArgumentParser:
		sub = commands.add_parser(name, help=desc)
		sub.add_argument('ucd_dir', help='Directory containing the Unicode character database files.')
		sub.add_argument('--name', default=defName, help='Set the name of the table in the emitted code.')
		sub.add_argument('--fst-dir', default=None, help='Emit the tables as fst automatons into the directory (with the source-code embedding them).')
		if chars:
			sub.add_argument('--chars', action='store_true', help='Write codepoints as character literals. Ranges, which cannot be written as character literals, are silently dropped.')
		sub.set_defaults(make=make, chars=False)
		return sub

	sub = command('general-category', 'GENERAL_CATEGORY', MakeGeneralCategory, 'Create the General_Category property tables.')
	sub.add_argument('--enum', action='store_true', help='Emit a single table mapping codepoint ranges to the index of their category.')
	sub.add_argument('--no-unassigned', action='store_true', help='Do not emit the unassigned (Cn) general category.')
	command('combining-class', 'CANONICAL_COMBINING_CLASS', MakeCombiningClass, 'Create the Canonical_Combining_Class property table.')
	command('jamo-short-name', 'JAMO_SHORT_NAME', MakeJamoShortName, 'Create the Jamo_Short_Name property table.')
	sub = command('names', 'NAMES', MakeNames, 'Create a mapping from character name to codepoint.', False)
	sub.add_argument('--no-aliases', action='store_true', help='Ignore all character name aliases.')
	sub.add_argument('--no-ideograph', action='store_true', help='Do not include algorithmically generated ideograph names.')
	sub.add_argument('--no-hangul', action='store_true', help='Do not include algorithmically generated Hangul syllable names.')
	sub.add_argument('--tagged', action='store_true', help='Tag each codepoint with how the name was derived (bit 33: explicit, 34: alias, 35: Hangul syllable, 36: ideograph).')
	sub.add_argument('--normalize', action='store_true', help='Normalize all character names according to UAX44-LM2.')
	sub = commands.add_parser('test-unicode-data', help='Test the UnicodeData.txt parser by re-emitting the parsed file.')
	sub.add_argument('ucd_dir', help='Directory containing the Unicode character database files.')
	return parser.parse_args(argv)

def main(argv: list[str]|None = None) -> int:
	args = ParseArgs(argv)
	log.SetQuiet(args.quiet)
	try:
		if args.command == 'test-unicode-data':
			return TestUnicodeData(args, sys.stdout)

		# setup the writer and generate the tables of the command
		config = WriterConfig(args.name, args.fst_dir, args.chars, (None if argv is None else ['ucd-tables'] + argv))
		_PrepareOutput(config)

		# the source-code is only emitted once all tables have been generated
		buffer = io.StringIO()
		with log.Task(f'Generating [{args.command}]'), TableWriter(buffer, config) as writer:
			args.make(args, writer)
		_WriteOutput(config, buffer.getvalue())
	except UcdError as e:
		print(f'error: {e}', file=sys.stderr)
		return 1
	return 0

if __name__ == '__main__':
	sys.exit(main())
