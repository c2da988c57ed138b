# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
from .errors import UcdError, ParseError, EncodeError
from .parser import UnicodeDataRecord, Decomposition, NumericValue, ParseRecord, FormatRecord, ParseUnicodeData
from .expander import RangeExpander
from .ranges import Range, Ranges
from .tables import CompiledTable, TableCompiler
from .encoding import UnsignedWidth, SmallestUnsignedType, PackString, UnpackString
from .writer import TableWriter, WriterConfig

__version__ = '0.1.0'
