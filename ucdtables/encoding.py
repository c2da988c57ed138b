# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
from typing import Iterable

from .errors import EncodeError

UnsignedWidths: list[int] = [8, 16, 32, 64]

# lookup the narrowest unsigned width, which can represent the value
def UnsignedWidth(maxValue: int) -> int:
	if maxValue < 0:
		raise RuntimeError(f'Negative value [{maxValue}] cannot be stored unsigned')
	for i in UnsignedWidths:
		if maxValue <= 2**i - 1:
			return i
	raise RuntimeError(f'Value [{maxValue}] does not fit into {UnsignedWidths[-1]} bits')

def SmallestUnsignedType(values: Iterable[int]) -> str:
	values = list(values)
	if len(values) == 0:
		return f'uint{UnsignedWidths[0]}_t'
	return f'uint{UnsignedWidth(max(values))}_t'

# strings of up to eight bytes are packed into an u64 (first byte in the least significant byte)
def PackString(s: str) -> int:
	data = s.encode('utf-8')
	if len(data) > 8:
		raise EncodeError('too long', s)
	if 0 in data:
		raise EncodeError('contains NUL byte', s)
	value = 0
	for i, b in enumerate(data):
		value |= (b << (8 * i))
	return value

def UnpackString(value: int) -> str:
	if value < 0 or value > 2**64 - 1:
		raise RuntimeError(f'Value [{value}] is not a packed string')
	data = bytearray()
	while len(data) < 8:
		b = (value >> (8 * len(data))) & 0xff
		if b == 0:
			break
		data.append(b)
	return data.decode('utf-8')

# codepoints are keyed as fixed four-byte big-endian values to keep the keys in codepoint order
def CodepointKey(cp: int) -> bytes:
	return cp.to_bytes(4, 'big')

def StringKey(s: str) -> bytes:
	return s.encode('utf-8')
