# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024 Bjoern Boss Henrichsen
import ducer

# narrow wrapper around the sorted-key automaton (fst) builder: keys must be inserted in strictly
#	ascending byte-order, the finished automaton is an immutable blob, which can be looked up again
class AutomatonBuilder:
	def __init__(self, isMap: bool) -> None:
		self._isMap = isMap
		self._keys: list[bytes] = []
		self._values: list[int] = []
		self._finished = False
	def insert(self, key: bytes, value: int|None = None) -> None:
		if self._finished:
			raise RuntimeError('Automaton has already been finished')
		if len(self._keys) > 0 and key <= self._keys[-1]:
			raise RuntimeError(f'Automaton keys must be strictly ascending [{self._keys[-1].hex()} >= {key.hex()}]')
		if self._isMap:
			if value is None or value < 0 or value > 2**64 - 1:
				raise RuntimeError(f'Automaton value [{value}] is not an unsigned 64-bit integer')
			self._values.append(value)
		elif value is not None:
			raise RuntimeError('Automaton sets do not carry values')
		self._keys.append(key)
	def finish(self) -> bytes:
		self._finished = True
		if self._isMap:
			return bytes(ducer.Map.build(':memory:', zip(self._keys, self._values)))
		return bytes(ducer.Set.build(':memory:', self._keys))

class Automaton:
	def __init__(self, blob: bytes, isMap: bool) -> None:
		self._isMap = isMap
		self._fst = (ducer.Map(blob) if isMap else ducer.Set(blob))
	def __len__(self) -> int:
		return len(self._fst)
	def __contains__(self, key: bytes) -> bool:
		return key in self._fst
	def get(self, key: bytes) -> int|None:
		if not self._isMap:
			raise RuntimeError('Automaton sets do not carry values')
		return self._fst.get(key)
