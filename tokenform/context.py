"""
Bookkeeping for a single format or parse attempt, and for a parsing session as a whole.

Component results follow one convention throughout: a result `r >= 0` is the new cursor
after a successful step (zero included; a step may consume nothing), while `r < 0` means
the step failed and `~r` is the index where it failed. Always test with `>= 0`.
"""

import copy
from typing import NamedTuple, Optional

from tokenform.interfaces import Vocabulary
from tokenform.symbol import Symbol, SymbolBuilder

def lookahead(text:str, position:int, width:int) -> str:
	""" A short excerpt for error messages. """
	if position >= len(text): return "<text end>"
	return text[position:position+width]

class FormatContext(NamedTuple):
	symbol: Symbol
	vocabulary: Optional[Vocabulary]

class ParseContext:
	"""
	Accumulates field bindings for one parse attempt of one chain.
	Binding a field twice is fine if the values agree; otherwise the attempt has a conflict.
	"""
	def __init__(self, vocabulary:Vocabulary=None):
		self.vocabulary = vocabulary
		self.values = {}
		self.error_message = None

	def bind(self, field, value) -> bool:
		if field in self.values and self.values[field] != value:
			self.error_message = "Conflicting values for field '%s': %r versus %r" % (field, self.values[field], value)
			return False
		self.values[field] = value
		return True

	def fail(self, position:int, message:str) -> int:
		self.error_message = message
		return ~position

	def copy(self) -> "ParseContext":
		""" A twin to parse with speculatively: changes to the twin's bindings do not show through. """
		twin = copy.copy(self)
		twin.values = dict(self.values)
		return twin

	def resolve(self) -> Symbol:
		builder = SymbolBuilder()
		for field, value in self.values.items(): field.resolve(builder, value)
		return builder.build()


class ParsePosition:
	"""
	Spans a parse session which may cover several records in a row.
	`index` is the cursor. `symbol_index` counts records when the notation doesn't carry
	an index itself (-1 when unused). When attempts fail, only the messages from the
	deepest failure index survive, and they come back in sorted order.
	"""
	def __init__(self, index=0):
		self.index = index
		self.error_index = -1
		self.symbol_index = -1
		self._messages = set()

	@property
	def messages(self) -> list: return sorted(self._messages)

	def has_error(self) -> bool: return self.error_index >= 0

	def record_error(self, error_index:int, message:Optional[str]):
		if message is None: message = "Parse failed at index %d" % error_index
		if error_index > self.error_index:
			self.error_index = error_index
			self._messages = {message}
		elif error_index == self.error_index:
			self._messages.add(message)

	def clear_error(self):
		self.error_index = -1
		self._messages = set()

	def __repr__(self):
		return 'ParsePosition(index=%d, error_index=%d, symbol_index=%d)'%(self.index, self.error_index, self.symbol_index)
