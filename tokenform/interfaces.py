"""
This file aggregates the design constants, abstract classes, and exception types tokenform deals in.

The formatting engine is deliberately ignorant of where symbols come from. A lexer somewhere
produces them, and that lexer knows the names of its token kinds. The engine only needs to ask
a few questions of such a name table, so the Vocabulary ABC below captures exactly those.

Failures come in two flavors. Inside the engine, a failed attempt is ordinary control flow:
a component reports failure with a return code and the next alternative gets its chance.
Only when every alternative has failed does anything get raised, and then it is one of the
FormatterError subclasses found here.
"""

from abc import ABC, abstractmethod
from typing import Optional, Iterable

from tokenform.support.failureprone import SourceText

EOF = -1 # The kind of the end-of-stream symbol.
EOF_NAME = 'EOF' # How the end-of-stream kind appears in notation.
EOF_TEXT = '<EOF>' # Placeholder text of the end-of-stream symbol.
INVALID_TYPE = 0 # The kind of a symbol nobody has classified yet.
DEFAULT_CHANNEL = 0

# Integer fields hold 32-bit signed values.
MIN_INT = -2**31
MAX_INT = 2**31 - 1

class Vocabulary(ABC):
	"""
	Maps an integer kind to its display names. A kind may have a symbolic name (like `ID`),
	a literal name (like `'='`, quotes included), both, or neither.
	The engine scans every kind from zero up to `max_kind()` when resolving names,
	so it pays to keep the table compact.
	"""

	@abstractmethod
	def max_kind(self) -> int:
		""" The largest kind which might have a name. """

	@abstractmethod
	def symbolic_name(self, kind:int) -> Optional[str]:
		""" Return the symbolic name of `kind`, or None. """

	@abstractmethod
	def literal_name(self, kind:int) -> Optional[str]:
		""" Return the literal name of `kind` (with its quotes), or None. """


class FormatterError(ValueError):
	""" Base class of all exceptions arising from the formatting machinery. """

class DefinitionError(FormatterError):
	""" Raised while building a formatter which would make no sense. """

class SymbolFormatError(FormatterError):
	""" No alternative of a formatter could render this symbol. """
	def __init__(self, symbol, message):
		super().__init__(message)
		self.symbol = symbol

class TreeFormatError(FormatterError):
	""" No alternative of a tree formatter could render this node. """
	def __init__(self, node, message):
		super().__init__(message)
		self.node = node

class ParseError(FormatterError):
	"""
	Raised when some text cannot be read back into a record.
	Attributes are:
		text: the complete input.
		index: the 0-based offset of the deepest failure found.
		line, column: the same position, both counted from 1.
		messages: the diagnostics which tied at that depth, in sorted order.
	The exception's message reproduces the offending line with the position marked.
	"""
	def __init__(self, text:str, index:int, messages:Iterable[str], filename=None):
		self.text = text
		self.index = index
		self.messages = tuple(messages)
		source = SourceText(text, filename=filename)
		self.line, column = source.find_row_col(index)
		self.column = column + 1
		super().__init__(source.complaint(slice(index, index+1), self.description))

	@property
	def description(self) -> str:
		if not self.messages: return "Parse failed at index %d" % self.index
		return "; ".join(self.messages)

class SymbolParseError(ParseError): pass

class TreeParseError(ParseError): pass

class SymbolAssertionError(AssertionError):
	""" Two lists of symbols which ought to be equal are not. The message shows a diff table. """
