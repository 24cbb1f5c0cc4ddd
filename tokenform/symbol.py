"""
Symbols and the fields they are made of.

A Symbol is the flat record a lexer emits for each token: what kind it is, what text it
matched, and where it came from. Every attribute has a default which means "unset".

A Field names one such attribute and knows how to read it from a Symbol and how to
write it into a SymbolBuilder. Formatting components only ever deal in Fields, so the
set of Fields a formatter mentions tells you exactly which attributes it cares about.
That set also decides what "equal" means when comparing symbols for a test.
"""

from typing import NamedTuple, Optional, Iterable

from tokenform.interfaces import INVALID_TYPE, DEFAULT_CHANNEL

class Symbol(NamedTuple):
	index: int = -1
	start: int = -1
	stop: int = -1
	text: str = ''
	type: int = INVALID_TYPE
	channel: int = DEFAULT_CHANNEL
	line: int = -1
	position: int = -1

	def __str__(self): return describe(self)

	@classmethod
	def from_token(cls, token) -> "Symbol":
		"""
		Copy the attributes of any token-like object, such as those the ANTLR runtime emits.
		Missing attributes take their defaults.
		"""
		text = getattr(token, 'text', None)
		return cls(
			index=getattr(token, 'tokenIndex', -1),
			start=getattr(token, 'start', -1),
			stop=getattr(token, 'stop', -1),
			text='' if text is None else text,
			type=getattr(token, 'type', INVALID_TYPE),
			channel=getattr(token, 'channel', DEFAULT_CHANNEL),
			line=getattr(token, 'line', -1),
			position=getattr(token, 'column', -1),
		)


class SymbolBuilder:
	""" Accumulates field values, then materializes a Symbol. One setter per field; each returns the builder. """
	def __init__(self, template:Symbol=None):
		self._values = {} if template is None else template._asdict()

	def _set(self, name, value):
		self._values[name] = value
		return self

	def index(self, value): return self._set('index', value)
	def start(self, value): return self._set('start', value)
	def stop(self, value): return self._set('stop', value)
	def text(self, value): return self._set('text', value)
	def type(self, value): return self._set('type', value)
	def channel(self, value): return self._set('channel', value)
	def line(self, value): return self._set('line', value)
	def position(self, value): return self._set('position', value)

	def build(self) -> Symbol: return Symbol(**self._values)


class Field:
	"""
	One named attribute of a Symbol, plus the pattern letters which stand for it.
	Integer fields have a strict letter (lower case) and a lenient letter (upper case).
	"""
	def __init__(self, name:str, default, strict_letter:Optional[str]=None, lenient_letter:Optional[str]=None):
		self.name = name
		self.default = default
		self.strict_letter = strict_letter
		self.lenient_letter = lenient_letter

	def access(self, symbol:Symbol): return getattr(symbol, self.name)

	def resolve(self, builder:SymbolBuilder, value): getattr(builder, self.name)(value)

	def __eq__(self, other): return isinstance(other, Field) and other.name == self.name
	def __hash__(self): return hash(self.name)
	def __str__(self): return self.name
	def __repr__(self): return 'Field(%r)'%self.name

TYPE = Field('type', INVALID_TYPE, 'i', 'I')
TEXT = Field('text', '')
INDEX = Field('index', -1, 'n', 'N')
LINE = Field('line', -1, 'r', 'R')
POSITION = Field('position', -1, 'p', 'P')
CHANNEL = Field('channel', DEFAULT_CHANNEL, 'c', 'C')
START = Field('start', -1, 'b', 'B')
STOP = Field('stop', -1, 'e', 'E')

ALL_FIELDS = (INDEX, START, STOP, TEXT, TYPE, CHANNEL, LINE, POSITION)
SIMPLE_FIELDS = (TYPE, TEXT, INDEX, CHANNEL)
INTEGER_FIELDS = tuple(f for f in ALL_FIELDS if f.strict_letter)

def symbol_key(symbol:Symbol, fields:Iterable[Field]) -> tuple:
	""" The values of just those fields, in a canonical order. Suitable for hashing and sequence-matching. """
	fields = frozenset(fields)
	return tuple(f.access(symbol) for f in ALL_FIELDS if f in fields)

def equalizer(fields:Iterable[Field]):
	""" Return a predicate which compares two symbols on the given fields only. """
	fields = tuple(f for f in ALL_FIELDS if f in frozenset(fields))
	def equal(a:Symbol, b:Symbol) -> bool:
		return all(f.access(a) == f.access(b) for f in fields)
	return equal

def escape_for_display(text:str) -> str:
	return text.replace('\\', '\\\\').replace('\n', '\\n').replace('\r', '\\r').replace('\t', '\\t')

def describe(symbol:Symbol) -> str:
	"""
	A vocabulary-free rendering in the shape ANTLR uses: `[@index,start:stop='text',<type>,line:position]`.
	The channel appears only when it isn't the default. This never fails, which makes it the
	right thing to put in the message when a proper formatter cannot cope.
	"""
	channel = '' if symbol.channel == DEFAULT_CHANNEL else ',channel=%d'%symbol.channel
	return "[@%d,%d:%d='%s',<%d>%s,%d:%d]" % (
		symbol.index, symbol.start, symbol.stop, escape_for_display(symbol.text or ''),
		symbol.type, channel, symbol.line, symbol.position,
	)
