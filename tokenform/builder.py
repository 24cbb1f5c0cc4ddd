"""
Builders accumulate components in order, then hand over an immutable product.

ChainBuilder knows the parts common to any chain: literal text, whitespace, and optional
sections, which bracket a run of components and do not nest. FormatterBuilder adds the
symbol fields, plus a compiler for the pattern mini-language.

The pattern language reads left to right, one character at a time:

	letter           the component the letter stands for (see PATTERN_TABLE)
	'...'            everything between the quotes, as literal text
	\\c              the character c, as literal text
	[ ... ]          an optional section
	whitespace run   one Whitespace component preferring exactly that run
	anything else    literal text

For the integer fields, the lower-case letter is strict (the default value does not render)
and the upper-case letter is lenient. The fields are: N index, B start, E stop, C channel,
P position in line, R line, and I the kind as a plain number. For the kind by name, `S` tries
symbolic then literal then number, `L` tries literal then symbolic then number, while `s` and
`l` use just the one name. `X` is escaped text and `x` is raw text.
"""

from typing import Iterable

from tokenform.interfaces import DefinitionError
from tokenform.symbol import Field, TYPE, TEXT, INTEGER_FIELDS
from tokenform.textoption import TextOption, ESCAPED, NOTHING
from tokenform.components import (
	Component, Literal, Integer, Text, SymbolicType, LiteralType, TypeFormat, TypeAlternatives,
	EndOfFile, Whitespace, Composite,
)
from tokenform.formatter import SymbolFormatter
from tokenform.support.failureprone import SourceText

class ChainBuilder:
	"""
	A builder is single-use: once it has produced its chain, it refuses further work.
	"""
	def __init__(self):
		self._components = []
		self._optional = None
		self._finished = False

	def _target(self) -> list:
		if self._finished: raise DefinitionError("This builder has already been used up.")
		return self._components if self._optional is None else self._optional

	def append_component(self, component:Component):
		self._target().append(component)
		return self

	def append_literal(self, text:str):
		if text: self.append_component(Literal(text))
		return self

	def append_whitespace(self, preferred:str=''):
		return self.append_component(Whitespace(preferred))

	def start_optional(self):
		self._target()
		if self._optional is not None: raise DefinitionError("Optionals cannot be nested")
		self._optional = []
		return self

	def end_optional(self):
		self._target()
		if self._optional is None: raise DefinitionError("End of optional section without a start")
		children, self._optional = self._optional, None
		if children: self._components.append(Composite(children, optional=True))
		return self

	def _finish(self) -> Composite:
		self._target()
		if self._optional is not None: raise DefinitionError("Unclosed optional section")
		self._finished = True
		return Composite(self._components)


class FormatterBuilder(ChainBuilder):
	def __init__(self):
		super().__init__()
		self._fields = set()

	def _mention(self, *fields:Field):
		self._fields.update(fields)

	def append_integer(self, field:Field, strict=False):
		self._mention(field)
		return self.append_component(Integer(field, strict))

	def append_text(self, option:TextOption=NOTHING):
		self._mention(TEXT)
		return self.append_component(Text(option))

	def append_symbolic_type(self):
		self._mention(TYPE)
		return self.append_component(SymbolicType())

	def append_literal_type(self):
		self._mention(TYPE, TEXT)
		return self.append_component(LiteralType())

	def append_type(self, type_format:TypeFormat=TypeFormat.SYMBOLIC_FIRST):
		if type_format is TypeFormat.INTEGER_ONLY: return self.append_integer(TYPE)
		if type_format is TypeFormat.SYMBOLIC_ONLY: return self.append_symbolic_type()
		if type_format is TypeFormat.LITERAL_ONLY: return self.append_literal_type()
		self._mention(TYPE)
		return self.append_component(TypeAlternatives(type_format))

	def append_eof(self):
		self._mention(TYPE, TEXT)
		return self.append_component(EndOfFile())

	def append_pattern(self, pattern:str):
		compile_pattern(self, pattern)
		return self

	def to_formatter(self) -> SymbolFormatter:
		return SymbolFormatter([self._finish()], self._fields)


PATTERN_TABLE = {
	'S': lambda b: b.append_type(TypeFormat.SYMBOLIC_FIRST),
	's': lambda b: b.append_type(TypeFormat.SYMBOLIC_ONLY),
	'L': lambda b: b.append_type(TypeFormat.LITERAL_FIRST),
	'l': lambda b: b.append_type(TypeFormat.LITERAL_ONLY),
	'X': lambda b: b.append_text(ESCAPED),
	'x': lambda b: b.append_text(NOTHING),
}
for _field in INTEGER_FIELDS:
	PATTERN_TABLE[_field.strict_letter] = lambda b, f=_field: b.append_integer(f, strict=True)
	PATTERN_TABLE[_field.lenient_letter] = lambda b, f=_field: b.append_integer(f)

def compile_pattern(builder:FormatterBuilder, pattern:str):
	""" Single pass over the pattern, appending components to the builder as it goes. """
	literal = []
	def flush():
		if literal:
			builder.append_literal(''.join(literal))
			literal.clear()
	def complain(index, message):
		return DefinitionError(SourceText(pattern).complaint(slice(index, index+1), message))

	i = 0
	while i < len(pattern):
		c = pattern[i]
		if c == "'":
			end = pattern.find("'", i+1)
			if end < 0: raise complain(i, "Unclosed quote in pattern")
			literal.append(pattern[i+1:end])
			i = end + 1
		elif c == '\\':
			if i + 1 >= len(pattern): raise complain(i, "Pattern ends with an escape character")
			literal.append(pattern[i+1])
			i += 2
		elif c in '[]':
			flush()
			try:
				if c == '[': builder.start_optional()
				else: builder.end_optional()
			except DefinitionError as e:
				raise complain(i, e.args[0]) from None
			i += 1
		elif c.isspace():
			flush()
			end = i
			while end < len(pattern) and pattern[end].isspace(): end += 1
			builder.append_whitespace(pattern[i:end])
			i = end
		elif c in PATTERN_TABLE:
			flush()
			PATTERN_TABLE[c](builder)
			i += 1
		else:
			literal.append(c)
			i += 1
	flush()

def split_alternatives(pattern:str) -> Iterable[str]:
	""" Split on each `|` which is neither quoted nor escaped. """
	start, i, quoted = 0, 0, False
	while i < len(pattern):
		c = pattern[i]
		if c == '\\' and not quoted:
			i += 2
			continue
		if c == "'": quoted = not quoted
		elif c == '|' and not quoted:
			yield pattern[start:i]
			start = i + 1
		i += 1
	yield pattern[start:]
