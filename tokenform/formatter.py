"""
A SymbolFormatter is an ordered list of alternative chains, each one a Composite of components.

Formatting tries the chains in order and the first to render the whole symbol wins.
Parsing does the same, starting each chain with a fresh ParseContext so that nothing from
a failed attempt leaks into the next. When every chain fails, the most informative
complaint is the one which got furthest into the text, so that is the one reported.

Formatters are immutable. Rebinding the vocabulary or adding alternatives makes a new one.
"""

from typing import Iterable, Optional, Sequence

from tokenform.interfaces import Vocabulary, SymbolFormatError, SymbolParseError
from tokenform.symbol import Symbol, Field, INDEX, ALL_FIELDS, TEXT, describe
from tokenform.context import FormatContext, ParseContext, ParsePosition
from tokenform.components import Composite

def skip_spaces(text:str, index:int) -> int:
	while index < len(text) and text[index].isspace(): index += 1
	return index

class SymbolFormatter:
	def __init__(self, chains:Sequence[Composite], fields:Iterable[Field], vocabulary:Vocabulary=None):
		self.chains = tuple(chains)
		self.fields = frozenset(fields)
		self.vocabulary = vocabulary

	def try_format(self, symbol:Symbol) -> Optional[str]:
		""" Like `format`, but answers None rather than raising. """
		ctx = FormatContext(symbol, self.vocabulary)
		for chain in self.chains:
			out = []
			if chain.format(ctx, out): return ''.join(out)
		return None

	def format(self, symbol:Symbol) -> str:
		text = self.try_format(symbol)
		if text is None: raise SymbolFormatError(symbol, "Failed to format symbol %s" % describe(symbol))
		return text

	def format_list(self, symbols:Iterable[Symbol], delimiter='\n') -> str:
		return delimiter.join(map(self.format, symbols))

	def parse(self, text:str) -> Symbol:
		""" The whole text must be one symbol. """
		position = ParsePosition()
		symbol = self.parse_partial(text, position)
		if symbol is None: raise SymbolParseError(text, position.error_index, position.messages)
		index = position.index
		if index != len(text):
			message = "Input '%s>>%s' has trailing unparsed text at position %d" % (text[:index], text[index:], index)
			raise SymbolParseError(text, index, [message])
		return symbol

	def parse_partial(self, text:str, position:ParsePosition, following=()) -> Optional[Symbol]:
		"""
		Read one symbol starting at `position.index`. On success, advance the position and
		clear its error. On failure, leave the index alone, record the deepest failure in
		the position, and return None. Free text stops where `following` would match.
		"""
		for chain in self.chains:
			ctx = ParseContext(self.vocabulary)
			end = chain.parse(ctx, text, position.index, following)
			if end >= 0:
				position.index = end
				position.clear_error()
				if position.symbol_index >= 0: ctx.values[INDEX] = position.symbol_index
				return ctx.resolve()
			position.record_error(~end, ctx.error_message)
		return None

	def parse_list(self, text:str, skip_whitespace=True) -> list:
		"""
		Read symbols one after another until the text runs out. Where a symbol fails to parse,
		whitespace may be skipped before trying again. If this formatter does not read the
		index field, symbols are numbered in the order they appear.
		"""
		position = ParsePosition()
		if INDEX not in self.fields: position.symbol_index = 0
		symbols = []
		while position.index < len(text):
			start = position.index
			symbol = self.parse_partial(text, position)
			if symbol is None:
				if skip_whitespace:
					after = skip_spaces(text, start)
					if after > start:
						position.index = after
						position.clear_error()
						continue
				raise SymbolParseError(text, position.error_index, position.messages)
			if position.index == start:
				raise SymbolParseError(text, start, ["Formatter read an empty symbol at position %d" % start])
			symbols.append(symbol)
			if position.symbol_index >= 0: position.symbol_index += 1
		return symbols

	def with_alternative(self, other:"SymbolFormatter") -> "SymbolFormatter":
		vocabulary = self.vocabulary if self.vocabulary is not None else other.vocabulary
		return SymbolFormatter(self.chains + other.chains, self.fields | other.fields, vocabulary)

	def with_vocabulary(self, vocabulary:Vocabulary) -> "SymbolFormatter":
		if vocabulary == self.vocabulary: return self
		return SymbolFormatter(self.chains, self.fields, vocabulary)

	def __str__(self): return '|'.join(chain.pattern() for chain in self.chains)

	def __repr__(self): return 'SymbolFormatter(%r)'%str(self)

	@classmethod
	def of_pattern(cls, pattern:str) -> "SymbolFormatter":
		""" Alternatives are separated by `|`, which may be quoted or escaped to mean itself. """
		from tokenform.builder import FormatterBuilder, split_alternatives
		formatter = None
		for alternative in split_alternatives(pattern):
			chain = FormatterBuilder().append_pattern(alternative).to_formatter()
			formatter = chain if formatter is None else formatter.with_alternative(chain)
		return formatter

	@classmethod
	def from_fields(cls, fields:Iterable[Field]) -> "SymbolFormatter":
		""" One `name: value` line per field, in the canonical field order. """
		from tokenform.builder import FormatterBuilder
		from tokenform.textoption import ESCAPED
		fields = frozenset(fields)
		builder = FormatterBuilder()
		first = True
		for field in ALL_FIELDS:
			if field not in fields: continue
			if not first: builder.append_literal('\n')
			first = False
			builder.append_literal(field.name + ': ')
			if field == TEXT: builder.append_text(ESCAPED.with_default_value(''))
			else: builder.append_integer(field)
		return builder.to_formatter()
