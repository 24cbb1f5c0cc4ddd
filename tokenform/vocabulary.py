"""
A concrete Vocabulary backed by a pair of lists, and a reader for the `.tokens` files
which lexer generators emit alongside their lexers.

A `.tokens` file has one definition per line, either `NAME=kind` or `'literal'=kind`.
The same kind may appear on two lines, once with each flavor of name.
"""

import re
from typing import Optional, Sequence

from tokenform.interfaces import Vocabulary, DefinitionError, EOF, EOF_NAME
from tokenform.support.failureprone import SourceText

# Placeholder the ANTLR runtime puts where a kind has no name.
UNNAMED = '<INVALID>'

TOKENS_LINE = re.compile(r"(.+)=(-?\d+)\s*$")

def _lookup(names:Sequence, kind:int) -> Optional[str]:
	if 0 <= kind < len(names):
		name = names[kind]
		if name and name != UNNAMED: return name
	return None

class ListVocabulary(Vocabulary):
	"""
	Position `k` of each list holds the corresponding name of kind `k`, or None.
	Two ListVocabulary objects are equal when they hold the same names.
	"""
	def __init__(self, literal_names:Sequence[Optional[str]]=(), symbolic_names:Sequence[Optional[str]]=()):
		self.literal_names = tuple(literal_names)
		self.symbolic_names = tuple(symbolic_names)

	def max_kind(self) -> int: return max(len(self.literal_names), len(self.symbolic_names)) - 1

	def symbolic_name(self, kind:int) -> Optional[str]:
		if kind == EOF: return EOF_NAME
		return _lookup(self.symbolic_names, kind)

	def literal_name(self, kind:int) -> Optional[str]: return _lookup(self.literal_names, kind)

	def __eq__(self, other):
		if not isinstance(other, ListVocabulary): return NotImplemented
		return self.literal_names == other.literal_names and self.symbolic_names == other.symbolic_names

	def __hash__(self): return hash((self.literal_names, self.symbolic_names))

	def __repr__(self): return 'ListVocabulary(%r, %r)'%(self.literal_names, self.symbolic_names)

	@classmethod
	def from_names(cls, symbolic:dict=None, literal:dict=None) -> "ListVocabulary":
		""" Build from dictionaries mapping kind to name. """
		symbolic, literal = symbolic or {}, literal or {}
		size = max(list(symbolic) + list(literal) + [-1]) + 1
		return cls([literal.get(k) for k in range(size)], [symbolic.get(k) for k in range(size)])

	@classmethod
	def from_recognizer(cls, recognizer) -> "ListVocabulary":
		""" Works with anything carrying `literalNames` and `symbolicNames` lists, as generated ANTLR lexers and parsers do. """
		return cls(getattr(recognizer, 'literalNames', ()), getattr(recognizer, 'symbolicNames', ()))

def parse_tokens(content:str, filename=None) -> ListVocabulary:
	symbolic, literal = {}, {}
	source = SourceText(content, filename=filename)
	offset = 0
	for line in content.splitlines(keepends=True):
		definition = line.strip()
		if definition:
			match = TOKENS_LINE.match(definition)
			if not match:
				left = offset + line.index(definition)
				raise DefinitionError(source.complaint(slice(left, left+len(definition)), "Malformed token definition"))
			name, kind = match.group(1), int(match.group(2))
			if name.startswith("'"): literal[kind] = name
			else: symbolic[kind] = name
		offset += len(line)
	return ListVocabulary.from_names(symbolic, literal)

def read_tokens_file(path) -> ListVocabulary:
	with open(path, encoding='utf-8') as fh: content = fh.read()
	return parse_tokens(content, filename=path)
