"""
The nodes of a parse tree, as far as notation is concerned.

A Rule is an invocation of a grammar rule, identified by its index, with children in order.
A Terminal carries the symbol a parser consumed; an ErrorNode carries a symbol the parser
had to skip while recovering from an error. Equality is structural, and a Terminal never
equals an ErrorNode even when they carry the same symbol.

A Pattern stands in for a whole rule when the exact subtree doesn't matter, only the shape
of what it matched. Its elements are a flat sequence of symbols, SymbolTags (any symbol of
one kind), and RuleTags (any subtree of one rule). Tags may carry a label.
"""

from dataclasses import dataclass

from tokenform.symbol import Symbol

@dataclass(frozen=True)
class Rule:
	index: int
	children: tuple = ()

	@classmethod
	def of(cls, index:int, *children) -> "Rule": return cls(index, tuple(children))

@dataclass(frozen=True)
class Terminal:
	symbol: Symbol

@dataclass(frozen=True)
class ErrorNode:
	symbol: Symbol

@dataclass(frozen=True)
class SymbolTag:
	kind: int
	label: str = ''

@dataclass(frozen=True)
class RuleTag:
	index: int
	label: str = ''

@dataclass(frozen=True)
class Pattern:
	index: int
	elements: tuple = ()

	@classmethod
	def of(cls, index:int, *elements) -> "Pattern": return cls(index, tuple(elements))
