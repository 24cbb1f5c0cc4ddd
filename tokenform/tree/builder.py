"""
Building tree formatters.

Each kind of node gets its own list of alternative chains. You supply a function which
receives a fresh NodeFormatBuilder and appends components to it; the chain it builds
joins the alternatives for that kind of node, in the order given. Patterns are a kind of
node too, with `append_pattern` for their elements.
"""

from typing import Callable, Sequence

from tokenform.builder import ChainBuilder
from tokenform.components import Literal, Whitespace
from tokenform.formatter import SymbolFormatter
from tokenform.tree.components import RuleName, RuleIndex, RuleAlternatives, Children, NodeSymbol, PatternElements
from tokenform.tree.formatter import TreeFormatter

class NodeFormatBuilder(ChainBuilder):
	def append_rule(self): return self.append_component(RuleAlternatives())
	def append_rule_name(self): return self.append_component(RuleName())
	def append_rule_index(self): return self.append_component(RuleIndex())
	def append_symbol(self): return self.append_component(NodeSymbol())
	def append_pattern(self): return self.append_component(PatternElements())

	def append_children(self, separator:str=' '):
		""" Whitespace separators read any run of whitespace; other separators must appear exactly. """
		if separator.isspace(): component = Whitespace(separator)
		else: component = Literal(separator)
		return self.append_component(Children(component))

	def to_chain(self): return self._finish()

class TreeFormatterBuilder:
	def __init__(self):
		self._rules, self._terminals, self._errors, self._patterns = [], [], [], []

	def _add(self, chains:list, configure:Callable[[NodeFormatBuilder], object]):
		builder = NodeFormatBuilder()
		configure(builder)
		chains.append(builder.to_chain())
		return self

	def on_rule(self, configure): return self._add(self._rules, configure)
	def on_terminal(self, configure): return self._add(self._terminals, configure)
	def on_error(self, configure): return self._add(self._errors, configure)
	def on_pattern(self, configure): return self._add(self._patterns, configure)

	def to_formatter(self, symbol_formatter:SymbolFormatter, rule_names:Sequence[str]=(), rules_first=False) -> TreeFormatter:
		return TreeFormatter(self._rules, self._terminals, self._errors, symbol_formatter, rule_names, self._patterns, rules_first)
