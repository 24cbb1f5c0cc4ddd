"""
A TreeFormatter renders and reads parse trees.

It keeps separate lists of alternative chains for rules, patterns, terminals, and error
nodes. Formatting picks the list by node type and tries the chains in order. Parsing can't
know the node type in advance, so at each node it tries terminal chains, then error chains,
then pattern chains, then rule chains, and takes the first which works. A formatter built
with `rules_first` tries pattern and rule chains before the others instead, which suits
notations where a terminal is bare text and would otherwise read anything at all. Symbols
inside the tree go through an ordinary SymbolFormatter.
"""

from typing import Optional, Sequence

from tokenform.interfaces import Vocabulary, TreeFormatError, TreeParseError
from tokenform.symbol import Symbol, describe
from tokenform.context import ParseContext, ParsePosition
from tokenform.formatter import SymbolFormatter
from tokenform.vocabulary import ListVocabulary
from tokenform.tree.nodes import Rule, Terminal, ErrorNode, Pattern
from tokenform.tree.components import NodeFormatContext, RULE, SYMBOL

class NodeParseContext(ParseContext):
	def __init__(self, formatter:"TreeFormatter", sink:ParsePosition):
		super().__init__(formatter.symbol_formatter.vocabulary)
		self.formatter = formatter
		self.sink = sink
		self.children = []

	def copy(self):
		twin = super().copy()
		twin.children = list(self.children)
		return twin

	def build(self, kind):
		if kind is Rule: return Rule(self.values.get(RULE, -1), tuple(self.children))
		if kind is Pattern: return Pattern(self.values.get(RULE, -1), tuple(self.children))
		return kind(self.values.get(SYMBOL, Symbol()))

def describe_node(node) -> str:
	if isinstance(node, Rule): return "rule %d with %d children" % (node.index, len(node.children))
	if isinstance(node, Terminal): return "terminal %s" % describe(node.symbol)
	if isinstance(node, ErrorNode): return "error node %s" % describe(node.symbol)
	if isinstance(node, Pattern): return "pattern %d with %d elements" % (node.index, len(node.elements))
	return repr(node)

class TreeFormatter:
	def __init__(self, rule_chains:Sequence, terminal_chains:Sequence, error_chains:Sequence, symbol_formatter:SymbolFormatter, rule_names:Sequence[str]=(), pattern_chains:Sequence=(), rules_first=False):
		self.rule_chains = tuple(rule_chains)
		self.terminal_chains = tuple(terminal_chains)
		self.error_chains = tuple(error_chains)
		self.symbol_formatter = symbol_formatter
		self.rule_names = tuple(rule_names)
		self.pattern_chains = tuple(pattern_chains)
		self.rules_first = rules_first

	def _chains_for(self, node):
		if isinstance(node, Rule): return self.rule_chains
		if isinstance(node, Terminal): return self.terminal_chains
		if isinstance(node, ErrorNode): return self.error_chains
		if isinstance(node, Pattern): return self.pattern_chains
		return ()

	def try_format(self, node) -> Optional[str]:
		ctx = NodeFormatContext(node, self)
		for chain in self._chains_for(node):
			out = []
			if chain.format(ctx, out): return ''.join(out)
		return None

	def format(self, node) -> str:
		text = self.try_format(node)
		if text is None: raise TreeFormatError(node, "Failed to format %s" % describe_node(node))
		return text

	def _kinds(self):
		leaves = ((Terminal, self.terminal_chains), (ErrorNode, self.error_chains))
		branches = ((Pattern, self.pattern_chains), (Rule, self.rule_chains))
		return branches + leaves if self.rules_first else leaves + branches

	def parse_node(self, text:str, index:int, sink:ParsePosition, following=()):
		"""
		Read one node at `index`. Answers (node, end) on success.
		On failure, answers (None, index) having recorded the reasons in `sink`.
		"""
		for kind, chains in self._kinds():
			for chain in chains:
				ctx = NodeParseContext(self, sink)
				end = chain.parse(ctx, text, index, following)
				if end >= 0: return ctx.build(kind), end
				sink.record_error(~end, ctx.error_message)
		return None, index

	def parse_partial(self, text:str, position:ParsePosition):
		node, end = self.parse_node(text, position.index, position)
		if node is None: return None
		position.index = end
		position.clear_error()
		return node

	def parse(self, text:str):
		position = ParsePosition()
		node = self.parse_partial(text, position)
		if node is None: raise TreeParseError(text, position.error_index, position.messages)
		index = position.index
		if index != len(text):
			message = "Input '%s>>%s' has trailing unparsed text at position %d" % (text[:index], text[index:], index)
			raise TreeParseError(text, index, [message])
		return node

	def _replace(self, symbol_formatter=None, rule_names=None):
		return TreeFormatter(
			self.rule_chains, self.terminal_chains, self.error_chains,
			self.symbol_formatter if symbol_formatter is None else symbol_formatter,
			self.rule_names if rule_names is None else rule_names,
			self.pattern_chains, self.rules_first,
		)

	def with_symbol_formatter(self, symbol_formatter:SymbolFormatter) -> "TreeFormatter":
		if symbol_formatter is self.symbol_formatter: return self
		return self._replace(symbol_formatter=symbol_formatter)

	def with_vocabulary(self, vocabulary:Vocabulary) -> "TreeFormatter":
		return self.with_symbol_formatter(self.symbol_formatter.with_vocabulary(vocabulary))

	def with_rule_names(self, rule_names:Sequence[str]) -> "TreeFormatter":
		rule_names = tuple(rule_names)
		if rule_names == self.rule_names: return self
		return self._replace(rule_names=rule_names)

	def with_recognizer(self, recognizer) -> "TreeFormatter":
		""" Take rule names and vocabulary from a generated parser: anything with `ruleNames`, `literalNames`, and `symbolicNames`. """
		vocabulary = ListVocabulary.from_recognizer(recognizer)
		return self.with_vocabulary(vocabulary).with_rule_names(getattr(recognizer, 'ruleNames', ()))
