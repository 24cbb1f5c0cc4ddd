"""
Components for tree nodes.

These follow the same protocol as the symbol components, and a node chain freely mixes
them with Literal, Whitespace, and Composite. The context they see is different, though.
Formatting gets a NodeFormatContext carrying the node and the TreeFormatter in charge.
Parsing gets a NodeParseContext which, besides bindings, collects child nodes and shares
an error sink with the whole tree parse, so the deepest failure anywhere in the tree is
the one reported.
"""

import re
from typing import NamedTuple, Optional

from tokenform.interfaces import EOF
from tokenform.symbol import Symbol
from tokenform.components import Component, Composite, Whitespace, printable
from tokenform.context import ParsePosition, lookahead
from tokenform.tree.nodes import Rule, Terminal, ErrorNode, Pattern, SymbolTag, RuleTag

RULE = 'rule'
SYMBOL = 'symbol'

class NodeFormatContext(NamedTuple):
	node: object
	formatter: object


class RuleName(Component):
	""" The rule, by name, with the longest matching name winning on parse. """
	def format(self, ctx, out):
		node, names = ctx.node, ctx.formatter.rule_names
		if not isinstance(node, (Rule, Pattern)) or not 0 <= node.index < len(names) or not names[node.index]: return False
		out.append(names[node.index])
		return True

	def parse(self, ctx, text, position, following=()):
		best, length = None, 0
		for index, name in enumerate(ctx.formatter.rule_names):
			if name and len(name) > length and text.startswith(name, position): best, length = index, len(name)
		if best is None: return ctx.fail(position, "Unrecognized rule name starting with '%s'" % lookahead(text, position, 5))
		if not ctx.bind(RULE, best): return ~position
		return position + length

	def pattern(self): return '<rule name>'

class RuleIndex(Component):
	def format(self, ctx, out):
		if not isinstance(ctx.node, (Rule, Pattern)): return False
		out.append(str(ctx.node.index))
		return True

	def parse(self, ctx, text, position, following=()):
		end = position
		while end < len(text) and '0' <= text[end] <= '9': end += 1
		if end == position: return ctx.fail(position, "Expected a rule index but found '%s'" % lookahead(text, position, 3))
		if not ctx.bind(RULE, int(text[position:end])): return ~position
		return end

	def pattern(self): return '<rule index>'

class RuleAlternatives(Component):
	""" Rule name where there is one, otherwise rule index. """
	def __init__(self):
		self.alternatives = (RuleName(), RuleIndex())

	def format(self, ctx, out):
		return any(alternative.format(ctx, out) for alternative in self.alternatives)

	def parse(self, ctx, text, position, following=()):
		for alternative in self.alternatives:
			if alternative.peek(ctx, text, position, following) >= 0:
				return alternative.parse(ctx, text, position, following)
		return ctx.fail(position, "Unrecognized rule starting with '%s'" % lookahead(text, position, 5))

	def pattern(self): return '<rule>'


class Children(Component):
	"""
	The children of a rule, each rendered by the whole tree formatter, with a separator between.
	On parse, a separator only counts if another child follows it, and a child which reads
	nothing at all doesn't count. Free text in a child stops at the separator or at whatever
	follows the children.
	"""
	def __init__(self, separator:Component):
		self.separator = separator
		self._between = (Composite((separator,), optional=True),)

	def format(self, ctx, out):
		if not isinstance(ctx.node, Rule): return False
		for i, child in enumerate(ctx.node.children):
			if i and not self.separator.format(ctx, out): return False
			text = ctx.formatter.try_format(child)
			if text is None: return False
			out.append(text)
		return True

	def parse(self, ctx, text, position, following=()):
		formatter, inner = ctx.formatter, (self._between,) + following
		node, end = formatter.parse_node(text, position, ctx.sink, inner)
		if node is None or end == position: return position
		ctx.children.append(node)
		position = end
		while True:
			after = self.separator.parse(ctx.copy(), text, position, ())
			if after < 0: break
			node, end = formatter.parse_node(text, after, ctx.sink, inner)
			if node is None or end == position or end == after: break
			ctx.children.append(node)
			position = end
		return position

	def pattern(self): return '<children %s>' % printable(self.separator.pattern())


def read_symbol(ctx, text, position, following):
	""" Read a symbol with the tree formatter's symbol formatter. Answers the symbol and where it ends, or None and ~where it failed. """
	attempt = ParsePosition(position)
	symbol = ctx.formatter.symbol_formatter.parse_partial(text, attempt, following)
	if symbol is None:
		messages = attempt.messages
		for message in messages[1:]: ctx.sink.record_error(attempt.error_index, message)
		return None, ctx.fail(attempt.error_index, messages[0])
	return symbol, attempt.index

class NodeSymbol(Component):
	""" The symbol of a terminal or error node, by way of the tree formatter's symbol formatter. """
	def format(self, ctx, out):
		if not isinstance(ctx.node, (Terminal, ErrorNode)): return False
		text = ctx.formatter.symbol_formatter.try_format(ctx.node.symbol)
		if text is None: return False
		out.append(text)
		return True

	def parse(self, ctx, text, position, following=()):
		symbol, end = read_symbol(ctx, text, position, following)
		if symbol is None: return end
		if not ctx.bind(SYMBOL, symbol): return ~position
		return end

	def pattern(self): return '<symbol>'


TAG = re.compile(r'<(?:([A-Za-z_]\w*):)?([^<>:\s]+)>')
NUMBERED = re.compile(r'(-?[0-9]+)(/?)')

def format_tag(formatter, tag) -> str:
	"""
	A symbol tag shows the symbolic name of its kind, or the kind and a slash if it has none.
	A rule tag shows the rule name, or the bare rule index. A label goes in front, with a colon.
	"""
	if isinstance(tag, SymbolTag):
		vocabulary = formatter.symbol_formatter.vocabulary
		name = vocabulary.symbolic_name(tag.kind) if vocabulary is not None else None
		name = name or '%d/' % tag.kind
	else:
		names = formatter.rule_names
		name = names[tag.index] if 0 <= tag.index < len(names) and names[tag.index] else str(tag.index)
	label = tag.label + ':' if tag.label else ''
	return '<%s%s>' % (label, name)

def read_tag(formatter, text:str, position:int):
	""" Answers (tag, end) on success, or (None, message). Symbolic names win over rule names. """
	match = TAG.match(text, position)
	if match is None: return None, "Expected a tag but found '%s'" % lookahead(text, position, 5)
	label, name = match.group(1) or '', match.group(2)
	numbered = NUMBERED.fullmatch(name)
	if numbered:
		if numbered.group(2): return SymbolTag(int(numbered.group(1)), label), match.end()
		return RuleTag(int(numbered.group(1)), label), match.end()
	vocabulary = formatter.symbol_formatter.vocabulary
	if vocabulary is not None:
		for kind in range(EOF, vocabulary.max_kind()+1):
			if vocabulary.symbolic_name(kind) == name: return SymbolTag(kind, label), match.end()
	if name in formatter.rule_names: return RuleTag(formatter.rule_names.index(name), label), match.end()
	return None, "Unknown name '%s' in tag" % name

def format_element(formatter, element) -> Optional[str]:
	if isinstance(element, (SymbolTag, RuleTag)): return format_tag(formatter, element)
	if isinstance(element, Symbol): return formatter.symbol_formatter.try_format(element)
	return None

class PatternElements(Component):
	"""
	The elements of a pattern, one space between each. Symbols go through the tree formatter's
	symbol formatter, and tags look like `<ID>`, `<label:expr>`, `<7/>` (a symbol kind), or `<7>`
	(a rule index). On parse, any whitespace may separate elements. A tag is tried before a
	symbol, and the elements end at the first thing which is neither.
	"""
	def __init__(self):
		self._between = (Composite((Whitespace(' '),), optional=True),)

	def format(self, ctx, out):
		if not isinstance(ctx.node, Pattern): return False
		for i, element in enumerate(ctx.node.elements):
			text = format_element(ctx.formatter, element)
			if text is None: return False
			if i: out.append(' ')
			out.append(text)
		return True

	def _read_element(self, ctx, text, position, following):
		tag, result = read_tag(ctx.formatter, text, position)
		if tag is not None: return tag, result
		if text.startswith('<', position): ctx.sink.record_error(position, result)
		symbol, end = read_symbol(ctx, text, position, (self._between,) + following)
		if symbol is None:
			ctx.sink.record_error(~end, ctx.error_message)
			ctx.error_message = None
			return None, position
		return symbol, end

	def parse(self, ctx, text, position, following=()):
		elements = ctx.children
		while True:
			start = position
			if elements:
				while start < len(text) and text[start].isspace(): start += 1
			element, end = self._read_element(ctx, text, start, following)
			if element is None or end == start: return position
			elements.append(element)
			position = end

	def pattern(self): return '<pattern>'
