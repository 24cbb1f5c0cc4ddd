"""
The printer-parser components which make up a formatter.

Every component can do two jobs: `format` renders part of a record into an output buffer
(a list of strings), and `parse` reads part of a record back out of some text, binding field
values into a ParseContext. Both directions come from the same object, which is what keeps
a notation honest: whatever a formatter writes, it can read.

A `parse` takes the text, the cursor, and `following`: a tuple of component sequences,
innermost nesting level first, listing what comes after this component at each level.
Most components ignore it. Free text needs it, because free text has no terminator of
its own and must stop wherever the next thing would match. Passing it down explicitly
means no component has to know its parent.

`peek` is parse without consequences: it reports where a parse would end, or where it
would fail, without disturbing the context it is given.

`pattern` spells a component in the pattern language. Where the pattern language has a
spelling, compiling the result gives back an equivalent component. Where it has none, the
result is a description in angle brackets, such as `<text>`. Literal angle brackets are
always escaped, so an unescaped `<` marks a pattern which will not read back the same.
"""

from enum import Enum
from typing import Sequence

from tokenform.interfaces import EOF, EOF_NAME, EOF_TEXT, MIN_INT, MAX_INT, DefinitionError
from tokenform.symbol import Field, TYPE, TEXT, INTEGER_FIELDS
from tokenform.textoption import TextOption, ESCAPED, NOTHING
from tokenform.context import FormatContext, ParseContext, lookahead

# Characters with special meaning in a pattern, and the letters which stand for components.
PATTERN_SPECIAL = frozenset("[]'\\|<")
PATTERN_LETTERS = frozenset('SsLlXx' + ''.join(f.strict_letter + f.lenient_letter for f in INTEGER_FIELDS))

def printable(text:str) -> str:
	return text.replace('\n', '\\n').replace('\t', '\\t').replace('\r', '\\r')

def pattern_literal(text:str) -> str:
	""" Spell out literal text so the pattern compiler will read it back as the same literal. """
	return ''.join('\\'+c if c in PATTERN_SPECIAL or c in PATTERN_LETTERS or c.isspace() else c for c in text)

def successors(following):
	"""
	Yield each component which might come next, along with what follows it in turn.
	At each level, every optional component is a candidate, up to and including the
	first one which isn't optional. Running off the end of a level reaches into the next.
	"""
	for depth, level in enumerate(following):
		for i, component in enumerate(level):
			yield component, (level[i+1:],) + following[depth+1:]
			if not component.optional: return


class Component:
	optional = False

	def format(self, ctx:FormatContext, out:list) -> bool:
		raise NotImplementedError(type(self))

	def parse(self, ctx:ParseContext, text:str, position:int, following=()) -> int:
		raise NotImplementedError(type(self))

	def peek(self, ctx:ParseContext, text:str, position:int, following=()) -> int:
		return self.parse(ctx.copy(), text, position, following)

	def pattern(self) -> str:
		raise NotImplementedError(type(self))

	def __repr__(self): return '<%s %s>'%(type(self).__name__, self.pattern())


class Literal(Component):
	def __init__(self, text:str):
		self.text = text

	def format(self, ctx, out):
		out.append(self.text)
		return True

	def parse(self, ctx, text, position, following=()):
		if text.startswith(self.text, position): return position + len(self.text)
		found = lookahead(text, position, len(self.text))
		return ctx.fail(position, "Expected literal '%s' but found '%s'" % (printable(self.text), printable(found)))

	def pattern(self): return pattern_literal(self.text)


class Integer(Component):
	""" Decimal rendering of an integer field. In strict mode, the field's default value does not render. """
	def __init__(self, field:Field, strict=False):
		self.field = field
		self.strict = strict

	def format(self, ctx, out):
		value = self.field.access(ctx.symbol)
		if self.strict and value == self.field.default: return False
		out.append(str(value))
		return True

	def parse(self, ctx, text, position, following=()):
		end = position
		if end < len(text) and text[end] == '-': end += 1
		first_digit = end
		while end < len(text) and '0' <= text[end] <= '9': end += 1
		if end == first_digit:
			return ctx.fail(position, "Expected an integer for field '%s' but found '%s'" % (self.field, lookahead(text, position, 3)))
		value = int(text[position:end])
		if not MIN_INT <= value <= MAX_INT:
			return ctx.fail(position, "The value %s is out of range for field '%s'" % (text[position:end], self.field))
		if not ctx.bind(self.field, value): return ~position
		return end

	def pattern(self): return self.field.strict_letter if self.strict else self.field.lenient_letter


class Text(Component):
	"""
	The free text of a symbol. Parsing captures as little as it can: the capture ends at the
	first place where some successor would match (consuming at least one character), or at
	the end of input. An escape sequence counts as a single unit, so escaped delimiters
	don't end the capture early.
	"""
	def __init__(self, option:TextOption=NOTHING):
		self.option = option

	def format(self, ctx, out):
		text = ctx.symbol.text
		if not text:
			if self.option.fail_on_default: return False
			out.append(self.option.default_value)
		else:
			out.append(self.option.escape(text))
		return True

	def scan(self, ctx, text, position, following=()) -> int:
		""" Find where the capture ends, or ~index of a bad escape sequence. """
		nexts = list(successors(following))
		esc, codes = self.option.escape_char, self.option.unescape_map
		i = position
		while i < len(text):
			for component, after in nexts:
				end = component.peek(ctx, text, i, after)
				if end >= 0 and end != i: return i
			if esc is not None and text[i] == esc:
				if i + 1 >= len(text) or text[i+1] not in codes: return ~i
				i += 2
			else:
				i += 1
		return i

	def peek(self, ctx, text, position, following=()):
		return self.scan(ctx, text, position, following)

	def parse(self, ctx, text, position, following=()):
		end = self.scan(ctx, text, position, following)
		if end < 0:
			ctx.error_message = "Invalid escape sequence found near '%s'" % lookahead(text, ~end, 10)
			return end
		value = self.option.unescape(text[position:end])
		if value == self.option.default_value: value = ''
		if not ctx.bind(TEXT, value): return ~position
		return end

	def pattern(self):
		if self.option == NOTHING: return 'x'
		if self.option == ESCAPED: return 'X'
		return '<text>'


def _longest_name(vocabulary, kinds, lookup, text, position):
	""" Return (kind, length) of the longest name which appears at `position`, or (None, 0). """
	best_kind, best_length = None, 0
	for kind in kinds:
		name = lookup(kind)
		if name and len(name) > best_length and text.startswith(name, position):
			best_kind, best_length = kind, len(name)
	return best_kind, best_length

class SymbolicType(Component):
	""" A symbol's kind, by symbolic name. """
	def format(self, ctx, out):
		if ctx.vocabulary is None: return False
		name = ctx.vocabulary.symbolic_name(ctx.symbol.type)
		if not name: return False
		out.append(name)
		return True

	def parse(self, ctx, text, position, following=()):
		vocabulary = ctx.vocabulary
		if vocabulary is None: return ctx.fail(position, "No vocabulary set")
		kinds = range(EOF, vocabulary.max_kind()+1)
		kind, length = _longest_name(vocabulary, kinds, vocabulary.symbolic_name, text, position)
		if kind is None:
			return ctx.fail(position, "Unrecognized symbolic type name starting with '%s'" % lookahead(text, position, 5))
		if not ctx.bind(TYPE, kind): return ~position
		return position + length

	def pattern(self): return 's'

class LiteralType(Component):
	""" A symbol's kind, by literal name. Reading a literal name also tells you the text. """
	def format(self, ctx, out):
		if ctx.vocabulary is None: return False
		name = ctx.vocabulary.literal_name(ctx.symbol.type)
		if not name: return False
		out.append(name)
		return True

	def parse(self, ctx, text, position, following=()):
		vocabulary = ctx.vocabulary
		if vocabulary is None: return ctx.fail(position, "No vocabulary set")
		kinds = range(0, vocabulary.max_kind()+1)
		kind, length = _longest_name(vocabulary, kinds, vocabulary.literal_name, text, position)
		if kind is None:
			return ctx.fail(position, "Unrecognized literal type name starting with '%s'" % lookahead(text, position, 5))
		if not ctx.bind(TYPE, kind): return ~position
		if not ctx.bind(TEXT, unquote(vocabulary.literal_name(kind))): return ~position
		return position + length

	def pattern(self): return 'l'

def unquote(name:str) -> str:
	if len(name) >= 2 and name[0] == name[-1] == "'": return name[1:-1]
	return name


class TypeFormat(Enum):
	INTEGER_ONLY = 'I'
	SYMBOLIC_ONLY = 's'
	LITERAL_ONLY = 'l'
	SYMBOLIC_FIRST = 'S'
	LITERAL_FIRST = 'L'

class TypeAlternatives(Component):
	""" A symbol's kind, in whichever way works first: symbolic name, literal name, or plain number. """
	def __init__(self, type_format:TypeFormat):
		self.type_format = type_format
		if type_format is TypeFormat.SYMBOLIC_FIRST: self.alternatives = (SymbolicType(), LiteralType(), Integer(TYPE))
		elif type_format is TypeFormat.LITERAL_FIRST: self.alternatives = (LiteralType(), SymbolicType(), Integer(TYPE))
		elif type_format is TypeFormat.SYMBOLIC_ONLY: self.alternatives = (SymbolicType(),)
		elif type_format is TypeFormat.LITERAL_ONLY: self.alternatives = (LiteralType(),)
		else: self.alternatives = (Integer(TYPE),)

	def format(self, ctx, out):
		return any(alternative.format(ctx, out) for alternative in self.alternatives)

	def parse(self, ctx, text, position, following=()):
		for alternative in self.alternatives:
			if alternative.peek(ctx, text, position, following) >= 0:
				return alternative.parse(ctx, text, position, following)
		return ctx.fail(position, "Unrecognized type information starting with '%s'" % lookahead(text, position, 5))

	def pattern(self): return self.type_format.value


class EndOfFile(Component):
	""" The end-of-stream symbol, which always looks the same. """
	def format(self, ctx, out):
		if ctx.symbol.type != EOF: return False
		out.append(EOF_NAME)
		return True

	def parse(self, ctx, text, position, following=()):
		if not text.startswith(EOF_NAME, position):
			return ctx.fail(position, "Expected '%s' but found '%s'" % (EOF_NAME, lookahead(text, position, len(EOF_NAME))))
		if not (ctx.bind(TYPE, EOF) and ctx.bind(TEXT, EOF_TEXT)): return ~position
		return position + len(EOF_NAME)

	def pattern(self): return '<eof>'


class Whitespace(Component):
	""" Writes the preferred whitespace; reads any amount of whitespace at all, even none. """
	def __init__(self, preferred:str=''):
		if not all(c.isspace() for c in preferred):
			raise DefinitionError("Preferred whitespace %r contains something other than whitespace" % preferred)
		self.preferred = preferred

	def format(self, ctx, out):
		out.append(self.preferred)
		return True

	def parse(self, ctx, text, position, following=()):
		while position < len(text) and text[position].isspace(): position += 1
		return position

	def pattern(self): return self.preferred or '<whitespace>'


class Composite(Component):
	"""
	A sequence of components. An optional composite renders nothing when any part fails to
	render, and reads nothing unless the whole sequence would read successfully: it peeks
	first, so a failed attempt leaves the context untouched.
	"""
	def __init__(self, children:Sequence[Component], optional=False):
		self.children = tuple(children)
		self.optional = optional

	def format(self, ctx, out):
		mark = len(out)
		for child in self.children:
			if not child.format(ctx, out):
				del out[mark:]
				return self.optional
		return True

	def _parse_children(self, ctx, text, position, following):
		for i, child in enumerate(self.children):
			position = child.parse(ctx, text, position, (self.children[i+1:],) + following)
			if position < 0: break
		return position

	def parse(self, ctx, text, position, following=()):
		if self.optional and self._parse_children(ctx.copy(), text, position, following) < 0:
			return position
		return self._parse_children(ctx, text, position, following)

	def pattern(self):
		inside = ''.join(child.pattern() for child in self.children)
		return '['+inside+']' if self.optional else inside
