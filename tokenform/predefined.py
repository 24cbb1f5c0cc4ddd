"""
Ready-made notations.

ANTLR copies the shape of the ANTLR runtime's own token description, which is what you see
in a debugger: `[@0,0:2='foo',<ID>,1:0]`, with `,channel=N` after the kind when the channel
is not the default.

SIMPLE is the compact notation meant for writing expectations by hand. The end of input
is just `EOF`. A token with a literal name is just that name, like `'='`. Anything else is
`(NAME 'text')`. A channel other than the default follows the kind after a colon, as in
`'=':1` or `(WS:1 ' ')`. Within the quotes, a backslash escapes a quote, a backslash, or
one of the usual control characters.

JSON writes one object per symbol, with every field.

SIMPLE_TREE writes a parse tree as nested lists: `(rule child child ...)`, with terminals
in SIMPLE notation, error nodes as `(<error> symbol)`, and patterns as
`(<rule> (element element ...))`.

ANTLR_TREE copies what the ANTLR runtime prints for a tree: `(expr (atom 42) + (atom 1))`,
with every symbol, terminal or error, as its bare escaped text. Error nodes therefore read
back as terminals. It tries rules before terminals, since a bare terminal reads anything.
"""

from tokenform.symbol import TYPE, INDEX, START, STOP, CHANNEL, LINE, POSITION
from tokenform.textoption import TextOption, ESCAPED
from tokenform.components import TypeFormat
from tokenform.builder import FormatterBuilder
from tokenform.tree.builder import TreeFormatterBuilder

ANTLR = (
	FormatterBuilder()
	.append_literal('[@').append_integer(INDEX)
	.append_literal(',').append_integer(START)
	.append_literal(':').append_integer(STOP)
	.append_literal("='").append_text(ESCAPED)
	.append_literal("',<").append_type(TypeFormat.LITERAL_FIRST).append_literal('>')
	.start_optional().append_literal(',channel=').append_integer(CHANNEL, strict=True).end_optional()
	.append_literal(',').append_integer(LINE)
	.append_literal(':').append_integer(POSITION)
	.append_literal(']')
	.to_formatter()
)

QUOTED_TEXT = TextOption(
	escape_char='\\',
	default_value='',
	escape_map={'\n': 'n', '\r': 'r', '\t': 't', '\\': '\\', "'": "'"},
	fail_on_default=False,
)

EOF = FormatterBuilder().append_eof().to_formatter()

LITERAL = FormatterBuilder().append_pattern('l[:c]').to_formatter()

SYMBOLIC = (
	FormatterBuilder()
	.append_literal('(').append_whitespace()
	.append_type(TypeFormat.SYMBOLIC_FIRST)
	.start_optional().append_literal(':').append_integer(CHANNEL, strict=True).end_optional()
	.append_whitespace(' ')
	.append_literal("'").append_text(QUOTED_TEXT).append_literal("'")
	.append_whitespace().append_literal(')')
	.to_formatter()
)

SIMPLE = EOF.with_alternative(LITERAL).with_alternative(SYMBOLIC)

def _json():
	builder = FormatterBuilder().append_literal('{')
	members = [('index', INDEX), ('type', TYPE), ('text', None), ('channel', CHANNEL), ('start', START), ('stop', STOP), ('line', LINE), ('position', POSITION)]
	for i, (name, field) in enumerate(members):
		if i: builder.append_literal(',').append_whitespace(' ')
		builder.append_literal('"%s":'%name).append_whitespace(' ')
		if field is None: builder.append_literal('"').append_text(ESCAPED.with_default_value('')).append_literal('"')
		else: builder.append_integer(field)
	return builder.append_literal('}').to_formatter()

JSON = _json()

SIMPLE_TREE = (
	TreeFormatterBuilder()
	.on_terminal(lambda node: node.append_symbol())
	.on_error(lambda node: node
		.append_literal('(').append_whitespace()
		.append_literal('<error>').append_whitespace(' ')
		.append_symbol()
		.append_whitespace().append_literal(')'))
	.on_rule(lambda node: node
		.append_literal('(').append_whitespace()
		.append_rule().append_whitespace(' ')
		.append_children(' ')
		.append_whitespace().append_literal(')'))
	.on_pattern(lambda node: node
		.append_literal('(').append_whitespace()
		.append_literal('<').append_rule().append_literal('>').append_whitespace(' ')
		.append_literal('(').append_pattern().append_literal(')')
		.append_whitespace().append_literal(')'))
	.to_formatter(SIMPLE)
)

ANTLR_TREE = (
	TreeFormatterBuilder()
	.on_rule(lambda node: node
		.append_literal('(').append_rule().append_whitespace(' ')
		.append_children(' ').append_literal(')'))
	.on_terminal(lambda node: node.append_symbol())
	.on_error(lambda node: node.append_symbol())
	.to_formatter(FormatterBuilder().append_text(ESCAPED).to_formatter(), rules_first=True)
)
