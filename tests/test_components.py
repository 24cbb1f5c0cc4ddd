import unittest
from tokenform.interfaces import EOF, EOF_TEXT, DefinitionError
from tokenform.symbol import Symbol, TYPE, TEXT, INDEX, CHANNEL, LINE as LINE_FIELD
from tokenform.vocabulary import ListVocabulary
from tokenform.textoption import ESCAPED, NOTHING
from tokenform.context import FormatContext, ParseContext
from tokenform.components import (
	Literal, Integer, Text, SymbolicType, LiteralType, TypeFormat, TypeAlternatives,
	EndOfFile, Whitespace, Composite, successors,
)

VOCABULARY = ListVocabulary.from_names(
	symbolic={1: 'ID', 2: 'IDENTIFIER'},
	literal={3: "'='", 4: "'=='"},
)

def render(component, symbol, vocabulary=VOCABULARY):
	out = []
	ok = component.format(FormatContext(symbol, vocabulary), out)
	return ''.join(out) if ok else None

class TestLiteral(unittest.TestCase):
	def test_01_format_and_parse(self):
		lit = Literal('abc')
		self.assertEqual('abc', render(lit, Symbol()))
		ctx = ParseContext()
		self.assertEqual(5, lit.parse(ctx, 'xxabcxx', 2))
		self.assertEqual({}, ctx.values)

	def test_02_mismatch(self):
		ctx = ParseContext()
		self.assertEqual(~1, Literal('abc').parse(ctx, 'xabd', 1))
		self.assertEqual("Expected literal 'abc' but found 'abd'", ctx.error_message)

	def test_03_end_of_text(self):
		ctx = ParseContext()
		self.assertEqual(~3, Literal('\n').parse(ctx, 'abc', 3))
		self.assertEqual("Expected literal '\\n' but found '<text end>'", ctx.error_message)

class TestInteger(unittest.TestCase):
	def test_01_lenient_prints_default(self):
		self.assertEqual('0', render(Integer(CHANNEL), Symbol()))
		self.assertEqual('-1', render(Integer(INDEX), Symbol()))

	def test_02_strict_refuses_default(self):
		self.assertIsNone(render(Integer(CHANNEL, strict=True), Symbol()))
		self.assertEqual('5', render(Integer(CHANNEL, strict=True), Symbol(channel=5)))

	def test_03_parse(self):
		for text, value, end in [('42', 42, 2), ('-7x', -7, 2), ('007', 7, 3)]:
			with self.subTest(text=text):
				ctx = ParseContext()
				self.assertEqual(end, Integer(INDEX).parse(ctx, text, 0))
				self.assertEqual(value, ctx.values[INDEX])

	def test_04_not_a_number(self):
		ctx = ParseContext()
		self.assertEqual(~0, Integer(INDEX).parse(ctx, '-abc', 0))
		self.assertEqual("Expected an integer for field 'index' but found '-ab'", ctx.error_message)

	def test_05_out_of_range(self):
		ctx = ParseContext()
		self.assertEqual(~0, Integer(LINE_FIELD).parse(ctx, '2147483648', 0))
		self.assertEqual("The value 2147483648 is out of range for field 'line'", ctx.error_message)
		self.assertEqual(11, Integer(LINE_FIELD).parse(ParseContext(), '-2147483648', 0))

	def test_06_pattern_letters(self):
		self.assertEqual('c', Integer(CHANNEL, strict=True).pattern())
		self.assertEqual('C', Integer(CHANNEL).pattern())

class TestText(unittest.TestCase):
	def test_01_format_nothing(self):
		self.assertEqual('a\nb', render(Text(NOTHING), Symbol(text='a\nb')))
		self.assertIsNone(render(Text(NOTHING), Symbol()))

	def test_02_format_escaped(self):
		self.assertEqual('hello\\nworld\\t\'\\\\', render(Text(ESCAPED), Symbol(text="hello\nworld\t'\\")))
		self.assertEqual('<no text>', render(Text(ESCAPED), Symbol()))
		self.assertEqual('', render(Text(ESCAPED.with_default_value('')), Symbol()))

	def test_03_scan_without_successors_takes_everything(self):
		text = Text(NOTHING)
		self.assertEqual(18, text.peek(ParseContext(), 'some text to parse', 0))

	def test_04_scan_stops_at_successor(self):
		text = Text(NOTHING)
		following = ((Literal('END'),),)
		self.assertEqual(11, text.peek(ParseContext(), 'hello worldEND', 0, following))
		self.assertEqual(11, text.peek(ParseContext(), 'hello world', 0, following))

	def test_05_escape_is_one_unit(self):
		text = Text(ESCAPED)
		following = ((Literal('"'),),)
		ctx = ParseContext()
		self.assertEqual(8, text.parse(ctx, 'say \\"hi"', 0, following))
		self.assertEqual('say "hi', ctx.values[TEXT])

	def test_06_invalid_escape(self):
		text = Text(ESCAPED)
		self.assertEqual(~5, text.peek(ParseContext(), 'hello\\qworldEND', 0, ((Literal('END'),),)))
		ctx = ParseContext()
		self.assertEqual(~7, text.parse(ctx, 'invalid\\qescape', 0))
		self.assertEqual("Invalid escape sequence found near '\\qescape'", ctx.error_message)
		self.assertEqual(~3, text.parse(ParseContext(), 'abc\\', 0))

	def test_07_default_value_reads_as_empty(self):
		ctx = ParseContext()
		self.assertEqual(9, Text(ESCAPED).parse(ctx, '<no text>', 0))
		self.assertEqual('', ctx.values[TEXT])

	def test_08_empty_capture(self):
		ctx = ParseContext()
		self.assertEqual(1, Text(NOTHING).parse(ctx, "''", 1, ((Literal("'"),),)))
		self.assertEqual('', ctx.values[TEXT])

	def test_09_successor_must_consume(self):
		# Whitespace matches anywhere, but only counts where there is some.
		ctx = ParseContext()
		self.assertEqual(3, Text(NOTHING).parse(ctx, 'abc def', 0, ((Whitespace(' '), Literal('def')),)))
		self.assertEqual('abc', ctx.values[TEXT])

	def test_10_pattern(self):
		self.assertEqual('x', Text().pattern())
		self.assertEqual('X', Text(ESCAPED).pattern())
		self.assertEqual('<text>', Text(ESCAPED.with_default_value('')).pattern())

class TestSuccessors(unittest.TestCase):
	def test_01_up_to_first_required(self):
		b, c = Composite([Literal('b')], optional=True), Literal('c')
		d = Literal('d')
		found = [component for component, after in successors(((b, c, d),))]
		self.assertEqual([b, c], found)

	def test_02_reach_across_levels(self):
		b = Composite([Literal('b')], optional=True)
		c = Literal('c')
		found = list(successors(((), (b,), (c,))))
		self.assertEqual([b, c], [component for component, after in found])
		self.assertEqual(((), (c,)), found[0][1])

class TestTypes(unittest.TestCase):
	def test_01_symbolic_format(self):
		self.assertEqual('IDENTIFIER', render(SymbolicType(), Symbol(type=2)))
		self.assertEqual('EOF', render(SymbolicType(), Symbol(type=EOF)))
		self.assertIsNone(render(SymbolicType(), Symbol(type=3)))
		self.assertIsNone(render(SymbolicType(), Symbol(type=1), None))

	def test_02_longest_symbolic_match(self):
		ctx = ParseContext(VOCABULARY)
		self.assertEqual(10, SymbolicType().parse(ctx, 'IDENTIFIER', 0))
		self.assertEqual(2, ctx.values[TYPE])
		ctx = ParseContext(VOCABULARY)
		self.assertEqual(2, SymbolicType().parse(ctx, 'IDENT', 0))
		self.assertEqual(1, ctx.values[TYPE])

	def test_03_symbolic_failures(self):
		ctx = ParseContext()
		self.assertEqual(~0, SymbolicType().parse(ctx, 'ID', 0))
		self.assertEqual("No vocabulary set", ctx.error_message)
		ctx = ParseContext(VOCABULARY)
		self.assertEqual(~0, SymbolicType().parse(ctx, 'NUMBER', 0))
		self.assertEqual("Unrecognized symbolic type name starting with 'NUMBE'", ctx.error_message)

	def test_04_literal_binds_text(self):
		ctx = ParseContext(VOCABULARY)
		self.assertEqual(4, LiteralType().parse(ctx, "'=='", 0))
		self.assertEqual(4, ctx.values[TYPE])
		self.assertEqual('==', ctx.values[TEXT])
		self.assertEqual("'='", render(LiteralType(), Symbol(type=3)))

	def test_05_alternatives_order(self):
		symbolic_first = TypeAlternatives(TypeFormat.SYMBOLIC_FIRST)
		self.assertEqual('ID', render(symbolic_first, Symbol(type=1)))
		self.assertEqual("'='", render(symbolic_first, Symbol(type=3)))
		self.assertEqual('9', render(symbolic_first, Symbol(type=9)))
		self.assertEqual('9', render(symbolic_first, Symbol(type=9), None))

	def test_06_alternatives_parse(self):
		alternatives = TypeAlternatives(TypeFormat.LITERAL_FIRST)
		for text, kind in [("'='", 3), ('ID', 1), ('17', 17)]:
			with self.subTest(text=text):
				ctx = ParseContext(VOCABULARY)
				self.assertEqual(len(text), alternatives.parse(ctx, text, 0))
				self.assertEqual(kind, ctx.values[TYPE])
		ctx = ParseContext(VOCABULARY)
		self.assertEqual(~0, alternatives.parse(ctx, '?what', 0))
		self.assertEqual("Unrecognized type information starting with '?what'", ctx.error_message)

class TestEndOfFile(unittest.TestCase):
	def test_01_round_trip(self):
		self.assertEqual('EOF', render(EndOfFile(), Symbol(type=EOF)))
		self.assertIsNone(render(EndOfFile(), Symbol(type=1)))
		ctx = ParseContext()
		self.assertEqual(3, EndOfFile().parse(ctx, 'EOF', 0))
		self.assertEqual(Symbol(type=EOF, text=EOF_TEXT), ctx.resolve())

	def test_02_mismatch(self):
		ctx = ParseContext()
		self.assertEqual(~0, EndOfFile().parse(ctx, 'END', 0))
		self.assertEqual("Expected 'EOF' but found 'END'", ctx.error_message)

	def test_03_pattern_is_a_description(self):
		self.assertEqual('<eof>', EndOfFile().pattern())

class TestWhitespace(unittest.TestCase):
	def test_01_any_amount(self):
		ws = Whitespace(' ')
		self.assertEqual(' ', render(ws, Symbol()))
		self.assertEqual(0, ws.parse(ParseContext(), 'x', 0))
		self.assertEqual(4, ws.parse(ParseContext(), ' \t\n x', 0))

	def test_02_must_be_whitespace(self):
		with self.assertRaises(DefinitionError):
			Whitespace(' x ')

	def test_03_pattern(self):
		self.assertEqual(' ', Whitespace(' ').pattern())
		self.assertEqual('<whitespace>', Whitespace().pattern())

class TestComposite(unittest.TestCase):
	def setUp(self) -> None:
		self.optional = Composite([Literal(':'), Integer(CHANNEL, strict=True)], optional=True)
		self.chain = Composite([SymbolicType(), self.optional])

	def test_01_optional_format_restores_buffer(self):
		out = ['before']
		self.assertTrue(self.optional.format(FormatContext(Symbol(), VOCABULARY), out))
		self.assertEqual(['before'], out)
		self.assertEqual('ID:5', render(self.chain, Symbol(type=1, channel=5)))
		self.assertEqual('ID', render(self.chain, Symbol(type=1)))

	def test_02_failed_optional_leaves_context_alone(self):
		ctx = ParseContext(VOCABULARY)
		self.assertEqual(1, self.optional.parse(ctx, 'x:y', 1))
		self.assertEqual({}, ctx.values)
		self.assertIsNone(ctx.error_message)

	def test_03_required_child_fails(self):
		ctx = ParseContext(VOCABULARY)
		self.assertEqual(~3, Composite([SymbolicType(), Whitespace(), Literal('!')]).parse(ctx, 'ID ?', 0))

	def test_04_pattern(self):
		self.assertEqual('s[:c]', self.chain.pattern())
		self.assertEqual('a\\b\\[', Literal('ab[').pattern())
		self.assertEqual('\\<>', Literal('<>').pattern())

if __name__ == '__main__': unittest.main()
