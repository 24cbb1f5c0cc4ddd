import unittest
from types import SimpleNamespace
from tokenform.interfaces import INVALID_TYPE, DEFAULT_CHANNEL
from tokenform.symbol import (
	Symbol, SymbolBuilder, Field, TYPE, TEXT, INDEX, CHANNEL, LINE, POSITION, START, STOP,
	ALL_FIELDS, SIMPLE_FIELDS, equalizer, symbol_key, describe,
)
from tokenform.textoption import ESCAPED, NOTHING

class TestSymbol(unittest.TestCase):
	def test_01_defaults(self):
		s = Symbol()
		self.assertEqual(INVALID_TYPE, s.type)
		self.assertEqual(DEFAULT_CHANNEL, s.channel)
		self.assertEqual('', s.text)
		for field in ALL_FIELDS:
			self.assertEqual(field.default, field.access(s), field)

	def test_02_builder(self):
		built = SymbolBuilder().type(3).text('=').index(4).channel(1).line(2).position(7).start(9).stop(9).build()
		self.assertEqual(Symbol(index=4, start=9, stop=9, text='=', type=3, channel=1, line=2, position=7), built)
		self.assertEqual(built._replace(text='!'), SymbolBuilder(built).text('!').build())

	def test_03_field_resolve(self):
		builder = SymbolBuilder()
		TYPE.resolve(builder, 5)
		TEXT.resolve(builder, 'x')
		self.assertEqual(Symbol(type=5, text='x'), builder.build())

	def test_04_fields_are_named(self):
		self.assertEqual(TYPE, Field('type', 0))
		self.assertEqual('channel', str(CHANNEL))
		self.assertEqual(8, len(set(ALL_FIELDS)))
		self.assertEqual({TYPE, TEXT, INDEX, CHANNEL}, set(SIMPLE_FIELDS))

	def test_05_equalizer(self):
		a = Symbol(index=0, type=1, text='a', line=1)
		b = Symbol(index=0, type=1, text='a', line=9)
		self.assertTrue(equalizer(SIMPLE_FIELDS)(a, b))
		self.assertFalse(equalizer(ALL_FIELDS)(a, b))
		self.assertEqual((0, 'a', 1), symbol_key(a, [TYPE, INDEX, TEXT]))

	def test_06_describe(self):
		self.assertEqual("[@3,10:12='a\\nb',<7>,2:5]", describe(Symbol(index=3, start=10, stop=12, text='a\nb', type=7, line=2, position=5)))
		self.assertEqual("[@-1,-1:-1='',<0>,channel=2,-1:-1]", str(Symbol(channel=2)))

	def test_07_from_token(self):
		token = SimpleNamespace(tokenIndex=2, start=5, stop=6, text='hi', type=4, channel=0, line=1, column=5)
		self.assertEqual(Symbol(index=2, start=5, stop=6, text='hi', type=4, channel=0, line=1, position=5), Symbol.from_token(token))
		self.assertEqual(Symbol(type=4), Symbol.from_token(SimpleNamespace(type=4, text=None)))

class TestTextOption(unittest.TestCase):
	def test_01_escape_round_trip(self):
		text = 'quote " slash \\ tab \t'
		self.assertEqual('quote \\" slash \\\\ tab \\t', ESCAPED.escape(text))
		self.assertEqual(text, ESCAPED.unescape(ESCAPED.escape(text)))

	def test_02_nothing_is_raw(self):
		self.assertEqual('a\\b', NOTHING.escape('a\\b'))
		self.assertEqual('a\\b', NOTHING.unescape('a\\b'))
		self.assertTrue(NOTHING.fail_on_default)

	def test_03_derived_options(self):
		option = ESCAPED.with_escape_char('%').with_escape_map({'%': '%', ' ': '_'}).with_default_value('-')
		self.assertEqual('a%_b%%', option.escape('a b%'))
		self.assertEqual({'%': '%', '_': ' '}, option.unescape_map)
		self.assertEqual('<no text>', ESCAPED.default_value)
		self.assertFalse(option.fail_on_default)
		self.assertTrue(option.with_fail_on_default().fail_on_default)

if __name__ == '__main__': unittest.main()
