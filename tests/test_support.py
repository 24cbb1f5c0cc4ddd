import unittest
from tokenform.support.failureprone import SourceText, illustration
from tokenform.support.pretty import render_grid

class TestSourceText(unittest.TestCase):
	def setUp(self) -> None:
		self.source = SourceText("abc\ndef\r\nghi")

	def test_01_row_col(self):
		self.assertEqual((1, 0), self.source.find_row_col(0))
		self.assertEqual((2, 1), self.source.find_row_col(5))
		self.assertEqual((3, 3), self.source.find_row_col(12))

	def test_02_line_of_text(self):
		self.assertEqual('def', self.source.line_of_text(2))
		self.assertEqual('ghi', self.source.line_of_text(3))

	def test_03_complaint(self):
		self.assertEqual("At line 2, column 2: oops\n >>> def\n      ^ near here", self.source.complaint(slice(5, 6), 'oops'))
		named = SourceText("abc", filename='some.txt')
		self.assertTrue(named.complaint(slice(1, 3), 'bad').startswith("some.txt: line 1, column 2: bad\n"))

	def test_04_any_line_break(self):
		source = SourceText('a\rb\nc\r\nd')
		self.assertEqual([(1, 0), (2, 0), (3, 0), (4, 0)], [source.find_row_col(i) for i in (0, 2, 4, 7)])
		self.assertEqual('c', source.line_of_text(3))
		self.assertEqual((1, 2), SourceText('a b').find_row_col(2))

class TestIllustration(unittest.TestCase):
	def test_01_tabs_line_up(self):
		self.assertEqual("\tabc\n\t ^^ near here", illustration('\tabc', 2, 3))

	def test_02_caption(self):
		self.assertEqual("abc\n^ here", illustration('abc', 0, caption='here'))

class TestRenderGrid(unittest.TestCase):
	def test_01_with_header(self):
		self.assertEqual(
			"────┬───\na   │ bb\n────┼───\nccc │ d\n────┴───",
			render_grid([['a', 'bb'], ['ccc', 'd']]),
		)

	def test_02_without_header(self):
		self.assertNotIn('┼', render_grid([['a', 'b'], ['c', 'd']], header=False))

if __name__ == '__main__': unittest.main()
