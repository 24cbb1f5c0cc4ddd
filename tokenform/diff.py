"""
Side-by-side comparison of symbol lists, for test failure messages.

Symbols are compared on the fields the formatter declares and no others. The two lists are
aligned with difflib's SequenceMatcher, and every row of the resulting table shows a delta
mark: blank for a match, `~` for a changed symbol, `-` for one missing from the actual list,
and `+` for an extra one.
"""

import difflib
from itertools import zip_longest
from typing import Sequence, Union

from tokenform.interfaces import SymbolAssertionError
from tokenform.symbol import Symbol, symbol_key, equalizer
from tokenform.formatter import SymbolFormatter
from tokenform.predefined import SIMPLE
from tokenform.support.pretty import render_grid

HEADER = ('Index', 'Delta', 'Expected', 'Actual')

def diff_rows(expected:Sequence[Symbol], actual:Sequence[Symbol], formatter:SymbolFormatter=SIMPLE) -> list:
	""" Rows of (index, delta, expected text, actual text). Index counts rows, starting at zero. """
	fields = formatter.fields
	matcher = difflib.SequenceMatcher(
		None,
		[symbol_key(s, fields) for s in expected],
		[symbol_key(s, fields) for s in actual],
		autojunk=False,
	)
	show = formatter.try_format
	rows = []
	for tag, i1, i2, j1, j2 in matcher.get_opcodes():
		pairs = list(zip_longest(expected[i1:i2], actual[j1:j2]))
		for e, a in pairs:
			if tag == 'equal': delta = ' '
			elif e is None: delta = '+'
			elif a is None: delta = '-'
			else: delta = '~'
			rows.append([len(rows), delta, '' if e is None else _display(show, e), '' if a is None else _display(show, a)])
	return rows

def _display(show, symbol:Symbol) -> str:
	text = show(symbol)
	return str(symbol) if text is None else text

def list_diff(expected:Sequence[Symbol], actual:Sequence[Symbol], formatter:SymbolFormatter=SIMPLE) -> str:
	return render_grid([HEADER] + diff_rows(expected, actual, formatter))

def assert_symbols_equal(expected:Union[str, Sequence[Symbol]], actual:Sequence[Symbol], formatter:SymbolFormatter=SIMPLE):
	"""
	Raise SymbolAssertionError, with a diff table, unless the lists match on the formatter's fields.
	`expected` may also be given as text, which the formatter then parses as a list.
	"""
	if isinstance(expected, str): expected = formatter.parse_list(expected)
	actual = list(actual)
	same = equalizer(formatter.fields)
	if len(expected) == len(actual) and all(same(e, a) for e, a in zip(expected, actual)): return
	raise SymbolAssertionError("Symbol lists differ:\n" + list_diff(expected, actual, formatter))
