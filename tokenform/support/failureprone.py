"""
This module is all about showing where a notation went wrong.

The formatting engine reports failures as a plain integer offset into the text it was
given. That is exactly right for ranking competing alternatives, but it's a poor thing
to hand to a person who just wrote a fixture file by hand. People want the offending
line, a line and column number, and a little caret pointing at the trouble.

The SourceText turns an offset into a row and column, slices out the corresponding line,
and builds a `complaint(...)` in the usual shape. The `illustration` function does the
caret drawing given a single line of text, so it may be used independently.

Line breaks are a funny thing. Unix calls for \n. Apple prior to OSX called for \r.
CP/M and its derivatives like Windows call for \r\n. Fixture files travel between all
of these, so any of the three counts as a line break.
"""

import bisect, re

LINE_BREAK = re.compile(r'\r\n?|\n')

def illustration(single_line:str, start:int, width:int=0, *, prefix='', caption="near here") -> str:
	""" Builds up a picture of where something appears in a line of text. """
	blanks = ''.join(c if c == '\t' else ' ' for c in prefix + single_line[:start])
	underline_width = max(1, min(width, len(single_line)-start))
	underline = '^'*underline_width
	return prefix + single_line.rstrip() + '\n' + blanks + underline + " " + caption

class SourceText:
	""" Wrapper for text: participates in half-respectable error-display with context. """
	def __init__(self, content:str, filename:str=None):
		self.content = content
		self.filename = filename
		self.__bounds = None

	def __make_bounds(self):
		""" Lazily only find line breaks if it turns out to be necessary for a particular text. """
		if self.__bounds is None:
			inside = [m.end() for m in LINE_BREAK.finditer(self.content)]
			self.__bounds = [0] + inside + [len(self.content)]

	def find_row_col(self, index:int):
		""" Based on a character index offset from the start of text. Rows count from one. """
		self.__make_bounds()
		row = bisect.bisect_right(self.__bounds, index, hi=len(self.__bounds) - 1) - 1
		col = index - self.__bounds[row]
		return row+1, col

	def line_of_text(self, row):
		""" Rows count from one. Line-break characters are not included. """
		self.__make_bounds()
		r = max(0, row - 1)
		line = self.content[self.__bounds[r]:self.__bounds[r + 1]]
		return line.rstrip('\r\n')

	def _format_message(self, row, col, message):
		prefix = "At" if self.filename is None else str(self.filename)+":"
		return "%s line %d, column %d: %s" % (prefix, row, col + 1, message)

	def complaint(self, a_slice:slice, message:str):
		left, right = a_slice.start, a_slice.stop
		row, col = self.find_row_col(left)
		reference = self._format_message(row, col, message)
		line = self.line_of_text(row)
		illustrated = illustration(line, col, right - left, prefix=' >>> ')
		return "%s\n%s"%(reference, illustrated)
