"""
How a Text component writes and reads the free text of a symbol.

Free text can contain anything, including the characters a notation uses to delimit it.
An escape map says which characters get written as an escape character followed by a code.
A symbol with no text either renders as a placeholder or refuses to render at all.
"""

from typing import NamedTuple, Optional

class TextOption(NamedTuple):
	escape_char: Optional[str]
	default_value: str
	escape_map: dict # from character to the code which follows the escape character.
	fail_on_default: bool

	@property
	def unescape_map(self) -> dict: return {code: char for char, code in self.escape_map.items()}

	def with_escape_char(self, escape_char:Optional[str]): return self._replace(escape_char=escape_char)
	def with_default_value(self, default_value:str): return self._replace(default_value=default_value)
	def with_escape_map(self, escape_map:dict): return self._replace(escape_map=dict(escape_map))
	def with_fail_on_default(self, fail_on_default=True): return self._replace(fail_on_default=fail_on_default)

	def add_escape_mapping(self, char:str, code:str):
		escape_map = dict(self.escape_map)
		escape_map[char] = code
		return self._replace(escape_map=escape_map)

	def escape(self, text:str) -> str:
		if self.escape_char is None: return text
		esc, table = self.escape_char, self.escape_map
		return ''.join(esc + table[c] if c in table else c for c in text)

	def unescape(self, text:str) -> str:
		""" Assumes every escape sequence in `text` is valid; the Text component checks that while scanning. """
		if self.escape_char is None: return text
		table = self.unescape_map
		out, i = [], 0
		while i < len(text):
			c = text[i]
			if c == self.escape_char and i+1 < len(text):
				code = text[i+1]
				out.append(table.get(code, code))
				i += 2
			else:
				out.append(c)
				i += 1
		return ''.join(out)

ESCAPED = TextOption(
	escape_char='\\',
	default_value='<no text>',
	escape_map={'\n': 'n', '\r': 'r', '\t': 't', '"': '"', '\\': '\\'},
	fail_on_default=False,
)

NOTHING = TextOption(escape_char=None, default_value='', escape_map={}, fail_on_default=True)
