"""
Compact, bidirectional notation for lexical symbols and parse trees.

Write the tokens you expect a lexer to produce in a short notation, parse that into
records, and compare them against what the lexer actually did. The same formatter
turns records back into the notation, which makes for readable failure messages.
"""
