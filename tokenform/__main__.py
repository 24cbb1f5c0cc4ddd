"""
Read a file of symbols written in one notation and write them out in another.

A notation is either the name of a predefined one (simple, antlr, json) or a pattern.
Symbolic names need a vocabulary, which comes from a `.tokens` file as generated
alongside a lexer.
"""

import sys, os, argparse

from tokenform.interfaces import FormatterError, ParseError
from tokenform.formatter import SymbolFormatter
from tokenform.vocabulary import read_tokens_file
from tokenform.predefined import SIMPLE, ANTLR, JSON
from tokenform.support.failureprone import SourceText

PRESETS = {'simple': SIMPLE, 'antlr': ANTLR, 'json': JSON}

def parse_arguments(argv=None):
	parser = argparse.ArgumentParser(prog='py -m tokenform', description=__doc__)
	parser.add_argument('source_path', help='path to input file')
	parser.add_argument('--from', dest='source_format', default='simple', help='notation of the input: a preset name or a pattern (default: simple)')
	parser.add_argument('--to', dest='target_format', default='antlr', help='notation of the output: a preset name or a pattern (default: antlr)')
	parser.add_argument('-t', '--tokens', help='path to a .tokens file naming the symbol kinds')
	parser.add_argument('--keep-whitespace', action='store_true', help='do not skip whitespace between symbols in the input')
	parser.add_argument('-o', '--output', help='path to output file (default: standard output)')
	parser.add_argument('-f', '--force', action='store_true', dest='force', help='allow to write over existing file')
	return parser.parse_args(argv)

def log_error(message):
	""" Simple place to override if you'd rather use a logging framework. """
	print(message, file=sys.stderr)

def resolve_notation(name:str) -> SymbolFormatter:
	return PRESETS.get(name.lower()) or SymbolFormatter.of_pattern(name)

def main(args) -> int:
	if args.output and os.path.exists(args.output) and not args.force:
		log_error('Target file already exists and --force command-line argument was not given.')
		return 1
	with open(args.source_path, encoding='utf-8') as fh: document = fh.read()
	try:
		vocabulary = read_tokens_file(args.tokens) if args.tokens else None
		source = resolve_notation(args.source_format).with_vocabulary(vocabulary)
		target = resolve_notation(args.target_format).with_vocabulary(vocabulary)
		symbols = source.parse_list(document, skip_whitespace=not args.keep_whitespace)
		result = target.format_list(symbols)
	except ParseError as e:
		source_text = SourceText(document, filename=args.source_path)
		log_error(source_text.complaint(slice(e.index, e.index+1), e.description))
		return 1
	except FormatterError as e:
		log_error(e.args[0])
		return 1
	if args.output:
		with open(args.output, 'w', encoding='utf-8') as fh: print(result, file=fh)
	else:
		print(result)
	return 0

if __name__ == '__main__': sys.exit(main(parse_arguments()))
