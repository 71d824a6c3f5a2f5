#!/usr/bin/env python3
# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from argparse import ArgumentParser
from sys import stdin
from typing import Any, Iterable

from . import json, sexpr, sjson
from .exceptions import ParseError
from .io import outL
from .lex import Lexer
from .parse import dbg_tokens, parse
from .pretty import pretty_write
from .source import Source
from .token import EndOfText, LazyTokenStream


langs:dict[str,tuple[Lexer,tuple[str,...],type]] = {
  'json': (json.lexer, ('space',), json.Json),
  'sexpr': (sexpr.lexer, (), sexpr.SExpr),
  'sjson': (sjson.lexer, sjson.drop, sjson.SJSON),
}


def main() -> None:
  parser = ArgumentParser(prog='grammar', description='Parse text with one of the example grammars and print the result.')
  parser.add_argument('paths', nargs='*', help='Paths to parse; standard input is parsed if none are given.')
  parser.add_argument('-lang', default='json', choices=sorted(langs), help='The grammar to parse with.')
  parser.add_argument('-compile', action='store_true', help='Print the compiled value rather than the parse tree.')
  parser.add_argument('-tokens', action='store_true', help='Print each token to stderr as it is lexed.')
  parser.add_argument('-dbg', action='store_true', help='Trace each rule attempt to stderr.')
  args = parser.parse_args()

  lexer, drop, root = langs[args.lang]
  if args.compile and not hasattr(root, 'compile'):
    exit(f'`-compile` is not supported for language {args.lang!r}.')

  if args.paths:
    sources = [read_source(path) for path in args.paths]
  else:
    sources = [Source('<stdin>', stdin.read())]

  for source in sources:
    node = parse_source(source, lexer=lexer, drop=drop, root=root, show_tokens=args.tokens, dbg=args.dbg)
    if args.compile: outL(repr(node.compile()))
    else: pretty_write(node)


def read_source(path:str) -> Source:
  try:
    with open(path) as f: return Source(path, f.read())
  except FileNotFoundError:
    exit(f'grammar error: no such file: {path!r}')


def parse_source(source:Source, lexer:Lexer, drop:Iterable[str], root:type, show_tokens:bool, dbg:bool) -> Any:
  'Parse `source` completely; on failure, print the diagnostic and exit.'
  tokens = lexer.lex(source, drop=frozenset(drop))
  if show_tokens: tokens = dbg_tokens(tokens)
  end = len(source.text)
  stream = LazyTokenStream(tokens, eot=EndOfText(slice(end, end)))
  try: return parse(root, stream, exhaust=True, dbg=dbg)
  except ParseError as e: e.fail(source)


if __name__ == '__main__': main()
