# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
S-expressions.
The lexer keeps whitespace tokens and the grammar drops them, in contrast to the JSON example.
'''

from json import loads
from typing import Any

from .lex import Lexer
from .rules import Match, OneOf, Seq
from .ruledef import tok
from .token import Token


lexer = Lexer(patterns=dict(
  space = r'\s+',
  bkt = r'[()]',
  string = r'"[^"]*"',
  number = r'-?[0-9]+(?:\.[0-9]+)?',
  atom = r'[a-zA-Z_][a-zA-Z0-9_-]*',
))


class Symbol(str):
  'A compiled atom, distinguished from a compiled string.'

  def __repr__(self) -> str: return f'Symbol({str(self)!r})'


class SExpr(OneOf, drop='space'):
  number:Token|None = tok('number')
  string:Token|None = tok('string')
  atom:Token|None = tok('atom')
  list:'List|None'

  def compile(self) -> Any:
    name, val = self.selected()
    match name:
      case 'number': return float(val.text)
      case 'string': return loads(val.text)
      case 'atom': return Symbol(val.text)
      case _: return val.compile()


class List(Seq, drop='space'):
  open_bkt:Match = tok('bkt,(')
  items:list[SExpr]
  close_bkt:Match = tok('bkt,)')

  def compile(self) -> list[Any]:
    return [item.compile() for item in self.items]
