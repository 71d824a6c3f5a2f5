# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Simplified JSON: scalars are bare token leaves rather than rules of their own.
'''

from .lex import Lexer
from .rules import Match, OneOf, Seq
from .ruledef import tok
from .token import Token


lexer = Lexer(patterns=dict(
  space = r'\s+',
  op = r'[\[\]{},:]',
  string = r'"[^"]*"',
  number = r'-?[0-9]+(?:\.[0-9]+)?',
  bool = r'true|false',
  null = r'null',
))

drop = ('space',)


class SJSON(OneOf):
  number:Token|None = tok('number')
  string:Token|None = tok('string')
  boolean:Token|None = tok('bool')
  list:'List|None'
  object:'Object|None'


class List(Seq):
  open:Match = tok('op,[')
  items:list[SJSON] = tok(sep='op,,')
  close:Match = tok('op,]')


class Object(Seq):
  open:Match = tok('op,{')
  items:list['Pair'] = tok(sep='op,,')
  close:Match = tok('op,}')


class Pair(Seq):
  key:Token = tok('string')
  colon:Match = tok('op,:')
  value:SJSON
