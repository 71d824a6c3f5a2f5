# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
A JSON grammar, with a lexer and a compile step from parse trees to python values.
Numbers compile to floats.
'''

from json import loads
from typing import Any

from .lex import Lexer
from .parse import parse
from .rules import Match, OneOf, Seq
from .ruledef import tok
from .source import Source
from .token import Token


lexer = Lexer(patterns=dict(
  space = r'\s+',
  null = r'null',
  bool = r'true|false',
  op = r'[{},:\[\]]',
  string = r'"(?:[^"\\\x00-\x1f]|\\["\\/bfnrt]|\\u[0-9a-fA-F]{4})*"', # Malformed strings lex as invalid.
  number = r'-?[0-9]+(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?',
))


class Json(OneOf):
  number:'Number|None'
  string:'String|None'
  null:'Null|None'
  bool:'Bool|None'
  array:'Array|None'
  dict:'Dict|None'

  def compile(self) -> Any:
    _, alt = self.selected()
    return alt.compile()


class Number(Seq):
  value:Token = tok('number')

  def compile(self) -> float: return float(self.value.text)


class String(Seq):
  value:Token = tok('string')

  def compile(self) -> str: return unquote(self.value)


class Null(Seq):
  value:Token = tok('null')

  def compile(self) -> None: return None


class Bool(Seq):
  value:Token = tok('bool')

  def compile(self) -> bool: return self.value.text == 'true'


class Array(Seq):
  open:Match = tok('op,[')
  items:list[Json] = tok(sep='op,,')
  close:Match = tok('op,]')

  def compile(self) -> list[Any]:
    return [item.compile() for item in self.items]


class Dict(Seq):
  open:Match = tok('op,{')
  items:list['DictItem'] = tok(sep='op,,')
  close:Match = tok('op,}')

  def compile(self) -> dict[str,Any]:
    return {item.key.compile(): item.value.compile() for item in self.items}


class DictItem(Seq):
  key:String
  colon:Match = tok('op,:')
  value:Json


def unquote(token:Token) -> str:
  return loads(token.text)


def parse_json(text:str, name:str='<json>', dbg=False) -> Json:
  'Parse `text` into a `Json` tree. Raises `ParseError` if the text is not a single JSON value.'
  return parse(Json, lexer.stream(Source(name, text), drop=('space',)), exhaust=True, dbg=dbg)


def compile_json(text:str, name:str='<json>') -> Any:
  'Parse `text` and compile it to python values.'
  return parse_json(text, name=name).compile()
