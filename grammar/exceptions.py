# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Exceptions raised while defining grammars and parsing token streams.
'''

from json import dumps
from typing import Iterable, NoReturn, TYPE_CHECKING

from .token import Token, TokenPattern

if TYPE_CHECKING:
  from .source import Source


class RuleDefError(Exception):
  'Raised when a rule class cannot be compiled into a rule descriptor.'


class ParseError(Exception):
  '''
  A failure to match the token stream at a particular position.
  `pos` is the index of the offending token in the stream, and is what decides which of two errors is more relevant.
  `expected` lists the token patterns that would have been accepted; `cause` is a free text description used otherwise.
  '''
  error_prefix = 'parse'

  def __init__(self, token:Token, pos:int, *, cause:str='', expected:Iterable[TokenPattern]=()) -> None:
    self.token = token
    self.pos = pos
    self.cause = cause
    self.expected = tuple(expected)
    super().__init__(token, pos, cause, self.expected)

  def __str__(self) -> str:
    return f'token #{self.pos} {self.token.kind} with value {dq(self.token.text)}: {self.msg}'

  def __repr__(self) -> str:
    return f'{type(self).__name__}({str(self)!r})'

  @property
  def msg(self) -> str:
    if self.expected: return expected_msg(self.expected)
    return self.cause or 'parse failed'

  def merge(self, other:'ParseError|None') -> 'ParseError':
    '''
    Combine two errors into the most relevant one.
    The error at the greater position wins; on a tie the expected patterns are concatenated.
    '''
    if other is None or other is self: return self
    if other.pos > self.pos: return other
    if other.pos < self.pos: return self
    if not other.expected: return self
    if not self.expected and not self.cause: return other
    return type(self)(self.token, self.pos, cause=self.cause or other.cause, expected=self.expected + other.expected)

  def diagnostic(self, source:'Source') -> str:
    slc = self.token.slc
    if slc is None: return f'{source.name}: {self.error_prefix} error: {self}\n'
    return source.diagnostic(slc, f'{self.error_prefix} error: {self}')

  def fail(self, source:'Source') -> NoReturn:
    exit(self.diagnostic(source))


class ExcessToken(ParseError):
  'Raised by `parse` when the root rule matches but does not exhaust the token stream.'
  error_prefix = 'excess token'


def merge_errors(a:ParseError|None, b:ParseError|None) -> ParseError|None:
  'Merge two optional errors; see `ParseError.merge`.'
  if a is None: return b
  return a.merge(b)


def expected_msg(patterns:Iterable[TokenPattern]) -> str:
  '''
  Summarize a collection of patterns as `expected token with type A or B, or value "x" or "y"`.
  Kinds and texts are deduplicated in first-seen order.
  '''
  kinds:dict[str,None] = {}
  texts:dict[str,None] = {}
  for p in patterns:
    if p.text: texts[dq(p.text)] = None
    elif p.kind: kinds[p.kind] = None
  parts = []
  if kinds: parts.append('type ' + ' or '.join(kinds))
  if texts: parts.append('value ' + ' or '.join(texts))
  if not parts: return 'expected any token'
  return 'expected token with ' + ', or '.join(parts)


def dq(s:str) -> str:
  'Double-quote a string with JSON escapes, rather than the Python single-quote repr.'
  return dumps(s, ensure_ascii=False)
