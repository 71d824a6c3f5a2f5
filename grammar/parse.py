# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
The parsing driver.
`parse` interprets the rule descriptors of a grammar against a token stream by recursive descent with full backtracking.
On failure it raises the most relevant `ParseError`: the one that reached furthest into the stream.
'''

from typing import Any, Iterable, Iterator, TypeVar

from .exceptions import ExcessToken, merge_errors, ParseError
from .io import errL
from .ruledef import FieldDef, rule_def
from .token import EndOfText, ListTokenStream, Token, TokenMatch, TokenPattern, TokenStream


_T = TypeVar('_T')

_no_match = TokenMatch()


class ParseState:
  '''
  The mutable state of a single parse: the stream cursor, the debug trace depth,
  and the furthest error encountered, including those that were recovered from.
  '''

  def __init__(self, stream:TokenStream, dbg=False) -> None:
    self.stream = stream
    self.dbg = dbg
    self.depth = 0
    self.furthest:ParseError|None = None

  def next(self) -> Token: return self.stream.next()

  def save(self) -> int: return self.stream.save()

  def restore(self, pos:int) -> None: self.stream.restore(pos)

  def peek(self) -> Token:
    pos = self.stream.save()
    token = self.stream.next()
    self.stream.restore(pos)
    return token

  def error(self, *, cause:str='', expected:Iterable[TokenPattern]=()) -> ParseError:
    'Create an error located at the next token.'
    e = ParseError(self.peek(), self.save(), cause=cause, expected=expected)
    self.furthest = merge_errors(self.furthest, e)
    return e

  def match_token(self, match:TokenMatch) -> Token:
    '''
    Consume and return the next token if it satisfies `match`; an empty match accepts any token but the end of text.
    If the matching pattern is a lookahead, the token is returned but not consumed.
    '''
    pos = self.save()
    token = self.next()
    pattern = match.match(token)
    if pattern is None:
      self.restore(pos)
      raise self.error(cause='expected any token', expected=match)
    if pattern.lookahead: self.restore(pos)
    return token

  def drop(self, match:TokenMatch) -> None:
    'Consume all consecutive tokens that satisfy `match`.'
    if not match: return
    while True:
      pos = self.save()
      if match.match(self.next()) is None:
        self.restore(pos)
        return

  def parse_field(self, fd:FieldDef) -> Any:
    'A token constraint on a nonleaf field must be satisfied by the next token before the rule is attempted.'
    if fd.match and not fd.is_leaf and fd.match.match(self.peek()) is None:
      raise self.error(expected=fd.match)
    return self.parse_sub(fd.type, fd.match)

  def parse_sub(self, rule_type:type[_T], match:TokenMatch=_no_match) -> _T:
    'Parse one instance of `rule_type`. On failure, rewind the stream and raise.'
    pos = self.save()
    name = rule_type.__qualname__
    if self.dbg: errL('  ' * self.depth, f'===> {name} #{pos}', f' {match}' if match else '')
    self.depth += 1
    try:
      node = rule_type.parse_rule(self, match) # type: ignore[attr-defined]
    except ParseError as e:
      self.restore(pos)
      self.furthest = merge_errors(self.furthest, e)
      if self.dbg: errL('  ' * (self.depth-1), f'<=== {name}: {e}')
      raise
    finally:
      self.depth -= 1
    if self.dbg: errL('  ' * self.depth, f'<=== {name} #{self.save()}')
    return node


def parse(rule_type:type[_T], stream:TokenStream|Iterable[Token], *, exhaust=False, dbg=False) -> _T:
  '''
  Parse `stream` as an instance of `rule_type`, which is a rule class or a leaf type.
  `stream` is a `TokenStream`, or an iterable of tokens, which is materialized.
  If `exhaust` is true, the rule's drop filter is applied after the match and the stream must then be at its end.
  If `dbg` is true, trace each rule attempt to stderr.
  '''
  if not hasattr(stream, 'save'):
    stream = ListTokenStream(stream) # type: ignore[arg-type]
  rd = rule_def(rule_type) if hasattr(rule_type, '_kind') else None
  state = ParseState(stream, dbg=dbg) # type: ignore[arg-type]
  node = state.parse_sub(rule_type)
  if exhaust:
    if rd: state.drop(rd.drop)
    pos = state.save()
    token = state.next()
    if not isinstance(token, EndOfText):
      state.restore(pos)
      if state.furthest and state.furthest.pos > pos: raise state.furthest
      raise ExcessToken(token, pos, expected=[TokenPattern('end_of_text')])
  return node


def dbg_tokens(tokens:Iterable[Token]) -> Iterator[Token]:
  'Pass through `tokens`, printing each one to stderr.'
  for i, token in enumerate(tokens):
    slc = '' if token.slc is None else f'{token.slc.start}-{token.slc.stop}: '
    errL(f'#{i} {slc}{token}')
    yield token
