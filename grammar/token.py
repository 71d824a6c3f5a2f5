# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Tokens, token patterns, and rewindable token streams.
The parser never tokenizes; it consumes any object implementing `TokenStream`.
'''

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, NamedTuple, Protocol


_setattr = object.__setattr__


@dataclass(frozen=True)
class Token:
  '''
  A lexical unit: a `kind` (the token type) and its `text` (the token value).
  The optional `slc` locates the token in its source text; it does not participate in equality.
  '''
  kind:str
  text:str
  slc:slice|None = field(default=None, compare=False)

  def __str__(self) -> str:
    return f'{self.kind} {self.text!r}'

  def __repr__(self) -> str:
    return f'{type(self).__qualname__}({self.kind!r}, {self.text!r})'

  @property
  def pos(self) -> int:
    assert self.slc is not None
    return int(self.slc.start)

  @property
  def end(self) -> int:
    assert self.slc is not None
    return int(self.slc.stop)

  @classmethod
  def parse_rule(cls, state:Any, match:'TokenMatch') -> 'Token':
    'Tokens are leaves: consume and return the next token if it satisfies `match`.'
    return state.match_token(match)


@dataclass(frozen=True, repr=False)
class EndOfText(Token):
  '''
  The sentinel returned by a stream once it is exhausted.
  It never compares equal to a plain `Token`, even one with the same kind and text.
  '''

  def __init__(self, slc:slice|None=None) -> None:
    _setattr(self, 'kind', 'end_of_text')
    _setattr(self, 'text', '')
    _setattr(self, 'slc', slc)

  def __repr__(self) -> str:
    return f'{type(self).__qualname__}()'


class TokenPattern(NamedTuple):
  '''
  A single token pattern. An empty `kind` or `text` matches anything.
  A lookahead pattern matches without consuming the token.
  Only a pattern that names `end_of_text` explicitly matches the end of the stream.
  '''
  kind:str = ''
  text:str = ''
  lookahead:bool = False

  def __str__(self) -> str:
    s = self.kind + ('*' if self.lookahead else '')
    return f'{s},{self.text}' if self.text else s

  def matches(self, token:Token) -> bool:
    if isinstance(token, EndOfText) and self.kind != token.kind: return False
    return (not self.kind or self.kind == token.kind) and (not self.text or self.text == token.text)


any_pattern = TokenPattern()


@dataclass(frozen=True)
class TokenMatch:
  '''
  A disjunction of token patterns. The empty match is falsy and places no constraint on a token,
  other than that it is not the end of the stream.
  '''
  patterns:tuple[TokenPattern,...] = ()

  def __bool__(self) -> bool: return bool(self.patterns)

  def __iter__(self) -> Iterator[TokenPattern]: return iter(self.patterns)

  def __str__(self) -> str: return '|'.join(str(p) for p in self.patterns)

  def match(self, token:Token) -> TokenPattern|None:
    'Return the first pattern that matches `token`, or None.'
    if not self.patterns:
      return None if isinstance(token, EndOfText) else any_pattern
    for pattern in self.patterns:
      if pattern.matches(token): return pattern
    return None


class TokenStream(Protocol):
  '''
  A rewindable source of tokens.
  `next` returns the end-of-text sentinel indefinitely once the stream is exhausted.
  `restore` accepts only positions previously returned by `save`.
  '''

  def next(self) -> Token: ...

  def save(self) -> int: ...

  def restore(self, pos:int) -> None: ...


class ListTokenStream:
  'A token stream over a materialized sequence of tokens.'

  def __init__(self, tokens:Iterable[Token], eot:EndOfText|None=None) -> None:
    self.tokens = list(tokens)
    self.eot = EndOfText() if eot is None else eot
    self.pos = 0

  def __repr__(self) -> str:
    return f'{type(self).__name__}(pos={self.pos}, tokens=<{len(self.tokens)}>)'

  def next(self) -> Token:
    try: token = self.tokens[self.pos]
    except IndexError: return self.eot
    self.pos += 1
    return token

  def save(self) -> int:
    return self.pos

  def restore(self, pos:int) -> None:
    assert 0 <= pos <= len(self.tokens), (pos, len(self.tokens))
    self.pos = pos


class LazyTokenStream(ListTokenStream):
  '''
  A token stream that pulls from an iterator on demand.
  Every token read is retained, so that any saved position can be restored.
  '''

  def __init__(self, tokens:Iterable[Token], eot:EndOfText|None=None) -> None:
    super().__init__((), eot=eot)
    self.iterator = iter(tokens)

  def next(self) -> Token:
    if self.pos == len(self.tokens):
      for token in self.iterator:
        self.tokens.append(token)
        break
      else:
        return self.eot
    return super().next()
