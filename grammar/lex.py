# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Simple lexing using python regular expressions.
The lexer produces the token streams consumed by the parser; the parser itself never tokenizes.
'''

import re
from typing import Container, Iterable, Iterator, Pattern

from .source import Source
from .token import EndOfText, LazyTokenStream, Token


class LexMode:
  def __init__(self, name:str, kinds:Iterable[str]) -> None:
    self.name = name
    self.kinds = list(iter_str(kinds))
    self.kind_set:frozenset[str] = frozenset() # Filled in by Lexer.
    self.regex:Pattern|None = None # Filled in by Lexer.

  def __repr__(self) -> str:
    return f'{type(self).__name__}({self.name!r}, kinds={self.kinds})'


class LexTrans:
  '''
  A mode transition: lexing a token of a `kind` kind while in one of the `base` modes pushes `mode`;
  lexing a `pop` kind while in `mode` pops back to the base.
  If `consume` is true, the popping token is not considered for further transitions by the base mode.
  '''
  def __init__(self, base:Iterable[str]|str, *, kind:Iterable[str]|str, mode:str, pop:Iterable[str]|str, consume:bool=False) -> None:
    self.bases = tuple(iter_str(base)) # Parent modes.
    self.kinds = tuple(iter_str(kind)) # Parent mode token kinds that cause the push.
    self.mode = mode # Child mode.
    self.pops = frozenset(iter_str(pop)) # Child mode token kinds that cause the pop.
    self.consume = consume

  def __repr__(self) -> str:
    return f'{type(self).__name__}({self.bases!r}, kinds={self.kinds}, mode={self.mode!r}, pops={sorted(self.pops)}, consume={self.consume})'



class Lexer:
  '''
  Define a Lexer using python regular expressions.
  Text that no pattern matches is emitted as `invalid` tokens, leaving the parser to report it.
  Note: A zero-length match, e.g. r'^' causes an exception; otherwise the stream would never advance.
  '''

  class DefinitionError(Exception): pass

  def __init__(self, *, flags='', patterns:dict[str,str], modes:Iterable[LexMode]=(), transitions:Iterable[LexTrans]=()) -> None:

    # Validate flags.
    for flag in flags:
      if flag not in 'aiLmsux':
        raise Lexer.DefinitionError(f'invalid global regex flag: {flag}')
    flags_pattern = f'(?{flags})' if flags else ''

    # Validate patterns.
    if not patterns: raise Lexer.DefinitionError('Lexer instance must define at least one pattern')
    self.patterns:dict[str,str] = {}
    for n, v in patterns.items():
      validate_name(n)
      if not isinstance(v, str):
        raise Lexer.DefinitionError(f'{n!r} pattern value must be a string; found {v!r}')
      pattern = f'{flags_pattern}(?P<{n}>{v})'
      try: r = re.compile(pattern) # compile each expression by itself to improve error clarity.
      except re.error as e:
        raise Lexer.DefinitionError(f'{n!r} pattern is invalid: {pattern}') from e
      for group_name in r.groupindex:
        if group_name in patterns and group_name != n:
          raise Lexer.DefinitionError(f'{n!r} pattern contains a conflicting capture group name: {group_name!r}')
      self.patterns[n] = pattern
    self.kinds = frozenset(self.patterns)

    # Validate and compile modes.
    if not modes:
      modes = [LexMode('main', kinds=self.patterns)]
    self.modes:dict[str,LexMode] = {}
    main = None
    for mode in modes:
      if not isinstance(mode, LexMode): raise Lexer.DefinitionError(f'expected LexMode; received: {mode!r}')
      if not main: main = mode.name
      if mode.name in self.modes:
        raise Lexer.DefinitionError(f'duplicate mode name: {mode.name!r}')
      for kind in mode.kinds:
        if kind not in self.patterns:
          raise Lexer.DefinitionError(f'mode {mode.name!r} includes nonexistent pattern: {kind!r}')
      mode.kind_set = frozenset(mode.kinds)
      mode.regex = re.compile('|'.join(pattern for name, pattern in self.patterns.items() if name in mode.kind_set))
      #^ Iterate over self.patterns because the dict preserves the original pattern order, which decides priority.
      self.modes[mode.name] = mode
    assert main is not None
    self.main = main

    # Validate transitions.
    self.transitions:dict[tuple[str,str],LexTrans] = {}
    for trans in transitions:
      if not isinstance(trans, LexTrans): raise Lexer.DefinitionError(f'expected `LexTrans`; received {trans!r}')
      for base in trans.bases:
        if base not in self.modes: raise Lexer.DefinitionError(f'unknown parent mode: {base!r}')
      if trans.mode not in self.modes: raise Lexer.DefinitionError(f'unknown child mode: {trans.mode!r}')
      if trans.mode == self.main: raise Lexer.DefinitionError(f'main mode cannot be pushed: {trans.mode!r}')
      for k in (*trans.kinds, *trans.pops):
        if k not in self.kinds: raise Lexer.DefinitionError(f'unknown transition kind: {k!r}')
      for base in trans.bases:
        for kind in trans.kinds:
          key = (base, kind)
          try: existing = self.transitions[key]
          except KeyError: self.transitions[key] = trans
          else: raise Lexer.DefinitionError(f'conflicting transitions:\n  {existing}\n  {trans}')


  def _lex_one(self, regex:Pattern, text:str, pos:int) -> Token:
    m = regex.search(text, pos)
    if not m:
      return Token('invalid', text[pos:], slice(pos, len(text)))
    p, e = m.span()
    if pos < p:
      return Token('invalid', text[pos:p], slice(pos, p))
    if p == e:
      raise Lexer.DefinitionError(f'Zero-length patterns are disallowed.\n  kind: {m.lastgroup}; match: {m}')
    kind = m.lastgroup
    assert isinstance(kind, str)
    return Token(kind, m[0], slice(p, e))


  def lex(self, source:Source|str, drop:Container[str]=()) -> Iterator[Token]:
    'Lazily generate tokens for `source`, omitting those whose kinds are in `drop`.'
    text = source if isinstance(source, str) else source.text
    stack:list[LexTrans] = [] # Pushed transitions; the main mode is the implicit bottom.
    pos = 0
    while pos < len(text):
      mode = self.modes[stack[-1].mode if stack else self.main]
      assert mode.regex is not None
      token = self._lex_one(mode.regex, text, pos)
      pos = token.end
      kind = token.kind
      if kind not in drop:
        yield token
      consumed = False
      while stack and kind in stack[-1].pops:
        consumed = stack.pop().consume
        if consumed: break
      if consumed: continue
      try: trans = self.transitions[(stack[-1].mode if stack else self.main, kind)]
      except KeyError: pass
      else: stack.append(trans)


  def stream(self, source:Source|str, drop:Container[str]=()) -> LazyTokenStream:
    'Return a parser token stream for `source`; the end-of-text token is located at the end of the text.'
    end = len(source if isinstance(source, str) else source.text)
    return LazyTokenStream(self.lex(source, drop=drop), eot=EndOfText(slice(end, end)))


def validate_name(name:str) -> str:
  if not valid_name_re.fullmatch(name):
    raise Lexer.DefinitionError(f'invalid name: {name!r}')
  if name in reserved_names:
    raise Lexer.DefinitionError(f'name is reserved: {name!r}')
  return name


def iter_str(iterable:Iterable[str]|str) -> Iterable[str]:
  'Iterate over `iterable`, treating a bare string as a single item rather than a sequence of characters.'
  return (iterable,) if isinstance(iterable, str) else iterable


valid_name_re = re.compile(r'[A-Za-z_]\w*')

reserved_names = frozenset({'end_of_text', 'invalid'})
