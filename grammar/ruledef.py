# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Rule descriptors: the compiled form of a grammar rule class.

A rule class derives from a combinator marker (`OneOf` or `Seq`) and declares its fields as annotations.
The field type determines the cardinality: `X` is single, `X|None` is optional, and `list[X]` is repeated.
Token constraints and repetition options are attached with `tok()` as the field's class attribute:

  class Array(Seq, drop='space'):
    open:Match = tok('op,[')
    items:list[Json] = tok(sep='op,,')
    close:Match = tok('op,]')

Token directives are alternatives separated by '|'; each alternative is `kind[*][,text]`,
where a trailing '*' on the kind makes the pattern a lookahead, and the text is everything after the first comma.
Size directives are `min-max`, `min-`, `-max`, or `n`; a max of zero means unbounded.

Descriptors are compiled once per class and cached for the life of the process; so are compilation errors.
'''

from dataclasses import dataclass
from enum import Enum
from threading import Lock
from types import NoneType, UnionType
from typing import Any, ClassVar, get_args, get_origin, get_type_hints, NamedTuple, Union

from .exceptions import RuleDefError
from .token import TokenMatch, TokenPattern


class Kind(Enum):
  one_of = 'OneOf'
  seq = 'Seq'


class Card(Enum):
  single = 'single'
  optional = 'optional'
  repeated = 'repeated'


class FieldTags(NamedTuple):
  'The raw directives attached to a field by `tok`.'
  directive:str = ''
  size:str = ''
  sep:str = ''


def tok(directive:str='', *, size:str='', sep:str='') -> Any:
  '''
  Attach directives to a rule field:
  `directive` constrains the token(s) that the field must start with;
  `size` bounds the number of items in a repeated field;
  `sep` is a token directive that must separate consecutive items of a repeated field.
  '''
  return FieldTags(directive, size, sep)


@dataclass(frozen=True)
class FieldDef:
  name:str
  type:type
  card:Card
  match:TokenMatch = TokenMatch()
  min:int = 0
  max:int = 0 # Zero means unbounded.
  sep:TokenMatch = TokenMatch()

  def __str__(self) -> str:
    tags = ''.join(f' {k}={v}' for k, v in [('tok', self.match), ('sep', self.sep)] if v)
    if self.min or self.max: tags += f' size={self.min}-{self.max or ""}'
    return f'{self.name}:{self.type.__qualname__}({self.card.value}){tags}'

  @property
  def is_leaf(self) -> bool:
    return not hasattr(self.type, '_kind')


@dataclass(frozen=True)
class RuleDef:
  name:str
  kind:Kind
  fields:tuple[FieldDef,...]
  separator:FieldDef|None = None # Only sequences have separators.
  drop:TokenMatch = TokenMatch()

  def __str__(self) -> str:
    return f'{self.name}({self.kind.value}; ' + ', '.join(str(f) for f in self.fields) + ')'


_rule_defs:dict[type,RuleDef|RuleDefError] = {}
_rule_defs_lock = Lock()


def rule_def(cls:type) -> RuleDef:
  'Return the cached descriptor for `cls`, compiling it on first use. Raises `RuleDefError` if the class is invalid.'
  try: rd = _rule_defs[cls]
  except KeyError:
    with _rule_defs_lock:
      try: rd = _rule_defs[cls]
      except KeyError:
        try: rd = compile_rule_def(cls)
        except RuleDefError as e: rd = e
        _rule_defs[cls] = rd
  if isinstance(rd, RuleDefError): raise rd
  return rd


def compile_rule_def(cls:type) -> RuleDef:
  'Compile the descriptor for rule class `cls`, without consulting the cache.'
  if not isinstance(cls, type): raise RuleDefError(f'expected a rule class; received: {cls!r}')
  name = cls.__qualname__
  kinds = {c.__dict__['_kind'] for c in cls.__mro__ if '_kind' in c.__dict__}
  if not kinds: raise RuleDefError(f'{name}: rule class must derive from OneOf or Seq')
  if len(kinds) > 1: raise RuleDefError(f'{name}: rule class cannot derive from both OneOf and Seq')
  kind = kinds.pop()

  try: hints = get_type_hints(cls)
  except (NameError, TypeError) as e:
    raise RuleDefError(f'{name}: unresolvable field type: {e}') from e

  fields:list[FieldDef] = []
  separator:FieldDef|None = None
  for field_name, hint in hints.items():
    if field_name.startswith('_') or get_origin(hint) is ClassVar: continue
    fd = compile_field_def(cls, field_name, hint)
    if field_name == 'separator':
      if kind is Kind.one_of: raise RuleDefError(f'{name}.separator: OneOf rules cannot have a separator')
      if fd.card is Card.repeated: raise RuleDefError(f'{name}.separator: separator cannot be repeated')
      separator = fd
      continue
    if kind is Kind.one_of and fd.card is Card.single:
      raise RuleDefError(f'{name}.{field_name}: OneOf alternatives must be optional or repeated')
    fields.append(fd)

  if not fields: raise RuleDefError(f'{name}: rule must declare at least one field')
  return RuleDef(name=name, kind=kind, fields=tuple(fields), separator=separator,
    drop=parse_tok_directive(getattr(cls, '_drop', '')))


def compile_field_def(cls:type, name:str, hint:Any) -> FieldDef:
  qual_name = f'{cls.__qualname__}.{name}'
  tags = getattr(cls, name, FieldTags())
  if not isinstance(tags, FieldTags):
    raise RuleDefError(f'{qual_name}: field default must be a `tok(...)` directive; found: {tags!r}')

  origin = get_origin(hint)
  if origin is list:
    args = get_args(hint)
    if len(args) != 1: raise RuleDefError(f'{qual_name}: repeated field requires one item type: {hint!r}')
    base = args[0]
    card = Card.repeated
  elif origin is Union or origin is UnionType:
    args = [a for a in get_args(hint) if a is not NoneType]
    if len(args) != 1 or len(get_args(hint)) != 2:
      raise RuleDefError(f'{qual_name}: union fields must have the form `X|None`: {hint!r}')
    base = args[0]
    if get_origin(base) is list: raise RuleDefError(f'{qual_name}: repeated fields cannot be optional: {hint!r}')
    card = Card.optional
  else:
    base = hint
    card = Card.single

  if not isinstance(base, type) or not callable(getattr(base, 'parse_rule', None)):
    raise RuleDefError(f'{qual_name}: unresolvable base type: {base!r}')

  if card is not Card.repeated:
    if tags.size: raise RuleDefError(f'{qual_name}: size directive requires a repeated field')
    if tags.sep: raise RuleDefError(f'{qual_name}: sep directive requires a repeated field')
  min_, max_ = parse_size_directive(tags.size, qual_name)
  return FieldDef(name=name, type=base, card=card, match=parse_tok_directive(tags.directive), min=min_, max=max_,
    sep=parse_tok_directive(tags.sep))


def parse_tok_directive(directive:str) -> TokenMatch:
  '''
  Parse a token directive into a `TokenMatch`.
  `number|op,-` yields a pattern matching kind `number` and a pattern matching kind `op` with text `-`.
  '''
  patterns = []
  for alt in directive.split('|'):
    if not alt: continue
    kind, _, text = alt.partition(',')
    lookahead = kind.endswith('*')
    if lookahead: kind = kind[:-1]
    patterns.append(TokenPattern(kind, text, lookahead))
  return TokenMatch(tuple(patterns))


def parse_size_directive(directive:str, context:str='size') -> tuple[int,int]:
  'Parse a size directive into a (min, max) pair; a max of zero means unbounded.'
  if not directive: return (0, 0)
  lo, dash, hi = directive.partition('-')
  try:
    if dash:
      min_ = int(lo) if lo else 0
      max_ = int(hi) if hi else 0
    else:
      min_ = max_ = int(lo)
  except ValueError as e:
    raise RuleDefError(f'{context}: invalid size directive: {directive!r}') from e
  if min_ < 0 or max_ < 0 or (not dash and max_ == 0):
    raise RuleDefError(f'{context}: invalid size directive: {directive!r}')
  if max_ and max_ < min_:
    raise RuleDefError(f'{context}: size directive max is less than min: {directive!r}')
  return (min_, max_)
