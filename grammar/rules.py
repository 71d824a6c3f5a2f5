# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Rule classes: the combinator markers `OneOf` and `Seq`, and the `Match` leaf.

A grammar is a set of classes deriving from `OneOf` or `Seq`.
Instances of those classes are the nodes of the parse tree, with one attribute per declared field.
Leaves are `Token`, `Match`, or any class providing a `parse_rule(state, match)` classmethod.

Every rule attempt is wrapped by `ParseState.parse_sub`, which rewinds the stream on failure;
the algorithms below can therefore abandon a partial match by simply raising.
'''

from typing import Any, TYPE_CHECKING

from .exceptions import merge_errors, ParseError
from .ruledef import Card, FieldDef, Kind, rule_def, RuleDef
from .token import TokenMatch

if TYPE_CHECKING:
  from .parse import ParseState


class Rule:
  '''
  Base class for parse tree nodes.
  Nodes are constructed with keyword arguments; omitted fields default to None, or to an empty list if repeated.
  '''

  _drop = ''

  def __init_subclass__(cls, drop:str|None=None, **kwargs:Any) -> None:
    super().__init_subclass__(**kwargs)
    if drop is not None: cls._drop = drop # Otherwise inherited.

  def __init__(self, **kwargs:Any) -> None:
    rd = rule_def(type(self))
    for fd in rd.fields:
      setattr(self, fd.name, kwargs.pop(fd.name, [] if fd.card is Card.repeated else None))
    if rd.separator: setattr(self, rd.separator.name, None) # Separators are consumed but not retained.
    if kwargs: raise TypeError(f'{rd.name}: unexpected fields: {", ".join(kwargs)}')

  def __repr__(self) -> str:
    rd = rule_def(type(self))
    args = ', '.join(f'{fd.name}={getattr(self, fd.name)!r}' for fd in rd.fields if getattr(self, fd.name) not in (None, []))
    return f'{type(self).__qualname__}({args})'

  def __eq__(self, other:Any) -> bool:
    if type(self) is not type(other): return NotImplemented
    return all(getattr(self, fd.name) == getattr(other, fd.name) for fd in rule_def(type(self)).fields)

  __hash__ = None # type: ignore[assignment]


class OneOf(Rule):
  '''
  A rule that matches exactly one of its fields, tried in declaration order; the first to match wins.
  Alternatives must be optional fields, or repeated fields, which match one or more items.
  '''
  _kind = Kind.one_of

  @classmethod
  def parse_rule(cls, state:'ParseState', match:TokenMatch) -> 'OneOf':
    rd = rule_def(cls)
    state.drop(rd.drop)
    pos = state.save()
    err:ParseError|None = None
    val:Any
    for fd in rd.fields:
      try:
        if fd.card is Card.repeated:
          val, _ = parse_items(state, rd, fd, min_=max(1, fd.min))
        else:
          val = state.parse_field(fd)
      except ParseError as e:
        state.restore(pos)
        err = merge_errors(err, e)
        continue
      return cls(**{fd.name: val})
    assert err is not None
    raise err

  def selected(self) -> tuple[str,Any]:
    'Return the name and value of the populated alternative.'
    for fd in rule_def(type(self)).fields:
      val = getattr(self, fd.name)
      if val is not None and val != []: return (fd.name, val)
    raise ValueError(f'{type(self).__qualname__}: no alternative is populated')


class Seq(Rule):
  '''
  A rule that matches each of its fields in declaration order.
  Single fields must match; optional fields are left as None when they fail;
  repeated fields collect items until one fails, and fail the sequence only if fewer than `min` were collected.
  A field named `separator` is not a regular field: it is matched between every pair of consecutive items.
  An optional separator that fails is skipped; a mandatory separator that fails fails the sequence,
  so a repeated field in a sequence with a mandatory separator ends only at its size bound.
  '''
  _kind = Kind.seq

  @classmethod
  def parse_rule(cls, state:'ParseState', match:TokenMatch) -> 'Seq':
    rd = rule_def(cls)
    vals:dict[str,Any] = {}
    err:ParseError|None = None
    matched = 0 # Total number of items matched so far; separators precede all but the first.

    for fd in rd.fields:
      if fd.card is Card.repeated:
        try: items, end_err = parse_items(state, rd, fd, min_=fd.min, matched=matched)
        except ParseError as e:
          raise e if err is None else err.merge(e)
        err = merge_errors(err, end_err)
        matched += len(items)
        vals[fd.name] = items
        continue
      pos = state.save()
      try: parse_separator(state, rd, matched)
      except ParseError as e:
        raise e if err is None else err.merge(e)
      try: vals[fd.name] = parse_item(state, rd, fd, k=0)
      except ParseError as e:
        state.restore(pos)
        err = merge_errors(err, e)
        if fd.card is Card.single: raise err
        vals[fd.name] = None
      else:
        matched += 1

    if not matched:
      e = state.error(cause='empty match')
      raise err.merge(e) if err else e
    return cls(**vals)


class Match:
  '''
  A leaf that consumes one token satisfying the field's token directive, but retains nothing.
  Use it for punctuation and keywords that carry no information beyond their presence.
  '''
  __slots__ = ()

  def __repr__(self) -> str: return 'Match()'

  def __str__(self) -> str: return 'Match'

  def __eq__(self, other:Any) -> bool: return isinstance(other, Match)

  def __hash__(self) -> int: return hash(Match)

  @classmethod
  def parse_rule(cls, state:'ParseState', match:TokenMatch) -> 'Match':
    state.match_token(match)
    return cls()


def parse_separator(state:'ParseState', rd:RuleDef, matched:int) -> None:
  '''
  Consume dropped tokens, then the rule separator if any item of the rule has already matched.
  A failing optional separator is rewound and skipped; a failing mandatory separator raises, and the caller must not recover.
  Alternatives drop tokens once, before selection, and have no separators.
  '''
  if rd.kind is Kind.one_of: return
  state.drop(rd.drop)
  if not (matched and rd.separator): return
  pos = state.save()
  try: state.parse_field(rd.separator)
  except ParseError:
    if rd.separator.card is Card.single: raise
    state.restore(pos)
  else:
    state.drop(rd.drop)


def parse_item(state:'ParseState', rd:RuleDef, fd:FieldDef, k:int) -> Any:
  '''
  Parse item `k` of field `fd`, preceded by the field separator if k > 0.
  The caller is responsible for rewinding on failure.
  '''
  if k and fd.sep:
    state.match_token(fd.sep)
    if rd.kind is Kind.seq: state.drop(rd.drop)
  return state.parse_field(fd)


def parse_items(state:'ParseState', rd:RuleDef, fd:FieldDef, min_:int, matched:int=0) -> tuple[list[Any],ParseError|None]:
  '''
  Parse the items of repeated field `fd`, up to `fd.max` if it is nonzero.
  Return the items and the error that ended the repetition, if any.
  Fewer than `min_` items raises that error instead, and a failing mandatory rule separator raises its own.
  '''
  items:list[Any] = []
  err:ParseError|None = None
  while not fd.max or len(items) < fd.max:
    pos = state.save()
    parse_separator(state, rd, matched+len(items))
    try: item = parse_item(state, rd, fd, k=len(items))
    except ParseError as e:
      state.restore(pos)
      err = e
      if len(items) < min_: raise
      break
    items.append(item)
    if state.save() == pos: break # The item consumed nothing, so repeating it would never advance.
  return items, err
