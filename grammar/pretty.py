# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Human-readable rendering of parse trees.

  List {
    open: Match
    items: [
      SExpr {
        atom: atom 'cons'
      }
    ]
    close: Match
  }
'''

from typing import Any, Iterator, TextIO

from .io import stdout, write_lines
from .ruledef import Card, rule_def


def pretty_lines(node:Any, label:str='', depth:int=0) -> Iterator[str]:
  'Generate the lines of the rendering of `node`; unset and empty fields are omitted.'
  ind = '  ' * depth
  prefix = f'{label}: ' if label else ''
  if not hasattr(node, '_kind'):
    yield f'{ind}{prefix}{node}'
    return
  rd = rule_def(type(node))
  yield f'{ind}{prefix}{rd.name} {{'
  for fd in rd.fields:
    val = getattr(node, fd.name)
    if fd.card is Card.repeated:
      if not val: continue
      yield f'{ind}  {fd.name}: ['
      for item in val:
        yield from pretty_lines(item, depth=depth+2)
      yield f'{ind}  ]'
    elif val is not None:
      yield from pretty_lines(val, label=fd.name, depth=depth+1)
  yield f'{ind}}}'


def pretty_str(node:Any) -> str:
  return ''.join(line + '\n' for line in pretty_lines(node))


def pretty_write(node:Any, file:TextIO|None=None) -> None:
  write_lines(file or stdout, pretty_lines(node))
