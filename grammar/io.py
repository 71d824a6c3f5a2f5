# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Console output helpers.
The suffix letter names the terminator: L for newline.
'''

from sys import stderr, stdout
from typing import Any, Iterable, TextIO


def outL(*items:Any, sep='', flush=False) -> None:
  "Write `items` to std out; sep='', end='\\n'."
  print(*items, sep=sep, file=stdout, flush=flush)


def errL(*items:Any, sep='', flush=False) -> None:
  "Write items to std err; sep='', end='\\n'."
  print(*items, sep=sep, end='\n', file=stderr, flush=flush)


def write_lines(file:TextIO, lines:Iterable[str]) -> None:
  'Write each line in `lines` to `file`, followed by a newline.'
  for line in lines:
    print(line, file=file)
