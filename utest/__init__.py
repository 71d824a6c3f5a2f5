# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
utest is a tiny unit testing library.
Tests are plain module-level calls; failures are reported to stderr as they occur,
and the process exits with status 1 at exit if any test failed.
'''

import atexit as _atexit
import inspect as _inspect
from os.path import relpath as _rel_path
from sys import stderr as _stderr
from traceback import print_exception as _print_exception
from typing import Any, Callable, Iterable, TypeVar


__all__ = [
  'utest',
  'utest_call',
  'utest_exc',
  'utest_repr',
  'utest_seq',
  'utest_val',
]


_utest_test_count = 0
_utest_failure_count = 0

_no_value = object()


_C = TypeVar('_C', bound=Callable)
def utest_call(callable:_C) -> _C:
  'A function decorator to call the defined function immediately. Useful for wrapping test state in a local function scope.'
  callable()
  return callable


def utest(exp:Any, fn:Callable, *args:Any, **kwargs:Any) -> None:
  '''
  Invoke `fn` with `args` and `kwargs`.
  Log a test failure if an exception is raised or the returned value does not equal `exp`.
  '''
  ret = _invoke('value', exp, fn, args, kwargs)
  if ret is not _no_value and exp != ret:
    _utest_failure('value', exp, 'value', ret, subj=fn, args=args, kwargs=kwargs)


def utest_repr(exp_repr:str, fn:Callable, *args:Any, **kwargs:Any) -> None:
  '''
  Invoke `fn` with `args` and `kwargs`.
  Log a test failure if an exception is raised or the returned value's `repr` does not equal `exp_repr`.
  '''
  ret = _invoke('repr', exp_repr, fn, args, kwargs)
  if ret is not _no_value and exp_repr != repr(ret):
    _utest_failure('repr', exp_repr, 'value', ret, subj=fn, args=args, kwargs=kwargs)


def utest_seq(exp_seq:Iterable[Any], fn:Callable, *args:Any, **kwargs:Any) -> None:
  '''
  Invoke `fn` with `args` and `kwargs`, and convert the resulting iterable into a list.
  Log a test failure if an exception is raised, or if the items do not equal the items of `exp_seq`.
  '''
  exp = list(exp_seq) # Convert to a list for referential isolation and consistent string repr.
  ret_seq = _invoke('sequence', exp, fn, args, kwargs)
  if ret_seq is _no_value: return
  try: ret = list(ret_seq)
  except Exception as exc:
    _utest_failure('sequence', exp, exc=exc, subj=fn, args=args, kwargs=kwargs)
    return
  if exp != ret:
    _utest_failure('sequence', exp, 'sequence', ret, subj=fn, args=args, kwargs=kwargs)


def utest_exc(exp_exc:Any, fn:Callable, *args:Any, **kwargs:Any) -> None:
  '''
  Invoke `fn` with `args` and `kwargs`.
  Log a test failure if an exception is not raised or if the raised exception does not match `exp_exc`;
  see `_compare_exceptions`.
  '''
  global _utest_test_count
  _utest_test_count += 1
  try: ret = fn(*args, **kwargs)
  except Exception as exc:
    if not _compare_exceptions(exp_exc, exc):
      _utest_failure('exception', exp_exc, exc=exc, subj=fn, args=args, kwargs=kwargs)
  else:
    _utest_failure('exception', exp_exc, 'value', ret, subj=fn, args=args, kwargs=kwargs)


def utest_val(exp_val:Any, act_val:Any, desc='<value>') -> None:
  '''
  Log a test failure if `exp_val` does not equal `act_val`.
  Describe the test with the optional `desc`.
  '''
  global _utest_test_count
  _utest_test_count += 1
  if exp_val != act_val:
    _utest_failure('value', exp_val, 'value', act_val, subj=desc)


def _invoke(exp_label:str, exp:Any, fn:Callable, args:tuple[Any,...], kwargs:dict[str,Any]) -> Any:
  'Count and invoke a test; return `_no_value` if it raised, after logging the failure.'
  global _utest_test_count
  _utest_test_count += 1
  try: return fn(*args, **kwargs)
  except Exception as exc:
    _utest_failure(exp_label, exp, exc=exc, subj=fn, args=args, kwargs=kwargs, depth=2)
    return _no_value


def _utest_failure(exp_label:str, exp:Any, ret_label:str='', ret:Any=None, *, exc:BaseException|None=None, subj:Any,
 args:tuple[Any,...]=(), kwargs:dict[str,Any]={}, depth=1) -> None:

  global _utest_failure_count
  _utest_failure_count += 1

  info = _inspect.getframeinfo(_inspect.stack()[depth + 1][0]) # The test call site.
  try: name = subj.__qualname__
  except AttributeError: name = str(subj)
  path = _rel_path(info.filename)
  if '/' not in path: path = f'./{path}'
  _errL(f'\n{path}:{info.lineno}: utest failure: {name}')

  for i, el in enumerate(args):
    _errL(f'  arg {i} = {el!r}')
  for key, val in kwargs.items():
    _errL(f'  arg {key} = {val!r}')

  exp_label_colon = f'expected {exp_label}:'
  res_label_colon = 'raised exception:' if exc is not None else f'returned {ret_label}:'
  width = max(len(exp_label_colon), len(res_label_colon))
  _errL(f'  {exp_label_colon:{width}} {exp!r}')
  _errL(f'  {res_label_colon:{width}} {exc if exc is not None else ret!r}')
  if exc is not None:
    _errL()
    _print_exception(exc, file=_stderr)
  _errL()


def _compare_exceptions(exp:Any, act:BaseException) -> bool:
  '''
  Compare two exceptions for approximate value equality.
  Since Python exceptions do not implement value equality, we offer several methods of comparison:
  * if `exp` is a string, then compare it to the `str` of `act`.
  * if `exp` is a type, then test if `act` is an instance of `exp`.
  * otherwise, compare the types and args of `act` to `exp`.
  '''
  if isinstance(exp, str): return exp == str(act)
  if isinstance(exp, type): return isinstance(act, exp)
  return type(exp) == type(act) and exp.args == act.args


def _errL(*items:Any) -> None: print(*items, sep='', file=_stderr)


@_atexit.register
def report() -> None:
  'At process exit, if any test failures occured, print a summary message and force process to exit with status code 1.'
  from os import _exit
  if _utest_failure_count > 0:
    _errL(f'\nutest ran: {_utest_test_count}; failed: {_utest_failure_count}')
    _stderr.flush()
    _exit(1) # Raising SystemExit has no effect in an atexit handler.
