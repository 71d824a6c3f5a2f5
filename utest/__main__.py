#!/usr/bin/env python3
# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from argparse import ArgumentParser
from os import environ, getcwd, walk
from os.path import isdir, join as path_join
from subprocess import run
from sys import executable


def main() -> None:
  arg_parser = ArgumentParser(description='Find and run utest unit tests with the extension ".ut.py", defaulting to "test/".')
  arg_parser.add_argument('paths', nargs='*', default=['test'])
  args = arg_parser.parse_args()
  paths = walk_test_paths(args.paths)

  work_dir = getcwd()
  env = dict(environ)
  env.setdefault('UTEST_WORK_DIR', work_dir)
  python_path = env.get('PYTHONPATH')
  env['PYTHONPATH'] = f'{work_dir}:{python_path}' if python_path else work_dir

  ok = True
  for path in paths:
    print(path)
    c = run([executable, path], env=env).returncode
    if c != 0:
      ok = False
      print()

  exit(0 if ok else 1)


def walk_test_paths(paths:list[str]) -> list[str]:
  'Expand directories in `paths` into the sorted test files they contain.'
  res = []
  for path in paths:
    if not isdir(path):
      res.append(path)
      continue
    for dir_path, dir_names, file_names in walk(path):
      dir_names.sort()
      res.extend(path_join(dir_path, n) for n in sorted(file_names) if n.endswith('.ut.py'))
  return res


if __name__ == '__main__': main()
