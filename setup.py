# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from setuptools import setup


setup(
  name='grammar',
  version='0.0.1',
  description='Declarative recursive descent parsing: grammars are classes deriving from OneOf or Seq.',
  python_requires='>=3.10',

  packages=['grammar', 'utest'],
  entry_points={'console_scripts': ['grammar=grammar.__main__:main']},
)
