#!/usr/bin/env python3
# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from typing import Any, Iterator

from grammar.lex import Lexer, LexMode, LexTrans
from grammar.source import Source
from grammar.token import EndOfText, Token
from utest import utest, utest_exc, utest_seq


def run_lexer(lexer:Lexer, string:str, **kwargs:Any) -> Iterator[tuple[str,str]]:
  'Run `lexer` on `string`, yielding (kind, text) pairs.'
  source = Source(name='test', text=string)
  for token in lexer.lex(source, **kwargs):
    assert token.slc is not None
    assert source[token.slc] == token.text
    yield token.kind, token.text


num_lexer = Lexer(patterns=dict(
  newline = r'\n',
  spaces = r' +',
  num = r'\d+',
))

utest_seq([('num', '1'), ('spaces', ' '), ('num', '20'), ('newline', '\n')],
  run_lexer, num_lexer, '1 20\n')

utest_seq([('num', '1'), ('num', '20')],
  run_lexer, num_lexer, '1 20\n', drop={'newline', 'spaces'})

utest_seq([('num', '1'), ('invalid', 'x'), ('num', '2')], run_lexer, num_lexer, '1 x 2', drop={'spaces'})

utest_seq([Token('num', '7'), Token('spaces', ' ')], num_lexer.lex, '7 ')

utest_seq([slice(0, 1), slice(2, 4)], lambda: [t.slc for t in num_lexer.lex('1 20', drop={'spaces'})])


word_lexer = Lexer(patterns=dict(
  word = r'\w+',
))

utest_seq([('invalid', '!'), ('word', 'a'), ('invalid', ' '), ('word', 'b2'), ('invalid', '.')],
  run_lexer, word_lexer, '!a b2.')

utest_seq([('word', 'a'), ('word', 'b2')],
  run_lexer, word_lexer, '!a b2.', drop={'invalid'})


# Streams.

def drain_stream(lexer:Lexer, text:str) -> list[Token]:
  stream = lexer.stream(text, drop={'spaces'})
  return [stream.next() for _ in range(4)]

utest([Token('num', '1'), Token('num', '2'), EndOfText(), EndOfText()], drain_stream, num_lexer, '1 2')

utest(slice(3, 3), lambda: drain_stream(num_lexer, '1 2')[-1].slc)


# Modes.

str_lexer = Lexer(
  patterns=dict(
    quote = r'"',
    esc = r'\\.',
    text = r'[^"\\]+',
    name = r'[a-z]+',
    space = r' +',
  ),
  modes=[
    LexMode('main', kinds=['quote', 'name', 'space']),
    LexMode('str', kinds=['quote', 'esc', 'text']),
  ],
  transitions=[
    LexTrans('main', kind='quote', mode='str', pop='quote', consume=True),
  ])

utest_seq([
    ('name', 'a'), ('space', ' '), ('quote', '"'), ('text', 'b c'), ('esc', '\\"'), ('quote', '"'),
    ('space', ' '), ('name', 'd')],
  run_lexer, str_lexer, 'a "b c\\"" d')

utest_seq([('quote', '"'), ('text', 'x y')], run_lexer, str_lexer, '"x y')


# Definition errors.

utest_exc(Lexer.DefinitionError("'num' pattern value must be a string; found 0"),
  Lexer, patterns=dict(num=0))

utest_exc(Lexer.DefinitionError("'star' pattern is invalid: (?P<star>*)"),
  Lexer, patterns=dict(star='*'))

utest_exc(Lexer.DefinitionError("'b' pattern contains a conflicting capture group name: 'a'"),
  Lexer, patterns=dict(a='a', b='(?P<a>b)'))

utest_exc(Lexer.DefinitionError('Lexer instance must define at least one pattern'), Lexer, patterns={})

utest_exc(Lexer.DefinitionError("name is reserved: 'end_of_text'"), Lexer, patterns=dict(end_of_text='x'))

utest_exc(Lexer.DefinitionError("name is reserved: 'invalid'"), Lexer, patterns=dict(invalid='x'))

utest_exc(Lexer.DefinitionError("invalid name: '1x'"), Lexer, patterns={'1x': 'x'})

utest_exc(Lexer.DefinitionError("mode 'main' includes nonexistent pattern: 'b'"),
  Lexer, patterns=dict(a='a'), modes=[LexMode('main', kinds=['a', 'b'])])

utest_exc(Lexer.DefinitionError("unknown child mode: 'str'"),
  Lexer, patterns=dict(a='a'), transitions=[LexTrans('main', kind='a', mode='str', pop='a')])

utest_exc(Lexer.DefinitionError("main mode cannot be pushed: 'main'"),
  Lexer, patterns=dict(a='a'), transitions=[LexTrans('main', kind='a', mode='main', pop='a')])

utest_exc(Lexer.DefinitionError,
  lambda: list(Lexer(patterns=dict(caret='^', a='a')).lex('a')))
