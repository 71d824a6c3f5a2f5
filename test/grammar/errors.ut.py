#!/usr/bin/env python3
# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from grammar.exceptions import expected_msg, ExcessToken, merge_errors, ParseError
from grammar.source import Source
from grammar.token import EndOfText, Token, TokenPattern
from utest import utest, utest_val


brace = Token('op', '}')
number = TokenPattern('number')
close_bkt = TokenPattern('op', ']')

at3 = ParseError(brace, 3, expected=[number])
at3_bkt = ParseError(brace, 3, expected=[close_bkt])
at1 = ParseError(Token('name', 'x'), 1, cause='no good')


# Messages.

utest('token #3 op with value "}": expected token with type number', str, at3)
utest('token #1 name with value "x": no good', str, at1)
utest('token #4 end_of_text with value "": expected token with value "]"',
  str, ParseError(EndOfText(), 4, expected=[close_bkt]))
utest('token #0 string with value "\\"a\\"": parse failed', str, ParseError(Token('string', '"a"'), 0))

utest('expected token with type number, or value ","',
  expected_msg, [number, number, TokenPattern('op', ','), TokenPattern('op', ',')])
utest('expected token with type a or b', expected_msg, [TokenPattern('a'), TokenPattern('b'), TokenPattern('a')])
utest('expected token with value "x" or "y"', expected_msg, [TokenPattern('', 'x'), TokenPattern('', 'y')])
utest('expected any token', expected_msg, [])


# Merging: the furthest error wins; ties concatenate the expected patterns.

utest_val(True, at3.merge(at1) is at3, 'further error kept when merged with a nearer one')
utest_val(True, at1.merge(at3) is at3, 'further error wins when merged into a nearer one')
utest_val(True, at3.merge(None) is at3, 'merge with None')
utest_val(True, merge_errors(None, at3) is at3, 'merge_errors with None first')
utest_val(True, merge_errors(at3, None) is at3, 'merge_errors with None second')
utest_val(None, merge_errors(None, None), 'merge_errors with two Nones')

utest((number, close_bkt), lambda: at3.merge(at3_bkt).expected)
utest((close_bkt, number), lambda: at3_bkt.merge(at3).expected)
utest('token #3 op with value "}": expected token with type number, or value "]"', str, at3.merge(at3_bkt))
utest((at3.pos, at3.expected), lambda: (at3.merge(at3).pos, at3.merge(at3).expected))

utest(ExcessToken, lambda: type(ExcessToken(brace, 3, expected=[TokenPattern('end_of_text')]).merge(at3_bkt)))


# Diagnostics.

source = Source('test.json', '[1, }\n')
located = ParseError(Token('op', '}', slice(4, 5)), 3, expected=[close_bkt])

utest('test.json:1:5-6: parse error: token #3 op with value "}": expected token with value "]"\n| [1, }\n      ~\n',
  located.diagnostic, source)

utest('test.json: parse error: token #3 op with value "}": expected token with type number\n', at3.diagnostic, source)

eot = ParseError(EndOfText(slice(6, 6)), 4, expected=[close_bkt])
utest('test.json:1:7: parse error: token #4 end_of_text with value "": expected token with value "]"\n| [1, }⏎\n        ^\n',
  eot.diagnostic, source)
