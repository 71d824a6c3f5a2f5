#!/usr/bin/env python3
# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from grammar.parse import parse
from grammar.pretty import pretty_str
from grammar.sjson import drop, lexer, SJSON
from utest import utest, utest_exc


def pretty_sjson(text:str) -> str:
  return pretty_str(parse(SJSON, lexer.stream(text, drop=drop), exhaust=True))


utest('''\
SJSON {
  list: List {
    open: Match
    items: [
      SJSON {
        number: number '1'
      }
      SJSON {
        number: number '2'
      }
      SJSON {
        number: number '3'
      }
    ]
    close: Match
  }
}
''', pretty_sjson, '[1, 2, 3]')


utest('''\
SJSON {
  object: Object {
    open: Match
    items: [
      Pair {
        key: string '"name"'
        colon: Match
        value: SJSON {
          string: string '"x"'
        }
      }
      Pair {
        key: string '"penalties"'
        colon: Match
        value: SJSON {
          list: List {
            open: Match
            close: Match
          }
        }
      }
    ]
    close: Match
  }
}
''', pretty_sjson, '{"name": "x", "penalties": []}')


utest_exc('token #3 op with value "]": expected token with type number or string or bool, or value "[" or "{"',
  pretty_sjson, '[1,]')
