#!/usr/bin/env python3
# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from grammar.source import Source
from utest import utest, utest_exc


source = Source('s', 'ab\ncd')

utest(0, source.get_line_index, 1)
utest(1, source.get_line_index, 3)
utest(1, source.get_line_index, 5)
utest_exc(IndexError, source.get_line_index, 6)
utest(3, source.get_line_start, 4)
utest(3, source.get_line_end, 0)

utest('s:2:1-3: m\n| cd⏎͓\n  ~~\n', source.diagnostic, slice(3, 5), 'm')
utest('s:1:2:\n| ab\n   ^\n', source.diagnostic, slice(1, 1))

quiet = Source('q', 'x', show_missing_newline=False)
utest('q:1:1-2: m\n| x\n  ~\n', quiet.diagnostic, slice(0, 1), 'm')
