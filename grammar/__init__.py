# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
A declarative grammar parsing library.

Grammars are written as classes deriving from `OneOf` (exactly one of the alternatives) or `Seq` (all of the fields in order).
The annotated fields of each class describe its structure;
`parse` interprets those declarations against a token stream and returns a tree of rule class instances.
'''

from .exceptions import ExcessToken, merge_errors, ParseError, RuleDefError
from .parse import parse, ParseState
from .pretty import pretty_lines, pretty_str, pretty_write
from .rules import Match, OneOf, Rule, Seq
from .ruledef import Card, compile_rule_def, FieldDef, Kind, rule_def, RuleDef, tok
from .source import Source
from .token import EndOfText, LazyTokenStream, ListTokenStream, Token, TokenMatch, TokenPattern, TokenStream
