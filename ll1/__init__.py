"""A small LL(1) parser generator.

Add productions over single-character symbols, compile them into a
predictive parse table, and parse strings into concrete syntax trees:

    p = LL1Parser()
    p.add_rule("C", "AB")
    p.add_rule("A", "0")
    p.add_rule("B", "1")
    p.compile()

    p.parse("01")  # C(A(0), B(1))

Grammars that are not LL(1) are rejected by `compile` with an
`AmbiguityError`; input that is not in the language is rejected by `parse`
with a `ParseError`.

The pieces are also available separately: `Grammar` in [grammar], the
analyses in [analysis], `ParseTable` in [table], and `Parser` and `Tree` in
[runtime].
"""

from .errors import (
    Ambiguity,
    AmbiguityError,
    GrammarError,
    LL1Error,
    MissingTransition,
    ParseError,
    UnexpectedEndOfInput,
    UnexpectedToken,
)
from .grammar import Grammar
from .runtime import Parser, Tree
from .symbols import AUGMENTED_START, EPSILON, SENTINEL
from .table import ParseTable


class LL1Parser:
    """A grammar and its parser in one object.

    Add rules, compile once, then parse as often as you like. Rules cannot be
    added after compiling, and nothing can be parsed until a compile has
    succeeded.
    """

    grammar: Grammar
    _parser: Parser | None

    def __init__(self, name: str | None = None):
        self.grammar = Grammar(name)
        self._parser = None

    def add_rule(self, nonterminal: str, production: str):
        self.grammar.add_rule(nonterminal, production)

    def compile(self):
        self._parser = Parser(self.grammar.compile())

    @property
    def table(self) -> ParseTable:
        return self._compiled_parser().table

    def parse(self, input: str) -> Tree:
        return self._compiled_parser().parse(input)

    def dump_transition_table(self) -> dict[str, dict[str, str]]:
        return self.table.dump()

    def _compiled_parser(self) -> Parser:
        if self._parser is None:
            if self.grammar.compiled:
                # The grammar is frozen by the attempt, so this is permanent.
                raise GrammarError(f"Grammar '{self.grammar.name}' failed to compile")
            raise GrammarError(f"Grammar '{self.grammar.name}' has not been compiled")
        return self._parser


__all__ = [
    "AUGMENTED_START",
    "Ambiguity",
    "AmbiguityError",
    "EPSILON",
    "Grammar",
    "GrammarError",
    "LL1Error",
    "LL1Parser",
    "MissingTransition",
    "ParseError",
    "ParseTable",
    "Parser",
    "SENTINEL",
    "Tree",
    "UnexpectedEndOfInput",
    "UnexpectedToken",
]
