"""Grammars for the LL(1) parser generator.

A grammar is a list of productions keyed by nonterminal, where every symbol is
a single character:

    grammar = Grammar()
    grammar.add_rule("E", "TY")
    grammar.add_rule("Y", "+TY")
    grammar.add_rule("Y", "ε")
    grammar.add_rule("T", "(E)")
    grammar.add_rule("T", "i")

    table = grammar.compile()

A symbol is a nonterminal if it has rules, and a terminal otherwise; nothing
needs to be declared up front. The first nonterminal to get a rule is the
start symbol. The epsilon marker 'ε' is dropped from production bodies, so
"ε" is the empty production (and so is "").

Compiling freezes the grammar. The resulting `ParseTable` is what you hand
to `ll1.runtime.Parser`.
"""

import logging
import typing

from .analysis import FirstInfo, FollowInfo, nullable_set
from .errors import GrammarError
from .symbols import AUGMENTED_START, EPSILON, SENTINEL, Production
from .table import ParseTable, TableBuilder


grammar_log = logging.getLogger("ll1.grammar")


class Grammar:
    name: str
    start: str | None
    _rules: dict[str, list[Production]]
    _terminals: frozenset[str]
    _compiled: bool

    def __init__(self, name: str | None = None):
        if name is None:
            name = "unknown"

        self.name = name
        self.start = None
        self._rules = {}
        self._terminals = frozenset()
        self._compiled = False

    def add_rule(self, nonterminal: str, production: typing.Iterable[str]):
        """Add a production for `nonterminal`.

        `production` is a string (or any sequence) of single-character symbols.
        Epsilon markers are removed, so "ε" and "" are both the empty
        production.
        """
        if self._compiled:
            raise GrammarError(
                f"Cannot add a rule for '{nonterminal}': grammar '{self.name}' is already compiled"
            )

        if self.start is None:
            self.start = nonterminal

        refined = tuple(symbol for symbol in production if symbol != EPSILON)

        rules = self._rules.get(nonterminal)
        if rules is None:
            rules = []
            self._rules[nonterminal] = rules
        rules.append(refined)

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def nonterminals(self) -> list[str]:
        return list(self._rules.keys())

    @property
    def terminals(self) -> frozenset[str]:
        """The terminals of the grammar. Only meaningful once compiled."""
        return self._terminals

    def rules(self, nonterminal: str) -> list[Production]:
        return list(self._rules.get(nonterminal, ()))

    def productions(self) -> typing.Iterator[typing.Tuple[str, Production]]:
        """Every (nonterminal, production) pair, in the order they were added."""
        for nonterminal, rules in self._rules.items():
            for rule in rules:
                yield (nonterminal, rule)

    def is_nonterminal(self, symbol: str) -> bool:
        return symbol in self._rules

    def is_terminal(self, symbol: str) -> bool:
        return symbol in self._terminals

    def populate_terms(self):
        """Classify symbols: everything that shows up in a production and isn't
        a nonterminal is a terminal. The sentinel is always a terminal.
        """
        symbols = {symbol for _, production in self.productions() for symbol in production}
        symbols.add(SENTINEL)
        self._terminals = frozenset(s for s in symbols if not self.is_nonterminal(s))

    def add_augmented_start(self):
        """Add the synthetic top rule, S' -> start $, so that the end of input
        shows up in FOLLOW(start).
        """
        assert self.start is not None
        self._rules[AUGMENTED_START] = [(self.start, SENTINEL)]

    def compile(self) -> ParseTable:
        """Construct an LL(1) parse table for this grammar.

        This can only be done once; afterwards the grammar is frozen. Raises
        AmbiguityError if two productions claim the same table cell, in which
        case no table is produced at all.
        """
        if self._compiled:
            raise GrammarError(f"Grammar '{self.name}' is already compiled")
        if self.start is None:
            raise GrammarError(f"Grammar '{self.name}' has no rules")

        self._compiled = True
        self.populate_terms()
        self.add_augmented_start()

        nullable = nullable_set(self._rules)
        firsts = FirstInfo.from_grammar(self._rules, self._terminals, nullable)
        follows = FollowInfo.from_grammar(self._rules, firsts)

        builder = TableBuilder(
            self.start,
            self.nonterminals,
            self._terminals,
            firsts,
            follows,
        )
        for nonterminal, production in self.productions():
            builder.add_production(nonterminal, production)

        table = builder.flush()
        if grammar_log.isEnabledFor(logging.INFO):
            grammar_log.info(
                f"compiled '{self.name}': {len(self._rules)} nonterminals, "
                f"{len(self._terminals)} terminals"
            )
        return table
