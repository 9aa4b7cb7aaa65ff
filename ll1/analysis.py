"""Static analysis of a grammar: nullable, FIRST and FOLLOW.

All three are computed the same way, by iterating a per-production update rule
over the whole grammar until a full pass changes nothing. Every rule only ever
adds to a set, and every set is bounded by the alphabet, so this terminates.
"""

import dataclasses
import logging
import types
import typing

from .symbols import Production

Productions = typing.Mapping[str, typing.Sequence[Production]]


analysis_log = logging.getLogger("ll1.analysis")


def update_changed(items: set[str], other: typing.Iterable[str]) -> bool:
    """Merge the `other` set into the `items` set, and return True if this
    changed the items set.
    """
    old_len = len(items)
    items.update(other)
    return old_len != len(items)


def fixed_point(
    name: str,
    grammar: Productions,
    update: typing.Callable[[str, Production], bool],
) -> int:
    """Call `update(nonterminal, production)` for every production in the
    grammar, over and over, until a full pass reports no change.

    Returns the number of passes it took, which is mostly interesting for
    logging.
    """
    passes = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        for nonterminal, productions in grammar.items():
            for production in productions:
                # NOTE: `update` must run even if we already know we changed.
                changed = update(nonterminal, production) or changed

    analysis_log.debug(f"{name}: fixed point after {passes} passes")
    return passes


def nullable_set(grammar: Productions) -> frozenset[str]:
    """The set of nonterminals that can match zero symbols.

    A nonterminal is nullable if any one of its productions is made up entirely
    of nullable symbols; the empty production trivially is. Terminals are never
    nullable.
    """
    nullable: set[str] = set()

    def update(nonterminal: str, production: Production) -> bool:
        if nonterminal in nullable:
            return False
        if all(symbol in nullable for symbol in production):
            nullable.add(nonterminal)
            return True
        return False

    fixed_point("nullable", grammar, update)
    return frozenset(nullable)


def _first_of(
    firsts: typing.Mapping[str, typing.AbstractSet[str]],
    nullable: typing.AbstractSet[str],
    symbols: typing.Iterable[str],
) -> set[str]:
    result: set[str] = set()
    for symbol in symbols:
        result.update(firsts[symbol])
        if symbol not in nullable:
            break
    return result


@dataclasses.dataclass(frozen=True)
class FirstInfo:
    """A structure that tracks the first set of a grammar. (Or, as it is
    commonly styled in textbooks, FIRST.)

    firsts[s] is the set of terminals that can begin a derivation from the
    symbol s. For a terminal, firsts[s] == {s}.

    nullable is the set of nonterminals that can derive the empty sequence.

    For example, consider the following grammar:

        X -> YA
        Y -> Z | Bx | ε
        Z -> C | Dx

    FIRST(Z) is {C, D}. FIRST(Y) is {B, C, D}: Z comes first in the first
    production, so all of FIRST(Z) is in there, and B comes first in the
    second. The empty production contributes nothing to FIRST(Y) but it makes
    Y nullable.

    Finally, FIRST(X) is {A, B, C, D}. Since Y is nullable, it is also legal
    for X to begin with A.
    """

    firsts: typing.Mapping[str, frozenset[str]]
    nullable: frozenset[str]

    @classmethod
    def from_grammar(
        cls,
        grammar: Productions,
        terminals: typing.Iterable[str],
        nullable: frozenset[str],
    ) -> "FirstInfo":
        """Construct a new FirstInfo from the specified grammar.

        Every symbol that appears in a production must be either a key in the
        grammar or one of `terminals`.
        """
        firsts: dict[str, set[str]] = {terminal: {terminal} for terminal in terminals}
        for nonterminal in grammar:
            firsts[nonterminal] = set()

        def update(nonterminal: str, production: Production) -> bool:
            return update_changed(
                firsts[nonterminal],
                _first_of(firsts, nullable, production),
            )

        fixed_point("first", grammar, update)
        return FirstInfo(
            firsts=types.MappingProxyType({symbol: frozenset(f) for symbol, f in firsts.items()}),
            nullable=nullable,
        )

    def is_nullable(self, symbol: str) -> bool:
        return symbol in self.nullable

    def all_nullable(self, symbols: typing.Iterable[str]) -> bool:
        """True if every symbol in the sequence is nullable. (The empty
        sequence is.)"""
        return all(symbol in self.nullable for symbol in symbols)

    def first_of(self, symbols: typing.Iterable[str]) -> set[str]:
        """FIRST of a sequence of symbols.

        This is the union of FIRST of each symbol, from the left, up to and
        including the first one that is not nullable. If every symbol is
        nullable it is the union over the whole sequence.
        """
        return _first_of(self.firsts, self.nullable, symbols)


@dataclasses.dataclass(frozen=True)
class FollowInfo:
    """A structure that tracks the follow set of a grammar. (Or, again, as the
    textbooks would have it, FOLLOW.)

    The follow set for a nonterminal is the set of terminals that can appear
    immediately after the nonterminal in some sentential form.

    We walk each production backwards carrying a "trailing" set: the terminals
    that can follow the position we're at. It starts out as the follow of the
    nonterminal that owns the production. Every nonterminal we pass gets the
    trailing set merged into its follow. Then the trailing set becomes FIRST
    of the symbol we just passed, plus the old trailing set if that symbol can
    be empty.

    Consider:

        S -> XA
        X -> YB | YZ
        Y -> XC
        Z -> D | ε

    FOLLOW(Y) is {A, B, C, D}. B and D come straight from the productions of
    X. A and C come from Z being nullable: Y can end up at the end of X, so
    anything that follows X can follow Y, and A and C both follow X.

    None of this produces '$' on its own. The grammar is augmented with a
    start production ending in the sentinel before this runs, and that is
    where '$' flows in from.
    """

    follows: typing.Mapping[str, frozenset[str]]

    @classmethod
    def from_grammar(cls, grammar: Productions, firsts: FirstInfo) -> "FollowInfo":
        follows: dict[str, set[str]] = {nonterminal: set() for nonterminal in grammar}

        def update(nonterminal: str, production: Production) -> bool:
            changed = False
            trailing: typing.AbstractSet[str] = follows[nonterminal]
            for symbol in reversed(production):
                symbol_follows = follows.get(symbol)
                if symbol_follows is not None:
                    changed = update_changed(symbol_follows, trailing) or changed

                if firsts.is_nullable(symbol):
                    trailing = firsts.firsts[symbol] | trailing
                else:
                    trailing = firsts.firsts[symbol]

            return changed

        fixed_point("follow", grammar, update)
        return FollowInfo(
            follows=types.MappingProxyType({symbol: frozenset(f) for symbol, f in follows.items()})
        )

    def follow(self, nonterminal: str) -> frozenset[str]:
        return self.follows[nonterminal]
