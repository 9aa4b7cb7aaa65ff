import dataclasses
import json
import logging
import types
import typing

from .analysis import FirstInfo, FollowInfo
from .errors import Ambiguity, AmbiguityError
from .symbols import AUGMENTED_START, Production, production_str


table_log = logging.getLogger("ll1.table")


@dataclasses.dataclass(frozen=True)
class ParseTable:
    """A compiled LL(1) table.

    rows[N][t] is the production to expand N with when the next input symbol
    is t. Anything missing from a row is a syntax error. There is a row for
    every nonterminal, including the augmented start, even if it is empty.

    The analyses that built the table ride along so that they can be
    inspected. Nothing here is modified after construction, so a single table
    can be shared by any number of parsers.
    """

    start: str
    terminals: frozenset[str]
    rows: typing.Mapping[str, typing.Mapping[str, Production]]
    firsts: FirstInfo
    follows: FollowInfo

    def get(self, nonterminal: str, terminal: str) -> Production | None:
        row = self.rows.get(nonterminal)
        if row is None:
            return None
        return row.get(terminal)

    def is_terminal(self, symbol: str) -> bool:
        return symbol in self.terminals

    def is_nonterminal(self, symbol: str) -> bool:
        return symbol in self.rows

    def dump(self) -> dict[str, dict[str, str]]:
        """The table as plain nested dictionaries, nonterminal to terminal to
        production. Empty productions come out as the epsilon marker.

        The augmented start row is an implementation detail and is left out.
        """
        return {
            nonterminal: {terminal: production_str(p) for terminal, p in row.items()}
            for nonterminal, row in self.rows.items()
            if nonterminal != AUGMENTED_START
        }

    def to_json(self) -> str:
        return json.dumps(self.dump(), indent=2, sort_keys=True, ensure_ascii=False)

    def format(self) -> str:
        """Format a parser table so pretty."""
        dumped = self.dump()
        terminals = sorted({t for row in dumped.values() for t in row.keys()})
        width = max([len(p) for row in dumped.values() for p in row.values()] + [3])

        header = "  | {terms}".format(
            terms=" ".join(f"{terminal: <{width}}" for terminal in terminals),
        )
        lines = [
            header,
            "-" * len(header),
        ] + [
            "{name} | {cells}".format(
                name=nonterminal,
                cells=" ".join(f"{row.get(terminal, ''): <{width}}" for terminal in terminals),
            ).rstrip()
            for nonterminal, row in dumped.items()
        ]
        return "\n".join(lines)


class TableBuilder(object):
    """A helper object to assemble productions into a parse table.

    Call `add_production` for every production in the grammar, then `flush`
    when you're done. Conflicts are collected as they are found and reported
    all together by `flush`.
    """

    start: str
    firsts: FirstInfo
    follows: FollowInfo
    rows: dict[str, dict[str, Production]]
    ambiguities: list[Ambiguity]

    def __init__(
        self,
        start: str,
        nonterminals: typing.Iterable[str],
        terminals: typing.Iterable[str],
        firsts: FirstInfo,
        follows: FollowInfo,
    ):
        self.start = start
        self.terminals = frozenset(terminals)
        self.firsts = firsts
        self.follows = follows
        self.rows = {nonterminal: {} for nonterminal in nonterminals}
        self.ambiguities = []

    def add_production(self, nonterminal: str, production: Production):
        """Enter the production in every cell of the nonterminal's row where it
        applies: under everything in FIRST of the production and, if the whole
        production can be empty, under everything in FOLLOW of the nonterminal.
        """
        for terminal in sorted(self.firsts.first_of(production)):
            self._set_table_entry(nonterminal, terminal, production)

        if self.firsts.all_nullable(production):
            for terminal in sorted(self.follows.follow(nonterminal)):
                self._set_table_entry(nonterminal, terminal, production)

    def _set_table_entry(self, nonterminal: str, terminal: str, production: Production):
        """Set the production for (nonterminal, terminal).

        Any second write to a cell is a conflict, even if it is the same
        production again. The first production stays in the cell.
        """
        row = self.rows[nonterminal]
        existing = row.get(terminal)
        if existing is not None:
            table_log.debug(
                f"conflict at ({nonterminal}, {terminal}): "
                f"{production_str(existing)} vs {production_str(production)}"
            )
            self.ambiguities.append(Ambiguity(nonterminal, terminal, existing, production))
            return

        row[terminal] = production

    def flush(self) -> ParseTable:
        """Finish building the table and return it.

        Raises AmbiguityError if there were any conflicts during construction.
        """
        if len(self.ambiguities) > 0:
            raise AmbiguityError(self.ambiguities)

        # Copies, so that nothing done to the builder afterwards reaches the table.
        rows = types.MappingProxyType(
            {nonterminal: types.MappingProxyType(dict(row)) for nonterminal, row in self.rows.items()}
        )
        return ParseTable(
            start=self.start,
            terminals=self.terminals,
            rows=rows,
            firsts=self.firsts,
            follows=self.follows,
        )
