import dataclasses

from .symbols import Production, production_str


class LL1Error(Exception):
    """The base of every error raised by this package."""


class GrammarError(LL1Error):
    """The grammar was used out of order: rules added after compiling, a parse
    attempted before compiling, or an empty grammar compiled."""


@dataclasses.dataclass(frozen=True)
class Ambiguity:
    nonterminal: str
    terminal: str
    existing: Production
    production: Production

    def __str__(self):
        return (
            f"When expanding '{self.nonterminal}' and seeing '{self.terminal}' we "
            f"don't know whether to use '{self.nonterminal} -> {production_str(self.existing)}' "
            f"or '{self.nonterminal} -> {production_str(self.production)}'"
        )


class AmbiguityError(GrammarError):
    ambiguities: list[Ambiguity]

    def __init__(self, ambiguities: list[Ambiguity]):
        super().__init__(ambiguities)
        self.ambiguities = ambiguities

    def __str__(self):
        return f"{len(self.ambiguities)} ambiguities:\n\n" + "\n\n".join(
            str(ambiguity) for ambiguity in self.ambiguities
        )


class ParseError(LL1Error):
    """The input is not a sentence of the grammar.

    `position` is the index in the input of the symbol we were looking at when
    we gave up. (It is `len(input)` when we were looking at the end.)
    """

    position: int

    def __init__(self, message: str, position: int):
        super().__init__(message)
        self.position = position


class UnexpectedToken(ParseError):
    token: str
    expected: str

    def __init__(self, token: str, expected: str, position: int):
        super().__init__(f"Unexpected token '{token}', expects '{expected}'", position)
        self.token = token
        self.expected = expected


class MissingTransition(ParseError):
    nonterminal: str
    lookahead: str

    def __init__(self, nonterminal: str, lookahead: str, position: int):
        super().__init__(
            f"Failed to find grammar for transition '{nonterminal} => {lookahead}'",
            position,
        )
        self.nonterminal = nonterminal
        self.lookahead = lookahead


class UnexpectedEndOfInput(ParseError):
    """We finished the start symbol but there is still input left over."""

    remaining: str

    def __init__(self, remaining: str, position: int):
        super().__init__(
            f"Unexpected end of input: '{remaining}' remains at position {position}",
            position,
        )
        self.remaining = remaining
