"""A command line harness for poking at grammars.

    ll1-harness 'E=TY' 'Y=+TY' 'Y=ε' 'T=(E)' 'T=i' --table --input 'i+(i)'

Each rule is NONTERMINAL=BODY, one production per argument. An empty body is
the empty production. The first rule's nonterminal is the start symbol.
"""

import argparse
import logging
import sys

from .errors import LL1Error, ParseError
from .grammar import Grammar
from .runtime import Parser


def parse_rule(rule: str) -> tuple[str, str]:
    nonterminal, sep, body = rule.partition("=")
    if sep == "" or len(nonterminal) != 1:
        raise argparse.ArgumentTypeError(
            f"'{rule}' is not a rule: expected a single-character nonterminal, '=', and a body"
        )
    return nonterminal, body


def main(args: list[str]) -> int:
    parser = argparse.ArgumentParser(description="A debugging harness for LL(1) grammars")
    parser.add_argument(
        "rules",
        nargs="+",
        type=parse_rule,
        metavar="RULE",
        help="A production, written as NONTERMINAL=BODY, e.g. 'E=(E)'.",
    )
    parser.add_argument(
        "--input",
        "-i",
        action="append",
        default=[],
        help="A string to parse with the grammar. May be given more than once.",
    )
    parser.add_argument(
        "--table",
        action="store_true",
        help="Print the parse table.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the parse table as JSON.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every action the parser takes.",
    )

    parsed = parser.parse_args(args[1:])
    if parsed.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    grammar = Grammar("command line")
    for nonterminal, body in parsed.rules:
        grammar.add_rule(nonterminal, body)

    try:
        table = grammar.compile()
    except LL1Error as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if parsed.table:
        print(table.format())
    if parsed.json:
        print(table.to_json())

    status = 0
    runtime = Parser(table)
    for text in parsed.input:
        try:
            tree = runtime.parse(text)
        except ParseError as e:
            print(f"{text!r}: error at {e.position}: {e}", file=sys.stderr)
            status = 1
            continue

        print(f"{text!r}:")
        print(tree.format())

    return status


def entry_point():
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    entry_point()
