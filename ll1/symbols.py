"""Reserved symbols.

Grammar symbols are single characters, so the augmented start symbol gets a
two character name that no user grammar can ever mention.
"""
import typing

SENTINEL = "$"
EPSILON = "ε"
AUGMENTED_START = "S'"

Production = typing.Tuple[str, ...]


def production_str(production: Production) -> str:
    """Render a production the way it was written, with the epsilon marker
    standing in for the empty production."""
    return "".join(production) if len(production) > 0 else EPSILON
