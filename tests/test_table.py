import json

import pytest

from ll1 import AUGMENTED_START, Ambiguity, AmbiguityError, Grammar, GrammarError, LL1Parser


def _grammar(*rules: str) -> Grammar:
    G = Grammar()
    for rule in rules:
        nonterminal, body = rule.split("=", 1)
        G.add_rule(nonterminal, body)
    return G


def test_single_rule_table():
    table = _grammar("A=1").compile()

    assert table.dump() == {"A": {"1": "1"}}
    assert table.get("A", "1") == ("1",)
    assert table.get("A", "2") is None
    assert table.get("Q", "1") is None


def test_expression_table():
    table = _grammar(
        "E=TY",
        "Y=+TY",
        "Y=ε",
        "T=FH",
        "H=*FH",
        "H=ε",
        "F=(E)",
        "F=i",
    ).compile()

    assert table.dump() == {
        "E": {"(": "TY", "i": "TY"},
        "Y": {"+": "+TY", ")": "ε", "$": "ε"},
        "T": {"(": "FH", "i": "FH"},
        "H": {"*": "*FH", "+": "ε", ")": "ε", "$": "ε"},
        "F": {"(": "(E)", "i": "i"},
    }


def test_nullable_alternative_uses_follow():
    """The empty production goes under everything that can follow E."""
    p = LL1Parser()
    p.add_rule("E", "(E+I)")
    p.add_rule("E", "I")
    p.add_rule("E", "ε")
    p.add_rule("I", "0")
    p.add_rule("I", "1")
    p.compile()

    table = p.dump_transition_table()
    assert table["E"] == {"(": "(E+I)", "0": "I", "1": "I", "+": "ε", "$": "ε"}
    assert table["I"] == {"0": "0", "1": "1"}


def test_augmented_start_not_dumped():
    table = _grammar("A=a").compile()

    assert AUGMENTED_START not in table.dump()
    assert table.get(AUGMENTED_START, "a") == ("A", "$")


def test_empty_rows_are_dumped():
    # B can never be reached, but it is still a nonterminal with a row.
    table = _grammar("A=a", "B=ε").compile()

    assert table.dump() == {"A": {"a": "a"}, "B": {}}


def test_dump_is_idempotent():
    p = LL1Parser()
    p.add_rule("C", "AB")
    p.add_rule("A", "0")
    p.add_rule("B", "1")
    p.compile()

    first = p.dump_transition_table()
    second = p.dump_transition_table()
    assert first == second

    # Mutating a dump doesn't touch the table.
    first["C"]["9"] = "junk"
    assert p.dump_transition_table() == second


def test_to_json():
    table = _grammar("C=AB", "A=0", "B=1").compile()

    assert json.loads(table.to_json()) == table.dump()


def test_format():
    table = _grammar("S=aS", "S=ε").compile()

    lines = table.format().splitlines()
    assert lines[0].split() == ["|", "$", "a"]
    assert set(lines[1]) == {"-"}
    assert lines[2].split() == ["S", "|", "ε", "aS"]


def test_common_prefix_is_ambiguous():
    with pytest.raises(AmbiguityError) as exc:
        _grammar("A=a", "A=ab").compile()

    assert exc.value.ambiguities == [Ambiguity("A", "a", ("a",), ("a", "b"))]
    assert "'A -> a'" in str(exc.value)
    assert "'A -> ab'" in str(exc.value)


def test_left_recursion_is_ambiguous():
    with pytest.raises(AmbiguityError) as exc:
        _grammar("E=E+i", "E=i").compile()

    assert [(a.nonterminal, a.terminal) for a in exc.value.ambiguities] == [("E", "i")]


def test_two_nullable_alternatives_are_ambiguous():
    with pytest.raises(AmbiguityError) as exc:
        _grammar("A=B", "A=C", "B=ε", "C=ε").compile()

    ambiguity = exc.value.ambiguities[0]
    assert ambiguity.nonterminal == "A"
    assert ambiguity.terminal == "$"
    assert ambiguity.existing == ("B",)
    assert ambiguity.production == ("C",)


def test_first_follow_overlap_is_ambiguous():
    # With 'a' next, B could be 'a' itself or empty before the 'a' in A.
    with pytest.raises(AmbiguityError) as exc:
        _grammar("A=Ba", "B=a", "B=ε").compile()

    assert [(a.nonterminal, a.terminal) for a in exc.value.ambiguities] == [("B", "a")]
    assert exc.value.ambiguities[0].production == ()


def test_identical_productions_are_ambiguous():
    with pytest.raises(AmbiguityError):
        _grammar("A=x", "A=x").compile()


def test_every_ambiguity_is_reported():
    with pytest.raises(AmbiguityError) as exc:
        _grammar("A=xB", "A=xC", "B=y", "B=yy", "C=z").compile()

    found = {(a.nonterminal, a.terminal) for a in exc.value.ambiguities}
    assert found == {("A", "x"), ("B", "y")}
    assert str(exc.value).startswith("2 ambiguities:")


def test_ambiguous_grammar_cannot_parse():
    p = LL1Parser()
    p.add_rule("A", "a")
    p.add_rule("A", "ab")
    with pytest.raises(AmbiguityError):
        p.compile()

    with pytest.raises(GrammarError, match="failed to compile"):
        p.parse("a")

    with pytest.raises(GrammarError, match="failed to compile"):
        p.dump_transition_table()


def test_table_is_read_only():
    table = _grammar("A=aB", "B=b", "B=ε").compile()

    with pytest.raises(TypeError):
        table.rows["A"]["b"] = ("b",)  # type: ignore

    with pytest.raises(TypeError):
        table.rows["C"] = {}  # type: ignore

    with pytest.raises(TypeError):
        table.firsts.firsts["A"] = frozenset()  # type: ignore

    with pytest.raises(TypeError):
        table.follows.follows["B"] = frozenset()  # type: ignore

    assert table.dump() == {"A": {"a": "aB"}, "B": {"b": "b", "$": "ε"}}
