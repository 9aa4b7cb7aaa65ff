import json

import pytest

from ll1 import harness


def test_parse_and_print_tree(capsys):
    status = harness.main(["ll1-harness", "C=AB", "A=0", "B=1", "--input", "01"])

    assert status == 0
    out = capsys.readouterr().out
    assert out == "'01':\nC\n  A\n    0\n  B\n    1\n"


def test_print_json_table(capsys):
    status = harness.main(["ll1-harness", "S=aS", "S=", "--json"])

    assert status == 0
    assert json.loads(capsys.readouterr().out) == {"S": {"a": "aS", "$": "ε"}}


def test_print_table(capsys):
    status = harness.main(["ll1-harness", "S=aS", "S=ε", "--table"])

    assert status == 0
    assert "aS" in capsys.readouterr().out


def test_parse_error(capsys):
    status = harness.main(["ll1-harness", "A=1", "-i", "1", "-i", "2"])

    assert status == 1
    captured = capsys.readouterr()
    assert captured.out.startswith("'1':")
    assert "'2': error at 0" in captured.err


def test_ambiguous_grammar(capsys):
    status = harness.main(["ll1-harness", "A=a", "A=ab", "-i", "a"])

    assert status == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "1 ambiguities" in captured.err


def test_bad_rule():
    with pytest.raises(SystemExit):
        harness.main(["ll1-harness", "AB=c"])


def test_deep_tree(capsys):
    status = harness.main(["ll1-harness", "S=aS", "S=", "-i", "a" * 1500])

    assert status == 0
    out = capsys.readouterr().out.splitlines()
    assert out[1] == "S"
    assert out[-1] == (" " * 3002) + "ε"
