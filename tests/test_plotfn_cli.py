from __future__ import annotations

import argparse
import json
import sys
from types import SimpleNamespace

import pytest

import plotfn
from adapters.expression_parser.descent_parser import parse


def _run(monkeypatch, *argv: str) -> None:
    monkeypatch.setattr(sys, "argv", ["plotfn", *argv])
    plotfn.main()


def test_binding_parses_name_value():
    assert plotfn._binding("x=1.5") == ("x", 1.5)
    with pytest.raises(argparse.ArgumentTypeError):
        plotfn._binding("x")
    with pytest.raises(argparse.ArgumentTypeError):
        plotfn._binding("x=abc")


def test_eval_prints_value(monkeypatch, capsys):
    _run(monkeypatch, "eval", "--text", "3x", "--var", "x=10")
    assert "30" in capsys.readouterr().out


def test_eval_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", _FakeStdin("log(9, 3)\n"))
    _run(monkeypatch, "eval")
    assert "2" in capsys.readouterr().out


def test_eval_unbound_variable_exits(monkeypatch, capsys):
    with pytest.raises(SystemExit) as info:
        _run(monkeypatch, "eval", "--text", "y")
    assert info.value.code == 1
    assert "VariableNotFoundError" in capsys.readouterr().err


def test_parse_json(monkeypatch, capsys):
    _run(monkeypatch, "parse", "--text", "sin(x)", "--json")
    tree = json.loads(capsys.readouterr().out)
    assert tree == {"node_type": "unary", "op": "sin", "child": {"node_type": "variable", "name": "x"}}


def test_parse_error_exits(monkeypatch, capsys):
    with pytest.raises(SystemExit) as info:
        _run(monkeypatch, "parse", "--text", "3+")
    assert info.value.code == 1
    assert "ParseError" in capsys.readouterr().err


def test_sample_reports_points(monkeypatch, capsys):
    _run(monkeypatch, "sample", "--text", "x", "--start", "0", "--end", "1", "--resolution", "4")
    out = capsys.readouterr().out
    assert "Próbkowanie" in out
    assert "0.75" in out


def test_sample_range_error_exits(monkeypatch, capsys):
    with pytest.raises(SystemExit) as info:
        _run(monkeypatch, "sample", "--text", "x", "--start", "2", "--end", "1")
    assert info.value.code == 1
    assert "RangeError" in capsys.readouterr().err


def test_non_negative_rejects_negative_and_text():
    assert plotfn._non_negative("0") == 0
    assert plotfn._non_negative("12") == 12
    with pytest.raises(argparse.ArgumentTypeError):
        plotfn._non_negative("-5")
    with pytest.raises(argparse.ArgumentTypeError):
        plotfn._non_negative("abc")


@pytest.mark.parametrize("flag, value", [("--resolution", "-5"), ("--width", "-1")])
def test_sample_negative_resolution_is_usage_error(monkeypatch, capsys, flag, value):
    with pytest.raises(SystemExit) as info:
        _run(monkeypatch, "sample", "--text", "x", flag, value)
    assert info.value.code == 2
    assert ">= 0" in capsys.readouterr().err


def test_expr_tree_handles_long_sums():
    tree = plotfn._expr_tree(parse("+".join(["x"] * 3000)))

    depth = 0
    branch = tree
    while branch.children:
        branch = branch.children[0]
        depth += 1
    assert depth == 2999


def test_safe_terminal_text_keeps_pi_when_encodable(monkeypatch):
    monkeypatch.setattr(sys, "stdout", SimpleNamespace(encoding="utf-8"))
    assert plotfn._safe_terminal_text("2π") == "2π"


def test_safe_terminal_text_spells_pi_when_not_encodable(monkeypatch):
    monkeypatch.setattr(sys, "stdout", SimpleNamespace(encoding="ascii"))
    assert plotfn._safe_terminal_text("2π") == "2pi"


class _FakeStdin:
    def __init__(self, text: str) -> None:
        self._text = text

    def read(self) -> str:
        return self._text
