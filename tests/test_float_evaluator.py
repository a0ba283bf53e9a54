from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from adapters.evaluator.float_evaluator import FloatEvaluator, evaluate
from adapters.expression_parser.descent_parser import parse
from contracts import (
    BinaryNode,
    BinaryOp,
    ConstantNode,
    NaryOp,
    VariableNode,
    VariableNotFoundError,
    WrongNumberOfArgsError,
)
from ports.evaluator import Evaluator


def test_evaluator_satisfies_port():
    assert isinstance(FloatEvaluator(), Evaluator)


def test_hand_built_tree_evaluates():
    # 4 * (x + 3) dla x = 0
    ast = BinaryNode(
        op=BinaryOp.MUL,
        left=ConstantNode(value=4.0),
        right=BinaryNode(op=BinaryOp.ADD, left=VariableNode(name="x"), right=ConstantNode(value=3.0)),
    )
    assert FloatEvaluator().eval_expr(ast, {"x": 0.0}) == 12.0


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3+10", 13.0),
        ("3-(2+1)", 0.0),
        ("3-(2-1)", 2.0),
        ("3-(2-3+1)+(4-1+4)", 10.0),
        ("3 -   (2  -  3 + 1   ) + (  4 - 1    +4 )", 10.0),
        ("3+2+2-8+1-3", -3.0),
        ("3-4-5-6", -12.0),
        ("2*2/(5-1)+3", 4.0),
        ("2/2/(5-1)*3", 0.75),
        ("-4*4", -16.0),
        ("3*(-3)", -9.0),
        ("(3(3))", 9.0),
        ("3 3", 9.0),
        ("3(3(3))", 27.0),
        ("3^3", 27.0),
        ("2^3", 8.0),
        ("-2^4", -16.0),
        ("(-2)^4", 16.0),
        ("2^3^2", 64.0),
        ("exp(0)", 1.0),
        ("log2(2)", 1.0),
        ("log2(8)", 3.0),
        ("log(9,3)", 2.0),
        ("log( 9 , 3)", 2.0),
        ("ln(e)", 1.0),
        ("sin (   0   )", 0.0),
        ("sin(0*pi)", 0.0),
        ("abs(-3)", 3.0),
        ("|2-5|", 3.0),
        ("ceil(1.2)", 2.0),
        ("floor(-1.5)", -2.0),
        ("cos(0)", 1.0),
    ],
)
def test_constant_expressions(text, expected):
    assert evaluate(parse(text), {}) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3^(-3)", 1.0 / 27.0),
        ("log10(1000)", 3.0),
        ("ctg(pi/4)", 1.0),
        ("tg(pi/4)", 1.0),
        ("asin(1)", math.pi / 2),
        ("arccos(0)", math.pi / 2),
        ("e^2", math.e ** 2),
    ],
)
def test_transcendental_expressions(text, expected):
    assert evaluate(parse(text)) == pytest.approx(expected)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("x", 10.0),
        ("3x", 30.0),
        ("3(x(3))", 90.0),
        ("-x*sin(0)", 0.0),
        ("x^2 - 2x", 80.0),
    ],
)
def test_variable_expressions(text, expected):
    assert evaluate(parse(text), {"x": 10.0}) == expected


@pytest.mark.parametrize("literal", ["0", "42", "3.", ".5", "1e3", "2.5E2"])
@pytest.mark.parametrize("env", [{}, {"x": 1.0}, {"x": -7.5, "y": 2.0}])
def test_literal_is_environment_independent(literal, env):
    assert evaluate(parse(literal), env) == float(literal)


def test_unbound_variable():
    with pytest.raises(VariableNotFoundError) as info:
        evaluate(parse("y"), {})
    assert info.value.name == "y"


def test_variable_names_are_case_sensitive():
    with pytest.raises(VariableNotFoundError):
        evaluate(parse("X"), {"x": 1.0})


@pytest.mark.parametrize("text, got", [("log(3,9,5)", 3), ("log(3,    9   ,5)", 3), ("log(8)", 1), ("log()", 0)])
def test_log_arity_is_checked_at_evaluation(text, got):
    ast = parse(text)
    with pytest.raises(WrongNumberOfArgsError) as info:
        evaluate(ast, {})
    assert info.value.op == NaryOp.LOG
    assert info.value.got == got


def test_log_arguments_are_evaluated_before_arity_check():
    with pytest.raises(VariableNotFoundError):
        evaluate(parse("log(y,1,2)"), {})


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1/0", math.inf),
        ("-1/0", -math.inf),
        ("0^(-1)", math.inf),
        ("exp(1000)", math.inf),
        ("ln(0)", -math.inf),
        ("log2(0)", -math.inf),
    ],
)
def test_infinities_propagate(text, expected):
    assert evaluate(parse(text)) == expected


@pytest.mark.parametrize("text", ["0/0", "ln(-1)", "log2(-4)", "log10(-1)", "asin(2)", "acos(-2)", "(-8)^(1/3)"])
def test_nan_propagates(text):
    assert math.isnan(evaluate(parse(text)))


def test_nan_propagates_through_arithmetic():
    assert math.isnan(evaluate(parse("ln(x) + 1"), {"x": -1.0}))


def test_result_is_plain_float():
    assert type(evaluate(parse("sin(x)"), {"x": 1.0})) is float


def test_environment_is_not_mutated():
    env = {"x": 2.0, "y": 3.0}
    evaluate(parse("x*y + log(x, y)"), env)
    assert env == {"x": 2.0, "y": 3.0}


def test_repeated_evaluation_is_bit_identical():
    ast = parse("|sin(x^x) / 2^((x^x - pi/2)/pi)|")
    first = evaluate(ast, {"x": 1.7})
    second = evaluate(ast, {"x": 1.7})
    assert first.hex() == second.hex()


def test_shared_tree_concurrent_evaluation():
    ast = parse("x^2 + 1")
    xs = [float(i) for i in range(200)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda x: evaluate(ast, {"x": x}), xs))

    assert results == [x * x + 1 for x in xs]


@pytest.mark.parametrize("op, expected", [("+", 5000.0), ("*", 1.0), ("-", -4998.0)])
def test_long_flat_chains_evaluate(op, expected):
    ast = parse(op.join(["1"] * 5000))
    assert evaluate(ast) == expected


def test_long_chain_reports_unbound_variable():
    ast = parse("+".join(["x"] * 5000) + "+y")
    with pytest.raises(VariableNotFoundError) as info:
        evaluate(ast, {"x": 1.0})
    assert info.value.name == "y"


def test_left_operand_fails_first():
    with pytest.raises(VariableNotFoundError) as info:
        evaluate(parse("a + b"))
    assert info.value.name == "a"
