"""
Adapter: FloatEvaluator
Implementuje port Evaluator — przejście post-order ExprAST na liczbach
IEEE-754 double.

Przejście jest iteracyjne (jawny stos zamiast rekurencji): sumy i iloczyny
są składane w lewo, więc "1+1+…+1" z n składnikami daje drzewo o głębokości
n i musi się policzyć dla dowolnego n.

Arytmetyka działa na skalarach numpy float64 w np.errstate(all="ignore"),
więc x/0, 0^-1, exp(1000), ln(-1) i asin(2) dają inf/NaN tak jak sprzęt,
zamiast rzucać ZeroDivisionError/OverflowError/ValueError.

Polityka dziedziny: niedodatnie argumenty ln/log2/log10 PROPAGUJĄ się (NaN
dla ujemnych, -inf dla zera). Jedyne twarde błędy to niezwiązana zmienna
i zła liczba argumentów operatora n-arnego.
"""
from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from contracts import (
    NARY_ARITY,
    BinaryNode,
    BinaryOp,
    ConstantNode,
    Environment,
    ExprAST,
    NaryNode,
    NaryOp,
    UnaryNode,
    UnaryOp,
    VariableNode,
    VariableNotFoundError,
    WrongNumberOfArgsError,
)

_BINARY_FUNCS: dict[BinaryOp, Callable[[np.float64, np.float64], np.float64]] = {
    BinaryOp.ADD: np.add,
    BinaryOp.SUB: np.subtract,
    BinaryOp.MUL: np.multiply,
    BinaryOp.DIV: np.divide,
    BinaryOp.POW: np.power,
}

_UNARY_FUNCS: dict[UnaryOp, Callable[[np.float64], np.float64]] = {
    UnaryOp.SIN: np.sin,
    UnaryOp.COS: np.cos,
    UnaryOp.TAN: np.tan,
    UnaryOp.COT: lambda v: np.divide(1.0, np.tan(v)),
    UnaryOp.ABS: np.abs,
    UnaryOp.EXP: np.exp,
    UnaryOp.LOG2: np.log2,
    UnaryOp.LOG10: np.log10,
    UnaryOp.LN: np.log,
    UnaryOp.NEG: np.negative,
    UnaryOp.ASIN: np.arcsin,
    UnaryOp.ACOS: np.arccos,
    UnaryOp.CEIL: np.ceil,
    UnaryOp.FLOOR: np.floor,
}


def _log_base(values: list[np.float64]) -> np.float64:
    # log(x, podstawa) == ln(x) / ln(podstawa)
    x, base = values
    return np.divide(np.log(x), np.log(base))


_NARY_FUNCS: dict[NaryOp, Callable[[list[np.float64]], np.float64]] = {
    NaryOp.LOG: _log_base,
}


def _children(node: ExprAST) -> tuple[ExprAST, ...]:
    if isinstance(node, BinaryNode):
        return (node.left, node.right)
    if isinstance(node, UnaryNode):
        return (node.child,)
    if isinstance(node, NaryNode):
        return node.children
    raise TypeError(f"Nieznany typ węzła AST: {type(node)}")


class FloatEvaluator:
    """Czysty, bezstanowy ewaluator; jedną instancję mogą dzielić wątki."""

    # -- Evaluator protocol ------------------------------------------------

    def eval_expr(
        self,
        ast: ExprAST,
        env: Optional[Environment] = None,
    ) -> float:
        """
        Computes the value of the tree.
        env: variable bindings (e.g. {"x": 5.0}); read only.
        """
        with np.errstate(all="ignore"):
            return float(self._eval(ast, env or {}))

    # -- Prywatne ---------------------------------------------------------

    def _eval(self, root: ExprAST, env: Environment) -> np.float64:
        # Stos (węzeł, dzieci_gotowe). Wartości dzieci trafiają na `values`
        # od lewej do prawej, więc lewe poddrzewo liczy się zawsze pierwsze.
        values: list[np.float64] = []
        stack: list[tuple[ExprAST, bool]] = [(root, False)]
        while stack:
            node, expanded = stack.pop()

            if isinstance(node, ConstantNode):
                values.append(np.float64(node.value))
                continue

            if isinstance(node, VariableNode):
                if node.name not in env:
                    raise VariableNotFoundError(node.name)
                values.append(np.float64(env[node.name]))
                continue

            if not expanded:
                stack.append((node, True))
                stack.extend((child, False) for child in reversed(_children(node)))
                continue

            if isinstance(node, BinaryNode):
                right = values.pop()
                left = values.pop()
                values.append(_BINARY_FUNCS[node.op](left, right))
            elif isinstance(node, UnaryNode):
                values.append(_UNARY_FUNCS[node.op](values.pop()))
            else:
                # Argumenty są już policzone; liczbę sprawdzamy dopiero teraz.
                split = len(values) - len(node.children)
                args = values[split:]
                del values[split:]
                if len(args) != NARY_ARITY[node.op]:
                    raise WrongNumberOfArgsError(node.op, len(args))
                values.append(_NARY_FUNCS[node.op](args))

        return values.pop()


_DEFAULT_EVALUATOR = FloatEvaluator()


def evaluate(expr: ExprAST, vars: Optional[Environment] = None) -> float:
    """Skrót modułowy dla FloatEvaluator().eval_expr(expr, vars)."""
    return _DEFAULT_EVALUATOR.eval_expr(expr, vars)
