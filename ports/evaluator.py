"""
Port: Evaluator
Odpowiedzialność: deterministyczne sprowadzenie ExprAST do liczby float.
"""
from typing import Optional, Protocol, runtime_checkable

from contracts import Environment, ExprAST


@runtime_checkable
class Evaluator(Protocol):
    def eval_expr(
        self,
        ast: ExprAST,
        env: Optional[Environment] = None,
    ) -> float:
        """
        Evaluates the tree with IEEE-754 double semantics.
        env: variable bindings for VariableNode resolution; never mutated.
        Division by zero, inf and NaN propagate as values, they are not errors.
        Raises VariableNotFoundError for an unbound variable.
        Raises WrongNumberOfArgsError when an n-ary operator gets the wrong
        number of arguments.
        """
        ...
