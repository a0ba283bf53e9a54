"""
Port: ExpressionParser
Odpowiedzialność: zamiana tekstu funkcji, np. "sin(x^2)+3x", na ExprAST.
"""
from typing import Protocol, runtime_checkable

from contracts import ExprAST


@runtime_checkable
class ExpressionParser(Protocol):
    def parse(self, text: str) -> ExprAST:
        """
        Parses the whole of `text` into an expression tree.
        Variables are kept as VariableNode and resolved only at evaluation;
        the named constants e and pi/π are folded into ConstantNode.
        Raises ParseError if the text is not exactly one expression
        (empty input, unknown character, unbalanced delimiters, trailing text).
        """
        ...
