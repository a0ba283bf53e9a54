"""
Adapter: DescentExpressionParser
Implementuje port ExpressionParser.

Zejście rekurencyjne po liście tokenów, jedna metoda na poziom priorytetu
(od najsłabiej wiążącego):
  sum         = negation (('+'|'-') negation)*
  negation    = '-' product | product
  product     = (power power | power) (('*'|'/') power)*
  power       = primary ('^' primary)*
  primary     = NUMBER | '(' sum ')' | '|' sum '|'
              | FUNC '(' sum ')' | 'log' '(' [sum (',' sum)*] ')'
              | 'e' | 'pi' | 'π' | NAME

Uwagi:
  - "power power" to mnożenie niejawne ("3x", "3(3)", "2^3 x"); próbowane
    jako pierwsze, łączy dokładnie dwa wyrazy na początku iloczynu.
  - '^' składa się w lewo: 2^3^2 == (2^3)^2.
  - Liczby nigdy nie mają znaku, więc "x+3" to x + 3.
  - Identyfikatory to ciągi liter, więc "epsilon" czy "pie" są zmiennymi,
    a nie stałymi e / pi.
  - Sumy i iloczyny są pętlami, nie rekurencją; rekurencja rośnie tylko
    z zagnieżdżeniem nawiasów i funkcji.
"""
from __future__ import annotations

import logging
import math
import re
from typing import NamedTuple, Optional

from contracts import (
    BinaryNode,
    BinaryOp,
    ConstantNode,
    ExprAST,
    NaryNode,
    NaryOp,
    ParseError,
    UnaryNode,
    UnaryOp,
    VariableNode,
)

logger = logging.getLogger("plotfn.parser")

# ──────────────────────────────────────────────────────────────────────────────
# Słownik
# ──────────────────────────────────────────────────────────────────────────────

_UNARY_FUNCS: dict[str, UnaryOp] = {
    "sin": UnaryOp.SIN,
    "cos": UnaryOp.COS,
    "tan": UnaryOp.TAN,
    "tg": UnaryOp.TAN,
    "ctan": UnaryOp.COT,
    "ctg": UnaryOp.COT,
    "abs": UnaryOp.ABS,
    "exp": UnaryOp.EXP,
    "log2": UnaryOp.LOG2,
    "log10": UnaryOp.LOG10,
    "ln": UnaryOp.LN,
    "asin": UnaryOp.ASIN,
    "arcsin": UnaryOp.ASIN,
    "acos": UnaryOp.ACOS,
    "arccos": UnaryOp.ACOS,
    "ceil": UnaryOp.CEIL,
    "floor": UnaryOp.FLOOR,
}

_NARY_FUNCS: dict[str, NaryOp] = {"log": NaryOp.LOG}

# Klucze małymi literami; nazwy stałych bez rozróżniania wielkości liter.
_NAMED_CONSTANTS: dict[str, float] = {
    "e": math.e,
    "pi": math.pi,
    "π": math.pi,
}

_SUM_OPS = {"+": BinaryOp.ADD, "-": BinaryOp.SUB}
_PRODUCT_OPS = {"*": BinaryOp.MUL, "/": BinaryOp.DIV}

# ──────────────────────────────────────────────────────────────────────────────
# Tokenizator
# ──────────────────────────────────────────────────────────────────────────────

_TOKEN_RE = re.compile(
    r'(?P<number>[0-9]+(?:\.[0-9]*)?(?:[eE][0-9]+)?|\.[0-9]+(?:[eE][0-9]+)?)'
    r'|(?P<func>log(?:2|10)(?=\s*\())'   # log2( i log10(: cyfry należą do nazwy
    r'|(?P<name>[^\W\d_]+)'               # tylko litery
    r'|(?P<op>[-+*/^()|,])'
    r'|(?P<space>\s+)'
)


class _Token(NamedTuple):
    kind: str   # "number" | "name" | "op"
    text: str


def _tokenize(text: str) -> list[_Token]:
    """Dzieli tekst na tokeny. Białe znaki są pomijane; nieznany znak → ParseError."""
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise ParseError(text, f"nieoczekiwany znak {text[pos]!r} na pozycji {pos}")
        pos = m.end()
        kind = m.lastgroup
        if kind == "space":
            continue
        # Po dopasowaniu lookahead log2/log10 są zwykłymi nazwami.
        tokens.append(_Token("name" if kind == "func" else kind, m.group()))
    return tokens


# ──────────────────────────────────────────────────────────────────────────────
# Zejście rekurencyjne
# ──────────────────────────────────────────────────────────────────────────────

class _Parser:
    def __init__(self, text: str, tokens: list[_Token]) -> None:
        self._text = text
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> Optional[_Token]:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _peek_op(self) -> Optional[str]:
        tok = self._peek()
        return tok.text if tok is not None and tok.kind == "op" else None

    def _consume(self) -> _Token:
        tok = self._peek()
        if tok is None:
            raise ParseError(self._text, "nieoczekiwany koniec wyrażenia")
        self._pos += 1
        return tok

    def _expect(self, op: str) -> None:
        got = self._consume()
        if got.kind != "op" or got.text != op:
            raise ParseError(self._text, f"oczekiwano {op!r}, jest {got.text!r}")

    def parse(self) -> ExprAST:
        if not self._tokens:
            raise ParseError(self._text, "puste wyrażenie")
        node = self._sum()
        if self._pos < len(self._tokens):
            raise ParseError(self._text, f"nieoczekiwany token {self._tokens[self._pos].text!r}")
        return node

    def _sum(self) -> ExprAST:
        left = self._negation()
        while self._peek_op() in _SUM_OPS:
            op = _SUM_OPS[self._consume().text]
            right = self._negation()
            left = BinaryNode(op=op, left=left, right=right)
        return left

    def _negation(self) -> ExprAST:
        # Wiąże cały iloczyn: -2^4 == -(2^4), -4*4 == -(4*4)
        if self._peek_op() == "-":
            self._consume()
            return UnaryNode(op=UnaryOp.NEG, child=self._product())
        return self._product()

    def _product(self) -> ExprAST:
        left = self._coefficient()
        while self._peek_op() in _PRODUCT_OPS:
            op = _PRODUCT_OPS[self._consume().text]
            right = self._power()
            left = BinaryNode(op=op, left=left, right=right)
        return left

    def _coefficient(self) -> ExprAST:
        """Dwa sąsiadujące wyrazy potęgowe to iloczyn; w przeciwnym razie jeden wyraz."""
        first = self._power()
        if not self._at_primary():
            return first
        mark = self._pos
        try:
            second = self._power()
        except ParseError:
            self._pos = mark
            return first
        return BinaryNode(op=BinaryOp.MUL, left=first, right=second)

    def _power(self) -> ExprAST:
        left = self._primary()
        while self._peek_op() == "^":
            self._consume()
            right = self._primary()
            left = BinaryNode(op=BinaryOp.POW, left=left, right=right)
        return left

    def _at_primary(self) -> bool:
        tok = self._peek()
        if tok is None:
            return False
        return tok.kind != "op" or tok.text in ("(", "|")

    def _primary(self) -> ExprAST:
        tok = self._consume()

        if tok.kind == "number":
            return ConstantNode(value=float(tok.text))

        if tok.kind == "op":
            if tok.text == "(":
                node = self._sum()
                self._expect(")")
                return node
            if tok.text == "|":
                node = self._sum()
                self._expect("|")
                return UnaryNode(op=UnaryOp.ABS, child=node)
            raise ParseError(self._text, f"nieoczekiwany token {tok.text!r}")

        name = tok.text
        if self._peek_op() == "(":
            if name in _UNARY_FUNCS:
                return UnaryNode(op=_UNARY_FUNCS[name], child=self._parens())
            if name in _NARY_FUNCS:
                return NaryNode(op=_NARY_FUNCS[name], children=tuple(self._arguments()))

        constant = _NAMED_CONSTANTS.get(name.lower())
        if constant is not None:
            return ConstantNode(value=constant)

        # Wszystko inne (także "sin" bez nawiasu) jest zmienną.
        return VariableNode(name=name)

    def _parens(self) -> ExprAST:
        self._expect("(")
        node = self._sum()
        self._expect(")")
        return node

    def _arguments(self) -> list[ExprAST]:
        """'(' [sum (',' sum)*] ')'. Liczbę argumentów sprawdza ewaluator."""
        self._expect("(")
        args: list[ExprAST] = []
        if self._peek_op() == ")":
            self._consume()
            return args
        args.append(self._sum())
        while self._peek_op() == ",":
            self._consume()
            args.append(self._sum())
        self._expect(")")
        return args


# ──────────────────────────────────────────────────────────────────────────────
# Adapter
# ──────────────────────────────────────────────────────────────────────────────

class DescentExpressionParser:
    """
    Parsuje tekst funkcji do niezmiennego ExprAST.
    Rzuca ParseError (i tylko ParseError) dla wszystkiego, co nie jest jednym
    kompletnym wyrażeniem.
    """

    # -- ExpressionParser protocol ------------------------------------------

    def parse(self, text: str) -> ExprAST:
        try:
            return _Parser(text, _tokenize(text)).parse()
        except ParseError as exc:
            logger.debug("Parsowanie nieudane: %s", exc)
            raise
        except RecursionError:
            logger.debug("Parsowanie nieudane: zbyt głębokie zagnieżdżenie w %r", text[:80])
            raise ParseError(text, "wyrażenie zbyt głęboko zagnieżdżone") from None


_DEFAULT_PARSER = DescentExpressionParser()


def parse(text: str) -> ExprAST:
    """Skrót modułowy dla DescentExpressionParser().parse(text)."""
    return _DEFAULT_PARSER.parse(text)
