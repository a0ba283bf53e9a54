"""
contracts.py — jedyne źródło prawdy dla wszystkich typów danych plotfn.
Wszystkie moduły importują typy WYŁĄCZNIE stąd. Nie zmieniaj bez wersjonowania.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

CONTRACTS_VERSION = "1.0.0"

# Nazwa zmiennej, po której przebiega próbkowanie dziedziny.
SWEEP_VARIABLE = "x"


# ─────────────────────────── Operatory ───────────────────────────────────

class BinaryOp(str, Enum):
    ADD = "add"   # +
    SUB = "sub"   # -
    MUL = "mul"   # *  (także niejawne: "3x")
    DIV = "div"   # /
    POW = "pow"   # ^


class UnaryOp(str, Enum):
    SIN = "sin"
    COS = "cos"
    TAN = "tan"       # tan, tg
    COT = "cot"       # ctan, ctg  →  1 / tan(x)
    ABS = "abs"       # abs(x), |x|
    EXP = "exp"
    LOG2 = "log2"
    LOG10 = "log10"
    LN = "ln"
    NEG = "neg"       # minus prefiksowy
    ASIN = "asin"     # asin, arcsin
    ACOS = "acos"     # acos, arccos
    CEIL = "ceil"
    FLOOR = "floor"


class NaryOp(str, Enum):
    LOG = "log"       # log(x, podstawa)


# Stała liczba argumentów operatorów n-arnych, sprawdzana przy ewaluacji.
NARY_ARITY: dict[NaryOp, int] = {NaryOp.LOG: 2}


# ─────────────────────────── Drzewo wyrażenia ────────────────────────────
# Modele zamrożone: sparsowane drzewo nigdy się nie zmienia, więc jedną
# instancję można ewaluować z wielu wątków z różnymi środowiskami.

class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class BinaryNode(_Node):
    node_type: Literal["binary"] = "binary"
    op: BinaryOp
    left: ExprAST
    right: ExprAST


class UnaryNode(_Node):
    node_type: Literal["unary"] = "unary"
    op: UnaryOp
    child: ExprAST


class NaryNode(_Node):
    node_type: Literal["nary"] = "nary"
    op: NaryOp
    children: tuple[ExprAST, ...]


class VariableNode(_Node):
    node_type: Literal["variable"] = "variable"
    name: str = Field(min_length=1)


class ConstantNode(_Node):
    node_type: Literal["constant"] = "constant"
    value: float


ExprAST = Annotated[
    Union[BinaryNode, UnaryNode, NaryNode, VariableNode, ConstantNode],
    Field(discriminator="node_type"),
]
BinaryNode.model_rebuild()
UnaryNode.model_rebuild()
NaryNode.model_rebuild()

# Nazwa zmiennej (wielkość liter ma znaczenie) → wartość. Ewaluacja jej nie zmienia.
Environment = dict[str, float]

# Para (x, y) zwracana przez próbkowanie dziedziny.
Point = tuple[float, float]


# ─────────────────────────── Sesja wykresu ───────────────────────────────

class PlotState(BaseModel):
    """Zmienny stan jednego interaktywnego wykresu: surowe wejścia i ostatni wynik."""
    model_config = ConfigDict(validate_assignment=True)

    function_input: str = "sin(x)"
    start_x_input: str = "+0"
    end_x_input: str = "+10"
    start_x: float = 0.0
    end_x: float = 10.0
    start_y: float = 0.0
    end_y: float = 0.0
    resolution: int = Field(default=100, ge=0)
    points: list[Point] = Field(default_factory=list)
    last_error: Optional[str] = None


# ─────────────────────────── Błędy ───────────────────────────────────────

class ParseError(ValueError):
    """Tekst nie jest jednym kompletnym wyrażeniem. Nie niesie struktury przyczyny."""

    def __init__(self, text: str, message: str = "nie można sparsować wyrażenia") -> None:
        super().__init__(f"{message}: {text!r}")
        self.text = text


class EvaluationError(ValueError):
    """Klasa bazowa błędów przy sprowadzaniu drzewa do liczby."""


class VariableNotFoundError(EvaluationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"nie znaleziono zmiennej: {name!r}")
        self.name = name


class WrongNumberOfArgsError(EvaluationError):
    def __init__(self, op: NaryOp, got: int) -> None:
        expected = NARY_ARITY.get(op)
        super().__init__(f"{op.value}() przyjmuje {expected} argumenty, podano {got}")
        self.op = op
        self.got = got


class RangeError(ValueError):
    """Zakres wykresu jest pusty lub odwrócony (start >= end)."""

    def __init__(self, start: float, end: float) -> None:
        super().__init__(f"niepoprawny zakres: start {start} musi być mniejszy od end {end}")
        self.start = start
        self.end = end


class ResolutionLimitError(ValueError):
    """Żądana rozdzielczość przekracza limit z Settings.max_resolution."""

    def __init__(self, resolution: int, limit: int) -> None:
        super().__init__(f"rozdzielczość {resolution} przekracza limit {limit}")
        self.resolution = resolution
        self.limit = limit
