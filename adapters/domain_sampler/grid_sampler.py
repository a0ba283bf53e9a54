"""
Adapter: GridSampler
Implementuje port DomainSampler.

Ewaluuje sparsowane drzewo w `resolution` równo rozłożonych punktach x:
    step = (end - start) / resolution
    x_i  = start + i * step,   i = 0 .. resolution - 1
Sam koniec zakresu nie jest próbkowany. Punkty, których ewaluacja rzuca
EvaluationError albo daje NaN/±inf, są pomijane, a nie interpolowane.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

from adapters.evaluator.float_evaluator import FloatEvaluator
from contracts import SWEEP_VARIABLE, EvaluationError, ExprAST, Point
from ports.evaluator import Evaluator

logger = logging.getLogger("plotfn.sampler")


class GridSampler:
    def __init__(
        self,
        evaluator: Optional[Evaluator] = None,
        variable: str = SWEEP_VARIABLE,
    ) -> None:
        self._evaluator = evaluator or FloatEvaluator()
        self._variable = variable

    # -- DomainSampler protocol ---------------------------------------------

    def sample(
        self,
        ast: ExprAST,
        start: float,
        end: float,
        resolution: int,
    ) -> list[Point]:
        if resolution < 0:
            raise ValueError(f"resolution musi być >= 0, podano {resolution}")
        if resolution == 0:
            return []

        step = (end - start) / resolution
        points: list[Point] = []
        dropped = 0
        for i in range(resolution):
            x = start + i * step
            try:
                y = self._evaluator.eval_expr(ast, {self._variable: x})
            except EvaluationError:
                dropped += 1
                continue
            if not math.isfinite(y):
                dropped += 1
                continue
            points.append((x, y))

        if dropped:
            logger.debug("Pominięto %d z %d próbek na [%s, %s)", dropped, resolution, start, end)
        return points


_DEFAULT_SAMPLER = GridSampler()


def sample(expr: ExprAST, start: float, end: float, resolution: int) -> list[Point]:
    """Skrót modułowy dla GridSampler().sample(...) po zmiennej "x"."""
    return _DEFAULT_SAMPLER.sample(expr, start, end, resolution)
