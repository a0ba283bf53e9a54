"""
Port: DomainSampler
Odpowiedzialność: ewaluacja jednego wyrażenia na równomiernie rozłożonych wartościach x.
"""
from typing import Protocol, runtime_checkable

from contracts import ExprAST, Point


@runtime_checkable
class DomainSampler(Protocol):
    def sample(
        self,
        ast: ExprAST,
        start: float,
        end: float,
        resolution: int,
    ) -> list[Point]:
        """
        Returns the points (x_i, f(x_i)) for x_i = start + i * (end - start) / resolution,
        i in [0, resolution), in increasing order of i.
        Points whose evaluation fails or is not finite are dropped, so the
        result may be shorter than `resolution`.
        Assumes start < end; range validation belongs to the caller.
        """
        ...
