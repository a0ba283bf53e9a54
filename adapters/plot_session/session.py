"""
Adapter: PlotSession
Cykl aktualizacji interaktywnego wykresu po stronie wywołującego.

Każda zmiana tekstu funkcji albo pola zakresu uruchamia ponownie:
  1. kontrola zakresu  start_x >= end_x  → RangeError
  2. parsowanie        tekst funkcji     → ParseError
  3. próbkowanie       GridSampler na [start_x, end_x)
  4. granice y         (min y, max y) punktów
Przy błędzie wykres jest czyszczony, a wejścia zostają, żeby użytkownik
mógł pisać dalej przez stany pośrednie typu "sin(" albo "+".

Pola zakresu trzymają tekst dziesiętny ze znakiem ("+0", "-2.5"); liczba jest
odczytywana z niego po każdej zmianie.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from adapters.domain_sampler.grid_sampler import GridSampler
from adapters.expression_parser.descent_parser import DescentExpressionParser
from config import Settings
from contracts import ParseError, PlotState, Point, RangeError
from ports.domain_sampler import DomainSampler
from ports.expression_parser import ExpressionParser

logger = logging.getLogger("plotfn.session")

_EMPTY_BOUND = "+0"
_BOUND_RE = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$')


# ──────────────────────────────────────────────────────────────────────────────
# Pomocnicze
# ──────────────────────────────────────────────────────────────────────────────

def format_bound(value: float) -> str:
    """11.0 → "+11", -0.5 → "-0.5"."""
    if value.is_integer():
        return f"{int(value):+d}"
    return f"{value:+}"


def parse_bound(text: str) -> Optional[float]:
    """Odczytuje pole zakresu; None, jeśli to nie jest zwykła liczba dziesiętna ze znakiem."""
    raw = text.strip()
    if not _BOUND_RE.match(raw):
        return None
    return float(raw)


def determine_y_bounds(points: list[Point]) -> Optional[tuple[float, float]]:
    """(min y, max y) po punktach, None dla pustej listy."""
    if not points:
        return None
    ys = [y for _, y in points]
    return min(ys), max(ys)


# ──────────────────────────────────────────────────────────────────────────────
# Sesja
# ──────────────────────────────────────────────────────────────────────────────

class PlotSession:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        parser: Optional[ExpressionParser] = None,
        sampler: Optional[DomainSampler] = None,
    ) -> None:
        self._settings = settings or Settings()
        self._parser = parser or DescentExpressionParser()
        self._sampler = sampler or GridSampler()
        s = self._settings
        self.state = PlotState(
            function_input=s.default_function,
            start_x_input=format_bound(s.default_start_x),
            end_x_input=format_bound(s.default_end_x),
            start_x=s.default_start_x,
            end_x=s.default_end_x,
            resolution=s.default_resolution,
        )

    # -- Cykl aktualizacji ------------------------------------------------

    def refresh(self) -> Optional[ValueError]:
        """Przelicza wykres. Zwraca RangeError/ParseError, który go wyczyścił, albo None."""
        st = self.state
        try:
            if st.start_x >= st.end_x:
                raise RangeError(st.start_x, st.end_x)
            ast = self._parser.parse(st.function_input)
        except (RangeError, ParseError) as exc:
            logger.info("Wykres wyczyszczony: %s", exc)
            st.points = []
            st.start_y, st.end_y = 0.0, 0.0
            st.last_error = str(exc)
            return exc

        points = self._sampler.sample(ast, st.start_x, st.end_x, st.resolution)
        start_y, end_y = determine_y_bounds(points) or (0.0, 0.0)
        if start_y == end_y:
            # Płaska linia też potrzebuje niepustej osi y.
            start_y, end_y = -abs(end_y), abs(end_y)
        st.points = points
        st.start_y, st.end_y = start_y, end_y
        st.last_error = None
        return None

    # -- Edycje -----------------------------------------------------------

    def set_function(self, text: str) -> Optional[ValueError]:
        self.state.function_input = text
        return self.refresh()

    def set_start_input(self, text: str) -> Optional[ValueError]:
        self.state.start_x_input, self.state.start_x = self._read_bound(text)
        return self.refresh()

    def set_end_input(self, text: str) -> Optional[ValueError]:
        self.state.end_x_input, self.state.end_x = self._read_bound(text)
        return self.refresh()

    def nudge_start(self, delta: float = 1.0) -> Optional[ValueError]:
        self.state.start_x += delta
        self.state.start_x_input = format_bound(self.state.start_x)
        return self.refresh()

    def nudge_end(self, delta: float = 1.0) -> Optional[ValueError]:
        self.state.end_x += delta
        self.state.end_x_input = format_bound(self.state.end_x)
        return self.refresh()

    def resize(self, width: int) -> Optional[ValueError]:
        """Dopasowuje rozdzielczość do wykresu o szerokości `width` kolumn."""
        self.state.resolution = max(width, 0) * self._settings.samples_per_column
        return self.refresh()

    # -- Prywatne ---------------------------------------------------------

    @staticmethod
    def _read_bound(text: str) -> tuple[str, float]:
        raw = text.strip()
        if raw and raw[0] not in "+-":
            raw = "+" + raw
        # Sam znak albo coś, co nie jest liczbą: powrót do wartości domyślnej.
        value = parse_bound(raw)
        if value is None:
            return _EMPTY_BOUND, 0.0
        return raw, value
