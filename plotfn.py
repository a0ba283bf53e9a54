#!/usr/bin/env python3
"""
plotfn.py — CLI narzędzie plotfn.

Działa całkowicie lokalnie, nie wymaga uruchomionego serwera API.

Konfiguracja: zmienne środowiskowe z prefiksem PLOTFN_
lub plik .env (np. PLOTFN_LOG_LEVEL=DEBUG).

Podkomendy:
    parse   — pokaż drzewo wyrażenia funkcji
    eval    — oblicz funkcję raz dla podanych zmiennych
    sample  — próbkuj funkcję na [start, end) tak jak wykres

Użycie:
    python plotfn.py parse --text "sin(x^2)+3x"
    python plotfn.py eval --text "log(9, 3)"
    python plotfn.py eval --text "3x + y" --var x=2 --var y=0.5
    python plotfn.py sample --text "sin(x)" --start 0 --end 10 --resolution 20
    echo "|x - 2|" | python plotfn.py sample --width 40
"""
from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.tree import Tree


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _safe_terminal_text(value: Any) -> str:
    s = str(value)
    encoding = sys.stdout.encoding or "utf-8"
    try:
        s.encode(encoding)
        return s
    except UnicodeEncodeError:
        s = s.replace("π", "pi")
        return s.encode(encoding, errors="replace").decode(encoding, errors="replace")


def _fmt_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:.6g}"


def _print_kv_table(title: str, rows: list[tuple[str, Any]]) -> None:
    table = Table(title=title, box=box.ASCII, show_header=False, pad_edge=False)
    table.add_column("Key", no_wrap=True, style="bold cyan")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(_safe_terminal_text(key), _safe_terminal_text(value))
    _console().print(table)


def _print_points_table(points: list[tuple[float, float]], show: int) -> None:
    table = Table(
        title=f"Punkty [{min(show, len(points))}/{len(points)}]",
        box=box.ASCII,
        show_lines=False,
    )
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("x", justify="right", no_wrap=True, style="cyan")
    table.add_column("y", justify="right", no_wrap=True)
    for idx, (x, y) in enumerate(points[:show]):
        table.add_row(str(idx), _fmt_number(x), _fmt_number(y))
    _console().print(table)


def _node_label(node: Any) -> str:
    from contracts import ConstantNode, VariableNode

    if isinstance(node, ConstantNode):
        return f"[green]{_fmt_number(node.value)}[/green]"
    if isinstance(node, VariableNode):
        return f"[cyan]{_safe_terminal_text(node.name)}[/cyan]"
    return f"[bold]{node.op.value}[/bold]"


def _node_children(node: Any) -> tuple[Any, ...]:
    from contracts import BinaryNode, NaryNode, UnaryNode

    if isinstance(node, BinaryNode):
        return (node.left, node.right)
    if isinstance(node, UnaryNode):
        return (node.child,)
    if isinstance(node, NaryNode):
        return node.children
    return ()


def _expr_tree(root: Any) -> Tree:
    # Iteracyjnie: drzewo "1+1+...+1" ma głębokość równą liczbie składników.
    tree = Tree(_node_label(root))
    stack = [(root, tree)]
    while stack:
        node, branch = stack.pop()
        for child in _node_children(node):
            stack.append((child, branch.add(_node_label(child))))
    return tree


def _read_text(args: argparse.Namespace) -> str:
    text = getattr(args, "text", None) or sys.stdin.read().strip()
    if not text:
        print("Błąd: podaj funkcję przez --text lub stdin", file=sys.stderr)
        sys.exit(1)
    return text


def _binding(raw: str) -> tuple[str, float]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"oczekiwano NAZWA=WARTOŚĆ, jest {raw!r}")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"to nie jest liczba: {value!r}") from None


def _non_negative(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"to nie jest liczba całkowita: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"wartość musi być >= 0, podano {value}")
    return value


def _parse_or_exit(text: str):
    from adapters.expression_parser.descent_parser import DescentExpressionParser
    from contracts import ParseError

    try:
        return DescentExpressionParser().parse(text)
    except ParseError as exc:
        print(f"ParseError: {exc}", file=sys.stderr)
        sys.exit(1)


# -- podkomendy ------------------------------------------------------------

def _parse(args: argparse.Namespace) -> None:
    ast = _parse_or_exit(_read_text(args))
    if args.json:
        print(ast.model_dump_json(indent=2))
        return
    _console().print(_expr_tree(ast))


def _eval(args: argparse.Namespace) -> None:
    from adapters.evaluator.float_evaluator import FloatEvaluator
    from contracts import EvaluationError

    text = _read_text(args)
    ast = _parse_or_exit(text)
    env = dict(args.var)
    try:
        value = FloatEvaluator().eval_expr(ast, env)
    except EvaluationError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        sys.exit(1)

    rows: list[tuple[str, Any]] = [("funkcja", text)]
    rows += [(name, _fmt_number(v)) for name, v in env.items()]
    rows.append(("wartość", _fmt_number(value)))
    _print_kv_table("Ewaluacja", rows)


def _sample(args: argparse.Namespace) -> None:
    from adapters.plot_session.session import PlotSession, format_bound
    from config import Settings

    settings = Settings()
    session = PlotSession(settings=settings)
    session.state.function_input = _read_text(args)
    session.state.start_x_input = format_bound(args.start)
    session.state.end_x_input = format_bound(args.end)
    session.state.start_x = args.start
    session.state.end_x = args.end
    if args.width is not None:
        session.state.resolution = args.width * settings.samples_per_column
    elif args.resolution is not None:
        session.state.resolution = args.resolution

    error = session.refresh()
    if error is not None:
        print(f"{type(error).__name__}: {error}", file=sys.stderr)
        sys.exit(1)

    st = session.state
    _print_kv_table("Próbkowanie", [
        ("funkcja", st.function_input),
        ("zakres", f"[{st.start_x_input}, {st.end_x_input})"),
        ("rozdzielczość", st.resolution),
        ("punkty", len(st.points)),
        ("granice y", f"[{_fmt_number(st.start_y)}, {_fmt_number(st.end_y)}]"),
    ])
    if args.show > 0:
        _print_points_table(st.points, args.show)


# -- main ------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(
        prog="plotfn",
        description="plotfn — parsowanie, ewaluacja i próbkowanie funkcji zmiennej x",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # parse
    p = sub.add_parser("parse", help="Pokaż drzewo wyrażenia")
    p.add_argument("--text", "-t", help="Tekst funkcji (lub stdin)")
    p.add_argument("--json", action="store_true", help="Wypisz drzewo jako JSON")

    # eval
    p = sub.add_parser("eval", help="Oblicz wartość raz")
    p.add_argument("--text", "-t", help="Tekst funkcji (lub stdin)")
    p.add_argument("--var", "-v", type=_binding, action="append", default=[],
                   metavar="NAZWA=WARTOŚĆ", help="Wartość zmiennej, można powtarzać")

    # sample
    p = sub.add_parser("sample", help="Próbkuj na [start, end)")
    p.add_argument("--text", "-t", help="Tekst funkcji (lub stdin)")
    p.add_argument("--start", type=float, default=0.0)
    p.add_argument("--end", type=float, default=10.0)
    g = p.add_mutually_exclusive_group()
    g.add_argument("--resolution", "-n", type=_non_negative, metavar="N")
    g.add_argument("--width", type=_non_negative, metavar="KOLUMNY",
                   help="Szerokość wykresu; rozdzielczość = KOLUMNY * samples_per_column")
    p.add_argument("--show", type=int, default=20, help="Liczba wierszy tabeli punktów")

    args = parser.parse_args()

    from config import Settings
    logging.basicConfig(level=Settings().log_level.upper())

    cmds = {
        "parse":  _parse,
        "eval":   _eval,
        "sample": _sample,
    }
    cmds[args.command](args)


if __name__ == "__main__":
    main()
