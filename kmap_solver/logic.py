"""Boolean logic interop: minterm lists and SymPy expressions."""

from __future__ import annotations

import itertools
from typing import Iterable, List, Optional, Sequence, Tuple

from sympy import Symbol, symbols, sympify
from sympy.core.sympify import SympifyError

from .kmap import CellValue, KMap
from .layout import MapLayout, binary_to_gray, gray_to_binary
from .geometry import Point
from .solution import Solution


def get_variables(names: Sequence[str]) -> Tuple[Symbol, ...]:
    """Return SymPy symbols for the given variable names."""
    if not names:
        raise ValueError("Number of variables must be positive.")
    return tuple(symbols(list(names)))


def cell_to_minterm(layout: MapLayout, row: int, col: int) -> int:
    """Return the truth-table index of a cell; the first variable is the MSB."""
    point = layout.point(row, col)
    return (binary_to_gray(point.row) << layout.column_variable_count) | binary_to_gray(
        point.col
    )


def minterm_to_cell(layout: MapLayout, index: int) -> Point:
    """Translate a minterm index to its cell on the map."""
    column_mask = layout.column_count - 1
    row_bits = index >> layout.column_variable_count
    return Point(gray_to_binary(row_bits), gray_to_binary(index & column_mask))


def validate_minterm_range(minterms: Iterable[int], n: int) -> None:
    """Ensure all minterms are within the range for the current variable count."""
    max_valid = (1 << n) - 1
    invalid = [m for m in minterms if m < 0 or m > max_valid]
    if invalid:
        raise ValueError(
            f"Minterms out of range for {n} variables (0-{max_valid}): {sorted(set(invalid))}"
        )


def kmap_from_minterms(
    variable_count: int,
    minterms: Iterable[int],
    dontcares: Iterable[int] = (),
    variable_names: Optional[Sequence[str]] = None,
) -> KMap:
    """Build a K-map whose HIGH cells are the minterms.

    A minterm that is also listed as a don't-care stays HIGH.
    """
    minterms = list(minterms)
    dontcares = list(dontcares)
    validate_minterm_range(minterms, variable_count)
    validate_minterm_range(dontcares, variable_count)

    kmap = KMap(variable_count, variable_names=variable_names)
    for index in dontcares:
        point = minterm_to_cell(kmap.layout, index)
        kmap[point.row, point.col] = CellValue.DONT_CARE
    for index in minterms:
        point = minterm_to_cell(kmap.layout, index)
        kmap[point.row, point.col] = CellValue.HIGH
    return kmap


def kmap_minterms(kmap: KMap) -> Tuple[List[int], List[int]]:
    """Return the sorted (minterms, don't cares) of a K-map."""
    minterms: List[int] = []
    dontcares: List[int] = []
    for point, value in kmap.scan():
        if value == CellValue.HIGH:
            minterms.append(cell_to_minterm(kmap.layout, point.row, point.col))
        elif value == CellValue.DONT_CARE:
            dontcares.append(cell_to_minterm(kmap.layout, point.row, point.col))
    return sorted(minterms), sorted(dontcares)


def truth_minterms(expr, vars_tuple) -> List[int]:
    """Return indices whose assignments make the expression evaluate to True."""
    mins = []
    for idx, bits in enumerate(itertools.product([0, 1], repeat=len(vars_tuple))):
        subs = {var: bool(bit) for var, bit in zip(vars_tuple, bits)}
        if bool(expr.xreplace(subs)):
            mins.append(idx)
    return mins


def kmap_from_expression(expr, variable_names: Sequence[str]) -> KMap:
    """Build a K-map holding the truth table of a SymPy expression."""
    vars_tuple = get_variables(variable_names)
    extras = expr.free_symbols - set(vars_tuple)
    if extras:
        names = ", ".join(sorted(str(sym) for sym in extras))
        raise ValueError(f"Expression contains variables outside the selected set: {names}")
    return kmap_from_minterms(
        len(vars_tuple), truth_minterms(expr, vars_tuple), variable_names=variable_names
    )


def parse_sop(raw: str, variable_names: Sequence[str]):
    """Parse algebraic text such as ``A'B + C`` into a SymPy expression.

    Juxtaposition is AND, ``+`` is OR and a trailing ``'`` negates the name
    or parenthesised group before it.
    """
    text = raw.replace("`", "'").replace(" ", "")
    if not text:
        raise ValueError("Enter an expression first.")

    names = sorted(variable_names, key=len, reverse=True)
    tokens: List[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in "()+'":
            tokens.append(ch)
            i += 1
            continue
        for name in names:
            if text.startswith(name, i):
                tokens.append(name)
                i += len(name)
                break
        else:
            allowed_display = ", ".join(variable_names)
            raise ValueError(f"Unsupported variable at {text[i:]!r}; use only: {allowed_display}")

    local = {name: Symbol(name) for name in variable_names}
    try:
        expr = sympify(_to_python(tokens), locals=local)
    except (SympifyError, SyntaxError, TypeError) as exc:
        raise ValueError("Could not parse the expression; check the syntax.") from exc
    return expr


def _to_python(tokens: Sequence[str]) -> str:
    out: List[str] = []
    for token in tokens:
        if token == "'":
            if not out:
                raise ValueError("A prime must follow a variable or a group.")
            out.append(f"~({_pop_operand(out)})")
            continue
        if out and _ends_operand(out[-1]) and (token not in (")", "+")):
            out.append("&")
        if token == "+":
            out.append("|")
        else:
            out.append(token)
    return "".join(out)


def _ends_operand(piece: str) -> bool:
    return piece not in ("(", "&", "|")


def _pop_operand(out: List[str]) -> str:
    """Remove and return the last operand (name or balanced group) from out."""
    if out[-1] != ")":
        if not _ends_operand(out[-1]):
            raise ValueError("A prime must follow a variable or a group.")
        return out.pop()
    depth = 0
    for start in range(len(out) - 1, -1, -1):
        if out[start] == ")":
            depth += 1
        elif out[start] == "(":
            depth -= 1
            if depth == 0:
                group = "".join(out[start:])
                del out[start:]
                return group
    raise ValueError("Unbalanced parentheses in expression.")


def minimize_minterms(
    variable_count: int,
    minterms: Iterable[int],
    dontcares: Iterable[int] = (),
    variable_names: Optional[Sequence[str]] = None,
) -> Solution:
    """Return the optimal cover for a function given by its minterms."""
    return kmap_from_minterms(
        variable_count, minterms, dontcares, variable_names
    ).optimal_solution()


__all__ = [
    "cell_to_minterm",
    "get_variables",
    "kmap_from_expression",
    "kmap_from_minterms",
    "kmap_minterms",
    "minimize_minterms",
    "minterm_to_cell",
    "parse_sop",
    "truth_minterms",
    "validate_minterm_range",
]
