"""Minimized covers and their sum-of-products rendering."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from sympy import And, Not, Or, Symbol, false, true

from .geometry import Term
from .layout import MapLayout, binary_to_gray


def _axis_literals(indices: Iterable[int], variable_count: int) -> List[Tuple[int, bool]]:
    """Return (variable offset, is_high) for variables constant over the indices."""
    full = (1 << variable_count) - 1
    ones = full
    zeros = full
    for index in indices:
        gray = binary_to_gray(index)
        ones &= gray
        zeros &= ~gray
    literals = []
    for offset in range(variable_count):
        bit = 1 << (variable_count - offset - 1)
        if ones & bit:
            literals.append((offset, True))
        elif zeros & bit:
            literals.append((offset, False))
    return literals


def term_literals(term: Term) -> List[Tuple[int, bool]]:
    """Return (variable index, is_high) pairs for a term, row variables first."""
    layout = term.layout
    row_literals = _axis_literals(term.rows(), layout.row_variable_count)
    column_literals = _axis_literals(term.columns(), layout.column_variable_count)
    return row_literals + [
        (offset + layout.row_variable_count, high) for offset, high in column_literals
    ]


def gate_count(terms: Sequence[Term]) -> int:
    """AND-gate literals for every term plus the OR gates joining them.

    An empty cover needs no gates and counts as 0 rather than -1.
    """
    if not terms:
        return 0
    return sum(term.literal_count for term in terms) + len(terms) - 1


class Solution:
    """An ordered cover of a K-map together with the variable names it uses."""

    def __init__(
        self, terms: Sequence[Term], variable_names: Sequence[str], layout: MapLayout
    ) -> None:
        self.terms: Tuple[Term, ...] = tuple(terms)
        self.variable_names: Tuple[str, ...] = tuple(variable_names)
        self.layout = layout

    @property
    def gate_count(self) -> int:
        return gate_count(self.terms)

    def is_constant_one(self) -> bool:
        return (
            len(self.terms) == 1
            and self.terms[0].height == self.layout.row_count
            and self.terms[0].width == self.layout.column_count
        )

    def format_term(self, term: Term) -> str:
        pieces = []
        for index, high in term_literals(term):
            name = self.variable_names[index]
            pieces.append(name if high else f"{name}'")
        return "".join(pieces)

    def to_string(self) -> str:
        if not self.terms:
            return "0"
        if self.is_constant_one():
            return "1"
        return " + ".join(f"({self.format_term(term)})" for term in self.terms)

    def to_expr(self):
        """Return the cover as a SymPy sum-of-products expression."""
        if not self.terms:
            return false
        if self.is_constant_one():
            return true
        symbols = [Symbol(name) for name in self.variable_names]
        products = []
        for term in self.terms:
            factors = [
                symbols[index] if high else Not(symbols[index])
                for index, high in term_literals(term)
            ]
            products.append(And(*factors))
        return Or(*products)

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self):
        return iter(self.terms)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Solution({self.to_string()!r}, gates={self.gate_count})"


__all__ = ["Solution", "gate_count", "term_literals"]
