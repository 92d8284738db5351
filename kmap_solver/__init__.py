"""Convenience exports for the K-map minimizer."""

from .geometry import Point, Term, WrapIndex
from .kmap import CellValue, KMap, SolutionType, cull_redundant_terms
from .layout import DEFAULT_VARIABLE_NAMES, MapLayout, binary_to_gray, gray_to_binary
from .logic import (
    cell_to_minterm,
    get_variables,
    kmap_from_expression,
    kmap_from_minterms,
    kmap_minterms,
    minimize_minterms,
    minterm_to_cell,
    parse_sop,
    truth_minterms,
    validate_minterm_range,
)
from .solution import Solution, gate_count

__all__ = [
    "CellValue",
    "DEFAULT_VARIABLE_NAMES",
    "KMap",
    "MapLayout",
    "Point",
    "Solution",
    "SolutionType",
    "Term",
    "WrapIndex",
    "binary_to_gray",
    "cell_to_minterm",
    "cull_redundant_terms",
    "gate_count",
    "get_variables",
    "gray_to_binary",
    "kmap_from_expression",
    "kmap_from_minterms",
    "kmap_minterms",
    "minimize_minterms",
    "minterm_to_cell",
    "parse_sop",
    "truth_minterms",
    "validate_minterm_range",
]
__version__ = "0.1.0"
