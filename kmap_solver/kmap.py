"""Karnaugh map grid and exact minimum-cost cover search."""

from __future__ import annotations

import enum
import logging
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .geometry import Point, Term, WrapIndex, _raw
from .layout import MapLayout, is_power_of_two
from .solution import Solution, gate_count

logger = logging.getLogger(__name__)

# Candidate counts above this make the subset search noticeably slow.
SEARCH_WARNING_THRESHOLD = 20

Index = Union[WrapIndex, int]


class CellValue(enum.IntEnum):
    DONT_CARE = -1
    LOW = 0
    HIGH = 1


class SolutionType(enum.Enum):
    SUM_OF_PRODUCTS = "sop"
    PRODUCT_OF_SUMS = "pos"


def _cell_value(value) -> CellValue:
    try:
        return CellValue(int(value))
    except ValueError as exc:
        raise ValueError(f"Unsupported cell value: {value!r}") from exc


class KMap:
    """A toroidal grid of cell values for one boolean function.

    Cells are stored row-major; rows are addressed by the first half of the
    variables and columns by the rest, both in Gray-code order.
    """

    def __init__(
        self,
        variable_count: int,
        values: Optional[Sequence] = None,
        variable_names: Optional[Sequence[str]] = None,
        solution_type: SolutionType = SolutionType.SUM_OF_PRODUCTS,
    ) -> None:
        self.layout = MapLayout(variable_count)
        self.variable_names = self.layout.resolve_names(variable_names)
        self.solution_type = solution_type
        self._data = np.zeros(self.layout.shape, dtype=np.int8)
        if values is not None:
            values = list(values)
            if len(values) != self.layout.cell_count:
                raise ValueError(
                    f"Expected {self.layout.cell_count} cell values for "
                    f"{variable_count} variables, got {len(values)}."
                )
            cells = [_cell_value(value) for value in values]
            self._data[:, :] = np.array(cells, dtype=np.int8).reshape(self.layout.shape)

    @property
    def variable_count(self) -> int:
        return self.layout.variable_count

    @property
    def shape(self) -> Tuple[int, int]:
        return self.layout.shape

    def copy(self) -> "KMap":
        """Return an independent map with the same names and cells."""
        clone = KMap(self.variable_count, variable_names=self.variable_names,
                     solution_type=self.solution_type)
        clone._data[:, :] = self._data
        return clone

    def to_array(self) -> np.ndarray:
        """Return a copy of the cell values as a 2-D array."""
        return self._data.copy()

    def values(self) -> List[CellValue]:
        """Return the cell values in row-major order."""
        return [CellValue(int(v)) for v in self._data.ravel()]

    def point(self, row: Index, col: Index) -> Point:
        """Wrap a row and column onto the map."""
        return self.layout.point(int(row), int(col))

    def data(self, row: Index, col: Index) -> CellValue:
        """Read the cell at a wrapped coordinate."""
        point = self.point(row, col)
        return CellValue(int(self._data[point.row, point.col]))

    def set(self, row: Index, col: Index, value) -> None:
        """Write one cell at a wrapped coordinate."""
        point = self.point(row, col)
        self._data[point.row, point.col] = _cell_value(value)

    def __getitem__(self, key: Tuple[Index, Index]) -> CellValue:
        return self.data(*key)

    def __setitem__(self, key: Tuple[Index, Index], value) -> None:
        self.set(key[0], key[1], value)

    def scan(
        self,
        row_begin: Optional[Index] = None,
        row_end: Optional[Index] = None,
        column_begin: Optional[Index] = None,
        column_end: Optional[Index] = None,
    ) -> Iterator[Tuple[Point, CellValue]]:
        """Yield (point, value) over ``[row_begin, row_end) x [column_begin, column_end)``.

        Ranges wrap: an end below its begin runs past the edge of the map.
        Omitted bounds cover the whole axis.
        """
        rows = self._axis(row_begin, row_end, self.layout.row_count)
        columns = self._axis(column_begin, column_end, self.layout.column_count)
        for i in rows:
            for j in columns:
                yield Point(i, j), CellValue(int(self._data[i, j]))

    @staticmethod
    def _axis(begin: Optional[Index], end: Optional[Index], size: int) -> List[int]:
        start = WrapIndex(0 if begin is None else int(_raw(begin)), size)
        stop = start + size if end is None else WrapIndex(_raw(end), size)
        return [int(i) for i in start.walk(stop)]

    def for_each(self, func: Callable[[Point, CellValue], None], *bounds: Index) -> None:
        """Call ``func(point, value)`` for every cell within the bounds."""
        for point, value in self.scan(*bounds):
            func(point, value)

    def fill(self, *args) -> None:
        """Fill the whole map, or a wrap-aware rectangle, with one value.

        ``fill(value)`` or ``fill(row_begin, row_end, column_begin, column_end, value)``.
        """
        if len(args) == 1:
            self._data[:, :] = _cell_value(args[0])
            return
        if len(args) != 5:
            raise TypeError("fill() takes a value, or four bounds and a value.")
        *bounds, value = args
        cell = _cell_value(value)
        for point, _ in list(self.scan(*bounds)):
            self._data[point.row, point.col] = cell

    def find(self, value, *bounds: Index) -> Optional[Point]:
        """Return the first point holding ``value`` within the bounds, or None."""
        target = _cell_value(value)
        for point, cell in self.scan(*bounds):
            if cell == target:
                return point
        return None

    def term(self, top_left: Tuple[int, int], bottom_right: Tuple[int, int]) -> Term:
        """Build a Term on this map from two (row, col) corners."""
        return Term(self.point(*top_left), self.point(*bottom_right), self.layout)

    def high_count(self) -> int:
        """Number of HIGH cells."""
        return int(np.count_nonzero(self._data == CellValue.HIGH))

    def high_points(self) -> List[Point]:
        """HIGH cells in row-major order."""
        return [point for point, value in self.scan() if value == CellValue.HIGH]

    def valid_points(self) -> List[Point]:
        """Cells a term may include: HIGH and don't-care cells."""
        return [point for point, value in self.scan() if value != CellValue.LOW]

    def is_term_valid(self, term: Term) -> bool:
        """Return True if the term has power-of-two sides and covers no LOW cell."""
        height, width = term.height, term.width
        if not (is_power_of_two(height) and is_power_of_two(width)):
            return False
        # full-span terms only in their canonical position
        if height == self.layout.row_count and term.top_left.row != 0:
            return False
        if width == self.layout.column_count and term.top_left.col != 0:
            return False
        found = self.find(
            CellValue.LOW,
            term.row_begin(),
            term.row_end(),
            term.column_begin(),
            term.column_end(),
        )
        return found is None

    def valid_terms(self) -> List[Term]:
        """Every valid term spanned by an ordered pair of valid points."""
        points = self.valid_points()
        terms: List[Term] = []
        for point_a in points:
            for point_b in points:
                term = Term(point_a, point_b, self.layout)
                if self.is_term_valid(term):
                    terms.append(term)
        return terms

    def is_solution_valid(self, terms: Iterable[Term]) -> bool:
        """Return True if every HIGH cell lies in at least one term."""
        terms = list(terms)
        return all(
            any(term.contains(point) for term in terms) for point in self.high_points()
        )

    def gates_required(self, terms: Sequence[Term]) -> int:
        """Gate cost of a cover; 0 for an empty one."""
        return gate_count(terms)

    def optimal_solution(self) -> Solution:
        """Return the cheapest cover of the HIGH cells.

        Every subset of the culled candidate terms is tried; among subsets
        of equal cost the first one in enumeration order is kept.
        """
        if self.solution_type is not SolutionType.SUM_OF_PRODUCTS:
            raise NotImplementedError(
                f"{self.solution_type.name} minimization is not implemented."
            )
        if self.high_count() == 0:
            return Solution([], self.variable_names, self.layout)

        raw_terms = self.valid_terms()
        candidates = cull_redundant_terms(raw_terms)
        logger.debug(
            "%d candidate terms, %d after culling", len(raw_terms), len(candidates)
        )
        if len(candidates) > SEARCH_WARNING_THRESHOLD:
            logger.warning(
                "Searching %d subsets of %d candidate terms; this may take a while.",
                (1 << len(candidates)) - 1,
                len(candidates),
            )

        chosen = _search_cover(self, candidates)
        solution = Solution(chosen, self.variable_names, self.layout)
        logger.debug("Optimal cover uses %d terms, %d gates", len(chosen), solution.gate_count)
        return solution

    def __eq__(self, other) -> bool:
        if not isinstance(other, KMap):
            return NotImplemented
        return (
            self.layout == other.layout
            and self.variable_names == other.variable_names
            and bool(np.array_equal(self._data, other._data))
        )

    def __repr__(self) -> str:
        return f"KMap({self.variable_count}, names={''.join(self.variable_names)!r})"

    def __str__(self) -> str:
        symbols = {CellValue.LOW: "0", CellValue.HIGH: "1", CellValue.DONT_CARE: "X"}
        return "\n".join(
            " ".join(symbols[CellValue(int(v))] for v in row) for row in self._data
        )


def cull_redundant_terms(terms: Iterable[Term]) -> List[Term]:
    """Drop every term that lies inside another term of the list.

    The list is walked in order and each surviving term removes the terms it
    contains, so the survivors keep their relative order.
    """
    survivors = list(terms)
    position = 0
    while position < len(survivors):
        outer = survivors[position]
        kept: List[Term] = []
        removed_before = 0
        for index, term in enumerate(survivors):
            if index != position and outer.contains(term):
                if index < position:
                    removed_before += 1
                continue
            kept.append(term)
        survivors = kept
        position = position - removed_before + 1
    return survivors


def _cell_mask(terms: Sequence[Term], points: Sequence[Point]) -> List[int]:
    masks = []
    for term in terms:
        mask = 0
        for bit, point in enumerate(points):
            if term.contains(point):
                mask |= 1 << bit
        masks.append(mask)
    return masks


def _search_cover(kmap: KMap, candidates: Sequence[Term]) -> List[Term]:
    """Exhaustive subset search; subsets are numbered by bit mask."""
    high_points = kmap.high_points()
    required = (1 << len(high_points)) - 1
    coverage = _cell_mask(candidates, high_points)
    literals = [term.literal_count for term in candidates]

    best_mask = 0
    best_cost = 0
    for mask in range(1, 1 << len(candidates)):
        covered = 0
        cost = -1
        bits = mask
        j = 0
        while bits:
            if bits & 1:
                covered |= coverage[j]
                cost += literals[j] + 1
            bits >>= 1
            j += 1
        if covered != required:
            continue
        if best_mask == 0 or cost < best_cost:
            best_mask = mask
            best_cost = cost

    return [term for j, term in enumerate(candidates) if best_mask & (1 << j)]


__all__ = [
    "CellValue",
    "KMap",
    "SEARCH_WARNING_THRESHOLD",
    "SolutionType",
    "cull_redundant_terms",
]
