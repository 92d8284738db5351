"""Wrap-around coordinates and rectangular terms on a K-map."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import TYPE_CHECKING, Iterator, Tuple, Union

if TYPE_CHECKING:
    from .layout import MapLayout


@total_ordering
class WrapIndex:
    """An axis index that wraps around modulo the axis size.

    Arithmetic keeps the raw value so a span's end can sit past the edge of
    the map; the index it addresses is always ``value % size``.
    """

    __slots__ = ("value", "size")

    def __init__(self, value: int, size: int) -> None:
        self.value = int(value)
        self.size = size

    def __index__(self) -> int:
        return self.value % self.size

    def __int__(self) -> int:
        return self.value % self.size

    def __add__(self, other: Union["WrapIndex", int]) -> "WrapIndex":
        return WrapIndex(self.value + _raw(other), self.size)

    __radd__ = __add__

    def __sub__(self, other: Union["WrapIndex", int]) -> "WrapIndex":
        return WrapIndex(self.value - _raw(other), self.size)

    def __eq__(self, other) -> bool:
        if isinstance(other, WrapIndex):
            return int(self) == int(other)
        if isinstance(other, int):
            return int(self) == other % self.size
        return NotImplemented

    def __lt__(self, other: Union["WrapIndex", int]) -> bool:
        if isinstance(other, WrapIndex):
            return int(self) < int(other)
        return int(self) < other % self.size

    def __hash__(self) -> int:
        return hash(int(self))

    def __repr__(self) -> str:
        return f"WrapIndex({self.value}, size={self.size})"

    def steps_to(self, end: Union["WrapIndex", int]) -> int:
        """Number of forward steps from this index until ``end`` is reached."""
        distance = _raw(end) - self.value
        if distance == 0:
            return 0
        return distance % self.size or self.size

    def walk(self, end: Union["WrapIndex", int]) -> Iterator["WrapIndex"]:
        """Yield indices in ``[self, end)``, crossing the edge when end < self."""
        current = self
        for _ in range(self.steps_to(end)):
            yield current
            current = current + 1


def _raw(index: Union[WrapIndex, int]) -> int:
    return index.value if isinstance(index, WrapIndex) else int(index)


@dataclass(frozen=True)
class Point:
    """A cell coordinate on the map."""

    row: int
    col: int


def _in_span(value: int, begin: int, end: int) -> bool:
    if end >= begin:
        return begin <= value <= end
    # span crosses the edge of the map
    return value >= begin or value <= end


@dataclass(frozen=True)
class Term:
    """Axis-aligned rectangle between two corners, wrapping past the edges."""

    top_left: Point
    bottom_right: Point
    layout: "MapLayout"

    def __post_init__(self) -> None:
        layout = self.layout
        object.__setattr__(
            self, "top_left", layout.point(self.top_left.row, self.top_left.col)
        )
        object.__setattr__(
            self,
            "bottom_right",
            layout.point(self.bottom_right.row, self.bottom_right.col),
        )

    @property
    def height(self) -> int:
        """Rows covered, counting across the edge."""
        return (self.bottom_right.row - self.top_left.row) % self.layout.row_count + 1

    @property
    def width(self) -> int:
        """Columns covered, counting across the edge."""
        return (self.bottom_right.col - self.top_left.col) % self.layout.column_count + 1

    @property
    def area(self) -> int:
        return self.height * self.width

    @property
    def literal_count(self) -> int:
        """Literals (AND-gate inputs) needed to express this term."""
        row_literals = self.layout.row_variable_count - (self.height.bit_length() - 1)
        column_literals = self.layout.column_variable_count - (self.width.bit_length() - 1)
        return row_literals + column_literals

    def row_begin(self) -> WrapIndex:
        return WrapIndex(self.top_left.row, self.layout.row_count)

    def row_end(self) -> WrapIndex:
        return self.row_begin() + self.height

    def column_begin(self) -> WrapIndex:
        return WrapIndex(self.top_left.col, self.layout.column_count)

    def column_end(self) -> WrapIndex:
        return self.column_begin() + self.width

    def rows(self) -> Tuple[int, ...]:
        """Row indices covered, starting at the top-left corner."""
        return tuple(int(i) for i in self.row_begin().walk(self.row_end()))

    def columns(self) -> Tuple[int, ...]:
        """Column indices covered, starting at the top-left corner."""
        return tuple(int(j) for j in self.column_begin().walk(self.column_end()))

    def cells(self) -> Iterator[Point]:
        columns = self.columns()
        for row in self.rows():
            for col in columns:
                yield Point(row, col)

    def contains(self, other: Union[Point, "Term"]) -> bool:
        """Return True if a point, or a whole term, lies inside this term.

        A term is inside when both of its corners are and it is no taller
        or wider than this one.
        """
        if isinstance(other, Term):
            return (
                other.height <= self.height
                and other.width <= self.width
                and self.contains(other.top_left)
                and self.contains(other.bottom_right)
            )
        other = self.layout.point(other.row, other.col)
        return _in_span(other.row, self.top_left.row, self.bottom_right.row) and _in_span(
            other.col, self.top_left.col, self.bottom_right.col
        )

    def __repr__(self) -> str:
        tl, br = self.top_left, self.bottom_right
        return f"Term(({tl.row}, {tl.col}) -> ({br.row}, {br.col}))"


__all__ = ["Point", "Term", "WrapIndex"]
