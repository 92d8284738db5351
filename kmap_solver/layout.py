"""Karnaugh map dimensions and Gray-code helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .geometry import Point

DEFAULT_VARIABLE_NAMES = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def binary_to_gray(value: int) -> int:
    """Return the reflected Gray code of a non-negative integer."""
    return value ^ (value >> 1)


def gray_to_binary(gray: int) -> int:
    """Invert :func:`binary_to_gray`."""
    value = gray
    shift = gray >> 1
    while shift:
        value ^= shift
        shift >>= 1
    return value


def is_power_of_two(value: int) -> bool:
    """Return True for 1, 2, 4, 8 and so on."""
    return value > 0 and value & (value - 1) == 0


@dataclass(frozen=True)
class MapLayout:
    """Dimensions of a K-map derived from its variable count.

    Row variables take the lower half of the count and column variables the
    rest, so a map is either square or twice as wide as it is tall.
    """

    variable_count: int

    def __post_init__(self) -> None:
        if self.variable_count < 2:
            raise ValueError("A K-map needs 2 or more variables.")

    @property
    def row_variable_count(self) -> int:
        """Variables addressing the rows."""
        return self.variable_count // 2

    @property
    def column_variable_count(self) -> int:
        """Variables addressing the columns; one more than the rows when odd."""
        return self.variable_count // 2 + self.variable_count % 2

    @property
    def row_count(self) -> int:
        """Rows in the grid."""
        return 1 << self.row_variable_count

    @property
    def column_count(self) -> int:
        """Columns in the grid."""
        return 1 << self.column_variable_count

    @property
    def shape(self) -> Tuple[int, int]:
        return self.row_count, self.column_count

    @property
    def cell_count(self) -> int:
        """Total cells, 2 to the variable count."""
        return self.row_count * self.column_count

    def point(self, row: int, col: int) -> Point:
        """Return the grid Point at (row, col), wrapping out-of-range values."""
        return Point(int(row) % self.row_count, int(col) % self.column_count)

    def resolve_names(self, variable_names: Sequence[str] | None) -> Tuple[str, ...]:
        """Validate explicit names, or fall back to the default alphabet."""
        if variable_names is None:
            if self.variable_count > len(DEFAULT_VARIABLE_NAMES):
                raise ValueError(
                    f"Variable count {self.variable_count} is too large for the default "
                    f"variable names ({len(DEFAULT_VARIABLE_NAMES)}); pass variable_names."
                )
            return tuple(DEFAULT_VARIABLE_NAMES[: self.variable_count])

        names = tuple(str(name) for name in variable_names)
        if len(names) != self.variable_count:
            raise ValueError(
                f"Expected {self.variable_count} variable names, got {len(names)}."
            )
        return names


__all__ = [
    "DEFAULT_VARIABLE_NAMES",
    "MapLayout",
    "binary_to_gray",
    "gray_to_binary",
    "is_power_of_two",
]
