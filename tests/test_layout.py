"""Unit tests for map dimensions, Gray codes and default names."""

import pytest

from kmap_solver import DEFAULT_VARIABLE_NAMES, MapLayout, Point, binary_to_gray, gray_to_binary


@pytest.mark.parametrize(
    "variables, row_vars, col_vars, shape",
    [
        (2, 1, 1, (2, 2)),
        (3, 1, 2, (2, 4)),
        (4, 2, 2, (4, 4)),
        (5, 2, 3, (4, 8)),
        (6, 3, 3, (8, 8)),
    ],
)
def test_dimensions(variables, row_vars, col_vars, shape):
    layout = MapLayout(variables)
    assert layout.row_variable_count == row_vars
    assert layout.column_variable_count == col_vars
    assert layout.shape == shape
    assert layout.cell_count == shape[0] * shape[1]


def test_too_few_variables():
    with pytest.raises(ValueError):
        MapLayout(1)


def test_gray_code_sequence():
    assert [binary_to_gray(i) for i in range(8)] == [0, 1, 3, 2, 6, 7, 5, 4]


def test_gray_code_neighbours_differ_in_one_bit():
    for i in range(63):
        diff = binary_to_gray(i) ^ binary_to_gray(i + 1)
        assert diff & (diff - 1) == 0


def test_gray_to_binary_inverts():
    for i in range(256):
        assert gray_to_binary(binary_to_gray(i)) == i


def test_point_wraps_out_of_range_coordinates():
    layout = MapLayout(4)
    assert layout.point(5, -1) == Point(1, 3)
    assert layout.point(-4, 8) == Point(0, 0)


class TestNames:
    def test_default_names(self):
        assert MapLayout(4).resolve_names(None) == ("A", "B", "C", "D")

    def test_string_names(self):
        assert MapLayout(3).resolve_names("xyz") == ("x", "y", "z")

    def test_sequence_names(self):
        assert MapLayout(2).resolve_names(["in0", "in1"]) == ("in0", "in1")

    def test_wrong_length(self):
        with pytest.raises(ValueError):
            MapLayout(4).resolve_names("ABC")

    def test_default_alphabet_limit(self):
        limit = len(DEFAULT_VARIABLE_NAMES)
        assert len(MapLayout(limit).resolve_names(None)) == limit
        with pytest.raises(ValueError):
            MapLayout(limit + 1).resolve_names(None)
