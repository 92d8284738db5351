"""Tests for minterm and expression interop."""

import pytest
from sympy import And, Not, Or, Symbol

from kmap_solver import (
    CellValue,
    MapLayout,
    Point,
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


class TestCellMapping:
    @pytest.mark.parametrize("variables", [2, 3, 4, 5, 6])
    def test_round_trip(self, variables):
        layout = MapLayout(variables)
        cells = {minterm_to_cell(layout, m) for m in range(1 << variables)}
        assert len(cells) == layout.cell_count
        for m in range(1 << variables):
            point = minterm_to_cell(layout, m)
            assert cell_to_minterm(layout, point.row, point.col) == m

    def test_four_variable_corners(self):
        layout = MapLayout(4)
        assert minterm_to_cell(layout, 0) == Point(0, 0)
        assert minterm_to_cell(layout, 2) == Point(0, 3)
        assert minterm_to_cell(layout, 8) == Point(3, 0)
        assert minterm_to_cell(layout, 10) == Point(3, 3)
        assert minterm_to_cell(layout, 15) == Point(2, 2)


def test_validate_minterm_range():
    validate_minterm_range([0, 7], 3)
    with pytest.raises(ValueError):
        validate_minterm_range([0, 8], 3)
    with pytest.raises(ValueError):
        validate_minterm_range([-1], 3)


class TestFromMinterms:
    def test_cells(self):
        kmap = kmap_from_minterms(3, [0, 7], [5])
        assert kmap[0, 0] == CellValue.HIGH
        assert kmap[1, 2] == CellValue.HIGH
        assert kmap[1, 1] == CellValue.DONT_CARE
        assert kmap.high_count() == 2

    def test_minterm_wins_over_dont_care(self):
        kmap = kmap_from_minterms(2, [1], [1, 2])
        assert kmap_minterms(kmap) == ([1], [2])

    def test_round_trip(self):
        kmap = kmap_from_minterms(4, [3, 1, 9], [4, 14])
        assert kmap_minterms(kmap) == ([1, 3, 9], [4, 14])

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            kmap_from_minterms(2, [4])

    def test_minimize(self):
        assert str(minimize_minterms(4, [0, 2, 8, 10])) == "(B'D')"
        assert str(minimize_minterms(3, [], [1, 2])) == "0"
        assert str(minimize_minterms(2, [0, 1, 2, 3])) == "1"

    def test_minimize_with_dont_cares(self):
        solution = minimize_minterms(4, [1, 3, 7, 11, 15], [0, 2, 5])
        assert solution.gate_count == 5
        assert str(solution) == "(A'B') + (CD)"


class TestParse:
    names = ["A", "B", "C", "D"]

    def test_products_and_sums(self):
        A, B, C, D = (Symbol(n) for n in self.names)
        assert parse_sop("A'B + C", self.names) == Or(And(Not(A), B), C)

    def test_negated_group(self):
        A, B = Symbol("A"), Symbol("B")
        assert parse_sop("(A + B)'", self.names) == Not(Or(A, B))

    def test_backtick_and_spaces(self):
        A, D = Symbol("A"), Symbol("D")
        assert parse_sop("A` D", self.names) == And(Not(A), D)

    def test_multi_letter_names(self):
        sel, en = Symbol("sel"), Symbol("en")
        assert parse_sop("sel'en", ["sel", "en"]) == And(Not(sel), en)

    def test_unknown_variable(self):
        with pytest.raises(ValueError):
            parse_sop("AE", self.names)

    def test_empty(self):
        with pytest.raises(ValueError):
            parse_sop("  ", self.names)

    def test_malformed(self):
        with pytest.raises(ValueError):
            parse_sop("A +", self.names)
        with pytest.raises(ValueError):
            parse_sop("'A", self.names)


class TestFromExpression:
    def test_truth_minterms(self):
        A, B = get_variables("AB")
        assert truth_minterms(And(A, Not(B)), (A, B)) == [2]

    def test_expression_round_trip(self):
        names = ["A", "B", "C", "D"]
        expr = parse_sop("A'B'C'D' + A'B'CD' + AB'C'D' + AB'CD'", names)
        kmap = kmap_from_expression(expr, names)
        assert str(kmap.optimal_solution()) == "(B'D')"

    def test_foreign_symbols(self):
        with pytest.raises(ValueError):
            kmap_from_expression(And(Symbol("A"), Symbol("Z")), ["A", "B"])
