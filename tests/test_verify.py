"""
Test suite for puzzle verification.

Tests all problem codes:
- Shape (NOT_SQUARE, EMPTY_CELL)
- Geometry (BAD_GEOMETRY, OUT_OF_BOUNDS)
- Spelling (PATH_MISMATCH, OVERLAP_CONFLICT)
- Bookkeeping (UNKNOWN_PLACED)
"""

import pytest
from src.puzzle import Puzzle, Solution, verify_puzzle, render_grid, line_cells, is_straight_line


def grid_from(*rows):
    return [list(row) for row in rows]


def codes(result):
    return [p.code for p in result.problems]


class TestValidPuzzles:
    """Puzzles that should verify cleanly."""

    def test_single_word(self):
        puzzle = Puzzle(
            grid=grid_from("CAT", "XYZ", "QRS"),
            solutions=[Solution(word="CAT", start=(0, 0), end=(0, 2))],
            placed=["CAT"],
        )
        result = verify_puzzle(puzzle)
        assert result.valid is True
        assert result.words_checked == 1

    def test_crossing_words_share_letter(self):
        """CAT across and TOP down share the T."""
        puzzle = Puzzle(
            grid=grid_from("CAT", "XYO", "QRP"),
            solutions=[
                Solution(word="CAT", start=(0, 0), end=(0, 2)),
                Solution(word="TOP", start=(0, 2), end=(2, 2)),
            ],
            placed=["CAT", "TOP"],
        )
        assert verify_puzzle(puzzle).valid is True

    def test_diagonal_up_right(self):
        puzzle = Puzzle(
            grid=grid_from("XXG", "XOX", "DXX"),
            solutions=[Solution(word="DOG", start=(2, 0), end=(0, 2))],
            placed=["DOG"],
        )
        assert verify_puzzle(puzzle).valid is True

    def test_hyphenated_word(self):
        puzzle = Puzzle(
            grid=grid_from("A-B", "XXX", "XXX"),
            solutions=[Solution(word="A-B", start=(0, 0), end=(0, 2))],
            placed=["A-B"],
        )
        assert verify_puzzle(puzzle).valid is True


class TestShapeProblems:
    """Grid shape and fill problems."""

    def test_blank_cell(self):
        puzzle = Puzzle(grid=grid_from("AB", "C"))
        puzzle.grid[1].append("")
        result = verify_puzzle(puzzle)
        assert result.valid is False
        assert "EMPTY_CELL" in codes(result)
        assert result.problems[0].cell == (1, 1)

    def test_lowercase_cell(self):
        puzzle = Puzzle(grid=grid_from("AB", "Cd"))
        assert "EMPTY_CELL" in codes(verify_puzzle(puzzle))

    def test_ragged_grid(self):
        puzzle = Puzzle(
            grid=grid_from("CAT", "XY", "QRS"),
            solutions=[Solution(word="CAT", start=(0, 0), end=(0, 2))],
            placed=["CAT"],
        )
        result = verify_puzzle(puzzle)
        assert "NOT_SQUARE" in codes(result)
        assert "PATH_MISMATCH" not in codes(result)


class TestSolutionProblems:
    """Solution geometry and spelling problems."""

    def test_path_mismatch(self):
        puzzle = Puzzle(
            grid=grid_from("COT", "XXX", "XXX"),
            solutions=[Solution(word="CAT", start=(0, 0), end=(0, 2))],
            placed=["CAT"],
        )
        result = verify_puzzle(puzzle)
        assert codes(result) == ["PATH_MISMATCH"]
        assert "COT" in result.problems[0].message

    def test_span_length_wrong(self):
        puzzle = Puzzle(
            grid=grid_from("CATS", "XXXX", "XXXX", "XXXX"),
            solutions=[Solution(word="CAT", start=(0, 0), end=(0, 3))],
            placed=["CAT"],
        )
        assert codes(verify_puzzle(puzzle)) == ["BAD_GEOMETRY"]

    def test_span_not_straight(self):
        puzzle = Puzzle(
            grid=grid_from("CAT", "XXX", "XXX"),
            solutions=[Solution(word="CAT", start=(0, 0), end=(1, 2))],
            placed=["CAT"],
        )
        assert codes(verify_puzzle(puzzle)) == ["BAD_GEOMETRY"]

    def test_out_of_bounds(self):
        puzzle = Puzzle(
            grid=grid_from("XCA", "XXX", "XXX"),
            solutions=[Solution(word="CAT", start=(0, 1), end=(0, 3))],
            placed=["CAT"],
        )
        assert codes(verify_puzzle(puzzle)) == ["OUT_OF_BOUNDS"]

    def test_overlap_conflict(self):
        """Two solutions claiming one cell with different letters."""
        puzzle = Puzzle(
            grid=grid_from("CAT", "XXO", "XXP"),
            solutions=[
                Solution(word="CAT", start=(0, 0), end=(0, 2)),
                Solution(word="SOP", start=(0, 2), end=(2, 2)),
            ],
            placed=["CAT", "SOP"],
        )
        result = verify_puzzle(puzzle)
        assert "OVERLAP_CONFLICT" in codes(result)
        conflict = next(p for p in result.problems if p.code == "OVERLAP_CONFLICT")
        assert conflict.cell == (0, 2)


class TestBookkeeping:
    """Placed list and solutions must agree."""

    def test_placed_without_solution(self):
        puzzle = Puzzle(grid=grid_from("AB", "CD"), placed=["AB"])
        assert codes(verify_puzzle(puzzle)) == ["UNKNOWN_PLACED"]

    def test_solution_not_placed(self):
        puzzle = Puzzle(
            grid=grid_from("AB", "CD"),
            solutions=[Solution(word="AB", start=(0, 0), end=(0, 1))],
        )
        assert codes(verify_puzzle(puzzle)) == ["UNKNOWN_PLACED"]


class TestGridHelpers:
    """Line geometry and rendering."""

    @pytest.mark.parametrize("start,end,expected", [
        ((0, 0), (0, 3), True),
        ((0, 0), (3, 0), True),
        ((0, 0), (3, 3), True),
        ((3, 0), (0, 3), True),
        ((0, 0), (1, 2), False),
        ((2, 2), (2, 2), True),
    ])
    def test_is_straight_line(self, start, end, expected):
        assert is_straight_line(start, end) is expected

    def test_line_cells_backwards(self):
        assert line_cells((2, 2), (0, 0)) == [(2, 2), (1, 1), (0, 0)]

    def test_line_cells_invalid(self):
        assert line_cells((0, 0), (2, 1)) is None

    def test_render_highlights(self):
        text = render_grid(grid_from("AB", "CD"), highlight=[(1, 0)])
        assert "[C]" in text
        assert " A " in text

    def test_render_empty(self):
        assert render_grid([]) == ""
