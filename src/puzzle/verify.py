"""
Puzzle verification for generated word searches.

Validates:
1. Shape (grid is square and every cell is a single uppercase letter or hyphen)
2. Geometry (each solution spans a straight line of len(word) cells inside the grid)
3. Paths (reading the grid from start to end spells the solution's word)
4. Overlaps (cells shared by two solutions need the same letter from both)
5. Bookkeeping (placed words and solutions agree one-to-one)
"""

import re
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .grid import in_bounds, line_cells
from .models import Cell, Puzzle


_CELL_PATTERN = re.compile(r'^[A-Z-]$')


class PuzzleProblem(BaseModel):
    """A single verification problem."""
    code: str
    message: str
    word: Optional[str] = None
    cell: Optional[Cell] = None


class VerificationResult(BaseModel):
    """Result of puzzle verification."""
    valid: bool
    problems: List[PuzzleProblem] = Field(default_factory=list)
    words_checked: int = 0


def validate_shape(puzzle: Puzzle) -> List[PuzzleProblem]:
    """Check the grid is square and fully filled."""
    problems: List[PuzzleProblem] = []
    size = puzzle.size

    for r, row in enumerate(puzzle.grid):
        if len(row) != size:
            problems.append(PuzzleProblem(
                code="NOT_SQUARE",
                message=f"Row {r} has {len(row)} cells, expected {size}",
            ))
            continue

        for c, ch in enumerate(row):
            if not _CELL_PATTERN.match(ch or ''):
                problems.append(PuzzleProblem(
                    code="EMPTY_CELL",
                    message=f"Cell ({r}, {c}) holds {ch!r}, expected one uppercase letter",
                    cell=(r, c),
                ))

    return problems


def validate_solutions(puzzle: Puzzle) -> List[PuzzleProblem]:
    """Check each solution's geometry and spelling, and overlaps between solutions."""
    problems: List[PuzzleProblem] = []
    claimed: Dict[Cell, str] = {}

    for solution in puzzle.solutions:
        cells = line_cells(solution.start, solution.end)
        if cells is None or len(cells) != len(solution.word):
            problems.append(PuzzleProblem(
                code="BAD_GEOMETRY",
                message=(
                    f"'{solution.word}' spans {solution.start} -> {solution.end}, "
                    f"which is not a straight line of {len(solution.word)} cells"
                ),
                word=solution.word,
            ))
            continue

        if not all(in_bounds(cell, puzzle.size) for cell in cells):
            problems.append(PuzzleProblem(
                code="OUT_OF_BOUNDS",
                message=f"'{solution.word}' leaves the {puzzle.size}x{puzzle.size} grid",
                word=solution.word,
            ))
            continue

        spelled = "".join(puzzle.letter_at(cell) for cell in cells)
        if spelled != solution.word:
            problems.append(PuzzleProblem(
                code="PATH_MISMATCH",
                message=f"Path for '{solution.word}' reads '{spelled}'",
                word=solution.word,
            ))

        for cell, letter in zip(cells, solution.word):
            if cell in claimed and claimed[cell] != letter:
                problems.append(PuzzleProblem(
                    code="OVERLAP_CONFLICT",
                    message=f"Cell {cell} needs '{claimed[cell]}' and '{letter}' ('{solution.word}')",
                    word=solution.word,
                    cell=cell,
                ))
            claimed.setdefault(cell, letter)

    return problems


def validate_bookkeeping(puzzle: Puzzle) -> List[PuzzleProblem]:
    """Placed words and solution words must be the same set, without duplicates."""
    problems: List[PuzzleProblem] = []
    solution_words = [s.word for s in puzzle.solutions]

    for word in puzzle.placed:
        if word not in solution_words:
            problems.append(PuzzleProblem(
                code="UNKNOWN_PLACED",
                message=f"'{word}' is listed as placed but has no solution",
                word=word,
            ))

    for word in solution_words:
        if word not in puzzle.placed:
            problems.append(PuzzleProblem(
                code="UNKNOWN_PLACED",
                message=f"Solution '{word}' is missing from the placed list",
                word=word,
            ))

    if len(set(puzzle.placed)) != len(puzzle.placed):
        problems.append(PuzzleProblem(
            code="UNKNOWN_PLACED",
            message="Placed list contains duplicates",
        ))

    return problems


def verify_puzzle(puzzle: Puzzle) -> VerificationResult:
    """
    Main verification function: checks a generated puzzle.

    Returns a VerificationResult with:
    - valid: True if the puzzle passes all checks
    - problems: every problem found
    - words_checked: number of solutions inspected
    """
    problems: List[PuzzleProblem] = []
    problems.extend(validate_shape(puzzle))

    # Path checks index into the grid, so skip them on a malformed grid
    if not any(p.code == "NOT_SQUARE" for p in problems):
        problems.extend(validate_solutions(puzzle))

    problems.extend(validate_bookkeeping(puzzle))

    return VerificationResult(
        valid=len(problems) == 0,
        problems=problems,
        words_checked=len(puzzle.solutions),
    )
