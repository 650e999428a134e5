"""Grid geometry and rendering utilities."""

from typing import Iterable, List, Optional, Set

from .models import Cell, Puzzle


def cell_key(cell: Cell) -> str:
    """Render a cell as the "row-col" key used for highlighting."""
    return f"{cell[0]}-{cell[1]}"


def is_straight_line(start: Cell, end: Cell) -> bool:
    """True if start->end is horizontal, vertical or exactly 45 degrees."""
    row_diff = end[0] - start[0]
    col_diff = end[1] - start[1]
    return row_diff == 0 or col_diff == 0 or abs(row_diff) == abs(col_diff)


def line_cells(start: Cell, end: Cell) -> Optional[List[Cell]]:
    """
    Cells from start to end inclusive, in unit steps.

    Returns None when the two cells do not lie on a straight line.
    A zero-length line yields just the start cell.
    """
    if not is_straight_line(start, end):
        return None

    row_diff = end[0] - start[0]
    col_diff = end[1] - start[1]
    steps = max(abs(row_diff), abs(col_diff))
    if steps == 0:
        return [start]

    row_step = row_diff // steps
    col_step = col_diff // steps
    return [(start[0] + row_step * i, start[1] + col_step * i) for i in range(steps + 1)]


def path_cells(start: Cell, row_step: int, col_step: int, length: int) -> List[Cell]:
    """Cells visited by a word of `length` letters written from start."""
    return [(start[0] + row_step * i, start[1] + col_step * i) for i in range(length)]


def in_bounds(cell: Cell, size: int) -> bool:
    return 0 <= cell[0] < size and 0 <= cell[1] < size


def read_path(puzzle: Puzzle, start: Cell, end: Cell) -> Optional[str]:
    """Read the letters along start->end, or None if the line is invalid or leaves the grid."""
    cells = line_cells(start, end)
    if cells is None or not all(in_bounds(c, puzzle.size) for c in cells):
        return None
    return "".join(puzzle.letter_at(c) for c in cells)


def render_grid(grid: List[List[str]], highlight: Iterable[Cell] = ()) -> str:
    """
    Render the grid to a string.

    Highlighted cells are wrapped in brackets, everything else padded with spaces.
    """
    if not grid:
        return ""

    marked: Set[Cell] = set(highlight)
    size = len(grid[0])
    header = "    " + "".join(f"{c:>3}" for c in range(size))

    lines = [header]
    for r, row in enumerate(grid):
        cells = "".join(
            f"[{ch}]" if (r, c) in marked else f" {ch} "
            for c, ch in enumerate(row)
        )
        lines.append(f"{r:>3} {cells}")

    return "\n".join(lines)
