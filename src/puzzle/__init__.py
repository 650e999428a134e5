"""Word-search puzzle generation and verification."""

from .models import (
    Cell,
    Direction,
    DIRECTION_DELTAS,
    DEFAULT_DIRECTIONS,
    WordEntry,
    Solution,
    Puzzle,
    PuzzleConfig,
)
from .parsing import normalize_word, parse_word_list
from .grid import cell_key, is_straight_line, line_cells, read_path, render_grid
from .generator import GridGenerator, generate, compute_grid_size
from .verify import verify_puzzle, PuzzleProblem, VerificationResult

__all__ = [
    # Models
    "Cell",
    "Direction",
    "DIRECTION_DELTAS",
    "DEFAULT_DIRECTIONS",
    "WordEntry",
    "Solution",
    "Puzzle",
    "PuzzleConfig",
    # Parsing
    "normalize_word",
    "parse_word_list",
    # Grid utilities
    "cell_key",
    "is_straight_line",
    "line_cells",
    "read_path",
    "render_grid",
    # Generation
    "GridGenerator",
    "generate",
    "compute_grid_size",
    # Verification
    "verify_puzzle",
    "PuzzleProblem",
    "VerificationResult",
]
