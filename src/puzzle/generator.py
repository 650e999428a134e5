"""
Word-search grid generation.

Places each word along a random allowed direction from a random start
cell, retrying up to a bounded number of attempts. A placement is valid
when the whole path stays on the grid and every cell is either empty or
already holds the letter the word needs. Words that cannot be placed are
dropped. Remaining cells are filled with random A-Z letters.
"""

import logging
import math
import random
import string
from typing import List, Optional, Sequence

from .grid import in_bounds, path_cells
from .models import Cell, Direction, Puzzle, PuzzleConfig, Solution, WordEntry
from .parsing import normalize_word


logger = logging.getLogger(__name__)

EMPTY = ''
FILL_ALPHABET = string.ascii_uppercase
MIN_WORD_LENGTH = 2


def compute_grid_size(words: Sequence[str], config: PuzzleConfig) -> int:
    """
    Grid side length for the given normalized words.

    "fixed": the configured size, grown to fit the longest word.
    "auto": max(longest word, ceil(sqrt(total letters)), min_size).
    """
    longest = max((len(w) for w in words), default=0)

    if config.size_policy == "auto":
        total = sum(len(w) for w in words)
        return max(longest, math.ceil(math.sqrt(total)), config.min_size)

    return max(config.size, longest)


class GridGenerator:
    """
    Builds a Puzzle from a word list.

    Attributes:
        config: Sizing, direction and attempt settings
        rng: Random source; seeded from config.seed when not supplied
    """

    def __init__(self, config: Optional[PuzzleConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or PuzzleConfig()
        self.rng = rng or random.Random(self.config.seed)

    def generate(self, words: Sequence[WordEntry | str]) -> Puzzle:
        """
        Generate a filled grid with a solution for every placed word.

        Args:
            words: Ordered word entries (hints are ignored)

        Returns:
            Puzzle whose `placed` list is the true denominator for scoring
        """
        normalized = self._normalize_all(words)
        size = compute_grid_size(normalized, self.config)
        grid: List[List[str]] = [[EMPTY for _ in range(size)] for _ in range(size)]

        solutions: List[Solution] = []
        placed: List[str] = []

        for word in normalized:
            if word in placed:
                continue

            solution = self._place_word(grid, word)
            if solution is None:
                logger.debug("Could not place '%s' after %d attempts", word, self.config.max_attempts)
                continue

            solutions.append(solution)
            placed.append(word)

        self._fill_empty_cells(grid)

        logger.debug("Generated %dx%d grid with %d/%d words placed", size, size, len(placed), len(normalized))
        return Puzzle(grid=grid, solutions=solutions, placed=placed)

    def _normalize_all(self, words: Sequence[WordEntry | str]) -> List[str]:
        result = []
        for entry in words:
            text = entry.word if isinstance(entry, WordEntry) else entry
            word = normalize_word(text, allow_hyphens=self.config.allow_hyphens)
            # Hyphens alone do not make a word
            if len(word) >= MIN_WORD_LENGTH and any(ch.isalpha() for ch in word):
                result.append(word)
        return result

    def _place_word(self, grid: List[List[str]], word: str) -> Optional[Solution]:
        """Try random placements; write the word and return its Solution on success."""
        size = len(grid)

        for _ in range(self.config.max_attempts):
            direction: Direction = self.rng.choice(self.config.directions)
            row_step, col_step = direction.delta
            start = (self.rng.randrange(size), self.rng.randrange(size))

            cells = path_cells(start, row_step, col_step, len(word))
            if not self._fits(grid, word, cells):
                continue

            for (r, c), letter in zip(cells, word):
                grid[r][c] = letter
            return Solution(word=word, start=cells[0], end=cells[-1])

        return None

    @staticmethod
    def _fits(grid: List[List[str]], word: str, cells: List[Cell]) -> bool:
        size = len(grid)
        if not in_bounds(cells[-1], size) or not in_bounds(cells[0], size):
            return False

        for (r, c), letter in zip(cells, word):
            current = grid[r][c]
            if current != EMPTY and current != letter:
                return False
        return True

    def _fill_empty_cells(self, grid: List[List[str]]) -> None:
        for row in grid:
            for c, cell in enumerate(row):
                if cell == EMPTY:
                    row[c] = self.rng.choice(FILL_ALPHABET)


def generate(
    words: Sequence[WordEntry | str],
    config: Optional[PuzzleConfig] = None,
    rng: Optional[random.Random] = None,
) -> Puzzle:
    """Generate a puzzle from a word list (see GridGenerator.generate)."""
    return GridGenerator(config=config, rng=rng).generate(words)
