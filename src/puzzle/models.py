"""Data models for word-search puzzles."""

from enum import Enum
from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


Cell = Tuple[int, int]


class Direction(str, Enum):
    """Compass writing directions, stepped by (row delta, col delta)."""
    E = "E"
    W = "W"
    S = "S"
    N = "N"
    SE = "SE"
    NW = "NW"
    NE = "NE"
    SW = "SW"

    @property
    def delta(self) -> Tuple[int, int]:
        return DIRECTION_DELTAS[self]


DIRECTION_DELTAS = {
    Direction.E: (0, 1),
    Direction.W: (0, -1),
    Direction.S: (1, 0),
    Direction.N: (-1, 0),
    Direction.SE: (1, 1),
    Direction.NW: (-1, -1),
    Direction.NE: (-1, 1),
    Direction.SW: (1, -1),
}

# Horizontal, vertical and both forward diagonals
DEFAULT_DIRECTIONS: List[Direction] = [Direction.E, Direction.S, Direction.SE, Direction.NE]


class WordEntry(BaseModel):
    """A target word with an optional child-facing clue."""
    model_config = ConfigDict(frozen=True)

    word: str = Field(..., min_length=1)
    hint: Optional[str] = None


class Solution(BaseModel):
    """The placed span of one normalized word."""
    model_config = ConfigDict(frozen=True)

    word: str
    start: Cell
    end: Cell

    def matches(self, start: Cell, end: Cell) -> bool:
        """True if (start, end) equals this span in either orientation."""
        return (start == self.start and end == self.end) or (
            start == self.end and end == self.start
        )


class Puzzle(BaseModel):
    """Generator output: filled grid, solutions, and the words actually placed."""
    grid: List[List[str]]
    solutions: List[Solution] = Field(default_factory=list)
    placed: List[str] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.grid)

    def letter_at(self, cell: Cell) -> str:
        row, col = cell
        return self.grid[row][col]

    def solution_for(self, word: str) -> Optional[Solution]:
        for solution in self.solutions:
            if solution.word == word:
                return solution
        return None


SizePolicy = Literal["fixed", "auto"]


class PuzzleConfig(BaseModel):
    """Grid sizing, allowed directions and placement limits."""
    size_policy: SizePolicy = "fixed"
    size: int = Field(default=15, ge=2)
    min_size: int = Field(default=10, ge=2)
    directions: List[Direction] = Field(default_factory=lambda: list(DEFAULT_DIRECTIONS), min_length=1)
    max_attempts: int = Field(default=100, ge=1)
    allow_hyphens: bool = True
    seed: Optional[int] = None
