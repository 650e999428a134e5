import random
from datetime import datetime
from typing import Dict, List, Literal, Optional, Sequence, Set
from pydantic import BaseModel, Field

from ..errors import PuzzleUnavailable, SessionComplete
from ..puzzle.generator import generate
from ..puzzle.grid import cell_key, is_straight_line, line_cells
from ..puzzle.models import Cell, Puzzle, PuzzleConfig, WordEntry
from .models import SessionSummary
from .progress import percentage_of


SessionState = Literal["idle", "selecting", "completed"]


class WordSearchSession(BaseModel):
    """
    Tracks one child's play-through of a word-search puzzle.

    Resolves press/enter/release gestures on grid cells into straight
    lines and matches them, by endpoints in either orientation, against
    the puzzle's solutions. Found words accumulate until finish().

    Attributes:
        puzzle: The generated puzzle (immutable for the session)
        selection_start: Cell where the current drag began
        current_selection: Furthest valid cell of the current drag
        found_words: Normalized words found so far, in order found
        started_at: When the session started (for time taken)
        is_complete: Whether finish() has been called
    """

    puzzle: Puzzle
    selection_start: Optional[Cell] = None
    current_selection: Optional[Cell] = None
    found_words: List[str] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=datetime.now)
    is_complete: bool = False
    summary: Optional[SessionSummary] = None

    @classmethod
    def start(cls, puzzle: Puzzle, started_at: Optional[datetime] = None) -> "WordSearchSession":
        """
        Start a session on an already generated puzzle.

        Raises:
            PuzzleUnavailable: If the puzzle has no placed words
        """
        if not puzzle.placed:
            raise PuzzleUnavailable("NO_WORDS_PLACED")
        return cls(puzzle=puzzle, started_at=started_at or datetime.now())

    @classmethod
    def from_word_list(
        cls,
        words: Sequence[WordEntry | str],
        config: Optional[PuzzleConfig] = None,
        rng: Optional[random.Random] = None,
        started_at: Optional[datetime] = None,
    ) -> "WordSearchSession":
        """
        Generate a puzzle from a word list and start a session on it.

        Raises:
            PuzzleUnavailable: NO_WORD_LIST for an empty list,
                NO_WORDS_PLACED when no word could be placed
        """
        if not words:
            raise PuzzleUnavailable("NO_WORD_LIST")
        puzzle = generate(words, config=config, rng=rng)
        return cls.start(puzzle, started_at=started_at)

    @property
    def state(self) -> SessionState:
        if self.is_complete:
            return "completed"
        if self.selection_start is not None:
            return "selecting"
        return "idle"

    @property
    def all_found(self) -> bool:
        """True once every placed word has been found."""
        return len(self.found_words) == len(self.puzzle.placed)

    @property
    def words_remaining(self) -> List[str]:
        return [w for w in self.puzzle.placed if w not in self.found_words]

    def on_cell_pressed(self, row: int, col: int) -> None:
        """Begin a selection at (row, col)."""
        self._ensure_active()
        self.selection_start = (row, col)
        self.current_selection = (row, col)

    def on_cell_entered(self, row: int, col: int) -> None:
        """
        Extend the current selection to (row, col).

        Ignored when nothing is selected, or when the line from the start
        cell is not horizontal, vertical or exactly diagonal.
        """
        self._ensure_active()
        if self.selection_start is None:
            return
        if is_straight_line(self.selection_start, (row, col)):
            self.current_selection = (row, col)

    def on_cell_released(self) -> Optional[str]:
        """
        Finish the current selection and check it against the solutions.

        Returns:
            The newly found word, or None (no selection, no match, or
            already found)
        """
        self._ensure_active()
        if self.selection_start is None or self.current_selection is None:
            return None

        start, end = self.selection_start, self.current_selection
        self.clear_selection()

        # Single-cell selections never match a word
        if start == end:
            return None

        for solution in self.puzzle.solutions:
            if solution.matches(start, end):
                if solution.word in self.found_words:
                    return None
                self.found_words.append(solution.word)
                return solution.word

        return None

    def on_pointer_left(self) -> None:
        """The pointer left the grid: drop any in-progress selection."""
        self.clear_selection()

    def clear_selection(self) -> None:
        self.selection_start = None
        self.current_selection = None

    def get_selected_cells(self) -> Set[str]:
        """
        "row-col" keys of the in-progress selection, for highlighting.

        Empty when idle or when the drag is not a straight line.
        """
        if self.selection_start is None or self.current_selection is None:
            return set()

        cells = line_cells(self.selection_start, self.current_selection)
        if cells is None:
            return set()
        return {cell_key(cell) for cell in cells}

    def found_cells(self) -> Set[Cell]:
        """Every cell covered by a found word."""
        cells: Set[Cell] = set()
        for word in self.found_words:
            solution = self.puzzle.solution_for(word)
            if solution is not None:
                cells.update(line_cells(solution.start, solution.end) or [])
        return cells

    def finish(self, now: Optional[datetime] = None) -> SessionSummary:
        """
        End the session and compute its summary.

        Args:
            now: End time (defaults to the current time)

        Returns:
            SessionSummary scored against the placed words

        Raises:
            SessionComplete: If the session was already finished
        """
        self._ensure_active()
        ended_at = now or datetime.now()
        elapsed_ms = int((ended_at - self.started_at).total_seconds() * 1000)

        score = len(self.found_words)
        total = len(self.puzzle.placed)

        self.clear_selection()
        self.is_complete = True
        self.summary = SessionSummary(
            score=score,
            total=total,
            percentage=percentage_of(score, total),
            time_taken_ms=max(0, elapsed_ms),
            words_found=list(self.found_words),
            words_not_found=self.words_remaining,
        )
        return self.summary

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "state": self.state,
            "grid_size": self.puzzle.size,
            "words_placed": len(self.puzzle.placed),
            "words_found": len(self.found_words),
            "selection_start": self.selection_start,
            "current_selection": self.current_selection,
            "is_complete": self.is_complete,
        }

    def _ensure_active(self) -> None:
        if self.is_complete:
            raise SessionComplete()
