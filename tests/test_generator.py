"""
Test suite for word-search grid generation.

Covers:
- Placement validity (every solution path spells its word)
- Overlaps (shared cells agree on the letter)
- Fill completeness (no blank cells)
- Bounded placement (unplaceable words are dropped)
- Grid sizing policies and normalization
"""

import random
import re

import pytest
from src.puzzle import (
    Direction,
    PuzzleConfig,
    WordEntry,
    GridGenerator,
    compute_grid_size,
    generate,
    line_cells,
    normalize_word,
    read_path,
    verify_puzzle,
)


ANIMALS = ["cat", "dog", "rabbit", "hamster", "parrot", "goldfish", "tortoise", "pony"]


def letters_by_cell(puzzle):
    """Map every solution cell to the letters words need there."""
    claimed = {}
    for solution in puzzle.solutions:
        for cell, letter in zip(line_cells(solution.start, solution.end), solution.word):
            claimed.setdefault(cell, set()).add(letter)
    return claimed


class TestPlacementValidity:
    """Solutions must match what is actually written in the grid."""

    @pytest.mark.parametrize("seed", range(10))
    def test_every_solution_spells_its_word(self, seed):
        """Reading start->end spells the normalized word."""
        puzzle = generate(ANIMALS, rng=random.Random(seed))
        for solution in puzzle.solutions:
            assert read_path(puzzle, solution.start, solution.end) == solution.word

    @pytest.mark.parametrize("seed", range(10))
    def test_overlapping_words_agree(self, seed):
        """Any cell shared by two words holds one letter for both."""
        words = ["test", "tent", "nest", "best", "sent", "stent", "tests"]
        puzzle = generate(words, PuzzleConfig(size=6), rng=random.Random(seed))
        for cell, letters in letters_by_cell(puzzle).items():
            assert len(letters) == 1
            assert puzzle.letter_at(cell) in letters

    @pytest.mark.parametrize("seed", range(5))
    def test_generated_puzzles_verify(self, seed):
        """Generated puzzles pass the full verifier."""
        puzzle = generate(ANIMALS, PuzzleConfig(size_policy="auto"), rng=random.Random(seed))
        result = verify_puzzle(puzzle)
        assert result.valid is True, [p.message for p in result.problems]

    def test_solution_span_matches_word_length(self):
        """end - start is (len - 1) steps along one direction."""
        puzzle = generate(ANIMALS, rng=random.Random(3))
        for solution in puzzle.solutions:
            row_diff = abs(solution.end[0] - solution.start[0])
            col_diff = abs(solution.end[1] - solution.start[1])
            assert max(row_diff, col_diff) == len(solution.word) - 1
            assert row_diff in (0, col_diff) or col_diff == 0

    def test_solutions_store_normalized_words(self):
        """Solutions and placed list use uppercase normalized words."""
        puzzle = generate([WordEntry(word="Goldfish", hint="A pet that swims")], rng=random.Random(1))
        assert puzzle.placed == ["GOLDFISH"]
        assert puzzle.solutions[0].word == "GOLDFISH"


class TestFill:
    """Every cell is filled after generation."""

    @pytest.mark.parametrize("seed", range(5))
    def test_no_blank_cells(self, seed):
        """All cells hold a single uppercase letter or hyphen."""
        puzzle = generate(ANIMALS + ["ice-cream"], rng=random.Random(seed))
        for row in puzzle.grid:
            assert len(row) == puzzle.size
            for cell in row:
                assert re.match(r'^[A-Z-]$', cell)

    def test_grid_is_square(self):
        puzzle = generate(ANIMALS, rng=random.Random(0))
        assert len(puzzle.grid) == puzzle.size
        assert all(len(row) == puzzle.size for row in puzzle.grid)

    def test_hyphen_written_into_grid(self):
        """Hyphenated words keep the hyphen as a grid character."""
        puzzle = generate(["ice-cream"], rng=random.Random(2))
        solution = puzzle.solutions[0]
        assert solution.word == "ICE-CREAM"
        assert "-" in read_path(puzzle, solution.start, solution.end)


class TestBoundedPlacement:
    """Words that cannot be placed are dropped, never half-written."""

    def test_unplaceable_word_dropped(self):
        """A 2x2 grid with only rightward writing fits two disjoint words."""
        config = PuzzleConfig(size=2, directions=[Direction.E])
        puzzle = generate(["AB", "CD", "EF"], config, rng=random.Random(11))

        assert puzzle.placed == ["AB", "CD"]
        assert [s.word for s in puzzle.solutions] == ["AB", "CD"]
        assert puzzle.solution_for("EF") is None

    def test_placed_never_exceeds_input(self):
        puzzle = generate(ANIMALS, PuzzleConfig(size=8), rng=random.Random(4))
        assert len(puzzle.placed) <= len(ANIMALS)
        assert {s.word for s in puzzle.solutions} == set(puzzle.placed)

    def test_single_letter_words_skipped(self):
        """Words shorter than two letters after normalization are never placed."""
        puzzle = generate(["a", "!", "cat"], rng=random.Random(0))
        assert puzzle.placed == ["CAT"]

    def test_hyphen_only_words_skipped(self):
        puzzle = generate(["--", "- -", "cat"], rng=random.Random(0))
        assert puzzle.placed == ["CAT"]
        assert generate(["---"], rng=random.Random(0)).placed == []

    def test_duplicate_words_placed_once(self):
        puzzle = generate(["cat", "CAT", "Cat!"], rng=random.Random(0))
        assert puzzle.placed == ["CAT"]
        assert len(puzzle.solutions) == 1

    def test_empty_input_gives_filled_grid(self):
        """No words: a filled grid with nothing placed."""
        puzzle = generate([], PuzzleConfig(size_policy="auto"), rng=random.Random(0))
        assert puzzle.placed == []
        assert puzzle.size == 10


class TestDirections:
    """Only configured directions are used."""

    def test_horizontal_only(self):
        config = PuzzleConfig(directions=[Direction.E])
        puzzle = generate(ANIMALS, config, rng=random.Random(9))
        for solution in puzzle.solutions:
            assert solution.start[0] == solution.end[0]
            assert solution.end[1] > solution.start[1]

    def test_default_directions_never_write_backwards(self):
        """Default set is E, S, SE, NE: columns never decrease, rows only for NE."""
        puzzle = generate(ANIMALS, rng=random.Random(6))
        for solution in puzzle.solutions:
            assert solution.end[1] >= solution.start[1]
            if solution.end[1] == solution.start[1]:
                assert solution.end[0] > solution.start[0]

    def test_invalid_direction_rejected(self):
        with pytest.raises(Exception):  # Pydantic validation error
            PuzzleConfig(directions=["UP"])

    def test_empty_directions_rejected(self):
        with pytest.raises(Exception):  # Pydantic validation error
            PuzzleConfig(directions=[])


class TestGridSize:
    """Both sizing policies fit the longest word."""

    def test_fixed_default(self):
        assert compute_grid_size(["CAT", "DOG"], PuzzleConfig()) == 15

    def test_fixed_grows_for_long_word(self):
        word = "SUPERCALIFRAGILISTIC"
        assert compute_grid_size([word], PuzzleConfig(size=15)) == len(word)

    def test_auto_uses_minimum_floor(self):
        assert compute_grid_size(["CAT", "DOG"], PuzzleConfig(size_policy="auto")) == 10

    def test_auto_uses_longest_word(self):
        assert compute_grid_size(["ABCDEFGHIJKL"], PuzzleConfig(size_policy="auto")) == 12

    def test_auto_uses_total_letters(self):
        """30 ten-letter words: ceil(sqrt(300)) = 18."""
        words = ["ABCDEFGHIJ"] * 30
        assert compute_grid_size(words, PuzzleConfig(size_policy="auto")) == 18

    def test_long_word_always_placeable(self):
        word = "CHRYSANTHEMUMS"
        # Only edge starts fit a word as long as the grid, so allow more attempts
        puzzle = generate([word], PuzzleConfig(size=5, max_attempts=2000), rng=random.Random(0))
        assert puzzle.size >= len(word)
        assert puzzle.placed == [word]


class TestNormalization:
    """Words are uppercased and stripped before placement."""

    def test_uppercases(self):
        assert normalize_word("rainbow") == "RAINBOW"

    def test_strips_punctuation_and_spaces(self):
        assert normalize_word("don't stop!") == "DONTSTOP"

    def test_keeps_hyphens(self):
        assert normalize_word("ice-cream") == "ICE-CREAM"

    def test_drops_hyphens_when_disabled(self):
        assert normalize_word("ice-cream", allow_hyphens=False) == "ICECREAM"

    def test_strips_digits(self):
        assert normalize_word("route66") == "ROUTE"


class TestDeterminism:
    """Seeded generation is reproducible."""

    def test_same_seed_same_puzzle(self):
        first = generate(ANIMALS, rng=random.Random(42))
        second = generate(ANIMALS, rng=random.Random(42))
        assert first.grid == second.grid
        assert first.solutions == second.solutions

    def test_config_seed_used_without_rng(self):
        config = PuzzleConfig(seed=7)
        assert GridGenerator(config).generate(ANIMALS).grid == GridGenerator(config).generate(ANIMALS).grid
