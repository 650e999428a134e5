"""Scoring helpers and running-total aggregation for a child's progress."""

import math

from .models import ChildProgress, TestResult


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def percentage_of(score: int, total: int) -> int:
    """Whole-number percentage of score out of total; 0 when total is 0."""
    if total <= 0:
        return 0
    return round_half_up(100 * score / total)


def cumulative_average(old_avg: int, old_count: int, new_value: int) -> int:
    """Fold one more value into a running average: round((avg*n + x) / (n+1))."""
    return round_half_up((old_avg * old_count + new_value) / (old_count + 1))


def apply_result(progress: ChildProgress, result: TestResult) -> ChildProgress:
    """
    Return the child's progress updated with one finished test.

    Spelling tests count as completed quests, word searches as completed
    word searches; both count toward total_tests. Accuracy is the running
    average of spelling-test percentages only, so word searches leave it
    unchanged.

    Args:
        progress: Current running totals (left unchanged)
        result: The finished test

    Returns:
        A new ChildProgress
    """
    updated = progress.model_copy()

    if result.type == "spelling":
        updated.accuracy = cumulative_average(progress.accuracy, progress.completed_quests, result.percentage)
        updated.completed_quests += 1
    else:
        updated.wordsearches_completed += 1

    updated.total_tests += 1

    return updated
