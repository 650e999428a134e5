"""
Main entry point for Spell Quest.

Usage:
    python -m src.main play --child c1
    python -m src.main play --words words.txt --seed 7
    python -m src.main spell --child c1 --config config.yaml
    python -m src.main generate-words rain train snail
    python -m src.main history --child c1
"""

import argparse
import logging
import random
import re
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .assistant import WordListGenerator
from .config import AppConfig, load_config
from .errors import PuzzleUnavailable, StorageError, WordListGenerationError
from .puzzle import Cell, parse_word_list, render_grid, normalize_word
from .session import SpellingTest, WordList, WordSearchSession, celebration_for
from .storage import (
    JsonDocumentStore,
    LocalCache,
    ResultRecorder,
    get_child,
    get_word_list,
    latest_assigned_list,
)


_MOVE_PATTERN = re.compile(r'^\s*(\d+)\s*,\s*(\d+)\s+(\d+)\s*,\s*(\d+)\s*$')


def parse_move(text: str) -> Optional[Tuple[Cell, Cell]]:
    """Parse 'r1,c1 r2,c2' into a (start, end) pair of cells."""
    match = _MOVE_PATTERN.match(text)
    if not match:
        return None
    r1, c1, r2, c2 = (int(g) for g in match.groups())
    return (r1, c1), (r2, c2)


def resolve_word_list(args: argparse.Namespace, store: JsonDocumentStore) -> WordList:
    """Word list from --words, --list, or the child's latest assigned list."""
    if args.words:
        path = Path(args.words)
        entries = parse_word_list(path.read_text(encoding="utf-8"))
        return WordList(name=path.stem, words=entries)
    if args.list:
        return get_word_list(store, args.list)
    if not args.child:
        raise PuzzleUnavailable("NO_WORD_LIST", "Pass --child, --list or --words")
    return latest_assigned_list(store, args.child)


def build_recorder(config: AppConfig) -> ResultRecorder:
    store = JsonDocumentStore(root=config.data_dir)
    return ResultRecorder(store=store, cache=LocalCache(path=config.resolved_cache_path))


def play_wordsearch(
    session: WordSearchSession,
    word_list: WordList,
    allow_hyphens: bool = True,
    verbose: bool = False,
) -> None:
    """Interactive terminal loop: one 'start end' guess per line until finished."""
    display = {normalize_word(e.word, allow_hyphens): e.word for e in word_list.words}

    while not session.all_found:
        print()
        print(render_grid(session.puzzle.grid, highlight=session.found_cells()))
        print()
        for word in session.puzzle.placed:
            mark = "✓" if word in session.found_words else " "
            print(f"  [{mark}] {display.get(word, word)}")
        print(f"\nFound {len(session.found_words)} of {len(session.puzzle.placed)} words")

        try:
            line = input("Start and end cells (e.g. '0,0 0,4'), or 'finish': ").strip()
        except EOFError:
            break

        if line.lower() in ("finish", "quit", "q"):
            break

        move = parse_move(line)
        if move is None:
            print("Please type two cells like '2,3 2,7'.")
            continue

        start, end = move
        session.on_cell_pressed(*start)
        session.on_cell_entered(*end)
        if verbose:
            print(f"Selected cells: {sorted(session.get_selected_cells())}")
        if session.current_selection != end:
            print("Words run in straight lines: across, down or diagonal.")
        found = session.on_cell_released()

        if found:
            print(f"\n*** You found {display.get(found, found)}! ***")
        else:
            print("\nNot a hidden word, try again!")


def cmd_play(args: argparse.Namespace, config: AppConfig) -> int:
    recorder = build_recorder(config)
    word_list = resolve_word_list(args, recorder.store)

    puzzle_config = config.puzzle
    if args.seed is not None:
        puzzle_config = puzzle_config.model_copy(update={"seed": args.seed})
    rng = random.Random(puzzle_config.seed)

    session = WordSearchSession.from_word_list(word_list.words, config=puzzle_config, rng=rng)
    skipped = len(word_list.words) - len(session.puzzle.placed)
    if args.verbose and skipped:
        print(f"{skipped} word(s) could not be placed in the grid")

    play_wordsearch(session, word_list, allow_hyphens=puzzle_config.allow_hyphens, verbose=args.verbose)
    summary = session.finish()

    print()
    print("=== Word Search Summary ===")
    print(f"Score: {summary.score} out of {summary.total} ({summary.percentage}%)")
    print(f"Time: {summary.time_taken_ms / 1000:.1f}s")
    if summary.words_not_found:
        print(f"Still hiding: {', '.join(summary.words_not_found)}")

    if args.child:
        outcome = recorder.record_wordsearch(args.child, word_list, summary)
        if not outcome.persisted:
            print("Your result couldn't be saved right now; it is kept on this device.", file=sys.stderr)

    return 0


def cmd_spell(args: argparse.Namespace, config: AppConfig) -> int:
    recorder = build_recorder(config)
    word_list = resolve_word_list(args, recorder.store)
    test = SpellingTest.create(word_list)

    while test.current_word is not None:
        hint = test.current_hint or "(no hint)"
        try:
            typed = input(f"Word {test.current_index + 1} of {test.total} - hint: {hint}\n> ")
        except EOFError:
            break
        word = test.current_word
        if test.answer(typed):
            print("Correct!")
        else:
            print(f"Not quite - it's spelled {word}")

    summary = test.finish()
    print()
    print(f"Score: {summary.score} out of {summary.total} ({summary.percentage}%)")
    celebration = celebration_for(summary.percentage)
    if celebration:
        print(f"*** {celebration.upper()}! ***")

    if args.child:
        outcome = recorder.record_spelling(args.child, word_list, summary)
        if not outcome.persisted:
            print("Your result couldn't be saved right now; it is kept on this device.", file=sys.stderr)

    return 0


def cmd_generate_words(args: argparse.Namespace, config: AppConfig) -> int:
    settings = config.wordlists
    generator = WordListGenerator(
        model=args.model or settings.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        count=args.count,
        **(settings.__pydantic_extra__ or {}),
    )
    suggestion = generator.suggest(args.seed_words)

    print(f"Theme: {suggestion.theme}")
    for entry in suggestion.words:
        print(f"  {entry.word}: {entry.hint}" if entry.hint else f"  {entry.word}")
    return 0


def cmd_history(args: argparse.Namespace, config: AppConfig) -> int:
    store = JsonDocumentStore(root=config.data_dir)
    child = get_child(store, args.child)

    print(f"=== {child.display_name or child.username or child.id} ===")
    print(f"Tests taken: {child.progress.total_tests}  Accuracy: {child.progress.accuracy}%")
    print(f"Spelling quests: {child.progress.completed_quests}  Word searches: {child.progress.wordsearches_completed}")
    print()
    for result in sorted(child.test_history, key=lambda r: r.date, reverse=True):
        print(f"{result.date:%Y-%m-%d %H:%M}  {result.type:<10}  {result.list_name:<20}  "
              f"{result.score}/{result.total} ({result.percentage}%)")
    if not child.test_history:
        print("No tests yet.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Spell Quest: spelling practice and word searches for children",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  data_dir: data
  puzzle:
    size_policy: auto
    min_size: 10
    directions: [E, S, SE, NE]
  wordlists:
    model: gpt-4o-mini
        """
    )
    parser.add_argument("--config", "-c", help="Path to YAML configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print progress and debug logs")

    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("play", "Play a word search"), ("spell", "Take a spelling test")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--child", help="Child id (results are saved when given)")
        cmd.add_argument("--list", help="Word list id (default: child's latest assigned list)")
        cmd.add_argument("--words", help="Plain-text word list file instead of a stored list")
        if name == "play":
            cmd.add_argument("--seed", type=int, help="Random seed for the grid")

    gen = sub.add_parser("generate-words", help="Suggest new words like the given ones")
    gen.add_argument("seed_words", nargs="+", help="Example words")
    gen.add_argument("--model", help="LiteLLM model name (overrides config)")
    gen.add_argument("--count", type=int, default=10, help="How many words to suggest")

    hist = sub.add_parser("history", help="Show a child's test history")
    hist.add_argument("--child", required=True, help="Child id")

    return parser


COMMANDS = {
    "play": cmd_play,
    "spell": cmd_spell,
    "generate-words": cmd_generate_words,
    "history": cmd_history,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else AppConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return COMMANDS[args.command](args, config)
    except PuzzleUnavailable as e:
        print(e.message, file=sys.stderr)
        if args.verbose:
            print(f"({e})", file=sys.stderr)
        return 1
    except (StorageError, WordListGenerationError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
