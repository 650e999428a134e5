"""AI helpers for parents building spelling lists."""

from .prompts import SYSTEM_PROMPT, build_wordlist_prompt
from .wordlists import WordListGenerator, SuggestedWordList, extract_json, parse_suggestion

__all__ = [
    "SYSTEM_PROMPT",
    "build_wordlist_prompt",
    "WordListGenerator",
    "SuggestedWordList",
    "extract_json",
    "parse_suggestion",
]
