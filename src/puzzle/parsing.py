"""Word normalization and word-list parsing utilities."""

import re
from typing import List

from .models import WordEntry


_NON_LETTERS = re.compile(r'[^A-Z]')
_NON_LETTERS_OR_HYPHEN = re.compile(r'[^A-Z-]')


def normalize_word(word: str, allow_hyphens: bool = True) -> str:
    """
    Normalize a word for the grid.

    Uppercases and strips every character that is not A-Z. Hyphens are
    kept as literal grid characters when allow_hyphens is set.
    """
    pattern = _NON_LETTERS_OR_HYPHEN if allow_hyphens else _NON_LETTERS
    return pattern.sub('', (word or '').upper())


def parse_word_list(text: str) -> List[WordEntry]:
    """
    Parse a plain-text word list into entries.

    One word per line (or comma separated). A hint may follow a colon:
        rainbow: colours in the sky
        castle, dragon
    Blank lines and lines starting with '#' are skipped.
    """
    entries: List[WordEntry] = []

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        if ':' in line:
            word, hint = line.split(':', 1)
            word = word.strip()
            if word:
                entries.append(WordEntry(word=word, hint=hint.strip() or None))
            continue

        for word in line.split(','):
            word = word.strip()
            if word:
                entries.append(WordEntry(word=word))

    return entries
