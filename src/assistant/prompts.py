"""Prompt templates for AI word-list suggestions."""

from typing import List


SYSTEM_PROMPT = (
    "You are a helpful spelling teacher. "
    "Always respond in valid JSON format only, with no additional text."
)


def build_wordlist_prompt(words: List[str], count: int = 10) -> str:
    """Build the user prompt asking for `count` new words like the given ones."""
    return f"""You are a spelling teacher. I will give you a list of words, and I want you to:
1. Analyse the words to determine the common theme, spelling pattern, or learning objective
2. Generate {count} new words that follow the same pattern or theme
3. For each word, provide a short, child-friendly hint or definition
4. Return the response in JSON format with fields: theme, words (array of objects with word and hint properties)

Here are the words to analyse: {', '.join(words)}

Please ensure:
- Words are age-appropriate and at a similar difficulty level
- Hints are clear and helpful for children
- No duplicate words from the original list
- All words follow the identified pattern/theme
- Response must be valid JSON format only, no additional text"""
