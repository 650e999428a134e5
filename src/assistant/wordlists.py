import json
import logging
import re
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError
import litellm

from ..errors import WordListGenerationError
from ..puzzle.models import WordEntry
from .prompts import SYSTEM_PROMPT, build_wordlist_prompt


logger = logging.getLogger(__name__)

_JSON_BLOCK = re.compile(r'\{.*\}', re.DOTALL)


class SuggestedWordList(BaseModel):
    """A themed word list suggested by the language model."""
    theme: str = Field(..., min_length=1)
    words: List[WordEntry] = Field(..., min_length=1)


def extract_json(content: str) -> Dict[str, Any]:
    """
    Parse a model response as JSON.

    Falls back to the first {...} block when the response wraps the JSON
    in extra text.

    Raises:
        WordListGenerationError: If no JSON object can be parsed
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass

    match = _JSON_BLOCK.search(content)
    if not match:
        raise WordListGenerationError("No JSON found in response")

    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise WordListGenerationError(f"Invalid JSON in response: {e}") from e


def parse_suggestion(content: str, seed_words: List[str]) -> SuggestedWordList:
    """
    Turn a raw model response into a SuggestedWordList.

    Words from the seed list and repeats are dropped (case-insensitive).

    Raises:
        WordListGenerationError: On missing theme, no words, or bad shape
    """
    data = extract_json(content)

    try:
        suggestion = SuggestedWordList.model_validate(data)
    except ValidationError as e:
        raise WordListGenerationError(f"Invalid response format from AI: {e.error_count()} errors") from e

    seen = {w.strip().lower() for w in seed_words}
    unique: List[WordEntry] = []
    for entry in suggestion.words:
        key = entry.word.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)

    if not unique:
        raise WordListGenerationError("AI suggested no new words")

    return suggestion.model_copy(update={"words": unique})


class WordListGenerator(BaseModel):
    """
    Suggests new spelling words via LiteLLM.

    Extra keyword arguments given at construction are passed through to
    litellm.completion().
    """

    model_config = ConfigDict(extra='allow')

    model: str
    temperature: float = 0.7
    max_tokens: Optional[int] = 1024
    count: int = Field(default=10, ge=1)

    @property
    def additional_params(self) -> Dict[str, Any]:
        """Get additional parameters passed during initialization."""
        return self.__pydantic_extra__ if self.__pydantic_extra__ else {}

    def build_messages(self, words: List[str]) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_wordlist_prompt(words, self.count)},
        ]

    def suggest(self, words: List[str], **kwargs: Any) -> SuggestedWordList:
        """
        Ask the model for new words following the seed words' theme.

        Args:
            words: Seed words (must not be empty)
            **kwargs: Additional arguments to pass to litellm.completion()

        Raises:
            ValueError: If no seed words are given
            WordListGenerationError: If the call fails or the response is unusable
        """
        words = [w.strip() for w in words if w and w.strip()]
        if not words:
            raise ValueError("Please provide a list of words")

        params = {
            "model": self.model,
            "messages": self.build_messages(words),
            "temperature": self.temperature,
            **self.additional_params,
            **kwargs,
        }
        if self.max_tokens is not None:
            params["max_tokens"] = self.max_tokens

        logger.info("Requesting %d words like %s from %s", self.count, words, self.model)
        try:
            response = litellm.completion(**params)
        except Exception as e:
            raise WordListGenerationError(f"LLM error: {e}") from e

        content = response.choices[0].message.content or ""
        logger.debug("Word list response: %s", content)
        return parse_suggestion(content, words)
