"""
pwomatic.wordlist
Dictionary loading and uniform word selection.

The word list is loaded once at startup and shared read-only by every
generation call.
"""

import os
from typing import Iterable, Iterator, List, Optional

from loguru import logger

from .errors import WordListError
from .selector import SecureSelector, default_selector

MIN_WORDS = 10000


class WordList:
    """Immutable vocabulary with uniform random access."""

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[str], minimum: int = MIN_WORDS):
        cleaned = tuple(w.strip() for w in words if w and w.strip())
        if len(cleaned) < minimum:
            raise WordListError(
                f"word list contains only {len(cleaned)} words, at least {minimum} required"
            )
        self._words = cleaned

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def random_word(self, selector: Optional[SecureSelector] = None) -> str:
        selector = selector or default_selector()
        return selector.pick(self._words)

    def random_words(self, n: int, selector: Optional[SecureSelector] = None) -> List[str]:
        selector = selector or default_selector()
        return [self.random_word(selector) for _ in range(n)]


def load_wordlist(path: str, minimum: int = MIN_WORDS) -> WordList:
    """
    Read one word per line from `path`; blank lines are skipped and
    surrounding whitespace trimmed. Raises WordListError if the file can't be
    read or holds fewer than `minimum` words.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise WordListError(f"open {path}: {e}") from e
    try:
        words = WordList(lines, minimum=minimum)
    except WordListError as e:
        raise WordListError(f"{path}: {e}") from e
    logger.info("Loaded {} words from {}", len(words), os.path.abspath(path))
    return words
