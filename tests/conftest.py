import itertools
import string

import pytest

from pwomatic.selector import SecureSelector
from pwomatic.wordlist import MIN_WORDS, WordList


def synthetic_words(count=MIN_WORDS):
    """Distinct lowercase words of 3 to 8 letters."""
    letters = string.ascii_lowercase
    out = []
    for i in range(count):
        stem = "".join(letters[(i // 26 ** k) % 26] for k in range(3))
        out.append(stem + letters[i % 26] * (i % 6))
    return out


class ScriptedRandom:
    """randbelow replacement returning preset values in order."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def __call__(self, n):
        v = self.values.pop(0)
        assert 0 <= v < n, f"scripted draw {v} outside [0, {n})"
        self.calls.append(n)
        return v


class ScriptedWords:
    """Word supplier returning words from a fixed script, cycling when done."""

    def __init__(self, words):
        self._it = itertools.cycle(words)
        self.drawn = 0

    def random_word(self, selector=None):
        self.drawn += 1
        return next(self._it)

    def random_words(self, n, selector=None):
        return [self.random_word(selector) for _ in range(n)]


@pytest.fixture(scope="session")
def words():
    return WordList(synthetic_words())


@pytest.fixture
def dictionary_file(tmp_path):
    path = tmp_path / "dictionary.txt"
    path.write_text("\n".join(synthetic_words()) + "\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def scripted():
    def make(values):
        rnd = ScriptedRandom(values)
        return SecureSelector(randbelow=rnd), rnd
    return make
