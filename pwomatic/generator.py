"""
pwomatic.generator
Constraint-satisfying password construction.

Three modes:
- normal:      two dictionary words wrapped in digit/symbol separators,
               followed by a shuffled pool of forced upper/lower/digit/symbol
               characters, padded to the minimum length.
- readability: three concatenated words with a few capitals, a 4-digit
               number and trailing symbols. Falls back to normal when no
               fitting word triple turns up.
- random:      a shuffled pool of random characters with class minimums.

All randomness comes from a SecureSelector.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, TypeVar

from loguru import logger

from .charsets import ALL_ALNUM, ALL_CHARS, DIGITS, LOWER, SEPARATORS, SYMBOLS, UPPER
from .errors import GenerationError
from .selector import SecureSelector, default_selector
from .wordlist import WordList

T = TypeVar("T")

NORMAL_MAX_ATTEMPTS = 100
READABLE_MAX_ATTEMPTS = 1000
CAPITALIZE_MAX_TRIES = 200

# (count, alphabet) drawn into the normal-mode pool
NORMAL_FORCED = ((2, UPPER), (2, LOWER), (4, DIGITS), (2, SYMBOLS))
NORMAL_FORCED_LEN = sum(n for n, _ in NORMAL_FORCED)

RANDOM_FORCED = ((2, ALL_ALNUM), (2, DIGITS), (2, SYMBOLS))
RANDOM_FORCED_LEN = sum(n for n, _ in RANDOM_FORCED)

# four separators around two one-letter words
NORMAL_MIN_BLOCK_LEN = 6

READABLE_WORDS = 3
READABLE_NUMBER_LEN = 4


class Mode(str, Enum):
    NORMAL = "normal"
    READABLE = "readability"
    RANDOM = "random"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Mode":
        """Map a mode name to a Mode; anything unrecognized is NORMAL."""
        try:
            return cls(value)
        except ValueError:
            return cls.NORMAL


@dataclass(frozen=True)
class PasswordPolicy:
    min_length: int = 20
    max_length: int = 27
    readable_symbols: int = 4

    def __post_init__(self):
        if self.min_length < RANDOM_FORCED_LEN:
            raise ValueError(f"min_length must be >= {RANDOM_FORCED_LEN}")
        if self.max_length < self.min_length:
            raise ValueError("max_length must be >= min_length")
        if self.max_length < NORMAL_FORCED_LEN + NORMAL_MIN_BLOCK_LEN:
            raise ValueError(f"max_length must be >= {NORMAL_FORCED_LEN + NORMAL_MIN_BLOCK_LEN}")
        if self.readable_symbols < 0:
            raise ValueError("readable_symbols must be >= 0")

    @property
    def readable_words_budget(self) -> int:
        return self.max_length - READABLE_NUMBER_LEN - self.readable_symbols


DEFAULT_POLICY = PasswordPolicy()


class GenerationResult(NamedTuple):
    password: str
    fell_back: bool = False


class BatchResult(NamedTuple):
    passwords: List[str]
    fallback: bool


class SamplingState(Enum):
    SAMPLING = "sampling"
    ACCEPTED = "accepted"
    EXHAUSTED = "exhausted"


class Sample(NamedTuple):
    state: SamplingState
    value: Optional[object]
    attempts: int


def sample_until(draw: Callable[[], T], accept: Callable[[T], bool], limit: int) -> Sample:
    """
    Call `draw` until `accept` approves a candidate or `limit` draws have been
    made. The returned Sample holds the accepted value, or None when
    EXHAUSTED.
    """
    state = SamplingState.SAMPLING
    value = None
    attempts = 0
    while state is SamplingState.SAMPLING:
        if attempts >= limit:
            state = SamplingState.EXHAUSTED
            value = None
            continue
        value = draw()
        attempts += 1
        if accept(value):
            state = SamplingState.ACCEPTED
    return Sample(state, value, attempts)


def _draw_forced(selector: SecureSelector, forced) -> List[str]:
    chars: List[str] = []
    for count, alphabet in forced:
        chars.extend(selector.picks(alphabet, count))
    return chars


def generate_normal(
    words: WordList,
    selector: Optional[SecureSelector] = None,
    policy: PasswordPolicy = DEFAULT_POLICY,
) -> str:
    """
    Two separator-wrapped words followed by a shuffled pool, e.g.
    "-apple#7grape!" + "aB93x!Q2..". Raises GenerationError if no word pair
    fits under max_length within NORMAL_MAX_ATTEMPTS.
    """
    selector = selector or default_selector()

    def draw_block() -> str:
        w1, w2 = words.random_words(2, selector)
        s1, s2, s3, s4 = selector.picks(SEPARATORS, 4)
        return s1 + w1 + s2 + s3 + w2 + s4

    sample = sample_until(
        draw_block,
        lambda block: len(block) + NORMAL_FORCED_LEN <= policy.max_length,
        NORMAL_MAX_ATTEMPTS,
    )
    if sample.state is SamplingState.EXHAUSTED:
        logger.warning("normal mode: no word pair fit after {} attempts", sample.attempts)
        raise GenerationError(
            f"could not find two words that produce a password <= {policy.max_length} "
            f"after {sample.attempts} attempts"
        )
    word_block = sample.value

    pool = _draw_forced(selector, NORMAL_FORCED)
    total = len(word_block) + len(pool)
    if total > policy.max_length:
        raise GenerationError(
            f"word part + pool too long: {total} chars, exceeds maximum {policy.max_length}"
        )
    if total < policy.min_length:
        pool.extend(selector.picks(ALL_CHARS, policy.min_length - total))

    selector.shuffle(pool)
    return word_block + "".join(pool)


def _capitalize(chars: List[str], wanted: int, selector: SecureSelector) -> int:
    made = 0
    tries = 0
    while made < wanted and tries < CAPITALIZE_MAX_TRIES:
        tries += 1
        idx = selector.uniform(len(chars))
        ch = chars[idx]
        if ch.isalpha() and not ch.isupper():
            chars[idx] = ch.upper()
            made += 1
    return made


def _caps_for(length: int) -> int:
    if length >= 28:
        return 3
    if length >= 16:
        return 2
    return 1


def generate_readable(
    words: WordList,
    selector: Optional[SecureSelector] = None,
    policy: PasswordPolicy = DEFAULT_POLICY,
) -> GenerationResult:
    """
    Three words run together with a few capitals, then a 4-digit number and
    symbols, e.g. "catdOgowl4821#!.?".

    Substitutes a normal password (fell_back=True) when no word triple fits
    the budget or the finished password is too long. A budget under three
    characters defers to normal mode without flagging a fallback.
    """
    selector = selector or default_selector()
    budget = policy.readable_words_budget
    if budget < READABLE_WORDS:
        return GenerationResult(generate_normal(words, selector, policy), False)

    sample = sample_until(
        lambda: words.random_words(READABLE_WORDS, selector),
        lambda triple: sum(len(w) for w in triple) <= budget,
        READABLE_MAX_ATTEMPTS,
    )
    if sample.state is SamplingState.EXHAUSTED:
        logger.debug("readability mode: no word triple fit in {} chars, using normal", budget)
        return GenerationResult(generate_normal(words, selector, policy), True)

    chars = list("".join(sample.value))
    _capitalize(chars, _caps_for(len(chars)), selector)

    number = str(1000 + selector.uniform(9000))
    symbols = "".join(selector.picks(SYMBOLS, policy.readable_symbols))

    password = "".join(chars) + number + symbols
    if len(password) > policy.max_length:
        logger.debug("readability mode: {} chars exceeds maximum, using normal", len(password))
        return GenerationResult(generate_normal(words, selector, policy), True)
    return GenerationResult(password, False)


def generate_random(
    selector: Optional[SecureSelector] = None,
    policy: PasswordPolicy = DEFAULT_POLICY,
) -> str:
    """Random characters of a random length in [min_length, max_length]."""
    selector = selector or default_selector()
    length = policy.min_length + selector.uniform(policy.max_length - policy.min_length + 1)

    password_chars = _draw_forced(selector, RANDOM_FORCED)
    remaining = length - len(password_chars)
    if remaining > 0:
        password_chars.extend(selector.picks(ALL_CHARS, remaining))

    selector.shuffle(password_chars)
    return "".join(password_chars)


def generate(
    mode: Optional[str],
    words: WordList,
    selector: Optional[SecureSelector] = None,
    policy: Optional[PasswordPolicy] = None,
) -> GenerationResult:
    """
    Generate one password in the requested mode.

    Unknown modes (including "" and None) generate a normal password.
    GenerationError from the underlying generator propagates unchanged.
    """
    selector = selector or default_selector()
    policy = policy or DEFAULT_POLICY
    m = Mode.parse(mode)
    if m is Mode.READABLE:
        return generate_readable(words, selector, policy)
    if m is Mode.RANDOM:
        return GenerationResult(generate_random(selector, policy), False)
    return GenerationResult(generate_normal(words, selector, policy), False)


def generate_batch(
    mode: Optional[str],
    words: WordList,
    count: int,
    selector: Optional[SecureSelector] = None,
    policy: Optional[PasswordPolicy] = None,
) -> BatchResult:
    """
    Generate `count` passwords. Stops at the first GenerationError; the
    fallback flag is set if any password fell back to normal mode.
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    passwords: List[str] = []
    fallback = False
    for _ in range(count):
        result = generate(mode, words, selector, policy)
        passwords.append(result.password)
        fallback = fallback or result.fell_back
    return BatchResult(passwords, fallback)
