"""
pwomatic.selector
Secure random selection using Python's secrets module.

Every character, word and ordering decision in pwomatic goes through a
SecureSelector, including the final shuffle of the character pool.
"""

import secrets
from typing import Callable, List, MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")


class SecureSelector:
    """
    Uniform integer draws from a cryptographically secure source.

    `randbelow` defaults to secrets.randbelow; tests pass a scripted
    replacement to force exact draws.
    """

    def __init__(self, randbelow: Optional[Callable[[int], int]] = None):
        self._randbelow = randbelow or secrets.randbelow

    def uniform(self, n: int) -> int:
        """Return an integer in [0, n)."""
        if n <= 0:
            raise ValueError("n must be > 0")
        value = self._randbelow(n)
        if not 0 <= value < n:
            raise ValueError(f"random source returned {value}, outside [0, {n})")
        return value

    def pick(self, seq: Sequence[T]) -> T:
        return seq[self.uniform(len(seq))]

    def picks(self, seq: Sequence[T], count: int) -> List[T]:
        return [self.pick(seq) for _ in range(count)]

    def shuffle(self, items: MutableSequence) -> None:
        """Fisher-Yates shuffle in place."""
        for i in range(len(items) - 1, 0, -1):
            j = self.uniform(i + 1)
            items[i], items[j] = items[j], items[i]


_default = SecureSelector()


def default_selector() -> SecureSelector:
    return _default
