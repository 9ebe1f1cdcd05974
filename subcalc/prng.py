"""Reproducible coin for breaking remainder ties.

Delegate results are never stored, only the counts and the seed, so the
"random" tosses have to come out the same on every machine and every time the
counts are recalculated. This is a pair of multiplicative linear congruential
generators combined by addition, based on http://stackoverflow.com/a/22313621.
The constants are part of the stored-data contract and must not change.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Tuple

import random
import time

from .parse.numeric import coerce_natural

MOD1: int = 4294967087
MUL1: int = 65539
MOD2: int = 4294965887
MUL2: int = 65537


def _now_millis() -> int:
    return int(time.time() * 1000)


def random_seed() -> int:
    """A fresh seed for a new meeting. Not used during a calculation."""
    return random.randint(1, 999999)


class SequenceGenerator:
    """
    Deterministic bounded integer stream from two seed components.

    Seeds may be ints, floats or numeric strings; they are coerced to
    abs(floor(x)). A missing or non-positive first seed is replaced by the
    wall clock; a missing or non-positive second seed copies the first.
    """

    def __init__(self, seed_a: Any = None, seed_b: Any = None) -> None:
        a = coerce_natural(seed_a)
        b = coerce_natural(seed_b)

        if a is None or a < 1:
            a = _now_millis()
        if b is None or b < 1:
            b = a

        self._state1 = a % (MOD1 - 1) + 1
        self._state2 = b % (MOD2 - 1) + 1

        self.draws = 0
        self.rejections = 0
        self._limits: Counter = Counter()

    @property
    def state(self) -> Tuple[int, int]:
        return self._state1, self._state2

    def next_bounded(self, limit: Any) -> int:
        """Return an integer in [0, limit). limit is coerced to abs(floor(limit)), at least 1."""
        n = coerce_natural(limit) or 1

        while True:
            self._state1 = (self._state1 * MUL1) % MOD1
            self._state2 = (self._state2 * MUL2) % MOD2

            # modulo-bias rejection
            if (
                self._state1 < n
                and self._state2 < n
                and self._state1 < MOD1 % n
                and self._state2 < MOD2 % n
            ):
                self.rejections += 1
                continue
            break

        self.draws += 1
        self._limits[n] += 1
        return (self._state1 + self._state2) % n

    def coin_flip(self) -> bool:
        """Heads (True) or tails (False)."""
        return self.next_bounded(2) == 1

    def summary(self) -> Dict[int, int]:
        return dict(sorted(self._limits.items()))
