"""Seeded random stream shared by every generator of a case.

The stream is a port of the string-seeded ARC4 generator popularised by the
``seedrandom`` JavaScript package, so that a seed string produces exactly the
same sequence (and therefore the same case) across builds.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

_WIDTH = 256
_MASK = _WIDTH - 1
_CHUNKS = 6
_DIGITS = 52
_START_DENOM = _WIDTH**_CHUNKS
_SIGNIFICANCE = 2**_DIGITS
_OVERFLOW = _SIGNIFICANCE * 2


def _utf16_units(text: str) -> list[int]:
    """Return the UTF-16 code units of ``text`` (surrogate pairs expanded)."""
    raw = text.encode("utf-16-le")
    return [raw[k] | (raw[k + 1] << 8) for k in range(0, len(raw), 2)]


def _mix_key(seed: str) -> list[int]:
    """Hash a seed string into an ARC4 key of at most 256 bytes."""
    key: list[int] = []
    smear = 0
    for j, unit in enumerate(_utf16_units(seed)):
        slot = j & _MASK
        existing = key[slot] if slot < len(key) else 0
        smear ^= existing * 19
        value = _MASK & (smear + unit)
        if slot < len(key):
            key[slot] = value
        else:
            key.append(value)
    return key


class _Arc4:
    """RC4 keystream with the first 256 bytes discarded."""

    def __init__(self, key: list[int]):
        if not key:
            key = [0]
        keylen = len(key)
        s = list(range(_WIDTH))
        j = 0
        for i in range(_WIDTH):
            t = s[i]
            j = _MASK & (j + key[i % keylen] + t)
            s[i] = s[j]
            s[j] = t
        self._s = s
        self._i = 0
        self._j = 0
        self.next_bytes(_WIDTH)

    def next_bytes(self, count: int) -> int:
        """Return the next ``count`` keystream bytes as one big-endian integer."""
        s = self._s
        i, j = self._i, self._j
        r = 0
        for _ in range(count):
            i = _MASK & (i + 1)
            t = s[i]
            j = _MASK & (j + t)
            s[i] = s[j]
            s[j] = t
            r = r * _WIDTH + s[_MASK & (s[i] + s[j])]
        self._i, self._j = i, j
        return r


class RandomSource:
    """Deterministic random stream; identical seeds give identical sequences.

    Nothing here reads the clock or any outside entropy. Callers own the
    stream and pass it explicitly to each generator in a fixed order.
    """

    def __init__(self, seed: str):
        self._seed = seed
        self._arc4 = _Arc4(_mix_key(seed))

    def random(self) -> float:
        """Uniform float in ``[0, 1)`` with 52 bits of randomness."""
        n = self._arc4.next_bytes(_CHUNKS)
        d = _START_DENOM
        x = 0
        while n < _SIGNIFICANCE:
            n = (n + x) * _WIDTH
            d *= _WIDTH
            x = self._arc4.next_bytes(1)
        while n >= _OVERFLOW:
            n //= 2
            d //= 2
            x >>= 1
        return (n + x) / d

    def random_int(self, lo: int, hi: int) -> int:
        """Integer in ``[lo, hi]``, both bounds inclusive."""
        return math.floor(self.random() * (hi - lo + 1)) + lo

    def pick(self, items: Sequence[T]) -> T:
        """Uniformly chosen element. ``items`` must not be empty."""
        return items[math.floor(self.random() * len(items))]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a Fisher-Yates shuffled copy; ``items`` is left untouched."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = math.floor(self.random() * (i + 1))
            result[i], result[j] = result[j], result[i]
        return result

    def weighted_pick(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """Element chosen in proportion to its weight."""
        threshold = self.random() * sum(weights)
        for item, weight in zip(items, weights):
            threshold -= weight
            if threshold <= 0:
                return item
        return items[-1]

    def get_seed(self) -> str:
        return self._seed

    def __repr__(self) -> str:
        return f"RandomSource(seed={self._seed!r})"


def create_random(seed: str) -> RandomSource:
    """Create a fresh stream for ``seed``."""
    return RandomSource(seed)
