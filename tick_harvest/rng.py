"""SeededRandom - portable 32-bit LCG stream."""
from __future__ import annotations

import os
from typing import Any, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

_MODULUS = 4294967296
_MULTIPLIER = 1664525
_INCREMENT = 1013904223


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - _MODULUS if value >= 0x80000000 else value


def hash_seed(seed: int | str) -> int:
    """Fold the decimal form of *seed* into a non-zero 32-bit state.

    Iterates UTF-16 code units so that string seeds hash the same way on
    every implementation of the stream.
    """
    data = str(seed).encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = _to_int32(h * 31 + unit)
    return abs(h) or 1


class SeededRandom:
    """Deterministic pseudo-random stream.

    Every value is a pure function of the seed and the number of draws so
    far, so two instances with the same seed stay in lockstep for as long
    as they are asked the same questions.
    """

    def __init__(self, seed: int | str | None = None) -> None:
        if seed is None:
            seed = int.from_bytes(os.urandom(8), "big")
        self._seed = seed
        self._state = hash_seed(seed)

    @property
    def seed(self) -> int | str:
        return self._seed

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Advance the stream and return a float in [0, 1)."""
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    def random(self) -> float:
        return self.next()

    def randint(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi], inclusive. Always consumes one draw."""
        return int(self.next() * (hi - lo + 1)) + lo

    def uniform(self, lo: float, hi: float) -> float:
        return self.next() * (hi - lo) + lo

    def choice(self, seq: Sequence[T]) -> T | None:
        if not seq:
            return None
        return seq[int(self.next() * len(seq))]

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle in place, walking from the end."""
        for i in range(len(items) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            items[i], items[j] = items[j], items[i]
        return items

    def reset(self) -> None:
        """Rewind to the state immediately after seeding."""
        self._state = hash_seed(self._seed)

    def set_seed(self, seed: int | str) -> None:
        self._seed = seed
        self._state = hash_seed(seed)

    def getstate(self) -> dict[str, Any]:
        return {"seed": self._seed, "state": self._state}

    def setstate(self, data: dict[str, Any]) -> None:
        state = data["state"]
        if not isinstance(state, int) or not 0 <= state < _MODULUS:
            raise ValueError(f"state must be a 32-bit unsigned int, got {state!r}")
        self._seed = data["seed"]
        self._state = state
