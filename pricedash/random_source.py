"""
Random sources injected into the generator and the projector.
"""
from typing import List, Optional, Protocol, Sequence, runtime_checkable

import numpy as np

from pricedash.errors import InvalidArgument

__all__ = ["RandomSource", "NumpyRandomSource", "SequenceRandomSource"]


@runtime_checkable
class RandomSource(Protocol):
    """A capability returning uniform floats in [0, 1)."""

    def next(self) -> float:
        ...


class NumpyRandomSource:
    """Production source backed by numpy's default generator. `seed=None` uses OS entropy."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def next(self) -> float:
        return float(self._rng.random())


class SequenceRandomSource:
    """
    Replays a fixed sequence of values, cycling back to the start when exhausted.

    Useful for deterministic tests: `SequenceRandomSource([0.5])` makes every
    draw return 0.5, which zeroes the noise term of the random walk.
    """

    def __init__(self, values: Sequence[float]):
        if len(values) == 0:
            raise InvalidArgument("SequenceRandomSource needs at least one value.")
        for value in values:
            if not 0.0 <= value < 1.0:
                raise InvalidArgument(f"Random values must lie in [0, 1), got {value}.")
        self._values: List[float] = [float(v) for v in values]
        self._position = 0

    def next(self) -> float:
        value = self._values[self._position % len(self._values)]
        self._position += 1
        return value
