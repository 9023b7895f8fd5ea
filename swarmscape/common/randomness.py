# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Deterministic random source shared by the algorithms of a simulation.

The generator is Mulberry32: a 32-bit state advanced by a fixed odd increment
and scrambled by a few multiply/xorshift rounds. It has no hidden entropy, so
:code:`set_seed(s); reset()` followed by the same sequence of calls always
reproduces the same draws, including across implementations using the same
generator.
"""

import math
from . import errors

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
DEFAULT_SEED = 12345


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiplication"""
    return (a * b) & _MASK


class SeededRandom:
    """Seedable uniform random source

    Parameters
    ----------
    seed: int
        initial seed, reduced modulo 2**32

    Note
    ----
    Instances are not thread safe: calls from several algorithms must be serialized,
    and the stream order is part of the reproducibility contract.
    """

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self._initial_seed = 0
        self._state = 0
        self.set_seed(seed)

    @property
    def seed(self) -> int:
        """Seed the stream rewinds to with :code:`reset`"""
        return self._initial_seed

    def next(self) -> float:
        """Returns a uniform float in [0, 1)"""
        self._state = (self._state + _INCREMENT) & _MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return ((t ^ (t >> 14)) & _MASK) / 4294967296.0

    def next_int(self, low: int, high: int) -> int:
        """Returns an integer in [low, high)"""
        return math.floor(self.next() * (high - low) + low)

    def uniform(self, low: float, high: float) -> float:
        """Returns a float in [low, high)"""
        return low + (high - low) * self.next()

    def set_seed(self, seed: int) -> None:
        """Sets a new seed and restarts the stream from it"""
        if isinstance(seed, bool) or not isinstance(seed, int):
            raise errors.SwarmscapeTypeError(f"Seed must be an integer, got {seed!r}")
        self._initial_seed = seed & _MASK
        self._state = self._initial_seed

    def reset(self) -> None:
        """Rewinds the stream to the last seed"""
        self._state = self._initial_seed

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self._initial_seed}, state={self._state})"
