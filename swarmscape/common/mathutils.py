# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import typing as tp
from .randomness import SeededRandom


_LANCZOS_G = 7
_LANCZOS_COEFFICIENTS = (
    0.99999999999980993,
    676.5203681218851,
    -1259.1392167224028,
    771.32342877765313,
    -176.61502916214059,
    12.507343278686905,
    -0.13857109526572012,
    9.9843695780195716e-6,
    1.5056327351493116e-7,
)


def normal_random(random_state: SeededRandom) -> float:
    """Standard normal sample using the Box-Muller transform.
    Uniform draws which are exactly 0 are redrawn (log(0) is undefined).
    """
    u = 0.0
    v = 0.0
    while u == 0:
        u = random_state.next()
    while v == 0:
        v = random_state.next()
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


def gamma(z: float) -> float:
    """Lanczos approximation of the Gamma function (g=7, 9 coefficients),
    accurate to about 15 digits on the positive reals,
    with the reflection formula below 0.5.
    """
    if z < 0.5:
        return math.pi / (math.sin(math.pi * z) * gamma(1 - z))
    z -= 1
    x = _LANCZOS_COEFFICIENTS[0]
    for i in range(1, len(_LANCZOS_COEFFICIENTS)):
        x += _LANCZOS_COEFFICIENTS[i] / (z + i)
    t = z + _LANCZOS_G + 0.5
    return math.sqrt(2 * math.pi) * t ** (z + 0.5) * math.exp(-t) * x


def mantegna_sigma(beta: float) -> float:
    """Standard deviation of the numerator normal draw in Mantegna's method"""
    numerator = gamma(1 + beta) * math.sin(math.pi * beta / 2)
    denominator = gamma((1 + beta) / 2) * beta * 2 ** ((beta - 1) / 2)
    return float((numerator / denominator) ** (1 / beta))


def levy_step(beta: float, random_state: SeededRandom, sigma: tp.Optional[float] = None) -> float:
    """Draws a heavy-tailed (Levy-stable) step length with Mantegna's method

    Parameters
    ----------
    beta: float
        stability index, 1.5 for Cuckoo Search
    random_state: SeededRandom
        the random source to draw from (4 draws or more)
    sigma: float or None
        precomputed :code:`mantegna_sigma(beta)`, computed if not provided
    """
    if sigma is None:
        sigma = mantegna_sigma(beta)
    u = normal_random(random_state) * sigma
    v = normal_random(random_state)
    return u / abs(v) ** (1 / beta)


def weighted_random(weights: tp.Sequence[float], random_state: SeededRandom) -> int:
    """Draws an index with probability proportional to its weight.
    Falls back to the last index when rounding exhausts the sum.
    """
    rand = random_state.next() * sum(weights)
    for k, weight in enumerate(weights):
        rand -= weight
        if rand < 0:
            return k
    return len(weights) - 1
