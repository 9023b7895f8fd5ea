# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Selection, crossover and mutation operators of the genetic algorithm.
Each operator holds the random source it draws from and dispatches to
the method named at construction.
"""

import swarmscape.common.typing as tp
from swarmscape.common import errors
from swarmscape.common import mathutils
from swarmscape.common.randomness import SeededRandom
from .base import Candidate


def check_method(kind: str, method: str, methods: tp.Sequence[str]) -> None:
    if method not in methods:
        raise errors.InvalidArgumentError(f'Unknown {kind} "{method}", available: {list(methods)}')


class Selection:
    """Parent selection for minimization

    Parameters
    ----------
    random_state: SeededRandom
        random source to draw from
    method: str
        "tournament" (best of :code:`tournament_size` uniform draws),
        "roulette" (fitness proportional on 1 / (1 + val)),
        "rank" (linear ranking, the best gets weight n) or
        "random" (uniform)
    tournament_size: int
        number of contenders in a tournament
    """

    methods = ("tournament", "roulette", "rank", "random")

    def __init__(self, random_state: SeededRandom, method: str = "tournament", tournament_size: int = 3) -> None:
        check_method("selection", method, self.methods)
        self.random_state = random_state
        self.method = method
        self.tournament_size = tournament_size

    def apply(self, population: tp.Sequence[Candidate]) -> Candidate:
        return getattr(self, self.method)(population)  # type: ignore

    def tournament(self, population: tp.Sequence[Candidate]) -> Candidate:
        best: tp.Optional[Candidate] = None
        for _ in range(self.tournament_size):
            contender = population[self.random_state.next_int(0, len(population))]
            if best is None or contender.val < best.val:
                best = contender
        assert best is not None
        return best

    def roulette(self, population: tp.Sequence[Candidate]) -> Candidate:
        # shift so that inverted weights stay positive on landscapes with negative values
        shift = min(0.0, min(c.val for c in population))
        weights = [1.0 / (1.0 + c.val - shift) for c in population]
        return population[mathutils.weighted_random(weights, self.random_state)]

    def rank(self, population: tp.Sequence[Candidate]) -> Candidate:
        num = len(population)
        order = sorted(range(num), key=lambda k: population[k].val)
        weights = [num - rank for rank in range(num)]
        return population[order[mathutils.weighted_random(weights, self.random_state)]]

    def random(self, population: tp.Sequence[Candidate]) -> Candidate:
        return population[self.random_state.next_int(0, len(population))]


class Crossover:
    """Recombination of two parents into a single child position

    Parameters
    ----------
    random_state: SeededRandom
        random source to draw from
    method: str
        "blend" (BLX-alpha, one mixing coefficient for both axes),
        "single_point" (x from one parent, z from the other),
        "uniform" (each axis from a random parent) or
        "sbx" (simulated binary crossover)
    eta: float
        distribution index of the simulated binary crossover (large values keep
        the child close to the parents)
    alpha: float
        extension of the blend interval beyond the parents (0 for a plain
        convex combination)
    """

    methods = ("blend", "single_point", "uniform", "sbx")

    def __init__(self, random_state: SeededRandom, method: str = "blend", eta: float = 20.0, alpha: float = 0.0) -> None:
        check_method("crossover", method, self.methods)
        self.random_state = random_state
        self.method = method
        self.eta = eta
        self.alpha = alpha

    def apply(self, parent1: Candidate, parent2: Candidate) -> tp.Point:
        return getattr(self, self.method)(parent1, parent2)  # type: ignore

    def blend(self, parent1: Candidate, parent2: Candidate) -> tp.Point:
        coeff = (1 + 2 * self.alpha) * self.random_state.next() - self.alpha
        return (
            coeff * parent1.x + (1 - coeff) * parent2.x,
            coeff * parent1.z + (1 - coeff) * parent2.z,
        )

    def single_point(self, parent1: Candidate, parent2: Candidate) -> tp.Point:
        if self.random_state.next() < 0.5:
            return parent1.x, parent2.z
        return parent2.x, parent1.z

    def uniform(self, parent1: Candidate, parent2: Candidate) -> tp.Point:
        x = parent1.x if self.random_state.next() < 0.5 else parent2.x
        z = parent1.z if self.random_state.next() < 0.5 else parent2.z
        return x, z

    def sbx(self, parent1: Candidate, parent2: Candidate) -> tp.Point:
        return self._sbx_gene(parent1.x, parent2.x), self._sbx_gene(parent1.z, parent2.z)

    def _sbx_gene(self, gene1: float, gene2: float) -> float:
        u = self.random_state.next()
        exponent = 1.0 / (self.eta + 1)
        if u <= 0.5:
            spread = (2 * u) ** exponent
        else:
            spread = (1 / (2 * (1 - u))) ** exponent
        return 0.5 * ((1 + spread) * gene1 + (1 - spread) * gene2)


class Mutation:
    """Perturbation of a child position

    Parameters
    ----------
    random_state: SeededRandom
        random source to draw from
    method: str
        "uniform" (jitter in +/- scale * bounds),
        "gaussian" (normal jitter with std scale * bounds),
        "polynomial" (bounded polynomial mutation with index eta) or
        "swap" (exchanges both coordinates)
    eta: float
        distribution index of the polynomial mutation
    scale: float
        jitter size, as a fraction of the bounds
    """

    methods = ("uniform", "gaussian", "polynomial", "swap")

    def __init__(self, random_state: SeededRandom, method: str = "uniform", eta: float = 20.0, scale: float = 0.1) -> None:
        check_method("mutation", method, self.methods)
        self.random_state = random_state
        self.method = method
        self.eta = eta
        self.scale = scale

    def apply(self, point: tp.Point, bound: float) -> tp.Point:
        return getattr(self, self.method)(point, bound)  # type: ignore

    def uniform(self, point: tp.Point, bound: float) -> tp.Point:
        width = bound * self.scale
        rng = self.random_state
        return point[0] + (rng.next() * 2 - 1) * width, point[1] + (rng.next() * 2 - 1) * width

    def gaussian(self, point: tp.Point, bound: float) -> tp.Point:
        sigma = bound * self.scale
        return (
            point[0] + mathutils.normal_random(self.random_state) * sigma,
            point[1] + mathutils.normal_random(self.random_state) * sigma,
        )

    def polynomial(self, point: tp.Point, bound: float) -> tp.Point:
        return self._polynomial_gene(point[0], bound), self._polynomial_gene(point[1], bound)

    def _polynomial_gene(self, gene: float, bound: float) -> float:
        u = self.random_state.next()
        exponent = 1.0 / (self.eta + 1)
        if u < 0.5:
            delta = (2 * u) ** exponent - 1
        else:
            delta = 1 - (2 * (1 - u)) ** exponent
        return gene + delta * 2 * bound

    def swap(self, point: tp.Point, bound: float) -> tp.Point:  # pylint: disable=unused-argument
        return point[1], point[0]
