# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import logging
import swarmscape.common.typing as tp
from swarmscape.common import mathutils
from . import base
from .base import registry as registry

# families of algorithms
# pylint: disable=unused-wildcard-import,wildcard-import,too-many-instance-attributes
from .genetic import *  # type: ignore  # noqa: F403

logger = logging.getLogger(__name__)


# # # # # algorithms # # # # #


@registry.register
class RandomSearch(base.Algorithm):
    """Baseline: every candidate jumps to a fresh uniform point at each step,
    without any memory of its previous position.
    """

    name = "random"
    population_based = False

    def _internal_step(self, landscape: tp.LandscapeLike) -> None:
        bound = landscape.bounds
        for candidate in self.particles:
            x, z = self._sample_point(bound)
            candidate.move(x, z, landscape)
            self._update_best(candidate)


class _PSO(base.Algorithm):

    def _spawn_candidate(self, landscape: tp.LandscapeLike, uid: int) -> base.Candidate:
        bound = landscape.bounds
        x, z = self._sample_point(bound)
        val = landscape.f(x, z)
        # random initial velocity, up to 10% of the bounds
        vx = (self.random_state.next() * 2 - 1) * (bound * 0.1)
        vz = (self.random_state.next() * 2 - 1) * (bound * 0.1)
        return base.Particle(x, z, val, uid, vx=vx, vz=vz)

    def _internal_step(self, landscape: tp.LandscapeLike) -> None:
        conf = self._config
        bound = landscape.bounds
        rng = self.random_state
        for part in self.particles:
            assert isinstance(part, base.Particle)
            # independent random coefficients per dimension
            r1x, r1z = rng.next(), rng.next()
            r2x, r2z = rng.next(), rng.next()
            pbest, gbest = part.personal_best, self.best
            part.vx = conf.w * part.vx + conf.c1 * r1x * (pbest.x - part.x) + conf.c2 * r2x * (gbest.x - part.x)
            part.vz = conf.w * part.vz + conf.c1 * r1z * (pbest.z - part.z) + conf.c2 * r2z * (gbest.z - part.z)
            part.move(base.clamp(part.x + part.vx, bound), base.clamp(part.z + part.vz, bound), landscape)
            if part.val < pbest.val:
                part.personal_best = part.as_best()
            self._update_best(part)


class ConfPSO(base.ConfiguredAlgorithm):
    """`Particle Swarm Optimization <https://en.wikipedia.org/wiki/Particle_swarm_optimization>`_
    is based on a set of particles with their inertia.
    Each particle is attracted by its own best position and by the best position of the swarm,
    positions are clamped to the search square.

    Parameters
    ----------
    w: float
        inertia of the velocity
    c1: float
        cognitive coefficient (attraction to the personal best)
    c2: float
        social coefficient (attraction to the global best)
    """

    # pylint: disable=unused-argument
    def __init__(self, w: float = 0.7, c1: float = 1.5, c2: float = 1.5) -> None:
        super().__init__(_PSO, locals())
        self.w = w
        self.c1 = c1
        self.c2 = c2
        self.check()

    def check(self) -> None:
        base.check_range("w", self.w, 0.0, 1.0)
        base.check_range("c1", self.c1, 0.0, 4.0)
        base.check_range("c2", self.c2, 0.0, 4.0)


PSO = ConfPSO().set_name("pso", register=True)


class _SimulatedAnnealing(base.Algorithm):

    population_based = False
    current_temp = float("nan")  # set at init

    def _internal_init(self, landscape: tp.LandscapeLike) -> None:
        self.current_temp = self._config.temperature
        super()._internal_init(landscape)

    def _internal_step(self, landscape: tp.LandscapeLike) -> None:
        conf = self._config
        bound = landscape.bounds
        rng = self.random_state
        # neighborhood shrinks with the temperature
        step_size = bound * 0.1 * (self.current_temp / conf.temperature)
        for chain in self.particles:
            nx = base.clamp(chain.x + (rng.next() * 2 - 1) * step_size, bound)
            nz = base.clamp(chain.z + (rng.next() * 2 - 1) * step_size, bound)
            nval = landscape.f(nx, nz)
            delta = nval - chain.val
            if delta < 0 or rng.next() < math.exp(-delta / self.current_temp):
                chain.x, chain.z, chain.val = nx, nz, nval
                self._update_best(chain)
        self.current_temp = max(self.current_temp * conf.cooling_rate, ConfSA.min_temperature)


class ConfSA(base.ConfiguredAlgorithm):
    """Simulated annealing, with one independent chain per candidate and a shared
    temperature schedule. Worse neighbors are accepted with probability exp(-delta / T)
    (Metropolis criterion), and the temperature is multiplied by the cooling rate after
    each step, down to a floor of 0.001.

    Parameters
    ----------
    temperature: float
        initial temperature
    cooling_rate: float
        multiplicative decay of the temperature at each step
    """

    min_temperature = 0.001

    # pylint: disable=unused-argument
    def __init__(self, temperature: float = 1000.0, cooling_rate: float = 0.99) -> None:
        super().__init__(_SimulatedAnnealing, locals())
        self.temperature = temperature
        self.cooling_rate = cooling_rate
        self.check()

    def check(self) -> None:
        base.check_range("temperature", self.temperature, 0.0, float("inf"), include_low=False)
        base.check_range("cooling_rate", self.cooling_rate, 0.0, 1.0, include_low=False)


SimulatedAnnealing = ConfSA().set_name("sa", register=True)


class _CuckooSearch(base.Algorithm):

    beta = 1.5
    levy_base_fraction = 0.01  # step scale, as a fraction of the bounds

    def _internal_step(self, landscape: tp.LandscapeLike) -> None:
        self._levy_flights(landscape)
        self._abandon_nests(landscape)
        for nest in self.particles:
            self._update_best(nest)

    def _levy_flights(self, landscape: tp.LandscapeLike) -> None:
        bound = landscape.bounds
        sigma = mathutils.mantegna_sigma(self.beta)
        jump_scale = self._config.levy_scale * (bound * self.levy_base_fraction)
        for nest in self.particles:
            step_x = mathutils.levy_step(self.beta, self.random_state, sigma) * jump_scale
            step_z = mathutils.levy_step(self.beta, self.random_state, sigma) * jump_scale
            nx = reflect(nest.x + step_x, bound)
            nz = reflect(nest.z + step_z, bound)
            nval = landscape.f(nx, nz)
            # greedy replacement of the source nest
            if nval < nest.val:
                nest.x, nest.z, nest.val = nx, nz, nval

    def _abandon_nests(self, landscape: tp.LandscapeLike) -> None:
        """Re-randomizes the worst fraction pa of the nests, except the best one"""
        num = len(self.particles)
        worst_first = sorted(range(num), key=lambda k: self.particles[k].val, reverse=True)
        num_abandon = int(math.floor(num * self._config.pa))
        best_index = min(range(num), key=lambda k: self.particles[k].val)  # first index on ties
        for index in worst_first[:num_abandon]:
            if index == best_index:
                continue
            x, z = self._sample_point(landscape.bounds)
            self.particles[index].move(x, z, landscape)


def reflect(value: float, bound: float) -> float:
    """Reflects a coordinate which overshot [-bound, bound] back inside.
    Overshoots larger than a domain width are folded first.
    """
    if abs(value) > 3 * bound:
        value = (value + bound) % (4 * bound) - bound
    if value > bound:
        return 2 * bound - value
    if value < -bound:
        return -2 * bound - value
    return value


class ConfCuckoo(base.ConfiguredAlgorithm):
    """Cuckoo Search (Yang & Deb, 2009), with Levy flights drawn with Mantegna's method
    (beta=1.5). Each nest performs a flight and is replaced only if the new point is better,
    then a fraction pa of the worst nests is abandoned and re-randomized, the best nest
    being protected.

    Parameters
    ----------
    pa: float
        discovery rate, i.e. fraction of nests abandoned at each step
    levy_scale: float
        multiplier of the flight length (base length is 1% of the bounds)
    """

    # pylint: disable=unused-argument
    def __init__(self, pa: float = 0.25, levy_scale: float = 0.2) -> None:
        super().__init__(_CuckooSearch, locals())
        self.pa = pa
        self.levy_scale = levy_scale
        self.check()

    def check(self) -> None:
        base.check_range("pa", self.pa, 0.0, 1.0)
        base.check_range("levy_scale", self.levy_scale, 0.0, float("inf"), include_low=False)


CuckooSearch = ConfCuckoo().set_name("cuckoo", register=True)
