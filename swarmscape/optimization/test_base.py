# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import swarmscape.common.typing as tp
import warnings
import pytest
import numpy as np
from swarmscape.common import errors
from swarmscape.common import testing
from swarmscape.common.randomness import SeededRandom
from swarmscape.functions import landscapes
from . import base
from . import algorithmlib


class _StillAlgorithm(base.Algorithm):
    """Keeps its population still"""

    name = "still"

    def _internal_step(self, landscape: tp.LandscapeLike) -> None:
        pass


class _BoundedSphere(landscapes.Sphere):

    def __init__(self, bounds: float) -> None:
        super().__init__()
        self._bounds = bounds

    @property
    def bounds(self) -> float:
        return self._bounds


def test_registry() -> None:
    testing.assert_set_equal(algorithmlib.registry, ["cuckoo", "pso", "ga", "sa", "random"])
    assert algorithmlib.registry.get("nelder-mead") is None


def test_init_and_step() -> None:
    landscape = landscapes.Sphere()
    algo = _StillAlgorithm(popsize=12, random_state=SeededRandom(3))
    assert not algo.initialized
    with pytest.raises(errors.UninitializedAlgorithmError):
        algo.step(landscape)
    algo.init(landscape)
    assert algo.initialized
    np.testing.assert_equal(len(algo.particles), 12)
    np.testing.assert_equal([p.uid for p in algo.particles], list(range(12)))
    testing.assert_population_consistent(algo, landscape)
    np.testing.assert_equal(algo.best.val, min(p.val for p in algo.particles))
    algo.step(landscape)
    algo.step(landscape)
    np.testing.assert_equal(algo.num_generations, 2)
    algo.init(landscape)
    np.testing.assert_equal(algo.num_generations, 0)


def test_popsize_is_read_at_init() -> None:
    landscape = landscapes.Sphere()
    algo = _StillAlgorithm(popsize=12)
    algo.init(landscape)
    algo.popsize = 20
    algo.step(landscape)
    np.testing.assert_equal(len(algo.particles), 12)
    algo.init(landscape)
    np.testing.assert_equal(len(algo.particles), 20)


def test_default_random_state_is_reproducible() -> None:
    landscape = landscapes.Sphere()
    algo1 = _StillAlgorithm(popsize=10)
    algo2 = _StillAlgorithm(popsize=10)
    algo1.init(landscape)
    algo2.init(landscape)
    testing.printed_assert_equal([p.x for p in algo1.particles], [p.x for p in algo2.particles])


@pytest.mark.parametrize("popsize", [0, -3, 2.5, True, "10"])  # type: ignore
def test_invalid_popsize(popsize: tp.Any) -> None:
    algo = _StillAlgorithm(popsize=popsize)
    with pytest.raises(errors.InvalidArgumentError):
        algo.init(landscapes.Sphere())
    assert not algo.initialized


@pytest.mark.parametrize("bounds", [0.0, -1.0, float("inf"), float("nan")])  # type: ignore
def test_invalid_bounds(bounds: float) -> None:
    with pytest.raises(errors.InvalidArgumentError):
        _StillAlgorithm(popsize=10).init(_BoundedSphere(bounds))


def test_small_population_warning() -> None:
    landscape = landscapes.Sphere()
    with pytest.warns(errors.InefficientSettingsWarning):
        _StillAlgorithm(popsize=5).init(landscape)
    algo = _StillAlgorithm(popsize=5)
    algo.population_based = False
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        algo.init(landscape)
    np.testing.assert_equal(len(algo.particles), 5)


def test_callbacks() -> None:
    landscape = landscapes.Sphere()
    algo = _StillAlgorithm(popsize=10)
    logs: tp.List[str] = []
    algo.register_callback("init", lambda a: logs.append(f"i{len(a.particles)}"))
    algo.register_callback("step", lambda a: logs.append(f"s{a.num_generations}"))
    with pytest.raises(errors.SwarmscapeValueError):
        algo.register_callback("tell", lambda a: None)
    algo.init(landscape)
    algo.step(landscape)
    algo.step(landscape)
    testing.printed_assert_equal(logs, ["i10", "s1", "s2"])
    algo.remove_all_callbacks()
    algo.step(landscape)
    np.testing.assert_equal(len(logs), 3)


def test_candidate_move() -> None:
    landscape = landscapes.Sphere()
    candidate = base.Candidate(1.0, 1.0, 2.0, uid=4)
    candidate.move(3.0, 4.0, landscape)
    np.testing.assert_equal((candidate.x, candidate.z, candidate.val), (3.0, 4.0, 25.0))
    np.testing.assert_equal(candidate.as_best(), base.Best(3.0, 4.0, 25.0))
    np.testing.assert_equal(repr(candidate), "Candidate<4>(x=3.0, z=4.0, val=25.0)")
    particle = base.Particle(1.0, 2.0, 5.0, vx=0.5)
    np.testing.assert_equal(particle.personal_best, base.Best(1.0, 2.0, 5.0))
    np.testing.assert_equal((particle.vx, particle.vz), (0.5, 0.0))


@testing.parametrized(
    inside=(1.5, 2.0, 1.5),
    above=(3.0, 2.0, 2.0),
    below=(-7.0, 2.0, -2.0),
)
def test_clamp(value: float, bound: float, expected: float) -> None:
    np.testing.assert_equal(base.clamp(value, bound), expected)


def test_check_range() -> None:
    base.check_range("rate", 0.0, 0.0, 1.0)
    base.check_range("rate", 1.0, 0.0, 1.0)
    with pytest.raises(errors.InvalidArgumentError, match=r"rate must be in \]0.0, 1.0\]"):
        base.check_range("rate", 0.0, 0.0, 1.0, include_low=False)
    with pytest.raises(errors.InvalidArgumentError):
        base.check_range("rate", 1.5, 0.0, 1.0)


def test_configured_algorithm_names() -> None:
    np.testing.assert_equal(repr(algorithmlib.PSO), "pso")
    np.testing.assert_equal(repr(algorithmlib.ConfPSO()), "ConfPSO()")
    np.testing.assert_equal(repr(algorithmlib.ConfPSO(c2=2.0, w=0.5)), "ConfPSO(c2=2.0, w=0.5)")
    assert algorithmlib.ConfPSO(w=0.5) == algorithmlib.ConfPSO(w=0.5)
    assert algorithmlib.ConfPSO(w=0.5) != algorithmlib.ConfPSO(w=0.6)
    algo = algorithmlib.PSO(popsize=10)
    np.testing.assert_equal(algo.name, "pso")
    np.testing.assert_equal(repr(algo), "Instance of pso(popsize=10, num_generations=0)")


def test_configured_algorithm_owns_a_copy() -> None:
    algo1 = algorithmlib.PSO(popsize=10)
    algo2 = algorithmlib.PSO(popsize=10)
    algo1.config.w = 0.1
    np.testing.assert_equal(algo2.config.w, 0.7)
    np.testing.assert_equal(algorithmlib.PSO.w, 0.7)
    testing.printed_assert_equal(algo1.config.config(), {"w": 0.1, "c1": 1.5, "c2": 1.5})


def test_invalid_configuration() -> None:
    with pytest.raises(errors.InvalidArgumentError):
        algorithmlib.ConfCuckoo(pa=1.5)
    algo = algorithmlib.CuckooSearch(popsize=10)
    algo.config.pa = -0.1
    with pytest.raises(errors.InvalidArgumentError):
        algo.init(landscapes.Sphere())
