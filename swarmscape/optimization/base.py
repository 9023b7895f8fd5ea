# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import copy
import math
import logging
import warnings
from numbers import Integral
import swarmscape.common.typing as tp
from swarmscape.common import tools
from swarmscape.common import errors
from swarmscape.common.decorators import Registry
from swarmscape.common.randomness import SeededRandom


AlgoCls = tp.Union["ConfiguredAlgorithm", tp.Type["Algorithm"]]
registry: Registry[AlgoCls] = Registry()
_AlgoCallBack = tp.Callable[["Algorithm"], None]
X = tp.TypeVar("X", bound="ConfiguredAlgorithm")
MIN_POPULATION = 10  # below this size, population-based algorithms degenerate

logger = logging.getLogger(__name__)


class Best(tp.NamedTuple):
    """Best point found during a run (read-only)"""

    x: float
    z: float
    val: float


UNSET_BEST = Best(0.0, 0.0, float("inf"))


def clamp(value: float, bound: float) -> float:
    """Clamps a coordinate into [-bound, bound]"""
    return max(-bound, min(bound, value))


def check_range(name: str, value: float, low: float, high: float, include_low: bool = True) -> None:
    """Raises InvalidArgumentError if value is outside of [low, high] (or ]low, high])"""
    admissible = (low <= value if include_low else low < value) and value <= high
    if not admissible:
        left = "[" if include_low else "]"
        raise errors.InvalidArgumentError(f"{name} must be in {left}{low}, {high}] (got {value!r})")


class Candidate:
    """A point of the search space with its cached fitness value.

    The cached value must always equal :code:`landscape.f(x, z)`, so positions
    should be changed through :code:`move`.
    """

    __slots__ = ("x", "z", "val", "uid")

    def __init__(self, x: float, z: float, val: float, uid: int = 0) -> None:
        self.x = x
        self.z = z
        self.val = val
        self.uid = uid

    def move(self, x: float, z: float, landscape: tp.LandscapeLike) -> None:
        self.x = x
        self.z = z
        self.val = landscape.f(x, z)

    def as_best(self) -> Best:
        return Best(self.x, self.z, self.val)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}<{self.uid}>(x={self.x}, z={self.z}, val={self.val})"


class Particle(Candidate):
    """Candidate with a velocity and a personal best, for swarm algorithms"""

    __slots__ = ("vx", "vz", "personal_best")

    def __init__(self, x: float, z: float, val: float, uid: int = 0, vx: float = 0.0, vz: float = 0.0) -> None:
        super().__init__(x, z, val, uid)
        self.vx = vx
        self.vz = vz
        self.personal_best = Best(x, z, val)


class Algorithm:
    """Stepwise population-based search on a 2D landscape, with 2 main functions:

    - :code:`init(landscape)` which creates :code:`popsize` random candidates in the
      search square and sets :code:`best` to the best of them.
    - :code:`step(landscape)` which advances the population by exactly one generation
      and keeps :code:`best` as the best point found since the last :code:`init`.

    The population is available through :code:`particles` and must not be edited
    by external code. This class is abstract, at least :code:`_internal_step` has
    to be overridden.

    Parameters
    ----------
    popsize: int
        number of candidates, read at each :code:`init`
    random_state: SeededRandom or None
        random source to draw from. Several algorithms can share the same source,
        in which case calls must be serialized to keep runs reproducible.
    config: ConfiguredAlgorithm or None
        hyper-parameters of the algorithm, read at each step
    """

    name = "algorithm"
    population_based = True  # algorithms which make no sense with a handful of candidates

    def __init__(
        self,
        popsize: int = 50,
        random_state: tp.Optional[SeededRandom] = None,
        config: tp.Optional["ConfiguredAlgorithm"] = None,
    ) -> None:
        self.popsize = popsize
        self.random_state = SeededRandom() if random_state is None else random_state
        self._config = config
        self.particles: tp.List[Candidate] = []
        self.best = UNSET_BEST
        self.num_generations = 0
        self._initialized = False
        self._callbacks: tp.Dict[str, tp.List[_AlgoCallBack]] = {}

    @property
    def config(self) -> tp.Any:
        """Live hyper-parameters (edits apply at the next step)"""
        return self._config

    @property
    def initialized(self) -> bool:
        return self._initialized

    def register_callback(self, name: str, callback: _AlgoCallBack) -> None:
        """Add a callback method called after each "init" or "step", with the algorithm
        as only argument. This can be useful for custom logging.

        Parameters
        ----------
        name: str
            name of the method to register the callback for (either "init" or "step")
        callback: callable
            a callable taking the algorithm as argument
        """
        if name not in ["init", "step"]:
            raise errors.SwarmscapeValueError(f'Callback name must be "init" or "step", got {name!r}')
        self._callbacks.setdefault(name, []).append(callback)

    def remove_all_callbacks(self) -> None:
        """Removes all registered callables"""
        self._callbacks = {}

    def init(self, landscape: tp.LandscapeLike) -> None:
        """(Re)creates the population and the best point from scratch"""
        self._check_settings(landscape)
        self.particles = []
        self.best = UNSET_BEST
        self.num_generations = 0
        self._internal_init(landscape)
        self._initialized = True
        logger.debug("Initialized %s with %s candidates, best value %s", self.name, len(self.particles), self.best.val)
        for callback in self._callbacks.get("init", []):
            callback(self)

    def step(self, landscape: tp.LandscapeLike) -> None:
        """Advances the population by one generation"""
        if not self._initialized:
            raise errors.UninitializedAlgorithmError(f"{self.name} must be initialized before stepping")
        self._internal_step(landscape)
        self.num_generations += 1
        for callback in self._callbacks.get("step", []):
            callback(self)

    def _check_settings(self, landscape: tp.LandscapeLike) -> None:
        if isinstance(self.popsize, bool) or not isinstance(self.popsize, Integral) or self.popsize < 1:
            raise errors.InvalidArgumentError(f"Population size must be a positive integer (got {self.popsize!r})")
        bound = landscape.bounds
        if not bound > 0 or math.isinf(bound):
            raise errors.InvalidArgumentError(f"Landscape bounds must be positive and finite (got {bound!r})")
        if self._config is not None:
            self._config.check()
        if self.population_based and self.popsize < MIN_POPULATION:
            warnings.warn(
                f"{self.name} is inefficient with fewer than {MIN_POPULATION} candidates (got {self.popsize})",
                errors.InefficientSettingsWarning,
            )

    def _sample_point(self, bound: float) -> tp.Point:
        rng = self.random_state
        x = (rng.next() * 2 - 1) * bound
        z = (rng.next() * 2 - 1) * bound
        return x, z

    def _spawn_candidate(self, landscape: tp.LandscapeLike, uid: int) -> Candidate:
        x, z = self._sample_point(landscape.bounds)
        return Candidate(x, z, landscape.f(x, z), uid)

    def _update_best(self, candidate: Candidate) -> bool:
        """Records the candidate as best if it is strictly better"""
        if candidate.val < self.best.val:
            self.best = candidate.as_best()
            return True
        return False

    def _internal_init(self, landscape: tp.LandscapeLike) -> None:
        for uid in range(int(self.popsize)):
            candidate = self._spawn_candidate(landscape, uid)
            self.particles.append(candidate)
            self._update_best(candidate)

    def _internal_step(self, landscape: tp.LandscapeLike) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"Instance of {self.name}(popsize={self.popsize}, num_generations={self.num_generations})"


class ConfiguredAlgorithm:
    """Creates algorithm instances with configuration.

    Parameters
    ----------
    AlgorithmClass: type
        class of the algorithm to configure
    config: dict
        dictionnary of all the configurations

    Note
    ----
    - Each created algorithm owns a copy of this configuration (:code:`algorithm.config`),
      editing it changes the behavior of this algorithm only, from its next step on.
    - This provides a default repr which can be bypassed through set_name
    """

    def __init__(self, AlgorithmClass: tp.Type[Algorithm], config: tp.Dict[str, tp.Any]) -> None:
        self._AlgorithmClass = AlgorithmClass
        config.pop("self", None)  # self comes from "locals()"
        config.pop("__class__", None)  # self comes from "locals()"
        self._config = config  # keep all, to avoid weird behavior at mismatch between algo and configalgo
        diff = tools.different_from_defaults(instance=self, instance_dict=config, check_mismatches=True)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        self.name = f"{self.__class__.__name__}({params})"

    def config(self) -> tp.Dict[str, tp.Any]:
        """Current values of the hyper-parameters"""
        return {x: getattr(self, x) for x in self._config}

    def check(self) -> None:
        """Raises InvalidArgumentError if a hyper-parameter is not admissible"""

    def __call__(self, popsize: int = 50, random_state: tp.Optional[SeededRandom] = None) -> Algorithm:
        """Creates an algorithm from the configuration

        Parameters
        ----------
        popsize: int
            number of candidates
        random_state: SeededRandom or None
            random source of the algorithm (a new one with default seed if None)
        """
        run = self._AlgorithmClass(popsize=popsize, random_state=random_state, config=copy.copy(self))
        run.name = self.name
        return run

    def __repr__(self) -> str:
        return self.name

    def set_name(self: X, name: str, register: bool = False) -> X:
        """Set a new representation for the instance"""
        self.name = name
        if register:
            registry.register_name(name, self)
        return self

    def __eq__(self, other: tp.Any) -> tp.Any:
        if self.__class__ == other.__class__:
            if self.config() == other.config():
                return True
        return False
