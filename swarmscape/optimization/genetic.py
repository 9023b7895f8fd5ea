# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
import swarmscape.common.typing as tp
from swarmscape.common import errors
from . import base
from . import operators


logger = logging.getLogger(__name__)


__all__ = ["GeneticAlgorithm", "ConfGA"]


class _GeneticAlgorithm(base.Algorithm):
    """Generational genetic algorithm with elitism.
    The whole population is replaced at each step.
    """

    def __init__(
        self,
        popsize: int = 50,
        random_state: tp.Optional[base.SeededRandom] = None,
        config: tp.Optional["ConfGA"] = None,
    ) -> None:
        super().__init__(popsize=popsize, random_state=random_state, config=config)
        self._operators: tp.Optional[tp.Tuple[tp.Any, ...]] = None
        self._operators_key: tp.Tuple[tp.Any, ...] = ()

    def _build_operators(self) -> tp.Tuple[operators.Selection, operators.Crossover, operators.Mutation]:
        conf = self._config
        return (
            operators.Selection(self.random_state, method=conf.selection),
            operators.Crossover(self.random_state, method=conf.crossover, eta=conf.sbx_eta, alpha=conf.blend_alpha),
            operators.Mutation(self.random_state, method=conf.mutation),
        )

    def _get_operators(self) -> tp.Tuple[operators.Selection, operators.Crossover, operators.Mutation]:
        conf = self._config
        key = (conf.selection, conf.crossover, conf.mutation, conf.sbx_eta, conf.blend_alpha)
        if self._operators is None or key != self._operators_key:
            # operators are rebuilt when the configuration was edited
            try:
                self._operators = self._build_operators()
            except errors.InvalidArgumentError as e:
                if self._operators is None:
                    raise
                logger.warning("Keeping the current operators of %s: %s", self.name, e)
            self._operators_key = key
        return self._operators  # type: ignore

    def _internal_init(self, landscape: tp.LandscapeLike) -> None:
        self._operators = None
        self._get_operators()
        super()._internal_init(landscape)

    def _internal_step(self, landscape: tp.LandscapeLike) -> None:
        conf = self._config
        selection, crossover, mutation = self._get_operators()
        bound = landscape.bounds
        rng = self.random_state
        parents = self.particles
        elite = self.best
        # the elite is evaluated again, in case the landscape changed
        offspring = [base.Candidate(elite.x, elite.z, landscape.f(elite.x, elite.z), 0)]
        while len(offspring) < len(parents):
            parent1 = selection.apply(parents)
            parent2 = selection.apply(parents)
            child: tp.Point = (parent1.x, parent1.z)
            if rng.next() < conf.crossover_rate:
                child = crossover.apply(parent1, parent2)
            if rng.next() < conf.mutation_rate:
                child = mutation.apply(child, bound)
            x, z = base.clamp(child[0], bound), base.clamp(child[1], bound)
            offspring.append(base.Candidate(x, z, landscape.f(x, z), len(offspring)))
        self.particles = offspring
        for candidate in offspring:
            self._update_best(candidate)


class ConfGA(base.ConfiguredAlgorithm):
    """Genetic algorithm with pluggable operators: the best point found so far survives
    unconditionally, then the population is filled with children obtained by selection,
    crossover (with probability crossover_rate), mutation (with probability mutation_rate)
    and clamping to the search square.

    Parameters
    ----------
    selection: str
        "tournament", "roulette", "rank" or "random"
    crossover: str
        "blend", "single_point", "uniform" or "sbx"
    mutation: str
        "uniform", "gaussian", "polynomial" or "swap"
    crossover_rate: float
        probability of recombining the two parents (otherwise the child copies the first parent)
    mutation_rate: float
        probability of mutating a child
    sbx_eta: float
        distribution index of the simulated binary crossover
    blend_alpha: float
        extension of the blend crossover interval (0 gives a convex combination of the parents)
    """

    # pylint: disable=unused-argument
    def __init__(
        self,
        selection: str = "tournament",
        crossover: str = "blend",
        mutation: str = "uniform",
        crossover_rate: float = 0.8,
        mutation_rate: float = 0.1,
        sbx_eta: float = 20.0,
        blend_alpha: float = 0.0,
    ) -> None:
        super().__init__(_GeneticAlgorithm, locals())
        self.selection = selection
        self.crossover = crossover
        self.mutation = mutation
        self.crossover_rate = crossover_rate
        self.mutation_rate = mutation_rate
        self.sbx_eta = sbx_eta
        self.blend_alpha = blend_alpha
        self.check()

    def check(self) -> None:
        operators.check_method("selection", self.selection, operators.Selection.methods)
        operators.check_method("crossover", self.crossover, operators.Crossover.methods)
        operators.check_method("mutation", self.mutation, operators.Mutation.methods)
        base.check_range("crossover_rate", self.crossover_rate, 0.0, 1.0)
        base.check_range("mutation_rate", self.mutation_rate, 0.0, 1.0)
        base.check_range("sbx_eta", self.sbx_eta, 0.0, float("inf"), include_low=False)
        base.check_range("blend_alpha", self.blend_alpha, 0.0, float("inf"))


GeneticAlgorithm = ConfGA().set_name("ga", register=True)
