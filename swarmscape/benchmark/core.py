# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
from pathlib import Path
import pandas as pd
import swarmscape.common.typing as tp
from swarmscape.common import errors
from swarmscape.common.randomness import SeededRandom, DEFAULT_SEED
from swarmscape.functions import landscapes
from swarmscape.optimization import base
from swarmscape.optimization import algorithmlib
from .stats import StatsRecorder, GenerationStats
from .heatmap import VisitHeatmap


logger = logging.getLogger(__name__)


def save_or_append_to_csv(df: pd.DataFrame, path: Path) -> None:
    """Saves a dataframe to a file in append mode
    """
    if path.exists():
        logger.info("Appending to existing file %s", path)
        predf = pd.read_csv(str(path))
        df = pd.concat([predf, df], sort=False)
    df.to_csv(path, index=False)


class Simulation:
    """Optimization loop running one algorithm on one landscape, with statistics
    and visit heatmap tracking.

    All algorithms share the same random source, which is re-seeded at each reset
    so that a run only depends on its settings.

    Parameters
    ----------
    algorithm: str
        identifier of the algorithm in the algorithm registry
    landscape: str
        identifier of the landscape in the landscape registry
    popsize: int
        number of candidates
    seed: int
        seed of the random source
    epsilon: float
        success threshold for the statistics
    max_generations: int
        number of generations after which stepping stops (0 for unlimited)
    keep_history: bool
        whether resets keep the previous runs in the statistics (comparison mode)
    track_heatmap: bool
        whether visits are accumulated in the heatmap
    """

    # pylint: disable=too-many-instance-attributes,too-many-arguments
    def __init__(
        self,
        algorithm: str = "cuckoo",
        landscape: str = "ackley",
        popsize: int = 50,
        seed: int = DEFAULT_SEED,
        epsilon: float = 0.1,
        max_generations: int = 0,
        keep_history: bool = False,
        track_heatmap: bool = True,
    ) -> None:
        if algorithm not in algorithmlib.registry:
            raise errors.InvalidArgumentError(f'Unknown algorithm "{algorithm}", available: {sorted(algorithmlib.registry)}')
        if landscape not in landscapes.registry:
            raise errors.InvalidArgumentError(f'Unknown landscape "{landscape}", available: {sorted(landscapes.registry)}')
        self.random_state = SeededRandom(seed)
        self.seed = seed
        self.popsize = popsize
        self.epsilon = epsilon
        self.max_generations = max_generations
        self.keep_history = keep_history
        self.track_heatmap = track_heatmap
        self.generation = 0
        self.stats = StatsRecorder()
        self.heatmap = VisitHeatmap()
        # algorithms and landscapes are kept across switches, with their live parameters
        self._algorithms: tp.Dict[str, base.Algorithm] = {}
        self._landscapes: tp.Dict[str, landscapes.Landscape] = {}
        self.algorithm_id = algorithm
        self.landscape_id = landscape
        self._adjust_popsize()
        self.reset(keep_previous=False)

    @property
    def algorithm(self) -> base.Algorithm:
        if self.algorithm_id not in self._algorithms:
            factory = algorithmlib.registry[self.algorithm_id]
            self._algorithms[self.algorithm_id] = factory(popsize=self.popsize, random_state=self.random_state)
        return self._algorithms[self.algorithm_id]

    @property
    def landscape(self) -> landscapes.Landscape:
        if self.landscape_id not in self._landscapes:
            self._landscapes[self.landscape_id] = landscapes.registry[self.landscape_id]()
        return self._landscapes[self.landscape_id]

    @property
    def finished(self) -> bool:
        return 0 < self.max_generations <= self.generation

    def metadata(self) -> tp.Dict[str, tp.Any]:
        """Settings of the active run"""
        config = self.algorithm.config
        return {
            "algorithm": self.algorithm_id,
            "landscape": self.landscape_id,
            "popsize": self.popsize,
            "epsilon": self.epsilon,
            "seed": self.seed,
            "algo_params": {} if config is None else config.config(),
            "landscape_params": self.landscape.params.as_dict(),
        }

    def reset(self, keep_previous: tp.Optional[bool] = None) -> None:
        """Re-seeds the random source and starts a new run

        Parameters
        ----------
        keep_previous: bool or None
            whether to keep previous runs in the statistics (defaults to keep_history)
        """
        keep = self.keep_history if keep_previous is None else keep_previous
        self.generation = 0
        self.random_state.set_seed(self.seed)
        self.random_state.reset()
        algorithm = self.algorithm
        algorithm.popsize = self.popsize
        algorithm.init(self.landscape)
        self.stats.reset(keep, self.metadata())
        self.heatmap.reset()
        logger.info(
            "New run %s: %s on %s (popsize=%s, seed=%s)",
            self.stats.run_count,
            self.algorithm_id,
            self.landscape_id,
            self.popsize,
            self.seed,
        )

    def step(self) -> tp.Optional[GenerationStats]:
        """Advances by one generation

        Returns
        -------
        GenerationStats or None
            statistics of the new generation, or None if the generation limit
            was already reached
        """
        if self.finished:
            return None
        algorithm = self.algorithm
        landscape = self.landscape
        algorithm.step(landscape)
        if self.track_heatmap:
            self.heatmap.update(algorithm.particles, landscape.bounds)
        self.generation += 1
        if self.finished:
            logger.info("Reached the maximum of %s generations", self.max_generations)
        return self.stats.update(
            self.generation, algorithm.particles, algorithm.best.val, landscape.global_min_val, self.epsilon
        )

    def run(self, num_generations: int) -> tp.List[GenerationStats]:
        """Performs up to num_generations steps (less if the generation limit is reached)"""
        history: tp.List[GenerationStats] = []
        for _ in range(num_generations):
            stats = self.step()
            if stats is None:
                break
            history.append(stats)
        return history

    def select_algorithm(self, identifier: str) -> bool:
        """Switches to another algorithm and resets (returns False if unknown)"""
        if identifier not in algorithmlib.registry:
            return False
        self.algorithm_id = identifier
        self._adjust_popsize()
        logger.info("Selected algorithm %s", identifier)
        self.reset()
        return True

    def select_landscape(self, identifier: str) -> bool:
        """Switches to another landscape and resets (returns False if unknown)"""
        if identifier not in landscapes.registry:
            return False
        self.landscape_id = identifier
        logger.info("Selected landscape %s", identifier)
        self.reset()
        return True

    def _adjust_popsize(self) -> None:
        if self.algorithm.population_based and self.popsize < base.MIN_POPULATION:
            logger.info("Raising population size from %s to %s for %s", self.popsize, base.MIN_POPULATION, self.algorithm_id)
            self.popsize = base.MIN_POPULATION
