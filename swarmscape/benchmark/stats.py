# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
from pathlib import Path
import numpy as np
import pandas as pd
import swarmscape.common.typing as tp
from swarmscape.common import tools
from swarmscape.optimization.base import Candidate


logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "RunID",
    "Algorithm",
    "Landscape",
    "PopSize",
    "Epsilon",
    "Seed",
    "AlgoParams",
    "Generation",
    "BestFitness",
    "AvgFitness",
    "StdDev",
    "SuccessRate",
]


class GenerationStats(tp.NamedTuple):
    """Summary of the population after one generation"""

    generation: int
    best: float
    average: float
    std_dev: float
    success_rate: float  # percentage of candidates within epsilon of the optimum value
    dispersion: float  # mean distance to the centroid of the population


def compute_stats(
    generation: int, particles: tp.Sequence[Candidate], best_val: float, global_min_val: float, epsilon: float
) -> GenerationStats:
    """Computes the statistics of a population

    Parameters
    ----------
    generation: int
        generation index
    particles: sequence of Candidate
        the population (must not be empty)
    best_val: float
        best value recorded by the algorithm
    global_min_val: float
        fitness at the global minimum of the landscape
    epsilon: float
        success threshold on the distance to the global minimum value
    """
    assert particles, "Cannot compute statistics of an empty population"
    vals = np.array([p.val for p in particles], dtype=float)
    coords = np.array([[p.x, p.z] for p in particles], dtype=float)
    average = float(np.mean(vals))
    variance = float(np.mean(vals ** 2)) - average ** 2
    success = float(np.mean(np.abs(vals - global_min_val) < epsilon)) * 100
    centroid = np.mean(coords, axis=0)
    dispersion = float(np.mean(np.sqrt(np.sum((coords - centroid) ** 2, axis=1))))
    return GenerationStats(
        generation=generation,
        best=best_val,
        average=average,
        std_dev=float(np.sqrt(max(0.0, variance))),
        success_rate=success,
        dispersion=dispersion,
    )


class RunRecord(tp.NamedTuple):
    run_id: int
    metadata: tp.Dict[str, tp.Any]
    history: tp.List[GenerationStats]


class StatsRecorder:
    """Records the statistics of successive runs, for comparison and CSV export.

    Runs are numbered from 1. When a new run starts without keeping the previous
    ones, the archive and the numbering are cleared.
    """

    def __init__(self) -> None:
        self.run_count = 0
        self.best_fitness = float("inf")  # best value seen in the active run
        self.metadata: tp.Dict[str, tp.Any] = {}
        self.history: tp.List[GenerationStats] = []
        self.archive: tp.List[RunRecord] = []

    def reset(self, keep_previous: bool = False, metadata: tp.Optional[tp.Dict[str, tp.Any]] = None) -> None:
        """Starts a new run, archiving the active one if it has data"""
        if self.history:
            self.archive.append(RunRecord(self.run_count, self.metadata, list(self.history)))
        self.metadata = {} if metadata is None else dict(metadata)
        if not keep_previous:
            self.run_count = 0
            self.archive = []
        self.run_count += 1
        self.history = []
        self.best_fitness = float("inf")

    def update(
        self,
        generation: int,
        particles: tp.Sequence[Candidate],
        best_val: float,
        global_min_val: float = 0.0,
        epsilon: float = 0.1,
    ) -> GenerationStats:
        stats = compute_stats(generation, particles, best_val, global_min_val, epsilon)
        self.best_fitness = min(self.best_fitness, best_val)
        self.history.append(stats)
        return stats

    def runs(self) -> tp.List[RunRecord]:
        """Archived runs followed by the active run (if it has data)"""
        runs = list(self.archive)
        if self.history:
            runs.append(RunRecord(self.run_count, self.metadata, self.history))
        return runs

    def to_dataframe(self) -> pd.DataFrame:
        rows: tp.List[tp.Dict[str, tp.Any]] = []
        for run in self.runs():
            meta = run.metadata
            params = tools.format_params(meta.get("algo_params") or {})
            for stats in run.history:
                rows.append(
                    {
                        "RunID": run.run_id,
                        "Algorithm": meta.get("algorithm", "unknown"),
                        "Landscape": meta.get("landscape", "unknown"),
                        "PopSize": meta.get("popsize", 0),
                        "Epsilon": meta.get("epsilon", 0),
                        "Seed": meta.get("seed", 0),
                        "AlgoParams": params,
                        "Generation": stats.generation,
                        "BestFitness": stats.best,
                        "AvgFitness": stats.average,
                        "StdDev": stats.std_dev,
                        "SuccessRate": stats.success_rate,
                    }
                )
        return pd.DataFrame(rows, columns=CSV_COLUMNS)

    def export_csv(self, path: tp.PathLike) -> bool:
        """Writes all runs to a CSV file

        Returns
        -------
        bool
            False if there was no data (and nothing was written)
        """
        df = self.to_dataframe()
        if df.empty:
            logger.warning("No data to export")
            return False
        df.to_csv(Path(path), index=False)
        return True
