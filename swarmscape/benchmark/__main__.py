# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
import argparse
from pathlib import Path
import swarmscape.common.typing as tp
from swarmscape.common import errors
from swarmscape.common.randomness import DEFAULT_SEED
from swarmscape.functions import landscapes
from swarmscape.optimization import algorithmlib
from . import core


def parse_params(pairs: tp.Optional[tp.List[str]]) -> tp.Dict[str, tp.Any]:
    """Converts "key=value" strings into a dict, with float values when possible"""
    params: tp.Dict[str, tp.Any] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise errors.InvalidArgumentError(f'Parameters must be provided as "key=value" (got {pair!r})')
        try:
            params[key] = float(value)
        except ValueError:
            params[key] = value
    return params


def configure(
    simulation: core.Simulation,
    params: tp.Optional[tp.Dict[str, tp.Any]] = None,
    landscape_params: tp.Optional[tp.Dict[str, float]] = None,
) -> None:
    """Updates the live parameters of the algorithm and landscape of the simulation"""
    if params:
        config = simulation.algorithm.config
        if config is None:
            raise errors.InvalidArgumentError(f"{simulation.algorithm_id} has no parameter (got {sorted(params)})")
        available = config.config()
        for key, value in params.items():
            if key not in available:
                raise errors.InvalidArgumentError(f'Unknown parameter "{key}", available: {sorted(available)}')
            setattr(config, key, value)
        config.check()
    if landscape_params:
        simulation.landscape.params.update(**landscape_params)


# pylint: disable=too-many-arguments
def launch(
    algorithm: str,
    landscape: str,
    generations: int = 100,
    popsize: int = 50,
    seed: int = DEFAULT_SEED,
    epsilon: float = 0.1,
    repetitions: int = 1,
    params: tp.Optional[tp.Dict[str, tp.Any]] = None,
    landscape_params: tp.Optional[tp.Dict[str, float]] = None,
    output: tp.Optional[tp.PathLike] = None,
) -> core.Simulation:
    """Runs an algorithm on a landscape for a given number of generations.
    This repeats the run several times and increments the seed, all runs
    being kept in the statistics history.
    """
    simulation = core.Simulation(
        algorithm, landscape, popsize=popsize, seed=seed, epsilon=epsilon, keep_history=True, track_heatmap=False
    )
    configure(simulation, params=params, landscape_params=landscape_params)
    for k in range(repetitions):
        simulation.seed = seed + k
        simulation.reset(keep_previous=k > 0)
        simulation.run(generations)
        best = simulation.algorithm.best
        print(f"Run {k + 1} / {repetitions} (seed {simulation.seed}): best {best.val} at ({best.x}, {best.z})")
    if output is not None:
        csvpath = Path(output)
        core.save_or_append_to_csv(simulation.stats.to_dataframe(), csvpath)
        print(f"Saved data to {csvpath}")
    return simulation


def get_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run an optimization algorithm on a 2D landscape.")
    parser.add_argument("algorithm", type=str, choices=sorted(algorithmlib.registry), help="identifier of the algorithm")
    parser.add_argument("landscape", type=str, choices=sorted(landscapes.registry), help="identifier of the landscape")
    parser.add_argument("--generations", type=int, default=100, help="Number of generations per run")
    parser.add_argument("--popsize", type=int, default=50, help="Number of candidates")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Seed of the first run")
    parser.add_argument("--epsilon", type=float, default=0.1, help="Success threshold on the fitness")
    parser.add_argument(
        "--repetitions",
        type=int,
        default=1,
        help="Number of runs to perform (seeds will be incremented)",
    )
    parser.add_argument(
        "--param", action="append", default=None, help="Algorithm parameter as key=value (can be repeated)"
    )
    parser.add_argument(
        "--landscape-param", action="append", default=None, help="Landscape parameter as key=value (can be repeated)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output path for the CSV file. Existing files are appended",
    )
    parser.add_argument("--verbose", action="store_true", help="Logs each run and the generation limit")
    return parser.parse_args()


if __name__ == "__main__":
    args = get_args()
    if args.verbose:
        logging.basicConfig(level=logging.INFO)
    launch(
        args.algorithm,
        args.landscape,
        generations=args.generations,
        popsize=args.popsize,
        seed=args.seed,
        epsilon=args.epsilon,
        repetitions=args.repetitions,
        params=parse_params(args.param),
        landscape_params=parse_params(args.landscape_param),
        output=args.output,
    )
