# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import os
import logging
import numpy as np
from swarmscape.common.randomness import SeededRandom
from swarmscape.functions import landscapes
from . import algorithmlib
from . import callbacks


def test_generation_logger(caplog) -> None:  # type: ignore
    logging.basicConfig(level=os.environ.get("LOGLEVEL", "INFO"))
    logger = logging.getLogger(__name__)
    landscape = landscapes.Sphere()
    algo = algorithmlib.PSO(popsize=10, random_state=SeededRandom(1))
    algo.register_callback(
        "step",
        callbacks.GenerationLogger(logger=logger, log_level=logging.INFO, log_interval_generations=2),
    )
    algo.init(landscape)
    with caplog.at_level(logging.INFO):
        for _ in range(5):
            algo.step(landscape)
    messages = [r.getMessage() for r in caplog.records if r.name == __name__]
    np.testing.assert_equal(len(messages), 2)  # after generations 2 and 4
    assert messages[0].startswith("After 2 generations of pso, best is ")
    assert messages[1].startswith("After 4 generations of pso, best is ")


def test_generation_printer(capsys) -> None:  # type: ignore
    landscape = landscapes.Sphere()
    algo = algorithmlib.RandomSearch(popsize=3, random_state=SeededRandom(1))
    algo.register_callback("step", callbacks.GenerationPrinter(print_interval_generations=1))
    algo.init(landscape)
    algo.step(landscape)
    algo.step(landscape)
    lines = capsys.readouterr().out.strip().split("\n")
    np.testing.assert_equal(len(lines), 2)
    assert lines[1].startswith(f"After 2 generations, best is {algo.best.val}")
