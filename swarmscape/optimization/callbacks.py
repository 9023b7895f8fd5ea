# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import time
import logging
import swarmscape.common.typing as tp
from . import base

global_logger = logging.getLogger(__name__)


class GenerationPrinter:
    """Printer to register as "step" callback in an algorithm, for printing
    the best point regularly.

    Parameters
    ----------
    print_interval_generations: int
        max number of generations before performing another print
    print_interval_seconds: float
        max number of seconds before performing another print
    """

    def __init__(self, print_interval_generations: int = 1, print_interval_seconds: float = 60.0) -> None:
        assert print_interval_generations > 0
        assert print_interval_seconds > 0
        self._print_interval_generations = int(print_interval_generations)
        self._print_interval_seconds = print_interval_seconds
        self._next_generation = self._print_interval_generations
        self._next_time = time.time() + print_interval_seconds

    def __call__(self, algorithm: base.Algorithm, *args: tp.Any, **kwargs: tp.Any) -> None:
        if time.time() >= self._next_time or algorithm.num_generations >= self._next_generation:
            self._next_time = time.time() + self._print_interval_seconds
            self._next_generation = algorithm.num_generations + self._print_interval_generations
            best = algorithm.best
            print(f"After {algorithm.num_generations} generations, best is {best.val} at ({best.x}, {best.z})")


class GenerationLogger:
    """Logger to register as "step" callback in an algorithm, for logging
    the best point regularly.

    Parameters
    ----------
    logger:
        given logger that callback will use to log
    log_level:
        log level that logger will write to
    log_interval_generations: int
        max number of generations before performing another log
    log_interval_seconds:
        max number of seconds before performing another log
    """

    def __init__(
        self,
        *,
        logger: logging.Logger = global_logger,
        log_level: int = logging.INFO,
        log_interval_generations: int = 1,
        log_interval_seconds: float = 60.0,
    ) -> None:
        assert log_interval_generations > 0
        assert log_interval_seconds > 0
        self._logger = logger
        self._log_level = log_level
        self._log_interval_generations = int(log_interval_generations)
        self._log_interval_seconds = log_interval_seconds
        self._next_generation = self._log_interval_generations
        self._next_time = time.time() + log_interval_seconds

    def __call__(self, algorithm: base.Algorithm, *args: tp.Any, **kwargs: tp.Any) -> None:
        if time.time() >= self._next_time or algorithm.num_generations >= self._next_generation:
            self._next_time = time.time() + self._log_interval_seconds
            self._next_generation = algorithm.num_generations + self._log_interval_generations
            best = algorithm.best
            self._logger.log(
                self._log_level,
                "After %s generations of %s, best is %s at (%s, %s)",
                algorithm.num_generations,
                algorithm.name,
                best.val,
                best.x,
                best.z,
            )
