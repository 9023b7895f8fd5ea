# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import typing as tp
import pytest
import numpy as np
from swarmscape.common import errors
from swarmscape.common import testing
from swarmscape.common.randomness import SeededRandom
from . import operators
from .base import Candidate


class ScriptedRandom(SeededRandom):
    """Replays a fixed sequence of draws"""

    def __init__(self, *values: float) -> None:
        super().__init__()
        self._values = list(values)

    def next(self) -> float:
        return self._values.pop(0)


def _population(*vals: float) -> tp.List[Candidate]:
    return [Candidate(float(k), -float(k), val, k) for k, val in enumerate(vals)]


@testing.parametrized(
    tournament=("tournament", (0.0, 0.5, 0.9), (5, 1, 3, 4), 2),
    tournament_first=("tournament", (0.3, 0.0, 0.0), (5, 1, 3, 4), 1),
    roulette_first=("roulette", (0.5,), (0, 1, 3), 0),
    roulette_second=("roulette", (0.6,), (0, 1, 3), 1),
    roulette_negative=("roulette", (0.9,), (-2, 0), 1),
    rank_best=("rank", (0.1,), (5, 1, 3), 1),
    rank_worst=("rank", (0.99,), (5, 1, 3), 0),
    random=("random", (0.7,), (5, 1, 3), 2),
)
def test_selection(method: str, draws: tp.Tuple[float, ...], vals: tp.Tuple[float, ...], expected: int) -> None:
    selection = operators.Selection(ScriptedRandom(*draws), method=method)
    population = _population(*vals)
    chosen = selection.apply(population)
    np.testing.assert_equal(chosen.uid, expected)


def test_tournament_prefers_good_candidates() -> None:
    population = _population(*range(20))
    selection = operators.Selection(SeededRandom(4))
    picks = [selection.apply(population).val for _ in range(400)]
    assert np.mean(picks) < 9.5  # mean of a uniform pick


_P1 = Candidate(0.0, 4.0, 0.0)
_P2 = Candidate(4.0, 0.0, 0.0)


@testing.parametrized(
    blend=("blend", 0.0, (0.25,), (3.0, 1.0)),
    blend_extended=("blend", 0.5, (0.25,), (4.0, 0.0)),
    single_point_x_first=("single_point", 0.0, (0.3,), (0.0, 0.0)),
    single_point_x_second=("single_point", 0.0, (0.7,), (4.0, 4.0)),
    uniform=("uniform", 0.0, (0.3, 0.7), (0.0, 0.0)),
    uniform_swapped=("uniform", 0.0, (0.7, 0.3), (4.0, 4.0)),
    sbx_median=("sbx", 0.0, (0.5, 0.5), (0.0, 4.0)),
)
def test_crossover(method: str, alpha: float, draws: tp.Tuple[float, ...], expected: tp.Tuple[float, float]) -> None:
    crossover = operators.Crossover(ScriptedRandom(*draws), method=method, alpha=alpha)
    np.testing.assert_array_almost_equal(crossover.apply(_P1, _P2), expected)


def test_sbx_spread() -> None:
    crossover = operators.Crossover(SeededRandom(5), method="sbx", eta=20.0)
    children = np.array([crossover.apply(_P1, _P2) for _ in range(500)])
    # large eta keeps the children close to the parents
    near_parent = np.minimum(np.abs(children[:, 0] - 0.0), np.abs(children[:, 0] - 4.0))
    assert np.median(near_parent) < 0.5
    same = Candidate(1.0, 1.0, 0.0)
    np.testing.assert_array_almost_equal(crossover.apply(same, same), (1.0, 1.0))


@testing.parametrized(
    uniform=("uniform", (0.75, 0.25), (1.25, 0.75)),
    gaussian=("gaussian", (0.5, 0.5, 0.5, 0.5), (1 - 0.5 * math.sqrt(2 * math.log(2)),) * 2),
    polynomial_neutral=("polynomial", (0.5, 0.5), (1.0, 1.0)),
    polynomial_extreme=("polynomial", (0.0, 0.5), (-9.0, 1.0)),
    swap=("swap", (), (1.0, 1.0)),
)
def test_mutation(method: str, draws: tp.Tuple[float, ...], expected: tp.Tuple[float, float]) -> None:
    mutation = operators.Mutation(ScriptedRandom(*draws), method=method)
    np.testing.assert_array_almost_equal(mutation.apply((1.0, 1.0), 5.0), expected)


def test_swap_mutation() -> None:
    mutation = operators.Mutation(SeededRandom(), method="swap")
    np.testing.assert_equal(mutation.apply((1.0, 2.0), 5.0), (2.0, 1.0))


@pytest.mark.parametrize("operator", [operators.Selection, operators.Crossover, operators.Mutation])  # type: ignore
def test_unknown_method(operator: tp.Any) -> None:
    with pytest.raises(errors.InvalidArgumentError):
        operator(SeededRandom(), method="unknown")
