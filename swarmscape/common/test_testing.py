# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import pytest
import numpy as np
from . import testing


@testing.parametrized(
    equal=([2, 3, 1], ""),
    missing=((1, 2), ["  - missing element(s): {3}."]),
    additional=((1, 4, 3, 2), ["  - additional element(s): {4}."]),
    both=((1, 2, 4), ["  - additional element(s): {4}.", "  - missing element(s): {3}."]),
)
def test_assert_set_equal(estimate: tp.Iterable[int], message: str) -> None:
    reference = {1, 2, 3}
    try:
        testing.assert_set_equal(estimate, reference)
    except AssertionError as error:
        if not message:
            raise AssertionError("An error has been raised while it should not.")
        np.testing.assert_equal(error.args[0].split("\n")[1:], message)
    else:
        if message:
            raise AssertionError("An error should have been raised.")


def test_printed_assert_equal() -> None:
    testing.printed_assert_equal(0, 0)
    np.testing.assert_raises(AssertionError, testing.printed_assert_equal, 0, 1)


class _Point:
    def __init__(self, x: float, z: float, val: float) -> None:
        self.x = x
        self.z = z
        self.val = val


class _Population:
    def __init__(self, *particles: _Point) -> None:
        self.particles = list(particles)


class _Bowl:
    bounds = 1.0

    def f(self, x: float, z: float) -> float:
        return x ** 2 + z ** 2


def test_assert_population_consistent() -> None:
    landscape = _Bowl()
    testing.assert_population_consistent(_Population(_Point(0.5, 0.5, 0.5)), landscape)
    with pytest.raises(AssertionError):
        testing.assert_population_consistent(_Population(_Point(0.5, 0.5, 0.0)), landscape)
    outside = _Population(_Point(2.0, 0.0, 4.0))
    with pytest.raises(AssertionError):
        testing.assert_population_consistent(outside, landscape)
    testing.assert_population_consistent(outside, landscape, inside_bounds=False)
