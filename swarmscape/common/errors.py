# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.


# base classes


class SwarmscapeError(Exception):
    """Base class for error raised by Swarmscape"""


class SwarmscapeWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class SwarmscapeRuntimeError(RuntimeError, SwarmscapeError):
    """Runtime error raised by Swarmscape"""


class SwarmscapeTypeError(TypeError, SwarmscapeError):
    """Type error raised by Swarmscape"""


class SwarmscapeValueError(ValueError, SwarmscapeError):
    """Value error raised by Swarmscape"""


class InvalidArgumentError(SwarmscapeValueError):
    """A population size, bound or hyper-parameter is outside of its admissible range.
    Raised at construction or at init time, before any candidate is created.
    """


class UninitializedAlgorithmError(SwarmscapeRuntimeError):
    """step was called on an algorithm which was never initialized"""


# warnings


class SwarmscapeRuntimeWarning(RuntimeWarning, SwarmscapeWarning):
    """Runtime warning raise by swarmscape"""


class InefficientSettingsWarning(SwarmscapeRuntimeWarning):
    """Optimization settings are not optimal for the algorithm"""
