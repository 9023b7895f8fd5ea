# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .common import typing as typing
from .common.randomness import SeededRandom as SeededRandom
from .functions import landscapes as landscapes
from .optimization import algorithmlib as algorithms
from .optimization import callbacks as callbacks


__all__ = ["algorithms", "landscapes", "callbacks", "SeededRandom", "typing"]


__version__ = "0.1.0"
