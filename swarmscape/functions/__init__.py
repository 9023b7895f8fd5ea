# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .landscapes import Landscape as Landscape
from .landscapes import LandscapeParams as LandscapeParams
from .landscapes import registry as registry
