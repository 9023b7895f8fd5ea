# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import numpy as np
import swarmscape.common.typing as tp
from swarmscape.common import errors
from swarmscape.optimization.base import Candidate


class VisitHeatmap:
    """Cumulative density of the points visited by a population.

    Each visit adds a 3x3 splat to a square grid covering the search square,
    so that trails stay smooth at high resolution.

    Parameters
    ----------
    grid_size: int
        number of cells per side
    saturation: float
        visit weight at which a cell is considered fully hot
    """

    def __init__(self, grid_size: int = 256, saturation: float = 50.0) -> None:
        if grid_size < 1:
            raise errors.InvalidArgumentError(f"grid_size must be positive (got {grid_size})")
        if not saturation > 0:
            raise errors.InvalidArgumentError(f"saturation must be positive (got {saturation})")
        self.grid_size = grid_size
        self.saturation = saturation
        self.grid = np.zeros((grid_size, grid_size), dtype=np.float32)  # indexed as [z, x]
        self.max_visits = 1.0
        splat = np.array([2 - abs(k) for k in (-1, 0, 1)], dtype=np.float32)
        self._splat = np.outer(splat, splat) * 2.5

    def reset(self) -> None:
        self.grid.fill(0)
        self.max_visits = 1.0

    def cell(self, x: float, z: float, bounds: float) -> tp.Optional[tp.Tuple[int, int]]:
        """Grid cell (x index, z index) of a point, or None if it falls outside.
        The last cell includes the upper edge of the search square.
        """
        if not (-bounds <= x <= bounds and -bounds <= z <= bounds):
            return None
        scale = self.grid_size / (2 * bounds)
        last = self.grid_size - 1
        return min(math.floor((x + bounds) * scale), last), min(math.floor((z + bounds) * scale), last)

    def update(self, particles: tp.Iterable[Candidate], bounds: float) -> None:
        """Adds one visit per candidate"""
        size = self.grid_size
        for candidate in particles:
            if not (math.isfinite(candidate.x) and math.isfinite(candidate.z)):
                continue
            cell = self.cell(candidate.x, candidate.z, bounds)
            if cell is None:
                continue
            gx, gz = cell
            # splat clipped at the grid edges
            x0, x1 = max(gx - 1, 0), min(gx + 2, size)
            z0, z1 = max(gz - 1, 0), min(gz + 2, size)
            self.grid[z0:z1, x0:x1] += self._splat[z0 - gz + 1 : z1 - gz + 1, x0 - gx + 1 : x1 - gx + 1]
            self.max_visits = max(self.max_visits, float(self.grid[z0:z1, x0:x1].max()))

    def intensity(self) -> np.ndarray:
        """Visit intensity in [0, 1] for each cell, on a log scale saturating
        at :code:`saturation` visits
        """
        return np.minimum(1.0, np.log1p(self.grid) / math.log(self.saturation + 1))

    def colors(self) -> np.ndarray:
        """RGBA color map of the intensity (uint8, shape (grid_size, grid_size, 4)),
        from blue (rare) through cyan, green and yellow to red (frequent).
        Unvisited cells are transparent.
        """
        level = self.intensity()
        rgba = np.zeros(level.shape + (4,), dtype=np.float64)
        low = level < 0.2
        rgba[low, 1] = level[low] / 0.2 * 255
        rgba[low, 2] = 255
        cyan = (level >= 0.2) & (level < 0.5)
        rgba[cyan, 1] = 255
        rgba[cyan, 2] = 255 * (1 - (level[cyan] - 0.2) / 0.3)
        green = (level >= 0.5) & (level < 0.8)
        rgba[green, 0] = 255 * (level[green] - 0.5) / 0.3
        rgba[green, 1] = 255
        hot = level >= 0.8
        rgba[hot, 0] = 255
        rgba[hot, 1] = 255 * (1 - (level[hot] - 0.8) / 0.2)
        rgba[..., 3] = np.minimum(180, np.floor(level * 255 + 50))
        rgba[level <= 0] = 0
        return np.floor(rgba).astype(np.uint8)
