# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Two dimensional benchmark landscapes.

All landscapes are evaluated on (x, z) coordinates and are to be minimized.
Shape parameters are read at each evaluation, so editing :code:`landscape.params`
affects the next call without building a new landscape.
"""

import math
import numpy as np
import swarmscape.common.typing as tp
from swarmscape.common import errors
from swarmscape.common.decorators import Registry


registry: Registry[tp.Type["Landscape"]] = Registry()

_SCHWEFEL_OPTIMUM = 420.968746
_SCHWEFEL_PEAK = 418.9828872724339  # x * sin(sqrt(|x|)) at the optimum


class LandscapeParams:
    """Mutable record of the shape parameters of a landscape.
    Only the fields declared at construction can be updated.

    Example
    -------
    params = LandscapeParams(a=20.0, b=0.2)
    params.a = 30.0  # next evaluations use a=30
    """

    def __init__(self, **values: float) -> None:
        object.__setattr__(self, "_values", dict(values))

    def __getattr__(self, name: str) -> float:
        values = object.__getattribute__(self, "_values")
        if name not in values:
            raise AttributeError(f"No parameter named {name!r}")
        return values[name]

    def __setattr__(self, name: str, value: float) -> None:
        if name not in self._values:
            raise errors.InvalidArgumentError(
                f"Unknown parameter {name!r}, available: {sorted(self._values)}"
            )
        self._values[name] = value

    def update(self, **values: float) -> None:
        for name, value in values.items():
            setattr(self, name, value)

    def as_dict(self) -> tp.Dict[str, float]:
        return dict(self._values)

    def __repr__(self) -> str:
        params = ", ".join(f"{x}={y!r}" for x, y in self._values.items())
        return f"{self.__class__.__name__}({params})"


class Landscape:
    """Base class for fitness landscapes

    Subclasses define :code:`name`, the fixed half-width of the search square
    through :code:`bounds`, and implement :code:`f`.
    """

    name = "landscape"
    description = ""
    log_scaled = False  # whether height normalization should use a log scale

    def __init__(self, **params: float) -> None:
        self.params = LandscapeParams(**params)

    def f(self, x: float, z: float) -> float:
        raise NotImplementedError

    def __call__(self, x: float, z: float) -> float:
        return self.f(x, z)

    @property
    def bounds(self) -> float:
        """Half-width of the search square [-bounds, bounds]^2"""
        return 5.0

    @property
    def target(self) -> tp.Point:
        """Location of the global minimum"""
        return (0.0, 0.0)

    @property
    def global_min_val(self) -> float:
        return 0.0

    def sample_grid(self, resolution: int = 128) -> tp.Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Evaluates the landscape on a regular grid covering the search square

        Returns
        -------
        np.ndarray
            x coordinates (resolution,)
        np.ndarray
            z coordinates (resolution,)
        np.ndarray
            heights (resolution, resolution), indexed as [z index, x index]
        """
        if resolution < 2:
            raise errors.InvalidArgumentError(f"Grid resolution must be at least 2 (got {resolution})")
        coords = np.linspace(-self.bounds, self.bounds, resolution)
        heights = np.array([[self.f(float(x), float(z)) for x in coords] for z in coords])
        return coords, coords.copy(), heights

    def normalized_grid(self, resolution: int = 128) -> np.ndarray:
        """Heights of :code:`sample_grid` mapped to [0, 1] (low is good)"""
        heights = self.sample_grid(resolution)[2]
        low, high = float(np.min(heights)), float(np.max(heights))
        if self.log_scaled:
            floor = 1e-4
            heights = np.log(np.maximum(heights, floor))
            low, high = math.log(max(low, floor)), math.log(max(high, floor))
        if high == low:
            return np.zeros_like(heights)
        return np.clip((heights - low) / (high - low), 0, 1)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.params})"


@registry.register
class Ackley(Landscape):
    """Nearly flat outer region with many shallow cups and a deep central funnel.

    Parameters
    ----------
    a: float
        amplitude of the exponential funnel
    b: float
        decay rate of the funnel
    c: float
        frequency of the cosine ripples
    """

    name = "ackley"
    description = (
        "Many smooth cups trap solutions. Long jumps are needed to escape "
        "local cups towards the deep center."
    )

    def __init__(self, a: float = 20.0, b: float = 0.2, c: float = 2 * math.pi) -> None:
        super().__init__(a=a, b=b, c=c)

    def f(self, x: float, z: float) -> float:
        p = self.params
        term1 = -p.a * math.exp(-p.b * math.sqrt(0.5 * (x ** 2 + z ** 2)))
        term2 = -math.exp(0.5 * (math.cos(p.c * x) + math.cos(p.c * z)))
        return term1 + term2 + p.a + math.e


@registry.register
class Rosenbrock(Landscape):
    """Long curved valley with its minimum at (a, a^2)"""

    name = "rosenbrock"
    description = (
        "A long, curved valley with steep walls. Finding the valley floor is easy, "
        "finding the minimum inside it is hard."
    )
    log_scaled = True

    def __init__(self, a: float = 1.0, b: float = 100.0) -> None:
        super().__init__(a=a, b=b)

    def f(self, x: float, z: float) -> float:
        p = self.params
        return (p.a - x) ** 2 + p.b * (z - x ** 2) ** 2

    @property
    def bounds(self) -> float:
        return 2.0

    @property
    def target(self) -> tp.Point:
        return (self.params.a, self.params.a ** 2)


@registry.register
class Rastrigin(Landscape):
    """Highly multimodal: a regular lattice of local minima around the origin"""

    name = "rastrigin"
    description = (
        "A field of needles with hundreds of local minima. Hill climbers get stuck, "
        "significant exploration is required."
    )

    def __init__(self, A: float = 10.0) -> None:  # pylint: disable=invalid-name
        super().__init__(A=A)

    def f(self, x: float, z: float) -> float:
        A = self.params.A  # pylint: disable=invalid-name
        return 2 * A + (x ** 2 - A * math.cos(2 * math.pi * x)) + (z ** 2 - A * math.cos(2 * math.pi * z))

    @property
    def bounds(self) -> float:
        return 5.12


@registry.register
class Sphere(Landscape):
    """The most classical continuous optimization testbed.

    If you do not solve that one then you have a bug."""

    name = "sphere"
    description = "A single smooth bowl. Every algorithm should converge to the center."

    def f(self, x: float, z: float) -> float:
        return x ** 2 + z ** 2


@registry.register
class Schwefel(Landscape):
    """Deceptive landscape, with its global minimum close to a corner of the domain.
    The canonical function is shifted by :code:`2 * scale` so that values stay
    close to positive.
    """

    name = "schwefel"
    description = (
        "A deceptive landscape. The global minimum lies far at the edge, while other "
        "deep valleys exist far away from it."
    )
    log_scaled = True

    def __init__(self, scale: float = 418.9829) -> None:
        super().__init__(scale=scale)

    def f(self, x: float, z: float) -> float:
        term1 = x * math.sin(math.sqrt(abs(x)))
        term2 = z * math.sin(math.sqrt(abs(z)))
        return self.params.scale * 2 - (term1 + term2)

    @property
    def bounds(self) -> float:
        return 500.0

    @property
    def target(self) -> tp.Point:
        return (_SCHWEFEL_OPTIMUM, _SCHWEFEL_OPTIMUM)

    @property
    def global_min_val(self) -> float:
        return 2 * (self.params.scale - _SCHWEFEL_PEAK)
