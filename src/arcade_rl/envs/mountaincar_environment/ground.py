# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Track curves for the MountainCar environment.

A ground maps the scalar car position to the local slope of the track and to
the factor converting the car speed into a change of position along the
curve parameter.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Sequence, Tuple

import numpy as np

Point = Tuple[float, float]

# Window width of the game the default track was drawn for.
WIDTH = 1620.0

ROCKY_ROAD_CONTROL_POINTS = (
    (
        (-WIDTH / 2.0, -83.0),
        (-77.0, -645.0),
        (311.0, -539.0),
        (515.0, -326.0),
    ),
    (
        (515.0, -326.0),
        (703.0, -130.0),
        (714.0, -76.0),
        (WIDTH / 2.0, -133.0),
    ),
)
ROCKY_ROAD_SCALE = 1400.0
ROCKY_ROAD_GOAL = 0.9


class Ground(ABC):
    """Immutable parametric track."""

    @abstractmethod
    def slope(self, x: float) -> float:
        """Tangent ratio dy/dx of the track at position ``x``."""

    @abstractmethod
    def derivative_factor(self, x: float) -> float:
        """Factor converting speed into a change of the position parameter."""


class FlatGround(Ground):
    """Horizontal track parameterized by arc length."""

    def slope(self, x: float) -> float:
        return 0.0

    def derivative_factor(self, x: float) -> float:
        return 1.0


class CubicBezierGround(Ground):
    """
    Piecewise cubic Bezier track.

    Segment ``k`` covers the parameter range ``[k, k + 1]``. Positions before
    the first or after the last segment extrapolate that segment's
    polynomial.

    Args:
        segments: One sequence of four control points per segment.
        scale: Numerator of the derivative factor ``scale / |velocity|``.
    """

    def __init__(self, segments: Sequence[Sequence[Point]], scale: float = 1.0):
        control = np.asarray(segments, dtype=np.float64)
        if control.ndim != 3 or control.shape[1:] != (4, 2) or len(control) == 0:
            raise ValueError(
                f"Expected segments of shape (n, 4, 2), got {control.shape}"
            )
        self._control = control
        self._control.setflags(write=False)
        self.scale = float(scale)

    @property
    def segment_count(self) -> int:
        return len(self._control)

    def _locate(self, x: float) -> Tuple[np.ndarray, float]:
        index = min(max(math.floor(x), 0), self.segment_count - 1) if math.isfinite(x) else 0
        return self._control[index], x - index

    def position(self, x: float) -> np.ndarray:
        """Point of the curve at parameter ``x``."""
        (p0, p1, p2, p3), t = self._locate(x)
        u = 1.0 - t
        return u**3 * p0 + 3.0 * u**2 * t * p1 + 3.0 * u * t**2 * p2 + t**3 * p3

    def velocity(self, x: float) -> np.ndarray:
        """Derivative of the curve with respect to its parameter at ``x``."""
        (p0, p1, p2, p3), t = self._locate(x)
        u = 1.0 - t
        return 3.0 * (u**2 * (p1 - p0) + 2.0 * u * t * (p2 - p1) + t**2 * (p3 - p2))

    def slope(self, x: float) -> float:
        vx, vy = self.velocity(x)
        return float(vy / vx)

    def derivative_factor(self, x: float) -> float:
        return float(self.scale / np.hypot(*self.velocity(x)))


class RockyRoad(CubicBezierGround):
    """The two-hill track of the MountainCar game."""

    def __init__(self):
        super().__init__(ROCKY_ROAD_CONTROL_POINTS, scale=ROCKY_ROAD_SCALE)
