"""
Planar geometry utilities for load scheduling.
"""

import math
from typing import Tuple

Point = Tuple[float, float]

# Every driver starts here and must be able to get back here.
ORIGIN: Point = (0.0, 0.0)


def euclidean(origin: Point, destination: Point) -> float:
    """
    Straight-line distance between two (x, y) points.

    Drive time is treated as numerically equal to distance (unit speed), so
    this is also the travel time between the points. NaN and infinite
    coordinates are not special-cased and propagate into the result.
    """
    x1, y1 = origin
    x2, y2 = destination
    return math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)


def is_finite_point(point: Point) -> bool:
    x, y = point
    return math.isfinite(x) and math.isfinite(y)
