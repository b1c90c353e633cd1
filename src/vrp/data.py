"""
Load model and reproducible instance generation.
"""

import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from vrp.geo import ORIGIN, Point, euclidean

# Any load inside this box fits a default 720 shift on its own (at most 141.5 + 283 + 141.5).
DEFAULT_COORDINATE_RANGE = (-100.0, 100.0)


@dataclass
class Load:
    """
    A single pickup-to-dropoff delivery job.

    The distances are derived from the points once, at construction, and are
    not constructor arguments. `delivered` is the only field the scheduler
    changes.
    """

    load_number: int
    pickup: Point
    dropoff: Point
    origin: Point = ORIGIN
    distance: float = field(init=False)
    distance_to_origin: float = field(init=False)
    distance_from_origin: float = field(init=False)
    delivered: bool = field(default=False, init=False)

    def __post_init__(self):
        self.pickup = (float(self.pickup[0]), float(self.pickup[1]))
        self.dropoff = (float(self.dropoff[0]), float(self.dropoff[1]))
        self.origin = (float(self.origin[0]), float(self.origin[1]))
        self.distance = euclidean(self.pickup, self.dropoff)
        self.distance_to_origin = euclidean(self.dropoff, self.origin)
        self.distance_from_origin = euclidean(self.origin, self.pickup)

    def reset(self) -> None:
        self.delivered = False

    def to_dict(self) -> dict:
        return {
            "load_number": self.load_number,
            "pickup": list(self.pickup),
            "dropoff": list(self.dropoff),
            "distance": self.distance,
            "distance_to_origin": self.distance_to_origin,
        }


def make_load(load_number: int, pickup: Point, dropoff: Point, origin: Point = ORIGIN) -> Load:
    return Load(load_number=load_number, pickup=pickup, dropoff=dropoff, origin=origin)


def copy_loads(loads: Iterable[Load], origin: Optional[Point] = None) -> List[Load]:
    """
    Fresh, undelivered copies of `loads`, so a run never touches the caller's objects.
    Passing `origin` recomputes the return distances against that point.
    """
    return [
        make_load(ld.load_number, ld.pickup, ld.dropoff, ld.origin if origin is None else origin)
        for ld in loads
    ]


def generate_loads(
    seed: int,
    n: int = 20,
    coordinate_range: Tuple[float, float] = DEFAULT_COORDINATE_RANGE,
    origin: Point = ORIGIN,
) -> List[Load]:
    """
    Generate n loads numbered 1..n with pickups and dropoffs drawn uniformly
    inside the square `coordinate_range` x `coordinate_range`.
    The same seed always yields the same loads.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    lo, hi = coordinate_range
    if lo > hi:
        raise ValueError("coordinate_range must satisfy min <= max")
    rng = random.Random(seed)

    def sample_point() -> Point:
        return (round(rng.uniform(lo, hi), 6), round(rng.uniform(lo, hi), 6))

    loads: List[Load] = []
    for i in range(n):
        pickup = sample_point()
        dropoff = sample_point()
        loads.append(make_load(i + 1, pickup, dropoff, origin))
    return loads
