"""
Greedy nearest-neighbour scheduler assigning loads to driver shifts.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from vrp.config import (
    DEFAULT_MAX_DRIVE_TIME,
    FIRST_FEASIBLE,
    NEAREST_ONLY,
    POLICIES,
    UNROUTABLE_SKIP,
    SchedulerConfig,
)
from vrp.data import Load, copy_loads
from vrp.geo import ORIGIN, Point, euclidean

logger = logging.getLogger(__name__)


class UnroutableLoadError(ValueError):
    """Loads that exceed the shift length even when they are a driver's only job."""

    def __init__(self, load_numbers: List[int], max_drive_time: float):
        self.load_numbers = list(load_numbers)
        self.max_drive_time = max_drive_time
        super().__init__(
            f"{len(self.load_numbers)} load(s) cannot be delivered within max drive time "
            f"{max_drive_time:g}: {self.load_numbers}"
        )


def can_pickup(current_location: Point, current_drive_time: float, load: Load, max_drive_time: float) -> bool:
    """
    True when the driver can travel to the pickup, deliver the load and still
    get back to the origin from the dropoff within `max_drive_time`.
    The return leg is always reserved even if the driver goes on to another load.
    """
    leg = euclidean(current_location, load.pickup) + load.distance + load.distance_to_origin
    return current_drive_time + leg <= max_drive_time


def nearest_candidates(location: Point, loads: Iterable[Load]) -> List[Load]:
    """
    Undelivered loads ordered by pickup distance from `location`; equal
    distances are ordered by load number.
    """
    pending = [ld for ld in loads if not ld.delivered]
    return sorted(pending, key=lambda ld: (euclidean(location, ld.pickup), ld.load_number))


def _next_load(
    location: Point,
    drive_time: float,
    loads: List[Load],
    max_drive_time: float,
    policy: str,
) -> Optional[Load]:
    for load in nearest_candidates(location, loads):
        if can_pickup(location, drive_time, load, max_drive_time):
            return load
        if policy == NEAREST_ONLY:
            return None
    return None


def validate_loads(loads: Iterable[Load], origin: Point = ORIGIN, max_drive_time: float = DEFAULT_MAX_DRIVE_TIME) -> List[Load]:
    """
    Return the loads no driver could ever take: those failing the feasibility
    check from the origin with an empty shift. Non-finite coordinates land here too.
    """
    return [ld for ld in loads if not can_pickup(origin, 0.0, ld, max_drive_time)]


def find_duplicate_numbers(loads: Iterable[Load]) -> List[int]:
    seen = set()
    duplicates = set()
    for ld in loads:
        if ld.load_number in seen:
            duplicates.add(ld.load_number)
        seen.add(ld.load_number)
    return sorted(duplicates)


def build_schedules(
    loads: List[Load],
    origin: Point = ORIGIN,
    max_drive_time: float = DEFAULT_MAX_DRIVE_TIME,
    policy: str = FIRST_FEASIBLE,
) -> List[List[int]]:
    """
    Partition `loads` into driver schedules, each an ordered list of load numbers.

    Each driver starts at `origin` and repeatedly takes the nearest undelivered
    load (see `policy`) until none fits; then the next driver starts. Loads are
    marked delivered in place; pass copies to keep the originals untouched.
    Every load must have been built for `origin` (ValueError otherwise).
    Raises UnroutableLoadError before scheduling if any load can never fit.
    """
    if policy not in POLICIES:
        raise ValueError(f"policy must be one of {POLICIES}. Got '{policy}'.")
    origin = (float(origin[0]), float(origin[1]))

    # The reserved return leg is measured to the origin each load was built with.
    foreign = sorted(ld.load_number for ld in loads if ld.origin != origin)
    if foreign:
        raise ValueError(
            f"loads {foreign} were built for a different origin than {origin}; "
            "rebuild them with copy_loads(loads, origin=...)"
        )

    pending = [ld for ld in loads if not ld.delivered]
    unroutable = validate_loads(pending, origin, max_drive_time)
    if unroutable:
        raise UnroutableLoadError([ld.load_number for ld in unroutable], max_drive_time)

    schedules: List[List[int]] = []
    total = remaining = len(pending)
    while remaining:
        location = origin
        drive_time = 0.0
        schedule: List[int] = []
        while True:
            load = _next_load(location, drive_time, pending, max_drive_time, policy)
            if load is None:
                break
            load.delivered = True
            schedule.append(load.load_number)
            drive_time += euclidean(location, load.pickup) + load.distance
            location = load.dropoff
            remaining -= 1
            logger.debug("driver %d takes load %d (drive time %.3f)", len(schedules) + 1, load.load_number, drive_time)
        if not schedule:
            # Validation guarantees every driver can take at least one load.
            raise RuntimeError(f"no load could be assigned to a new driver; {remaining} load(s) left")
        logger.debug(
            "driver %d done: %d load(s), drive time %.3f + return %.3f",
            len(schedules) + 1,
            len(schedule),
            drive_time,
            euclidean(location, origin),
        )
        schedules.append(schedule)
        # Drop delivered loads so later scans only see what is left.
        pending = [ld for ld in pending if not ld.delivered]

    logger.info("scheduled %d load(s) across %d driver(s) using %s", total, len(schedules), policy)
    return schedules


def schedule_drive_times(schedule: List[int], loads_by_number: Dict[int, Load], origin: Point = ORIGIN) -> Tuple[float, float]:
    """
    Drive time of a schedule (pickup travel plus delivery distances) and the
    travel from the last dropoff back to the origin.
    """
    location = origin
    drive_time = 0.0
    for number in schedule:
        load = loads_by_number[number]
        drive_time += euclidean(location, load.pickup) + load.distance
        location = load.dropoff
    return drive_time, euclidean(location, origin)


def build_plan(config: SchedulerConfig, loads: List[Load]) -> Dict[str, Any]:
    """
    Schedule copies of `loads` under `config` and summarize each driver's route.
    """
    config.validate()
    duplicates = find_duplicate_numbers(loads)
    if duplicates:
        raise ValueError(f"load numbers must be unique, duplicated: {duplicates}")

    working = copy_loads(loads, origin=config.origin)
    unassigned: List[int] = []
    if config.on_unroutable == UNROUTABLE_SKIP:
        unroutable = validate_loads(working, config.origin, config.max_drive_time)
        for load in unroutable:
            logger.warning(
                "skipping load %d: needs %.3f, more than max drive time %g",
                load.load_number,
                load.distance_from_origin + load.distance + load.distance_to_origin,
                config.max_drive_time,
            )
        unassigned = [ld.load_number for ld in unroutable]
        skip = set(unassigned)
        working = [ld for ld in working if ld.load_number not in skip]

    schedules = build_schedules(working, config.origin, config.max_drive_time, config.policy)

    loads_by_number = {ld.load_number: ld for ld in working}
    routes: List[Dict[str, Any]] = []
    for driver_id, schedule in enumerate(schedules, start=1):
        drive_time, return_travel = schedule_drive_times(schedule, loads_by_number, config.origin)
        routes.append(
            {
                "driver_id": driver_id,
                "loads": list(schedule),
                "drive_time": float(drive_time),
                "return_travel": float(return_travel),
                "total_time": float(drive_time + return_travel),
            }
        )

    return {
        "status": "success",
        "policy": config.policy,
        "max_drive_time": config.max_drive_time,
        "schedules": schedules,
        "routes": routes,
        "unassigned": unassigned,
    }
