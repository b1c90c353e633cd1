"""
Run configuration for the scheduler.
"""

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple

from vrp.geo import ORIGIN, is_finite_point

# A 12 hour shift, in the same units as the input coordinates (unit speed).
DEFAULT_MAX_DRIVE_TIME = 12 * 60.0

FIRST_FEASIBLE = "first_feasible"
NEAREST_ONLY = "nearest_only"
POLICIES = (FIRST_FEASIBLE, NEAREST_ONLY)

UNROUTABLE_RAISE = "raise"
UNROUTABLE_SKIP = "skip"
UNROUTABLE_MODES = (UNROUTABLE_RAISE, UNROUTABLE_SKIP)


@dataclass
class SchedulerConfig:
    """
    Parameters of one scheduling run.

    - policy: "first_feasible" takes the nearest load that still fits the shift,
      "nearest_only" ends the schedule as soon as the nearest load does not fit.
    - on_unroutable: "raise" rejects loads that cannot fit even as a driver's
      only job, "skip" leaves them unassigned.
    """
    origin: Tuple[float, float] = ORIGIN
    max_drive_time: float = DEFAULT_MAX_DRIVE_TIME
    policy: str = FIRST_FEASIBLE
    on_unroutable: str = UNROUTABLE_RAISE

    def __post_init__(self):
        self.origin = (float(self.origin[0]), float(self.origin[1]))
        self.max_drive_time = float(self.max_drive_time)

    def validate(self) -> None:
        if not is_finite_point(self.origin):
            raise ValueError("origin must have finite coordinates.")
        if not (math.isfinite(self.max_drive_time) and self.max_drive_time > 0):
            raise ValueError("max_drive_time must be a finite number > 0.")
        if self.policy not in POLICIES:
            raise ValueError(f"policy must be one of {POLICIES}. Got '{self.policy}'.")
        if self.on_unroutable not in UNROUTABLE_MODES:
            raise ValueError(f"on_unroutable must be one of {UNROUTABLE_MODES}. Got '{self.on_unroutable}'.")

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "SchedulerConfig":
        """
        Build a config from a plain dict (e.g. a JSON body). Unknown keys and
        None values are ignored so defaults apply.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in values.items() if k in known and v is not None}
        try:
            return cls(**kwargs)
        except (TypeError, IndexError) as e:
            raise ValueError(f"invalid scheduler config: {e}") from e
