"""
Reporting utilities for schedules and load previews.
"""

from typing import Any, Dict, List

from vrp.data import Load


def format_schedule_line(schedule: List[int]) -> str:
    return "[" + ",".join(str(n) for n in schedule) + "]"


def format_schedules(schedules: List[List[int]]) -> str:
    """
    One bracketed, comma-separated schedule per line, e.g. "[3,1,7]".
    """
    return "\n".join(format_schedule_line(s) for s in schedules)


def format_plan(plan: Dict[str, Any]) -> str:
    """
    Render a human-readable plan summary.
    """
    lines = []
    routes = plan.get("routes", [])
    lines.append(f"Policy: {plan.get('policy')}, max drive time {plan.get('max_drive_time', 0):.1f}, drivers {len(routes)}")
    for route in routes:
        lines.append(
            f"- Driver {route['driver_id']}: drive {route['drive_time']:.1f}, return {route['return_travel']:.1f}, total {route['total_time']:.1f}"
        )
        lines.append(f"  loads {format_schedule_line(route['loads'])}")
    if plan.get("unassigned"):
        lines.append(f"Unassigned: {plan['unassigned']}")
    return "\n".join(lines)


def format_loads(loads: List[Load], limit: int = 10) -> str:
    """
    Format a load table (preview limited to `limit` rows).
    """
    lines = []
    lines.append("Load\tPickup\tDropoff\tDistance\tReturn")
    for ld in loads[:limit]:
        lines.append(
            f"{ld.load_number}\t({ld.pickup[0]:.3f},{ld.pickup[1]:.3f})\t({ld.dropoff[0]:.3f},{ld.dropoff[1]:.3f})\t{ld.distance:.3f}\t{ld.distance_to_origin:.3f}"
        )
    if len(loads) > limit:
        lines.append(f"... ({len(loads) - limit} more)")
    return "\n".join(lines)
