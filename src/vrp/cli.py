"""
Command line entry point: read a load file and print one schedule per line.
"""

import argparse
import logging
import sys
from typing import List, Optional

from vrp.config import DEFAULT_MAX_DRIVE_TIME, FIRST_FEASIBLE, POLICIES, UNROUTABLE_RAISE, UNROUTABLE_SKIP, SchedulerConfig
from vrp.parser import ParseError, read_loads
from vrp.report import format_loads, format_plan, format_schedules
from vrp.solver import UnroutableLoadError, build_plan

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vrp-schedule", description="Assign pickup/dropoff loads to driver shifts")
    parser.add_argument("path", help="Load file: a header line, then '<loadNumber> (x1,y1) (x2,y2)' per line")
    parser.add_argument("--max-drive-time", type=float, default=DEFAULT_MAX_DRIVE_TIME, help="Shift length per driver")
    parser.add_argument("--policy", choices=POLICIES, default=FIRST_FEASIBLE, help="Load selection policy")
    parser.add_argument("--skip-unroutable", action="store_true", help="Leave loads that never fit unassigned instead of failing")
    parser.add_argument("--summary", action="store_true", help="Print a per-driver summary to stderr")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    config = SchedulerConfig(
        max_drive_time=args.max_drive_time,
        policy=args.policy,
        on_unroutable=UNROUTABLE_SKIP if args.skip_unroutable else UNROUTABLE_RAISE,
    )
    try:
        loads = read_loads(args.path)
        logger.info("read %d load(s) from %s", len(loads), args.path)
        logger.debug("loads:\n%s", format_loads(loads))
        plan = build_plan(config, loads)
    except OSError as e:
        print(f"error: cannot read {args.path}: {e}", file=sys.stderr)
        return 1
    except (ParseError, UnroutableLoadError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if plan["schedules"]:
        print(format_schedules(plan["schedules"]))
    if args.summary:
        print(format_plan(plan), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
