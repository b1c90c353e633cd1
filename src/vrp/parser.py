"""
Reader for the plain-text load format.

The first line is a header and is skipped. Every other non-blank line has the form

    <loadNumber> (<x1>,<y1>) (<x2>,<y2>)

for example ``1 (-9.100071078494038,-48.89301103772511) (-116.78442279683607,76.80147820713637)``.
"""

import math
import re
from pathlib import Path
from typing import List, Optional, Union

from vrp.data import Load, make_load
from vrp.geo import Point

_LINE_RE = re.compile(r"\s*(\S+)\s+(\([^()]*\))\s*(\([^()]*\))\s*")


class ParseError(ValueError):
    """A line of load input could not be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}: {line!r}"
        super().__init__(message)


def point_from_string(text: str) -> Point:
    """
    Parse a point written as "(x,y)".
    """
    text = text.strip()
    if not (text.startswith("(") and text.endswith(")")):
        raise ParseError(f"point must look like '(x,y)', got {text!r}")
    parts = text[1:-1].split(",")
    if len(parts) != 2:
        raise ParseError(f"point must have exactly two coordinates, got {text!r}")
    try:
        x, y = float(parts[0]), float(parts[1])
    except ValueError as e:
        raise ParseError(f"non-numeric coordinate in {text!r}") from e
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ParseError(f"coordinates must be finite, got {text!r}")
    return (x, y)


def load_from_line(line: str) -> Load:
    # Whitespace is tolerated anywhere inside a point: "( 1 ,  2 )".
    match = _LINE_RE.fullmatch(line)
    if match is None:
        raise ParseError(f"expected '<loadNumber> (x1,y1) (x2,y2)', got {line.strip()!r}")
    number_str, pickup_str, dropoff_str = match.groups()
    try:
        load_number = int(number_str)
    except ValueError as e:
        raise ParseError(f"load number must be an integer, got {number_str!r}") from e
    if load_number <= 0:
        raise ParseError(f"load number must be positive, got {load_number}")
    return make_load(load_number, point_from_string(pickup_str), point_from_string(dropoff_str))


def parse_loads(text: str) -> List[Load]:
    """
    Parse the full contents of a load file. Raises ParseError with the 1-based
    line number of the first bad line.
    """
    loads: List[Load] = []
    lines = text.splitlines()
    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        try:
            loads.append(load_from_line(line))
        except ParseError as e:
            raise ParseError(str(e.args[0]), line_number=line_number, line=line) from e
    return loads


def read_loads(path: Union[str, Path]) -> List[Load]:
    return parse_loads(Path(path).read_text(encoding="utf-8"))
