"""Hours parsing utilities."""

import math
import re
from typing import Optional

# Leading decimal number, the way spreadsheet exports write hours ("7.5", "2", ".25h")
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_hours(hours_str: Optional[str]) -> float:
    """Parse an hours string into a non-negative float.

    Handles:
    - "7.5"
    - " 2 "
    - "1.25h" (trailing text after the number is ignored)

    Anything unparseable, negative or non-finite yields 0.0; this function
    never raises.

    Args:
        hours_str: Hours string (or None)

    Returns:
        Hours as float, always >= 0
    """
    if hours_str is None:
        return 0.0

    match = _LEADING_NUMBER.match(str(hours_str).strip())
    if match is None:
        return 0.0

    hours = float(match.group(0))
    if not math.isfinite(hours) or hours < 0:
        return 0.0
    return hours
