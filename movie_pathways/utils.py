"""Small helpers shared by the service layer and the planner."""

from __future__ import annotations

import math
import uuid
from typing import Any


def new_id(prefix: str = "id") -> str:
    """Return a fresh identifier such as ``mov_1b9d6bcd...``."""
    return f"{prefix}_{uuid.uuid4().hex}"


def clamp_int(value: Any, minimum: int, maximum: int) -> int:
    """Truncate ``value`` to an integer within ``[minimum, maximum]``.

    Anything that is not a finite number (None, NaN, garbage strings)
    collapses to ``minimum``.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return minimum
    if not math.isfinite(number):
        return minimum
    return max(minimum, min(maximum, math.trunc(number)))
