from __future__ import annotations

from typing import Any, Optional

import logging
import math

logger = logging.getLogger(__name__)


def parse_numeric(value: Any, *, field: str = "") -> float:
    """
    Parse numeric inputs that may be numbers or numeric strings.

    Supported:
        - int/float (bool counts as int)
        - numeric strings, with surrounding whitespace ("12", " 7.5 ", "1e3")
        - thousands separators ("1,200")

    Rejected (ValueError):
        - None, empty strings
        - NaN / infinity
        - anything else
    """
    if value is None:
        raise ValueError(f"Missing numeric value for {field}" if field else "Missing numeric value")

    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        s = value.strip().replace(",", "")
        if s == "":
            raise ValueError(f"Empty numeric string for {field}" if field else "Empty numeric string")
        try:
            result = float(s)
        except ValueError as e:
            raise ValueError(f"Invalid numeric value for {field}: {value!r}") from e
    else:
        raise ValueError(f"Unsupported numeric type for {field}: {type(value)}")

    if math.isnan(result) or math.isinf(result):
        raise ValueError(f"Non-finite numeric value for {field}: {value!r}")
    return result


def coerce_natural(value: Any) -> Optional[int]:
    """Return abs(floor(value)) as an int, or None when value is not numeric."""
    if isinstance(value, int):
        return abs(int(value))
    try:
        x = parse_numeric(value)
    except ValueError:
        return None
    return abs(math.floor(x))


def clamp_count(value: Any, *, field: str = "count") -> int:
    """Member counts are whole and non-negative; negative input is clamped to 0."""
    n = int(math.floor(parse_numeric(value, field=field)))
    if n < 0:
        logger.warning("Negative %s %d clamped to 0", field, n)
        return 0
    return n
