"""Display helpers for reports. Stateless; none of these affect a calculation."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float]


def singular_plural(n: Number, singular: str, plural: str, include_number: bool = True) -> str:
    word = singular if n == 1 else plural
    return f"{n} {word}" if include_number else word


def comma_string(n: int) -> str:
    return f"{n:,}"


def decimal_places(x, places: int) -> float:
    # round half up, as people expect when reading a remainder aloud
    q = Decimal(1).scaleb(-places)
    return float(Decimal(str(float(x))).quantize(q, rounding=ROUND_HALF_UP))


def comparison_value(x: Number) -> int:
    if x < 0:
        return -1
    if x > 0:
        return 1
    return 0
