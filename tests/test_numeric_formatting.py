from __future__ import annotations

from fractions import Fraction
import logging

import pytest

from subcalc.formatting import comma_string, comparison_value, decimal_places, singular_plural
from subcalc.parse.numeric import clamp_count, coerce_natural, parse_numeric


def test_parse_numeric_accepts_strings_and_numbers() -> None:
    assert parse_numeric(12) == 12.0
    assert parse_numeric(" 7.5 ") == 7.5
    assert parse_numeric("1,200") == 1200.0
    assert parse_numeric("-3") == -3.0


@pytest.mark.parametrize("value", [None, "", "   ", "abc", "nan", "inf", object(), [1]])
def test_parse_numeric_rejects(value) -> None:
    with pytest.raises(ValueError):
        parse_numeric(value, field="count")


def test_coerce_natural() -> None:
    assert coerce_natural(5) == 5
    assert coerce_natural(-5) == 5
    assert coerce_natural(2.9) == 2
    assert coerce_natural(-2.5) == 3
    assert coerce_natural("42") == 42
    assert coerce_natural("abc") is None
    assert coerce_natural(None) is None


def test_clamp_count(caplog) -> None:
    assert clamp_count("12.9") == 12
    assert clamp_count(0) == 0
    with caplog.at_level(logging.WARNING, logger="subcalc.parse.numeric"):
        assert clamp_count(-4, field="allowed") == 0
    assert "allowed" in caplog.text


def test_singular_plural() -> None:
    assert singular_plural(1, "delegate", "delegates") == "1 delegate"
    assert singular_plural(0, "delegate", "delegates") == "0 delegates"
    assert singular_plural(3, "person was", "people were", False) == "people were"


def test_comma_string() -> None:
    assert comma_string(1234567) == "1,234,567"
    assert comma_string(12) == "12"


def test_decimal_places_rounds_half_up() -> None:
    assert decimal_places(Fraction(1, 3), 3) == 0.333
    assert decimal_places(Fraction(2, 3), 3) == 0.667
    assert decimal_places(0.0005, 3) == 0.001
    assert decimal_places(2.5, 0) == 3.0


def test_comparison_value() -> None:
    assert comparison_value(-7) == -1
    assert comparison_value(0) == 0
    assert comparison_value(0.1) == 1
