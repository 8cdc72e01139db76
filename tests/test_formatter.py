import math

import pytest

from LatexMath.MathEngine import describe_value, format_value


@pytest.mark.parametrize("number, text", [
    (42.0, "42"),
    (-17.0, "-17"),
    (0.5, "0.5"),
    (-2.5, "-2.5"),
    (1 / 3, "0.3333333333"),
    (2 / 3, "0.6666666667"),
    (0.1 + 0.2, "0.3"),
    (123456.789, "123456.789"),
    (1e20, "100000000000000000000"),
    (1.5e-8, "1.5E-8"),
    (2.00000000001, "2"),
    (-1e-12, "-1E-12"),
    (2.5e-11, "2.5E-11"),
    (0.0, "0"),
    (-0.0, "0"),
])
def test_format_value(number, text):
    assert format_value(number) == text


def test_format_value_significant_digits():
    assert format_value(math.pi, significant_digits=4) == "3.142"
    assert format_value(math.pi, significant_digits=1) == "3"
    assert format_value(2 / 3, significant_digits=3) == "0.667"


@pytest.mark.parametrize("number, text", [
    (1 / 3, "1/3"),
    (-5 / 6, "-5/6"),
    (0.75, "3/4"),
    (math.pi, "π"),
    (math.pi / 2, "π/2"),
    (-2 * math.pi, "-2π"),
    (3 * math.pi / 4, "3π/4"),
])
def test_describe_value(number, text):
    assert describe_value(number) == text


def test_describe_value_without_exact_form():
    assert describe_value(2.0) is None
    assert describe_value(math.sqrt(2)) is None
    assert describe_value(float("inf")) is None
