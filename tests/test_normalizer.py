import pytest

from LatexMath.Normalizer import normalize


@pytest.mark.parametrize("raw, expected", [
    (r"\frac{1}{2}", "frac{1}{2}"),
    (r"\dfrac{3}{4}", "frac{3}{4}"),
    (r"\tfrac{2}{5}", "frac{2}{5}"),
    (r"\cfrac{1}{2}", "frac{1}{2}"),
    (r"\frac12", "frac{1}{2}"),
    (r"\frac{\frac{1}{2}}{\frac{1}{4}}", "frac{frac{1}{2}}{frac{1}{4}}"),
    (r"\sqrt{4}", "sqrt{4}"),
    (r"\sqrt[3]{8}", "nthroot[3]{8}"),
    (r"\sqrt{2+\sqrt{3}}", "sqrt{2+sqrt{3}}"),
    (r"\log_{2}{8}", "logBase[2]{8}"),
    (r"\log_2 8", "logBase[2] 8"),
    (r"|-5|", "abs(-5)"),
    (r"||-2|-|3||", "abs(abs(-2)-abs(3))"),
    (r"2 \times 3", "2 * 3"),
    (r"2\cdot3", "2*3"),
    (r"20 \div 4", "20 / 4"),
    (r"2\pi", "2 pi"),
    (r"\sin\pi", "sin pi"),
    (r"\ln{e}", "ln{e}"),
    (r"\mathrm{e}^{2}", "e^{2}"),
])
def test_rewrites_macros_to_canonical_form(raw, expected):
    assert normalize(raw) == expected


def test_strips_math_wrappers_and_display_macros():
    assert normalize(r"$\displaystyle\frac{1}{2}$") == "frac{1}{2}"
    assert normalize(r"$$\frac{1}{2}$$") == "frac{1}{2}"
    assert normalize(r"\[1+1\]") == "1+1"


def test_drops_sizing_spacing_and_text():
    assert normalize(r"\left(1+2\right)") == "(1+2)"
    assert normalize(r"\left|-3\right|") == "abs(-3)"
    assert normalize(r"5\,\text{cm}") == "5"
    assert normalize(r"\lvert -4 \rvert") == "abs( -4 )"


def test_exponent_between_function_and_argument_moves_after_the_call():
    assert normalize(r"\sin^{2}{x}") == "(sin{x})^{2}"
    assert normalize(r"\cos^2\pi") == "(cos{pi})^{2}"
    assert normalize(r"\sin^{2}{\frac{\pi}{6}}") == "(sin{frac{pi}{6}})^{2}"


def test_negative_exponent_on_function_name_is_left_for_the_parser():
    assert normalize(r"\sin^{-1}{x}") == "sin^{-1}{x}"


def test_unbalanced_macros_pass_through():
    assert normalize(r"\frac{1}{2") == r"\frac{1}{2"
    assert normalize(r"|x") == "|x"


def test_unicode_glyphs():
    assert normalize("2×3÷π−1") == "2*3/pi-1"


def test_total_on_empty_and_odd_input():
    assert normalize("") == ""
    assert normalize("   ") == ""
    assert normalize("\\") == "\\"
    assert normalize("{{{") == "{{{"


@pytest.mark.parametrize("raw, expected", [
    (r"|2\times|-3||", "abs(2*abs(-3))"),
    (r"|2\cdot|-3||", "abs(2*abs(-3))"),
    (r"|6\div|-3||", "abs(6/abs(-3))"),
    (r"|\sin|-1||", "abs(sinabs(-1))"),
    (r"|1-|2||", "abs(1-abs(2))"),
    (r"(|-1|)|2|", "(abs(-1))abs(2)"),
])
def test_nested_bars_after_operators_and_function_names(raw, expected):
    assert normalize(raw) == expected


def test_bars_only_pair_inside_one_bracket_group():
    assert normalize("(|1)|") == "(|1)|"


def test_canonical_word_as_undelimited_argument():
    assert normalize(r"\sqrt\frac{1}{4}") == "sqrt{frac{1}{4}}"
    assert normalize(r"\sqrt[3]\frac{8}{27}") == "nthroot[3]{frac{8}{27}}"


def test_arccot_is_a_function_macro():
    assert normalize(r"\arccot{1}") == "arccot{1}"
    assert normalize(r"\arccot^{2}{1}") == "(arccot{1})^{2}"


def test_unclosed_group_stops_the_pass():
    assert normalize(r"\frac{1}{2+\frac{3}{4}") == r"\frac{1}{2+\frac{3}{4}"
