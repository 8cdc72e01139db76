import pytest

from LatexMath import MathEngine
from LatexMath import error as E
from LatexMath.MathEngine import parse


def value(text):
    return MathEngine.evaluate(parse(text))


def test_precedence_and_associativity():
    tree = parse("1+2*3")
    assert isinstance(tree, MathEngine.BinOp) and tree.operator == "+"
    assert isinstance(tree.right, MathEngine.BinOp) and tree.right.operator == "*"
    assert value("10-4-3") == 3
    assert value("2^3^2") == 512
    assert value("-2^2") == -4
    assert value("2^-1") == 0.5


def test_power_applies_to_the_whole_function_call():
    tree = parse("sin{pi}^{2}")
    assert isinstance(tree, MathEngine.Power)
    assert isinstance(tree.base, MathEngine.FunctionCall)
    assert tree.base.name == "sin"


def test_fraction_is_its_own_node():
    tree = parse("frac{1}{2}")
    assert isinstance(tree, MathEngine.Fraction)
    assert value("frac{frac{1}{2}}{frac{1}{4}}") == 2


def test_implicit_multiplication():
    assert isinstance(parse("2pi"), MathEngine.BinOp)
    assert value("(2)(3)") == 6
    assert value("{2}{3}") == 6
    assert value("2 sqrt{4}") == 4
    assert value("3 abs(-2)") == 6


def test_adjacent_numbers_are_rejected():
    with pytest.raises(E.SyntaxError) as info:
        parse("2 3")
    assert info.value.code == "3009"


def test_two_argument_functions():
    assert value("nthroot[3]{27}") == 3
    assert value("logBase[2]{8}") == 3
    assert value("log(8, 2)") == 3
    assert value("log(100)") == 2


def test_factorial():
    assert value("5!") == 120
    assert value("3!^2") == 36


@pytest.mark.parametrize("text, code", [
    ("1+", "3001"),
    ("*2", "3001"),
    ("(1+2", "3002"),
    ("(1+2]", "3002"),
    ("1+2)", "3008"),
    ("foo", "3006"),
    ("|", "3007"),
    ("frac{1}", "3010"),
    ("\\frac{1}{2", "3010"),
    ("1.2.3", "3012"),
    ("", "1000"),
])
def test_syntax_errors(text, code):
    with pytest.raises(E.SyntaxError) as info:
        parse(text)
    assert info.value.code == code
    assert info.value.kind == E.ErrorKind.SYNTAX_ERROR


def test_syntax_error_reports_position():
    with pytest.raises(E.SyntaxError) as info:
        parse("1 + foo")
    assert info.value.position == 4
    assert "position 4" in info.value.message


@pytest.mark.parametrize("text", ["\\int x", "\\sum i", "\\pm 1", "\\infty", "sin^{-1}{x}"])
def test_unsupported_constructs(text):
    with pytest.raises(E.UnsupportedConstruct):
        parse(text)


def test_translator_splits_known_names():
    tokens = MathEngine.translator("2sinpi")
    assert [token.text for token in tokens] == ["2", "sin", "pi"]
    assert [token.position for token in tokens] == [0, 1, 4]


@pytest.mark.parametrize("text", ["sin^{2}", "sin^2", "ln^{3}"])
def test_exponent_without_argument_is_a_missing_operand(text):
    with pytest.raises(E.SyntaxError) as info:
        parse(text)
    assert info.value.code == "3001"


@pytest.mark.parametrize("text", ["sin^{-1}{x}", "sin^-1 x", "cos^{-2}{1}"])
def test_negative_exponent_on_function_name_is_unsupported(text):
    with pytest.raises(E.UnsupportedConstruct) as info:
        parse(text)
    assert info.value.code == "1002"
