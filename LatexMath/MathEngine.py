# MathEngine.py
"""""
Core engine for evaluating LaTeX answers.

Pipeline
--------
1) Normalizer: rewrites LaTeX macros into the canonical notation (Normalizer.py).
2) Tokenizer: converts the canonical string into a flat list of tokens.
3) Parser (AST): builds an Abstract Syntax Tree (recursive-descent, precedence aware).
4) Evaluator: walks the tree bottom-up to one finite float.
5) Formatter: renders a float for display.

parse_latex_to_number() runs the whole pipeline and is the only function that
never raises: every failure comes back as a Failure result.
"""""

import logging
import math
import re
from dataclasses import dataclass, field
from decimal import Context, ROUND_HALF_EVEN
from fractions import Fraction as _Ratio
from typing import Optional

from . import config_manager as config_manager
from . import Normalizer
from . import ScientificEngine
from . import error as E

log = logging.getLogger(__name__)

# Token kinds
NUMBER = "number"
NAME = "name"
OPERATOR = "operator"
OPEN = "open"
CLOSE = "close"
COMMA = "comma"
BAR = "bar"
COMMAND = "command"
UNKNOWN = "unknown"

Operations = ["+", "-", "*", "/", "^", "!"]
Brackets = {"(": ")", "{": "}", "[": "]"}

# Every identifier the parser understands, longest first for prefix splitting
Names = sorted(set(ScientificEngine.FUNCTIONS) | set(ScientificEngine.CONSTANTS) | {"frac", "abs"},
               key=len, reverse=True)

# Notation that needs symbolic computation and is refused outright
UNSUPPORTED_COMMANDS = ["\\int", "\\iint", "\\iiint", "\\oint", "\\sum", "\\prod", "\\lim",
                        "\\infty", "\\partial", "\\pm", "\\mp"]

# Macros the normalizer only leaves behind when their arguments are malformed
ARGUMENT_MACROS = ["\\frac", "\\dfrac", "\\tfrac", "\\cfrac", "\\sqrt", "\\log"]

NUMBER_RE = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
LETTERS_RE = re.compile(r"[A-Za-z]+")
COMMAND_RE = re.compile(r"\\(?:[A-Za-z]+|.)?", re.DOTALL)


# -----------------------------
# Numeric helpers
# -----------------------------

def checked(value, what):
    """Return value if finite; NaN and infinities become NumericOverflow."""
    if not math.isfinite(value):
        raise E.NumericOverflow(f"Number too big ({what} is not finite).", code="3026")
    return value


def divide(numerator, denominator):
    if denominator == 0:
        raise E.DivisionByZero("Division by zero", code="3003")
    return checked(numerator / denominator, "quotient")


# -----------------------------
# AST node types
# -----------------------------

class Number:
    """AST node for a numeric literal."""
    def __init__(self, value):
        self.value = float(value)

    def evaluate(self):
        return checked(self.value, "literal")

    def __repr__(self):
        return f"Number({self.value!r})"


class Constant:
    """Named constant (pi, e)."""
    def __init__(self, name):
        self.name = name

    def evaluate(self):
        return ScientificEngine.constant(self.name)

    def __repr__(self):
        return f"Constant({self.name!r})"


class UnaryMinus:
    def __init__(self, operand):
        self.operand = operand

    def evaluate(self):
        return -self.operand.evaluate()

    def __repr__(self):
        return f"UnaryMinus({self.operand})"


class Abs:
    def __init__(self, operand):
        self.operand = operand

    def evaluate(self):
        return abs(self.operand.evaluate())

    def __repr__(self):
        return f"Abs({self.operand})"


class BinOp:
    """AST node for a binary operation: left <operator> right."""
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    def evaluate(self):
        """Evaluate both subtrees, then apply the operator."""
        left_value = self.left.evaluate()
        right_value = self.right.evaluate()

        if self.operator == '+':
            return checked(left_value + right_value, "sum")
        elif self.operator == '-':
            return checked(left_value - right_value, "difference")
        elif self.operator == '*':
            return checked(left_value * right_value, "product")
        elif self.operator == '/':
            return divide(left_value, right_value)
        else:
            raise E.SyntaxError(f"Invalid Operator: {self.operator}", code="3000")

    def __repr__(self):
        return f"BinOp({self.operator!r}, left={self.left}, right={self.right})"


class Fraction:
    """\\frac{numerator}{denominator}; reduces exactly like division."""
    def __init__(self, numerator, denominator):
        self.numerator = numerator
        self.denominator = denominator

    def evaluate(self):
        return divide(self.numerator.evaluate(), self.denominator.evaluate())

    def __repr__(self):
        return f"Fraction({self.numerator}, {self.denominator})"


class Power:
    """base ^ exponent, right-associative."""
    def __init__(self, base, exponent):
        self.base = base
        self.exponent = exponent

    def evaluate(self):
        basis = self.base.evaluate()
        exponent = self.exponent.evaluate()

        if basis < 0 and not exponent.is_integer():
            # No complex results
            raise E.InvalidPower(f"Negative base {basis} with non-integer exponent {exponent}", code="3004")
        if basis == 0 and exponent < 0:
            raise E.DivisionByZero("Zero raised to a negative power", code="3005")
        try:
            ergebnis = math.pow(basis, exponent)
        except OverflowError:
            raise E.NumericOverflow("Number too big.", code="3026")
        return checked(ergebnis, "power")

    def __repr__(self):
        return f"Power({self.base}, {self.exponent})"


class Factorial:
    """Postfix n! for non-negative integers."""
    LIMIT = 170  # 171! exceeds the float range

    def __init__(self, operand):
        self.operand = operand

    def evaluate(self):
        value = self.operand.evaluate()
        if value < 0 or not value.is_integer():
            raise E.OutOfDomain(f"Factorial needs a non-negative integer, got {value}", code="2008")
        if value > self.LIMIT:
            raise E.NumericOverflow(f"Number too big ({value:g}!).", code="3026")
        return float(math.factorial(int(value)))

    def __repr__(self):
        return f"Factorial({self.operand})"


class FunctionCall:
    """Call of a ScientificEngine function with one or two arguments."""
    def __init__(self, name, arguments):
        self.name = name
        self.arguments = list(arguments)

    def evaluate(self):
        argument_values = [argument.evaluate() for argument in self.arguments]
        return checked(ScientificEngine.apply(self.name, argument_values), self.name)

    def __repr__(self):
        arguments = ", ".join(repr(argument) for argument in self.arguments)
        return f"FunctionCall({self.name!r}, [{arguments}])"


# -----------------------------
# Tokenizer
# -----------------------------

class Token:
    __slots__ = ("kind", "text", "position", "index")

    def __init__(self, kind, text, position, index=0):
        self.kind = kind
        self.text = text
        self.position = position
        self.index = index

    def __repr__(self):
        return f"Token({self.kind}, {self.text!r}, {self.position})"


def split_names(run):
    """Split a run of letters into known names: 'sinpi' -> ['sin', 'pi'].

    An unknown remainder is returned as one piece so the parser can report it.
    """
    pieces = []
    rest = run
    while rest:
        for name in Names:
            if rest.startswith(name):
                pieces.append(name)
                rest = rest[len(name):]
                break
        else:
            pieces.append(rest)
            break
    return pieces


def translator(problem):
    """Convert a canonical string into a token list (numbers, names, ops, brackets, commands)."""
    full_problem = []
    b = 0

    def add(kind, text, position):
        full_problem.append(Token(kind, text, position, len(full_problem)))

    while b < len(problem):
        current_char = problem[b]

        # --- Whitespace (ignored) ---
        if current_char.isspace():
            b += 1
            continue

        # --- Numbers: digits, decimal point, exponent ---
        number_match = NUMBER_RE.match(problem, b)
        if number_match:
            end = number_match.end()
            if end < len(problem) and problem[end] == "." and "." in number_match.group(0):
                raise E.SyntaxError(f"More than one '.' in one number at position {b}.",
                                    code="3012", position=b)
            add(NUMBER, number_match.group(0), b)
            b = end
            continue

        # --- Names: functions, constants, canonical macros ---
        letters_match = LETTERS_RE.match(problem, b)
        if letters_match:
            position = b
            for piece in split_names(letters_match.group(0)):
                add(NAME, piece, position)
                position += len(piece)
            b = letters_match.end()
            continue

        # --- Leftover LaTeX commands ---
        if current_char == "\\":
            command_match = COMMAND_RE.match(problem, b)
            add(COMMAND, command_match.group(0), b)
            b = command_match.end()
            continue

        if current_char in Operations:
            add(OPERATOR, current_char, b)
        elif current_char in Brackets:
            add(OPEN, current_char, b)
        elif current_char in Brackets.values():
            add(CLOSE, current_char, b)
        elif current_char == ",":
            add(COMMA, current_char, b)
        elif current_char == "|":
            add(BAR, current_char, b)
        else:
            add(UNKNOWN, current_char, b)
        b += 1

    return full_problem


# -----------------------------
# Parser (recursive descent)
# -----------------------------

def parse(normalized):
    """Parse a canonical string into an AST.

    Precedence, lowest to highest: sum (+ -) -> term (* / and implicit
    multiplication) -> unary (-) -> power (^, right-assoc) -> postfix (!) -> factor.
    Raises error.SyntaxError / error.UnsupportedConstruct.
    """
    stream = translator(normalized)
    tokens = list(stream)
    log.debug("Tokens: %s", tokens)

    if not tokens:
        raise E.SyntaxError("Empty expression", code="1000", equation=normalized)

    def fail(message, code, token=None, error=E.SyntaxError):
        position = token.position if token is not None else len(normalized)
        raise error(f"{message} at position {position}", code=code, equation=normalized, position=position)

    def starts_operand(token):
        return token.kind in (NUMBER, NAME, OPEN, COMMAND, BAR)

    def expect_close(opening):
        closing = Brackets[opening.text]
        if not tokens or tokens[0].kind != CLOSE or tokens[0].text != closing:
            fail(f"Missing closing bracket: '{closing}' for '{opening.text}' opened at position {opening.position},",
                 "3002", tokens[0] if tokens else None)
        tokens.pop(0)

    def parse_group():
        """'(' / '{' / '[' sub-expression and its matching closer."""
        opening = tokens.pop(0)
        baum_in_der_klammer = parse_sum()
        expect_close(opening)
        return baum_in_der_klammer

    def parse_required_group(after, opening="{(["):
        if not tokens or tokens[0].kind != OPEN or tokens[0].text not in opening:
            fail(f"Expected '{opening[0]}' after: {after.text}", "3010", tokens[0] if tokens else None)
        return parse_group()

    def negative_exponent():
        """True for '^-...' or '^{-...' at the front of the stream."""
        following = tokens[1:3]
        if following and following[0].kind == OPEN:
            following = following[1:]
        return bool(following) and following[0].text == "-"

    def parse_argument(function):
        """Function argument: a bracket group, or a bare operand (\\ln 2, \\sin\\pi)."""
        if not tokens:
            fail(f"Missing argument for '{function.text}'", "3001")
        token = tokens[0]
        if token.kind == OPERATOR and token.text == "^":
            # Only a negative exponent is left here on purpose (\sin^{-1} x)
            if negative_exponent():
                fail(f"Ambiguous exponent on function name: {function.text}", "1002", token, E.UnsupportedConstruct)
            fail(f"Missing argument for '{function.text}'", "3001", token)
        if token.kind == OPEN:
            return parse_group()
        return parse_unary()

    def parse_name(token):
        """Constants, canonical macros and function calls."""
        name = token.text

        if name in ScientificEngine.CONSTANTS:
            return Constant(name)

        if name == "frac":
            zaehler = parse_required_group(token)
            nenner = parse_required_group(token)
            return Fraction(zaehler, nenner)

        if name == "abs":
            return Abs(parse_argument(token))

        if name in ("nthroot", "logBase"):
            # nthroot[degree]{x}, logBase[base]{x}
            first = parse_required_group(token, "[")
            return FunctionCall(name, [first, parse_argument(token)])

        if name == "log" and tokens and tokens[0].text == "(":
            # Plain-text form log(x) or log(x, base)
            opening = tokens.pop(0)
            argument_baum = parse_sum()
            if tokens and tokens[0].kind == COMMA:
                tokens.pop(0)
                basis_baum = parse_sum()
                expect_close(opening)
                return FunctionCall("logBase", [basis_baum, argument_baum])
            expect_close(opening)
            return FunctionCall("log", [argument_baum])

        if name in ScientificEngine.FUNCTIONS:
            return FunctionCall(name, [parse_argument(token)])

        fail(f"Unrecognized identifier: '{name}'", "3006", token)

    def parse_factor():
        """Numbers, constants, groups, macros and function calls."""
        if not tokens:
            fail("Missing operand", "3001")
        token = tokens[0]

        if token.kind == NUMBER:
            tokens.pop(0)
            return Number(float(token.text))
        if token.kind == OPEN:
            return parse_group()
        if token.kind == NAME:
            tokens.pop(0)
            return parse_name(token)
        if token.kind == BAR:
            fail("Unmatched '|'", "3007", token)
        if token.kind == COMMAND:
            if token.text in UNSUPPORTED_COMMANDS:
                fail(f"Unsupported construct: {token.text}", "1001", token, E.UnsupportedConstruct)
            if token.text in ARGUMENT_MACROS:
                fail(f"Unbalanced or missing braces after: {token.text}", "3010", token)
            fail(f"Unrecognized identifier: '{token.text}'", "3006", token)
        if token.kind in (OPERATOR, CLOSE, COMMA):
            fail(f"Missing operand before '{token.text}'", "3001", token)
        fail(f"Unexpected token: '{token.text}'", "3000", token)

    def parse_postfix():
        aktueller_baum = parse_factor()
        while tokens and tokens[0].text == "!":
            tokens.pop(0)
            aktueller_baum = Factorial(aktueller_baum)
        return aktueller_baum

    def parse_power():
        """Exponentiation '^' (right-associative, binds tighter than unary minus)."""
        basis = parse_postfix()
        if tokens and tokens[0].text == "^":
            tokens.pop(0)
            exponent = parse_unary()
            return Power(basis, exponent)
        return basis

    def parse_unary():
        """Leading '+'/'-'."""
        if tokens and tokens[0].kind == OPERATOR and tokens[0].text in ("+", "-"):
            operator = tokens.pop(0)
            operand = parse_unary()
            if operator.text == "-":
                return UnaryMinus(operand)
            return operand
        return parse_power()

    def parse_term():
        """Multiplication, division and implicit multiplication."""
        aktueller_baum = parse_unary()
        while tokens:
            token = tokens[0]
            if token.kind == OPERATOR and token.text in ("*", "/"):
                tokens.pop(0)
                rechtes_teil = parse_unary()
                aktueller_baum = BinOp(aktueller_baum, token.text, rechtes_teil)
            elif starts_operand(token):
                previous = stream[token.index - 1]
                if token.kind == NUMBER and previous.kind == NUMBER:
                    fail("Adjacent numbers without operator", "3009", token)
                rechtes_teil = parse_power()
                aktueller_baum = BinOp(aktueller_baum, "*", rechtes_teil)
            else:
                break
        return aktueller_baum

    def parse_sum():
        """Addition and subtraction."""
        aktueller_baum = parse_term()
        while tokens and tokens[0].kind == OPERATOR and tokens[0].text in ("+", "-"):
            operator = tokens.pop(0)
            rechte_seite = parse_term()
            aktueller_baum = BinOp(aktueller_baum, operator.text, rechte_seite)
        return aktueller_baum

    finaler_baum = parse_sum()

    if tokens:
        fail(f"Unexpected trailing input: '{normalized[tokens[0].position:]}'", "3008", tokens[0])

    log.debug("Final AST: %r", finaler_baum)
    return finaler_baum


# -----------------------------
# Evaluator
# -----------------------------

def evaluate(node):
    """Evaluate an AST to a finite float. Raises error.DomainError / error.NumericOverflow."""
    return checked(node.evaluate(), "result")


# -----------------------------
# Result formatting
# -----------------------------

def format_value(value, significant_digits=None):
    """Render a float compactly: integers without a decimal point, other values
    rounded to significant_digits with trailing zeros trimmed.
    """
    if significant_digits is None:
        significant_digits = config_manager.load_setting_value("significant_digits")
    significant_digits = max(1, int(significant_digits))
    tolerance = config_manager.load_setting_value("integer_tolerance")

    if not math.isfinite(value):
        return str(value)

    nearest = round(value)
    if value == 0:
        return "0"
    # Values close to zero are not snapped; 2.5e-11 is not an integer
    if nearest != 0 and abs(value - nearest) < tolerance and abs(nearest) < 10 ** 21:
        return str(nearest)

    context = Context(prec=significant_digits, rounding=ROUND_HALF_EVEN)
    gerundetes_ergebnis = context.create_decimal_from_float(value).normalize(context)
    exponent = gerundetes_ergebnis.adjusted()
    if -7 <= exponent < significant_digits:
        ausgabe_string = format(gerundetes_ergebnis, "f")
    else:
        ausgabe_string = str(gerundetes_ergebnis)
    if ausgabe_string in ("-0", "-0.0"):
        return "0"
    return ausgabe_string


def _pi_multiple(ratio):
    """Render ratio * π: 1 -> 'π', -2 -> '-2π', 3/4 -> '3π/4'."""
    sign = "-" if ratio < 0 else ""
    numerator = abs(ratio.numerator)
    head = "π" if numerator == 1 else f"{numerator}π"
    if ratio.denominator == 1:
        return sign + head
    return f"{sign}{head}/{ratio.denominator}"


def describe_value(value):
    """Return an exact-looking form ('1/3', 'π/2') when value matches one, else None.

    Display only; grading always compares the float.
    """
    if not math.isfinite(value):
        return None
    tolerance = config_manager.load_setting_value("integer_tolerance")
    max_denominator = config_manager.load_setting_value("fraction_max_denominator")

    if abs(value - round(value)) < tolerance:
        return None

    bruch_ergebnis = _Ratio(value).limit_denominator(max_denominator)
    if abs(float(bruch_ergebnis) - value) < tolerance:
        return f"{bruch_ergebnis.numerator}/{bruch_ergebnis.denominator}"

    ratio = _Ratio(value / math.pi).limit_denominator(12)
    if ratio != 0 and abs(float(ratio) * math.pi - value) < tolerance:
        return _pi_multiple(ratio)
    return None


# -----------------------------
# Public entry point
# -----------------------------

@dataclass(frozen=True)
class Success:
    value: float
    expression: str
    success: bool = field(default=True, init=False)

    def to_dict(self):
        return {"success": True, "value": self.value, "expression": self.expression}


@dataclass(frozen=True)
class Failure:
    kind: E.ErrorKind
    message: str
    expression: Optional[str] = None
    code: str = "9999"
    position: Optional[int] = None
    success: bool = field(default=False, init=False)

    @classmethod
    def from_error(cls, error, expression):
        return cls(kind=error.kind, message=error.message, expression=expression,
                   code=error.code, position=error.position)

    @property
    def is_domain_error(self):
        return self.kind in (E.ErrorKind.DIVISION_BY_ZERO, E.ErrorKind.NEGATIVE_RADICAND,
                             E.ErrorKind.NON_POSITIVE_LOG_ARGUMENT, E.ErrorKind.OUT_OF_DOMAIN,
                             E.ErrorKind.INVALID_POWER)

    def to_dict(self):
        result = {"success": False, "error": self.message, "kind": self.kind.value, "code": self.code}
        if self.expression is not None:
            result["expression"] = self.expression
        return result


def parse_latex_to_number(latex):
    """Main API: normalize -> parse -> evaluate. Returns Success or Failure, never raises."""
    if not latex or not latex.strip():
        return Failure(kind=E.ErrorKind.SYNTAX_ERROR, message=E.ERROR_MESSAGES["1000"], code="1000")

    expression = None
    try:
        expression = Normalizer.normalize(latex)
        finaler_baum = parse(expression)
        ergebnis = evaluate(finaler_baum)

    # Known pipeline errors
    except E.MathError as e:
        e.equation = expression
        log.debug("Evaluation of %r failed: [%s] %s", latex, e.code, e.message)
        return Failure.from_error(e, expression)
    # Input nested deeper than the recursion limit
    except RecursionError:
        return Failure(kind=E.ErrorKind.SYNTAX_ERROR, message=E.ERROR_MESSAGES["3011"],
                       expression=expression, code="3011")
    # Arithmetic errors raised by the math library itself
    except OverflowError:
        return Failure(kind=E.ErrorKind.NUMERIC_OVERFLOW, message=E.ERROR_MESSAGES["3026"],
                       expression=expression, code="3026")
    except ZeroDivisionError:
        return Failure(kind=E.ErrorKind.DIVISION_BY_ZERO, message=E.ERROR_MESSAGES["3003"],
                       expression=expression, code="3003")
    except ValueError as e:
        return Failure(kind=E.ErrorKind.OUT_OF_DOMAIN, message=f"Math domain error: {e}",
                       expression=expression, code="9999")

    return Success(value=ergebnis, expression=expression)


def can_parse_latex(latex):
    return parse_latex_to_number(latex).success
