# ScientificEngine
"""""
Function table for the evaluator.

FUNCTIONS maps every supported function name to (arity, implementation). Each
implementation takes floats, enforces its own domain and raises an error.py
DomainError when the value is undefined. Arguments are radians, never degrees.
"""""
import math

from . import error as E


CONSTANTS = {
    "pi": math.pi,
    "e": math.e,
}


def constant(name):
    return CONSTANTS[name]


# -----------------------------
# Roots
# -----------------------------

def sqrt(x):
    if x < 0:
        raise E.NegativeRadicand(f"Negative radicand in square root: {x}", code="2000")
    return math.sqrt(x)


def nthroot(n, x):
    """Real n-th root of x. Negative x is allowed only for odd integer n."""
    if n == 0:
        raise E.OutOfDomain("Root degree must not be zero", code="2002")
    odd_degree = n.is_integer() and int(n) % 2 == 1
    if x < 0:
        if not odd_degree:
            raise E.NegativeRadicand(f"Negative radicand {x} in root of degree {n:g}", code="2001")
        return -nthroot(n, -x)
    if x == 0 and n < 0:
        raise E.DivisionByZero("Division by zero", code="3003")

    root = x ** (1.0 / n)
    # 27 ** (1/3) is 3.0000000000000004; snap to the exact integer root when there is one
    if n.is_integer() and n > 0:
        candidate = float(round(root))
        if math.isclose(root, candidate, rel_tol=1e-12) and math.pow(candidate, n) == x:
            return candidate
    return root


# -----------------------------
# Logarithms
# -----------------------------

def ln(x):
    if x <= 0:
        raise E.NonPositiveLogArgument(f"Logarithm argument must be positive: {x}", code="2003")
    return math.log(x)


def log(x):
    """Common (base 10) logarithm."""
    if x <= 0:
        raise E.NonPositiveLogArgument(f"Logarithm argument must be positive: {x}", code="2003")
    return math.log10(x)


def log_base(base, x):
    if base <= 0:
        raise E.NonPositiveLogArgument(f"Logarithm base must be positive: {base}", code="2004")
    if base == 1:
        raise E.OutOfDomain("Logarithm base must not be 1", code="2005")
    if x <= 0:
        raise E.NonPositiveLogArgument(f"Logarithm argument must be positive: {x}", code="2003")
    if base == 2:
        return math.log2(x)
    if base == 10:
        return math.log10(x)
    return math.log(x) / math.log(base)


# -----------------------------
# Trigonometry
# -----------------------------

def arcsin(x):
    if abs(x) > 1:
        raise E.OutOfDomain(f"Argument outside [-1, 1]: arcsin({x})", code="2006")
    return math.asin(x)


def arccos(x):
    if abs(x) > 1:
        raise E.OutOfDomain(f"Argument outside [-1, 1]: arccos({x})", code="2006")
    return math.acos(x)


def arccot(x):
    """Inverse cotangent with range (0, π), continuous through x = 0."""
    return math.atan2(1.0, x)


def _reciprocal(name, value):
    if value == 0:
        raise E.DivisionByZero(f"Division by zero in reciprocal function: {name}", code="2007")
    return 1.0 / value


def cot(x):
    return _reciprocal("cot", math.tan(x))


def sec(x):
    return _reciprocal("sec", math.cos(x))


def csc(x):
    return _reciprocal("csc", math.sin(x))


FUNCTIONS = {
    "sin": (1, math.sin),
    "cos": (1, math.cos),
    "tan": (1, math.tan),
    "cot": (1, cot),
    "sec": (1, sec),
    "csc": (1, csc),
    "arcsin": (1, arcsin),
    "arccos": (1, arccos),
    "arctan": (1, math.atan),
    "arccot": (1, arccot),
    "sinh": (1, math.sinh),
    "cosh": (1, math.cosh),
    "tanh": (1, math.tanh),
    "exp": (1, math.exp),
    "ln": (1, ln),
    "log": (1, log),
    "sqrt": (1, sqrt),
    "nthroot": (2, nthroot),
    "logBase": (2, log_base),
}


def apply(name, arguments):
    """Evaluate FUNCTIONS[name] on already evaluated float arguments."""
    arity, function = FUNCTIONS[name]
    if len(arguments) != arity:
        raise E.SyntaxError(f"{name} expects {arity} argument(s), got {len(arguments)}", code="3001")
    try:
        return function(*arguments)
    except OverflowError:
        raise E.NumericOverflow(f"Number too big in {name}.", code="3026")
