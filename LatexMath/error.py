# error.py
"""""
Error hierarchy for the LaTeX answer engine.

Every failure inside the pipeline is raised as a MathError subclass and turned
into a Failure result at the public boundary (MathEngine.parse_latex_to_number).
"""""
from enum import Enum


class ErrorKind(str, Enum):
    SYNTAX_ERROR = "SyntaxError"
    UNSUPPORTED_CONSTRUCT = "UnsupportedConstruct"
    DIVISION_BY_ZERO = "DivisionByZero"
    NEGATIVE_RADICAND = "NegativeRadicand"
    NON_POSITIVE_LOG_ARGUMENT = "NonPositiveLogArgument"
    OUT_OF_DOMAIN = "OutOfDomain"
    INVALID_POWER = "InvalidPower"
    NUMERIC_OVERFLOW = "NumericOverflow"


class MathError(Exception):
    kind = ErrorKind.SYNTAX_ERROR

    def __init__(self, message, code="9999", equation=None, position=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation
        self.position = position

class SyntaxError(MathError):
    kind = ErrorKind.SYNTAX_ERROR

class UnsupportedConstruct(MathError):
    kind = ErrorKind.UNSUPPORTED_CONSTRUCT

class DomainError(MathError):
    kind = ErrorKind.OUT_OF_DOMAIN

class DivisionByZero(DomainError):
    kind = ErrorKind.DIVISION_BY_ZERO

class NegativeRadicand(DomainError):
    kind = ErrorKind.NEGATIVE_RADICAND

class NonPositiveLogArgument(DomainError):
    kind = ErrorKind.NON_POSITIVE_LOG_ARGUMENT

class OutOfDomain(DomainError):
    kind = ErrorKind.OUT_OF_DOMAIN

class InvalidPower(DomainError):
    kind = ErrorKind.INVALID_POWER

class NumericOverflow(MathError):
    kind = ErrorKind.NUMERIC_OVERFLOW


Error_Dictionary = {

    "1" : "Input Error",
    "2" : "Scientific Function Error",
    "3" : "Calculator Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Sub-area
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "1000" : "Empty expression",
    "1001" : "Unsupported construct: ", # + macro
    "1002" : "Ambiguous exponent on function name: ", # + function

    "2000" : "Negative radicand in square root",
    "2001" : "Negative radicand in even root",
    "2002" : "Root degree must not be zero",
    "2003" : "Logarithm argument must be positive",
    "2004" : "Logarithm base must be positive",
    "2005" : "Logarithm base must not be 1",
    "2006" : "Argument outside [-1, 1]: ", # + function
    "2007" : "Division by zero in reciprocal function: ", # + function
    "2008" : "Factorial needs a non-negative integer",

    "3000" : "Unexpected token: ", # + token
    "3001" : "Missing operand",
    "3002" : "Missing closing bracket: ", # + expected bracket
    "3003" : "Division by zero",
    "3004" : "Negative base with non-integer exponent",
    "3005" : "Zero raised to a negative power",
    "3006" : "Unrecognized identifier: ", # + identifier
    "3007" : "Unmatched '|'",
    "3008" : "Unexpected trailing input: ", # + rest
    "3009" : "Adjacent numbers without operator",
    "3010" : "Expected '{' after: ", # + macro
    "3011" : "Expression nested too deeply",
    "3012" : "More than one '.' in one number.",
    "3026" : "Number too big.",

    "9999" : "Unexpected Error: " #+error
}
