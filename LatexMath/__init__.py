"""Evaluate LaTeX answer notation to a number."""

from .error import ErrorKind, MathError
from .Normalizer import normalize
from .MathEngine import (
    Failure,
    Success,
    can_parse_latex,
    describe_value,
    evaluate,
    format_value,
    parse,
    parse_latex_to_number,
)
from .AnswerChecker import VerificationResult, is_numeric_answer, verify_answer

__version__ = "1.0.0"
