# AnswerChecker.py
"""""
Compares a submitted answer with the stored one.

Order of checks: exact text match, then numeric match through the LaTeX
pipeline. An answer that does not evaluate is only ever compared as text.
"""""
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from . import MathEngine
from . import config_manager as config_manager

log = logging.getLogger(__name__)

QUESTION_TYPES = ["choice", "blank", "answer"]


@dataclass(frozen=True)
class VerificationResult:
    is_correct: bool
    method: str                       # "exact" or "numeric"
    message: Optional[str] = None
    details: dict = field(default_factory=dict)


def clean_answer(answer):
    """Trim, drop $ wrappers and \\displaystyle, collapse whitespace."""
    if not answer:
        return ""
    text = answer.strip()
    text = re.sub(r"^\$+|\$+$", "", text)
    text = text.replace("\\displaystyle", "")
    return " ".join(text.split())


def _choice_letters(answer):
    return "".join(sorted(set(re.sub(r"[^A-Z]", "", answer.upper()))))


def verify_choice_answer(user_answer, correct_answer):
    normalized_user = _choice_letters(user_answer)
    normalized_correct = _choice_letters(correct_answer)
    return VerificationResult(
        is_correct=normalized_user == normalized_correct,
        method="exact",
        details={
            "user_answer": user_answer,
            "expected_answer": correct_answer,
            "normalized_user": normalized_user,
            "normalized_expected": normalized_correct,
        },
    )


def numbers_match(user_value, correct_value, tolerance=None):
    """Absolute tolerance near zero, relative tolerance for large values."""
    if tolerance is None:
        tolerance = config_manager.load_setting_value("answer_tolerance")
    return abs(user_value - correct_value) <= tolerance * max(abs(correct_value), 1.0)


def verify_answer(user_answer, correct_answer, question_type="blank"):
    if question_type not in QUESTION_TYPES:
        raise ValueError(f"Unknown question type: {question_type!r}")

    clean_user = clean_answer(user_answer)
    clean_correct = clean_answer(correct_answer)

    if not clean_user:
        return VerificationResult(is_correct=False, method="exact", message="empty_answer")

    if question_type == "choice":
        return verify_choice_answer(clean_user, clean_correct)

    details = {"user_answer": clean_user, "expected_answer": clean_correct}

    # 1. Exact match (whitespace-insensitive)
    if re.sub(r"\s+", "", clean_user) == re.sub(r"\s+", "", clean_correct):
        return VerificationResult(is_correct=True, method="exact", details=details)

    # 2. Numeric match
    user_result = MathEngine.parse_latex_to_number(clean_user)
    correct_result = MathEngine.parse_latex_to_number(clean_correct)
    if not (user_result.success and correct_result.success):
        log.debug("Numeric comparison skipped: user=%s expected=%s", user_result, correct_result)
        return VerificationResult(is_correct=False, method="exact", message="incorrect", details=details)

    details["normalized_user"] = user_result.expression
    details["normalized_expected"] = correct_result.expression
    details["user_value"] = user_result.value
    details["expected_value"] = correct_result.value
    is_correct = numbers_match(user_result.value, correct_result.value)
    return VerificationResult(
        is_correct=is_correct,
        method="numeric",
        message=None if is_correct else "incorrect",
        details=details,
    )


def is_numeric_answer(answer):
    return MathEngine.parse_latex_to_number(clean_answer(answer)).success
