# Normalizer.py
"""""
Rewrites LaTeX answer notation into the canonical form read by MathEngine.

Passes (in this order)
----------------------
1) Wrappers and cosmetic macros: $...$, $$...$$, \\[...\\], \\displaystyle,
   \\left / \\right, spacing commands, \\text{...}.
2) Fractions:   \\frac{a}{b}, \\dfrac, \\tfrac, \\cfrac  ->  frac{a}{b}
3) Roots:       \\sqrt{x} -> sqrt{x},  \\sqrt[n]{x} -> nthroot[n]{x}
4) Log bases:   \\log_{b} -> logBase[b]
5) Functions:   \\sin^{2}{x} -> (sin{x})^{2},  then \\sin -> sin
6) Operator glyphs and constants: \\times \\cdot \\div \\pi
7) Absolute value bars: |x| -> abs(x), paired in one pass

normalize() never raises. Whatever it cannot rewrite (unbalanced braces, an
unmatched bar, unknown macros) stays in the output and the parser reports it.
"""""
import logging
import re

log = logging.getLogger(__name__)

# Longer names first so the alternation never stops at a prefix ("sin" in "sinh").
FUNCTION_MACROS = ["arcsin", "arccos", "arctan", "arccot", "sinh", "cosh", "tanh",
                   "sin", "cos", "tan", "cot", "sec", "csc", "ln", "log", "exp"]

_FUNCTIONS = "|".join(FUNCTION_MACROS)

# Canonical words that carry their own bracketed arguments after pass 2-4
_GROUPED_WORDS = ("frac", "sqrt", "nthroot", "logBase")

_PAIRS = {"{": "}", "(": ")", "[": "]"}


# -----------------------------
# Patterns
# -----------------------------

DOLLAR_WRAPPER = re.compile(r"^\$+|\$+$")
DISPLAY_WRAPPER = re.compile(r"^\\[\[(]|\\[\])]$")
STYLE_MACRO = re.compile(r"\\(?:displaystyle|textstyle|scriptstyle|scriptscriptstyle)(?![A-Za-z])\s*")
SIZING_MACRO = re.compile(r"\\(?:left|right|[Bb]igg?[lr]?)(?![A-Za-z])\s*\.?")
SPACING_MACRO = re.compile(r"\\(?:[,;:! ]|q?quad(?![A-Za-z]))|~")
TEXT_MACRO = re.compile(r"\\(?:text|textrm|mbox)\s*\{[^{}]*\}")
UPRIGHT_MACRO = re.compile(r"\\(?:mathrm|mathit|operatorname)\s*\{\s*([^{}]*?)\s*\}")
BAR_MACRO = re.compile(r"\\(?:lvert|rvert|vert|mid)(?![A-Za-z])")

FRACTION_MACRO = re.compile(r"\\[dtc]?frac(?![A-Za-z])")
ROOT_MACRO = re.compile(r"\\sqrt(?![A-Za-z])")
LOG_BASE_MACRO = re.compile(r"\\log\s*_")
FUNCTION_POWER = re.compile(r"\\(" + _FUNCTIONS + r")(?![A-Za-z])\s*\^")
FUNCTION_MACRO = re.compile(r"\\(" + _FUNCTIONS + r")(?![A-Za-z])")

MULTIPLY_GLYPH = re.compile(r"\\(?:times|cdot|ast)(?![A-Za-z])|[×·∙⋅]")
DIVIDE_GLYPH = re.compile(r"\\div(?![A-Za-z])|÷")
PI_GLYPH = re.compile(r"\\pi(?![A-Za-z])|π")
E_GLYPH = re.compile(r"\\e(?![A-Za-z])")

# One TeX argument without braces: a control word or a single character (\frac12)
SINGLE_TOKEN = re.compile(r"\\[A-Za-z]+|[^\s{}]")
# Bare function argument (\sin^2 x, \sin^2\pi, \ln^2 10)
BARE_ARGUMENT = re.compile(r"\\?[A-Za-z]+|\d+(?:\.\d+)?|\.\d+")
# Canonical word left by an earlier pass, used as an undelimited argument (\sqrt\frac{1}{4})
GROUPED_WORD = re.compile(r"(?:" + "|".join(_GROUPED_WORDS) + r")(?![A-Za-z])")

_BRACKET_PATTERNS = {opening: re.compile(re.escape(opening) + "|" + re.escape(closing))
                     for opening, closing in _PAIRS.items()}


# -----------------------------
# Small helpers
# -----------------------------

def skip_spaces(text, i):
    while i < len(text) and text[i].isspace():
        i += 1
    return i


class UnclosedGroup(Exception):
    """A bracket group runs to the end of the text."""


def extract_group(text, start):
    """Return (content, index_after_close) for the bracket group opening at start.

    Only brackets of the same type are counted, so nesting is preserved.
    Returns None when text[start] is not an opening bracket and raises
    UnclosedGroup when it is never closed.
    """
    if start >= len(text) or text[start] not in _PAIRS:
        return None
    depth = 0
    for bracket in _BRACKET_PATTERNS[text[start]].finditer(text, start):
        if bracket.group(0) in _PAIRS:
            depth += 1
        else:
            depth -= 1
            if depth == 0:
                return text[start + 1:bracket.start()], bracket.end()
    raise UnclosedGroup(text[start])


def absorb_groups(text, end):
    """Index after the bracket groups that directly follow end (frac{1}{4})."""
    while end < len(text) and text[end] in "{[":
        end = extract_group(text, end)[1]
    return end


def macro_argument(text, i):
    """One macro argument: a braced group, a canonical word with its groups, or a single token."""
    i = skip_spaces(text, i)
    if i >= len(text):
        return None
    if text[i] == "{":
        return extract_group(text, i)
    word = GROUPED_WORD.match(text, i)
    if word is not None:
        end = absorb_groups(text, word.end())
        return text[i:end], end
    match = SINGLE_TOKEN.match(text, i)
    if match is None:
        return None
    return match.group(0), match.end()


def function_argument(text, i):
    """Argument following a function name: a bracket group or a bare operand."""
    i = skip_spaces(text, i)
    if i < len(text) and text[i] in _PAIRS:
        return extract_group(text, i)
    match = BARE_ARGUMENT.match(text, i)
    if match is None:
        return None
    end = match.end()
    if match.group(0) in _GROUPED_WORDS:
        end = absorb_groups(text, end)
    return text[i:end], end


def spaced(text, start, end, replacement):
    """Pad a replacement word so it cannot fuse with a neighbouring letter or digit."""
    if start > 0 and text[start - 1].isalnum() and replacement[:1].isalnum():
        replacement = " " + replacement
    if end < len(text) and text[end].isalnum() and replacement[-1:].isalnum():
        replacement = replacement + " "
    return replacement


def rename(text, pattern, name):
    def replace(match):
        word = name if name is not None else match.group(1)
        return spaced(match.string, match.start(), match.end(), word)
    return pattern.sub(replace, text)


def rewrite_macros(text, pattern, build):
    """Repeatedly replace pattern matches using build(text, match) -> (replacement, end).

    Each successful rewrite removes one backslash macro, so the loop terminates.
    A macro build() cannot handle (returns None) is skipped and left in place.
    An unclosed group ends the pass: the text cannot parse anyway.
    """
    search_from = 0
    while True:
        match = pattern.search(text, search_from)
        if match is None:
            return text
        try:
            built = build(text, match)
        except UnclosedGroup as e:
            log.debug("Unclosed %r after %r at position %d", str(e), match.group(0), match.start())
            return text
        if built is None:
            search_from = match.end()
            continue
        replacement, end = built
        text = text[:match.start()] + spaced(text, match.start(), end, replacement) + text[end:]
        search_from = match.start()


# -----------------------------
# Macro builders
# -----------------------------

def build_fraction(text, match):
    numerator = macro_argument(text, match.end())
    if numerator is None:
        return None
    denominator = macro_argument(text, numerator[1])
    if denominator is None:
        return None
    return f"frac{{{numerator[0]}}}{{{denominator[0]}}}", denominator[1]


def build_root(text, match):
    i = skip_spaces(text, match.end())
    if i < len(text) and text[i] == "[":
        degree = extract_group(text, i)
        if degree is None:
            return None
        radicand = macro_argument(text, degree[1])
        if radicand is None:
            return None
        return f"nthroot[{degree[0]}]{{{radicand[0]}}}", radicand[1]

    radicand = macro_argument(text, i)
    if radicand is None:
        return None
    return f"sqrt{{{radicand[0]}}}", radicand[1]


def build_log_base(text, match):
    base = macro_argument(text, match.end())
    if base is None:
        return None
    return f"logBase[{base[0]}]", base[1]


def build_function_power(text, match):
    """\\f^{n}{x} -> (f{x})^{n}: apply f first, then raise the result."""
    exponent = macro_argument(text, match.end())
    # A negative exponent here reads as either an inverse or a reciprocal.
    # It is left alone and the parser rejects it as ambiguous.
    if exponent is None or exponent[0].strip().startswith("-"):
        return None
    argument = function_argument(text, exponent[1])
    if argument is None:
        return None
    return f"({match.group(1)}{{{argument[0]}}})^{{{exponent[0]}}}", argument[1]


# -----------------------------
# Absolute value bars
# -----------------------------

def _bar_opens(text, j, last_bar_opened):
    """Decide whether the bar at j opens a nested |...| or closes the open one."""
    k = j - 1
    while k >= 0 and text[k].isspace():
        k -= 1
    if k < 0:
        return True
    previous = text[k]
    if previous == "|":
        return last_bar_opened
    if previous.isalpha():
        # A function name or a leftover command takes the bar as its argument
        start = k
        while start > 0 and text[start - 1].isalpha():
            start -= 1
        return text[start:k + 1] in FUNCTION_MACROS or (start > 0 and text[start - 1] == "\\")
    return not (previous.isdigit() or previous in ")]}.!")


def rewrite_bars(text):
    """Pair the bars in one pass and turn each pair into abs(...).

    A bar only pairs with one opened inside the same bracket group. Bars still
    open when their group closes stay in the text, the parser reports them.
    """
    replacements = {}
    stack = []  # (opening bracket or "|", index)
    last_bar_opened = True
    for j, current_char in enumerate(text):
        if current_char in "([{":
            stack.append((current_char, j))
        elif current_char in ")]}":
            while stack and stack[-1][0] == "|":
                stack.pop()
            if stack:
                stack.pop()
        elif current_char == "|":
            if stack and stack[-1][0] == "|" and not _bar_opens(text, j, last_bar_opened):
                opening = stack.pop()[1]
                replacements[opening] = "abs("
                replacements[j] = ")"
                last_bar_opened = False
            else:
                stack.append(("|", j))
                last_bar_opened = True
    if not replacements:
        return text
    return "".join(replacements.get(j, current_char) for j, current_char in enumerate(text))


# -----------------------------
# Public entry point
# -----------------------------

def normalize(raw):
    """Return the canonical form of a LaTeX answer string. Never raises."""
    if not raw:
        return ""
    expr = raw.strip()

    # --- 1. Presentation wrappers ---
    expr = DOLLAR_WRAPPER.sub("", expr).strip()
    expr = DISPLAY_WRAPPER.sub("", expr).strip()
    expr = STYLE_MACRO.sub("", expr)
    expr = SIZING_MACRO.sub("", expr)
    expr = SPACING_MACRO.sub(" ", expr)
    expr = TEXT_MACRO.sub("", expr)
    expr = UPRIGHT_MACRO.sub(
        lambda m: "\\" + m.group(1) if m.group(1) in FUNCTION_MACROS else m.group(1), expr)
    expr = BAR_MACRO.sub("|", expr)
    expr = expr.replace("\\{", "(").replace("\\}", ")")

    # --- 2.-4. Macros with arguments ---
    expr = rewrite_macros(expr, FRACTION_MACRO, build_fraction)
    expr = rewrite_macros(expr, ROOT_MACRO, build_root)
    expr = rewrite_macros(expr, LOG_BASE_MACRO, build_log_base)

    # --- 5. Functions ---
    expr = rewrite_macros(expr, FUNCTION_POWER, build_function_power)
    expr = rename(expr, FUNCTION_MACRO, None)

    # --- 6. Glyphs (before bars, so |2\times|-3|| sees an operator) ---
    expr = MULTIPLY_GLYPH.sub("*", expr)
    expr = DIVIDE_GLYPH.sub("/", expr)
    expr = expr.replace("−", "-")
    expr = rename(expr, PI_GLYPH, "pi")
    expr = rename(expr, E_GLYPH, "e")

    # --- 7. |x| ---
    expr = rewrite_bars(expr)

    normalized = " ".join(expr.split())
    log.debug("Normalized %r -> %r", raw, normalized)
    return normalized
