"""
Line metrics and the cyclomatic complexity proxy.
"""

import re
from decimal import ROUND_HALF_UP, Decimal

from .models import LineMetrics


COMMENT_PREFIXES = ("//", "/*", "*", "#")

# "else if" is listed first so it counts once instead of as "else" + "if"
DECISION_POINT_PATTERN = re.compile(
    r"\b(?:else if|if|for|while|switch|case|catch|elif)\b|&&|\|\|",
    re.IGNORECASE,
)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round ties upward, judged on the exact binary value of ``value``."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def split_lines(code: str) -> list[str]:
    """Split on newlines; an empty snippet is one empty line."""
    return code.split("\n")


def extract_line_metrics(code: str) -> LineMetrics:
    """
    Classify every line as blank, comment or code.

    A line counts as a comment only when it *starts* with a comment marker
    after trimming. Lines with trailing inline comments are code.

    Args:
        code: Source code in any language

    Returns:
        LineMetrics with counts and the comment percentage (1 decimal)
    """
    lines = split_lines(code)
    total_lines = len(lines)
    code_lines = 0
    comment_lines = 0
    blank_lines = 0

    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            blank_lines += 1
        elif trimmed.startswith(COMMENT_PREFIXES):
            comment_lines += 1
        else:
            code_lines += 1

    comment_percentage = round_half_up(comment_lines / total_lines * 100) if total_lines else 0.0

    return LineMetrics(
        total_lines=total_lines,
        code_lines=code_lines,
        comment_lines=comment_lines,
        blank_lines=blank_lines,
        comment_percentage=comment_percentage,
    )


def estimate_complexity_proxy(code: str) -> int:
    """
    Estimate cyclomatic complexity by counting decision points.

    Starts at 1 for the entry path, adds one per branching keyword or
    short-circuit operator, and one per ``?``. Every ``?`` counts, including
    ones that are not ternaries.
    """
    complexity = 1
    complexity += sum(1 for _ in DECISION_POINT_PATTERN.finditer(code))
    complexity += code.count("?")
    return complexity
