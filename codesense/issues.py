"""
Heuristic issue detection over raw source text.
"""

import re

from .loops import first_for_in_header
from .metrics import split_lines
from .models import Issue, IssueRule, LineMetrics, Severity


MAX_LINE_LENGTH = 100
HIGH_COMPLEXITY_THRESHOLD = 10
VERY_HIGH_COMPLEXITY_THRESHOLD = 18
MIN_CODE_LINES_FOR_DOCS = 30
MIN_COMMENT_PERCENTAGE = 15
DEBUG_OUTPUT_THRESHOLD = 3
MAX_NESTING_DEPTH = 5

EVAL_PATTERN = re.compile(r"\beval\s*\(")
DEBUG_OUTPUT_PATTERN = re.compile(r"console\.log|System\.out\.println|printf|print\s*\(")
ELSE_CLAUSE_PATTERN = re.compile(r"\belse\s*:")


def _long_line_issues(lines: list[str]) -> list[Issue]:
    return [
        Issue(
            severity=Severity.MEDIUM,
            description=(
                f"Line {number} is too long ({len(line)} chars). "
                f"Max recommended is {MAX_LINE_LENGTH}."
            ),
            line=number,
            rule=IssueRule.LONG_LINE,
        )
        for number, line in enumerate(lines, start=1)
        if len(line) > MAX_LINE_LENGTH
    ]


def _eval_issue(code: str, lines: list[str]) -> list[Issue]:
    if not EVAL_PATTERN.search(code):
        return []
    eval_lines = [number for number, line in enumerate(lines, start=1) if "eval(" in line]
    found_on = ", ".join(str(number) for number in eval_lines)
    return [Issue(
        severity=Severity.CRITICAL,
        description=(
            f"Avoid using 'eval()'. Found on line(s): {found_on}. "
            "This can lead to security vulnerabilities."
        ),
        line=eval_lines[0] if eval_lines else 1,
        rule=IssueRule.EVAL,
    )]


def _complexity_issue(complexity_proxy: int) -> list[Issue]:
    if complexity_proxy > VERY_HIGH_COMPLEXITY_THRESHOLD:
        return [Issue(
            severity=Severity.HIGH,
            description=(
                f"Very high estimated complexity ({complexity_proxy}). This code is likely "
                "hard to understand, test, and maintain."
            ),
            rule=IssueRule.COMPLEXITY,
        )]
    if complexity_proxy > HIGH_COMPLEXITY_THRESHOLD:
        return [Issue(
            severity=Severity.MEDIUM,
            description=(
                f"High estimated complexity ({complexity_proxy}). "
                "Consider refactoring for simplicity."
            ),
            rule=IssueRule.COMPLEXITY,
        )]
    return []


def _documentation_issue(metrics: LineMetrics) -> list[Issue]:
    if metrics.code_lines > MIN_CODE_LINES_FOR_DOCS and metrics.comment_percentage < MIN_COMMENT_PERCENTAGE:
        return [Issue(
            severity=Severity.MEDIUM,
            description=(
                f"Low comment percentage ({metrics.comment_percentage}%). "
                "Code might be difficult to understand without comments."
            ),
            rule=IssueRule.LOW_DOCUMENTATION,
        )]
    return []


def _debug_output_issue(code: str) -> list[Issue]:
    instances = sum(1 for _ in DEBUG_OUTPUT_PATTERN.finditer(code))
    if instances >= DEBUG_OUTPUT_THRESHOLD:
        return [Issue(
            severity=Severity.LOW,
            description=(
                f"Excessive debug output ({instances} instances). "
                "Remove debug logs from production code."
            ),
            rule=IssueRule.DEBUG_OUTPUT,
        )]
    return []


def nesting_depth(line: str) -> int:
    """Indentation depth: every 4 leading whitespace chars plus one per leading tab."""
    leading_whitespace = len(line) - len(line.lstrip())
    leading_tabs = len(line) - len(line.lstrip("\t"))
    return leading_whitespace // 4 + leading_tabs


def _nesting_issue(lines: list[str]) -> list[Issue]:
    max_depth = max((nesting_depth(line) for line in lines if line.strip()), default=0)
    if max_depth > MAX_NESTING_DEPTH:
        return [Issue(
            severity=Severity.MEDIUM,
            description=(
                f"Potentially deep nesting detected (max depth: {max_depth}). "
                "Consider refactoring to reduce complexity."
            ),
            rule=IssueRule.DEEP_NESTING,
        )]
    return []


def _for_else_issue(code: str, lines: list[str]) -> list[Issue]:
    # Whole-text check: the "if" need not sit inside the for/else block.
    if "if " not in code or "break" in code:
        return []
    header = first_for_in_header(code)
    if header is None or not ELSE_CLAUSE_PATTERN.search(code, header.end):
        return []
    first_for_line = next(
        (number for number, line in enumerate(lines, start=1) if "for " in line),
        1,
    )
    return [Issue(
        severity=Severity.HIGH,
        description=(
            "Logical Issue: 'for...else' loop used with an 'if' condition but no 'break'. "
            "The 'else' block will execute even if the 'if' condition is met within the loop."
        ),
        line=first_for_line,
        rule=IssueRule.FOR_ELSE,
    )]


def detect_issues(code: str, metrics: LineMetrics, complexity_proxy: int) -> list[Issue]:
    """
    Run every detection rule and collect the issues they raise.

    Rules are independent; all that apply are reported, in a fixed order.

    Args:
        code: Source code in any language
        metrics: Line metrics for the same code
        complexity_proxy: Cyclomatic complexity proxy for the same code

    Returns:
        Issues in display order
    """
    lines = split_lines(code)
    return [
        *_long_line_issues(lines),
        *_eval_issue(code, lines),
        *_complexity_issue(complexity_proxy),
        *_documentation_issue(metrics),
        *_debug_output_issue(code),
        *_nesting_issue(lines),
        *_for_else_issue(code, lines),
    ]
