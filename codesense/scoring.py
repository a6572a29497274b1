"""
Score aggregation.

Pure arithmetic over line metrics, the complexity proxy and detected issues.
Issue categories are counted by the rule that produced them.
"""

from .metrics import round_half_up
from .models import Issue, IssueRule, LineMetrics, Severity, Status


SEVERITY_WEIGHTS: dict[Severity, int] = {
    Severity.CRITICAL: 40,
    Severity.HIGH: 25,
    Severity.MEDIUM: 15,
    Severity.LOW: 7,
    Severity.INFO: 2,
}

EXCELLENT_THRESHOLD = 80
NEEDS_IMPROVEMENT_THRESHOLD = 50

DISPLAY_CLASSES: dict[Status, str] = {
    Status.EXCELLENT: "excellent",
    Status.NEEDS_IMPROVEMENT: "needs-improvement",
    Status.POOR_QUALITY: "poor-quality",
}


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _count_rule(issues: list[Issue], rule: IssueRule) -> int:
    return sum(1 for issue in issues if issue.rule is rule)


def compute_score(issues: list[Issue]) -> int:
    """100 minus the severity weight of every issue, clamped to [0, 100]."""
    penalty = sum(SEVERITY_WEIGHTS[issue.severity] for issue in issues)
    return int(_clamp(100 - penalty, 0, 100))


def compute_readability(metrics: LineMetrics, issues: list[Issue]) -> float:
    """Readability on a 0-10 scale, rounded to one decimal."""
    readability = 10.0
    readability -= max(0.0, (20 - metrics.comment_percentage) / 5)
    readability -= _count_rule(issues, IssueRule.LONG_LINE) * 1
    readability -= _count_rule(issues, IssueRule.DEEP_NESTING) * 1.5
    return round_half_up(_clamp(readability, 0.0, 10.0))


def compute_maintainability(complexity_proxy: int, issues: list[Issue]) -> int:
    """Maintainability on a 0-100 scale; deep nesting is penalized as a complexity issue."""
    maintainability = 100 - complexity_proxy * 3
    maintainability -= (
        _count_rule(issues, IssueRule.COMPLEXITY) + _count_rule(issues, IssueRule.DEEP_NESTING)
    ) * 10
    maintainability -= _count_rule(issues, IssueRule.FOR_ELSE) * 20
    return int(_clamp(round(maintainability), 0, 100))


def status_for_score(score: int) -> Status:
    if score >= EXCELLENT_THRESHOLD:
        return Status.EXCELLENT
    if score >= NEEDS_IMPROVEMENT_THRESHOLD:
        return Status.NEEDS_IMPROVEMENT
    return Status.POOR_QUALITY


def display_class(status: Status) -> str:
    """CSS class a presentation layer uses for a status."""
    return DISPLAY_CLASSES[status]


def aggregate_scores(
    metrics: LineMetrics,
    complexity_proxy: int,
    issues: list[Issue],
) -> tuple[int, Status, float, int]:
    """
    Combine metrics and issues into the report's headline numbers.

    Returns:
        Tuple of (score, status, readability, maintainability)
    """
    score = compute_score(issues)
    return (
        score,
        status_for_score(score),
        compute_readability(metrics, issues),
        compute_maintainability(complexity_proxy, issues),
    )
