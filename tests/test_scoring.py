"""Tests for score aggregation."""

import pytest

from codesense.models import Issue, IssueRule, LineMetrics, Severity, Status
from codesense.scoring import (
    aggregate_scores,
    compute_maintainability,
    compute_readability,
    compute_score,
    display_class,
    status_for_score,
)


def _issue(severity: Severity, rule: IssueRule = IssueRule.LONG_LINE) -> Issue:
    return Issue(severity=severity, description="test issue", rule=rule)


def _metrics(comment_percentage: float) -> LineMetrics:
    return LineMetrics(
        total_lines=10,
        code_lines=8,
        comment_lines=2,
        blank_lines=0,
        comment_percentage=comment_percentage,
    )


class TestScore:

    def test_clean_code_scores_100(self):
        assert compute_score([]) == 100

    def test_severity_weights(self):
        """Given one issue of each severity, should subtract 40+25+15+7+2."""
        issues = [_issue(severity) for severity in Severity]

        assert compute_score(issues) == 11

    def test_clamped_at_zero(self):
        assert compute_score([_issue(Severity.CRITICAL)] * 3) == 0


class TestReadability:

    def test_low_comments_penalized(self):
        assert compute_readability(_metrics(0.0), []) == 6.0

    def test_well_commented_code_is_capped_at_ten(self):
        assert compute_readability(_metrics(25.0), []) == 10.0

    def test_long_line_and_nesting_penalties(self):
        """Given 2 long lines and 1 nesting issue at 20% comments, should be 10 - 2 - 1.5."""
        issues = [
            _issue(Severity.MEDIUM, IssueRule.LONG_LINE),
            _issue(Severity.MEDIUM, IssueRule.LONG_LINE),
            _issue(Severity.MEDIUM, IssueRule.DEEP_NESTING),
        ]

        assert compute_readability(_metrics(20.0), issues) == 6.5

    def test_other_rules_do_not_affect_readability(self):
        issues = [_issue(Severity.CRITICAL, IssueRule.EVAL)]

        assert compute_readability(_metrics(20.0), issues) == 10.0

    def test_rounded_to_one_decimal(self):
        assert compute_readability(_metrics(12.3), []) == 8.5

    def test_ties_round_up(self):
        """Given 6.25% comments, 7.25 should round to 7.3 rather than to even."""
        assert compute_readability(_metrics(6.25), []) == 7.3

    def test_clamped_at_zero(self):
        issues = [_issue(Severity.MEDIUM, IssueRule.LONG_LINE)] * 10

        assert compute_readability(_metrics(0.0), issues) == 0.0


class TestMaintainability:

    def test_baseline(self):
        assert compute_maintainability(1, []) == 97

    def test_complexity_issue_penalty(self):
        issues = [_issue(Severity.MEDIUM, IssueRule.COMPLEXITY)]

        assert compute_maintainability(12, issues) == 54

    def test_logical_issue_penalty(self):
        issues = [_issue(Severity.HIGH, IssueRule.FOR_ELSE)]

        assert compute_maintainability(3, issues) == 71

    def test_deep_nesting_counts_as_complexity(self):
        issues = [_issue(Severity.MEDIUM, IssueRule.DEEP_NESTING)]

        assert compute_maintainability(1, issues) == 87

    def test_clamped_at_zero(self):
        assert compute_maintainability(40, []) == 0


class TestStatus:

    @pytest.mark.parametrize(
        "score, status, css_class",
        [
            (100, Status.EXCELLENT, "excellent"),
            (80, Status.EXCELLENT, "excellent"),
            (79, Status.NEEDS_IMPROVEMENT, "needs-improvement"),
            (50, Status.NEEDS_IMPROVEMENT, "needs-improvement"),
            (49, Status.POOR_QUALITY, "poor-quality"),
            (0, Status.POOR_QUALITY, "poor-quality"),
        ],
    )
    def test_tiers(self, score, status, css_class):
        assert status_for_score(score) is status
        assert display_class(status) == css_class

    def test_aggregate(self):
        issues = [_issue(Severity.HIGH, IssueRule.FOR_ELSE)]

        assert aggregate_scores(_metrics(20.0), 3, issues) == (75, Status.NEEDS_IMPROVEMENT, 10.0, 71)
