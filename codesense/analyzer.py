"""
Code Quality Analyzer.

Runs the textual analysis pipeline over a snippet and builds the report.
"""

import logging
from typing import Optional

from .complexity import classify_space_complexity, classify_time_complexity
from .errors import AnalysisError, InputTooLargeError
from .functions import extract_function_spans
from .issues import detect_issues
from .metrics import estimate_complexity_proxy, extract_line_metrics
from .models import AnalysisReport, ReportMetrics
from .scoring import aggregate_scores


class CodeQualityAnalyzer:
    """
    Heuristic code quality analyzer.

    Holds no state between calls, so one instance can serve concurrent
    requests. Debug traces go to the injected logger.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        max_input_length: Optional[int] = None,
    ):
        """
        Args:
            logger: Logger for debug traces (defaults to the ``codesense`` logger)
            max_input_length: Reject longer inputs instead of scanning them
        """
        self._logger = logger or logging.getLogger("codesense")
        self._max_input_length = max_input_length

    def analyze(self, code: str) -> AnalysisReport:
        """
        Analyze a source code snippet.

        Args:
            code: Source code string to analyze (any language)

        Returns:
            AnalysisReport with score, status, metrics and issues

        Raises:
            InputTooLargeError: If code exceeds ``max_input_length``
            AnalysisError: If any stage fails unexpectedly
        """
        if self._max_input_length is not None and len(code) > self._max_input_length:
            raise InputTooLargeError(len(code), self._max_input_length)

        try:
            line_metrics = extract_line_metrics(code)
            complexity_proxy = estimate_complexity_proxy(code)
            issues = detect_issues(code, line_metrics, complexity_proxy)
            score, status, readability, maintainability = aggregate_scores(
                line_metrics, complexity_proxy, issues
            )

            spans = extract_function_spans(code)
            time_complexity = classify_time_complexity(code, spans, self._logger)
            space_complexity = classify_space_complexity(code, spans, self._logger)

            report = AnalysisReport(
                score=score,
                status=status,
                metrics=ReportMetrics(
                    loc=line_metrics.code_lines,
                    commentPercentage=line_metrics.comment_percentage,
                    cyclomaticComplexityProxy=complexity_proxy,
                    readability=readability,
                    maintainability=maintainability,
                    timeComplexity=time_complexity,
                    spaceComplexity=space_complexity,
                ),
                issues=issues,
            )
        except Exception as e:
            raise AnalysisError(f"Analysis failed: {e}", code_length=len(code)) from e

        self._logger.debug(
            "Analysis complete: score=%d status=%s time=%s space=%s issues=%d",
            report.score,
            report.status.value,
            time_complexity.value,
            space_complexity.value,
            len(issues),
        )
        return report


def analyze_code(code: str, logger: Optional[logging.Logger] = None) -> AnalysisReport:
    """Analyze ``code`` with a default analyzer."""
    return CodeQualityAnalyzer(logger=logger).analyze(code)
