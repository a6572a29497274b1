"""Core module for heuristic code quality analysis."""

from .models import AnalysisReport, ComplexityLabel, Issue, Severity, Status
from .analyzer import CodeQualityAnalyzer, analyze_code
from .errors import AnalysisError, InputTooLargeError

__all__ = [
    "AnalysisReport",
    "ComplexityLabel",
    "Issue",
    "Severity",
    "Status",
    "CodeQualityAnalyzer",
    "analyze_code",
    "AnalysisError",
    "InputTooLargeError",
]
