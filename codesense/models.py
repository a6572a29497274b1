"""
Data models for code quality analysis.

Frozen Pydantic models; every record is built fresh per analysis.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Issue severity levels."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class IssueRule(str, Enum):
    """Detection rule that produced an issue."""
    LONG_LINE = "long_line"
    EVAL = "eval"
    COMPLEXITY = "complexity"
    LOW_DOCUMENTATION = "low_documentation"
    DEBUG_OUTPUT = "debug_output"
    DEEP_NESTING = "deep_nesting"
    FOR_ELSE = "for_else"


class ComplexityLabel(str, Enum):
    """Big-O labels the classifiers can assign."""
    CONSTANT = "O(1)"
    LOGARITHMIC = "O(log N)"
    LINEAR = "O(N)"
    LINEARITHMIC = "O(N log N)"
    QUADRATIC = "O(N^2)"
    CUBIC = "O(N^3)"
    EXPONENTIAL = "O(2^N)"
    EXPONENTIAL_OR_FACTORIAL = "O(2^N) or O(N!)"


class Status(str, Enum):
    """Overall quality tier derived from the score."""
    EXCELLENT = "Excellent"
    NEEDS_IMPROVEMENT = "Needs Improvement"
    POOR_QUALITY = "Poor Quality"


class LineMetrics(BaseModel):
    """Blank/comment/code line counts for a snippet."""
    model_config = ConfigDict(frozen=True)

    total_lines: int = Field(..., ge=0)
    code_lines: int = Field(..., ge=0)
    comment_lines: int = Field(..., ge=0)
    blank_lines: int = Field(..., ge=0)
    comment_percentage: float = Field(..., ge=0, le=100)


class Issue(BaseModel):
    """
    A detected code quality issue.

    ``rule`` is kept for score aggregation only and is not serialized, so the
    wire shape is ``{severity, description, line}``.
    """
    model_config = ConfigDict(frozen=True)

    severity: Severity = Field(..., description="Issue severity")
    description: str = Field(..., description="Human readable explanation")
    line: int = Field(default=1, ge=1, description="1-based line the issue is anchored to")
    rule: Optional[IssueRule] = Field(default=None, exclude=True)


class FunctionSpan(BaseModel):
    """A function-like definition found in raw text."""
    model_config = ConfigDict(frozen=True)

    name: str
    body: str


class ReportMetrics(BaseModel):
    """Metrics block of an analysis report."""
    model_config = ConfigDict(frozen=True)

    loc: int = Field(..., ge=0, description="Code lines (blank and comment lines excluded)")
    commentPercentage: float = Field(..., ge=0, le=100)
    cyclomaticComplexityProxy: int = Field(..., ge=1)
    readability: float = Field(..., ge=0, le=10)
    maintainability: int = Field(..., ge=0, le=100)
    timeComplexity: ComplexityLabel
    spaceComplexity: ComplexityLabel


class AnalysisReport(BaseModel):
    """Complete analysis result returned to the caller."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    status: Status
    metrics: ReportMetrics
    issues: list[Issue] = Field(default_factory=list)
