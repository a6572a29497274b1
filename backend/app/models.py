"""
Pydantic models for the CodeSense API.
"""
from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from codesense.models import Issue, ReportMetrics, Status

from app.config import settings


class AnalyzeRequest(BaseModel):
    """Request payload for code analysis."""
    code: str = Field(
        ...,
        min_length=1,
        max_length=settings.MAX_CODE_LENGTH,
        description="Source code to analyze",
    )

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        # Filler content, not source code
        if re.search(r"(.)\1{500,}", v):
            raise ValueError("Invalid code content detected")
        return v


class StoredAnalysis(BaseModel):
    """Archived analysis record."""
    id: str = Field(..., description="Opaque archive identifier")
    createdAt: str = Field(..., description="ISO-8601 creation timestamp (UTC)")
    code: str = Field(..., description="Analyzed source code")
    score: int = Field(..., ge=0, le=100)
    status: Status
    metrics: ReportMetrics
    issues: list[Issue] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error response."""
    success: bool = Field(default=False)
    error: str = Field(..., description="Error message")
    message: Optional[str] = Field(default=None, description="Additional error details")

