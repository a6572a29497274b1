"""Exceptions raised by the analysis engine."""

from typing import Optional


class AnalysisError(Exception):
    """Analysis could not produce a report."""

    def __init__(self, message: str, code_length: Optional[int] = None):
        self.message = message
        self.code_length = code_length
        super().__init__(message)


class InputTooLargeError(AnalysisError):
    """Input exceeds the analyzer's size ceiling."""

    def __init__(self, code_length: int, limit: int):
        self.limit = limit
        super().__init__(
            f"Code length {code_length} exceeds the analysis limit of {limit} characters",
            code_length=code_length,
        )
