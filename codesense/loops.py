"""
Loop header detection.

Headers are located one line at a time with plain keyword searches rather
than a single pattern over the whole text, so scanning stays linear in the
input length. A header never spans lines.
"""

import re
from typing import Iterator, NamedTuple, Optional


BRACE_LOOP_PATTERN = re.compile(r"\b(?:for|while)\s*\(", re.IGNORECASE)
PAREN_WHILE_PATTERN = re.compile(r"\bwhile\s*\(", re.IGNORECASE)
FOR_KEYWORD_PATTERN = re.compile(r"\bfor\s", re.IGNORECASE)
WHILE_KEYWORD_PATTERN = re.compile(r"\bwhile\s", re.IGNORECASE)
IN_KEYWORD_PATTERN = re.compile(r"\sin\s", re.IGNORECASE)

# "/= 2", "* 2", "/2"
HALVING_STEP_PATTERN = re.compile(r"[/*]\s*(?:=\s*)?[0-9]")


class LoopHeader(NamedTuple):
    line: int
    end: int  # offset just past the header in the full text


def for_in_header_end(line: str) -> Optional[int]:
    """Offset just past the colon of a ``for x in y:`` header, or None."""
    keyword = FOR_KEYWORD_PATTERN.search(line)
    if keyword is None:
        return None
    # the loop target needs at least one character
    membership = IN_KEYWORD_PATTERN.search(line, keyword.end() + 1)
    if membership is None:
        return None
    colon = line.find(":", membership.end())
    return colon + 1 if colon != -1 else None


def while_header_end(line: str) -> Optional[int]:
    """Offset just past the colon of a ``while cond:`` header, or None."""
    keyword = WHILE_KEYWORD_PATTERN.search(line)
    if keyword is None:
        return None
    colon = line.find(":", keyword.end())
    return colon + 1 if colon != -1 else None


def iter_loop_headers(code: str) -> Iterator[LoopHeader]:
    """
    Yield every loop header in ``code``.

    A line contributes each of its ``for (``/``while (`` headers; a line
    without one contributes at most one indentation-style header.
    """
    offset = 0
    for number, line in enumerate(code.split("\n"), start=1):
        brace_loops = list(BRACE_LOOP_PATTERN.finditer(line))
        if brace_loops:
            for match in brace_loops:
                yield LoopHeader(number, offset + match.end())
        else:
            end = for_in_header_end(line)
            if end is None:
                end = while_header_end(line)
            if end is not None:
                yield LoopHeader(number, offset + end)
        offset += len(line) + 1


def count_loop_headers(code: str) -> int:
    return sum(1 for _ in iter_loop_headers(code))


def first_for_in_header(code: str) -> Optional[LoopHeader]:
    offset = 0
    for number, line in enumerate(code.split("\n"), start=1):
        end = for_in_header_end(line)
        if end is not None:
            return LoopHeader(number, offset + end)
        offset += len(line) + 1
    return None


def _halving_in_parens(line: str) -> bool:
    keyword = PAREN_WHILE_PATTERN.search(line)
    if keyword is None:
        return False
    step = HALVING_STEP_PATTERN.search(line, keyword.end())
    return step is not None and line.find(")", step.end()) != -1


def _halving_before_colon(line: str) -> bool:
    position = 0
    while True:
        keyword = WHILE_KEYWORD_PATTERN.search(line, position)
        if keyword is None:
            return False
        colon = line.find(":", keyword.end())
        if colon == -1:
            return False
        if HALVING_STEP_PATTERN.search(line, keyword.end(), colon):
            return True
        position = colon + 1


def has_halving_loop(code: str) -> bool:
    """True when a ``while`` condition divides or multiplies by a constant."""
    return any(
        _halving_in_parens(line) or _halving_before_colon(line)
        for line in code.split("\n")
    )
