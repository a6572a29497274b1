"""
Time and space complexity classification.

Both classifiers consult the signature override table first, then walk an
ordered chain of textual heuristics where the first match wins. The labels
are approximations and can be wrong on arbitrary input.
"""

import logging
import re
from typing import Optional

from .functions import is_recursive
from .loops import count_loop_headers, has_halving_loop
from .models import ComplexityLabel, FunctionSpan
from .signatures import match_signature


BRANCH_KEYWORD_PATTERN = re.compile(r"\b(?:if|else|switch|try|except|elif)\b", re.IGNORECASE)
EXPONENTIAL_BRANCH_THRESHOLD = 5

SORT_SEARCH_CALLS = (
    "sort(", "qsort(", "mergesort(", "quicksort(", "heapify(", "heapsort(", "binarysearch(",
)

SEARCH_CALL_PATTERN = re.compile(r"search\s*\(", re.IGNORECASE)
CHILD_POINTER_PATTERN = re.compile(r"->left|->right|\.left|\.right", re.IGNORECASE)
RETURN_SEARCH_PATTERN = re.compile(r"\s*;\s*return\s+search", re.IGNORECASE)
HIGHER_ORDER_ITERATION_PATTERN = re.compile(r"\b(?:forEach|map|filter|reduce)\b\s*\(", re.IGNORECASE)

DYNAMIC_ALLOCATION_PATTERN = re.compile(
    r"\b(?:malloc|calloc|realloc)\b"
    r"|\bnew\s+(?:Array|Vector|List|Map|Set|Object|Promise|string)\b"
    r"|\bnew\s+(?:int|float|char|double)\s*\["
    r"|std::(?:vector|map|set)<"
    r"|\b(?:ArrayList|HashMap|HashSet|LinkedList|TreeMap|TreeSet)<",
    re.IGNORECASE,
)
# innermost bracket or brace groups
LITERAL_GROUPING_PATTERN = re.compile(r"\[[^\[\]]*\]|\{[^{}]*\}")
STRING_CONCATENATION_PATTERN = re.compile(r"\+\s*[\"'`].*?[\"'`]")
LITERAL_GROUPING_THRESHOLD = 2
STRING_CONCATENATION_THRESHOLD = 5


def _count(pattern: re.Pattern, text: str) -> int:
    return sum(1 for _ in pattern.finditer(text))


def _has_nested_loops(code: str) -> bool:
    # a nested loop always shows up as a second header
    return count_loop_headers(code) >= 2


def _has_tree_descent(code: str) -> bool:
    """``search(node->left ...); return search`` style binary tree descent."""
    close = -1
    for call in SEARCH_CALL_PATTERN.finditer(code):
        # calls inside an argument list already checked share its closing paren
        if call.end() <= close:
            continue
        close = code.find(")", call.end())
        if close == -1:
            return False
        if CHILD_POINTER_PATTERN.search(code, call.end(), close) and RETURN_SEARCH_PATTERN.match(code, close + 1):
            return True
    return False


def classify_time_complexity(
    code: str,
    spans: list[FunctionSpan],
    logger: Optional[logging.Logger] = None,
) -> ComplexityLabel:
    """
    Estimate the time complexity of a snippet.

    Args:
        code: Source code in any language
        spans: Function spans extracted from the same code
        logger: Receives debug traces of the decision taken

    Returns:
        Exactly one ComplexityLabel
    """
    logger = logger or logging.getLogger(__name__)

    override = match_signature(code)
    if override is not None:
        logger.debug("Signature '%s' matched, time complexity %s", override.name, override.time.value)
        return override.time

    recursive = is_recursive(spans, logger)
    lowered = code.lower()

    if recursive and _count(BRANCH_KEYWORD_PATTERN, code) >= EXPONENTIAL_BRANCH_THRESHOLD:
        return ComplexityLabel.EXPONENTIAL_OR_FACTORIAL

    if _has_nested_loops(code):
        return ComplexityLabel.QUADRATIC

    if any(call in lowered for call in SORT_SEARCH_CALLS):
        return ComplexityLabel.LINEARITHMIC

    if _has_tree_descent(code) or has_halving_loop(code):
        return ComplexityLabel.LOGARITHMIC

    if count_loop_headers(code) or HIGHER_ORDER_ITERATION_PATTERN.search(code):
        return ComplexityLabel.LINEAR

    return ComplexityLabel.CONSTANT


def classify_space_complexity(
    code: str,
    spans: list[FunctionSpan],
    logger: Optional[logging.Logger] = None,
) -> ComplexityLabel:
    """
    Estimate the auxiliary space complexity of a snippet.

    Growable allocations, several bracket/brace literals, or repeated string
    concatenation mean linear space; otherwise recursion implies stack space
    proportional to depth.
    """
    logger = logger or logging.getLogger(__name__)

    override = match_signature(code)
    if override is not None:
        logger.debug("Signature '%s' matched, space complexity %s", override.name, override.space.value)
        return override.space

    if (
        DYNAMIC_ALLOCATION_PATTERN.search(code)
        or _count(LITERAL_GROUPING_PATTERN, code) > LITERAL_GROUPING_THRESHOLD
        or _count(STRING_CONCATENATION_PATTERN, code) > STRING_CONCATENATION_THRESHOLD
    ):
        return ComplexityLabel.LINEAR

    if is_recursive(spans, logger):
        return ComplexityLabel.LINEAR

    return ComplexityLabel.CONSTANT
