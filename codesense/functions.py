"""
Function body extraction for recursion checks.

Recognizes two surface syntaxes without parsing: brace-delimited definitions
(C/C++/Java/JavaScript-like) and ``def`` blocks delimited by indentation.
Matches inside strings or comments are not excluded.
"""

import logging
import re
from typing import Optional

from .models import FunctionSpan


_IDENT = r"[A-Za-z_$][\w$]*"
_TYPE_KEYWORDS = r"(?:struct|class|void|int|float|char|long|double)"
_CONTROL_KEYWORDS = r"(?:if|for|while|switch|catch|return)"
# parameter lists hold no nested parens or braces
_PARAMS = r"\([^(){}]*\)"

FUNCTION_HEADER_PATTERN = re.compile(
    # int name(params) {
    rf"\b{_TYPE_KEYWORDS}\s+(?:\*\s*)?(?P<typed_name>{_IDENT})\s*{_PARAMS}\s*\{{"
    # name(params) {
    rf"|(?<![\w$])(?!{_CONTROL_KEYWORDS}\b)(?P<loose_name>{_IDENT})\s*{_PARAMS}\s*\{{"
    # def name(params):
    rf"|\bdef\s+(?P<def_name>{_IDENT})\s*{_PARAMS}\s*(?:->[^:\n(){{}}]*)?:[^\S\n]*"
)
DEF_BODY_END_PATTERN = re.compile(rf"\n(?:def\b|class\s|@|{_IDENT}\s*\()")


def _dedent_block(block: str) -> str:
    """Strip the minimum leading whitespace shared by non-blank lines."""
    lines = block.split("\n")
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    min_indent = min(indents) if indents else 0
    if min_indent <= 0:
        return block
    return "\n".join(
        line[min_indent:] if len(line) >= min_indent else line.strip()
        for line in lines
    )


def extract_function_spans(code: str) -> list[FunctionSpan]:
    """
    Find function-like definitions and their bodies.

    Brace bodies end at the first closing brace, so nested blocks truncate
    them. ``def`` bodies run until the next top-level ``def``, ``class``,
    decorator, top-level call, or the end of the text.

    Returns:
        Spans in order of appearance; an empty list is a valid result.
    """
    spans: list[FunctionSpan] = []
    last_close = code.rfind("}")
    position = 0

    while True:
        header = FUNCTION_HEADER_PATTERN.search(code, position)
        if header is None:
            break

        if header.group("def_name") is not None:
            boundary = DEF_BODY_END_PATTERN.search(code, header.end())
            end = boundary.start() if boundary else len(code)
            name, body = header.group("def_name"), _dedent_block(code[header.end():end])
            position = end
        elif header.end() > last_close:
            # no closing brace left for this body
            position = header.start() + 1
            continue
        else:
            close = code.find("}", header.end())
            name = header.group("typed_name") or header.group("loose_name")
            body = code[header.end():close]
            position = close + 1

        body = body.strip()
        if name and body:
            spans.append(FunctionSpan(name=name.strip(), body=body))

    return spans


def is_recursive(spans: list[FunctionSpan], logger: Optional[logging.Logger] = None) -> bool:
    """True when any span's body calls that span's own name."""
    for span in spans:
        if re.search(rf"\b{re.escape(span.name)}\s*\(", span.body):
            if logger is not None:
                logger.debug("Recursion detected in '%s'", span.name)
            return True
    return False
