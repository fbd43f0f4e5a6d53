"""Regular-expression helpers for import lines and verification codes."""

from __future__ import annotations

import re

__all__ = [
    "PatternError",
    "compile_pattern",
    "parse_import_line",
    "extract_verify_code",
]


class PatternError(ValueError):
    """Raised when a configured pattern is empty or not a valid expression."""


def compile_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile ``pattern``, raising :class:`PatternError` if it is empty or invalid."""
    if isinstance(pattern, re.Pattern):
        return pattern
    if not pattern:
        raise PatternError("pattern must not be empty")
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternError(f"invalid pattern {pattern!r}: {exc}") from exc


def parse_import_line(
    line: str, pattern: str | re.Pattern[str]
) -> tuple[str, str] | None:
    """Split an import line into ``(number, link)`` with the number pattern.

    The pattern's first group is the number and its second the link.  A line
    that is empty, does not match, or yields an empty number gives ``None``.
    """
    compiled = compile_pattern(pattern)
    if not line:
        return None
    match = compiled.search(line)
    if match is None or compiled.groups < 2:
        return None
    number = match.group(1) or ""
    link = match.group(2) or ""
    if not number:
        return None
    return number, link


def extract_verify_code(
    content: str, pattern: str | re.Pattern[str]
) -> str | None:
    """Return the first group of the first match of ``pattern`` in ``content``.

    ``None`` means nothing matched or the pattern has no group.
    """
    if isinstance(pattern, str) and not pattern:
        return None
    compiled = compile_pattern(pattern)
    if compiled.groups < 1:
        return None
    match = compiled.search(content)
    if match is None:
        return None
    return match.group(1) or ""