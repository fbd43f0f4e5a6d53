"""Fetching of verification pages and extraction of their codes."""

from __future__ import annotations

import re
import urllib.error
import urllib.request

from numberlib.encoding import decode_content
from numberlib.extract import compile_pattern, extract_verify_code

__all__ = ["FetchError", "normalize_link", "fetch_content", "fetch_verify_code"]

DEFAULT_TIMEOUT = 10.0


class FetchError(Exception):
    """Raised when a page cannot be read or holds no verification code."""


def normalize_link(link: str) -> str:
    """Prefix ``http://`` unless the link already starts with http:// or https://."""
    lowered = link.lower()
    if lowered.startswith(("http://", "https://")):
        return link
    return "http://" + link


def fetch_content(link: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Download the page at ``link`` and return it decoded to text."""
    url = normalize_link(link)
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            data = response.read()
    except (urllib.error.URLError, OSError, ValueError) as exc:
        raise FetchError(f"无法访问链接: {exc}") from exc
    text = decode_content(data)
    if not text:
        raise FetchError("内容为空")
    return text


def fetch_verify_code(
    link: str,
    pattern: str | re.Pattern[str],
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Fetch ``link`` and return the code the verify pattern finds in it.

    Raises :class:`FetchError` when the page fails or nothing matches, and
    :class:`numberlib.extract.PatternError` for a bad pattern.
    """
    compiled = compile_pattern(pattern)
    content = fetch_content(link, timeout)
    code = extract_verify_code(content, compiled)
    if code is None:
        raise FetchError("未匹配到验证码")
    return code