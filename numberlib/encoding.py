"""Decoding of fetched page bytes with garbled-text detection."""

from __future__ import annotations

import locale

_SAMPLE_LENGTH = 200
_GARBLED_RATIO = 0.20


def _is_special(ch: str) -> bool:
    code = ord(ch)
    return (
        code < 32
        or (126 < code < 160 and code != 133)
        or code == 0x3F
        or code == 0xFFFD
    )


def is_garbled(text: str) -> bool:
    """Tell whether more than a fifth of the first 200 characters look broken."""
    sample = text[:_SAMPLE_LENGTH]
    if not sample:
        return False
    special = sum(1 for ch in sample if _is_special(ch))
    return special / len(sample) > _GARBLED_RATIO


def _ansi_codec() -> str:
    return locale.getpreferredencoding(False) or "latin-1"


def _candidate_codecs() -> list[str]:
    seen: list[str] = []
    for name in ("utf-8", _ansi_codec(), "gbk", "cp950"):
        if name.lower() not in (s.lower() for s in seen):
            seen.append(name)
    return seen


def decode_content(data: bytes) -> str:
    """Decode bytes with the first encoding whose result is not garbled.

    UTF-8, the system encoding, GBK and Big5 are tried in turn; when every
    one looks garbled the system encoding's result is returned.
    """
    if not data:
        return ""
    for codec in _candidate_codecs():
        try:
            text = data.decode(codec, errors="replace")
        except LookupError:
            continue
        if text and not is_garbled(text):
            return text
    try:
        return data.decode(_ansi_codec(), errors="replace")
    except LookupError:
        return data.decode("latin-1")