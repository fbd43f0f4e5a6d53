"""Settings of the number library and their four-line config file."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

DEFAULT_REFRESH_TIME = 3
DEFAULT_VERIFY_COUNT = 3
DEFAULT_NUMBER_REGEX = r"^([^\-]+)----([^\-]+)$"
DEFAULT_VERIFY_CODE_REGEX = r"(\d{6})(?=[^\d]*短信登录验证码)"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Config:
    """Refresh interval in seconds, matches required, and the two patterns."""

    refresh_time: int = DEFAULT_REFRESH_TIME
    verify_count: int = DEFAULT_VERIFY_COUNT
    number_regex: str = DEFAULT_NUMBER_REGEX
    verify_code_regex: str = DEFAULT_VERIFY_CODE_REGEX


def _to_int(text: str) -> int:
    """Read a leading integer the lenient way; text without one gives 0."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _read_text(path: Path) -> str:
    data = path.read_bytes()
    if data.startswith((b"\xff\xfe", b"\xfe\xff")):
        return data.decode("utf-16")
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("gb18030", errors="replace")


def load_config(path: str | os.PathLike[str]) -> Config:
    """Load settings; a missing file or missing lines keep the defaults.

    The lines are, in order: refresh time, verify count, number pattern,
    verify code pattern.
    """
    config = Config()
    file_path = Path(path)
    if not file_path.exists():
        return config
    lines = _read_text(file_path).splitlines()
    if len(lines) > 0:
        config.refresh_time = _to_int(lines[0])
    if len(lines) > 1:
        config.verify_count = _to_int(lines[1])
    if len(lines) > 2:
        config.number_regex = lines[2]
    if len(lines) > 3:
        config.verify_code_regex = lines[3]
    return config


def save_config(path: str | os.PathLike[str], config: Config) -> None:
    """Write settings as four lines."""
    lines = (
        str(config.refresh_time),
        str(config.verify_count),
        config.number_regex,
        config.verify_code_regex,
    )
    Path(path).write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")