"""Number records and the data file format that stores them.

A data file holds records joined by ``||-||``; each record is
``number||verify_code||link||remark``.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

RECORD_SEPARATOR = "||-||"
FIELD_SEPARATOR = "||"


@dataclass
class NumberRecord:
    """One entry of the number library."""

    number: str
    verify_code: str = ""
    link: str = ""
    remark: str = ""

    def to_line(self) -> str:
        """Return the record in its stored ``a||b||c||d`` form."""
        return FIELD_SEPARATOR.join(
            (self.number, self.verify_code, self.link, self.remark)
        )


def _split_records(text: str) -> list[str]:
    if RECORD_SEPARATOR not in text:
        return [text]
    parts = text.split(RECORD_SEPARATOR)
    # A trailing separator does not start a new record.
    if parts[-1] == "":
        parts.pop()
    return parts


def _parse_record(raw: str) -> NumberRecord | None:
    number, sep, remaining = raw.partition(FIELD_SEPARATOR)
    if not sep or not number:
        return None
    verify_code = ""
    remark = ""
    code, sep, rest = remaining.partition(FIELD_SEPARATOR)
    if sep:
        verify_code = code
        link, sep, tail = rest.partition(FIELD_SEPARATOR)
        if sep:
            remark = tail
    else:
        link = remaining
    return NumberRecord(number, verify_code, link, remark)


def parse_records(text: str) -> list[NumberRecord]:
    """Parse data file content into records.

    Records without a field separator or with an empty number are skipped,
    and only the first record for each number is kept.
    """
    if not text:
        return []
    records: list[NumberRecord] = []
    seen: set[str] = set()
    for raw in _split_records(text):
        record = _parse_record(raw)
        if record is None or record.number in seen:
            continue
        seen.add(record.number)
        records.append(record)
    return records


def format_records(records: Iterable[NumberRecord]) -> str:
    """Render records as data file content, skipping those without a number."""
    return RECORD_SEPARATOR.join(r.to_line() for r in records if r.number)


def _decode_file(data: bytes) -> str:
    if data.startswith((b"\xff\xfe", b"\xfe\xff")):
        return data.decode("utf-16")
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("gb18030", errors="replace")


def load_records(path: str | os.PathLike[str]) -> list[NumberRecord]:
    """Read records from a data file; a missing file gives no records.

    Line breaks in the file are ignored: its lines are joined before parsing.
    """
    file_path = Path(path)
    if not file_path.exists():
        return []
    text = _decode_file(file_path.read_bytes())
    return parse_records("".join(text.splitlines()))


def save_records(
    path: str | os.PathLike[str], records: Iterable[NumberRecord]
) -> int:
    """Write records to a data file and return how many were written."""
    kept = [r for r in records if r.number]
    Path(path).write_text(format_records(kept), encoding="utf-8")
    return len(kept)