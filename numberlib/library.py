"""The in-memory number library: records, import and editing."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from numberlib.config import Config
from numberlib.extract import compile_pattern, parse_import_line
from numberlib.records import NumberRecord

__all__ = ["ImportResult", "NumberLibrary"]

MAX_REPORTED_FAILURES = 5


@dataclass
class ImportResult:
    """Outcome of importing lines: counts and the first few failed lines."""

    imported: int = 0
    failed: int = 0
    failed_lines: list[str] = field(default_factory=list)


class NumberLibrary:
    """An ordered collection of number records with unique numbers on import."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config if config is not None else Config()
        self._records: list[NumberRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[NumberRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> NumberRecord:
        return self._records[index]

    def add(
        self,
        number: str,
        verify_code: str = "",
        link: str = "",
        remark: str = "",
    ) -> NumberRecord:
        """Append a record and return it."""
        record = NumberRecord(number, verify_code, link, remark)
        self._records.append(record)
        return record

    def contains(self, number: str) -> bool:
        """Tell whether a record with this number exists."""
        return any(r.number == number for r in self._records)

    def merge(self, records: Iterable[NumberRecord]) -> int:
        """Add records whose number is new and not empty; return how many."""
        added = 0
        for record in records:
            if not record.number or self.contains(record.number):
                continue
            self.add(record.number, record.verify_code, record.link, record.remark)
            added += 1
        return added

    def import_line(self, line: str) -> bool:
        """Parse one line with the number pattern and add it if the number is new.

        Raises :class:`numberlib.extract.PatternError` for a bad pattern.
        """
        parsed = parse_import_line(line, self.config.number_regex)
        if parsed is None:
            return False
        number, link = parsed
        if self.contains(number):
            return False
        self.add(number, "", link, "")
        return True

    def import_lines(self, lines: Iterable[str]) -> ImportResult:
        """Import each non-blank line, trimmed, and report what happened."""
        pattern = compile_pattern(self.config.number_regex)
        result = ImportResult()
        for raw in lines:
            line = raw.strip()
            if not line:
                continue
            parsed = parse_import_line(line, pattern)
            if parsed is not None and not self.contains(parsed[0]):
                self.add(parsed[0], "", parsed[1], "")
                result.imported += 1
                continue
            result.failed += 1
            if len(result.failed_lines) < MAX_REPORTED_FAILURES:
                result.failed_lines.append(line)
        return result

    def set_remark(self, index: int, remark: str) -> None:
        """Replace the remark of the record at ``index``."""
        self._check_index(index)
        self._records[index].remark = remark

    def delete(self, index: int) -> NumberRecord:
        """Remove and return the record at ``index``."""
        self._check_index(index)
        return self._records.pop(index)

    def delete_all(self) -> None:
        """Remove every record."""
        self._records.clear()

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._records):
            raise IndexError(f"no record at index {index}")