"""Tracking of verification codes that are being polled for each record."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["VerifyStatus", "VerifyOutcome", "VerifyTracker"]


@dataclass
class VerifyStatus:
    """Polling state of one record: how often the last code was seen."""

    item: int
    match_count: int = 0
    last_code: str = ""


@dataclass(frozen=True)
class VerifyOutcome:
    """What one fetch result means for a record and the text to show for it."""

    item: int
    text: str
    code: str | None = None
    match_count: int = 0
    confirmed: bool = False


class VerifyTracker:
    """Counts repeated codes per record until one is seen often enough.

    A code is confirmed once the same code has been reported
    ``required_matches`` times in a row; a different code restarts the count.
    """

    def __init__(self, required_matches: int) -> None:
        self.required_matches = required_matches
        self._active: dict[int, VerifyStatus] = {}

    def start(self, item: int) -> VerifyStatus:
        """Begin polling ``item``; raises ValueError if it is already polled."""
        if item in self._active:
            raise ValueError(f"item {item} is already being verified")
        status = VerifyStatus(item)
        self._active[item] = status
        return status

    def stop(self, item: int) -> str | None:
        """Stop polling ``item`` and return a summary if a code had been seen.

        Raises KeyError if the item is not being polled.
        """
        try:
            status = self._active.pop(item)
        except KeyError:
            raise KeyError(f"item {item} is not being verified") from None
        if status.match_count > 0 and status.last_code:
            return (
                f"已停止({status.match_count}/{self.required_matches})"
                f"：{status.last_code}"
            )
        return None

    def stop_all(self) -> list[int]:
        """Stop polling every item and return the items that were stopped."""
        items = list(self._active)
        self._active.clear()
        return items

    def is_active(self, item: int) -> bool:
        """Tell whether ``item`` is being polled."""
        return item in self._active

    def active_items(self) -> list[int]:
        """Items being polled, in the order they were started."""
        return list(self._active)

    def record_code(self, item: int, code: str) -> VerifyOutcome | None:
        """Register a fetched code; ``None`` if the item is not being polled.

        A confirmed outcome ends polling of the item.
        """
        status = self._active.get(item)
        if status is None:
            return None
        if status.last_code and status.last_code == code:
            status.match_count += 1
            if status.match_count >= self.required_matches:
                del self._active[item]
                return VerifyOutcome(
                    item, code, code, status.match_count, confirmed=True
                )
        else:
            status.match_count = 1
            status.last_code = code
        return VerifyOutcome(
            item,
            f"获取中({status.match_count}/{self.required_matches})...",
            code,
            status.match_count,
        )

    def record_error(self, item: int, message: str) -> VerifyOutcome:
        """Register a failed fetch; polling of the item continues."""
        status = self._active.get(item)
        count = status.match_count if status is not None else 0
        return VerifyOutcome(item, message, None, count)

    def item_deleted(self, item: int) -> None:
        """Forget ``item`` and shift the items after it down by one."""
        self._active.pop(item, None)
        shifted: dict[int, VerifyStatus] = {}
        for key, status in self._active.items():
            if key > item:
                status.item = key - 1
            shifted[status.item] = status
        self._active = shifted