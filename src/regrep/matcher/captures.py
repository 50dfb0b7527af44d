"""Capture table used to resolve backreferences during one match call."""

import threading
from typing import Dict, Optional


class CaptureTable:
    """Mapping from group id to the text its group captured.

    A table is created per top-level match call and handed down through
    every nested call, so captures never outlive the call that made them.
    Each group is write-once: the first alternative that matched is locked
    in and later writes are ignored.
    """

    def __init__(self) -> None:
        self._captures: Dict[int, str] = {}
        self._lock = threading.Lock()

    def record(self, group_id: int, text: str) -> bool:
        """Record a capture unless the group already has one.

        Returns:
            True if the text was stored, False if the group was locked in.
        """
        with self._lock:
            if group_id in self._captures:
                return False
            self._captures[group_id] = text
            return True

    def get(self, group_id: int) -> Optional[str]:
        with self._lock:
            return self._captures.get(group_id)

    def clear(self) -> None:
        """Forget all captures, before a fresh match attempt."""
        with self._lock:
            self._captures.clear()

    def snapshot(self) -> Dict[int, str]:
        """Return a copy of all captures recorded so far."""
        with self._lock:
            return dict(self._captures)

    def __contains__(self, group_id: object) -> bool:
        with self._lock:
            return group_id in self._captures

    def __len__(self) -> int:
        with self._lock:
            return len(self._captures)

    def __repr__(self) -> str:
        return f"CaptureTable({self.snapshot()!r})"
