"""
Ordered store of request header lines
"""

import threading
from typing import List, Mapping, Optional, Tuple


class HeaderStore:
    """Ordered ``"key: value"`` header lines owned by one client.

    Lines are appended, never replaced: setting the same key twice sends the
    header twice. No validation of the key or value is performed.
    """

    def __init__(self, initial: Optional[Mapping[str, object]] = None):
        self._lines: List[str] = []
        self._lock = threading.Lock()
        if initial:
            for key, value in initial.items():
                self.append(key, value)

    def append(self, key: str, value) -> None:
        """Append ``"key: value"``; non-string values go through str()"""
        line = f"{key}: {value}"
        with self._lock:
            self._lines.append(line)

    def snapshot(self) -> Tuple[str, ...]:
        """Immutable copy of the current lines, detached from later appends"""
        with self._lock:
            return tuple(self._lines)

    def to_list(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    def __len__(self):
        with self._lock:
            return len(self._lines)

    def __repr__(self):
        return f"HeaderStore({self.to_list()!r})"


def split_header_line(line: str) -> Tuple[str, str]:
    """Split ``"key: value"`` at the first colon.

    A line without a colon becomes a header with an empty value.
    """
    name, sep, value = line.partition(":")
    if not sep:
        return line.strip(), ""
    return name.strip(), value.lstrip()
