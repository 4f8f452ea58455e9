"""
Footnote usage tracking for one render pass.

A FootnoteUsageTable records the order in which reference keys are first
cited while a document renders. Each pass gets its own table through
`footnote_pass()`, which closes the table when the block exits (even on error)
and makes the extracted ordinals available to the caller.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class FootnoteUsageTable:
    """Reference key -> 0-based ordinal of its first citation in one pass."""

    def __init__(self):
        self._ordinals: Dict[str, int] = {}
        self._lock = threading.Lock()
        self._closed = False

    def record(self, key: str) -> int:
        """
        Record a citation of `key` and return its ordinal.

        Raises:
            RuntimeError: If the pass this table belongs to has ended
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("Footnote table used after its render pass ended")
            if key not in self._ordinals:
                self._ordinals[key] = len(self._ordinals)
            return self._ordinals[key]

    def close(self) -> Dict[str, int]:
        """End the pass and return the recorded ordinals."""
        with self._lock:
            self._closed = True
            return dict(self._ordinals)

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._ordinals)

    def __contains__(self, key: str) -> bool:
        return key in self._ordinals


@contextmanager
def footnote_pass() -> Iterator[FootnoteUsageTable]:
    """
    Provide a fresh table for one render pass.

    Example:
        with footnote_pass() as table:
            html = template.render(footnotes=table)
        ordinals = table.close()  # already closed; returns the same mapping
    """
    table = FootnoteUsageTable()
    try:
        yield table
    finally:
        table.close()
