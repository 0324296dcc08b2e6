"""Invoice numbering.

Numbers look like ``INV-20260119-143005-0042``: the creation timestamp plus a
four-digit sequence from a process-wide counter. The counter starts at zero
when the process starts, wraps at 10000 and is not persisted, so numbers are
unique only on a best-effort basis. A deployment that needs guaranteed
uniqueness should derive numbers from a store-backed sequence instead.
"""

import itertools
import threading
from datetime import UTC, datetime

SEQUENCE_MODULUS = 10000


class InvoiceNumberSequence:
    """Thread-safe in-process counter for invoice numbers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counter = itertools.count(1)

    def next_sequence(self) -> int:
        with self._lock:
            return next(self._counter) % SEQUENCE_MODULUS

    def next_number(self, now: datetime | None = None) -> str:
        now = now or datetime.now(UTC)
        return f"INV-{now:%Y%m%d-%H%M%S}-{self.next_sequence():04d}"


_current_sequence: InvoiceNumberSequence | None = None
_sequence_lock = threading.Lock()


def get_sequence() -> InvoiceNumberSequence:
    """Return the process-wide invoice number sequence."""
    global _current_sequence
    with _sequence_lock:
        if _current_sequence is None:
            _current_sequence = InvoiceNumberSequence()
        return _current_sequence


def reset_sequence() -> None:
    """Restart numbering from zero (useful for tests)."""
    global _current_sequence
    with _sequence_lock:
        _current_sequence = None
