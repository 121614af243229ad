"""Message id allocation for outgoing frames."""

from __future__ import annotations

from threading import Lock

from ..models.fields import U16_MAX


class MessageIdAllocator:
    """Hands out increasing 16-bit message ids, wrapping from 65535 to 0.

    Safe to share between threads. The frame codec never checks ids for
    uniqueness; this is the only place they are generated.

    Example:
        >>> ids = MessageIdAllocator()
        >>> ids.allocate(), ids.allocate()
        (1, 2)
    """

    def __init__(self, start: int = 1) -> None:
        if not 0 <= start <= U16_MAX:
            raise ValueError(f"start must be 0-{U16_MAX}, got {start}")
        self._next = start
        self._lock = Lock()

    def allocate(self) -> int:
        """Return the next id."""
        with self._lock:
            msg_id = self._next
            self._next = (msg_id + 1) & U16_MAX
        return msg_id

    def peek(self) -> int:
        """Return the id the next allocate() call will hand out."""
        with self._lock:
            return self._next


_default_allocator = MessageIdAllocator()


def next_msg_id() -> int:
    """Allocate an id from the process-wide allocator."""
    return _default_allocator.allocate()
