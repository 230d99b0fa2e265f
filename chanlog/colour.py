"""colour.py - Round-robin colour allocation for debug channels.

Each channel created while output is interactive takes the next entry of a
fixed palette. The cursor is owned by a ColourAllocator instance (one per
DebugContext), so the k-th allocation always returns ``palette[(k - 1) % P]``.

Codes below 8 use the standard 8-colour foreground escape; everything else is
rendered as a 256-colour foreground. Both are bold, and both are closed by the
same reset sequence.
"""

import threading
from typing import Sequence, Tuple

CSI = "\x1b["

PALETTE: Tuple[int, ...] = (
    20, 46, 165, 226, 81, 160, 27, 28, 90, 214, 51, 1, 2, 3, 4, 5, 6,
)

RESET = CSI + "39;22m"


def colour_codes(code: int) -> Tuple[str, str]:
    """Return the ``(start, end)`` escape sequences for a palette code.

    Example:
        >>> colour_codes(1)
        ('\\x1b[31;1m', '\\x1b[39;22m')
        >>> colour_codes(20)[0]
        '\\x1b[38;5;20;1m'
    """
    if code < 8:
        start = f"{CSI}{code + 30};1m"
    else:
        start = f"{CSI}38;5;{code};1m"
    return start, RESET


class ColourAllocator:
    """Hands out palette entries in creation order, wrapping at the end.

    Attributes:
        palette (tuple[int, ...]): The fixed colour codes, in allocation order.

    Example:
        >>> alloc = ColourAllocator((7, 8))
        >>> alloc.next(), alloc.next(), alloc.next()
        (7, 8, 7)
    """

    def __init__(self, palette: Sequence[int] = PALETTE) -> None:
        if not palette:
            raise ValueError("palette must contain at least one colour")
        self.palette: Tuple[int, ...] = tuple(palette)
        self._cursor = -1
        self._lock = threading.Lock()

    def next(self) -> int:
        """Advance the cursor and return the colour it now points at."""
        with self._lock:
            self._cursor = (self._cursor + 1) % len(self.palette)
            return self.palette[self._cursor]

    @property
    def allocated(self) -> int:
        """Cursor position, or -1 before the first allocation."""
        return self._cursor
