"""buffer.py - Shared, capacity-bounded history of emitted debug lines.

HistoryBuffer keeps the most recent records written by any enabled channel of
a DebugContext. It is purely in-memory and exists for introspection and tests;
nothing is ever persisted.

Design decisions:
    - ``collections.deque(maxlen=N)`` gives O(1) append and drops the oldest
      records so that the size is exactly N after an overflowing append.
    - A lock wraps append and every read, so append-plus-evict is observed as
      a single step even when several threads emit at once.
    - Readers only ever receive copies; the deque itself is never handed out.
"""

import threading
from collections import deque
from datetime import datetime
from typing import List, NamedTuple

DEFAULT_CAPACITY = 100


class HistoryRecord(NamedTuple):
    """One emitted line as stored in a HistoryBuffer.

    Attributes:
        when (datetime): The timestamp captured at the start of the emit.
        who (str): Name of the channel that emitted the line.
        log (str): The formatted message, without name, colour or time decorations.
    """

    when: datetime
    who: str
    log: str


class HistoryBuffer:
    """Fixed-capacity FIFO store for HistoryRecord objects.

    When an append pushes the size past ``capacity`` the oldest records are
    evicted, leaving exactly ``capacity`` records, newest last.

    Example:
        >>> buf = HistoryBuffer(capacity=2)
        >>> for i in range(3):
        ...     buf.add(HistoryRecord(datetime.now(), "app", str(i)))
        >>> [r.log for r in buf.records()]
        ['1', '2']
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        """Initialise an empty buffer.

        Args:
            capacity: Maximum number of records retained. Defaults to 100.

        Raises:
            ValueError: If ``capacity`` is less than 1.
        """
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._records: deque[HistoryRecord] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._records.maxlen

    def add(self, record: HistoryRecord) -> None:
        """Append a record, evicting the oldest ones if capacity is exceeded."""
        with self._lock:
            self._records.append(record)

    def records(self) -> List[HistoryRecord]:
        """Return a copy of the current records, oldest first."""
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        """Remove all records."""
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self.records())
