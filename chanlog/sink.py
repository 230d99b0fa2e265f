"""sink.py - Pluggable line destinations for debug channels.

This module defines the LineSink interface and two concrete implementations:

    StreamSink  - prints each line to a writable stream (default: stdout).
    FileSink    - appends each line to a file on disk, with optional rotation.

A DebugContext hands every composed line to exactly one sink. Sinks never
swallow errors: a failing write propagates to whoever called the log handle.

Typical usage::

    from chanlog import DebugContext
    from chanlog.sink import FileSink

    ctx = DebugContext(filter_expr="*", sink=FileSink("/var/log/app-debug.log"))
    log = ctx.create("app")
    log("ready")
"""

import sys
from abc import ABC, abstractmethod
from pathlib import Path


def stream_is_tty(stream) -> bool:
    """Return True if ``stream`` reports itself as a terminal."""
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # Closed stream.
        return False


class LineSink(ABC):
    """Abstract base class for all debug line destinations.

    Example:
        >>> class ListSink(LineSink):
        ...     def __init__(self):
        ...         self.lines = []
        ...     def write_line(self, line: str) -> None:
        ...         self.lines.append(line)
    """

    @abstractmethod
    def write_line(self, line: str) -> None:
        """Write one fully composed line (without trailing newline).

        Args:
            line: The rendered output line, possibly containing colour escapes.
        """

    def isatty(self) -> bool:
        """Return True if the sink is an interactive terminal."""
        return False


class StreamSink(LineSink):
    """Print debug lines to a writable stream.

    Attributes:
        _stream: The writable file-like object, or None to use the current
            ``sys.stdout`` at write time.
    """

    def __init__(self, stream=None) -> None:
        """Initialise the stream sink.

        Args:
            stream: A writable file-like object. When omitted, lines go to
                whatever ``sys.stdout`` is at the moment of writing.
        """
        self._stream = stream

    @property
    def stream(self):
        return self._stream if self._stream is not None else sys.stdout

    def write_line(self, line: str) -> None:
        print(line, file=self.stream)

    def isatty(self) -> bool:
        return stream_is_tty(self.stream)


class FileSink(LineSink):
    """Append each debug line to a file, keeping at most one backup.

    Parent directories are created on demand. When ``max_bytes`` is set and
    the file has grown to that size, it becomes ``<name>.bak`` and a fresh
    file is started with the next line.

    Example:
        >>> sink = FileSink("/var/log/app-debug.log", max_bytes=5 * 1024 * 1024)
        >>> sink.write_line("app:db connected")
    """

    def __init__(self, path, max_bytes: int = 0, encoding: str = "utf-8") -> None:
        if max_bytes < 0:
            raise ValueError(f"max_bytes must be >= 0, got {max_bytes}")
        self.path = Path(path)
        self.max_bytes = max_bytes
        self.encoding = encoding

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(self.path.name + ".bak")

    def write_line(self, line: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self._is_full():
            self.path.replace(self.backup_path)
        with self.path.open("a", encoding=self.encoding) as f:
            f.write(line + "\n")

    def _is_full(self) -> bool:
        if not self.max_bytes or not self.path.exists():
            return False
        return self.path.stat().st_size >= self.max_bytes
