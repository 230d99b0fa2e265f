"""channel.py - Per-channel state and the callable log handle.

A Channel owns everything that is specific to one named debug channel: its
colour, whether it is enabled, and when it last emitted. The LogHandle is the
object callers actually hold; calling it formats the arguments and writes one
line through the owning DebugContext.

Line layout::

    [date ]<colour>name<reset> message[ <colour> +elapsed<reset>]

    - The date prefix appears only for non-interactive output, unless
      suppressed via ``hide_date``.
    - Colour and the elapsed suffix appear only for interactive output.
    - The first emit of a channel never carries a suffix.

Emit order:
    1. Disabled channel: return at once. Nothing is recorded or written.
    2. Capture ``now`` and swap it into ``last``.
    3. Format the arguments.
    4. Compose the line.
    5. Append a HistoryRecord to the context history.
    6. Write the line to the context sink. Sink errors propagate unchanged;
       the history append is not rolled back.

Only the swap of ``last`` holds the channel lock. Formatting and the sink
write may log on the same channel again.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Optional

from .buffer import HistoryRecord
from .colour import colour_codes
from .timefmt import format_elapsed

if TYPE_CHECKING:  # pragma: no cover
    from .context import DebugContext

_MS = timedelta(milliseconds=1)


def iso_timestamp(when: datetime) -> str:
    """Render ``when`` as UTC ISO-8601 with milliseconds, e.g. ``2024-01-15T12:34:56.789Z``."""
    return when.strftime("%Y-%m-%dT%H:%M:%S.") + f"{when.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class ChannelState:
    """Read-only snapshot of a Channel, as exposed by ``LogHandle.config``."""

    name: str
    colour: Optional[int]
    start: str
    end: str
    prefix_date: bool
    suffix_time: bool
    enabled: bool
    last: Optional[datetime]


class Channel:
    """Mutable state of one debug channel.

    Enablement is resolved once, at construction, from the context's filter
    expression; afterwards only the ``enabled`` toggle changes it. A colour
    is taken from the context's allocator only when the context is
    interactive.

    Attributes:
        name (str): Channel name.
        enabled (bool): Whether calls emit anything.
        prefix_date (bool): Prepend an ISO date to each line.
        suffix_time (bool): Append the time elapsed since the previous emit.
        last (datetime | None): Timestamp of the previous emit.
    """

    def __init__(self, name: str, context: "DebugContext") -> None:
        self.name = name
        self.context = context
        self.enabled = context.is_enabled(name)
        self.prefix_date = not context.interactive and not context.hide_date
        self.suffix_time = context.interactive
        self.last: Optional[datetime] = None
        self._colour: Optional[int] = None
        self._start = ""
        self._end = ""
        self._lock = threading.Lock()
        if context.interactive:
            self.set_colour(context.colours.next())

    # ---------------------------------------------------------------------- #
    # Colour
    # ---------------------------------------------------------------------- #

    @property
    def colour(self) -> Optional[int]:
        return self._colour

    @property
    def start(self) -> str:
        return self._start

    @property
    def end(self) -> str:
        return self._end

    def set_colour(self, code: Optional[int]) -> None:
        """Set the colour code and both escape sequences in one step.

        Passing None removes the colour, leaving both sequences empty.
        """
        if code is None:
            start, end = "", ""
        else:
            start, end = colour_codes(code)
        with self._lock:
            self._colour, self._start, self._end = code, start, end

    # ---------------------------------------------------------------------- #
    # Emit
    # ---------------------------------------------------------------------- #

    def emit(self, *args: Any) -> None:
        """Format ``args`` and write one line, if the channel is enabled."""
        if not self.enabled:
            return
        ctx = self.context
        with self._lock:
            now = ctx.clock()
            last, self.last = self.last, now
            start, end = self._start, self._end
        message = ctx.formatter(*args)
        line = self._compose(now, last, message, start, end)
        ctx.history.add(HistoryRecord(now, self.name, message))
        ctx.sink.write_line(line)

    def _compose(
        self, now: datetime, last: Optional[datetime], message: str, start: str, end: str
    ) -> str:
        prefix = iso_timestamp(now) + " " if self.prefix_date else ""
        suffix = ""
        if self.suffix_time and last is not None:
            elapsed = int((now - last) / _MS)
            suffix = f" {start} +{format_elapsed(elapsed)}{end}"
        return f"{prefix}{start}{self.name}{end} {message}{suffix}"

    def snapshot(self) -> ChannelState:
        with self._lock:
            return ChannelState(
                name=self.name,
                colour=self._colour,
                start=self._start,
                end=self._end,
                prefix_date=self.prefix_date,
                suffix_time=self.suffix_time,
                enabled=self.enabled,
                last=self.last,
            )

    def __repr__(self) -> str:  # pragma: no cover
        return f"Channel({self.name!r}, enabled={self.enabled})"


class LogHandle:
    """Callable front for a Channel.

    Example:
        >>> log = ctx.create("app:db")
        >>> log("connected to %s", "primary")
        >>> log.enabled = False      # later calls are no-ops
        >>> log.config.colour        # read-only snapshot
    """

    __slots__ = ("_channel",)

    def __init__(self, channel: Channel) -> None:
        self._channel = channel

    def __call__(self, *args: Any) -> None:
        self._channel.emit(*args)

    @property
    def name(self) -> str:
        return self._channel.name

    @property
    def channel(self) -> Channel:
        return self._channel

    @property
    def config(self) -> ChannelState:
        """A snapshot of the backing channel's state."""
        return self._channel.snapshot()

    @property
    def enabled(self) -> bool:
        return self._channel.enabled

    @enabled.setter
    def enabled(self, value: Any) -> None:
        self._channel.enabled = bool(value)

    def __repr__(self) -> str:  # pragma: no cover
        return f"LogHandle({self.name!r})"
