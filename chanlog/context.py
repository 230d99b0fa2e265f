"""context.py - The registry of debug channels and the state they share.

A DebugContext bundles what used to be ambient module state in a debug
facility: the name -> channel registry, the colour cursor, the shared history
buffer, the output sink, the message formatter and the clock. Contexts are
cheap, so tests build their own with explicit settings:

    ctx = DebugContext(filter_expr="app:*", sink=StreamSink(io.StringIO()))
    log = ctx.create("app:db")

Application code normally uses the process-wide default context through
``create_logger()``, which is built from the environment on first use (see
``config.DebugConfig.from_env``).
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from .buffer import DEFAULT_CAPACITY, HistoryBuffer, HistoryRecord
from .channel import Channel, LogHandle
from .colour import PALETTE, ColourAllocator
from .config import DebugConfig
from .formatting import format_message
from .matcher import is_enabled
from .sink import LineSink, StreamSink

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DebugContext:
    """Memoizing factory for LogHandles plus the state their channels share.

    Attributes:
        filter_expr (str | None): Filter expression used to resolve each
            channel's initial enablement.
        interactive (bool): Output goes to a terminal; channels get colours
            and elapsed-time suffixes instead of date prefixes.
        hide_date (bool): Suppress the date prefix in non-interactive mode.
        sink (LineSink): Receives every composed line.
        formatter (Callable[..., str]): Turns call arguments into a message.
        clock (Callable[[], datetime]): Returns the current time.
        colours (ColourAllocator): Round-robin colour cursor.
        history (HistoryBuffer): Records of every enabled emit.
    """

    def __init__(
        self,
        filter_expr: Optional[str] = None,
        interactive: bool = False,
        hide_date: bool = False,
        sink: Optional[LineSink] = None,
        formatter: Callable[..., str] = format_message,
        palette: Sequence[int] = PALETTE,
        history_capacity: int = DEFAULT_CAPACITY,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.filter_expr = filter_expr
        self.interactive = interactive
        self.hide_date = hide_date
        self.sink = sink if sink is not None else StreamSink()
        self.formatter = formatter
        self.clock = clock or utc_now
        self.colours = ColourAllocator(palette)
        self.history = HistoryBuffer(history_capacity)
        self._handles: Dict[str, LogHandle] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls, config: DebugConfig, sink: Optional[LineSink] = None, **overrides
    ) -> "DebugContext":
        """Build a context from a resolved DebugConfig."""
        return cls(
            filter_expr=config.filter_expr,
            interactive=config.interactive,
            hide_date=config.hide_date,
            sink=sink,
            **overrides,
        )

    def is_enabled(self, name: str) -> bool:
        return is_enabled(name, self.filter_expr)

    def create(self, name: str) -> LogHandle:
        """Return the handle for ``name``, creating its channel on first use.

        Repeated calls with the same name return the very same handle, so
        enablement and colour are shared between all holders.
        """
        handle = self._handles.get(name)
        if handle is not None:
            return handle
        with self._lock:
            handle = self._handles.get(name)
            if handle is not None:
                return handle
            handle = LogHandle(Channel(name, self))
            self._handles[name] = handle
        # Outside the lock: ChannelHandler can re-enter create().
        logger.debug(
            "created debug channel %r (enabled=%s, colour=%s)",
            name, handle.enabled, handle.channel.colour,
        )
        return handle

    def channel(self, name: str) -> Optional[Channel]:
        """Return the Channel registered under ``name`` without creating one."""
        handle = self._handles.get(name)
        return handle.channel if handle is not None else None

    def names(self) -> List[str]:
        """Registered channel names, in creation order."""
        return list(self._handles)

    def __contains__(self, name: str) -> bool:
        return name in self._handles

    def __len__(self) -> int:
        return len(self._handles)


# ---------------------------------------------------------------------------
# Process-wide default context
# ---------------------------------------------------------------------------

_default: Optional[DebugContext] = None
_default_lock = threading.Lock()


def get_context() -> DebugContext:
    """Return the default context, building it from the environment if needed."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = DebugContext.from_config(DebugConfig.from_env())
    return _default


def reset_context(context: Optional[DebugContext] = None) -> DebugContext:
    """Replace the default context.

    With no argument the environment is read again. Handles obtained from the
    previous context keep working against that context.
    """
    global _default
    with _default_lock:
        _default = context if context is not None else DebugContext.from_config(
            DebugConfig.from_env()
        )
        return _default


def create_logger(name: str) -> LogHandle:
    """Return the LogHandle for ``name`` in the default context."""
    return get_context().create(name)


def get_history() -> List[HistoryRecord]:
    """Return the default context's history, oldest first."""
    return get_context().history.records()
