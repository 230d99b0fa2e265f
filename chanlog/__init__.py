"""chanlog/__init__.py - Public API for the chanlog package.

chanlog is a per-channel debug logger for long-running and CLI processes.
Every named channel is independently enabled via a filter expression, writes
coloured (on terminals) or date-stamped (elsewhere) lines, and reports the
time elapsed since its own previous line.

Quick start:
    from chanlog import create_logger

    log = create_logger("app:db")     # enabled by DEBUG=app:* (or DEBUG=*)
    log("connected to %s", "primary")
    log.enabled = False               # silence it at runtime

    # Route existing ``logging`` output onto channels
    import logging
    from chanlog import ChannelHandler
    logging.getLogger().addHandler(ChannelHandler())

Exported names:
    create_logger:  Memoized LogHandle factory on the default context.
    get_history:    Recent HistoryRecords (when, who, log) of the default context.
    get_context:    The default DebugContext (built from the environment).
    reset_context:  Replace the default context, or rebuild it from the environment.
    DebugContext:   Explicit registry + shared state, for isolated use and tests.
    DebugConfig:    Settings resolved from DEBUG / DEBUG_HIDE_DATE and stdout.
    LogHandle:      The callable returned by create_logger().
    ChannelHandler: logging.Handler that forwards records to channels.
    trace:          Decorator factory writing >>, << and !! lines to a channel.
    StreamSink:     Writes lines to a stream (default: stdout).
    FileSink:       Appends lines to a file, with rotation support.
"""

from .buffer import HistoryBuffer, HistoryRecord
from .channel import Channel, ChannelState, LogHandle
from .colour import PALETTE, ColourAllocator
from .config import DebugConfig
from .context import DebugContext, create_logger, get_context, get_history, reset_context
from .formatting import format_message
from .handler import ChannelHandler
from .instrument import trace
from .matcher import is_enabled
from .sink import FileSink, LineSink, StreamSink
from .timefmt import format_elapsed

__all__ = [
    "create_logger",
    "get_history",
    "get_context",
    "reset_context",
    "DebugContext",
    "DebugConfig",
    "LogHandle",
    "Channel",
    "ChannelState",
    "HistoryBuffer",
    "HistoryRecord",
    "ColourAllocator",
    "PALETTE",
    "ChannelHandler",
    "trace",
    "is_enabled",
    "format_elapsed",
    "format_message",
    "LineSink",
    "StreamSink",
    "FileSink",
]
__version__ = "0.1.0"
