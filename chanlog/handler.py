"""handler.py - Route standard ``logging`` records onto debug channels.

ChannelHandler lets code that already uses the ``logging`` module show up in
the debug channel output. Each record is sent to the channel named after its
logger, so ``DEBUG=myapp.*`` enables ``logging.getLogger("myapp.db")`` output
exactly like a native channel.

Typical usage:
    import logging
    from chanlog import ChannelHandler

    logging.getLogger().addHandler(ChannelHandler())
    logging.getLogger("myapp.db").warning("slow query")
"""

import logging
from typing import Optional

from .context import DebugContext, get_context

# Diagnostics from this package are not routed back onto channels.
_OWN_LOGGERS = __name__.rpartition(".")[0] + "."


class ChannelHandler(logging.Handler):
    """A logging.Handler that emits each record on a debug channel.

    The channel is ``prefix + record.name``. Records for disabled channels are
    dropped by the channel itself. The rendered message is
    ``record.getMessage()``; the handler's Formatter is not applied because
    the channel adds its own decorations.

    Attributes:
        _context (DebugContext | None): Context to create channels in. None
            means the process default context, looked up per record.
        _prefix (str): Prepended to the logger name to form the channel name.
    """

    def __init__(
        self,
        context: Optional[DebugContext] = None,
        prefix: str = "",
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level)
        self._context = context
        self._prefix = prefix

    @property
    def context(self) -> DebugContext:
        return self._context if self._context is not None else get_context()

    def channel_name(self, record: logging.LogRecord) -> str:
        return self._prefix + record.name

    def emit(self, record: logging.LogRecord) -> None:
        if record.name.startswith(_OWN_LOGGERS):
            return
        try:
            log = self.context.create(self.channel_name(record))
            if not log.enabled:
                return
            message = record.getMessage()
            if record.exc_info and record.exc_info[1]:
                exc = record.exc_info[1]
                message = f"{message} ({type(exc).__name__}: {exc})"
            log("%s", message)
        except Exception:
            # Standard logging convention: report via handleError, never raise
            # out of the logging call.
            self.handleError(record)
