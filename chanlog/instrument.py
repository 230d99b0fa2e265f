"""instrument.py - @trace decorator that writes call events to a debug channel.

    ``>>``  Function entry, with bound argument values.
    ``<<``  Normal return, with the repr of the return value.
    ``!!``  Unhandled exception, with type and message (then re-raised).

Nested traced calls are indented two spaces per level. The depth counter lives
in a ``contextvars.ContextVar`` so threads and asyncio tasks each keep their own.

Usage:
    from chanlog import create_logger, trace

    log = create_logger("payments")

    @trace(log)
    def charge(user_id: int, amount: int) -> dict:
        ...
"""

import contextvars
import inspect
from functools import wraps
from typing import Callable

from .channel import LogHandle

_depth: contextvars.ContextVar[int] = contextvars.ContextVar(
    "chanlog_trace_depth", default=0
)


def get_depth() -> int:
    """Return the number of traced frames active in the current context."""
    return _depth.get()


def _format_args(func: Callable, args, kwargs) -> str:
    try:
        bound = inspect.signature(func).bind(*args, **kwargs)
        bound.apply_defaults()
        return ", ".join(f"{k}={v!r}" for k, v in bound.arguments.items())
    except (TypeError, ValueError):
        # No signature (builtins) or arguments that do not bind.
        return "..."


def trace(log: LogHandle) -> Callable[[Callable], Callable]:
    """Return a decorator that traces calls on the ``log`` channel.

    The enabled flag is checked per call; when the channel is disabled the
    wrapped function runs without any argument formatting or depth tracking.

    Args:
        log: The LogHandle to write ``>>``, ``<<`` and ``!!`` lines to.

    Returns:
        A decorator preserving the wrapped function's metadata.

    Raises:
        Any exception raised by the wrapped function is re-raised unchanged
        after the ``!!`` line has been written.

    Example:
        >>> @trace(log)
        ... def divide(a, b):
        ...     return a / b
        >>> divide(10, 2)   # log: ">> divide(a=10, b=2)" then "<< 5.0"
        5.0
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not log.enabled:
                return func(*args, **kwargs)

            depth = _depth.get()
            indent = "  " * depth
            log("%s>> %s(%s)", indent, func.__qualname__, _format_args(func, args, kwargs))
            token = _depth.set(depth + 1)
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                _depth.reset(token)
                log("%s!! %s: %s", indent, type(exc).__name__, exc)
                raise
            _depth.reset(token)
            log("%s<< %O", indent, result)
            return result

        return wrapper

    return decorator
