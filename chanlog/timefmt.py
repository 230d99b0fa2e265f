"""timefmt.py - Human-readable rendering of elapsed milliseconds.

Used for the ``+1s`` style suffix a channel appends when it is writing to an
interactive terminal. Each unit is rounded half up by truncating
``value + 0.5``, so values just below a unit boundary round to the boundary
in the smaller unit (``59999`` -> ``"60s"``) instead of promoting to the next
unit.
"""

SEC = 1000
MIN = SEC * 60
HR = MIN * 60


def format_elapsed(ms: int) -> str:
    """Format a millisecond duration as ``ms``, ``s``, ``m`` or ``h``.

    Args:
        ms: Elapsed milliseconds. Values below one second are rendered raw.

    Returns:
        A compact string such as ``"999ms"``, ``"2s"``, ``"1m"`` or ``"1h"``.

    Example:
        >>> format_elapsed(1500)
        '2s'
    """
    if ms < SEC:
        return f"{ms}ms"
    if ms < MIN:
        return f"{int(ms / SEC + 0.5)}s"
    if ms < HR:
        return f"{int(ms / MIN + 0.5)}m"
    return f"{int(ms / HR + 0.5)}h"
