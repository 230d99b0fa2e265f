"""formatting.py - printf-style rendering of a channel call's arguments.

``log("loaded %d rows from %s", 42, path, "extra")`` renders to
``"loaded 42 rows from /tmp/x extra"``: specifiers in a leading string consume
arguments in order and anything left over is appended, space separated.
"""

import json
import re
from typing import Any

_SPECIFIER = re.compile(r"%([sdifjoO%])")


def _convert(spec: str, value: Any) -> str:
    if spec == "s":
        return str(value)
    try:
        if spec in ("d", "i"):
            return str(int(value))
        if spec == "f":
            return str(float(value))
    except (TypeError, ValueError, OverflowError):
        return "NaN"
    if spec == "j":
        try:
            return json.dumps(value, default=str)
        except ValueError:
            return "[Circular]"
    return repr(value)


def format_message(*args: Any) -> str:
    """Render call arguments into a single message string.

    Supported specifiers: ``%s`` (str), ``%d``/``%i`` (int), ``%f`` (float),
    ``%j`` (JSON), ``%o``/``%O`` (repr) and ``%%`` (a literal percent sign).
    A specifier with no argument left to consume is kept verbatim.
    Numeric specifiers render ``NaN`` for values that are not numbers, so
    formatting never raises.

    Args:
        *args: The arguments passed to a LogHandle call.

    Returns:
        The rendered message; ``""`` when called without arguments.
    """
    if not args:
        return ""
    first, rest = args[0], list(args[1:])
    if not isinstance(first, str):
        return " ".join(str(a) for a in args)

    def substitute(m: "re.Match[str]") -> str:
        spec = m.group(1)
        if spec == "%":
            return "%"
        if not rest:
            return m.group(0)
        return _convert(spec, rest.pop(0))

    message = _SPECIFIER.sub(substitute, first)
    if rest:
        message = " ".join([message, *(str(a) for a in rest)])
    return message
