"""config.py - Environment boundary for the default debug context.

Everything the package reads from the process environment is gathered here,
once, into a DebugConfig. A DebugContext only ever sees explicit values, so
tests can construct contexts without touching ``os.environ``.

Variables:
    DEBUG            Filter expression, e.g. ``"app:*,-app:sql"``.
    DEBUG_HIDE_DATE  Boolean-like; when truthy, non-interactive output omits
                     the ISO date prefix.
"""

import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from .sink import stream_is_tty

ENV_FILTER = "DEBUG"
ENV_HIDE_DATE = "DEBUG_HIDE_DATE"

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(value: Optional[str]) -> bool:
    """Interpret a boolean-like environment value."""
    return value is not None and value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class DebugConfig:
    """Resolved settings for a DebugContext.

    Attributes:
        filter_expr: The channel filter expression, or None when unset.
        hide_date: Suppress the date prefix in non-interactive mode.
        interactive: Whether output goes to a terminal. Controls colour,
            the elapsed-time suffix and (inverted) the date prefix.
    """

    filter_expr: Optional[str] = None
    hide_date: bool = False
    interactive: bool = False

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        stream=None,
    ) -> "DebugConfig":
        """Read the configuration from the environment and the output stream.

        Args:
            environ: Mapping to read variables from. Defaults to ``os.environ``.
            stream: Stream whose tty-ness decides interactivity. Defaults to
                ``sys.stdout``.
        """
        environ = os.environ if environ is None else environ
        stream = sys.stdout if stream is None else stream
        return cls(
            filter_expr=environ.get(ENV_FILTER) or None,
            hide_date=env_flag(environ.get(ENV_HIDE_DATE)),
            interactive=stream_is_tty(stream),
        )
