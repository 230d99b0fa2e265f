"""matcher.py - Filter expression evaluation for channel enablement.

A filter expression is a comma-separated list of patterns, for example::

    DEBUG="app:*,-app:sql,worker"

Each pattern is ``*`` (everything), an exact channel name, or a prefix ending
in ``*``. A leading ``-`` turns the pattern into a disabling rule. Tokens are
evaluated left to right and the last matching token decides, so later rules
override earlier ones.

Channel names that themselves end in ``*`` are always enabled; that is a
property of the name, not of the filter.
"""

from typing import Optional

WILDCARD = "*"
NEGATE = "-"


def matches(pattern: str, name: str) -> bool:
    """Return True if a single (non-negated) pattern matches ``name``.

    Empty patterns never match.
    """
    if not pattern:
        return False
    return (
        pattern == WILDCARD
        or pattern == name
        or (pattern.endswith(WILDCARD) and name.startswith(pattern[:-1]))
    )


def is_enabled(name: str, filter_expr: Optional[str]) -> bool:
    """Decide whether channel ``name`` is enabled under ``filter_expr``.

    This is a pure function of its two arguments.

    Args:
        name: The channel name.
        filter_expr: Comma-separated filter tokens, or None / "" for no filter.

    Returns:
        True if the channel should emit.

    Example:
        >>> is_enabled("verbose:sql", "*,-verbose*")
        False
        >>> is_enabled("other", "*,-verbose*")
        True
    """
    if name.endswith(WILDCARD):
        return True
    if not filter_expr:
        return False

    enabled = False
    for token in filter_expr.split(","):
        negating = token.startswith(NEGATE)
        pattern = token[len(NEGATE):] if negating else token
        if matches(pattern, name):
            enabled = not negating
    return enabled
