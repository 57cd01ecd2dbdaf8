"""Primitive parsers for raw environment values

None of these functions raise: malformed input falls back to the supplied
default.
"""

import os
import re
from collections.abc import Mapping

_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")

TRUE_TOKENS = frozenset({"1", "t", "true", "y", "yes", "on"})
FALSE_TOKENS = frozenset({"0", "f", "false", "n", "no", "off"})


def parse_integer(raw: str | None, default: int) -> int:
    """Parse a base-10 integer, returning ``default`` for empty or bad input"""
    if raw is None:
        return default
    value = raw.strip()
    if not _INTEGER_PATTERN.match(value):
        return default
    try:
        return int(value)
    except ValueError:
        # Exceeds the interpreter's integer string conversion limit
        return default


def parse_boolean(raw: str | None, default: bool) -> bool:
    """Parse a boolean token, case-insensitively

    Recognized tokens are ``1, t, true, y, yes, on`` and
    ``0, f, false, n, no, off``. Anything else returns ``default``.
    """
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in TRUE_TOKENS:
        return True
    if value in FALSE_TOKENS:
        return False
    return default


def parse_array(raw: str | None, default: list[str]) -> list[str]:
    """Split a comma-separated value into trimmed, non-empty items

    Returns ``default`` unchanged when no item survives.
    """
    if not raw:
        return default
    items = [item.strip() for item in raw.split(",")]
    items = [item for item in items if item]
    if not items:
        return default
    return items


def get_env_or_default(
    key: str, default: str, environ: Mapping[str, str] | None = None
) -> str:
    """Return the variable's value, or ``default`` when unset or empty"""
    if environ is None:
        environ = os.environ
    value = environ.get(key, "")
    return value if value else default
