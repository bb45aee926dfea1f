"""Backslash escaping between the trace's shell quoting and make syntax.

Every transform is pure and returns a new string. They do not commute:
extractors apply them in a fixed order per field.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_ANY_ESCAPE_RE = re.compile(r"\\(.)")
_BARE_PAREN_RE = re.compile(r"(?<!\\)([()])")


def _char_class(specials: Iterable[str]) -> str:
    return "[" + "".join(re.escape(c) for c in sorted(set(specials))) + "]"


def escape(specials: Iterable[str], s: str) -> str:
    """Prefix every character of ``s`` found in ``specials`` with a backslash."""
    return re.sub(f"({_char_class(specials)})", r"\\\1", s)


def unescape(specials: Iterable[str], s: str) -> str:
    """Drop a backslash that immediately precedes a character in ``specials``."""
    return re.sub(rf"\\({_char_class(specials)})", r"\1", s)


def unescape_all(s: str) -> str:
    """Drop every backslash escape, keeping the escaped character."""
    return _ANY_ESCAPE_RE.sub(r"\1", s)


def dollar_escape(s: str) -> str:
    """Turn shell-escaped ``\\$`` into make's own ``$$``."""
    return s.replace("\\$", "$$")


def shell_escape(s: str) -> str:
    """Make a path usable as an unquoted target or prerequisite token.

    Parentheses that already carry a backslash are left as they are.
    """
    return dollar_escape(_BARE_PAREN_RE.sub(r"\\\1", s))
