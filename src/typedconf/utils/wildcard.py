"""Wildcard string matching.

Grammar: ``*`` or a space matches any run of characters (including none) and
``?`` matches exactly one character. Everything else is literal.
"""

from __future__ import annotations

import re


def to_regex(
    pattern: str,
    *,
    case_sensitive: bool = False,
    prefix_wildcard: bool = True,
    suffix_wildcard: bool = True,
) -> re.Pattern:
    """Compile a wildcard pattern into a full-string regular expression."""
    body = re.escape(pattern)
    # re.escape turns "?", "*" and " " into "\?", "\*" and "\ "
    body = body.replace(r"\?", ".").replace(r"\ ", ".*").replace(r"\*", ".*")
    if prefix_wildcard:
        body = ".*" + body
    if suffix_wildcard:
        body = body + ".*"
    flags = re.DOTALL
    if not case_sensitive:
        flags |= re.IGNORECASE
    return re.compile(body, flags)


def like(
    source: str,
    pattern: str,
    *,
    case_sensitive: bool = False,
    prefix_wildcard: bool = True,
    suffix_wildcard: bool = True,
) -> bool:
    """
    Check whether ``source`` matches the wildcard ``pattern``.

    Args:
        source: Text to test.
        pattern: Wildcard pattern.
        case_sensitive: Compare case exactly.
        prefix_wildcard: Allow any text before the pattern.
        suffix_wildcard: Allow any text after the pattern.

    Returns:
        True when the whole of ``source`` matches.

    Example:
        >>> like("config.backup.json", "config*json", prefix_wildcard=False)
        True
    """
    regex = to_regex(
        pattern,
        case_sensitive=case_sensitive,
        prefix_wildcard=prefix_wildcard,
        suffix_wildcard=suffix_wildcard,
    )
    return regex.fullmatch(source) is not None
