"""Timestamps, routing key and pattern validation, and word splitting."""

from __future__ import annotations

import string
from datetime import datetime

_KEY_CHARS = frozenset(string.ascii_letters + string.digits + "._-")
_PATTERN_CHARS = frozenset(string.ascii_letters + string.digits + ".*#")


def current_timestamp() -> str:
    """Return the local time formatted as ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def validate_routing_key(routing_key: str) -> None:
    """Raise ValueError unless *routing_key* is a concrete routing key."""
    if not routing_key:
        raise ValueError("Routing Key cannot be empty")
    if not set(routing_key) <= _KEY_CHARS:
        raise ValueError("Invalid characters in routing key")
    if "*" in routing_key or "#" in routing_key or ".." in routing_key:
        raise ValueError("Wildcards (*,#) are not allowed in routing keys")


def validate_routing_pattern(pattern: str) -> None:
    """Raise ValueError unless *pattern* is a valid topic binding pattern."""
    if not pattern:
        raise ValueError("Pattern cannot be empty")
    if not set(pattern) <= _PATTERN_CHARS:
        raise ValueError("Invalid characters in pattern")

    hashes = pattern.count("#")
    if hashes > 1:
        raise ValueError("Pattern can contain only one # symbol")
    last = len(pattern) - 1
    if hashes == 1 and pattern.index("#") not in (0, last):
        raise ValueError("Wildcard # must be at start or end of pattern")

    for pos, char in enumerate(pattern):
        if (
            char == "*"
            and 0 < pos < last
            and pattern[pos - 1] != "."
            and pattern[pos + 1] != "."
        ):
            raise ValueError("Wildcard * must be a complete word")


def split_words(word: str, splitter: str) -> list[str]:
    """Split *word* on every occurrence of *splitter*, keeping empty parts."""
    if not splitter:
        raise ValueError("Splitter cannot be empty")
    return word.split(splitter)