"""Placeholder normalization for prepared statements.

Prepared statement templates use `?` positional placeholders. Drivers with
the `format` paramstyle expect `%s` instead. String literals are preserved.
"""

from __future__ import annotations

import re
from functools import lru_cache

# Matches single-quoted string literals (with escaped quotes handled)
_STRING_LITERAL_PATTERN = re.compile(r"'(?:[^'\\]|\\.|'')*'")


def _split_literals(sql: str) -> list[tuple[str, bool]]:
    """Split sql into (segment, is_literal) pairs."""
    parts: list[tuple[str, bool]] = []
    last_end = 0

    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append((sql[last_end:start], False))
        parts.append((match.group(), True))
        last_end = end

    if last_end < len(sql):
        parts.append((sql[last_end:], False))

    return parts


def normalize_placeholders(sql: str, paramstyle: str, *, escape_percent: bool = False) -> str:
    """Convert `?` placeholders to the target paramstyle.

    Args:
        sql: SQL template with `?` placeholders.
        paramstyle: Target DB-API style - 'qmark' (no conversion) or 'format' (%s).
        escape_percent: Double literal `%` signs, for drivers that parse them.

    Returns:
        SQL with placeholders converted to the target style.
    """
    if paramstyle == "qmark":
        return sql
    return _convert_to_format(sql, escape_percent)


@lru_cache(maxsize=256)
def _convert_to_format(sql: str, escape_percent: bool) -> str:
    """Convert ? placeholders to %s, preserving string literals."""
    parts: list[str] = []
    for segment, is_literal in _split_literals(sql):
        if escape_percent:
            segment = segment.replace("%", "%%")
        if not is_literal:
            segment = segment.replace("?", "%s")
        parts.append(segment)
    return "".join(parts)


@lru_cache(maxsize=256)
def count_placeholders(sql: str) -> int:
    """Count `?` placeholders outside string literals."""
    return sum(segment.count("?") for segment, is_literal in _split_literals(sql) if not is_literal)
